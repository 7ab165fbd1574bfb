import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv(ROOT / ".env")

from frontend.materials_app import AppConfig, create_app
from spec_reader import ReaderConfig, SpecReaderService
from spec_reader.logging_config import setup_logging
from summarization import MaterialsService, SummarizationConfig
import uvicorn


def parse_sections(value: str | None) -> list[int] | None:
    if not value:
        return None
    return [int(part) for part in value.split(",") if part.strip()]


async def summarize_sections(
    reader: SpecReaderService,
    materials: MaterialsService,
    session_id: str,
    indexes: list[int],
) -> list[dict]:
    results = []
    for index in indexes:
        section = reader.get_section(session_id, index)
        text = reader.extract_section_text(session_id, section.pages)
        result = await materials.extract_materials(text)
        results.append(
            {
                "section_title": section.title,
                "pages": section.pages,
                "materials": result.summary,
                "chunk_count": result.chunk_count,
                "usage": result.usage,
            }
        )
    return results


def run_extract(pdf_path: str, sections: list[int] | None, output_path: str | None = None) -> None:
    reader = SpecReaderService(ReaderConfig.from_env())
    materials = MaterialsService(SummarizationConfig.from_env())

    scan = reader.process_file(pdf_path)
    print(f"pages: {scan.total_pages}")
    for index, section in enumerate(scan.sections):
        print(f"[{index}] {section.display_name}")

    indexes = sections if sections is not None else list(range(len(scan.sections)))
    try:
        results = asyncio.run(summarize_sections(reader, materials, scan.session_id, indexes))
    finally:
        reader.close_session(scan.session_id)

    for item in results:
        print()
        print(f"=== {item['section_title']} (pages {item['pages'][0]}-{item['pages'][-1]}) ===")
        print(item["materials"])

    if output_path:
        Path(output_path).write_text(json.dumps(results, indent=2), encoding="utf-8")
        print(f"saved: {output_path}")


def run_server(host: str, port: int) -> None:
    config = AppConfig.from_env()
    config.host = host
    config.port = port
    app = create_app(config=config)
    uvicorn.run(app, host=host, port=port, log_level=config.log_level)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Materials extractor runner (CLI summary or web app)."
    )
    parser.add_argument("--serve", action="store_true", help="Run the web app")
    parser.add_argument("--host", default="127.0.0.1", help="Server host")
    parser.add_argument("--port", type=int, default=8090, help="Server port")
    parser.add_argument("--pdf", help="Path to a specification PDF")
    parser.add_argument("--sections", help="Comma-separated section indexes (default: all)")
    parser.add_argument("--output", help="Optional output path for summaries JSON")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args()

    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO))

    if args.serve:
        run_server(args.host, args.port)
        return

    if not args.pdf:
        parser.error("Provide --pdf or use --serve to run the web app.")
    run_extract(args.pdf, parse_sections(args.sections), args.output)


if __name__ == "__main__":
    main()
