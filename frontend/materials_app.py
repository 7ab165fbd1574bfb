"""Materials frontend: a single-file web app for summarizing specification sections."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from spec_reader import (  # noqa: E402
    DocumentNotLoadedError,
    KeywordNotFoundError,
    PDFError,
    PageTextError,
    ReaderConfig,
    SpecReaderError,
    SpecReaderService,
)
from spec_reader.logging_config import setup_logging  # noqa: E402
from summarization import (  # noqa: E402
    ChunkExtractionError,
    ErrorResponse,
    ExtractMaterialsRequest,
    ExtractMaterialsResponse,
    InputValidationError,
    MaterialsService,
    MergeError,
    SectionExtractRequest,
    SectionExtractResponse,
    SectionMaterials,
    SummarizationConfig,
    SummarizationError,
    format_error_chain,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to extract materials"


@dataclass
class AppConfig:
    host: str = "127.0.0.1"
    port: int = 8090
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            host=os.environ.get("MATERIALS_HOST", "127.0.0.1"),
            port=int(os.environ.get("MATERIALS_PORT", "8090")),
            log_level=os.environ.get("LOG_LEVEL", "info").lower(),
        )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _reader_error_response(error: SpecReaderError) -> JSONResponse:
    if isinstance(error, (KeywordNotFoundError, DocumentNotLoadedError)):
        return _error(404, error.message)
    if isinstance(error, (PDFError, PageTextError)):
        return _error(400, error.message)
    logger.error(f"Reader failure: {error}")
    return _error(500, error.message)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown
    app.state.reader.store.close_all()
    logger.info("Closed open PDF sessions")


def _log_upstream_failure(error: Exception) -> None:
    if isinstance(error, ChunkExtractionError):
        logger.error(
            f"Chunk stage failed ({error.chunk_index}/{error.total_chunks}, "
            f"{error.kind}): {format_error_chain(error)}"
        )
    elif isinstance(error, MergeError):
        logger.error(f"Merge stage failed: {format_error_chain(error)}")
    else:
        logger.error(f"Materials extraction failed: {format_error_chain(error)}")


def create_app(
    reader: Optional[SpecReaderService] = None,
    materials: Optional[MaterialsService] = None,
    config: Optional[AppConfig] = None,
) -> FastAPI:
    app_config = config or AppConfig.from_env()
    reader_service = reader or SpecReaderService(ReaderConfig.from_env())
    state: dict[str, Any] = {"materials": materials}

    def get_materials() -> MaterialsService:
        # Built on first use so the app starts without an API key.
        if state["materials"] is None:
            state["materials"] = MaterialsService(SummarizationConfig.from_env())
        return state["materials"]

    async def summarize(section_text: str):
        try:
            service = get_materials()
        except ValueError as e:
            logger.error(f"Materials service unavailable: {e}")
            return None, _error(500, GENERIC_FAILURE)
        try:
            return await service.extract_materials(section_text), None
        except InputValidationError as e:
            return None, _error(400, e.message)
        except SummarizationError as e:
            _log_upstream_failure(e)
            return None, _error(500, GENERIC_FAILURE)

    app = FastAPI(title="Spec Materials Extractor", lifespan=lifespan)
    app.state.config = app_config
    app.state.reader = reader_service

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error(400, message)

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return _error(500, "Internal server error")

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        return _HTML

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/status")
    def status() -> dict[str, Any]:
        summary_config = state["materials"].config if state["materials"] else SummarizationConfig.from_env()
        return {
            "model": summary_config.model,
            "keyword": reader_service.config.keyword,
            "max_chunk_chars": summary_config.max_chunk_chars,
            "overlap_chars": summary_config.overlap_chars,
            "open_sessions": len(reader_service.store),
        }

    @app.post("/api/documents")
    async def upload_document(
        file: UploadFile = File(...),
        session_id: Optional[str] = Form(None),
    ):
        limit = reader_service.config.max_upload_mb * 1024 * 1024
        too_large = f"File exceeds {reader_service.config.max_upload_mb} MB limit"
        if limit > 0 and file.size is not None and file.size > limit:
            return _error(413, too_large)

        # Read at most one byte past the limit
        data = await file.read(limit + 1) if limit > 0 else await file.read()
        if limit > 0 and len(data) > limit:
            return _error(413, too_large)

        filename = file.filename or "upload.pdf"
        try:
            scan = await run_in_threadpool(
                reader_service.process_upload, data, filename, session_id
            )
        except SpecReaderError as e:
            return _reader_error_response(e)
        return scan.model_dump()

    @app.get("/api/documents/{session_id}/sections")
    def list_sections(session_id: str):
        try:
            scan = reader_service.get_scan(session_id)
        except SpecReaderError as e:
            return _reader_error_response(e)
        return {
            "session_id": session_id,
            "filename": scan.filename,
            "sections": [section.model_dump() for section in scan.sections],
        }

    @app.post("/api/documents/{session_id}/extract")
    async def extract_sections(session_id: str, request: SectionExtractRequest):
        if not request.sections:
            return _error(400, "Select at least one section")

        try:
            scan = reader_service.get_scan(session_id)
            selected = [scan.get_section(index) for index in request.sections]
        except SpecReaderError as e:
            return _reader_error_response(e)
        except IndexError as e:
            return _error(400, str(e))

        results: list[SectionMaterials] = []
        for section in selected:
            try:
                text = await run_in_threadpool(
                    reader_service.extract_section_text, session_id, section.pages
                )
            except SpecReaderError as e:
                return _reader_error_response(e)

            result, failure = await summarize(text)
            if failure is not None:
                return failure
            results.append(
                SectionMaterials(
                    section_title=section.title,
                    pages=section.pages,
                    materials=result.summary,
                    chunk_count=result.chunk_count,
                )
            )

        return SectionExtractResponse(session_id=session_id, results=results).model_dump()

    @app.delete("/api/documents/{session_id}")
    def close_document(session_id: str):
        if not reader_service.close_session(session_id):
            return _reader_error_response(DocumentNotLoadedError(session_id))
        return {"session_id": session_id, "closed": True}

    @app.post("/api/extract-materials")
    async def extract_materials(request: ExtractMaterialsRequest):
        if request.section_text is None or not request.section_text.strip():
            return _error(400, InputValidationError().message)

        result, failure = await summarize(request.section_text)
        if failure is not None:
            return failure
        return ExtractMaterialsResponse(materials=result.summary).model_dump()

    return app


def run(config: Optional[AppConfig] = None) -> None:
    import uvicorn

    load_dotenv(ROOT / ".env")
    config = config or AppConfig.from_env()
    setup_logging(getattr(logging, config.log_level.upper(), logging.INFO))

    uvicorn.run(create_app(config=config), host=config.host, port=config.port, log_level=config.log_level)


_HTML = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Spec Materials Extractor</title>
    <link rel="preconnect" href="https://fonts.googleapis.com" />
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin />
    <link href="https://fonts.googleapis.com/css2?family=Fraunces:wght@400;600&family=Inter:wght@400;600&display=swap" rel="stylesheet" />
    <style>
      :root {
        --ink: #0f172a;
        --muted: #475569;
        --surface: rgba(255, 255, 255, 0.9);
        --accent: #b45309;
        --accent-soft: rgba(180, 83, 9, 0.1);
        --line: rgba(148, 163, 184, 0.35);
        --shadow: 0 18px 50px rgba(15, 23, 42, 0.15);
        --danger: #b91c1c;
      }
      * { box-sizing: border-box; }
      body {
        margin: 0;
        font-family: "Inter", "Segoe UI", sans-serif;
        color: var(--ink);
        background:
          radial-gradient(circle at top, rgba(226, 232, 240, 0.9), transparent 60%),
          linear-gradient(120deg, #f8fafc, #e2e8f0);
        min-height: 100vh;
      }
      header {
        padding: 28px 40px 16px;
        display: flex;
        align-items: center;
        justify-content: space-between;
      }
      h1 {
        font-family: "Fraunces", serif;
        font-weight: 600;
        font-size: 32px;
        margin: 0;
      }
      .tagline {
        color: var(--muted);
        margin-top: 4px;
        font-size: 14px;
      }
      .status {
        font-size: 12px;
        color: var(--muted);
        padding: 6px 12px;
        border-radius: 999px;
        background: var(--surface);
        border: 1px solid var(--line);
      }
      main {
        display: flex;
        flex-direction: column;
        gap: 24px;
        padding: 0 40px 40px;
        max-width: 1100px;
      }
      .panel {
        background: var(--surface);
        border: 1px solid var(--line);
        border-radius: 20px;
        box-shadow: var(--shadow);
        padding: 24px;
      }
      .hidden { display: none; }
      .step-title {
        font-weight: 600;
        margin-bottom: 12px;
        font-size: 15px;
      }
      .section-row {
        display: flex;
        align-items: center;
        gap: 10px;
        padding: 8px 0;
        border-bottom: 1px solid var(--line);
        font-size: 14px;
      }
      button {
        border: none;
        background: var(--accent);
        color: white;
        padding: 12px 18px;
        border-radius: 14px;
        font-weight: 600;
        cursor: pointer;
        margin-top: 14px;
      }
      button:disabled {
        opacity: 0.6;
        cursor: not-allowed;
      }
      .error {
        color: var(--danger);
        font-size: 13px;
        margin-top: 10px;
      }
      .result {
        border: 1px solid var(--line);
        border-radius: 12px;
        padding: 14px 16px;
        background: white;
        margin-bottom: 16px;
      }
      .result h3 {
        margin: 0 0 6px;
        font-size: 15px;
      }
      .meta {
        font-size: 12px;
        color: var(--muted);
        margin-bottom: 10px;
      }
      pre {
        background: var(--accent-soft);
        padding: 12px;
        border-radius: 12px;
        font-size: 13px;
        line-height: 1.5;
        white-space: pre-wrap;
        font-family: inherit;
      }
    </style>
  </head>
  <body>
    <header>
      <div>
        <h1>Materials Extractor</h1>
        <div class="tagline">Upload a specification book, pick sections, get a materials summary</div>
      </div>
      <div class="status" id="status">Loading ...</div>
    </header>
    <main>
      <section class="panel" id="upload-step">
        <div class="step-title">1. Upload PDF</div>
        <input id="file" type="file" accept="application/pdf" />
        <div><button id="upload-btn">Scan document</button></div>
        <div class="error" id="upload-error"></div>
      </section>

      <section class="panel hidden" id="select-step">
        <div class="step-title">2. Choose sections</div>
        <div id="sections"></div>
        <div><button id="extract-btn">Extract materials</button></div>
        <div class="error" id="select-error"></div>
      </section>

      <section class="panel hidden" id="result-step">
        <div class="step-title">3. Materials</div>
        <div id="results"></div>
      </section>
    </main>

    <script>
      const statusEl = document.getElementById("status");
      const fileEl = document.getElementById("file");
      const uploadBtn = document.getElementById("upload-btn");
      const uploadError = document.getElementById("upload-error");
      const selectStep = document.getElementById("select-step");
      const sectionsEl = document.getElementById("sections");
      const extractBtn = document.getElementById("extract-btn");
      const selectError = document.getElementById("select-error");
      const resultStep = document.getElementById("result-step");
      const resultsEl = document.getElementById("results");
      let sessionId = null;

      async function loadStatus() {
        try {
          const res = await fetch("/api/status");
          const data = await res.json();
          statusEl.textContent = `Keyword: ${data.keyword} - Model: ${data.model}`;
        } catch (e) {
          statusEl.textContent = "Status unavailable";
        }
      }

      function renderSections(sections) {
        sectionsEl.innerHTML = "";
        sections.forEach((section, index) => {
          const row = document.createElement("label");
          row.className = "section-row";
          const box = document.createElement("input");
          box.type = "checkbox";
          box.value = index;
          box.checked = true;
          row.appendChild(box);
          row.appendChild(document.createTextNode(section.display_name));
          sectionsEl.appendChild(row);
        });
      }

      uploadBtn.addEventListener("click", async () => {
        uploadError.textContent = "";
        if (!fileEl.files.length) {
          uploadError.textContent = "Choose a PDF first.";
          return;
        }
        const form = new FormData();
        form.append("file", fileEl.files[0]);
        if (sessionId) form.append("session_id", sessionId);
        uploadBtn.disabled = true;
        statusEl.textContent = "Scanning ...";
        try {
          const res = await fetch("/api/documents", { method: "POST", body: form });
          const data = await res.json();
          if (!res.ok) throw new Error(data.error || "Upload failed");
          sessionId = data.session_id;
          renderSections(data.sections);
          selectStep.classList.remove("hidden");
          resultStep.classList.add("hidden");
          statusEl.textContent = `${data.filename}: ${data.sections.length} section(s)`;
        } catch (err) {
          uploadError.textContent = err.message;
          statusEl.textContent = "Error";
        } finally {
          uploadBtn.disabled = false;
        }
      });

      extractBtn.addEventListener("click", async () => {
        selectError.textContent = "";
        const chosen = Array.from(sectionsEl.querySelectorAll("input:checked")).map((el) => Number(el.value));
        if (!chosen.length) {
          selectError.textContent = "Select at least one section.";
          return;
        }
        extractBtn.disabled = true;
        statusEl.textContent = "Extracting materials ...";
        try {
          const res = await fetch(`/api/documents/${sessionId}/extract`, {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify({ sections: chosen })
          });
          const data = await res.json();
          if (!res.ok) throw new Error(data.error || "Extraction failed");
          resultsEl.innerHTML = "";
          data.results.forEach((item) => {
            const card = document.createElement("div");
            card.className = "result";
            const title = document.createElement("h3");
            title.textContent = item.section_title;
            const meta = document.createElement("div");
            meta.className = "meta";
            meta.textContent = `Pages ${item.pages[0]}-${item.pages[item.pages.length - 1]} - ${item.chunk_count} chunk(s)`;
            const body = document.createElement("pre");
            body.textContent = item.materials;
            card.appendChild(title);
            card.appendChild(meta);
            card.appendChild(body);
            resultsEl.appendChild(card);
          });
          resultStep.classList.remove("hidden");
          statusEl.textContent = "Done";
        } catch (err) {
          selectError.textContent = err.message;
          statusEl.textContent = "Error";
        } finally {
          extractBtn.disabled = false;
        }
      });

      loadStatus();
    </script>
  </body>
</html>
"""


if __name__ == "__main__":
    run()
