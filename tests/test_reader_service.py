"""Tests for spec_reader.service."""

import pytest

from spec_reader import ReaderConfig, SpecReaderService
from spec_reader.exceptions import (
    DocumentNotLoadedError,
    KeywordNotFoundError,
    PDFCorruptedError,
    PageTextError,
    UnsupportedFileError,
)


@pytest.fixture
def reader():
    service = SpecReaderService(ReaderConfig())
    yield service
    service.store.close_all()


class TestProcessUpload:
    def test_scan_result(self, reader, masonry_pdf):
        scan = reader.process_upload(masonry_pdf, "masonry.pdf")

        assert scan.filename == "masonry.pdf"
        assert scan.total_pages == 6
        assert scan.keyword == "UNIT MASONRY"
        assert [s.pages for s in scan.sections] == [[3, 4, 5]]
        assert len(scan.session_id) == 32
        assert scan.session_id in reader.store

    def test_keeps_given_session_id(self, reader, masonry_pdf):
        scan = reader.process_upload(masonry_pdf, "masonry.pdf", session_id="abc")

        assert scan.session_id == "abc"
        assert reader.get_scan("abc") == scan

    def test_new_upload_replaces_session(self, reader, masonry_pdf, split_sections_pdf):
        reader.process_upload(masonry_pdf, "first.pdf", session_id="abc")
        scan = reader.process_upload(split_sections_pdf, "second.pdf", session_id="abc")

        assert scan.filename == "second.pdf"
        assert len(reader.store) == 1
        assert reader.get_scan("abc").filename == "second.pdf"

    def test_failed_upload_invalidates_session(self, reader, masonry_pdf, no_keyword_pdf):
        reader.process_upload(masonry_pdf, "first.pdf", session_id="abc")

        with pytest.raises(KeywordNotFoundError):
            reader.process_upload(no_keyword_pdf, "second.pdf", session_id="abc")

        with pytest.raises(DocumentNotLoadedError):
            reader.get_scan("abc")

    def test_keyword_not_found_is_not_stored(self, reader, no_keyword_pdf):
        with pytest.raises(KeywordNotFoundError):
            reader.process_upload(no_keyword_pdf, "steel.pdf")

        assert len(reader.store) == 0

    def test_rejects_non_pdf(self, reader):
        with pytest.raises(UnsupportedFileError):
            reader.process_upload(b"hello", "notes.txt")

    def test_rejects_corrupted(self, reader):
        with pytest.raises(PDFCorruptedError):
            reader.process_upload(b"%PDF-1.4\n" + b"\x00\x01broken" * 10, "broken.pdf")

    def test_process_file(self, reader, masonry_pdf, tmp_path):
        path = tmp_path / "specs.pdf"
        path.write_bytes(masonry_pdf)

        scan = reader.process_file(path)

        assert scan.filename == "specs.pdf"
        assert len(scan.sections) == 1


class TestSectionText:
    def test_extract_section_text(self, reader, masonry_pdf):
        scan = reader.process_upload(masonry_pdf, "masonry.pdf")

        text = reader.extract_section_text(scan.session_id, scan.sections[0].pages)

        assert "--- Page 3 ---" in text
        assert "Concrete masonry units: ASTM C90." in text
        assert "Mortar: ASTM C270, Type S." in text
        assert "Grout: ASTM C476." in text
        assert "Structural steel" not in text

    def test_get_section(self, reader, masonry_pdf):
        scan = reader.process_upload(masonry_pdf, "masonry.pdf")

        assert reader.get_section(scan.session_id, 0).start_page == 3
        with pytest.raises(IndexError):
            reader.get_section(scan.session_id, 1)

    def test_out_of_range_page(self, reader, masonry_pdf):
        scan = reader.process_upload(masonry_pdf, "masonry.pdf")

        with pytest.raises(PageTextError):
            reader.extract_section_text(scan.session_id, [99])

    def test_unknown_session(self, reader):
        with pytest.raises(DocumentNotLoadedError):
            reader.extract_section_text("nope", [1])

    def test_closed_session(self, reader, masonry_pdf):
        scan = reader.process_upload(masonry_pdf, "masonry.pdf")

        assert reader.close_session(scan.session_id) is True
        with pytest.raises(DocumentNotLoadedError):
            reader.extract_section_text(scan.session_id, [3])
        assert reader.close_session(scan.session_id) is False


class TestReaderConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SPEC_KEYWORD", "UNIT MASONRY ASSEMBLIES")
        monkeypatch.setenv("SPEC_CASE_SENSITIVE", "false")
        monkeypatch.setenv("SPEC_STOP_AFTER_FIRST_RUN", "yes")
        monkeypatch.setenv("SESSION_TTL_SECONDS", "120")
        monkeypatch.setenv("MAX_UPLOAD_MB", "25")

        config = ReaderConfig.from_env()

        assert config.keyword == "UNIT MASONRY ASSEMBLIES"
        assert config.case_sensitive is False
        assert config.stop_after_first_run is True
        assert config.session_ttl_seconds == 120.0
        assert config.max_upload_mb == 25
        assert config.footer_fraction == 0.10
