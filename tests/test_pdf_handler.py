"""
Tests for PDF discovery and extraction, using PDFs generated on the fly.
"""

import os

import pytest

from plagiarism_detector.core.document import UNKNOWN_AUTHOR, UNKNOWN_TITLE
from plagiarism_detector.core import pdf_handler
from plagiarism_detector.core.pdf_handler import PDFHandler, find_pdf_files, normalize_filename
from plagiarism_detector.core.validation import DirectoryValidationError, FileValidationError


class TestFindPdfFiles:
    """Test cases for find_pdf_files"""

    def test_recursive_and_case_insensitive(self, tmp_path, make_pdf):
        make_pdf(tmp_path / "b.pdf", "text")
        make_pdf(tmp_path / "sub" / "deeper" / "A.PDF", "text")
        (tmp_path / "notes.txt").write_text("not a pdf")

        found = find_pdf_files(str(tmp_path))

        assert sorted(os.path.basename(p) for p in found) == ["A.PDF", "b.pdf"]
        assert found == sorted(found)

    def test_empty_directory(self, tmp_path):
        assert find_pdf_files(str(tmp_path)) == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DirectoryValidationError):
            find_pdf_files(str(tmp_path / "missing"))


class TestPDFHandler:
    """Test cases for PDFHandler"""

    def test_invalid_directory(self, tmp_path):
        with pytest.raises(DirectoryValidationError):
            PDFHandler(str(tmp_path / "missing"))

    def test_extract_documents_with_metadata(self, tmp_path, make_pdf, fox_text):
        make_pdf(tmp_path / "a.pdf", fox_text, author="Ada Lovelace", title="Notes")
        make_pdf(tmp_path / "b.pdf", fox_text + " today")

        handler = PDFHandler(str(tmp_path))
        documents, failures = handler.extract_documents()

        assert failures == []
        assert [d.name for d in documents] == ["a.pdf", "b.pdf"]
        first, second = documents
        assert first.author == "Ada Lovelace"
        assert first.title == "Notes"
        assert first.normalized_text == fox_text
        assert second.author == UNKNOWN_AUTHOR
        assert second.title == UNKNOWN_TITLE
        assert os.path.isabs(first.path)

    def test_unreadable_files_are_skipped(self, tmp_path, make_pdf, fox_text):
        make_pdf(tmp_path / "good.pdf", fox_text)
        (tmp_path / "broken.pdf").write_bytes(b"this is not a pdf at all")

        documents, failures = PDFHandler(str(tmp_path)).extract_documents(max_workers=2)

        assert [d.name for d in documents] == ["good.pdf"]
        assert len(failures) == 1
        assert failures[0][0].endswith("broken.pdf")

    def test_large_pdf_is_extracted(self, tmp_path, make_pdf, fox_text):
        big = make_pdf(tmp_path / "big.pdf", fox_text)
        data = big.read_bytes()
        trailer = data[data.rindex(b"startxref"):]
        # Sparse padding past 100 MB, then the original trailer again so the xref offset still resolves
        with open(big, "r+b") as f:
            f.seek(101 * 1024 * 1024)
            f.write(b"\n" + trailer)
        assert big.stat().st_size > 100 * 1024 * 1024

        documents, failures = PDFHandler(str(tmp_path)).extract_documents()

        assert failures == []
        assert [d.name for d in documents] == ["big.pdf"]
        assert documents[0].normalized_text == fox_text

    def test_fallback_file_lists_are_not_shared(self, tmp_path, monkeypatch):
        def broken_walk(*args, **kwargs):
            raise RuntimeError("walk failed")
        monkeypatch.setattr(pdf_handler.os, "walk", broken_walk)

        first = PDFHandler(str(tmp_path))
        second = PDFHandler(str(tmp_path))
        first.pdf_files.append(str(tmp_path / "stray.pdf"))

        assert second.pdf_files == []
        assert first.pdf_files is not second.pdf_files
        assert find_pdf_files(str(tmp_path)) == ()

    def test_extract_document_raises_for_corrupt_file(self, tmp_path):
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"garbage")
        handler = PDFHandler(str(tmp_path))

        with pytest.raises(FileValidationError):
            handler.extract_document(str(broken))

    def test_ngram_size_is_applied(self, tmp_path, make_pdf, fox_text):
        make_pdf(tmp_path / "a.pdf", fox_text)
        documents, _ = PDFHandler(str(tmp_path)).extract_documents(ngram_size=3)
        assert len(documents[0].shingles) == 7

    def test_counts_and_names(self, tmp_path, make_pdf):
        make_pdf(tmp_path / "one.pdf", "text")
        make_pdf(tmp_path / "two.pdf", "text")

        handler = PDFHandler(str(tmp_path))

        assert handler.get_pdf_count() == 2
        assert handler.get_pdf_filenames() == ["one.pdf", "two.pdf"]


def test_normalize_filename_composes_accents():
    assert normalize_filename("café.pdf") == "café.pdf"
