"""
Tests for unpacking uploaded ZIP archives.
"""

import io
import os
import tempfile
import zipfile
from types import SimpleNamespace

import pytest

from plagiarism_detector.core.pdf_handler import PDFHandler
from plagiarism_detector.core.validation import FileValidationError
from plagiarism_detector.utils.upload_extractor import extract_zip_upload, upload_key


@pytest.fixture(autouse=True)
def scratch_tempdir(monkeypatch, tmp_path):
    """Keep upload folders inside the test's own tmp_path."""
    scratch = tmp_path / "tmp"
    scratch.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(scratch))


@pytest.fixture
def make_zip(tmp_path, make_pdf, fox_text):
    """Factory building an in-memory ZIP of generated PDFs, like a browser upload."""
    def _make_zip(*names):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            for name in names:
                pdf_path = make_pdf(tmp_path / "sources" / name, fox_text)
                archive.write(pdf_path, arcname=name)
        buffer.seek(0)
        return buffer
    return _make_zip


class TestExtractZipUpload:
    """Test cases for extract_zip_upload"""

    def test_second_upload_replaces_first(self, make_zip):
        first_dir = extract_zip_upload(make_zip("one.pdf", "two.pdf"))
        second_dir = extract_zip_upload(make_zip("three.pdf"), previous_dir=first_dir)

        assert second_dir != first_dir
        assert not os.path.exists(first_dir)
        assert PDFHandler(second_dir).get_pdf_filenames() == ["three.pdf"]

    def test_fresh_folder_without_previous(self, make_zip):
        upload_dir = extract_zip_upload(make_zip("one.pdf"))
        assert sorted(os.listdir(upload_dir)) == ["one.pdf"]

    def test_bad_archive_keeps_previous_folder(self, make_zip):
        previous = extract_zip_upload(make_zip("one.pdf"))

        with pytest.raises(FileValidationError):
            extract_zip_upload(io.BytesIO(b"not a zip archive"), previous_dir=previous)

        assert os.listdir(previous) == ["one.pdf"]


class TestUploadKey:
    """Test cases for upload_key"""

    def test_prefers_file_id(self):
        upload = SimpleNamespace(file_id="abc", name="docs.zip", size=10)
        assert upload_key(upload) == ("id", "abc")

    def test_falls_back_to_name_and_size(self):
        first = SimpleNamespace(name="docs.zip", size=10)
        second = SimpleNamespace(name="docs.zip", size=12)
        assert upload_key(first) != upload_key(second)
