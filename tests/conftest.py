"""
Shared fixtures for the plagiarism detector tests.
"""

import fitz  # PyMuPDF
import pytest

from plagiarism_detector.core.document import Document


def _wrap_words(text, words_per_line=8):
    words = text.split()
    lines = [" ".join(words[i:i + words_per_line]) for i in range(0, len(words), words_per_line)]
    return "\n".join(lines)


@pytest.fixture
def make_pdf():
    """Factory writing a one-page PDF with the given text and metadata."""
    def _make_pdf(path, text, author=None, title=None):
        path.parent.mkdir(parents=True, exist_ok=True)
        pdf = fitz.open()
        page = pdf.new_page()
        if text:
            page.insert_text((72, 72), _wrap_words(text), fontsize=10)
        metadata = {}
        if author is not None:
            metadata["author"] = author
        if title is not None:
            metadata["title"] = title
        if metadata:
            pdf.set_metadata(metadata)
        pdf.save(str(path))
        pdf.close()
        return path
    return _make_pdf


@pytest.fixture
def make_document():
    """Factory building a Document whose path derives from its name."""
    def _make_document(name, text, **kwargs):
        return Document(name=name, path=f"/docs/{name}", text=text, **kwargs)
    return _make_document


@pytest.fixture
def fox_text():
    return "the quick brown fox jumps over the lazy dog"
