"""
End-to-end tests for the command line entry point.
"""

import logging

import pytest

import main as cli


@pytest.fixture(autouse=True)
def isolated_run(monkeypatch, tmp_path):
    """Run in a scratch directory and restore root logging afterwards."""
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def corpus(tmp_path, make_pdf, fox_text):
    folder = tmp_path / "corpus"
    make_pdf(folder / "a.pdf", fox_text, author="Ada")
    make_pdf(folder / "nested" / "b.pdf", fox_text + " today")
    make_pdf(folder / "c.pdf", "an unrelated document with entirely different wording inside")
    return folder


def test_full_run_writes_report(corpus, tmp_path, capsys):
    report = tmp_path / "reports" / "report.txt"

    exit_code = cli.main([str(corpus), "--report", str(report), "--no-progress"])

    assert exit_code == 0
    text = report.read_text(encoding="utf-8")
    assert "Possible plagiarism detected (83.33% similarity):" in text
    assert "Author: Ada, Title: Untitled" in text
    out = capsys.readouterr().out
    assert "Plagiarism detected (83.33%): a.pdf and b.pdf" in out
    assert "Report saved to" in out


def test_invalid_threshold_falls_back_to_default(corpus, tmp_path):
    report = tmp_path / "report.txt"

    exit_code = cli.main([str(corpus), "--report", str(report), "--threshold", "150", "--no-progress"])

    assert exit_code == 0
    assert "Possible plagiarism detected" in report.read_text(encoding="utf-8")


def test_percent_threshold_in_environment_uses_default(corpus, tmp_path, monkeypatch):
    monkeypatch.setenv("PLAGIARISM_THRESHOLD", "4")
    report = tmp_path / "report.txt"

    exit_code = cli.main([str(corpus), "--report", str(report), "--no-progress"])

    assert exit_code == 0
    assert "Possible plagiarism detected (83.33% similarity):" in report.read_text(encoding="utf-8")


def test_high_threshold_flags_nothing(corpus, tmp_path, capsys):
    report = tmp_path / "report.txt"

    cli.main([str(corpus), "--report", str(report), "--threshold", "90", "--no-progress"])

    assert "No plagiarism cases were detected." in report.read_text(encoding="utf-8")
    assert "No plagiarism cases were detected." in capsys.readouterr().out


def test_missing_folder(tmp_path, capsys):
    exit_code = cli.main([str(tmp_path / "missing"), "--report", str(tmp_path / "r.txt"), "--no-progress"])

    assert exit_code == 1
    assert "Directory does not exist" in capsys.readouterr().err


def test_folder_without_pdfs(tmp_path, capsys):
    empty = tmp_path / "empty"
    empty.mkdir()
    report = tmp_path / "r.txt"

    exit_code = cli.main([str(empty), "--report", str(report), "--no-progress"])

    assert exit_code == 0
    assert not report.exists()
    assert "No PDF files found" in capsys.readouterr().out


def test_unreadable_pdf_is_reported(corpus, tmp_path, capsys):
    (corpus / "broken.pdf").write_bytes(b"not a pdf")
    report = tmp_path / "report.txt"

    exit_code = cli.main([str(corpus), "--report", str(report), "--no-progress"])

    assert exit_code == 0
    assert "Error processing" in capsys.readouterr().out
    assert "broken.pdf" not in report.read_text(encoding="utf-8")


def test_resolve_threshold():
    assert cli.resolve_threshold("10", 0.04) == pytest.approx(0.10)
    assert cli.resolve_threshold("abc", 0.04) == 0.04
