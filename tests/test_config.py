"""
Unit tests for environment-driven settings.
"""

import pytest

from plagiarism_detector.core import config
from plagiarism_detector.core.config import AnalysisSettings, resolve_max_workers


class TestAnalysisSettings:
    """Test cases for AnalysisSettings"""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("PLAGIARISM_THRESHOLD", "PLAGIARISM_NGRAM_SIZE", "PLAGIARISM_MAX_EXCERPTS",
                     "PLAGIARISM_MAX_WORKERS", "PLAGIARISM_STRUCTURED_LOGS"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        settings = AnalysisSettings.from_env()
        assert settings.threshold == 0.04
        assert settings.ngram_size == 5
        assert settings.max_excerpts == 3
        assert settings.threshold_percent == pytest.approx(4.0)

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PLAGIARISM_THRESHOLD", "0.25")
        monkeypatch.setenv("PLAGIARISM_NGRAM_SIZE", "4")
        monkeypatch.setenv("PLAGIARISM_MAX_EXCERPTS", "0")
        monkeypatch.setenv("PLAGIARISM_STRUCTURED_LOGS", "yes")

        settings = AnalysisSettings.from_env()

        assert settings.threshold == 0.25
        assert settings.ngram_size == 4
        assert settings.max_excerpts == 0
        assert settings.structured_logging is True

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("PLAGIARISM_THRESHOLD", "lots")
        monkeypatch.setenv("PLAGIARISM_NGRAM_SIZE", "five")

        settings = AnalysisSettings.from_env()

        assert settings.threshold == 0.04
        assert settings.ngram_size == 5

    @pytest.mark.parametrize("raw", ["4", "-0.1", "1.5", "nan"])
    def test_threshold_outside_unit_interval_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("PLAGIARISM_THRESHOLD", raw)

        settings = AnalysisSettings.from_env()

        assert settings.threshold == 0.04
        assert settings.threshold_percent == pytest.approx(4.0)

    def test_threshold_bounds_are_accepted(self, monkeypatch):
        monkeypatch.setenv("PLAGIARISM_THRESHOLD", "1")
        assert AnalysisSettings.from_env().threshold == 1.0
        monkeypatch.setenv("PLAGIARISM_THRESHOLD", "0")
        assert AnalysisSettings.from_env().threshold == 0.0


class TestResolveMaxWorkers:
    """Test cases for resolve_max_workers"""

    def test_none_and_zero_mean_one(self):
        assert resolve_max_workers(None) == 1
        assert resolve_max_workers(0) == 1

    def test_capped_by_cpu_count(self, monkeypatch):
        monkeypatch.setattr(config.psutil, "cpu_count", lambda logical=True: 2)
        assert resolve_max_workers(8) == 2
        assert resolve_max_workers(2) == 2


def test_default_report_path_uses_file_name(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config.default_report_path("r.txt") == str(tmp_path / "r.txt")
    (tmp_path / "Desktop").mkdir()
    assert config.default_report_path("r.txt") == str(tmp_path / "Desktop" / "r.txt")
