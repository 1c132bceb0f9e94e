"""
Runtime configuration.

Defaults mirror the desktop tool this project replaces (4% threshold,
5-word shingles, three excerpts per pair in the report). Every value can be
overridden through ``PLAGIARISM_*`` environment variables or a ``.env``
file in the working directory.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

import psutil
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.04
NGRAM_SIZE = 5
MAX_EXCERPTS_TO_DISPLAY = 3
REPORT_FILE_NAME = "plagiarism_report.txt"
TRUNCATION_MARKER = "(... more identical excerpts found)"


def _env_str(name: str, default: str) -> str:
    return os.getenv(name, default)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def _env_fraction(name: str, default: float) -> float:
    value = _env_float(name, default)
    if not 0.0 <= value <= 1.0:
        logger.warning(f"Ignoring {name}={value!r}: expected a fraction between 0 and 1, using {default}")
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes", "on")


@dataclass(frozen=True)
class AnalysisSettings:
    """Settings for one analysis run."""

    threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    ngram_size: int = NGRAM_SIZE
    max_excerpts: int = MAX_EXCERPTS_TO_DISPLAY
    report_file_name: str = REPORT_FILE_NAME
    max_workers: int = 1
    log_level: str = "INFO"
    log_dir: str = "logs"
    structured_logging: bool = False

    @classmethod
    def from_env(cls) -> "AnalysisSettings":
        return cls(
            threshold=_env_fraction("PLAGIARISM_THRESHOLD", DEFAULT_SIMILARITY_THRESHOLD),
            ngram_size=_env_int("PLAGIARISM_NGRAM_SIZE", NGRAM_SIZE),
            max_excerpts=_env_int("PLAGIARISM_MAX_EXCERPTS", MAX_EXCERPTS_TO_DISPLAY),
            report_file_name=_env_str("PLAGIARISM_REPORT_FILE", REPORT_FILE_NAME),
            max_workers=_env_int("PLAGIARISM_MAX_WORKERS", 1),
            log_level=_env_str("PLAGIARISM_LOG_LEVEL", "INFO"),
            log_dir=_env_str("PLAGIARISM_LOG_DIR", "logs"),
            structured_logging=_env_bool("PLAGIARISM_STRUCTURED_LOGS", False),
        )

    @property
    def threshold_percent(self) -> float:
        return self.threshold * 100


def default_report_path(file_name: str = REPORT_FILE_NAME) -> str:
    """Desktop when it exists, otherwise the home directory."""
    home = os.path.expanduser("~")
    desktop = os.path.join(home, "Desktop")
    base = desktop if os.path.isdir(desktop) else home
    return os.path.join(base, file_name)


def resolve_max_workers(requested: Optional[int]) -> int:
    """Clamp a requested worker count to [1, available CPUs]."""
    cpu_count = psutil.cpu_count(logical=True) or 1
    if requested is None or requested < 1:
        return 1
    if requested > cpu_count:
        logger.warning(f"Requested {requested} workers but only {cpu_count} CPUs available, using {cpu_count}")
        return cpu_count
    return requested
