import os
import subprocess
import sys
from pathlib import Path
from typing import Union

from ..core.validation import FileValidator, FileValidationError


class FileOpenError(FileValidationError):
    """Raised when the system viewer cannot be launched for a file."""
    pass


def open_with_default_app(file_path: Union[str, Path]) -> None:
    """
    Open ``file_path`` with the operating system's default application.

    Raises:
        FileValidationError: If the file does not exist
        FileOpenError: If no viewer could be launched
    """
    path = FileValidator.validate_file_path(file_path, must_exist=True)

    try:
        if sys.platform.startswith("win"):
            os.startfile(str(path))  # type: ignore[attr-defined]
        elif sys.platform == "darwin":
            subprocess.Popen(["open", str(path)])
        else:
            subprocess.Popen(["xdg-open", str(path)],
                             stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as e:
        raise FileOpenError(f"Cannot open {path}: {e}", field="file_path", value=str(path)) from e
