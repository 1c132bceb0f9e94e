"""
Input validation and error handling for the plagiarism detector.

The comparison core trusts its inputs; everything a user can type or point
at (folders, report paths, thresholds, numeric options) is checked here
before it reaches the core.
"""

import inspect
import logging
from pathlib import Path
from typing import Any, Optional, Union
from functools import wraps


class ValidationError(Exception):
    """Base class for validation errors."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.message)


class FileValidationError(ValidationError):
    """Exception raised for file-related validation errors."""
    pass


class DirectoryValidationError(ValidationError):
    """Exception raised for directory-related validation errors."""
    pass


class ParameterValidationError(ValidationError):
    """Exception raised for parameter validation errors."""
    pass


class ReportWriteError(ValidationError):
    """Raised when the report destination cannot be prepared or written."""
    pass


class FileValidator:
    """File validation utilities."""

    ALLOWED_PDF_EXTENSIONS = {'.pdf'}

    @staticmethod
    def validate_file_path(file_path: Union[str, Path],
                           must_exist: bool = True,
                           allowed_extensions: Optional[set] = None) -> Path:
        """
        Validate a file path.

        Args:
            file_path: Path to the file
            must_exist: Whether the file must exist
            allowed_extensions: Set of allowed (lower-case) suffixes

        Returns:
            Path object

        Raises:
            FileValidationError: If validation fails
        """
        if not file_path:
            raise FileValidationError("File path cannot be empty", field="file_path", value=file_path)

        path = Path(file_path)

        if must_exist and not path.exists():
            raise FileValidationError(f"File does not exist: {file_path}", field="file_path", value=file_path)

        if must_exist and not path.is_file():
            raise FileValidationError(f"Path is not a file: {file_path}", field="file_path", value=file_path)

        if allowed_extensions and path.suffix.lower() not in allowed_extensions:
            raise FileValidationError(
                f"File extension not allowed. Allowed: {sorted(allowed_extensions)}, got: {path.suffix}",
                field="file_path",
                value=file_path
            )

        return path

    @staticmethod
    def validate_pdf_file(file_path: Union[str, Path]) -> Path:
        """Validate a PDF path: it must exist and carry a .pdf suffix. Size is not limited."""
        return FileValidator.validate_file_path(
            file_path,
            must_exist=True,
            allowed_extensions=FileValidator.ALLOWED_PDF_EXTENSIONS
        )

    @staticmethod
    def validate_report_path(file_path: Union[str, Path], create_parent: bool = True) -> Path:
        """
        Check that a report can be written at ``file_path``.

        The parent directory is created when missing.

        Raises:
            ReportWriteError: If the path is empty, is a directory, or its
                parent cannot be created.
        """
        if not file_path:
            raise ReportWriteError("Report path cannot be empty", field="report_path", value=file_path)

        path = Path(file_path).expanduser()
        if path.is_dir():
            raise ReportWriteError(f"Report path is a directory: {file_path}", field="report_path", value=file_path)

        parent = path.parent
        if not parent.exists():
            if not create_parent:
                raise ReportWriteError(f"Report directory does not exist: {parent}",
                                       field="report_path", value=file_path)
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ReportWriteError(f"Cannot create report directory {parent}: {e}",
                                       field="report_path", value=file_path) from e
        elif not parent.is_dir():
            raise ReportWriteError(f"Report parent is not a directory: {parent}",
                                   field="report_path", value=file_path)

        return path


class DirectoryValidator:
    """Directory validation utilities."""

    @staticmethod
    def validate_directory_path(dir_path: Union[str, Path],
                                must_exist: bool = True) -> Path:
        """
        Validate a directory path.

        Raises:
            DirectoryValidationError: If validation fails
        """
        if not dir_path:
            raise DirectoryValidationError("Directory path cannot be empty", field="dir_path", value=dir_path)

        path = Path(dir_path).expanduser()

        if must_exist and not path.exists():
            raise DirectoryValidationError(f"Directory does not exist: {dir_path}", field="dir_path", value=dir_path)

        if must_exist and not path.is_dir():
            raise DirectoryValidationError(f"Path is not a directory: {dir_path}", field="dir_path", value=dir_path)

        return path


class ParameterValidator:
    """Parameter validation utilities."""

    @staticmethod
    def validate_positive_integer(value: Any, field: str, min_value: int = 1, max_value: Optional[int] = None) -> int:
        """Validate an integer parameter within bounds."""
        if isinstance(value, bool) or not isinstance(value, int):
            try:
                value = int(value)
            except (ValueError, TypeError):
                raise ParameterValidationError(
                    f"{field} must be an integer, got {type(value).__name__}",
                    field=field,
                    value=value
                )

        if value < min_value:
            raise ParameterValidationError(
                f"{field} must be >= {min_value}, got {value}",
                field=field,
                value=value
            )

        if max_value is not None and value > max_value:
            raise ParameterValidationError(
                f"{field} must be <= {max_value}, got {value}",
                field=field,
                value=value
            )

        return value

    @staticmethod
    def validate_positive_float(value: Any, field: str, min_value: float = 0.0, max_value: Optional[float] = None) -> float:
        """Validate a numeric parameter within bounds."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            try:
                value = float(str(value).strip().replace(',', '.'))
            except (ValueError, TypeError):
                raise ParameterValidationError(
                    f"{field} must be a number, got {value!r}",
                    field=field,
                    value=value
                )

        if value != value:  # NaN
            raise ParameterValidationError(f"{field} must be a number, got NaN", field=field, value=value)

        if value < min_value:
            raise ParameterValidationError(
                f"{field} must be >= {min_value}, got {value}",
                field=field,
                value=value
            )

        if max_value is not None and value > max_value:
            raise ParameterValidationError(
                f"{field} must be <= {max_value}, got {value}",
                field=field,
                value=value
            )

        return float(value)


def parse_threshold_percent(value: Any) -> float:
    """
    Convert a user-entered percentage (0-100) into a similarity fraction.

    >>> parse_threshold_percent("4")
    0.04

    Raises:
        ParameterValidationError: If the value is not a number in [0, 100].
    """
    percent = ParameterValidator.validate_positive_float(
        value, "threshold", min_value=0.0, max_value=100.0
    )
    return percent / 100.0


def validate_inputs(**validators):
    """
    Decorator to validate function inputs.

    Args:
        **validators: Dict mapping parameter names to validation functions
    """
    def decorator(func):
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            for param_name, validator in validators.items():
                if param_name in bound_args.arguments:
                    value = bound_args.arguments[param_name]
                    try:
                        bound_args.arguments[param_name] = validator(value)
                    except ValidationError:
                        raise
                    except Exception as e:
                        raise ParameterValidationError(
                            f"Validation failed for {param_name}: {str(e)}",
                            field=param_name,
                            value=value
                        )

            return func(*bound_args.args, **bound_args.kwargs)
        return wrapper
    return decorator


def handle_exceptions(default_return=None, reraise_types=None):
    """
    Decorator that logs unexpected exceptions and returns a fallback value.

    Args:
        default_return: Value to return on an unexpected exception; when
            None the exception is re-raised after logging
        reraise_types: Exception types that always propagate untouched
    """
    if reraise_types is None:
        reraise_types = [ValidationError]

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except tuple(reraise_types):
                raise
            except Exception as e:
                logger = logging.getLogger(func.__module__)
                logger.error(f"Unhandled exception in {func.__name__}: {str(e)}", exc_info=True)

                if default_return is not None:
                    return default_return
                raise
        return wrapper
    return decorator
