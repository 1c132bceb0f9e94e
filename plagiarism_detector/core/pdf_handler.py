import os
import unicodedata
from typing import List, Optional, Tuple
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor

import fitz  # PyMuPDF
from tqdm import tqdm

from .config import NGRAM_SIZE
from .document import Document
from .logging_config import LoggerMixin
from .validation import (
    DirectoryValidator, FileValidator, ParameterValidator,
    DirectoryValidationError, FileValidationError,
    validate_inputs, handle_exceptions
)

ExtractionFailure = Tuple[str, str]


def normalize_filename(filename: str) -> str:
    """
    Normalize a filename to NFC so composed and decomposed spellings of the
    same name compare equal.
    """
    return unicodedata.normalize('NFC', filename)


def safe_filename_encode(filename: str) -> str:
    """
    Make a filename safe for logging and display.

    Args:
        filename: Original filename

    Returns:
        Filename with unencodable characters replaced
    """
    try:
        normalized = normalize_filename(filename)
        return normalized.encode('utf-8', errors='replace').decode('utf-8')
    except (UnicodeError, TypeError):
        return repr(filename)


def _metadata_value(metadata: Optional[dict], key: str) -> Optional[str]:
    """PyMuPDF reports missing metadata as empty strings; map those to None."""
    if not metadata:
        return None
    value = metadata.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


@handle_exceptions(default_return=())
def find_pdf_files(directory_path: str) -> List[str]:
    """
    Recursively walk a directory tree and return full paths to all .pdf files.

    The suffix check is case-insensitive. Paths are sorted so that repeated
    runs over the same folder compare documents in the same order.

    Args:
        directory_path: Path to directory to search

    Returns:
        Sorted list of PDF file paths

    Raises:
        DirectoryValidationError: If directory is invalid or inaccessible
    """
    import logging
    logger = logging.getLogger(__name__)

    validated_path = DirectoryValidator.validate_directory_path(directory_path, must_exist=True)

    safe_path = safe_filename_encode(str(validated_path))
    logger.info(f"Searching for PDF files in directory: {safe_path}")

    pdf_files = []

    def _on_walk_error(error: OSError):
        logger.warning(f"Cannot read {safe_filename_encode(str(error.filename))}: {error.strerror}")

    try:
        for root, _, files in os.walk(validated_path, onerror=_on_walk_error):
            for file in files:
                if normalize_filename(file).lower().endswith('.pdf'):
                    full_path = os.path.join(root, file)
                    pdf_files.append(full_path)
                    logger.debug(f"Found PDF: {safe_filename_encode(full_path)}")
    except OSError as e:
        logger.error(f"Error accessing directory {safe_path}: {str(e)}")
        raise DirectoryValidationError(
            f"Cannot access directory: {str(e)}",
            field="directory_path",
            value=directory_path
        )

    pdf_files.sort()
    logger.info(f"Found {len(pdf_files)} PDF files")
    return pdf_files


class PDFHandler(LoggerMixin):
    """
    Turns the PDF files under a directory into Documents: full text plus the
    author and title from the PDF metadata.
    """

    @validate_inputs(
        dir_path=lambda x: DirectoryValidator.validate_directory_path(x, must_exist=True)
    )
    def __init__(self, dir_path: str):
        """
        Args:
            dir_path: Directory searched recursively for PDF files

        Raises:
            DirectoryValidationError: If directory is invalid or inaccessible
        """
        safe_dir_path = safe_filename_encode(str(dir_path))
        with self.log_operation("pdf_handler_init", file_path=safe_dir_path):
            self.dir_path = Path(dir_path)
            self.pdf_files = list(find_pdf_files(str(self.dir_path)))

            if not self.pdf_files:
                self.logger.warning(f"No PDF files found in directory: {safe_dir_path}")

    def get_pdf_count(self) -> int:
        return len(self.pdf_files)

    def get_pdf_filenames(self) -> List[str]:
        """Normalized file names, in discovery order."""
        return [normalize_filename(os.path.basename(path)) for path in self.pdf_files]

    def extract_document(self, pdf_path: str, ngram_size: int = NGRAM_SIZE) -> Document:
        """
        Read one PDF into a Document.

        Raises:
            FileValidationError: If the file cannot be opened or read
        """
        filename = normalize_filename(os.path.basename(pdf_path))
        FileValidator.validate_pdf_file(pdf_path)

        try:
            with fitz.open(pdf_path) as pdf:
                if pdf.needs_pass:
                    raise FileValidationError("PDF is password protected", field="pdf_path", value=pdf_path)
                metadata = pdf.metadata
                text = "".join(page.get_text() for page in pdf)
        except FileValidationError:
            raise
        except Exception as e:
            raise FileValidationError(f"Cannot read PDF: {e}", field="pdf_path", value=pdf_path) from e

        document = Document(
            name=filename,
            path=os.path.abspath(pdf_path),
            text=text,
            author=_metadata_value(metadata, 'author'),
            title=_metadata_value(metadata, 'title'),
            ngram_size=ngram_size,
        )
        self.logger.debug(
            f"Extracted {safe_filename_encode(filename)}: {len(document.tokens)} tokens, "
            f"{len(document.shingles)} shingles"
        )
        return document

    def _extract_or_fail(self, pdf_path: str, ngram_size: int):
        try:
            return self.extract_document(pdf_path, ngram_size), None
        except FileValidationError as e:
            self.logger.warning(f"Skipping {safe_filename_encode(pdf_path)}: {e.message}",
                                extra={'file_path': safe_filename_encode(pdf_path)})
            return None, e.message

    @validate_inputs(
        ngram_size=lambda x: ParameterValidator.validate_positive_integer(x, "ngram_size", min_value=1, max_value=50),
        max_workers=lambda x: ParameterValidator.validate_positive_integer(x, "max_workers", min_value=1)
    )
    def extract_documents(self, ngram_size: int = NGRAM_SIZE, max_workers: int = 1,
                          show_progress: bool = False) -> Tuple[List[Document], List[ExtractionFailure]]:
        """
        Extract every discovered PDF.

        Files that cannot be read are logged and reported in the failure list;
        they never appear among the documents.

        Args:
            ngram_size: Shingle width used for each Document
            max_workers: Threads used for extraction
            show_progress: Whether to show a tqdm progress bar

        Returns:
            Tuple of (documents in discovery order, [(path, error message)])
        """
        with self.log_operation("extract_documents", document_count=len(self.pdf_files)):
            documents: List[Document] = []
            failures: List[ExtractionFailure] = []
            if not self.pdf_files:
                return documents, failures

            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                outcomes = executor.map(lambda path: self._extract_or_fail(path, ngram_size), self.pdf_files)
                for pdf_path, (document, error) in tqdm(
                    zip(self.pdf_files, outcomes), total=len(self.pdf_files),
                    desc="Reading PDFs", unit="pdf", disable=not show_progress, leave=False
                ):
                    if document is not None:
                        documents.append(document)
                    else:
                        failures.append((pdf_path, error))

            self.logger.info(f"Extraction completed: {len(documents)} successful, {len(failures)} failed")
            return documents, failures
