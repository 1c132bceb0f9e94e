"""
Core functionality for document comparison.

This package contains the detection pipeline:
- Tokenization and shingling
- Jaccard similarity scoring
- Excerpt reconstruction
- Pairwise comparison
- PDF discovery and extraction
"""

from .text_processing import tokenize, generate_shingles, first_positions
from .jaccard_similarity import jaccard_similarity
from .excerpt_reconstruction import ExcerptReconstructor, reconstruct_excerpts
from .document import Document, ComparisonResult, cap_excerpts, UNKNOWN_AUTHOR, UNKNOWN_TITLE
from .pairwise_comparator import PairwiseComparator, compare_all
from .pdf_handler import PDFHandler, find_pdf_files
from .analyzer import PlagiarismAnalyzer, AnalysisOutcome
from .config import AnalysisSettings
from .logging_config import setup_logging, get_logger, LoggerMixin, ProductionLogger
from .validation import (
    ValidationError, FileValidationError, DirectoryValidationError,
    ParameterValidationError, ReportWriteError,
    FileValidator, DirectoryValidator, ParameterValidator,
    parse_threshold_percent, validate_inputs, handle_exceptions
)

__all__ = [
    'tokenize',
    'generate_shingles',
    'first_positions',
    'jaccard_similarity',
    'ExcerptReconstructor',
    'reconstruct_excerpts',
    'Document',
    'ComparisonResult',
    'cap_excerpts',
    'UNKNOWN_AUTHOR',
    'UNKNOWN_TITLE',
    'PairwiseComparator',
    'compare_all',
    'PDFHandler',
    'find_pdf_files',
    'PlagiarismAnalyzer',
    'AnalysisOutcome',
    'AnalysisSettings',
    'setup_logging',
    'get_logger',
    'LoggerMixin',
    'ProductionLogger',
    'ValidationError',
    'FileValidationError',
    'DirectoryValidationError',
    'ParameterValidationError',
    'ReportWriteError',
    'FileValidator',
    'DirectoryValidator',
    'ParameterValidator',
    'parse_threshold_percent',
    'validate_inputs',
    'handle_exceptions'
]
