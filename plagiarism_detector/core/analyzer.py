"""
End-to-end analysis of a folder: discover PDFs, extract them, compare every
pair. Shared by the command line entry point and the Streamlit window.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .config import AnalysisSettings, resolve_max_workers
from .document import Document, ComparisonResult
from .logging_config import LoggerMixin
from .pairwise_comparator import PairwiseComparator
from .pdf_handler import PDFHandler, ExtractionFailure


@dataclass
class AnalysisOutcome:
    """Everything a report or window needs about one run."""

    pdf_count: int
    documents: List[Document] = field(default_factory=list)
    failures: List[ExtractionFailure] = field(default_factory=list)
    results: List[ComparisonResult] = field(default_factory=list)

    @property
    def flagged(self) -> List[ComparisonResult]:
        return [result for result in self.results if result.has_overlap]


class PlagiarismAnalyzer(LoggerMixin):
    """Runs the discovery, extraction and comparison steps with one set of settings."""

    def __init__(self, settings: Optional[AnalysisSettings] = None, show_progress: bool = False):
        self.settings = settings or AnalysisSettings()
        self.show_progress = show_progress

    def analyze(self, directory: str) -> AnalysisOutcome:
        """
        Analyze every PDF under ``directory``.

        Raises:
            DirectoryValidationError: If ``directory`` is not a readable folder
        """
        workers = resolve_max_workers(self.settings.max_workers)

        with self.log_operation("analyze", file_path=str(directory), threshold=self.settings.threshold):
            handler = PDFHandler(directory)
            outcome = AnalysisOutcome(pdf_count=handler.get_pdf_count())
            if outcome.pdf_count == 0:
                return outcome

            outcome.documents, outcome.failures = handler.extract_documents(
                ngram_size=self.settings.ngram_size,
                max_workers=workers,
                show_progress=self.show_progress,
            )

            comparator = PairwiseComparator(
                self.settings.threshold,
                max_excerpts=self.settings.max_excerpts,
                max_workers=workers,
                show_progress=self.show_progress,
            )
            outcome.results = comparator.compare_all(outcome.documents)
            return outcome
