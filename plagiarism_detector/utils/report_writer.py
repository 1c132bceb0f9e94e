from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from ..core.document import Document, ComparisonResult
from ..core.logging_config import LoggerMixin
from ..core.validation import FileValidator, ReportWriteError

SEPARATOR = "-" * 40


class PlagiarismReportWriter(LoggerMixin):
    """
    Renders comparison results as the plain-text plagiarism report.

    Pairs appear in the order the comparator produced them. Excerpts are
    printed as capped by each result's ``max_excerpts``.
    """

    title = "Plagiarism Report"

    def render(self, documents: Sequence[Document], results: Sequence[ComparisonResult]) -> str:
        lines: List[str] = [self.title, "=" * len(self.title), ""]

        lines.append("Processed files:")
        for document in documents:
            lines.append(f"- {document.name} (Path: {document.path})")
        lines.append("")

        lines.append("Comparison results:")
        plagiarism_found = False
        for result in results:
            if result.has_overlap:
                plagiarism_found = True
                lines.extend(self._render_overlap(result))
            else:
                lines.append(
                    f"No plagiarism detected between {result.document_a.name} and "
                    f"{result.document_b.name} ({result.similarity_percent:.2f}% similarity)"
                )
            lines.append(SEPARATOR)
            lines.append("")

        if not plagiarism_found:
            lines.append("No plagiarism cases were detected.")

        return "\n".join(lines) + "\n"

    @staticmethod
    def _render_overlap(result: ComparisonResult) -> List[str]:
        a, b = result.document_a, result.document_b
        lines = [
            f"Possible plagiarism detected ({result.similarity_percent:.2f}% similarity):",
            f"File 1: {a.name} (Path: {a.path})",
            f"Author: {a.author}, Title: {a.title}",
            f"File 2: {b.name} (Path: {b.path})",
            f"Author: {b.author}, Title: {b.title}",
            "Copied excerpts:",
        ]
        displayed = result.displayed_excerpts
        if result.is_truncated:
            displayed, marker = displayed[:-1], displayed[-1]
        lines.extend(f"- {excerpt}" for excerpt in displayed)
        if result.is_truncated:
            lines.append(marker)
        return lines

    def write(self, report_path: Union[str, Path], documents: Sequence[Document],
              results: Sequence[ComparisonResult]) -> Path:
        """
        Render and save the report, creating the parent directory if needed.

        Raises:
            ReportWriteError: If the destination cannot be written
        """
        path = FileValidator.validate_report_path(report_path)
        with self.log_operation("write_report", file_path=str(path), pair_count=len(results)):
            try:
                path.write_text(self.render(documents, results), encoding="utf-8")
            except OSError as e:
                raise ReportWriteError(f"Cannot write report to {path}: {e}",
                                       field="report_path", value=str(report_path)) from e
        return path


def results_to_dataframe(results: Sequence[ComparisonResult]) -> pd.DataFrame:
    """One row per compared pair, in comparison order."""
    columns = ["file_1", "file_2", "similarity", "has_overlap", "excerpt_count",
               "author_1", "title_1", "author_2", "title_2", "path_1", "path_2"]
    rows = [result.to_dict() for result in results]
    return pd.DataFrame(rows, columns=columns)
