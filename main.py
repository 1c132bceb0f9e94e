import argparse
import logging
import sys

from plagiarism_detector.core.analyzer import PlagiarismAnalyzer
from plagiarism_detector.core.config import AnalysisSettings, default_report_path
from plagiarism_detector.core.logging_config import setup_logging
from plagiarism_detector.core.validation import (
    ParameterValidator, ValidationError, ParameterValidationError,
    FileValidator, parse_threshold_percent
)
from plagiarism_detector.utils.file_opener import open_with_default_app, FileOpenError
from plagiarism_detector.utils.report_writer import PlagiarismReportWriter

logger = logging.getLogger(__name__)


def build_parser(defaults: AnalysisSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect copied passages between the PDF files of a folder (and its subfolders)."
    )
    parser.add_argument("folder", help="Folder to analyze")
    parser.add_argument("--report", default=None,
                        help=f"Where to save the report (default: Desktop/{defaults.report_file_name})")
    parser.add_argument("--threshold", default=str(defaults.threshold_percent),
                        help=f"Similarity threshold in percent, 0-100 (default: {defaults.threshold_percent:g})")
    parser.add_argument("--max-excerpts", type=int, default=defaults.max_excerpts,
                        help="Excerpts listed per flagged pair, 0 for all (default: %(default)s)")
    parser.add_argument("--ngram-size", type=int, default=defaults.ngram_size,
                        help="Words per shingle (default: %(default)s)")
    parser.add_argument("--workers", type=int, default=defaults.max_workers,
                        help="Worker threads for extraction and comparison (default: %(default)s)")
    parser.add_argument("--open", action="store_true", help="Open the report when done")
    parser.add_argument("--log-level", default=defaults.log_level, help="Logging level (default: %(default)s)")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    return parser


def resolve_threshold(raw: str, default: float) -> float:
    """Parse the percent threshold, falling back to ``default`` when invalid."""
    try:
        return parse_threshold_percent(raw)
    except ParameterValidationError as e:
        logger.warning(f"{e.message}. Using the default of {default * 100:g}%.")
        return default


def main(argv=None) -> int:
    defaults = AnalysisSettings.from_env()
    args = build_parser(defaults).parse_args(argv)

    setup_logging(
        log_level=args.log_level,
        log_dir=defaults.log_dir,
        structured_logging=defaults.structured_logging,
        enable_console=True,
        enable_file=True
    )

    try:
        settings = AnalysisSettings(
            threshold=resolve_threshold(args.threshold, defaults.threshold),
            ngram_size=ParameterValidator.validate_positive_integer(args.ngram_size, "ngram_size", max_value=50),
            max_excerpts=ParameterValidator.validate_positive_integer(args.max_excerpts, "max_excerpts", min_value=0),
            report_file_name=defaults.report_file_name,
            max_workers=ParameterValidator.validate_positive_integer(args.workers, "workers"),
        )
        report_path = FileValidator.validate_report_path(
            args.report or default_report_path(settings.report_file_name)
        )
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print("Starting analysis...")
    try:
        outcome = PlagiarismAnalyzer(settings, show_progress=not args.no_progress).analyze(args.folder)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if outcome.pdf_count == 0:
        print(f"No PDF files found in the folder or its subfolders: {args.folder}")
        return 0

    for path, error in outcome.failures:
        print(f"Error processing {path}: {error}")

    for result in outcome.flagged:
        print(f"Plagiarism detected ({result.similarity_percent:.2f}%): "
              f"{result.document_a.name} and {result.document_b.name}")
    if not outcome.flagged:
        print("No plagiarism cases were detected.")

    try:
        written = PlagiarismReportWriter().write(report_path, outcome.documents, outcome.results)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    print(f"Analysis finished. Report saved to: {written}")

    if args.open:
        try:
            open_with_default_app(written)
        except FileOpenError as e:
            print(f"Could not open the report: {e.message}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
