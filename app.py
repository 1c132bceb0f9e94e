import os
import logging

import streamlit as st
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from plagiarism_detector.core.analyzer import PlagiarismAnalyzer
from plagiarism_detector.core.config import AnalysisSettings
from plagiarism_detector.core.logging_config import setup_logging
from plagiarism_detector.core.validation import ValidationError, ParameterValidationError, parse_threshold_percent
from plagiarism_detector.utils.report_writer import PlagiarismReportWriter, results_to_dataframe
from plagiarism_detector.utils.upload_extractor import extract_zip_upload, upload_key

SETTINGS = AnalysisSettings.from_env()

setup_logging(
    log_level=SETTINGS.log_level,
    log_dir=SETTINGS.log_dir,
    structured_logging=SETTINGS.structured_logging,
    enable_console=True,
    enable_file=True
)

logger = logging.getLogger(__name__)


def initialize_session_state():
    """Initialize all session state variables."""
    if "analysis_outcome" not in st.session_state:
        st.session_state.analysis_outcome = None
    if "current_directory" not in st.session_state:
        st.session_state.current_directory = None
    if "report_text" not in st.session_state:
        st.session_state.report_text = None


def initialize_app():
    st.set_page_config(
        page_title="Plagiarism Detector",
        page_icon="🔍",
        layout="wide",
        initial_sidebar_state="expanded"
    )
    initialize_session_state()

    st.markdown("""
    <style>
    .excerpt-block {
        background: #fef3c7;
        border-left: 4px solid #f59e0b;
        padding: 0.75rem 1rem;
        margin: 0.5rem 0;
        border-radius: 6px;
        font-family: 'Courier New', monospace;
        font-size: 0.9rem;
        color: #1f2937;
    }
    </style>
    """, unsafe_allow_html=True)


def reset_analysis_state(new_directory):
    """Reset analysis state when the analyzed folder changes."""
    st.session_state.current_directory = new_directory
    st.session_state.analysis_outcome = None
    st.session_state.report_text = None


def directory_for_upload(zip_file):
    """Folder holding the uploaded ZIP. A different upload replaces the previous folder."""
    key = upload_key(zip_file)
    if st.session_state.get("upload_key") == key:
        return st.session_state.upload_dir

    try:
        upload_dir = extract_zip_upload(zip_file, previous_dir=st.session_state.get("upload_dir"))
    except ValidationError as e:
        st.sidebar.error(f"❌ {e.message}")
        return None
    st.session_state.upload_key = key
    st.session_state.upload_dir = upload_dir
    return upload_dir


def get_analysis_inputs():
    """Sidebar: folder source, threshold and excerpt cap."""
    st.sidebar.markdown("### 📁 Documents")
    source = st.sidebar.radio("Source", ["Folder path", "ZIP upload"], horizontal=True)

    directory = None
    if source == "Folder path":
        folder = st.sidebar.text_input("Folder to analyze", value=st.session_state.current_directory or "")
        directory = folder.strip() or None
    else:
        zip_file = st.sidebar.file_uploader("Choose ZIP file containing PDFs", type="zip")
        if zip_file:
            directory = directory_for_upload(zip_file)

    st.sidebar.markdown("### ⚙️ Settings")
    threshold_text = st.sidebar.text_input("Similarity threshold (%)", value=f"{SETTINGS.threshold_percent:g}")
    try:
        threshold = parse_threshold_percent(threshold_text)
    except ParameterValidationError:
        st.sidebar.error(f"Enter a value between 0 and 100. Using the default: {SETTINGS.threshold_percent:g}%.")
        threshold = SETTINGS.threshold

    max_excerpts = st.sidebar.number_input(
        "Excerpts shown per pair (0 = all)", min_value=0, value=SETTINGS.max_excerpts, step=1
    )

    if directory != st.session_state.current_directory:
        reset_analysis_state(directory)

    return directory, threshold, int(max_excerpts)


def run_analysis(directory, threshold, max_excerpts):
    settings = AnalysisSettings(
        threshold=threshold,
        ngram_size=SETTINGS.ngram_size,
        max_excerpts=max_excerpts,
        report_file_name=SETTINGS.report_file_name,
        max_workers=SETTINGS.max_workers,
    )
    with st.spinner("Analyzing documents..."):
        try:
            outcome = PlagiarismAnalyzer(settings).analyze(directory)
        except ValidationError as e:
            st.error(f"❌ {e.message}")
            logger.error(f"Analysis rejected: {e.message}")
            return

    st.session_state.analysis_outcome = outcome
    st.session_state.report_text = PlagiarismReportWriter().render(outcome.documents, outcome.results)


def display_results(outcome):
    if outcome.pdf_count == 0:
        st.warning(f"No PDF files found in the folder or its subfolders: {st.session_state.current_directory}")
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("Documents analyzed", len(outcome.documents))
    col2.metric("Pairs compared", len(outcome.results))
    col3.metric("Pairs flagged", len(outcome.flagged))

    if outcome.failures:
        with st.expander(f"⚠️ {len(outcome.failures)} file(s) could not be read", expanded=True):
            for path, error in outcome.failures:
                st.markdown(f"- `{os.path.basename(path)}`: {error}")

    if outcome.results:
        table = results_to_dataframe(outcome.results)
        table["similarity"] = (table["similarity"] * 100).round(2)
        st.markdown("### 📊 All comparisons")
        st.dataframe(table[["file_1", "file_2", "similarity", "has_overlap", "excerpt_count"]],
                     use_container_width=True)

    st.markdown("### 🚨 Flagged pairs")
    if not outcome.flagged:
        st.success("✅ No plagiarism cases were detected.")
    for result in outcome.flagged:
        a, b = result.document_a, result.document_b
        with st.expander(f"{a.name} ↔ {b.name} ({result.similarity_percent:.2f}%)"):
            st.markdown(f"**File 1:** {a.name}: {a.author}, *{a.title}*")
            st.markdown(f"**File 2:** {b.name}: {b.author}, *{b.title}*")
            for excerpt in result.displayed_excerpts:
                st.markdown(f'<div class="excerpt-block">{excerpt}</div>', unsafe_allow_html=True)

    if st.session_state.report_text:
        st.download_button(
            "📥 Download report",
            data=st.session_state.report_text,
            file_name=SETTINGS.report_file_name,
            mime="text/plain",
        )


def main():
    initialize_app()
    st.title("🔍 Plagiarism Detector")
    directory, threshold, max_excerpts = get_analysis_inputs()

    if not directory:
        st.info("👈 Choose a folder or upload a ZIP file of PDF documents to get started.")
        return

    if st.sidebar.button("🚀 Start analysis", type="primary"):
        run_analysis(directory, threshold, max_excerpts)

    if st.session_state.analysis_outcome is not None:
        display_results(st.session_state.analysis_outcome)


if __name__ == "__main__":
    main()
