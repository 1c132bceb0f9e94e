"""
Presentation helpers around the comparison results:
- Text report rendering and writing (report_writer)
- Opening files in the system viewer (file_opener)
- Unpacking uploaded ZIP archives (upload_extractor)
"""

from .report_writer import PlagiarismReportWriter, results_to_dataframe
from .file_opener import open_with_default_app, FileOpenError
from .upload_extractor import extract_zip_upload, upload_key

__all__ = [
    'PlagiarismReportWriter',
    'results_to_dataframe',
    'open_with_default_app',
    'FileOpenError',
    'extract_zip_upload',
    'upload_key'
]
