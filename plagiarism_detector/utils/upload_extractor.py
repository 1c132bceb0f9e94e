import logging
import shutil
import tempfile
import zipfile
from typing import BinaryIO, Optional, Union

from ..core.validation import FileValidationError

logger = logging.getLogger(__name__)

UPLOAD_DIR_PREFIX = "uploaded_pdfs_"


def extract_zip_upload(zip_file: Union[str, BinaryIO], previous_dir: Optional[str] = None) -> str:
    """
    Unpack an uploaded ZIP archive into a new temporary folder.

    Every upload gets its own folder so that PDFs from an earlier archive are
    never analyzed together with a later one. ``previous_dir`` is removed once
    the new archive has been unpacked.

    Returns:
        Path of the folder holding the archive contents

    Raises:
        FileValidationError: If the upload is not a readable ZIP archive
    """
    upload_dir = tempfile.mkdtemp(prefix=UPLOAD_DIR_PREFIX)
    try:
        with zipfile.ZipFile(zip_file, 'r') as zip_ref:
            zip_ref.extractall(upload_dir)
    except zipfile.BadZipFile as e:
        shutil.rmtree(upload_dir, ignore_errors=True)
        raise FileValidationError(f"Error extracting ZIP file: {e}", field="zip_file") from e

    if previous_dir and previous_dir != upload_dir:
        shutil.rmtree(previous_dir, ignore_errors=True)
        logger.debug(f"Removed previous upload folder {previous_dir}")

    logger.info(f"Extracted upload into {upload_dir}")
    return upload_dir


def upload_key(uploaded_file) -> tuple:
    """Identity of an uploaded file across reruns of the window."""
    file_id = getattr(uploaded_file, "file_id", None)
    if file_id:
        return ("id", file_id)
    return ("name", getattr(uploaded_file, "name", None), getattr(uploaded_file, "size", None))
