"""Reading and atomically writing document files."""

import errno
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


def read_file(filename: str) -> str:
    """Return the UTF-8 contents of a file.

    Raises:
        FileNotFoundError: If the file does not exist
        OSError, UnicodeDecodeError: If it cannot be read as text
    """
    with open(filename, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def write_file_atomic(filename: str, content: str) -> int:
    """Write content to a file atomically.

    The text goes to a temporary file in the target's directory, which is
    then renamed over the target, so a failed save never leaves a truncated
    file behind.

    Returns:
        Number of bytes written

    Raises:
        OSError: If the file cannot be written; the temp file is removed
    """
    data = content.encode('utf-8')
    # Same directory as the target so the rename stays on one filesystem
    dir_name = os.path.dirname(filename) or '.'
    suffix = os.path.splitext(filename)[1]
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name, suffix=suffix,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_filename, filename)
    except OSError:
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as cleanup_error:
                logger.warning(f"Could not remove temp file {temp_filename}: {cleanup_error}")
        raise
    logger.info(f"Wrote {len(data)} bytes to {filename}")
    return len(data)


def describe_save_error(filename: str, error: OSError) -> str:
    """Human-readable message for a failed save."""
    if isinstance(error, PermissionError):
        return f"Error: Permission denied saving {filename}"
    if error.errno == errno.ENOSPC:
        return "Error: No space left on device"
    return f"Error: Cannot save to {filename}"
