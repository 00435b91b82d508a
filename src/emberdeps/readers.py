"""
File reader for script and template sources.

Reads text with an encoding fallback (UTF-8 with any byte order mark
stripped, then latin-1) and returns None for missing or inaccessible files.
"""
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Exceptions that indicate file access problems (not encoding issues)
_FILE_ACCESS_ERRORS = (FileNotFoundError, PermissionError, IsADirectoryError)

# utf-8-sig drops a leading BOM, which esprima would reject as a stray character.
# latin-1 decodes any byte sequence, so it always comes last.
_SOURCE_ENCODINGS = ('utf-8-sig', 'latin-1')


def read_file_safe(filepath: Path | str) -> Optional[str]:
    """
    Read a script or template file and return its contents.

    Args:
        filepath: Path to file (string or Path object)

    Returns:
        File contents as string, or None if file can't be read
    """
    path = Path(filepath)
    for encoding in _SOURCE_ENCODINGS:
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            logger.debug("%s decode failed for %s", encoding, path)
        except _FILE_ACCESS_ERRORS as e:
            logger.warning("%s: %s", type(e).__name__, path)
            return None

    logger.warning("All encodings failed for %s", path)
    return None
