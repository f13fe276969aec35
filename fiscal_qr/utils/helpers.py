"""
Helper Utilities Module.

Small filesystem, naming and clock helpers shared by the pipeline, the
assembler and the CLI, plus the lock that serialises PyMuPDF access.
"""

import re
import threading
from datetime import datetime
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

# PyMuPDF is not thread-safe; every fitz call in the package holds this lock
PYMUPDF_LOCK = threading.RLock()

# Reserved on Windows, or control characters
_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def ensure_directory(path: PathLike) -> Path:
    """Create path (and parents) when missing; return it as a Path."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_file_extension(filepath: PathLike) -> str:
    """
    Lowercase suffix with its dot, '' when there is none.

    Example:
        >>> get_file_extension("FATURA.PDF")
        '.pdf'
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """Current local time rendered with strftime."""
    return datetime.now().strftime(format_str)


def safe_filename(filename: str, replacement: str = "_") -> str:
    """
    Make a filename safe to write on any common filesystem.

    Example:
        >>> safe_filename("fatura:17/2025.pdf")
        'fatura_17_2025.pdf'
    """
    cleaned = _UNSAFE_FILENAME_CHARS.sub(replacement, filename).strip('. ')
    return cleaned or "unnamed"
