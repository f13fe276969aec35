"""
Document Input Data Class.

A named byte stream handed to the pipeline by whatever enumerates the
source files. The filename's extension decides the extraction path.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from fiscal_qr.utils.helpers import get_file_extension


@dataclass(frozen=True)
class DocumentInput:
    """
    One input document.

    Attributes:
        file_name: Original filename (extension-significant)
        content: Raw file bytes
    """
    file_name: str
    content: bytes

    @property
    def extension(self) -> str:
        """Lowercase extension including the dot (e.g. '.pdf')."""
        return get_file_extension(self.file_name)

    @classmethod
    def from_path(cls, filepath: Union[str, Path]) -> 'DocumentInput':
        """Read a file from disk into a DocumentInput."""
        path = Path(filepath)
        return cls(file_name=path.name, content=path.read_bytes())

    def __repr__(self) -> str:
        return f"DocumentInput('{self.file_name}', {len(self.content)} bytes)"
