"""Render Result Dataclass

Result of composing one document.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RenderResult:
    """Result from DocumentGenerator.finalize().

    A recorded sticky error does not discard what was already drawn: the
    partially rendered document is still returned next to the error.

    Attributes:
        pdf_bytes: The finished PDF, or None if writing the PDF itself failed
        page_count: Number of pages composed
        error: The sticky error of the document (None if composition succeeded)
    """

    pdf_bytes: Optional[bytes]
    page_count: int
    error: Optional[Exception] = None

    @property
    def is_complete(self) -> bool:
        """True if the document was composed and written without any error."""
        return self.error is None and self.pdf_bytes is not None

    @property
    def is_failed(self) -> bool:
        """True if an error was recorded while composing or writing."""
        return self.error is not None

    def write(self, path: str) -> str:
        """Write the PDF bytes to path and return the path."""
        if self.pdf_bytes is None:
            raise ValueError("No PDF output available")
        with open(path, "wb") as f:
            f.write(self.pdf_bytes)
        return path
