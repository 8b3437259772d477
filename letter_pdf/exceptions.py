"""Custom Exception Hierarchy

Exception hierarchy for letter-pdf providing granular exception types for
configuration, layout, image and rendering failures.

Layout and image errors raised inside placement operations are not propagated
to the caller directly: they are funneled into the document's sticky
ErrorState (see layout/error_state.py) and surfaced by finalize().
"""


class LetterPdfError(Exception):
    """Base exception for all letter-pdf errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all custom exceptions from the letter-pdf package.
    """
    pass


# Validation Errors
class ValidationError(LetterPdfError):
    """Raised when input validation fails."""
    pass


class InvalidConfigurationError(ValidationError):
    """Raised when generator options are invalid."""
    pass


# Layout Errors
class LayoutError(LetterPdfError):
    """Base class for errors raised by placement operations."""
    pass


class RangeError(LayoutError):
    """Raised when a position or geometry lies outside the valid area."""

    def __init__(self, name: str, value: float, lower: float, upper: float):
        self.name = name
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"{name} = {value:f} is out of range [{lower:f}, {upper:f}]"
        )


class InvalidArgumentError(LayoutError):
    """Raised for bad alignment codes, non-positive cell sizes or scales."""
    pass


class DimensionMismatchError(LayoutError):
    """Raised when parallel arrays (cells, widths, alignments) differ in length."""

    def __init__(self, what: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The length of {what} must be equal: expected {expected}, got {actual}"
        )


class LayoutOverflowError(LayoutError):
    """Raised when footer content starts outside the body band of the page."""

    def __init__(self, footer_y: float, lower: float, upper: float):
        self.footer_y = footer_y
        super().__init__(
            f"Footer start y = {footer_y:f} is outside the band ({lower:f}, {upper:f}]"
        )


# Image Errors
class ImageError(LetterPdfError):
    """Base class for image cache errors."""
    pass


class UnsupportedFormatError(ImageError):
    """Raised when a fetched image has a content type other than jpg, png or gif."""

    def __init__(self, identifier: str, content_type: str):
        self.identifier = identifier
        self.content_type = content_type
        super().__init__(
            f"Unsupported image type '{content_type}' for '{identifier}'"
        )


class NotRegisteredError(ImageError):
    """Raised when an image is placed before it was registered."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Image '{identifier}' is not registered")


class ImageFetchError(ImageError):
    """Raised when downloading or decoding an image fails.

    This wraps the underlying exception while preserving the image context.
    """

    def __init__(self, identifier: str, original_exception: Exception):
        self.identifier = identifier
        self.original_exception = original_exception
        super().__init__(
            f"Failed to fetch image '{identifier}': {str(original_exception)}"
        )


# PDF Rendering Errors
class RenderingError(LetterPdfError):
    """Base class for PDF rendering errors."""
    pass


class FontError(RenderingError):
    """Raised when font setup or registration fails."""
    pass


class PdfOutputError(RenderingError):
    """Raised when the recorded pages cannot be written as PDF."""
    pass
