"""Image Cache Module

Fetches images by URL, registers them once per document and places them
at the cursor.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import requests

from ..config import DEFAULT_IMAGE_TIMEOUT, IMAGE_MIME_TYPES
from ..exceptions import (
    ImageFetchError,
    InvalidArgumentError,
    NotRegisteredError,
    UnsupportedFormatError,
)
from .error_state import guarded

logger = logging.getLogger(__name__)


@dataclass
class RegisteredImage:
    """A decoded image and its natural size in the document unit."""

    identifier: str
    handle: object
    natural_width: float
    natural_height: float
    mime_kind: str


class ImageCache:
    """Per-document registry of fetched images.

    Each identifier is fetched and decoded at most once. The HTTP session
    can be injected (tests pass a mock).

    Attributes:
        images: Registered images by identifier
    """

    def __init__(self, canvas, layout, errors, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_IMAGE_TIMEOUT):
        self.canvas = canvas
        self.layout = layout
        self.errors = errors
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.images: Dict[str, RegisteredImage] = {}

    def close(self):
        """Close the HTTP session if the cache created it; injected sessions stay open."""
        if self._owns_session:
            self.session.close()
            logger.debug("Closed image download session")

    def is_registered(self, identifier: str) -> bool:
        return identifier in self.images

    @guarded
    def register(self, identifier: str) -> RegisteredImage:
        """
        Fetch, decode and register an image.

        Returns the cached entry if identifier was registered before.

        Raises:
            UnsupportedFormatError: If the content type is not jpg, png or gif
            ImageFetchError: If the download or decoding fails
        """
        if identifier in self.images:
            return self.images[identifier]

        logger.debug(f"Fetching image {identifier}")
        try:
            response = self.session.get(identifier, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImageFetchError(identifier, e)

        content_type = response.headers.get("Content-Type", "")
        mime_type = content_type.split(";")[0].strip().lower()
        if mime_type not in IMAGE_MIME_TYPES:
            raise UnsupportedFormatError(identifier, content_type)

        try:
            handle, width, height = self.canvas.decode_image(response.content)
        except (OSError, ValueError) as e:
            raise ImageFetchError(identifier, e)

        image = RegisteredImage(identifier, handle, width, height, IMAGE_MIME_TYPES[mime_type])
        self.images[identifier] = image
        logger.debug(f"Registered image {identifier} ({image.mime_kind}, {width:.2f} x {height:.2f})")
        return image

    def extent(self, identifier: str) -> Tuple[float, float]:
        """
        Natural width and height of a registered image.

        Raises:
            NotRegisteredError: If identifier was never registered
        """
        if identifier not in self.images:
            raise NotRegisteredError(identifier)
        image = self.images[identifier]
        return image.natural_width, image.natural_height

    @guarded
    def place(self, identifier: str, align: str = "L", scale: float = 1.0):
        """
        Draw a registered image at the cursor, scaled from its natural size.

        The top edge is at the cursor y. "L" starts the image at the cursor
        x, "R" ends it there and "C" centers it. The cursor does not move.

        Raises:
            NotRegisteredError: If identifier was never registered
            InvalidArgumentError: If scale <= 0 or align is unknown
        """
        if identifier not in self.images:
            raise NotRegisteredError(identifier)
        if scale <= 0:
            raise InvalidArgumentError(f"The image scale must be greater than 0, got {scale}")

        image = self.images[identifier]
        width = image.natural_width * scale
        height = image.natural_height * scale

        x, y = self.layout.get_cursor()
        if align == "R":
            x -= width
        elif align == "C":
            x -= width / 2
        elif align != "L":
            raise InvalidArgumentError(f"\"{align}\" is not a valid align of \"L\", \"R\" or \"C\"")

        self.canvas.image(identifier, image.handle, x, y, width, height)
