"""Sticky Error State

One ErrorState exists per document. Placement operations never raise their
layout errors to the caller: the `guarded` decorator funnels them into this
slot so that a long sequence of layout calls can be written without checking
after each one.

strict mode:  the first error is kept and every later guarded call is a no-op.
lenient mode: guarded calls keep executing and the last error wins.
"""
import functools
import logging
from typing import Optional

from ..exceptions import ImageError, LayoutError

logger = logging.getLogger(__name__)


class ErrorState:
    """Single per-document error slot."""

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._error: Optional[Exception] = None

    def ok(self) -> bool:
        """True while no error has been recorded."""
        return self._error is None

    def err(self) -> Optional[Exception]:
        """The recorded error, or None."""
        return self._error

    @property
    def blocked(self) -> bool:
        """True if guarded calls must be skipped."""
        return self.strict and self._error is not None

    def record(self, error: Exception) -> None:
        """
        Store an error in the slot.

        In strict mode an existing error is never overwritten.
        """
        if self.strict and self._error is not None:
            logger.debug(f"Ignoring error after sticky error was set: {error}")
            return
        logger.warning(f"Layout error recorded: {error}")
        self._error = error

    def clear(self) -> None:
        self._error = None


def guarded(method):
    """
    Wrap a placement method of an object exposing an `errors` ErrorState.

    The call is skipped when the state is blocked; LayoutError and ImageError
    raised by the method are recorded instead of propagated. The wrapper
    returns None in both cases.
    """
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self.errors.blocked:
            return None
        try:
            return method(self, *args, **kwargs)
        except (LayoutError, ImageError) as e:
            self.errors.record(e)
            return None
    return wrapper
