"""Cookie related errors."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .cookie import SetCookie

__all__ = ("CookieError", "InvalidCookieError")


class CookieError(Exception):
    """Base class for cookie errors."""


class InvalidCookieError(CookieError, ValueError):
    """A cookie failed validation in strict mode.

    cookie: the rejected SetCookie instance
    """

    def __init__(self, message: str, cookie: Optional["SetCookie"] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cookie = cookie
