from abc import abstractmethod
from collections.abc import Sized
from typing import TYPE_CHECKING, Iterable, List, Optional

from .typedefs import CookieSnapshot, StrOrURL

if TYPE_CHECKING:  # pragma: no cover
    from .cookie import SetCookie
    from .message import Request, Response

    IterableBase = Iterable[SetCookie]
else:
    IterableBase = Iterable


class AbstractCookieJar(Sized, IterableBase):
    """Abstract Cookie Jar."""

    @abstractmethod
    def set_cookie(self, cookie: "SetCookie") -> bool:
        """Store a cookie, return whether it was stored."""

    @abstractmethod
    def extract_cookies(self, request: "Request", response: "Response") -> None:
        """Store the cookies a response sets for a request."""

    @abstractmethod
    def filter_cookies(
        self, request_url: StrOrURL, *, now: Optional[float] = None
    ) -> List["SetCookie"]:
        """Return the jar's cookies that should be sent to request_url."""

    @abstractmethod
    def with_cookie_header(
        self, request: "Request", *, now: Optional[float] = None
    ) -> "Request":
        """Return request with a Cookie header for the matching cookies."""

    @abstractmethod
    def clear(
        self,
        domain: Optional[str] = None,
        path: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        """Clear cookies, all of them when no filter is given."""

    @abstractmethod
    def clear_session_cookies(self) -> None:
        """Clear cookies without a persistent expiration."""

    @abstractmethod
    def to_list(self) -> CookieSnapshot:
        """Return a snapshot of the stored cookies."""
