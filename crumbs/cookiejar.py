from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import attr
from yarl import URL

from . import hdrs
from ._cookie_helpers import default_cookie_path
from .abc import AbstractCookieJar
from .cookie import SetCookie, Validity, parse_set_cookie
from .errors import InvalidCookieError
from .log import cookie_logger
from .message import Request, Response
from .typedefs import CookieDict, CookieSnapshot, StrOrURL

__all__ = ("CookieJar", "DummyCookieJar")


_CookieKey = Tuple[Any, str, str]


class CookieJar(AbstractCookieJar):
    """Implements cookie storage with RFC 6265 style matching.

    Cookies are kept in insertion order, one per (name, domain, path)
    slot. Replacing a cookie moves it to the end of the order.

    In strict mode a cookie with forbidden characters in its name makes
    set_cookie() raise InvalidCookieError; otherwise it is dropped.
    """

    SECURE_SCHEMES = frozenset(("https", "wss"))

    def __init__(
        self,
        *,
        strict: bool = False,
        cookies: Optional[Iterable[Union[SetCookie, CookieDict]]] = None,
    ) -> None:
        self._strict = strict
        self._cookies: Dict[_CookieKey, SetCookie] = {}
        if cookies is not None:
            for cookie in cookies:
                if not isinstance(cookie, SetCookie):
                    cookie = SetCookie.from_dict(cookie)
                self.set_cookie(cookie)

    @classmethod
    def from_mapping(cls, cookies: Mapping[str, Any], domain: str) -> "CookieJar":
        """Create a jar of session cookies for domain from a name/value map."""
        jar = cls()
        for name, value in cookies.items():
            jar.set_cookie(
                SetCookie(name=name, value=value, domain=domain, path="/", discard=True)
            )
        return jar

    @property
    def strict(self) -> bool:
        return self._strict

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[SetCookie]:
        return iter(list(self._cookies.values()))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {len(self)} cookies strict={self._strict}>"

    def set_cookie(self, cookie: SetCookie) -> bool:
        result = cookie.validate()
        if not result:
            if self._strict and result.status is Validity.INVALID_NAME:
                raise InvalidCookieError(f"Invalid cookie: {result.reason}", cookie)
            cookie_logger.debug(
                "Rejected cookie %r for domain %r: %s",
                cookie.name,
                cookie.domain,
                result.reason,
            )
            self._remove_if_empty(cookie)
            return False

        key = cookie.key
        # Always drop the old entry so a replaced cookie moves to the end
        self._cookies.pop(key, None)
        self._cookies[key] = cookie
        return True

    def _remove_if_empty(self, cookie: SetCookie) -> None:
        """A cookie without a value deletes the one stored in its slot."""
        if cookie.value is None and cookie.name and cookie.domain:
            self._cookies.pop(cookie.key, None)

    def extract_cookies(self, request: Request, response: Response) -> None:
        """Store every acceptable cookie set by response to request."""
        hostname = request.host
        for header in response.set_cookie_headers:
            cookie = parse_set_cookie(header)
            if cookie is None:
                continue

            changes: Dict[str, Any] = {}
            if not cookie.domain:
                changes["domain"] = hostname
            if not cookie.path.startswith("/"):
                changes["path"] = default_cookie_path(request.path)
            if changes:
                cookie = attr.evolve(cookie, **changes)

            if not cookie.matches_domain(hostname):
                # Setting cookies for different domains is not allowed
                cookie_logger.debug(
                    "Ignoring cookie %r: domain %r does not match host %r",
                    cookie.name,
                    cookie.domain,
                    hostname,
                )
                continue

            self.set_cookie(cookie)

    def filter_cookies(
        self, request_url: StrOrURL, *, now: Optional[float] = None
    ) -> List[SetCookie]:
        """Returns this jar's cookies filtered by their attributes."""
        url = URL(request_url)
        hostname = url.host or ""
        path = url.path or "/"
        is_not_secure = url.scheme not in self.SECURE_SCHEMES

        filtered = []
        for cookie in self._cookies.values():
            if is_not_secure and cookie.secure:
                continue
            if cookie.is_expired(now):
                continue
            if not cookie.matches_domain(hostname):
                continue
            if not cookie.matches_path(path):
                continue
            filtered.append(cookie)
        return filtered

    def with_cookie_header(
        self, request: Request, *, now: Optional[float] = None
    ) -> Request:
        cookies = self.filter_cookies(request.url, now=now)
        if not cookies:
            return request
        value = "; ".join(f"{cookie.name}={cookie.value}" for cookie in cookies)
        return request.with_header(hdrs.COOKIE, value)

    def clear(
        self,
        domain: Optional[str] = None,
        path: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        """Remove the cookies that match every given filter.

        domain is domain-matched, path is path-matched and name is
        compared exactly. Without filters the jar is emptied.
        """
        if domain is None and path is None and name is None:
            self._cookies.clear()
            return

        to_del = [
            key
            for key, cookie in self._cookies.items()
            if (domain is None or cookie.matches_domain(domain))
            and (path is None or cookie.matches_path(path))
            and (name is None or cookie.name == name)
        ]
        for key in to_del:
            del self._cookies[key]

    def clear_session_cookies(self) -> None:
        to_del = [
            key
            for key, cookie in self._cookies.items()
            if cookie.discard or cookie.expires is None
        ]
        for key in to_del:
            del self._cookies[key]

    def get_cookie_by_name(self, name: Optional[str]) -> Optional[SetCookie]:
        if not name:
            return None
        for cookie in self._cookies.values():
            if cookie.name == name:
                return cookie
        return None

    def to_list(self) -> CookieSnapshot:
        return [cookie.to_dict() for cookie in self._cookies.values()]

    @staticmethod
    def should_persist(
        cookie: SetCookie,
        allow_session_cookies: bool = False,
        *,
        now: Optional[float] = None,
    ) -> bool:
        """Tell whether a cookie belongs in a persisted snapshot."""
        if cookie.is_expired(now):
            return False
        if allow_session_cookies:
            return True
        return cookie.expires is not None and not cookie.discard


class DummyCookieJar(AbstractCookieJar):
    """Implements a dummy cookie storage.

    It can be used with a client middleware to ignore cookies.
    """

    def __len__(self) -> int:
        return 0

    def __iter__(self) -> Iterator[SetCookie]:
        while False:
            yield None

    def set_cookie(self, cookie: SetCookie) -> bool:
        return False

    def extract_cookies(self, request: Request, response: Response) -> None:
        pass

    def filter_cookies(
        self, request_url: StrOrURL, *, now: Optional[float] = None
    ) -> List[SetCookie]:
        return []

    def with_cookie_header(
        self, request: Request, *, now: Optional[float] = None
    ) -> Request:
        return request

    def clear(
        self,
        domain: Optional[str] = None,
        path: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        pass

    def clear_session_cookies(self) -> None:
        pass

    def to_list(self) -> CookieSnapshot:
        return []
