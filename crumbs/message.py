"""Immutable HTTP request and response messages."""

from typing import Optional, Tuple

import attr
from multidict import CIMultiDict, CIMultiDictProxy
from yarl import URL

from . import hdrs
from .typedefs import LooseHeaders

__all__ = ("Request", "Response")


def _freeze_headers(headers: Optional[LooseHeaders]) -> "CIMultiDictProxy[str]":
    if isinstance(headers, CIMultiDictProxy):
        return headers
    return CIMultiDictProxy(CIMultiDict(headers or ()))


@attr.s(frozen=True, slots=True)
class Request:
    method = attr.ib(type=str)
    url = attr.ib(type=URL, converter=URL)
    headers = attr.ib(
        type=CIMultiDictProxy,
        default=None,
        converter=_freeze_headers,
        repr=False,
    )

    @property
    def host(self) -> str:
        return self.url.host or ""

    @property
    def scheme(self) -> str:
        return self.url.scheme

    @property
    def path(self) -> str:
        return self.url.path

    def header_line(self, name: str) -> str:
        """All values of a header joined with a comma, "" when absent."""
        return ", ".join(self.headers.getall(name, ()))

    def with_header(self, name: str, value: str) -> "Request":
        """Return a copy with every value of header name replaced by value."""
        headers = CIMultiDict(self.headers)
        headers[name] = value
        return attr.evolve(self, headers=headers)


@attr.s(frozen=True, slots=True)
class Response:
    status = attr.ib(type=int)
    headers = attr.ib(
        type=CIMultiDictProxy,
        default=None,
        converter=_freeze_headers,
        repr=False,
    )

    @property
    def set_cookie_headers(self) -> Tuple[str, ...]:
        return tuple(self.headers.getall(hdrs.SET_COOKIE, ()))
