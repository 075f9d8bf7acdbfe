from collections.abc import Iterable, Mapping
from typing import Any

from multidict import CIMultiDict, CIMultiDictProxy, MultiDict, MultiDictProxy, istr
from yarl import URL

LooseHeaders = (
    Mapping[str, str]
    | Mapping[istr, str]
    | CIMultiDict[str]
    | CIMultiDictProxy[str]
    | MultiDict[str]
    | MultiDictProxy[str]
    | Iterable[tuple[str | istr, str]]
)
StrOrURL = str | URL

# One entry of a jar snapshot: Name, Value, Domain, Path, Max-Age,
# Expires, Discard, Secure, HttpOnly and any extra attributes.
CookieDict = Mapping[str, Any]
CookieSnapshot = list[dict[str, Any]]
