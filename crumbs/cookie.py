"""Cookie record: one cookie as announced by a Set-Cookie header."""

import enum
import re
import time
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import attr

from ._cookie_helpers import (
    INVALID_NAME_MESSAGE,
    has_invalid_name_chars,
    is_domain_match,
    is_path_match,
    parse_cookie_date,
    split_set_cookie,
)
from .helpers import http_date
from .log import internal_logger
from .typedefs import CookieDict

__all__ = ("SetCookie", "ValidationResult", "Validity", "parse_set_cookie")


_INT_RE = re.compile(r"^-?\d+$")

# Snapshot keys, in snapshot order.
NAME = "Name"
VALUE = "Value"
DOMAIN = "Domain"
PATH = "Path"
MAX_AGE = "Max-Age"
EXPIRES = "Expires"
DISCARD = "Discard"
SECURE = "Secure"
HTTP_ONLY = "HttpOnly"

_KNOWN_KEYS = (NAME, VALUE, DOMAIN, PATH, MAX_AGE, EXPIRES, DISCARD, SECURE, HTTP_ONLY)
_KNOWN_ATTRS = {key.lower(): key for key in _KNOWN_KEYS[2:]}
_RESERVED_ATTRS = frozenset(key.lower() for key in _KNOWN_KEYS[:2])
_FLAG_ATTRS = frozenset((DISCARD, SECURE, HTTP_ONLY))

# 9999-12-31 23:59:59 UTC, the last second an Expires date can name
_MAX_EXPIRES = 253402300799


class Validity(enum.Enum):
    VALID = "valid"
    # missing or empty name, value or domain; always rejected silently
    INCOMPLETE = "incomplete"
    # forbidden characters in the name; raises in strict mode
    INVALID_NAME = "invalid-name"


@attr.s(frozen=True, slots=True)
class ValidationResult:
    status = attr.ib(type=Validity)
    reason = attr.ib(type=str, default="")

    def __bool__(self) -> bool:
        return self.status is Validity.VALID


_VALID = ValidationResult(Validity.VALID)


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and _INT_RE.match(value.strip()):
        return int(value.strip())
    return None


def _to_timestamp(value: Any) -> Optional[int]:
    stamp = _to_int(value)
    if stamp is not None:
        return stamp
    if isinstance(value, str):
        return parse_cookie_date(value)
    return None


def _now(now: Optional[float]) -> int:
    return int(time.time() if now is None else now)


def _clamp_expires(expires: Optional[int]) -> Optional[int]:
    if expires is None:
        return None
    return min(max(expires, 0), _MAX_EXPIRES)


def _freeze_extras(extras: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType({k: v for k, v in extras.items() if k not in _KNOWN_KEYS})


def _default_discard(cookie: "SetCookie") -> bool:
    return cookie.expires is None and cookie.max_age is None


@attr.s(frozen=True, slots=True)
class SetCookie:
    """A single cookie and its attributes.

    Instances are immutable; use attr.evolve() to derive a changed copy.
    ``value`` may be any scalar, None means "no value was given".
    """

    name = attr.ib(type=Any)
    value = attr.ib(type=Any, default=None)
    domain = attr.ib(type=Optional[str], default=None)
    path = attr.ib(type=str, default="/")
    max_age = attr.ib(type=Optional[int], default=None)
    expires = attr.ib(type=Optional[int], default=None)
    # session cookie unless something expires it
    discard = attr.ib(
        type=bool, default=attr.Factory(_default_discard, takes_self=True)
    )
    secure = attr.ib(type=bool, default=False)
    http_only = attr.ib(type=bool, default=False)
    # unknown attributes; names of the fields above are dropped
    extras = attr.ib(
        type=Mapping[str, Any],
        factory=dict,
        converter=_freeze_extras,
        eq=False,
    )

    @classmethod
    def from_dict(cls, data: CookieDict, *, now: Optional[float] = None) -> "SetCookie":
        """Build a cookie from a snapshot style mapping.

        Expires may be a timestamp or an HTTP date. Without Expires a
        Max-Age is turned into an absolute expiration; without Discard
        the cookie is a session cookie exactly when nothing expires it.
        """
        max_age = _to_int(data.get(MAX_AGE))
        expires = _to_timestamp(data.get(EXPIRES))
        if expires is None and max_age is not None:
            expires = _now(now) + max_age
        expires = _clamp_expires(expires)

        discard = data.get(DISCARD)
        if discard is None:
            discard = expires is None

        path = data.get(PATH)
        return cls(
            name=data.get(NAME),
            value=data.get(VALUE),
            domain=data.get(DOMAIN),
            path="/" if path is None else str(path),
            max_age=max_age,
            expires=expires,
            discard=bool(discard),
            secure=bool(data.get(SECURE, False)),
            http_only=bool(data.get(HTTP_ONLY, False)),
            extras={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    @classmethod
    def from_string(cls, header: str, *, now: Optional[float] = None) -> Optional["SetCookie"]:
        return parse_set_cookie(header, now=now)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            NAME: self.name,
            VALUE: self.value,
            DOMAIN: self.domain,
            PATH: self.path,
            MAX_AGE: self.max_age,
            EXPIRES: self.expires,
            DISCARD: self.discard,
            SECURE: self.secure,
            HTTP_ONLY: self.http_only,
        }
        data.update(self.extras)
        return data

    @property
    def key(self) -> Tuple[Any, str, str]:
        """Storage slot of the cookie: name, case-folded domain and path."""
        return self.name, (self.domain or "").lower(), self.path

    def validate(self) -> ValidationResult:
        name = self.name
        if name is None or isinstance(name, bool) or name == "":
            return ValidationResult(
                Validity.INCOMPLETE, "The cookie name must not be empty"
            )
        name = str(name)
        if has_invalid_name_chars(name):
            return ValidationResult(Validity.INVALID_NAME, INVALID_NAME_MESSAGE)
        # 0 and "" are fine, only a missing value is not
        if self.value is None:
            return ValidationResult(
                Validity.INCOMPLETE, "The cookie value must not be empty"
            )
        if self.domain is None or self.domain == "":
            return ValidationResult(
                Validity.INCOMPLETE, "The cookie domain must not be empty"
            )
        return _VALID

    def is_expired(self, now: Optional[float] = None) -> bool:
        return self.expires is not None and _now(now) > self.expires

    def matches_domain(self, hostname: str) -> bool:
        if self.domain is None:
            return False
        return is_domain_match(self.domain, hostname)

    def matches_path(self, request_path: str) -> bool:
        return is_path_match(request_path, self.path)

    def __str__(self) -> str:
        value = "" if self.value is None else self.value
        parts = [f"{self.name}={value}"]
        if self.domain is not None:
            parts.append(f"Domain={self.domain}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.expires is not None:
            parts.append(f"Expires={http_date(self.expires)}")
        if self.secure:
            parts.append(SECURE)
        if self.discard:
            parts.append(DISCARD)
        if self.http_only:
            parts.append(HTTP_ONLY)
        for key, extra in self.extras.items():
            if extra is True:
                parts.append(key)
            elif extra is not None and extra is not False:
                parts.append(f"{key}={extra}")
        return "; ".join(parts)


def parse_set_cookie(header: str, *, now: Optional[float] = None) -> Optional[SetCookie]:
    """Parse a raw Set-Cookie header line.

    Returns None for lines that carry no name=value pair. Domain and
    path are left as sent; filling in defaults is the jar's business.
    Max-Age wins over Expires, and bad values for either are dropped.
    """
    parts = split_set_cookie(header)
    if parts is None:
        internal_logger.debug("Skipping malformed Set-Cookie line %r", header)
        return None

    name, value, attrs = parts
    data: Dict[str, Any] = {NAME: name, VALUE: value}
    extras: Dict[str, Any] = {}
    for raw_key, raw_value in attrs:
        if raw_key.lower() in _RESERVED_ATTRS:
            internal_logger.debug(
                "Ignoring reserved attribute %r of cookie %r", raw_key, name
            )
            continue
        key = _KNOWN_ATTRS.get(raw_key.lower())
        if key is None:
            extras[raw_key] = raw_value
        elif key in _FLAG_ATTRS:
            data[key] = True
        elif raw_value is not True:
            data[key] = raw_value

    max_age = _to_int(data.get(MAX_AGE))
    expires: Optional[int] = None
    if max_age is not None:
        expires = _clamp_expires(_now(now) + max_age)
    elif EXPIRES in data:
        expires = parse_cookie_date(data[EXPIRES])
        if expires is None:
            internal_logger.debug(
                "Dropping unparseable Expires %r of cookie %r", data[EXPIRES], name
            )

    return SetCookie(
        name=name,
        value=value,
        domain=data.get(DOMAIN) or None,
        path=data.get(PATH, ""),
        max_age=max_age,
        expires=expires,
        discard=bool(data.get(DISCARD, False)) or expires is None,
        secure=bool(data.get(SECURE, False)),
        http_only=bool(data.get(HTTP_ONLY, False)),
        extras=extras,
    )
