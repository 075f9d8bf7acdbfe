"""
Internal cookie handling helpers.

This module contains the string level algorithms of RFC 6265 that the
cookie record and the jar are built on: splitting a Set-Cookie line,
parsing cookie dates and matching domains and paths.
These are not part of the public API and may change without notice.
"""

import datetime
import re
from typing import List, Optional, Tuple, Union

from .helpers import CTL, DELIMITERS, is_ip_address

__all__ = (
    "split_set_cookie",
    "parse_cookie_date",
    "default_cookie_path",
    "is_domain_match",
    "is_path_match",
    "has_invalid_name_chars",
)

INVALID_NAME_MESSAGE = (
    "Cookie name must not contain invalid characters: ASCII Control "
    "characters (0-31;127), space, tab and the following characters: "
    '()<>@,;:\\"/?={}'
)

_FORBIDDEN_NAME_CHARS = CTL | DELIMITERS | {" ", "\t"}

DATE_TOKENS_RE = re.compile(
    r"[\x09\x20-\x2F\x3B-\x40\x5B-\x60\x7B-\x7E]*"
    r"(?P<token>[\x00-\x08\x0A-\x1F\d:a-zA-Z\x7F-\xFF]+)"
)

DATE_HMS_TIME_RE = re.compile(r"(\d{1,2}):(\d{1,2}):(\d{1,2})")

DATE_DAY_OF_MONTH_RE = re.compile(r"(\d{1,2})(?!\d)")

DATE_MONTH_RE = re.compile(
    "(jan)|(feb)|(mar)|(apr)|(may)|(jun)|(jul)|(aug)|(sep)|(oct)|(nov)|(dec)",
    re.I,
)

DATE_YEAR_RE = re.compile(r"(\d{2,4})(?!\d)")

# Attribute value as found on the wire; flags without "=" are True.
AttrValue = Union[str, bool]


def split_set_cookie(
    header: str,
) -> Optional[Tuple[str, str, List[Tuple[str, AttrValue]]]]:
    """Split one Set-Cookie line into name, value and raw attributes.

    Returns None when the line does not start with a name=value pair.
    Attribute names keep their original spelling; callers compare them
    case-insensitively.
    """
    pieces = [piece.strip() for piece in header.split(";")]
    if not pieces or "=" not in pieces[0]:
        return None

    name, _, value = pieces[0].partition("=")
    attrs: List[Tuple[str, AttrValue]] = []
    for piece in pieces[1:]:
        key, sep, attr_value = piece.partition("=")
        key = key.strip()
        if not key:
            continue
        attrs.append((key, attr_value.strip() if sep else True))
    return name.strip(), value.strip(), attrs


def parse_cookie_date(date_str: Optional[str]) -> Optional[int]:
    """Implements date string parsing adhering to RFC 6265.

    Returns a POSIX timestamp, or None for anything that is not a date.
    """
    if not date_str:
        return None

    found_time = False
    found_day_of_month = False
    found_month = False
    found_year = False

    hour = minute = second = 0
    day_of_month = 0
    month = 0
    year = 0

    for token_match in DATE_TOKENS_RE.finditer(date_str):

        token = token_match.group("token")

        if not found_time:
            time_match = DATE_HMS_TIME_RE.match(token)
            if time_match:
                found_time = True
                hour, minute, second = (int(s) for s in time_match.groups())
                continue

        if not found_day_of_month:
            day_of_month_match = DATE_DAY_OF_MONTH_RE.match(token)
            if day_of_month_match:
                found_day_of_month = True
                day_of_month = int(day_of_month_match.group(1))
                continue

        if not found_month:
            month_match = DATE_MONTH_RE.match(token)
            if month_match:
                found_month = True
                assert month_match.lastindex is not None
                month = month_match.lastindex
                continue

        if not found_year:
            year_match = DATE_YEAR_RE.match(token)
            if year_match:
                found_year = True
                year = int(year_match.group(1))

    if 70 <= year <= 99:
        year += 1900
    elif 0 <= year <= 69:
        year += 2000

    if False in (found_day_of_month, found_month, found_year, found_time):
        return None

    if not 1 <= day_of_month <= 31:
        return None

    if year < 1601 or hour > 23 or minute > 59 or second > 59:
        return None

    try:
        dt = datetime.datetime(
            year, month, day_of_month, hour, minute, second,
            tzinfo=datetime.timezone.utc,
        )
    except ValueError:
        # Feb 30 and friends
        return None
    return int(dt.timestamp())


def default_cookie_path(request_path: str) -> str:
    """Derive the path of a cookie that came without a usable Path.

    Everything from the last slash onwards is cut off; anything that
    does not leave an absolute path falls back to "/".
    """
    if not request_path.startswith("/"):
        return "/"
    last_slash = request_path.rfind("/")
    if last_slash <= 0:
        return "/"
    return request_path[:last_slash]


def is_domain_match(domain: str, hostname: str) -> bool:
    """Permissive suffix domain matching.

    There is no public suffix awareness here: a cookie for example.com
    matches every host below it. A leading dot on the cookie domain is
    ignored and the comparison is case-insensitive.
    """
    domain = domain.lstrip(".").lower()
    hostname = hostname.lower()
    if not domain or not hostname:
        return False

    if hostname == domain:
        return True

    if is_ip_address(hostname):
        return False

    return hostname.endswith("." + domain)


def is_path_match(req_path: str, cookie_path: str) -> bool:
    """Implements path matching adhering to RFC 6265."""
    if not req_path.startswith("/"):
        req_path = "/"

    if cookie_path == "/" or req_path == cookie_path:
        return True

    if not req_path.startswith(cookie_path):
        return False

    if cookie_path.endswith("/"):
        return True

    non_matching = req_path[len(cookie_path):]

    return non_matching.startswith("/")


def has_invalid_name_chars(name: str) -> bool:
    return any(ch in _FORBIDDEN_NAME_CHARS for ch in name)
