"""Various helper functions"""

import re
import time
from typing import Optional

__all__ = ("is_ip_address", "http_date")


CTL = frozenset(chr(i) for i in range(0, 32)) | {chr(127)}
DELIMITERS = frozenset('()<>@,;:\\"/?={}')


_ipv4_pattern = (
    r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"
)
_ipv6_pattern = (
    r"^(?:(?:(?:[A-F0-9]{1,4}:){6}|(?=(?:[A-F0-9]{0,4}:){0,6}"
    r"(?:[0-9]{1,3}\.){3}[0-9]{1,3}$)(([0-9A-F]{1,4}:){0,5}|:)"
    r"((:[0-9A-F]{1,4}){1,5}:|:)|::(?:[A-F0-9]{1,4}:){5})"
    r"(?:(?:25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9]?[0-9])\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9]?[0-9])|(?:[A-F0-9]{1,4}:){7}"
    r"[A-F0-9]{1,4}|(?=(?:[A-F0-9]{0,4}:){0,7}[A-F0-9]{0,4}$)"
    r"(([0-9A-F]{1,4}:){1,7}|:)((:[0-9A-F]{1,4}){1,7}|:)|(?:[A-F0-9]{1,4}:){7}"
    r":|:(:[A-F0-9]{1,4}){7})$"
)
_ipv4_regex = re.compile(_ipv4_pattern)
_ipv6_regex = re.compile(_ipv6_pattern, flags=re.IGNORECASE)


def is_ip_address(host: Optional[str]) -> bool:
    if host is None:
        return False
    if isinstance(host, str):
        # yarl keeps IPv6 hosts bracketed in some spellings
        host = host.strip("[]")
        return bool(_ipv4_regex.match(host) or _ipv6_regex.match(host))
    else:
        raise TypeError(f"{host} [{type(host)}] is not a str")


def http_date(timestamp: float) -> str:
    """Format a POSIX timestamp as an IMF-fixdate, as used by Expires."""
    # Weekday and month names for HTTP date/time formatting;
    # always English!
    _weekdayname = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
    _monthname = (
        "",  # Dummy so we can use 1-based month numbers
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    )

    year, month, day, hh, mm, ss, wd, _, _ = time.gmtime(timestamp)
    return "%s, %02d %3s %4d %02d:%02d:%02d GMT" % (
        _weekdayname[wd], day, _monthname[month], year, hh, mm, ss,
    )
