"""HTTP Headers constants."""

from typing import Final

from multidict import istr

COOKIE: Final[str] = istr("Cookie")
SET_COOKIE: Final[str] = istr("Set-Cookie")
