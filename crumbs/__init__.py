__version__ = "1.0.0a1.dev0"

from typing import Tuple

from . import hdrs
from .abc import AbstractCookieJar
from .client_middlewares import (
    ClientHandlerType,
    ClientMiddleware,
    build_client_middlewares,
    cookie_middleware,
)
from .cookie import SetCookie, ValidationResult, Validity, parse_set_cookie
from .cookiejar import CookieJar, DummyCookieJar
from .errors import CookieError, InvalidCookieError
from .message import Request, Response

__all__: Tuple[str, ...] = (
    "hdrs",
    # abc
    "AbstractCookieJar",
    # client_middlewares
    "ClientHandlerType",
    "ClientMiddleware",
    "build_client_middlewares",
    "cookie_middleware",
    # cookie
    "SetCookie",
    "ValidationResult",
    "Validity",
    "parse_set_cookie",
    # cookiejar
    "CookieJar",
    "DummyCookieJar",
    # errors
    "CookieError",
    "InvalidCookieError",
    # message
    "Request",
    "Response",
)
