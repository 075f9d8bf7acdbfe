"""Client middleware support."""

from collections.abc import Awaitable, Callable

from .abc import AbstractCookieJar
from .message import Request, Response

__all__ = ("ClientHandlerType", "ClientMiddleware", "build_client_middlewares", "cookie_middleware")

ClientHandlerType = Callable[[Request], Awaitable[Response]]
ClientMiddleware = Callable[[Request, ClientHandlerType], Awaitable[Response]]


def cookie_middleware(jar: AbstractCookieJar) -> ClientMiddleware:
    """
    Create a middleware that sends and stores cookies through jar.

    The Cookie header is computed before the request is handed on and the
    response's Set-Cookie lines are extracted before it is returned, so the
    next request through the same jar already sees them.
    """

    async def middleware(request: Request, handler: ClientHandlerType) -> Response:
        response = await handler(jar.with_cookie_header(request))
        jar.extract_cookies(request, response)
        return response

    return middleware


def build_client_middlewares(
    handler: ClientHandlerType,
    middlewares: tuple[ClientMiddleware, ...],
) -> ClientHandlerType:
    """
    Apply middlewares to request handler.

    The middlewares are applied in reverse order, so the first middleware
    in the list wraps all subsequent middlewares and the handler.
    """
    if not middlewares:
        return handler

    # Optimize for single middleware case
    if len(middlewares) == 1:
        middleware = middlewares[0]

        async def single_middleware_handler(req: Request) -> Response:
            return await middleware(req, handler)

        return single_middleware_handler

    current_handler = handler

    for middleware in reversed(middlewares):
        # Create a new closure that captures the current state
        def make_wrapper(
            mw: ClientMiddleware, next_h: ClientHandlerType
        ) -> ClientHandlerType:
            async def wrapped(req: Request) -> Response:
                return await mw(req, next_h)

            return wrapped

        current_handler = make_wrapper(middleware, current_handler)

    return current_handler
