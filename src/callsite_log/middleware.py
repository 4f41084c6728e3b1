from typing import TYPE_CHECKING, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

from callsite_log.facility import LogFacility, get_log


class LogHelperMiddleware(BaseHTTPMiddleware):  # type: ignore[misc]
    """Expose the log facility to handlers as ``request.state.log``.

    Each completed request is also logged at info level as
    ``<METHOD> <path> <status>``.
    """

    def __init__(self, app: ASGIApp, facility: Optional[LogFacility] = None) -> None:
        super().__init__(app)
        self._facility = facility

    async def dispatch(
        self,
        request: Request,
        call_next: "Callable[[Request], Awaitable[Response]]",
    ) -> Response:
        log = self._facility or get_log()
        request.state.log = log
        response = await call_next(request)
        log.info(f"{request.method} {request.url.path} {response.status_code}")
        return response


def request_log(request: Request) -> LogFacility:
    """Facility attached to ``request``, or the process-wide one."""
    return getattr(request.state, "log", None) or get_log()
