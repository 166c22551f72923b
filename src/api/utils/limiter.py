"""
slowapi rate limiting for the public authentication endpoints.

create_app builds one Limiter per application and keeps it on app.state;
routes opt in with Depends(rate_limited("<scope>")). The limit string is read
from the application's config on each hit, so two apps in one process never
share counters or settings.
"""

from fastapi import Request
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.api.error import ClientError
from src.libs.result import Error, ErrorKind


def build_limiter(enabled: bool) -> Limiter:
    return Limiter(key_func=get_remote_address, storage_uri="memory://", enabled=enabled)


def rate_limited(scope: str):
    """
    Dependency factory consuming one hit of AUTH_RATE_LIMIT per client address.

    Each scope (signup, login, ...) counts separately.
    """

    def dependency(request: Request) -> None:
        limiter: Limiter = request.app.state.limiter
        if not limiter.enabled:
            return

        item = parse(request.app.state.config.AUTH_RATE_LIMIT)
        if not limiter.limiter.hit(item, scope, get_remote_address(request)):
            raise ClientError.from_error(
                Error(
                    "TOO_MANY_REQUESTS",
                    "Too many attempts, please try again later",
                    ErrorKind.too_many_requests,
                )
            )

    return dependency
