from datetime import UTC, datetime, timedelta

from fastapi import Response

SESSION_COOKIE_NAME = "token"
DEFAULT_MAX_AGE = timedelta(days=7)


class SessionCookieManager:
    """Writes and clears the HttpOnly session cookie"""

    def __init__(self, production: bool, max_age: timedelta = DEFAULT_MAX_AGE):
        self.production = production
        self.max_age = max_age

    @property
    def samesite(self) -> str:
        # Cross-site frontend in production needs SameSite=None, which browsers only accept with Secure
        return "none" if self.production else "lax"

    def set(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=token,
            max_age=int(self.max_age.total_seconds()),
            path="/",
            secure=self.production,
            httponly=True,
            samesite=self.samesite,
        )

    def clear(self, response: Response) -> None:
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value="",
            max_age=0,
            expires=datetime(1970, 1, 1, tzinfo=UTC),
            path="/",
            secure=self.production,
            httponly=True,
            samesite=self.samesite,
        )
