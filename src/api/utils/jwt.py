from datetime import UTC, datetime, timedelta
from typing import Callable
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel

from src.libs.result import Error, ErrorKind, Result, Return

DEFAULT_SESSION_TTL = timedelta(days=7)


class TokenClaims(BaseModel):
    user_id: UUID
    issued_at: datetime
    expires_at: datetime


def _utc_clock() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Session token issuing and verification

    Tokens carry only the subject and time claims. Role and tenant are
    always re-read from the store, never trusted from the token.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utc_clock,
    ):
        self.secret = secret
        self.ttl = ttl
        self.algorithm = algorithm
        self.clock = clock

    def issue(self, user_id: UUID) -> Result[str]:
        """
        Generate a signed session token

        Args:
            user_id: User UUID

        Returns:
            JWT token string (HS256, expires after the configured TTL)
        """
        if not self.secret:
            return Return.err(
                Error("CONFIG_ERROR", "Token signing secret is not configured", ErrorKind.internal)
            )

        now = self.clock()
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return Return.ok(jwt.encode(payload, self.secret, algorithm=self.algorithm))

    def verify(self, token: str) -> Result[TokenClaims]:
        if not self.secret:
            return Return.err(
                Error("CONFIG_ERROR", "Token signing secret is not configured", ErrorKind.internal)
            )

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired", ErrorKind.unauthorized))
        except JWTError:
            return Return.err(Error("INVALID_TOKEN", "Invalid token", ErrorKind.unauthorized))

        try:
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
            user_id = UUID(str(payload["sub"]))
        except (KeyError, TypeError, ValueError):
            return Return.err(Error("INVALID_TOKEN", "Invalid token", ErrorKind.unauthorized))

        return Return.ok(TokenClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at))
