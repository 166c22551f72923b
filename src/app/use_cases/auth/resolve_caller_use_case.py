"""
Resolve Caller Use Case

Turns a session token into the caller it belongs to. Role and tenant come
from the stored user, never from the token.
"""

from typing import Optional

from src.api.utils.jwt import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.tenant_context import Caller
from src.libs.result import Error, ErrorKind, Result, Return


class ResolveCallerUseCase:
    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, token: Optional[str]) -> Result[Caller]:
        if not token:
            return Return.err(
                Error("UNAUTHORIZED", "Not authorized, no token", ErrorKind.unauthorized)
            )

        claims_result = self.token_service.verify(token)
        if claims_result.is_err():
            return Return.err(claims_result.error)

        async with self.uow:
            user = await self.uow.users.get_by_id(claims_result.value.user_id)
            if user is None:
                return Return.err(
                    Error("USER_NOT_FOUND", "Not authorized, user not found", ErrorKind.unauthorized)
                )

            return Return.ok(Caller.from_user(user))
