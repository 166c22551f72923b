import logging
from typing import Optional

from fastapi import Cookie, Depends, Request
from sqlalchemy.exc import SQLAlchemyError

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, raise_for_error
from src.api.utils.cookies import SESSION_COOKIE_NAME, SessionCookieManager
from src.api.utils.jwt import TokenService
from src.app.services.audit_recorder import IAuditRecorder
from src.app.services.email_sender import IEmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ResolveCallerUseCase
from src.domain.tenant_context import Caller, TenantContext, resolve_tenant_context

logger = logging.getLogger(__name__)


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_config(request: Request):
    return request.app.state.config


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_cookie_manager(request: Request) -> SessionCookieManager:
    return request.app.state.cookie_manager


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_email_sender(request: Request) -> IEmailSender:
    return request.app.state.email_sender


def get_audit_recorder(request: Request) -> IAuditRecorder:
    return request.app.state.audit_recorder


async def get_current_user(
    request: Request,
    token: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
) -> Caller:
    """
    Dependency resolving the caller from the session cookie.

    The token only identifies the user; role and tenant are re-read from
    the store on every request.

    Raises:
        ClientError: 401 if the cookie is missing, invalid, expired, or names
        an unknown user
        ServerError: 500 if tokens cannot be verified (no signing secret)
    """
    result = await ResolveCallerUseCase(uow, token_service).execute(token)
    if result.is_err():
        raise_for_error(result.error)

    request.state.caller = result.value
    return result.value


async def get_optional_user(
    request: Request,
    token: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
) -> Optional[Caller]:
    """Same as get_current_user, but yields None instead of failing"""
    try:
        result = await ResolveCallerUseCase(uow, token_service).execute(token)
    except SQLAlchemyError:
        logger.warning("Optional caller lookup failed", exc_info=True)
        return None
    if result.is_err():
        return None

    request.state.caller = result.value
    return result.value


async def get_tenant_context(
    request: Request, caller: Caller = Depends(get_current_user)
) -> TenantContext:
    result = resolve_tenant_context(caller)
    if result.is_err():
        raise ClientError.from_error(result.error)

    request.state.tenant = result.value
    return result.value
