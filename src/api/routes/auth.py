from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.api.utils.audit import record_audit_now, schedule_audit
from src.api.utils.cookies import SessionCookieManager
from src.api.utils.jwt import TokenService
from src.api.utils.limiter import rate_limited
from src.app.services.audit_recorder import AuditActor, IAuditRecorder
from src.app.services.email_sender import IEmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    ConfirmPasswordResetUseCase,
    GetMeUseCase,
    LoginUseCase,
    MessageResponse,
    RequestPasswordResetUseCase,
    SignupCommand,
    SignupUseCase,
)
from src.depends import (
    get_audit_recorder,
    get_config,
    get_cookie_manager,
    get_current_user,
    get_email_sender,
    get_optional_user,
    get_password_hasher,
    get_token_service,
    get_unit_of_work,
)
from src.domain.entities import AuditAction, AuditResource
from src.domain.tenant_context import Caller

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="User password (min 6 chars)")
    organization_name: str = Field(
        ..., min_length=2, max_length=100, description="Organization name"
    )


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    dependencies=[Depends(rate_limited("signup"))],
)
async def signup(
    request: Request,
    response: Response,
    payload: SignupRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
    cookies: SessionCookieManager = Depends(get_cookie_manager),
    audit: IAuditRecorder = Depends(get_audit_recorder),
):
    """
    Register a new organization and its owner, and sign the owner in.

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = SignupCommand(
        email=payload.email,
        password=payload.password,
        organization_name=payload.organization_name,
    )
    result = await SignupUseCase(uow, hasher, token_service).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    session = result.value
    cookies.set(response, session.token)

    user = session.body.user
    schedule_audit(
        background_tasks,
        audit,
        request,
        AuditActor(
            user_id=user.id,
            tenant_id=user.tenant_id,
            organization_id=user.organization_id,
        ),
        AuditAction.signup,
        AuditResource.auth,
        resource_id=user.id,
        details={"email": user.email},
    )
    return session.body


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    dependencies=[Depends(rate_limited("login"))],
)
async def login(
    request: Request,
    response: Response,
    payload: LoginRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
    cookies: SessionCookieManager = Depends(get_cookie_manager),
    audit: IAuditRecorder = Depends(get_audit_recorder),
):
    """
    Raises:
        - 401 Unauthorized: Invalid credentials
    """
    result = await LoginUseCase(uow, hasher, token_service).execute(
        payload.email, payload.password
    )
    if result.is_err():
        await record_audit_now(
            audit,
            request,
            None,
            AuditAction.login_failure,
            AuditResource.auth,
            details={"email": payload.email},
        )
        raise_for_error(result.error)

    session = result.value
    cookies.set(response, session.token)

    user = session.body.user
    schedule_audit(
        background_tasks,
        audit,
        request,
        AuditActor(
            user_id=user.id,
            tenant_id=user.tenant_id,
            organization_id=user.organization_id,
        ),
        AuditAction.login_success,
        AuditResource.auth,
        resource_id=user.id,
    )
    return session.body


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    caller: Optional[Caller] = Depends(get_optional_user),
    cookies: SessionCookieManager = Depends(get_cookie_manager),
    audit: IAuditRecorder = Depends(get_audit_recorder),
):
    """Clear the session cookie; works with or without a valid session"""
    cookies.clear(response)

    if caller is not None:
        schedule_audit(
            background_tasks,
            audit,
            request,
            AuditActor.from_caller(caller),
            AuditAction.logout,
            AuditResource.auth,
            resource_id=str(caller.id),
        )
    return MessageResponse(message="Logged out successfully")


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def me(
    caller: Caller = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetMeUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    dependencies=[Depends(rate_limited("forgot-password"))],
)
async def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    email_sender: IEmailSender = Depends(get_email_sender),
    audit: IAuditRecorder = Depends(get_audit_recorder),
    config=Depends(get_config),
):
    """
    Request Password Reset

    Security:
        - No email enumeration (same response for known and unknown emails)
    """
    result = await RequestPasswordResetUseCase(
        uow, hasher, email_sender, config.FRONTEND_URL
    ).execute(payload.email)
    if result.is_err():
        raise_for_error(result.error)

    schedule_audit(
        background_tasks,
        audit,
        request,
        None,
        AuditAction.password_reset_request,
        AuditResource.auth,
        details={"email": payload.email},
    )
    return result.value


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=6, description="New password (min 6 chars)")


@router.post(
    "/reset-password/{token}",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    dependencies=[Depends(rate_limited("reset-password"))],
)
async def reset_password(
    request: Request,
    response: Response,
    token: str,
    payload: ResetPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
    cookies: SessionCookieManager = Depends(get_cookie_manager),
    audit: IAuditRecorder = Depends(get_audit_recorder),
):
    """
    Confirm Password Reset

    Raises:
        - 404 Not Found: Unknown, expired or already used token
    """
    result = await ConfirmPasswordResetUseCase(uow, hasher, token_service).execute(
        token, payload.password
    )
    if result.is_err():
        raise_for_error(result.error)

    session = result.value
    cookies.set(response, session.token)

    user = session.body.user
    schedule_audit(
        background_tasks,
        audit,
        request,
        AuditActor(
            user_id=user.id,
            tenant_id=user.tenant_id,
            organization_id=user.organization_id,
        ),
        AuditAction.password_reset_success,
        AuditResource.auth,
        resource_id=user.id,
    )
    return session.body
