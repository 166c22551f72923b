from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.api.utils.audit import schedule_audit
from src.api.utils.cookies import SessionCookieManager
from src.api.utils.jwt import TokenService
from src.api.utils.rbac import require_admin
from src.app.services.audit_recorder import AuditActor, IAuditRecorder
from src.app.services.email_sender import IEmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthResponse
from src.app.use_cases.invitations import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreatedInvitation,
    CreateInvitationCommand,
    CreateInvitationUseCase,
    InvitationInfo,
    InvitationList,
    ListInvitationsUseCase,
    RejectInvitationUseCase,
)
from src.depends import (
    get_audit_recorder,
    get_config,
    get_cookie_manager,
    get_email_sender,
    get_password_hasher,
    get_token_service,
    get_unit_of_work,
)
from src.domain.entities import AuditAction, AuditResource, UserRole
from src.domain.tenant_context import TenantContext

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class CreateInvitationRequest(BaseModel):
    """Role defaults to member; scope always comes from the caller"""

    email: EmailStr = Field(..., description="Invitee email address")
    role: UserRole = Field(UserRole.member, description="admin or member")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreatedInvitation)
async def create_invitation(
    request: Request,
    payload: CreateInvitationRequest,
    background_tasks: BackgroundTasks,
    context: TenantContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    audit: IAuditRecorder = Depends(get_audit_recorder),
    config=Depends(get_config),
):
    """
    Invite a user to the caller's organization (owner/admin).

    Raises:
        - 400 Bad Request: Inviting as owner
        - 409 Conflict: Already a member, or a pending invitation exists
    """
    command = CreateInvitationCommand(email=payload.email, role=payload.role)
    result = await CreateInvitationUseCase(uow, email_sender, config.FRONTEND_URL).execute(
        context, command
    )
    if result.is_err():
        raise_for_error(result.error)

    invitation = result.value.invitation
    schedule_audit(
        background_tasks,
        audit,
        request,
        AuditActor.from_context(context),
        AuditAction.invitation_sent,
        AuditResource.invitation,
        resource_id=invitation.id,
        details={"email": invitation.email, "role": invitation.role},
    )
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=InvitationList)
async def list_invitations(
    context: TenantContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListInvitationsUseCase(uow).execute(context)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class AcceptInvitationRequest(BaseModel):
    password: Optional[str] = Field(None, description="Password for the new account")


@router.post("/{token}/accept", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def accept_invitation(
    request: Request,
    response: Response,
    token: str,
    payload: AcceptInvitationRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
    cookies: SessionCookieManager = Depends(get_cookie_manager),
    audit: IAuditRecorder = Depends(get_audit_recorder),
):
    """
    Accept an invitation, creating the account and signing it in.

    Raises:
        - 404 Not Found: Unknown token
        - 400 Bad Request: Expired invitation or missing password
        - 409 Conflict: Already resolved, or email already registered
    """
    result = await AcceptInvitationUseCase(uow, hasher, token_service).execute(
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
        AuditAction.invitation_accepted,
        AuditResource.invitation,
        details={"email": user.email, "role": user.role},
    )
    return session.body


@router.post("/{token}/reject", status_code=status.HTTP_200_OK, response_model=InvitationInfo)
async def reject_invitation(
    request: Request,
    token: str,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: IAuditRecorder = Depends(get_audit_recorder),
):
    result = await RejectInvitationUseCase(uow).execute(token)
    if result.is_err():
        raise_for_error(result.error)

    invitation = result.value
    schedule_audit(
        background_tasks,
        audit,
        request,
        None,
        AuditAction.invitation_rejected,
        AuditResource.invitation,
        resource_id=invitation.id,
        details={"email": invitation.email},
    )
    return invitation


@router.delete("/{invitation_id}", status_code=status.HTTP_200_OK, response_model=InvitationInfo)
async def cancel_invitation(
    request: Request,
    invitation_id: UUID,
    background_tasks: BackgroundTasks,
    context: TenantContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: IAuditRecorder = Depends(get_audit_recorder),
):
    """
    Cancel a pending invitation of the caller's organization (owner/admin).

    Raises:
        - 404 Not Found: No such invitation in this organization
        - 409 Conflict: Invitation is no longer pending
    """
    result = await CancelInvitationUseCase(uow).execute(context, invitation_id)
    if result.is_err():
        raise_for_error(result.error)

    invitation = result.value
    schedule_audit(
        background_tasks,
        audit,
        request,
        AuditActor.from_context(context),
        AuditAction.invitation_cancelled,
        AuditResource.invitation,
        resource_id=invitation.id,
        details={"email": invitation.email},
    )
    return invitation
