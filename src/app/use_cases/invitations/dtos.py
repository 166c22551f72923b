"""
Invitation Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Invitation, UserRole


class CreateInvitationCommand(BaseModel):
    email: str
    role: UserRole = UserRole.member


class InviterInfo(BaseModel):
    email: str


class InvitationInfo(BaseModel):
    """Invitation as shown to the inviting organization (never the token)"""

    id: str
    email: str
    role: str
    status: str
    invited_by: Optional[InviterInfo] = None
    expires_at: datetime
    created_at: datetime

    @classmethod
    def from_entity(
        cls, invitation: Invitation, inviter_email: Optional[str] = None
    ) -> "InvitationInfo":
        return cls(
            id=str(invitation.id),
            email=invitation.email,
            role=invitation.role.value,
            status=invitation.status.value,
            invited_by=InviterInfo(email=inviter_email) if inviter_email else None,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
        )


class InvitationList(BaseModel):
    invitations: List[InvitationInfo]
    count: int


class CreatedInvitation(BaseModel):
    """Result of creating an invitation, including whether the email went out"""

    invitation: InvitationInfo
    email_sent: bool
