"""
Invitation Use Cases

Invitation lifecycle: pending -> accepted | rejected | expired, or cancelled.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .cancel_invitation_use_case import CancelInvitationUseCase
from .create_invitation_use_case import CreateInvitationUseCase
from .dtos import (
    CreatedInvitation,
    CreateInvitationCommand,
    InvitationInfo,
    InvitationList,
    InviterInfo,
)
from .list_invitations_use_case import ListInvitationsUseCase
from .reject_invitation_use_case import RejectInvitationUseCase

__all__ = [
    # Use Cases
    "CreateInvitationUseCase",
    "ListInvitationsUseCase",
    "AcceptInvitationUseCase",
    "RejectInvitationUseCase",
    "CancelInvitationUseCase",
    # DTOs
    "CreateInvitationCommand",
    "CreatedInvitation",
    "InvitationInfo",
    "InvitationList",
    "InviterInfo",
]
