"""
Invitation Entity

Time-boxed, single-use invitation to join a tenant.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import InvitationStatus, UserRole

INVITATION_TTL = timedelta(days=7)


class Invitation(SQLModel, table=True):
    """
    Invitation entity.

    Business Rules:
    - Created by admin/owner, for role admin or member only
    - Expires 7 days after creation
    - Token is single-use, 32 random bytes hex-encoded
    - At most one pending invitation per (email, organization)
    - Leaves pending exactly once: accepted, rejected or expired
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(max_length=255, nullable=False, index=True)
    organization_id: UUID = Field(
        foreign_key="organizations.id", nullable=False, index=True
    )
    tenant_id: str = Field(nullable=False, index=True, max_length=64)

    role: UserRole = Field(nullable=False)
    token: str = Field(unique=True, index=True, max_length=64)

    status: InvitationStatus = Field(default=InvitationStatus.pending)
    invited_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, index=True))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_tenant_org", "tenant_id", "organization_id"),
        Index("idx_invitation_tenant_status", "tenant_id", "status"),
        Index(
            "uq_invitation_pending_email_org",
            "email",
            "organization_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        now = now or utc_now()
        return self.status == InvitationStatus.pending and now < self.expires_at

    def has_lapsed(self, now: Optional[datetime] = None) -> bool:
        """Still pending on record, but past its expiry"""
        now = now or utc_now()
        return self.status == InvitationStatus.pending and now >= self.expires_at
