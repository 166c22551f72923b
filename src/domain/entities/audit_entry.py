"""
AuditEntry Entity

Append-only record of security-relevant and tenant-scoped actions.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import AuditAction, AuditResource


class AuditEntry(SQLModel, table=True):
    """
    AuditEntry entity.

    Business Rules:
    - Never updated or deleted
    - user_id is null for anonymous events (login_failure, invitation_rejected)
    - tenant_id/organization_id null for platform events
    """

    __tablename__ = "audit_entries"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, index=True)
    tenant_id: Optional[str] = Field(default=None, index=True, max_length=64)
    organization_id: Optional[UUID] = Field(default=None, index=True)

    action: AuditAction = Field(nullable=False, index=True)
    resource: AuditResource = Field(nullable=False, index=True)
    resource_id: Optional[str] = Field(default=None, max_length=64)
    details: Optional[Any] = Field(default=None, sa_column=Column(JSON))

    ip: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_tenant_created_at", "tenant_id", "created_at"),
        Index("idx_audit_org_created_at", "organization_id", "created_at"),
        Index("idx_audit_user_created_at", "user_id", "created_at"),
    )
