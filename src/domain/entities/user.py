"""
User Entity

A person bound to exactly one tenant, or a platform admin bound to none.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email is normalized (trimmed, lower-cased) and unique across all users
    - Password stored as bcrypt hash, never as plaintext
    - role=super_admin if and only if organization_id and tenant_id are null
    - Only the SHA-256 digest of a password reset token is stored (1 hour TTL)
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(default=UserRole.member, nullable=False)

    organization_id: Optional[UUID] = Field(
        default=None, foreign_key="organizations.id", index=True
    )
    tenant_id: Optional[str] = Field(default=None, index=True, max_length=64)

    reset_password_token_hash: Optional[str] = Field(
        default=None, index=True, max_length=64
    )
    reset_password_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_tenant_org", "tenant_id", "organization_id"),
        Index("idx_user_org_role", "organization_id", "role"),
    )
