"""
Organization Entity

The tenant: an isolated customer account.
"""

from datetime import datetime
from typing import Any, Dict
from uuid import UUID, uuid4

from sqlalchemy import String
from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from src.domain.base import generate_tenant_id, utc_now

from .enums import SubscriptionPlan


class Organization(SQLModel, table=True):
    """
    Organization entity.

    Business Rules:
    - tenant_id is generated once at creation and never rewritten
    - Every tenant-scoped record carries this tenant_id
    """

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)

    tenant_id: str = Field(
        default_factory=generate_tenant_id,
        sa_column=Column(String(64), unique=True, index=True, nullable=False),
    )

    subscription_plan: SubscriptionPlan = Field(default=SubscriptionPlan.free)
    settings: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
