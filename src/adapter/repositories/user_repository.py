from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.base import utc_now
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_organization(
        self, organization_id: UUID, tenant_id: str
    ) -> List[User]:
        """Get all users of a tenant, newest first"""
        stmt = (
            select(User)
            .where(User.organization_id == organization_id, User.tenant_id == tenant_id)
            .order_by(User.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_reset_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[User]:
        """Get user holding an unexpired reset token with this digest"""
        stmt = select(User).where(
            User.reset_password_token_hash == token_hash,
            User.reset_password_expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def clear_reset_token(self, user_id: UUID, token_hash: str) -> bool:
        """Clear the reset token only if it is still the stored one"""
        stmt = (
            update(User)
            .where(User.id == user_id, User.reset_password_token_hash == token_hash)
            .values(
                reset_password_token_hash=None,
                reset_password_expires_at=None,
                updated_at=utc_now(),
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def count(self) -> int:
        """Count all users"""
        result = await self.session.exec(select(func.count()).select_from(User))
        return result.one()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
