from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.errors import EmailExistsError
from app.models.user import User


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user: User) -> User:
        now = datetime.now(timezone.utc)
        user.created_at = now
        user.updated_at = now
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Unique index on email catches registrations that raced past
            # the service-level existence check
            await self.db.rollback()
            raise EmailExistsError()
        await self.db.refresh(user)
        return user

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).filter(User.email == email))
        return result.scalars().first()

    async def find_by_id(self, user_id: str) -> User | None:
        return await self.db.get(User, user_id)

    async def update(self, user: User) -> User | None:
        existing = await self.db.get(User, user.id)
        if existing is None:
            return None
        existing.email = user.email
        existing.password_hash = user.password_hash
        existing.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(existing)
        return existing
