"""User service — registration, credential checks, privilege upgrade.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the database. Password
hashing happens here so routes never see a hash.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from chirpy.db.models import User, utcnow

logger = structlog.get_logger()


class UserNotFoundError(Exception):
    pass


class EmailTakenError(Exception):
    pass


class UserService:
    def __init__(self, db: AsyncSession, *, bcrypt_rounds: int = DEFAULT_ROUNDS):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def create_user(self, email: str, password: str) -> User:
        if await self.get_by_email(email):
            raise EmailTakenError(email)

        user = User(
            email=email,
            hashed_password=hash_password(password, self.bcrypt_rounds),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            await self.db.rollback()
            raise EmailTakenError(email) from e
        await self.db.refresh(user)
        logger.info("users.created", user_id=str(user.id))
        return user

    async def check_credentials(self, email: str, password: str) -> Optional[User]:
        """Return the user if email and password match, else None.

        The password is checked even when no user has this email, so a
        miss and a wrong password cost the same.
        """
        user = await self.get_by_email(email)
        hashed = user.hashed_password if user else None
        if not verify_password(password, hashed, self.bcrypt_rounds):
            return None
        return user

    async def update_credentials(
        self, user_id: uuid.UUID, email: str, password: str
    ) -> User:
        user = await self.get_user(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))

        existing = await self.get_by_email(email)
        if existing and existing.id != user.id:
            raise EmailTakenError(email)

        user.email = email
        user.hashed_password = hash_password(password, self.bcrypt_rounds)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise EmailTakenError(email) from e
        await self.db.refresh(user)
        logger.info("users.credentials_updated", user_id=str(user.id))
        return user

    async def upgrade_to_red(self, user_id: uuid.UUID) -> None:
        """Set is_chirpy_red. Single UPDATE, so a repeat delivery is harmless."""
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(is_chirpy_red=True, updated_at=utcnow())
        )
        await self.db.commit()
        if not result.rowcount:
            raise UserNotFoundError(str(user_id))
        logger.info("users.upgraded", user_id=str(user_id))

    async def reset_all(self) -> int:
        """Delete every user. Chirps and refresh tokens go with them."""
        result = await self.db.execute(delete(User))
        await self.db.commit()
        logger.warning("users.reset", deleted=result.rowcount)
        return result.rowcount
