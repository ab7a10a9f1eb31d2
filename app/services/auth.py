import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import models
from app.errors import AuthError, ConflictError, NotFoundError, ValidationError
from app.security import create_access_token, hash_password, verify_password
from app.validation import validate_registration

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class AuthResult:
    user: models.User
    token: str


class AuthService:
    """Registers users, checks credentials and issues bearer tokens."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find_by_email(self, email: str) -> Optional[models.User]:
        result = await self.db.execute(select(models.User).where(models.User.email == email))
        return result.scalars().first()

    async def register(self, email: Optional[str], password: Optional[str], name: Optional[str] = None) -> AuthResult:
        message = validate_registration(email, password)
        if message:
            raise ValidationError(message)

        if await self._find_by_email(email):
            raise ConflictError("User with this email already exists")

        user = models.User(
            email=email,
            password_hash=hash_password(password),
            name=name or None,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email
            await self.db.rollback()
            raise ConflictError("User with this email already exists") from exc
        await self.db.refresh(user)

        logger.info("User registered", extra={"user_id": user.id})
        return AuthResult(user=user, token=create_access_token(user.id, user.email))

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self._find_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info("User logged in", extra={"user_id": user.id})
        return AuthResult(user=user, token=create_access_token(user.id, user.email))

    async def get_current_user(self, user_id: int) -> models.User:
        user = await self.db.get(models.User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
