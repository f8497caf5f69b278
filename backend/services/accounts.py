import logging
from typing import Optional, Tuple

from fastapi_users.password import PasswordHelper
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import AuthenticationError, ValidationError
from core.tokens import TokenService
from db.users import User
from services.validation import validate_credentials

logger = logging.getLogger(__name__)


class AccountService:
    """Registration, login and password changes."""

    def __init__(
        self,
        session: AsyncSession,
        tokens: TokenService,
        password_helper: Optional[PasswordHelper] = None,
    ):
        self.session = session
        self.tokens = tokens
        self.password_helper = password_helper or PasswordHelper()

    def issue_token(self, user: User) -> str:
        return self.tokens.issue(user.id, user.email, user.is_admin)

    async def get(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        res = await self.session.execute(select(User).where(func.lower(User.email) == email.lower()))
        return res.scalar_one_or_none()

    def set_password(self, user: User, password: str) -> None:
        """Always stores a fresh salted hash; plaintext is never kept."""
        user.hashed_password = self.password_helper.hash(password)

    async def register(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        values = validate_credentials(email, password).raise_for_errors()

        if await self.get_by_email(values["email"]) is not None:
            raise ValidationError("User already exists")

        # The very first account becomes the administrator
        user_count = (await self.session.execute(select(func.count(User.id)))).scalar_one()

        user = User(
            email=values["email"],
            is_active=True,
            is_superuser=user_count == 0,
            is_verified=False,
        )
        self.set_password(user, values["password"])
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValidationError("User already exists")
        await self.session.refresh(user)

        logger.info("Registered user id=%s admin=%s", user.id, user.is_admin)
        return user, self.issue_token(user)

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        values = validate_credentials(email, password, check_length=False).raise_for_errors()

        user = await self.get_by_email(values["email"])
        if user is None:
            raise AuthenticationError("Invalid credentials")

        verified, updated_hash = self.password_helper.verify_and_update(values["password"], user.hashed_password)
        if not verified:
            raise AuthenticationError("Invalid credentials")
        if updated_hash is not None:
            user.hashed_password = updated_hash
            await self.session.commit()

        return user, self.issue_token(user)

    async def change_password(self, user: User, current_password: Optional[str], new_password: Optional[str]) -> None:
        verified, _ = self.password_helper.verify_and_update(current_password or "", user.hashed_password)
        if not verified:
            raise AuthenticationError("Invalid credentials")
        validate_credentials(user.email, new_password).raise_for_errors()
        self.set_password(user, new_password)
        await self.session.commit()
        logger.info("Password changed for user id=%s", user.id)
