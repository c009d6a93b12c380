"""User service: register, login, refresh, current user.

All DB operations use the injected AsyncSession. The register transaction is
managed by the caller (router layer) via `async with db.begin()`.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.pd_account.domain.models import Account
from src.pd_account.domain.repository import AccountRepositoryProtocol
from src.pd_account.infrastructure.persistence import AccountRepository
from src.pd_common.errors import (
    AccountDisabledError,
    AccountNotFoundError,
    EmailExistsError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.pd_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.pd_gateway.auth.password import hash_password, verify_password
from src.pd_gateway.user.db_models import UserModel


class UserService:
    """Stateless service: instantiate once, reuse across requests."""

    def __init__(self, account_repo: AccountRepositoryProtocol | None = None) -> None:
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> UserModel:
        """Insert the user and its zero-balance wallet account together."""
        # DB UNIQUE constraints are the final guard
        result = await db.execute(
            select(UserModel).where(UserModel.username == username)
        )
        if result.scalar_one_or_none() is not None:
            raise UsernameExistsError()

        result = await db.execute(
            select(UserModel).where(UserModel.email == email)
        )
        if result.scalar_one_or_none() is not None:
            raise EmailExistsError()

        user = UserModel(
            username=username,
            email=email,
            password_hash=hash_password(password),
            is_active=True,
        )
        db.add(user)
        await db.flush()  # Get user.id without committing

        await self._accounts.create_account(db, str(user.id))
        return user

    async def login(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str, str]:
        """Authenticate and return (user, access_token, refresh_token).

        Unknown user and wrong password raise the same error so usernames
        cannot be probed.
        """
        result = await db.execute(
            select(UserModel).where(UserModel.username == username)
        )
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountDisabledError()

        return (
            user,
            create_access_token(str(user.id)),
            create_refresh_token(str(user.id)),
        )

    async def refresh(self, refresh_token: str) -> str:
        """Validate a refresh token and issue a new access token (no rotation)."""
        payload = decode_token(refresh_token, expected_type="refresh")
        return create_access_token(str(payload["sub"]))

    async def wallet_account(self, user: UserModel, db: AsyncSession) -> Account:
        """Load the wallet account behind an authenticated user."""
        account = await self._accounts.get_account_by_user_id(db, str(user.id))
        if account is None:
            raise AccountNotFoundError(str(user.id))
        return account
