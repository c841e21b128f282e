"""Registration and login; the identity side of the session provider."""

from __future__ import annotations

import structlog
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from src.core.auth import create_access_token
from src.core.config import get_settings
from src.domain.models import AccountType, Role, VerificationStatus
from src.domain.services.roles import RoleStore
from src.infrastructure.db.guard import translate_store_errors
from src.infrastructure.db.models import Account, VerificationProfile

logger = structlog.get_logger()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthError(Exception):
    """Base exception for authentication errors."""


class AccountExistsError(AuthError):
    """Raised when attempting to register with an existing email."""


class InvalidCredentialsError(AuthError):
    """Raised when login credentials are invalid."""


class AccountNotFoundError(AuthError):
    """Raised when the token subject no longer matches an account."""


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


class AuthService:
    """Service for registration and login."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.roles = RoleStore(session)

    @translate_store_errors
    async def register(
        self,
        *,
        email: str,
        password: str,
        id_number: str,
        account_type: AccountType | str = AccountType.ALUMNI,
        full_name: str | None = None,
    ) -> dict:
        """
        Register a new account.

        Creates the account, its default role assignment and a pending
        verification profile in a single transaction.

        Returns:
            dict with account data and tokens
        """
        account_type = AccountType(account_type)
        await logger.ainfo("register_attempt", email=email, account_type=account_type.value)

        account = Account(
            email=email.lower(),
            hashed_password=hash_password(password),
            full_name=full_name,
        )

        try:
            self.session.add(account)
            await self.session.flush()
            await self.roles.append(account.id, Role(get_settings().default_role))
            self.session.add(
                VerificationProfile(
                    account_id=account.id,
                    status=VerificationStatus.PENDING,
                    id_number=id_number,
                    account_type=account_type,
                )
            )
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            await logger.awarning("register_duplicate_email", email=email)
            raise AccountExistsError(f"Account with email {email} already exists") from exc

        await self.session.refresh(account)
        await logger.ainfo("register_success", account_id=account.id, email=email)

        return {
            "account": await self.describe(account),
            "tokens": self._generate_tokens(account),
        }

    @translate_store_errors
    async def login(self, *, email: str, password: str) -> dict:
        await logger.ainfo("login_attempt", email=email)

        stmt = select(Account).where(Account.email == email.lower())
        account = await self.session.scalar(stmt)

        if account is None or not verify_password(password, account.hashed_password):
            await logger.awarning("login_invalid_credentials", email=email)
            raise InvalidCredentialsError("Invalid email or password")

        await logger.ainfo("login_success", account_id=account.id)
        return {
            "account": await self.describe(account),
            "tokens": self._generate_tokens(account),
        }

    @translate_store_errors
    async def get_account(self, account_id: str) -> dict:
        account = await self.session.get(Account, account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return await self.describe(account)

    async def describe(self, account: Account) -> dict:
        """Account data with its current role and verification status."""
        profile = await self.session.get(VerificationProfile, account.id)
        return {
            "id": account.id,
            "email": account.email,
            "full_name": account.full_name,
            "role": (await self.roles.resolve(account.id)).value,
            "verification_status": (
                profile.status.value if profile is not None else VerificationStatus.PENDING.value
            ),
            "account_type": profile.account_type.value if profile is not None else None,
            "created_at": account.created_at,
        }

    def _generate_tokens(self, account: Account) -> dict:
        settings = get_settings()
        return {
            "access_token": create_access_token(subject=account.id, email=account.email),
            "token_type": "bearer",
            "expires_in": settings.access_token_ttl_seconds,
        }
