from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from src.core.auth import TokenError, create_access_token, decode_access_token
from src.domain import Caller
from src.infrastructure.db.models import Account
from src.infrastructure.db.session import get_session

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session for API handlers."""
    async for session in get_session():
        yield session


async def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
    session: AsyncSession = Depends(get_db_session),  # noqa: B008
) -> Caller:
    """Resolve the calling account from a bearer token.

    Only the subject is taken from the token. The account must still exist;
    role and verification are read by the services on each call.
    """
    if credentials is None:
        raise _unauthorized("Missing bearer token")

    try:
        payload = decode_access_token(credentials.credentials)
    except TokenError as exc:
        raise _unauthorized(str(exc)) from exc

    account_id = payload.get("sub")
    if not account_id:
        raise _unauthorized("Token missing subject")

    if await session.get(Account, account_id) is None:
        raise _unauthorized("Unknown account")

    return Caller(account_id=account_id, email=payload.get("email", ""))


def issue_smoke_token(account_id: str, *, email: str | None = None) -> str:
    """Generate a signed token for manual smoke testing."""
    return create_access_token(account_id, email=email)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )
