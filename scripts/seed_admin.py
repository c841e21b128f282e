"""
Seed the first administrator.

Registration only ever produces alumni accounts, and only an admin can
grant roles, so the first admin has to be created out of band.

Usage:
    ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=... python scripts/seed_admin.py
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

# Allow importing the src package when run from any directory
sys.path.insert(0, str(Path(__file__).parent.parent))

import structlog  # noqa: E402
from sqlalchemy import select  # noqa: E402
from src.core.logging import setup_logging  # noqa: E402
from src.domain.models import AccountType, Role, VerificationStatus  # noqa: E402
from src.domain.services.auth_service import hash_password  # noqa: E402
from src.domain.services.roles import RoleStore  # noqa: E402
from src.infrastructure.db.models import Account, VerificationProfile  # noqa: E402
from src.infrastructure.db.session import dispose_engine, get_session_factory  # noqa: E402

logger = structlog.get_logger()


async def seed_admin(email: str, password: str, full_name: str | None = None) -> str:
    """Create the admin account if missing and make sure it holds the admin role."""
    session_factory = get_session_factory()

    async with session_factory() as session:
        roles = RoleStore(session)
        account = await session.scalar(select(Account).where(Account.email == email.lower()))

        if account is None:
            account = Account(
                email=email.lower(),
                hashed_password=hash_password(password),
                full_name=full_name,
            )
            session.add(account)
            await session.flush()
            session.add(
                VerificationProfile(
                    account_id=account.id,
                    status=VerificationStatus.APPROVED,
                    id_number="ADMIN",
                    account_type=AccountType.ALUMNI,
                )
            )
            logger.info("seed_admin_created", account_id=account.id, email=email)

        if await roles.get_effective_role(account.id) is not Role.ADMIN:
            await roles.append(account.id, Role.ADMIN)
            logger.info("seed_admin_role_assigned", account_id=account.id)

        await session.commit()
        return account.id


async def main() -> None:
    setup_logging()
    email = os.environ.get("ADMIN_EMAIL")
    password = os.environ.get("ADMIN_PASSWORD")
    if not email or not password:
        raise SystemExit("ADMIN_EMAIL and ADMIN_PASSWORD must be set")

    try:
        await seed_admin(email, password, os.environ.get("ADMIN_NAME"))
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
