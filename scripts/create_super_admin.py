"""
Create or update a platform super admin (no organization).

Usage:
    python -m scripts.create_super_admin --email admin@example.com --password <password>

Email and password may also come from SUPER_ADMIN_EMAIL / SUPER_ADMIN_PASSWORD.
Re-running with an existing email promotes that account and resets its password;
organization owners are refused.
"""

import argparse
import asyncio
import logging
import os
import sys

from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import load_config
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_engine
from src.app.services.password_hasher import PasswordHasher
from src.app.use_cases.admin import ProvisionSuperAdminUseCase

logger = logging.getLogger("create_super_admin")


async def provision(email: str, password: str) -> int:
    config = load_config()
    engine = create_engine(config)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with session_factory() as session:
            use_case = ProvisionSuperAdminUseCase(
                SqlAlchemyUnitOfWork(session), PasswordHasher(rounds=config.BCRYPT_ROUNDS)
            )
            result = await use_case.execute(email, password)
    finally:
        await engine.dispose()

    if result.is_err():
        logger.error(f"{result.error.code}: {result.error.message}")
        return 1

    logger.info(f"Super admin ready: {result.value.email} (platform routes only, no organization)")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or update a platform super admin")
    parser.add_argument("--email", default=os.environ.get("SUPER_ADMIN_EMAIL"))
    parser.add_argument("--password", default=os.environ.get("SUPER_ADMIN_PASSWORD"))
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if not args.email or not args.password:
        parser.error("email and password are required (flags or SUPER_ADMIN_EMAIL/SUPER_ADMIN_PASSWORD)")

    return asyncio.run(provision(args.email, args.password))


if __name__ == "__main__":
    sys.exit(main())
