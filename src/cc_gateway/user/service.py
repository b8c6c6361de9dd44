"""User lookup for the credential gate.

All DB operations use the injected AsyncSession; nothing here writes.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_common.errors import AccountDisabledError, InvalidCredentialsError
from src.cc_gateway.auth.password import verify_password
from src.cc_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity of the current request."""

    name: str
    role: str


class UserService:
    """Stateless service: instantiate once, reuse across requests."""

    async def authenticate(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> Principal:
        """Check a username/password pair and return the caller's Principal.

        Note: "User not found" and "Wrong password" both raise InvalidCredentialsError
        intentionally, which prevents username enumeration.
        """
        result = await db.execute(
            select(UserModel).where(UserModel.username == username)
        )
        user = result.scalar_one_or_none()

        if not verify_password(password, user.password_hash if user else None):
            logger.info("Rejected credentials for user=%s", username)
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.info("Rejected disabled user=%s", username)
            raise AccountDisabledError()

        return Principal(name=user.username, role=user.role)
