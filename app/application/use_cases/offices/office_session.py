"""Office session manager: password-gated, account-free office dashboard sessions.

Raw tokens are returned once at login and never stored; the store keeps a
SHA-256 digest. Every validation failure surfaces as the same
InvalidOfficeSessionException so callers cannot probe for tokens.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from datetime import datetime, timedelta

from app.application.dtos.office import (
    OfficeLoginResult,
    OfficeSessionCreate,
    OfficeSessionResult,
    OfficeSummary,
)
from app.application.interfaces.services import IPasswordHasher
from app.application.interfaces.store import IEntityStore
from app.domain.entities.office_session import OfficeSessionEntity
from app.domain.exceptions import (
    AuthenticationException,
    InvalidOfficeSessionException,
    ValidationException,
)
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_session_token

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid office code or password"


def hash_session_token(token: str) -> str:
    """Hex SHA-256 of a session token (the only form persisted)."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _to_entity(session: OfficeSessionResult) -> OfficeSessionEntity:
    return OfficeSessionEntity(
        id=session.id,
        office_id=session.office_id,
        is_active=session.is_active,
        login_time=ensure_utc(session.login_time),
        expires_at=ensure_utc(session.expires_at),
    )


class OfficeSessionManager:
    """Login, validate, logout and sweep office sessions."""

    def __init__(
        self,
        store: IEntityStore,
        hasher: IPasswordHasher,
        ttl_hours: int = 24,
        retention_hours: int = 24,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.ttl = timedelta(hours=ttl_hours)
        self.retention = timedelta(hours=retention_hours)

    async def login(
        self,
        office_code: str | None,
        password: str | None,
        ip_address: str | None = None,
        user_id: str | None = None,
    ) -> OfficeLoginResult:
        """Verify office credentials and open a session.

        Raises:
            ValidationException: If code or password is missing.
            AuthenticationException: If the code is unknown or the password is wrong.
        """
        if not office_code or not password:
            raise ValidationException("Office code and password are required")
        office = await self.store.offices.get_by_code(office_code)
        ok = await asyncio.to_thread(
            self.hasher.verify_password,
            password,
            office.office_password_hash if office else None,
        )
        if office is None or not ok:
            logger.info("Office login failed for code %r from %s", office_code, ip_address)
            raise AuthenticationException(INVALID_CREDENTIALS)
        token = generate_session_token()
        expires_at = utc_now() + self.ttl
        async with self.store.transaction():
            await self.store.office_sessions.create(
                OfficeSessionCreate(
                    office_id=office.office_id,
                    token_hash=hash_session_token(token),
                    expires_at=expires_at,
                    user_id=user_id,
                    ip_address=ip_address,
                )
            )
        logger.info("Office %s logged in from %s", office.office_id, ip_address)
        return OfficeLoginResult(
            session_token=token,
            expires_at=expires_at,
            office=OfficeSummary(
                id=office.id,
                office_id=office.office_id,
                name=office.name,
                description=office.description,
            ),
        )

    async def validate(self, token: str | None) -> OfficeSessionResult:
        """Return the active, unexpired session for token or raise InvalidOfficeSessionException."""
        if not token:
            raise InvalidOfficeSessionException()
        session = await self.store.office_sessions.get_by_token_hash(hash_session_token(token))
        if session is None or not _to_entity(session).is_valid(utc_now()):
            raise InvalidOfficeSessionException()
        return session

    async def logout(self, token: str | None) -> None:
        """Deactivate the session. Logging out an already inactive session is a no-op."""
        if not token:
            raise InvalidOfficeSessionException()
        async with self.store.transaction():
            found = await self.store.office_sessions.deactivate(hash_session_token(token))
        if not found:
            raise InvalidOfficeSessionException()
        logger.info("Office session logged out")

    async def sweep(self, now: datetime | None = None) -> int:
        """Delete sessions expired or inactive for longer than the retention window."""
        cutoff = (now or utc_now()) - self.retention
        async with self.store.transaction():
            removed = await self.store.office_sessions.delete_stale(cutoff)
        if removed:
            logger.info("Swept %d stale office sessions (cutoff %s)", removed, cutoff.isoformat())
        return removed
