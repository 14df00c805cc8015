"""
Authentication service for opaque session tokens and password hashing
"""
import logging
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt

from roomcraft.schemas.auth import Session
from roomcraft.services.session_store import SessionStore

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "session:"

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _session_key(token: str) -> str:
    return f"{SESSION_KEY_PREFIX}{token}"


class AuthService:
    """Service for authentication operations"""

    def __init__(self, store: SessionStore):
        self.store = store

    def generate_token(self) -> str:
        """Random uuid followed by the base36 creation time in milliseconds"""
        return f"{uuid.uuid4()}-{_base36(int(time.time() * 1000))}"

    async def create_session(self, user_id: str, expires_in_hours: int = 24) -> Session:
        """Create and store a session for a user"""
        token = self.generate_token()
        expires_at = datetime.now(timezone.utc) + timedelta(hours=expires_in_hours)
        session = Session(user_id=user_id, token=token, expires_at=expires_at)

        await self.store.put(_session_key(token), session.model_dump_json(), expires_in_hours * 3600)
        logger.info(f"Created session for user {user_id} (expires in {expires_in_hours}h)")
        return session

    async def validate_token(self, token: str) -> Optional[Session]:
        """
        Look up the session behind a token

        Returns:
            The session, or None when unknown or expired; expired sessions are removed
        """
        raw = await self.store.get(_session_key(token))
        if raw is None:
            return None

        session = Session.model_validate_json(raw)
        if session.expires_at < datetime.now(timezone.utc):
            await self.store.delete(_session_key(token))
            return None
        return session

    async def revoke_token(self, token: str) -> bool:
        return await self.store.delete(_session_key(token))

    async def revoke_all_user_sessions(self, user_id: str) -> int:
        """Revoke every session of a user, returning how many were removed"""
        count = 0
        for key in await self.store.keys(SESSION_KEY_PREFIX):
            raw = await self.store.get(key)
            if raw is None:
                continue
            if Session.model_validate_json(raw).user_id == user_id and await self.store.delete(key):
                count += 1

        logger.info(f"Revoked {count} sessions for user {user_id}")
        return count

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt"""
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
