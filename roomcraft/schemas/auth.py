"""
Pydantic schemas for session authentication
"""
from datetime import datetime

from pydantic import Field

from roomcraft.core.config import settings
from roomcraft.schemas.common import CamelModel


class Session(CamelModel):
    user_id: str
    token: str
    expires_at: datetime


class CreateSessionRequest(CamelModel):
    user_id: str = Field(min_length=1)
    expires_in_hours: int = Field(default_factory=lambda: settings.session_ttl_hours, gt=0, le=24 * 30)


class RevokedSessions(CamelModel):
    revoked: int
