"""
Authentication dependencies for FastAPI routes
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from roomcraft.schemas.auth import Session
from roomcraft.services.auth_service import AuthService
from roomcraft.services.session_store import SessionStore, create_session_store

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def get_session_store(request: Request) -> SessionStore:
    """Session store held on the application state, created on first use"""
    store = getattr(request.app.state, "session_store", None)
    if store is None:
        store = create_session_store()
        request.app.state.session_store = store
    return store


def get_auth_service(store: SessionStore = Depends(get_session_store)) -> AuthService:
    return AuthService(store)


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> Session:
    """
    Dependency to get the session behind the bearer token.
    Raises 401 if not authenticated.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = await auth_service.validate_token(credentials.credentials)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return session
