"""
Session authentication routes
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from roomcraft.core.auth import get_auth_service, get_current_session
from roomcraft.schemas.auth import CreateSessionRequest, RevokedSessions, Session
from roomcraft.schemas.common import ApiResponse
from roomcraft.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sessions", response_model=ApiResponse[Session], response_model_exclude_none=True)
async def create_session(
    request: CreateSessionRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Issue a session token for a user"""
    session = await auth_service.create_session(request.user_id, request.expires_in_hours)
    return ApiResponse(success=True, data=session)


@router.get("/session", response_model=ApiResponse[Session], response_model_exclude_none=True)
async def read_session(session: Session = Depends(get_current_session)):
    """Session behind the bearer token"""
    return ApiResponse(success=True, data=session)


@router.delete("/session", response_model=ApiResponse[RevokedSessions], response_model_exclude_none=True)
async def revoke_session(
    session: Session = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Log out the current session"""
    revoked = await auth_service.revoke_token(session.token)
    return ApiResponse(success=True, data=RevokedSessions(revoked=int(revoked)))


@router.delete(
    "/users/{user_id}/sessions",
    response_model=ApiResponse[RevokedSessions],
    response_model_exclude_none=True,
)
async def revoke_user_sessions(
    user_id: str,
    session: Session = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Log out every session of a user; callers may only revoke their own"""
    if session.user_id != user_id:
        return JSONResponse(status_code=403, content=ApiResponse.failure("Cannot revoke sessions of another user"))

    count = await auth_service.revoke_all_user_sessions(user_id)
    return ApiResponse(success=True, data=RevokedSessions(revoked=count))
