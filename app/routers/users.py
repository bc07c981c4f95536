from datetime import timedelta

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from app.core.auth import require_session, set_session_cookie
from app.core.body import json_body
from app.core.context import AppContext, get_context
from app.core.security import SessionClaims
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.user import LoginRequest
from app.services.user_service import UserService

router = APIRouter(tags=["Users"])

repo = UserRepository()
service = UserService(repo)


@router.post("/login")
def login(
    payload: LoginRequest = Depends(json_body(LoginRequest, detail="Invalid request")),
    session: Session = Depends(get_session),
    context: AppContext = Depends(get_context),
):
    """
    Exchange username/password for a session cookie.

    Sets cookie `token` (valid SESSION_TTL_MINUTES). Empty body.
    """
    settings = context.settings
    issued = service.login(
        session,
        context.sessions,
        payload,
        ttl=timedelta(minutes=settings.SESSION_TTL_MINUTES),
    )
    response = Response(status_code=200)
    set_session_cookie(response, issued, hardened=settings.COOKIE_HARDENED)
    return response


@router.get("/welcome", response_class=PlainTextResponse)
def welcome(claims: SessionClaims = Depends(require_session)):
    """Greet the authenticated user."""
    return service.welcome(claims)


@router.post("/refresh")
def refresh(
    claims: SessionClaims = Depends(require_session),
    context: AppContext = Depends(get_context),
):
    """
    Re-issue the session cookie (valid REFRESH_TTL_MINUTES). Empty body.
    """
    settings = context.settings
    issued = service.refresh(
        context.sessions,
        claims,
        ttl=timedelta(minutes=settings.REFRESH_TTL_MINUTES),
    )
    response = Response(status_code=200)
    set_session_cookie(response, issued, hardened=settings.COOKIE_HARDENED)
    return response
