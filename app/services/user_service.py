import logging
from datetime import timedelta

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.security import IssuedToken, SessionAuthority, SessionClaims, TokenSigningError
from app.repositories.user_repo import UserRepository
from app.schemas.user import LoginRequest

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for login and session lifetime.

    Responsibilities:
      - check credentials against the user table
      - mint / refresh session tokens
      - map store and signing failures to HTTP errors
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def login(
        self,
        session: Session,
        sessions: SessionAuthority,
        payload: LoginRequest,
        ttl: timedelta,
    ) -> IssuedToken:
        """
        Verify username/password and mint a token.

        Passwords are compared as stored (plain text).

        Raises:
            HTTPException(401): unknown user or wrong password.
            HTTPException(500): store or signing failure.
        """
        try:
            stored_password = self.repo.get_password(session, payload.username)
        except SQLAlchemyError:
            logger.exception("login lookup failed for %s", payload.username)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server error",
            )

        if stored_password is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found",
            )

        if payload.password != stored_password:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        return self._sign(lambda: sessions.mint(payload.username, ttl))

    def welcome(self, claims: SessionClaims) -> str:
        return f"Welcome, {claims.username}!"

    def refresh(
        self,
        sessions: SessionAuthority,
        claims: SessionClaims,
        ttl: timedelta,
    ) -> IssuedToken:
        """
        Mint a new token for the same user.

        There is no minimum-age gate; the old token stays valid.
        """
        return self._sign(lambda: sessions.refresh(claims, ttl))

    def _sign(self, mint) -> IssuedToken:
        try:
            return mint()
        except TokenSigningError:
            logger.exception("token signing failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server error",
            )
