"""
Session tokens.

A session token is a compact HS256 JWT carrying:
  - username: the authenticated user name
  - exp: absolute expiry, seconds since epoch (UTC)

Tokens are stateless: refreshing mints a new token and leaves the previous
one valid until its own expiry.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt
from jose.exceptions import JOSEError
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenMalformed(TokenError):
    """The value is not a compact JWT at all."""


class TokenInvalid(TokenError):
    """Signature mismatch, expired, or missing claims."""


class TokenSigningError(Exception):
    """Signing failed (e.g. unusable secret)."""


class SessionClaims(BaseModel):
    username: str
    exp: int


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


class SessionAuthority:
    """
    Mint, verify and refresh session tokens with a process-wide secret.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self.algorithm = algorithm

    def mint(
        self,
        user_name: str,
        ttl: timedelta,
        now: datetime | None = None,
    ) -> IssuedToken:
        """
        Sign a token for `user_name` expiring `ttl` from `now`.

        Raises:
            TokenSigningError: if the token cannot be signed.
        """
        now = now or datetime.now(timezone.utc)
        # JWT exp has second granularity; the cookie must match it
        expires_at = (now + ttl).replace(microsecond=0)
        claims = {"username": user_name, "exp": int(expires_at.timestamp())}

        try:
            token = jwt.encode(claims, self._secret, algorithm=self.algorithm)
        except JOSEError as e:
            raise TokenSigningError(str(e)) from e

        logger.info("issued token for %s, expires %s", user_name, expires_at.isoformat())
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str, now: datetime | None = None) -> SessionClaims:
        """
        Verify signature and expiry.

        Raises:
            TokenMalformed: empty value or not three dot-separated segments.
            TokenInvalid: bad signature, undecodable, expired, missing claims.
        """
        if not token or token.count(".") != 2:
            raise TokenMalformed("not a compact JWT")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                # expiry is checked below against `now`, strictly
                options={"verify_exp": False, "verify_aud": False},
            )
        except JOSEError as e:
            raise TokenInvalid(str(e)) from e

        username = payload.get("username")
        exp = payload.get("exp")
        if not isinstance(username, str) or not username:
            raise TokenInvalid("token missing username")
        if not isinstance(exp, (int, float)) or isinstance(exp, bool):
            raise TokenInvalid("token missing exp")

        now = now or datetime.now(timezone.utc)
        if exp <= now.timestamp():
            raise TokenInvalid("token expired")

        return SessionClaims(username=username, exp=int(exp))

    def refresh(
        self,
        claims: SessionClaims,
        ttl: timedelta,
        now: datetime | None = None,
    ) -> IssuedToken:
        """Mint a fresh token for the same user."""
        return self.mint(claims.username, ttl, now=now)
