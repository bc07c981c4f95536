from fastapi import Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie

from app.core.context import AppContext, get_context
from app.core.security import IssuedToken, SessionClaims, TokenInvalid, TokenMalformed

SESSION_COOKIE = "token"

# Cookie scheme:
# - auto_error=False => a missing cookie does NOT raise the default 403,
#   so we can answer with our own 401.
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE, auto_error=False)


def require_session(
    token: str | None = Depends(cookie_scheme),
    context: AppContext = Depends(get_context),
) -> SessionClaims:
    """
    Enforce a valid session cookie.

    Returns:
        The verified claims (username, exp).

    Raises:
        HTTPException(401): cookie missing, bad signature, or expired.
        HTTPException(400): cookie value is not a token at all.
    """
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    try:
        return context.sessions.verify(token)
    except TokenMalformed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Bad request",
        )
    except TokenInvalid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


def set_session_cookie(
    response: Response,
    issued: IssuedToken,
    hardened: bool = False,
) -> None:
    """
    Write the session cookie with Expires = token expiry.

    By default no HttpOnly / Secure / SameSite attribute is sent;
    `hardened=True` adds all three (SameSite=Lax).
    """
    response.set_cookie(
        key=SESSION_COOKIE,
        value=issued.token,
        expires=issued.expires_at,
        path="/",
        httponly=hardened,
        secure=hardened,
        samesite="lax" if hardened else None,
    )
