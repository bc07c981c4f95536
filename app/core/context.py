from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.engine import Engine

from app.core.config import Settings
from app.core.midtrans_client import MidtransClient
from app.core.security import SessionAuthority


@dataclass
class AppContext:
    """
    Process-wide collaborators, built once at startup and read-only after.

      - settings: parsed configuration
      - engine: database connection pool
      - sessions: token signer/verifier holding the JWT secret
      - gateway: Midtrans Core API client
    """

    settings: Settings
    engine: Engine
    sessions: SessionAuthority
    gateway: MidtransClient


def build_context(settings: Settings) -> AppContext:
    """Construct every collaborator from settings."""
    # local import: app.database depends on this module for get_context
    from app.database import build_engine

    return AppContext(
        settings=settings,
        engine=build_engine(settings),
        sessions=SessionAuthority(settings.JWT_SECRET, settings.JWT_ALG),
        gateway=MidtransClient(
            server_key=settings.MIDTRANS_SERVER_KEY,
            environment=settings.MIDTRANS_ENVIRONMENT,
            timeout=settings.MIDTRANS_TIMEOUT_SECONDS,
        ),
    )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context stored on app.state."""
    return request.app.state.context
