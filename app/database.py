from collections.abc import Iterator

from fastapi import Depends
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import Settings
from app.core.context import AppContext, get_context

# ---------------------------------------------------------
# Postgres connection pool
#
# - one Engine per process, shared by all requests
# - pool_pre_ping=True: validate connections before using them
#
# Each request gets its own Session; the connection goes back to the
# pool when the Session closes, on success and on error.
# ---------------------------------------------------------


def build_engine(settings: Settings) -> Engine:
    """Create the process-wide engine from settings."""
    return create_engine(
        settings.database_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
    )


def create_db_and_tables(engine: Engine) -> None:
    """
    Create the order_app_api_* tables if they do not exist.

    This is called once on application startup.
    """
    # Import models so SQLModel metadata is populated before create_all()
    from app.models import user as _user_models  # noqa: F401
    from app.models import product as _product_models  # noqa: F401
    from app.models import cart as _cart_models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session(context: AppContext = Depends(get_context)) -> Iterator[Session]:
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(context.engine) as session:
        yield session
