# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from pydantic import ValidationError
import uvicorn

from app.core.config import get_settings
from app.core.context import AppContext, build_context
from app.core.errors import register_exception_handlers
from app.database import create_db_and_tables

# Routers
from app.routers.users import router as users_router
from app.routers.products import router as products_router
from app.routers.cart import router as cart_router
from app.routers.payment import router as payment_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    `context` is built from environment settings at startup unless one
    is passed in (tests pass their own engine and gateway).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
          - Build the server context (settings, DB pool, token signer, gateway).
          - Verify DB connectivity and create tables.

        Shutdown:
          - Release gateway connections and the DB pool, when built here.
            An injected context stays owned by the caller.
        """
        ctx = context or build_context(get_settings())
        app.state.context = ctx

        logger.info("🔄 Startup: Connecting to Postgres...")
        try:
            create_db_and_tables(ctx.engine)
            logger.info("✅ Startup: DB connection OK, tables verified.")
        except Exception as e:
            logger.error(f"❌ Startup: DB connection FAILED: {e}")
            raise
        yield
        if context is None:
            ctx.gateway.close()
            ctx.engine.dispose()

    app = FastAPI(
        title="order-app-api",
        version="0.1.0",
        lifespan=lifespan,
        # only the routes below are served
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    register_exception_handlers(app)

    app.include_router(users_router)
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(payment_router)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "order-app-api"}

    return app


app = create_app()


def run() -> None:
    """Entry point: fail fast on bad configuration, then serve."""
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.critical(f"Error loading configuration: {e}")
        raise SystemExit(1)

    logger.info("order-app-api listen and serve :8080")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
