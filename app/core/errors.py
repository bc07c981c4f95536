from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> PlainTextResponse:
    """
    Render HTTP errors as a plain-text message.

    Also covers the router's own 404 / 405 (headers such as Allow are kept).
    """
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """
    A path variable of the wrong type is a 400.

    Request bodies are validated in app.core.body, not here.
    """
    return PlainTextResponse("Invalid request", status_code=400)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
