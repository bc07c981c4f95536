from typing import Any, Callable, TypeVar

from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel, ValidationError

from app.core.auth import require_session
from app.core.security import SessionClaims

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_json(request: Request, model: type[ModelT], detail: str) -> ModelT:
    """
    Decode the request body into `model`.

    Raises:
        HTTPException(400): body is not JSON, or a field has the wrong type.
    """
    try:
        data: Any = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    # a JSON null decodes to an all-default payload
    if data is None:
        data = {}

    try:
        return model.model_validate(data)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def json_body(
    model: type[ModelT],
    detail: str = "Invalid request payload",
) -> Callable[..., Any]:
    """Dependency reading a public route's body."""

    async def dependency(request: Request) -> ModelT:
        return await read_json(request, model, detail)

    return dependency


def session_json_body(
    model: type[ModelT],
    detail: str = "Invalid request payload",
) -> Callable[..., Any]:
    """
    Dependency reading a protected route's body.

    The session is checked first, so a request without a valid cookie
    is a 401 whatever its body holds.
    """

    async def dependency(
        request: Request,
        claims: SessionClaims = Depends(require_session),
    ) -> ModelT:
        return await read_json(request, model, detail)

    return dependency
