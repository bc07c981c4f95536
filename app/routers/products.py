from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_session
from app.core.responses import ConcatenatedJSONResponse
from app.core.security import SessionClaims
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


@router.get("", response_class=ConcatenatedJSONResponse)
def list_products(
    session: Session = Depends(get_session),
    claims: SessionClaims = Depends(require_session),
):
    """
    List the whole catalog.

    Body: the user name, then the product list.
    """
    products = service.list_products(session)
    return ConcatenatedJSONResponse(claims.username, products)
