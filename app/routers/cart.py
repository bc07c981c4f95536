from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_session
from app.core.body import session_json_body
from app.core.responses import ConcatenatedJSONResponse
from app.core.security import SessionClaims
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartAddRequest
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.get("/{user_id}", response_class=ConcatenatedJSONResponse)
def get_cart(
    user_id: int,
    session: Session = Depends(get_session),
    claims: SessionClaims = Depends(require_session),
):
    """
    Get the cart row of `user_id`.

    Body: the user name, then the cart row.
    """
    cart = service.get_cart(session, user_id)
    return ConcatenatedJSONResponse(claims.username, cart)


@router.post("/add/{user_id}", response_class=ConcatenatedJSONResponse)
def add_to_cart(
    user_id: int,
    payload: CartAddRequest = Depends(session_json_body(CartAddRequest)),
    session: Session = Depends(get_session),
    claims: SessionClaims = Depends(require_session),
):
    """
    Put a product into `user_id`'s cart.

    Returns the created row, including its cart_id.
    """
    cart = service.add_to_cart(session, user_id, payload)
    return ConcatenatedJSONResponse(claims.username, cart)


@router.delete("/delete/{cart_id}", response_class=ConcatenatedJSONResponse)
def delete_from_cart(
    cart_id: int,
    session: Session = Depends(get_session),
    claims: SessionClaims = Depends(require_session),
):
    """
    Remove a cart row. Succeeds even if the row does not exist.

    Body: the user name only.
    """
    service.delete_from_cart(session, cart_id)
    return ConcatenatedJSONResponse(claims.username)
