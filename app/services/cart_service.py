import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.cart import CartAddRequest, CartRead

logger = logging.getLogger(__name__)


def _server_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    )


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence
      - snapshot product name/price into the cart row
      - one product, one unit per row (cart_total_price == product_price)

    The user_id comes from the path and is not matched against the session.
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    def get_cart(self, session: Session, user_id: int) -> CartRead:
        try:
            item = self.cart_repo.first_for_user(session, user_id)
        except SQLAlchemyError:
            logger.exception("cart lookup failed for user_id=%s", user_id)
            raise _server_error("Server error")

        if item is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart not found",
            )
        return CartRead.model_validate(item)

    def add_to_cart(
        self,
        session: Session,
        user_id: int,
        payload: CartAddRequest,
    ) -> CartRead:
        """
        Add a product to the user's cart.

        The product lookup and the insert are separate statements;
        the snapshot reflects the product as read by the lookup.
        """
        try:
            product = self.product_repo.get_by_id(session, payload.product_id)
        except SQLAlchemyError:
            logger.exception("product lookup failed for product_id=%s", payload.product_id)
            raise _server_error("Server error")

        if product is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        try:
            item = self.cart_repo.create_from_product(
                session, user_id=user_id, product=product
            )
        except SQLAlchemyError:
            logger.exception("cart insert failed for user_id=%s", user_id)
            raise _server_error("Failed to insert cart")

        return CartRead.model_validate(item)

    def delete_from_cart(self, session: Session, cart_id: int) -> None:
        """Delete a cart row. Deleting a missing row is not an error."""
        try:
            removed = self.cart_repo.delete_by_id(session, cart_id)
        except SQLAlchemyError:
            logger.exception("cart delete failed for cart_id=%s", cart_id)
            raise _server_error("Failed to delete cart")
        logger.info("deleted %d cart row(s) for cart_id=%s", removed, cart_id)
