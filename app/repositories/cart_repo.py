from sqlalchemy import delete
from sqlmodel import Session, select

from app.models.cart import CartItem
from app.models.product import Product


class CartRepository:

    def first_for_user(self, session: Session, user_id: int) -> CartItem | None:
        """
        First cart row of a user, or None.

        The table allows several rows per user; only the lowest cart_id
        is returned.
        """
        stmt = (
            select(CartItem)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.cart_id)
        )
        return session.exec(stmt).first()

    def create_from_product(
            self,
            session: Session,
            *,
            user_id: int,
            product: Product,
    ) -> CartItem:
        """
        Insert a CartItem from a Product, snapshotting:
          - product_name
          - product_price (also the cart_total_price of a one-unit row)

        The generated cart_id is populated on the returned row.
        """
        item = CartItem(
            user_id=user_id,
            product_id=product.product_id,
            product_name=product.product_name,
            product_price=product.product_price,
            cart_total_price=product.product_price,
        )
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete_by_id(self, session: Session, cart_id: int) -> int:
        """Delete a row by cart_id. Returns the number of rows removed."""
        result = session.exec(delete(CartItem).where(CartItem.cart_id == cart_id))
        session.commit()
        return result.rowcount
