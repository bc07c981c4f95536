from sqlmodel import Session, select

from app.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations.
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: int) -> Product | None:
        stmt = select(Product).where(Product.product_id == product_id)
        return session.exec(stmt).first()

    def list(self, session: Session) -> list[Product]:
        """All products, in whatever order the store returns them."""
        return session.exec(select(Product)).all()
