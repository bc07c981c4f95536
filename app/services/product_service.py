import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.repositories.product_repo import ProductRepository
from app.schemas.product import ProductRead

logger = logging.getLogger(__name__)


class ProductService:
    """Read-only catalog access."""

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(self, session: Session) -> list[ProductRead]:
        """Full catalog, no pagination."""
        try:
            products = self.repo.list(session)
        except SQLAlchemyError:
            logger.exception("product listing failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to execute query",
            )
        return [ProductRead.model_validate(p) for p in products]
