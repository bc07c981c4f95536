from sqlmodel import SQLModel


class ProductRead(SQLModel):
    """Response schema for a catalog entry."""

    product_id: int
    product_name: str
    product_price: int
