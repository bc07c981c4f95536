from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry. Read-only from this service.
    """

    __tablename__ = "order_app_api_products"

    product_id: int = Field(
        primary_key=True,
        description="Catalog identifier",
    )

    product_name: str = Field(
        description="Display name of the product",
    )

    product_price: int = Field(
        ge=0,
        description="Unit price in minor currency units",
    )
