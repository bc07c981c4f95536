from sqlmodel import SQLModel, Field


class CartItem(SQLModel, table=True):
    """
    Shopping cart row for a user: one product, one unit.

    product_name and product_price are snapshotted from the Product
    when the row is inserted; the row is never updated afterwards.
    cart_id doubles as the payment gateway order_id.
    """

    __tablename__ = "order_app_api_cart"

    cart_id: int | None = Field(
        default=None,
        primary_key=True,
        description="Assigned by the database (serial)",
    )

    user_id: int = Field(index=True)

    product_id: int

    product_name: str = Field(
        description="Product name when added to cart",
    )

    product_price: int = Field(
        description="Product price when added to cart",
    )

    cart_total_price: int = Field(
        description="Equals product_price (single-unit cart)",
    )
