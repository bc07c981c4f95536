from sqlmodel import SQLModel


class CartAddRequest(SQLModel):
    """
    Payload for adding a product to a user's cart.

    A missing product_id is 0, which matches no product.
    """

    product_id: int = 0


class CartRead(SQLModel):
    """
    Read model for a single cart row.
    """

    cart_id: int
    user_id: int
    product_id: int
    product_name: str
    product_price: int
    cart_total_price: int
