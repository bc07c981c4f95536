from decimal import Decimal, InvalidOperation

from pydantic import field_validator
from sqlmodel import SQLModel, Field


class PaymentBillRequest(SQLModel):
    """
    Payload for POST /payment/bill/{cart_id}.

    cart_total_price arrives as a decimal string (e.g. "1000.00").
    transaction_id is accepted for client compatibility and ignored.
    Absent fields take zero values.
    """

    cart_total_price: str = "0"
    transaction_id: str = ""
    product_name: str = ""

    @field_validator("cart_total_price")
    @classmethod
    def must_be_decimal(cls, v: str) -> str:
        try:
            amount = Decimal(v.strip())
        except InvalidOperation:
            raise ValueError("cart_total_price must be a decimal number")
        if not amount.is_finite():
            raise ValueError("cart_total_price must be finite")
        return v.strip()

    @property
    def gross_amount(self) -> int:
        """Total in integer minor units, truncated toward zero."""
        return int(Decimal(self.cart_total_price))


# ---- Midtrans charge request (Core API wire names) ----


class TransactionDetails(SQLModel):
    order_id: str
    gross_amount: int


class CustomerDetails(SQLModel):
    first_name: str


class ItemDetails(SQLModel):
    id: str
    price: int
    quantity: int = Field(default=1, gt=0)
    name: str


class ChargeRequest(SQLModel):
    """
    QRIS charge for one cart row.
    """

    payment_type: str = "qris"
    transaction_details: TransactionDetails
    customer_details: CustomerDetails
    item_details: list[ItemDetails]
