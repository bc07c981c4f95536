import logging

from fastapi import HTTPException, status

from app.core.midtrans_client import MidtransClient, PaymentGatewayError
from app.schemas.payment import (
    ChargeRequest,
    CustomerDetails,
    ItemDetails,
    PaymentBillRequest,
    TransactionDetails,
)

logger = logging.getLogger(__name__)


class PaymentService:
    """
    QRIS payments through Midtrans.

    The cart_id is reused as the Midtrans order_id, so each cart row maps
    to one payment.
    """

    def build_charge(
        self,
        cart_id: str,
        user_name: str,
        payload: PaymentBillRequest,
    ) -> ChargeRequest:
        gross_amount = payload.gross_amount
        return ChargeRequest(
            payment_type="qris",
            transaction_details=TransactionDetails(
                order_id=str(cart_id),
                gross_amount=gross_amount,
            ),
            customer_details=CustomerDetails(first_name=user_name),
            item_details=[
                ItemDetails(
                    id=str(cart_id),
                    price=gross_amount,
                    quantity=1,
                    name=payload.product_name,
                )
            ],
        )

    def create_bill(
        self,
        gateway: MidtransClient,
        cart_id: str,
        user_name: str,
        payload: PaymentBillRequest,
    ) -> dict:
        """
        Submit the charge and return Midtrans' answer verbatim.

        Raises:
            HTTPException(500): gateway failure.
        """
        charge = self.build_charge(cart_id, user_name, payload)
        try:
            return gateway.charge(charge.model_dump())
        except PaymentGatewayError:
            logger.exception("charge failed for cart_id=%s", cart_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server error",
            )

    def get_status(self, gateway: MidtransClient, cart_id: str) -> dict:
        try:
            return gateway.check(str(cart_id))
        except PaymentGatewayError:
            logger.exception("status check failed for cart_id=%s", cart_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server error",
            )
