from fastapi import APIRouter, Depends

from app.core.auth import require_session
from app.core.body import session_json_body
from app.core.context import AppContext, get_context
from app.core.responses import EMPTY_CART, ConcatenatedJSONResponse
from app.core.security import SessionClaims
from app.schemas.payment import PaymentBillRequest
from app.services.payment_service import PaymentService

router = APIRouter(prefix="/payment", tags=["Payment"])

service = PaymentService()


@router.post("/bill/{cart_id}", response_class=ConcatenatedJSONResponse)
def create_payment_bill(
    cart_id: str,
    payload: PaymentBillRequest = Depends(session_json_body(PaymentBillRequest)),
    claims: SessionClaims = Depends(require_session),
    context: AppContext = Depends(get_context),
):
    """
    Start a QRIS payment for a cart row.

    Body: the user name, then Midtrans' charge response.
    """
    res = service.create_bill(context.gateway, cart_id, claims.username, payload)
    return ConcatenatedJSONResponse(claims.username, res)


@router.get("/status/{cart_id}", response_class=ConcatenatedJSONResponse)
def get_payment_status(
    cart_id: str,
    context: AppContext = Depends(get_context),
):
    """
    Payment status for a cart row.

    No session required. Body: an empty cart document, then
    Midtrans' status response.
    """
    res = service.get_status(context.gateway, cart_id)
    return ConcatenatedJSONResponse(EMPTY_CART, res)
