import json
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import Response


class ConcatenatedJSONResponse(Response):
    """
    A body made of several JSON documents, one after the other.

    Each document is compact JSON followed by a newline, e.g.:

        "alice"
        [{"product_id":1,"product_name":"Tea","product_price":1000}]

    Clients built against this API read the documents in order
    (user name first, then the payload).
    """

    media_type = "application/json"

    def __init__(self, *documents: Any, status_code: int = 200, **kwargs: Any):
        super().__init__(content=documents, status_code=status_code, **kwargs)

    def render(self, content: tuple[Any, ...]) -> bytes:
        return "".join(
            json.dumps(
                jsonable_encoder(doc),
                ensure_ascii=False,
                separators=(",", ":"),
            )
            + "\n"
            for doc in content
        ).encode("utf-8")


# Zero-valued cart document sent ahead of payment status answers
EMPTY_CART: dict[str, Any] = {
    "cart_id": 0,
    "user_id": 0,
    "product_id": 0,
    "product_name": "",
    "product_price": 0,
    "cart_total_price": 0,
}
