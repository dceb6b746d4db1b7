from typing import Any
from app.schemas.base import CamelModel


class PaymentIntentRequest(CamelModel):
    # Validated by the payment service so a bad amount is a 400, not a 422
    amount: Any = None


class PaymentIntentResponse(CamelModel):
    client_secret: str
