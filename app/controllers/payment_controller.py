from fastapi import APIRouter, Depends
from app.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from app.services.payment_service import create_payment_intent
from app.utils.dependencies import get_current_user_email

router = APIRouter(tags=["Payments"])


@router.post("/create-payment-intent", response_model=PaymentIntentResponse, dependencies=[Depends(get_current_user_email)])
async def payment_intent(request: PaymentIntentRequest):
    """Create a card payment intent for the given price"""
    client_secret = await create_payment_intent(request.amount)
    return PaymentIntentResponse(client_secret=client_secret)
