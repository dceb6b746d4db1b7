import logging
from typing import Any, Optional
import stripe
from starlette.concurrency import run_in_threadpool
from app.config import settings
from app.utils.errors import ValidationError, UpstreamError

logger = logging.getLogger(__name__)


def _init_stripe() -> Optional[str]:
    """Configure Stripe with the API key from configuration"""
    api_key = settings.STRIPE_SECRET_KEY
    if not api_key:
        return None
    stripe.api_key = api_key
    return api_key


def to_smallest_unit(amount: Any) -> int:
    """Validate a price and convert it to cents"""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount <= 0:
        raise ValidationError("Invalid price")
    return int(round(amount * 100))


async def create_payment_intent(amount: Any) -> str:
    """Create a card PaymentIntent and return its client secret"""
    amount_in_cents = to_smallest_unit(amount)

    if not _init_stripe():
        raise UpstreamError("Stripe secret key is not configured.")

    try:
        payment_intent = await run_in_threadpool(
            stripe.PaymentIntent.create,
            amount=amount_in_cents,
            currency=settings.STRIPE_CURRENCY,
            payment_method_types=["card"],
        )
    except stripe.StripeError as e:
        logger.error(f"Stripe error: {str(e)}")
        raise UpstreamError(str(e))

    return payment_intent.client_secret
