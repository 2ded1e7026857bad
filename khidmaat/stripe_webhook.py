# khidmaat/stripe_webhook.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from .deps import get_gateway
from .gateway import StripeGateway
from .models import CheckoutSessionCompleted, CompletedPayment, WebhookAck, WebhookEvent

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment", tags=["stripe"])


def handle_event(event: WebhookEvent) -> Optional[CompletedPayment]:
    """Record a completed checkout; every other event type is a no-op."""
    if not isinstance(event, CheckoutSessionCompleted):
        logger.info("Stripe webhook ignored: %s (%s)", event.type, event.id)
        return None

    payment = CompletedPayment.from_session(event.data.object)
    amount = (payment.amount_total or 0) / 100
    logger.info(
        "Payment successful: session=%s amount=%.2f %s metadata=%s",
        payment.session_id,
        amount,
        (payment.currency or "").upper(),
        payment.metadata.to_stripe(),
    )
    return payment


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(req: Request, gateway: StripeGateway = Depends(get_gateway)) -> WebhookAck:
    """Stripe event delivery. Verified events are always acknowledged, handled or not."""
    payload = await req.body()
    sig = req.headers.get("stripe-signature", "")

    event = gateway.construct_event(payload, sig)
    handle_event(event)

    return WebhookAck()
