# khidmaat/gateway.py
import logging
from typing import Any, Dict

import stripe

from .config import Settings
from .errors import ProviderError, SignatureVerificationError
from .models import CreatedSession, WebhookEvent, parse_event

logger = logging.getLogger(__name__)


class StripeGateway:
    """Holds the Stripe credentials and is the only place that talks to Stripe.

    Built once at startup and only read afterwards. The API key goes out with
    each request rather than through the global ``stripe.api_key``.
    """

    def __init__(self, api_key: str, webhook_secret: str) -> None:
        self._api_key = api_key
        self._webhook_secret = webhook_secret

    @classmethod
    def from_settings(cls, settings: Settings) -> "StripeGateway":
        return cls(settings.stripe_secret_key, settings.stripe_webhook_secret)

    def create_checkout_session(self, params: Dict[str, Any]) -> CreatedSession:
        try:
            sess = stripe.checkout.Session.create(api_key=self._api_key, **params)
        except stripe.StripeError as e:
            logger.error("Stripe Checkout create failed: %s", e)
            raise ProviderError(e.user_message or str(e)) from e
        return CreatedSession(id=sess.id, url=sess.url)

    def construct_event(self, payload: bytes, sig_header: str) -> WebhookEvent:
        """Verify the signature over the raw body, then decode the event.

        Anything that fails either step is a SignatureVerificationError.
        """
        try:
            stripe.WebhookSignature.verify_header(
                payload.decode("utf-8"),
                sig_header,
                self._webhook_secret,
                tolerance=stripe.Webhook.DEFAULT_TOLERANCE,
            )
            # pydantic's ValidationError and UnicodeDecodeError are ValueErrors too
            return parse_event(payload)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning(
                "Stripe webhook verify FAILED: %s; sig_header_present=%s", e, bool(sig_header)
            )
            raise SignatureVerificationError(str(e)) from e
