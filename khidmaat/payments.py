# khidmaat/payments.py
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from .config import Settings
from .deps import get_gateway, get_settings
from .errors import ValidationError
from .gateway import StripeGateway
from .models import (
    CheckoutSessionMetadata,
    CreateSessionIn,
    CreateSessionOut,
    CustomerInfo,
    ErrorOut,
    ServiceRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment", tags=["payments"])

BRAND = "Khidmaat"
CURRENCY = "aed"
ADVANCE_FEE = 1000  # AED 10.00 in fils
FEE_DESCRIPTION = "Advance service fee (AED 10). Final price quoted after inspection."
DEFAULT_SERVICE_NAME = "Service Request"
MAX_TEXT_LENGTH = 500  # Stripe caps metadata values at 500 characters


def require_customer(customer: Optional[CustomerInfo]) -> CustomerInfo:
    if customer is None or not (customer.name or "").strip() or not (customer.email or "").strip():
        raise ValidationError("Customer name and email are required")
    return customer


def service_name_of(service: ServiceRequest) -> str:
    name = service.service_type.service_name if service.service_type else None
    return name or DEFAULT_SERVICE_NAME


def build_metadata(customer: CustomerInfo, service: ServiceRequest) -> CheckoutSessionMetadata:
    return CheckoutSessionMetadata(
        customer_name=customer.name or "",
        customer_email=customer.email or "",
        customer_phone=customer.phone or "",
        customer_address=(customer.address or "")[:MAX_TEXT_LENGTH],
        service_name=service_name_of(service),
        delivery_option=service.delivery_option or "",
        selected_city=service.selected_city or "",
        service_message=(service.message or "")[:MAX_TEXT_LENGTH],
    )


def build_session_params(
    customer: CustomerInfo,
    service: ServiceRequest,
    client_url: Optional[str],
) -> Dict[str, Any]:
    """Checkout Session parameters for the fixed advance fee.

    The price and currency never depend on the request.
    """
    base = client_url or ""
    return {
        "mode": "payment",
        "payment_method_types": ["card"],
        "customer_email": customer.email,
        "line_items": [{
            "price_data": {
                "currency": CURRENCY,
                "product_data": {
                    "name": f"{BRAND} - {service_name_of(service)}",
                    "description": FEE_DESCRIPTION,
                },
                "unit_amount": ADVANCE_FEE,
            },
            "quantity": 1,
        }],
        "metadata": build_metadata(customer, service).to_stripe(),
        "success_url": f"{base}/#/submit-success",
        "cancel_url": f"{base}/#/submit-cancel",
    }


@router.post(
    "/create-session",
    response_model=CreateSessionOut,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
def create_session(
    payload: Optional[CreateSessionIn] = Body(default=None),
    gateway: StripeGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> CreateSessionOut:
    """Start a hosted checkout for the advance fee and return its URL."""
    payload = payload or CreateSessionIn()
    customer = require_customer(payload.customer)
    service = payload.service or ServiceRequest()

    params = build_session_params(customer, service, settings.client_url)
    sess = gateway.create_checkout_session(params)

    logger.info("Created checkout session %s for %s", sess.id, params["metadata"]["serviceName"])
    return CreateSessionOut(url=sess.url)
