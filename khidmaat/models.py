# khidmaat/models.py
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter
from pydantic.alias_generators import to_camel

# JSON from the frontend is camelCase; phone numbers and the like may arrive as numbers
_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class CustomerInfo(BaseModel):
    model_config = _camel

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ServiceType(BaseModel):
    model_config = _camel

    service_name: Optional[str] = None


class ServiceRequest(BaseModel):
    model_config = _camel

    service_type: Optional[ServiceType] = None
    delivery_option: Optional[str] = None
    selected_city: Optional[str] = None
    message: Optional[str] = None


class CreateSessionIn(BaseModel):
    customer: Optional[CustomerInfo] = None
    service: Optional[ServiceRequest] = None


class CreateSessionOut(BaseModel):
    success: bool = True
    url: str


class ErrorOut(BaseModel):
    success: bool = False
    error: str


class CheckoutSessionMetadata(BaseModel):
    """Strings stored on the Stripe session and read back from its webhook events."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    customer_address: str = ""
    service_name: str = ""
    delivery_option: str = ""
    selected_city: str = ""
    service_message: str = ""

    def to_stripe(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class CreatedSession(BaseModel):
    id: str
    url: str


CHECKOUT_COMPLETED = "checkout.session.completed"


class CheckoutSession(BaseModel):
    id: str
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None


class CheckoutSessionData(BaseModel):
    object: CheckoutSession


class CheckoutSessionCompleted(BaseModel):
    id: Optional[str] = None
    type: Literal["checkout.session.completed"]
    data: CheckoutSessionData


class EventData(BaseModel):
    object: Dict[str, Any] = Field(default_factory=dict)


class OtherEvent(BaseModel):
    """Any event type that is acknowledged without being read."""

    id: Optional[str] = None
    type: str
    data: EventData = Field(default_factory=EventData)


def _event_kind(v: Any) -> str:
    kind = v.get("type") if isinstance(v, dict) else getattr(v, "type", None)
    return "completed" if kind == CHECKOUT_COMPLETED else "other"


# Stripe event envelope, tagged by `type`
WebhookEvent = Annotated[
    Union[
        Annotated[CheckoutSessionCompleted, Tag("completed")],
        Annotated[OtherEvent, Tag("other")],
    ],
    Discriminator(_event_kind),
]

_webhook_event = TypeAdapter(WebhookEvent)


def parse_event(payload: Union[bytes, str]) -> Union[CheckoutSessionCompleted, OtherEvent]:
    """Decode a webhook body; raises pydantic's ValidationError on anything else."""
    return _webhook_event.validate_json(payload)


class CompletedPayment(BaseModel):
    session_id: str
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    metadata: CheckoutSessionMetadata

    @classmethod
    def from_session(cls, session: CheckoutSession) -> "CompletedPayment":
        return cls(
            session_id=session.id,
            amount_total=session.amount_total,
            currency=session.currency,
            metadata=CheckoutSessionMetadata.model_validate(session.metadata or {}),
        )


class WebhookAck(BaseModel):
    received: bool = True
