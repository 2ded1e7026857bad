# khidmaat/errors.py


class PaymentAppError(Exception):
    """Base for the failures the payment routes turn into HTTP responses."""

    error_code: str = "APP_ERROR"
    status_code: int = 500
    message: str = "An application error occurred"

    def __init__(self, message: str | None = None, error_code: str | None = None) -> None:
        self.message = message or self.__class__.message
        self.error_code = error_code or self.__class__.error_code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(error_code={self.error_code!r}, message={self.message!r})"


class ValidationError(PaymentAppError):
    """Client input is missing required fields."""

    error_code = "VALIDATION_ERROR"
    status_code = 400
    message = "Validation failed"


class SignatureVerificationError(PaymentAppError):
    """Webhook body or signature did not verify."""

    error_code = "SIGNATURE_VERIFICATION_ERROR"
    status_code = 400
    message = "Signature verification failed"


class ProviderError(PaymentAppError):
    """Stripe rejected or failed the request."""

    error_code = "PROVIDER_ERROR"
    status_code = 500
    message = "Payment provider request failed"
