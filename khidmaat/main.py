# khidmaat/main.py
import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import Settings
from .errors import PaymentAppError, SignatureVerificationError
from .gateway import StripeGateway
from .payments import router as payments_router
from .routers.health import router as health_router
from .stripe_webhook import router as stripe_router

log = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )


async def payment_error_handler(request: Request, exc: PaymentAppError):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


async def webhook_error_handler(request: Request, exc: SignatureVerificationError):
    return PlainTextResponse(f"Webhook Error: {exc.message}", status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()) if p != 'body')}: {e.get('msg')}" for e in errors
    )
    return JSONResponse(status_code=400, content={"success": False, "error": detail or "Invalid request body"})


def create_app(settings: Optional[Settings] = None, gateway: Optional[StripeGateway] = None) -> FastAPI:
    """Build the API. Without arguments, settings come from the environment and fail fast."""
    settings = settings or Settings()
    setup_logging(settings.log_level)
    gateway = gateway or StripeGateway.from_settings(settings)

    if not settings.client_url:
        log.warning("CLIENT_URL not set: CORS allows any origin and checkout redirect URLs are relative")

    app = FastAPI(title="Khidmaat API", version="1.0.0")
    app.state.settings = settings
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # resolved along the exception MRO, so the webhook error keeps its plain-text body
    app.add_exception_handler(SignatureVerificationError, webhook_error_handler)
    app.add_exception_handler(PaymentAppError, payment_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # routers
    app.include_router(health_router)
    app.include_router(payments_router)
    app.include_router(stripe_router)

    return app


def run() -> None:
    import uvicorn

    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
    )
