# khidmaat/deps.py
from fastapi import Request

from .config import Settings
from .gateway import StripeGateway


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> StripeGateway:
    return request.app.state.gateway
