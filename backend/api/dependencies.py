"""Shared dependencies for API routes.

The admission controller and the gateway are process-scoped: one instance
each, created on first use. Tests swap them through
``app.dependency_overrides``.
"""

import logging

from fastapi import Depends

from config import settings
from services.gemini_client import ModelGateway
from services.match_analyzer import MatchAnalyzer
from services.rate_limiter import RateAdmissionController

logger = logging.getLogger(__name__)

_rate_limiter = RateAdmissionController()
_gateway: ModelGateway | None = None


def get_rate_limiter() -> RateAdmissionController:
    return _rate_limiter


def get_gateway() -> ModelGateway:
    """Build the gateway from settings once. Raises ConfigurationError if unconfigured."""
    global _gateway
    if _gateway is None:
        _gateway = ModelGateway.from_settings(settings)
        logger.info("Model gateway ready: %s endpoint", _gateway.variant_name)
    return _gateway


def get_analyzer(
    gateway: ModelGateway = Depends(get_gateway),
    rate_limiter: RateAdmissionController = Depends(get_rate_limiter),
) -> MatchAnalyzer:
    return MatchAnalyzer(gateway, rate_limiter)


async def close_gateway() -> None:
    global _gateway
    if _gateway is not None:
        await _gateway.aclose()
        _gateway = None
