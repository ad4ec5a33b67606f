"""Inter-stage Pydantic contracts for the analysis pipeline."""

from models.schemas.admission_decision import AdmissionDecision
from models.schemas.endpoint_config import (
    AlternateEndpoint,
    EndpointConfig,
    EndpointVariant,
    PrimaryEndpoint,
    RequestTarget,
)
from models.schemas.extracted_document import ExtractedDocument
from models.schemas.validation_result import ValidationResult

__all__ = [
    "AdmissionDecision",
    "AlternateEndpoint",
    "EndpointConfig",
    "EndpointVariant",
    "ExtractedDocument",
    "PrimaryEndpoint",
    "RequestTarget",
    "ValidationResult",
]
