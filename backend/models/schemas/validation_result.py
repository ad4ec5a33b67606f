"""Outcome of the structural PDF checks run before extraction."""

from pydantic import BaseModel


class ValidationResult(BaseModel):
    is_valid: bool
    error: str | None = None
