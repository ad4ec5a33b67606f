"""Sliding-window admission gate contracts."""

from pydantic import BaseModel


class AdmissionDecision(BaseModel):
    allowed: bool
    reason: str | None = None
