"""Extraction output: text and page count of one PDF."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExtractedDocument(BaseModel):
    """Derived once per uploaded PDF and never modified afterwards."""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    page_count: int = Field(0, ge=0)
    raw_metadata: dict[str, Any] = {}  # parser-provided document info, opaque
