"""Shared test configuration and fixtures."""

import json
from types import SimpleNamespace

import limits.storage.memory
import pytest

from models.schemas import ExtractedDocument
from services.rate_limiter import RateAdmissionController

MINIMAL_PDF = b"%PDF-1.4\n1 0 obj<</Type/Catalog>>endobj\ntrailer<</Root 1 0 R>>\n%%EOF"

WELL_FORMED_ANALYSIS = {
    "overallMatch": 78,
    "strengths": ["Strong Python background", "Led distributed teams"],
    "weaknesses": ["Limited Kubernetes exposure"],
    "recommendations": ["Highlight cloud migration work"],
    "keyAlignments": ["FastAPI services in production"],
    "missingSkills": ["Terraform"],
    "summary": "Solid backend candidate with minor infrastructure gaps.",
}


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubGateway:
    """Records prompts and returns a canned model reply."""

    variant_name = "Primary"

    def __init__(self, reply: str | None = None, error: Exception | None = None):
        self.reply = reply if reply is not None else json.dumps(WELL_FORMED_ANALYSIS)
        self.error = error
        self.prompts: list[str] = []

    async def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: exercises the full HTTP surface"
    )


@pytest.fixture
def clock(monkeypatch):
    """Freeze the time source behind the limiter's in-memory storage."""
    fake = FakeClock()
    monkeypatch.setattr(limits.storage.memory, "time", SimpleNamespace(time=fake))
    return fake


@pytest.fixture
def rate_limiter(clock):
    return RateAdmissionController()


@pytest.fixture
def stub_gateway():
    return StubGateway()


@pytest.fixture
def fake_extractor():
    """Extraction stand-in keyed on the PDF bytes it receives."""
    documents: dict[bytes, ExtractedDocument] = {}
    calls: list[bytes] = []

    def extract(pdf_bytes: bytes) -> ExtractedDocument:
        calls.append(pdf_bytes)
        return documents.get(pdf_bytes, ExtractedDocument(text="Some text", page_count=1))

    extract.documents = documents
    extract.calls = calls
    return extract


@pytest.fixture
def minimal_pdf():
    return MINIMAL_PDF


@pytest.fixture
def analysis_payload():
    return dict(WELL_FORMED_ANALYSIS)


@pytest.fixture
def make_gateway():
    return StubGateway
