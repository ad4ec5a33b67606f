"""Orchestrator: CV / job description compatibility analysis.

Pipeline (fail-fast, no retries):
1. Structural validation of both PDFs
2. Concurrent text extraction
3. Text cleaning + empty-text check
4. Local admission control for the caller
5. Prompt -> model gateway -> response normalization
6. Result + metadata envelope
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from models.responses import AnalysisMetadata, AnalysisResponse
from models.schemas import ExtractedDocument
from services import pdf_parser, prompt_builder, response_normalizer
from services.errors import (
    AdmissionRejected,
    AnalysisFailure,
    DocumentValidationError,
)
from services.gemini_client import ModelGateway
from services.rate_limiter import DEFAULT_IDENTIFIER, RateAdmissionController

logger = logging.getLogger(__name__)

JOB_DESCRIPTION_LABEL = "Job description"
CV_LABEL = "CV"


class MatchAnalyzer:
    """Composes validation, extraction, admission, gateway and normalization.

    ``extractor`` is the PDF text extraction function; it runs in a worker
    thread so both documents are parsed concurrently.
    """

    def __init__(
        self,
        gateway: ModelGateway,
        rate_limiter: RateAdmissionController,
        extractor: Callable[[bytes], ExtractedDocument] = pdf_parser.extract_document,
    ):
        self.gateway = gateway
        self.rate_limiter = rate_limiter
        self.extractor = extractor

    async def analyze(
        self,
        job_description_pdf: bytes,
        cv_pdf: bytes,
        caller_identifier: str | None = None,
    ) -> AnalysisResponse:
        """Run the full pipeline. Raises AnalysisFailure on any failure."""
        identifier = caller_identifier or DEFAULT_IDENTIFIER
        try:
            return await self._run(job_description_pdf, cv_pdf, identifier)
        except Exception as e:
            failure = AnalysisFailure.from_error(e)
            if failure.is_bad_request:
                logger.info("Analysis rejected for %s: %s", identifier, failure.message)
            else:
                logger.error("Analysis failed for %s: %s", identifier, failure.message)
            if failure is e:
                raise
            raise failure from e

    async def _run(self, job_description_pdf: bytes, cv_pdf: bytes, identifier: str) -> AnalysisResponse:
        # --- Stage 1: structural validation, before any parsing cost ---
        _validate(JOB_DESCRIPTION_LABEL, job_description_pdf)
        _validate(CV_LABEL, cv_pdf)

        # --- Stage 2: extraction (independent, first failure wins) ---
        job_document, cv_document = await asyncio.gather(
            asyncio.to_thread(self.extractor, job_description_pdf),
            asyncio.to_thread(self.extractor, cv_pdf),
        )

        # --- Stage 3: cleaning ---
        job_text = _readable_text(JOB_DESCRIPTION_LABEL, job_document)
        cv_text = _readable_text(CV_LABEL, cv_document)

        # --- Stage 4: admission ---
        decision = self.rate_limiter.check(identifier)
        if not decision.allowed:
            raise AdmissionRejected(decision.reason or "Rate limit exceeded")

        # --- Stage 5: model call ---
        logger.info("Using %s endpoint for analysis", self.gateway.variant_name)
        prompt = prompt_builder.build_analysis_prompt(cv_text, job_text)
        raw_reply = await self.gateway.invoke(prompt)
        result = response_normalizer.normalize(raw_reply)

        # --- Stage 6: envelope ---
        metadata = AnalysisMetadata(
            job_description_pages=job_document.page_count,
            cv_pages=cv_document.page_count,
            analysis_timestamp=datetime.now(timezone.utc).isoformat(),
            remaining_requests=self.rate_limiter.remaining(identifier),
            endpoint_used=self.gateway.variant_name,
        )
        return AnalysisResponse(**result.model_dump(), metadata=metadata)


def _validate(label: str, pdf_bytes: bytes) -> None:
    validation = pdf_parser.validate_pdf(pdf_bytes)
    if not validation.is_valid:
        logger.warning("%s PDF failed validation: %s", label, validation.error)
        raise DocumentValidationError(f"{label} PDF error: {validation.error}")


def _readable_text(label: str, document: ExtractedDocument) -> str:
    text = pdf_parser.clean_text(document.text)
    if not text:
        logger.warning("%s PDF has no readable text (%d pages)", label, document.page_count)
        raise DocumentValidationError(f"{label} PDF contains no readable text")
    return text
