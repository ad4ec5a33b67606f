from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Request, UploadFile
from slowapi.util import get_remote_address

from api.dependencies import get_analyzer, get_gateway, get_rate_limiter
from config import settings
from models.responses import AnalysisResponse, ConfigurationStatus, ErrorResponse, HealthResponse
from services.errors import DocumentValidationError
from services.gemini_client import describe_configuration
from services.match_analyzer import MatchAnalyzer
from services.rate_limiter import RateAdmissionController

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    request: Request,
    rate_limiter: RateAdmissionController = Depends(get_rate_limiter),
):
    configuration = describe_configuration(settings)
    return HealthResponse(
        status="healthy" if configuration.auth_configured else "configuration_error",
        timestamp=datetime.now(timezone.utc).isoformat(),
        configuration=configuration,
        remaining_requests=rate_limiter.remaining(get_remote_address(request)),
        ai_service_config=get_gateway().current_config() if configuration.auth_configured else None,
    )


@router.get("/configuration", response_model=ConfigurationStatus)
async def configuration():
    return describe_configuration(settings)


@router.post(
    "/api/analyze",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    request: Request,
    job_description: UploadFile | None = File(None, alias="jobDescription"),
    cv: UploadFile | None = File(None),
    analyzer: MatchAnalyzer = Depends(get_analyzer),
):
    if job_description is None or cv is None:
        raise DocumentValidationError("Both jobDescription and cv PDF files are required")

    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    too_large = f"File too large (max {settings.max_upload_size_mb}MB)"
    # Declared part sizes are checked before either part is read into memory
    if any(upload.size is not None and upload.size > max_bytes for upload in (job_description, cv)):
        raise DocumentValidationError(too_large)

    job_description_pdf = await job_description.read()
    cv_pdf = await cv.read()
    if len(job_description_pdf) > max_bytes or len(cv_pdf) > max_bytes:
        raise DocumentValidationError(too_large)

    return await analyzer.analyze(
        job_description_pdf,
        cv_pdf,
        caller_identifier=get_remote_address(request),
    )
