from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisResult(CamelModel):
    overall_match: int = Field(0, ge=0, le=100)
    strengths: list[str] = []
    weaknesses: list[str] = []
    recommendations: list[str] = []
    key_alignments: list[str] = []
    missing_skills: list[str] = []
    summary: str = ""


class RemainingRequests(CamelModel):
    minute: int = 0
    hour: int = 0


class AnalysisMetadata(CamelModel):
    job_description_pages: int = 0
    cv_pages: int = 0
    analysis_timestamp: str = ""  # ISO-8601, UTC
    remaining_requests: RemainingRequests = RemainingRequests()
    endpoint_used: str = ""  # "Primary" | "Alternate"


class AnalysisResponse(AnalysisResult):
    metadata: AnalysisMetadata = AnalysisMetadata()


class GatewayConfig(CamelModel):
    variant: str
    endpoint: str


class ConfigurationStatus(CamelModel):
    use_alternate_endpoint: bool = False
    current_endpoint: str = ""
    endpoint: str = ""
    alternate_auth_configured: bool = False
    gemini_api_key_configured: bool = False
    auth_configured: bool = False
    config_error: str | None = None


class HealthResponse(CamelModel):
    status: str  # "healthy" | "configuration_error"
    timestamp: str
    configuration: ConfigurationStatus
    remaining_requests: RemainingRequests = RemainingRequests()
    ai_service_config: GatewayConfig | None = None


class ErrorResponse(BaseModel):
    error: str
