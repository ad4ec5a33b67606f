import os
from pydantic_settings import BaseSettings

DEFAULT_ALTERNATE_ENDPOINT = "https://intertest.woolf.engineering/invoke"
DEFAULT_GEMINI_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
)


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    # Endpoint selection: Alternate uses a bearer token, Primary a ?key= API key
    use_alternate_endpoint: bool = False
    alternate_endpoint_url: str = DEFAULT_ALTERNATE_ENDPOINT
    alternate_auth_token: str = ""
    gemini_endpoint: str = DEFAULT_GEMINI_ENDPOINT
    gemini_api_key: str = ""

    max_upload_size_mb: int = 10
    request_timeout_seconds: float = 30.0
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
