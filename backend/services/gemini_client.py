"""Gemini generateContent gateway with two selectable endpoint variants."""

import logging

import httpx
from google.genai import types

from config import Settings
from models.responses import ConfigurationStatus, GatewayConfig
from models.schemas import AlternateEndpoint, EndpointConfig, EndpointVariant, PrimaryEndpoint
from services.errors import (
    ConfigurationError,
    InvalidResponseShape,
    RemoteRateLimited,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

# Biased toward deterministic, concise structured output
GENERATION_CONFIG = types.GenerationConfig(
    temperature=0.3,
    top_k=40,
    top_p=0.8,
    max_output_tokens=2048,
)


def resolve_endpoint(settings: Settings) -> EndpointConfig:
    """Turn configuration flags into the active endpoint variant.

    Raises ConfigurationError when the selected variant has no credential.
    """
    if settings.use_alternate_endpoint:
        if not settings.alternate_auth_token:
            raise ConfigurationError("Alternate endpoint auth token not configured")
        return AlternateEndpoint(
            url=settings.alternate_endpoint_url,
            auth_token=settings.alternate_auth_token,
        )
    if not settings.gemini_api_key:
        raise ConfigurationError("Google Gemini API key not configured")
    return PrimaryEndpoint(url=settings.gemini_endpoint, api_key=settings.gemini_api_key)


def describe_configuration(settings: Settings) -> ConfigurationStatus:
    """Report the endpoint selection without raising or exposing credentials."""
    if settings.use_alternate_endpoint:
        endpoint = settings.alternate_endpoint_url
        auth_configured = bool(settings.alternate_auth_token)
        config_error = None if auth_configured else "Alternate auth token missing"
    else:
        endpoint = settings.gemini_endpoint
        auth_configured = bool(settings.gemini_api_key)
        config_error = None if auth_configured else "Gemini API key missing"

    variant = EndpointVariant.ALTERNATE if settings.use_alternate_endpoint else EndpointVariant.PRIMARY
    return ConfigurationStatus(
        use_alternate_endpoint=settings.use_alternate_endpoint,
        current_endpoint=variant.value,
        endpoint=endpoint,
        alternate_auth_configured=bool(settings.alternate_auth_token),
        gemini_api_key_configured=bool(settings.gemini_api_key),
        auth_configured=auth_configured,
        config_error=config_error,
    )


def build_request_body(prompt: str) -> dict:
    """Wire-format generateContent request with the prompt as a single part."""
    content = types.Content(parts=[types.Part(text=prompt)])
    return {
        "contents": [content.model_dump(mode="json", by_alias=True, exclude_none=True)],
        "generationConfig": GENERATION_CONFIG.model_dump(mode="json", by_alias=True, exclude_none=True),
    }


def extract_candidate_text(payload: object) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or None when any level is missing."""
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) and text else None


def _remote_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    if isinstance(data.get("message"), str):
        return data["message"]
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


class ModelGateway:
    """Sends prompts to the configured endpoint variant and returns raw model text.

    The endpoint is fixed at construction. The HTTP client is created lazily
    and reused across calls; ``transport`` lets tests plug in
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        endpoint: EndpointConfig,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ModelGateway":
        return cls(
            resolve_endpoint(settings),
            timeout=settings.request_timeout_seconds,
            **kwargs,
        )

    @property
    def variant_name(self) -> str:
        return self.endpoint.variant.value

    def current_config(self) -> GatewayConfig:
        return GatewayConfig(variant=self.variant_name, endpoint=self.endpoint.url)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def invoke(self, prompt: str) -> str:
        """Run one generateContent call. No retries."""
        target = self.endpoint.request_target()
        logger.debug("POST %s (%s endpoint)", target.url, self.variant_name)

        try:
            response = await self._get_client().post(
                target.url,
                headers=target.headers,
                params=target.params,
                json=build_request_body(prompt),
            )
        except httpx.TimeoutException as e:
            logger.error("%s endpoint timed out after %ss", self.variant_name, self.timeout)
            raise TransportError(
                f"AI service error: {str(e) or f'timeout of {self.timeout:g}s exceeded'}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("%s endpoint request failed: %s", self.variant_name, e)
            raise TransportError(f"AI service error: {str(e) or type(e).__name__}") from e

        if response.status_code == 429:
            logger.warning("%s endpoint returned 429", self.variant_name)
            raise RemoteRateLimited("Rate limit exceeded on AI service")

        if not response.is_success:
            message = _remote_message(response) or (
                f"Request failed with status code {response.status_code}"
            )
            logger.error(
                "%s endpoint returned HTTP %d: %s",
                self.variant_name, response.status_code, message,
            )
            raise TransportError(f"AI service error: {message}")

        try:
            payload = response.json()
        except ValueError:
            payload = None

        text = extract_candidate_text(payload)
        if text is None:
            logger.error("%s endpoint returned no candidate text", self.variant_name)
            raise InvalidResponseShape("Invalid response from AI service")
        return text
