"""Endpoint variants for the model gateway.

Exactly one variant is active per gateway. Each variant knows how to
address itself, so the gateway never branches on the variant when
building a request.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class EndpointVariant(str, Enum):
    PRIMARY = "Primary"
    ALTERNATE = "Alternate"


class RequestTarget(BaseModel):
    url: str
    headers: dict[str, str]
    params: dict[str, str] = {}


class PrimaryEndpoint(BaseModel):
    """Google Gemini API; the API key travels as the ``key`` query parameter."""
    model_config = ConfigDict(frozen=True)

    variant: Literal[EndpointVariant.PRIMARY] = EndpointVariant.PRIMARY
    url: str
    api_key: str = Field(repr=False)

    def request_target(self) -> RequestTarget:
        return RequestTarget(
            url=self.url,
            headers={"Content-Type": "application/json"},
            params={"key": self.api_key},
        )


class AlternateEndpoint(BaseModel):
    """Proxy endpoint authenticated with a bearer token."""
    model_config = ConfigDict(frozen=True)

    variant: Literal[EndpointVariant.ALTERNATE] = EndpointVariant.ALTERNATE
    url: str
    auth_token: str = Field(repr=False)

    def request_target(self) -> RequestTarget:
        return RequestTarget(
            url=self.url,
            headers={
                "Authorization": f"Bearer {self.auth_token}",
                "Content-Type": "application/json",
            },
        )


EndpointConfig = Annotated[
    Union[PrimaryEndpoint, AlternateEndpoint],
    Field(discriminator="variant"),
]
