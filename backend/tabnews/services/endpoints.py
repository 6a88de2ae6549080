"""Public URL building for links sent to users."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..config import get_settings

PRODUCTION_HOST = "https://www.tabnews.com.br"
LOCAL_STAGES = ("test", "development")


@dataclass(frozen=True)
class DeploymentConfig:
    """Deployment facts that decide which host public links point to."""

    stage: str = "production"
    ci: bool = False
    webserver_host: str | None = None
    webserver_port: str | None = None
    preview_env: str | None = None
    preview_url: str | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> "DeploymentConfig":
        return cls(
            stage=settings.ENV.lower(),
            ci=bool(settings.CI),
            webserver_host=settings.WEBSERVER_HOST,
            webserver_port=str(settings.WEBSERVER_PORT),
            preview_env=settings.VERCEL_ENV,
            preview_url=settings.VERCEL_URL,
        )


class EndpointBuilder:
    """Builds activation URLs from an explicit DeploymentConfig."""

    def __init__(self, config: DeploymentConfig) -> None:
        self.config = config

    @property
    def host(self) -> str:
        host = PRODUCTION_HOST
        if self.config.stage in LOCAL_STAGES or self.config.ci:
            host = f"http://{self.config.webserver_host}:{self.config.webserver_port}"
        # Preview wins over the local host.
        if self.config.preview_env == "preview":
            host = f"https://{self.config.preview_url}"
        return host

    def activation_api_endpoint(self) -> str:
        return f"{self.host}/api/v1/activation"

    def activation_page_endpoint(self, token_id: object | None = None) -> str:
        if token_id:
            return f"{self.host}/cadastro/ativar/{token_id}"
        return f"{self.host}/cadastro/ativar"


def get_endpoint_builder() -> EndpointBuilder:
    """Builder bound to the process settings."""
    return EndpointBuilder(DeploymentConfig.from_settings(get_settings()))


def get_activation_api_endpoint() -> str:
    return get_endpoint_builder().activation_api_endpoint()


def get_activation_page_endpoint(token_id: object | None = None) -> str:
    return get_endpoint_builder().activation_page_endpoint(token_id)
