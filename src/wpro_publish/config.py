"""Configuration management for wpro-publish."""

from urllib.parse import quote

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

DEFAULT_API_URL = "http://localhost.localdomain:8080"
DEFAULT_COMPONENT_TYPE = "PAGE_COMPONENT_PROTOTYPE"


def join_url(base: str, *segments: str, trailing_slash: bool = False) -> str:
    """Join URL path segments with exactly one ``/`` between each part."""
    parts = [base.rstrip("/")]
    parts.extend(s.strip("/") for s in segments if s and s.strip("/"))
    url = "/".join(parts)
    return f"{url}/" if trailing_slash else url


def redact_token(token: str) -> str:
    """Redact token for display (shows first 4 and last 4 chars)."""
    if len(token) <= 8:
        return "*" * len(token)
    return token[:4] + "*" * (len(token) - 8) + token[-4:]


class Settings(BaseSettings):
    """Run configuration, resolved once at startup and never mutated."""

    model_config = SettingsConfigDict(
        env_prefix="WPRO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    api_url: str = Field(default=DEFAULT_API_URL, description="API base URL")
    org: str | None = Field(default=None, description="Default organization")
    token: str | None = Field(default=None, description="Access token for the default organization")
    org_tokens: dict[str, str] = Field(
        default_factory=dict,
        description="Additional organization to token mapping (JSON object)",
    )
    groups_path: str = Field(default="/rest/org/groups", description="Groups resource path")
    component_type: str = Field(
        default=DEFAULT_COMPONENT_TYPE,
        description="Group type sent with every component",
    )
    service_publish_path: str | None = Field(
        default="/rest/org/groups/service_pages/publish",
        description="Service publish path (empty disables the publish step)",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds (unset waits indefinitely)",
    )

    @property
    def tokens_by_org(self) -> dict[str, str]:
        """Organization to token mapping, with ``WPRO_ORG``/``WPRO_TOKEN`` taking precedence."""
        mapping = dict(self.org_tokens)
        if self.org and self.token:
            mapping[self.org] = self.token
        return mapping

    @property
    def access_token(self) -> str:
        """Bearer token for the default organization (empty if unresolved)."""
        if not self.org:
            return self.token or ""
        return self.tokens_by_org.get(self.org, "")

    @property
    def prototype_resource(self) -> str | None:
        """Collection URL components are POSTed to."""
        if not self.api_url or not self.api_url.strip():
            return None
        return join_url(self.api_url.strip(), self.groups_path, self.component_type, trailing_slash=True)

    @property
    def service_publish_resource(self) -> str | None:
        if not self.api_url or not self.api_url.strip() or not self.service_publish_path:
            return None
        return join_url(self.api_url.strip(), self.service_publish_path)

    def component_url(self, group_id: str) -> str:
        """Resource URL of a single component, used for the PUT fallback."""
        if self.prototype_resource is None:
            raise ConfigurationError("No valid URL configuration found. Set WPRO_API_URL.")
        return join_url(self.prototype_resource, quote(group_id, safe=""))

    def validate_for_publish(self) -> None:
        """Raise ConfigurationError unless a resource URL and token are configured."""
        if not self.prototype_resource:
            raise ConfigurationError("No valid URL configuration found. Set WPRO_API_URL.")
        if not self.access_token:
            org = f" for organization '{self.org}'" if self.org else ""
            raise ConfigurationError(
                f"No valid access token configuration found{org}. "
                "Set WPRO_TOKEN or add the organization to WPRO_ORG_TOKENS."
            )


def load_settings(org: str | None = None, api_url: str | None = None) -> Settings:
    """Load settings from environment and ``.env``, applying CLI overrides."""
    overrides: dict[str, str] = {}
    if org is not None:
        overrides["org"] = org
    if api_url is not None:
        overrides["api_url"] = api_url
    return Settings(**overrides)  # type: ignore[arg-type]
