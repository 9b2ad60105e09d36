"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AI gateway (OpenAI-compatible chat completions)
    ai_gateway_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ai_gateway_api_key", "lovable_api_key"),
        description="API key for the chat-completion gateway; AI summaries are skipped when empty",
    )
    ai_gateway_base_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1", description="Base URL of the chat-completion gateway"
    )
    ai_model: str = Field(default="google/gemini-2.5-flash", description="Model name sent to the gateway")
    ai_timeout: float = Field(default=30.0, description="Chat-completion timeout in seconds")

    # Firecrawl (news and shopping)
    firecrawl_api_key: str = Field(default="", description="Firecrawl API key")
    firecrawl_base_url: str = Field(default="https://api.firecrawl.dev/v1", description="Firecrawl API base URL")

    # Outbound HTTP
    http_timeout: float = Field(default=15.0, description="Default upstream request timeout in seconds")
    user_agent: str = Field(default="PortalSearch/0.1 (+https://github.com)", description="User-Agent for upstream calls")

    # Video mirrors
    invidious_instances: tuple[str, ...] = (
        "https://vid.puffyan.us",
        "https://yewtu.be",
        "https://invidious.kavin.rocks",
        "https://inv.vern.cc",
        "https://invidious.privacydev.net",
        "https://iv.ggtyler.dev",
        "https://invidious.nerdvpn.de",
        "https://invidious.slipfox.xyz",
    )
    piped_instances: tuple[str, ...] = (
        "https://pipedapi.kavin.rocks",
        "https://api.piped.yt",
        "https://pipedapi.in.projectsegfau.lt",
    )
    peertube_instances: tuple[str, ...] = (
        "https://framatube.org",
        "https://peertube.social",
        "https://video.ploud.fr",
    )
    mirror_timeout: float = Field(default=8.0, description="Per-instance timeout for Invidious/Piped mirrors")
    peertube_timeout: float = Field(default=5.0, description="Per-instance timeout for PeerTube")

    # Result limits
    web_result_limit: int = Field(default=50, ge=1, description="Maximum web results per response")
    academic_result_limit: int = Field(default=30, ge=1, description="Maximum papers per academic response")

    # Application Configuration
    app_title: str = Field(default="Portal Search API", description="Application title")
    app_version: str = Field(default="0.1.0", description="Application version")
    allowed_origins: str = Field(default="*", description="Comma-separated CORS origins")
    debug: bool = Field(default=False, description="Debug mode")
    host: str = Field(default="127.0.0.1", description="Bind address for the development server")
    port: int = Field(default=8000, description="Port for the development server")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")

    @property
    def ai_enabled(self) -> bool:
        return bool(self.ai_gateway_api_key)

    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
