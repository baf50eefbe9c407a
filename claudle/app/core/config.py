import json
import re
from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class RouteLimitConfig(BaseModel):
    """Per-route request ceiling within a fixed window."""

    max_requests: int = Field(..., ge=1)
    window_minutes: int = Field(..., ge=1)


# Protected routes and their limits. Routes absent from this table are unlimited.
DEFAULT_RATE_LIMITS: dict[str, RouteLimitConfig] = {
    "/api/claude/generate-word": RouteLimitConfig(max_requests=5, window_minutes=60 * 24),
    "/api/claude/get-hint": RouteLimitConfig(max_requests=30, window_minutes=60),
    "/api/claude/coaching": RouteLimitConfig(max_requests=100, window_minutes=60),
    "/api/claude/game-over": RouteLimitConfig(max_requests=10, window_minutes=60),
}


def _parse_cors_origins(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, list):
        items = [str(v).strip() for v in raw]
        return [v for v in items if v]

    raw = str(raw).strip()
    if not raw or raw == "[]":
        return []
    if raw == "*":
        return ["*"]

    # Prefer JSON, but tolerate a comma or whitespace separated list.
    if raw.startswith(("[", '"')):
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            items = [str(v).strip() for v in parsed]
            return [v for v in items if v]
        if isinstance(parsed, str):
            raw = parsed.strip()
            if raw == "*":
                return ["*"]

    origins: list[str] = []
    for part in (p for p in re.split(r"[,\s]+", raw) if p):
        if part == "*":
            return ["*"]
        if "://" in part:
            origins.append(part)
        else:
            origins.append(f"http://{part}")
            origins.append(f"https://{part}")

    # Deduplicate while preserving order.
    return list(dict.fromkeys(origins))


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be configured via environment variables or .env file.
    """

    # Debug mode - enables detailed error responses
    debug: bool = False

    # Anthropic settings
    anthropic_api_key: str = ""
    anthropic_base_url: str = "https://api.anthropic.com/v1"
    anthropic_model: str = "claude-sonnet-4-20250514"
    anthropic_version: str = "2023-06-01"
    anthropic_timeout: float = 30.0

    # Serve canned replies instead of calling the provider (local dev, load tests)
    mock_provider: bool = False

    # Interactive coaching is off by default for cost control
    enable_interactive_coaching: bool = False

    # Word generation re-asks the model when it repeats a used word
    word_generation_max_attempts: int = 3

    # HTTP client connection pool settings
    httpx_connect_timeout: float = 10.0
    httpx_read_timeout: float = 60.0
    httpx_write_timeout: float = 10.0
    httpx_pool_timeout: float = 5.0
    httpx_keepalive_expiry: float = 30.0
    httpx_max_connections: int = 100
    httpx_max_keepalive_connections: int = 20

    # Rate limiting settings
    rate_limits: dict[str, RouteLimitConfig] = Field(
        default_factory=lambda: dict(DEFAULT_RATE_LIMITS)
    )
    rate_limit_path_prefix: str = "/api/claude"
    rate_limit_cleanup_probability: float = 0.01
    rate_limit_sweep_interval_seconds: float = 300.0
    # Only enable behind a proxy that overwrites X-Forwarded-For / X-Real-IP
    trust_proxy_headers: bool = False

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "text"  # text | structured | json

    # Use NoDecode so a bare host list doesn't crash JSON parsing at startup.
    cors_origins: Annotated[list[str], NoDecode] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def decode_cors_origins(cls, v: Any) -> list[str]:
        return _parse_cors_origins(v)

    @field_validator("rate_limit_cleanup_probability")
    @classmethod
    def validate_cleanup_probability(cls, v: float) -> float:
        """Validate cleanup probability lies in [0, 1]."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("rate_limit_cleanup_probability must be between 0 and 1")
        return v

    @field_validator("rate_limit_sweep_interval_seconds", "anthropic_timeout")
    @classmethod
    def validate_positive_seconds(cls, v: float) -> float:
        """Validate durations are positive."""
        if v <= 0:
            raise ValueError("Durations must be positive")
        return v

    @field_validator("word_generation_max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("word_generation_max_attempts must be at least 1")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Global settings instance
settings = Settings()
