import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Azure OpenAI
    openai_endpoint: str = os.getenv("AZURE_OPENAI_ENDPOINT", "")
    openai_deployment: str = os.getenv("AZURE_OPENAI_DEPLOYMENT_NAME", "gpt-4")
    openai_api_version: str = os.getenv("AZURE_OPENAI_API_VERSION", "2023-05-15")

    # Response cache
    cache_ttl_minutes: int = int(os.getenv("AI_CACHE_TTL_MINUTES", "10"))
    cache_max_entries: int = int(os.getenv("AI_CACHE_MAX_ENTRIES", "100"))

    # Sampling defaults
    default_temperature: float = float(os.getenv("AI_DEFAULT_TEMPERATURE", "0.7"))
    default_max_tokens: int = int(os.getenv("AI_DEFAULT_MAX_TOKENS", "500"))
    default_top_p: float = float(os.getenv("AI_DEFAULT_TOP_P", "0.95"))
    request_timeout: float = float(os.getenv("AI_REQUEST_TIMEOUT", "30"))

    # Secrets (Key Vault is used only when a vault name is set)
    key_vault_name: str = os.getenv("AZURE_KEY_VAULT_NAME", "")

    # Rate limiting for AI queries
    ai_rate_limit_max_requests: int = int(os.getenv("AI_RATE_LIMIT_MAX_REQUESTS", "20"))
    ai_rate_limit_window_minutes: int = int(os.getenv("AI_RATE_LIMIT_WINDOW_MINUTES", "15"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "info")
    log_format: str = os.getenv("LOG_FORMAT", "json")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8080"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    @property
    def key_vault_enabled(self) -> bool:
        return bool(self.key_vault_name)

    @property
    def ai_rate_limit_window_seconds(self) -> int:
        """AI rate limit window converted to seconds."""
        return self.ai_rate_limit_window_minutes * 60

    @property
    def cache_ttl_seconds(self) -> int:
        """Cache TTL converted to seconds."""
        return self.cache_ttl_minutes * 60

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl_minutes <= 0:
            raise ValueError("AI_CACHE_TTL_MINUTES must be positive")

        if self.cache_max_entries <= 0:
            raise ValueError("AI_CACHE_MAX_ENTRIES must be positive")

        if not 0 <= self.default_temperature <= 2:
            raise ValueError("AI_DEFAULT_TEMPERATURE must be between 0 and 2")

        if not 0 < self.default_top_p <= 1:
            raise ValueError("AI_DEFAULT_TOP_P must be in (0, 1]")

        if self.default_max_tokens <= 0:
            raise ValueError("AI_DEFAULT_MAX_TOKENS must be positive")

        if self.request_timeout <= 0:
            raise ValueError("AI_REQUEST_TIMEOUT must be positive")

        if self.ai_rate_limit_max_requests <= 0:
            raise ValueError("AI_RATE_LIMIT_MAX_REQUESTS must be positive")

        if self.ai_rate_limit_window_minutes <= 0:
            raise ValueError("AI_RATE_LIMIT_WINDOW_MINUTES must be positive")

        if self.log_format not in ("json", "text"):
            raise ValueError(f"LOG_FORMAT must be one of ['json', 'text'], got {self.log_format}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
