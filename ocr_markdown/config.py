"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "PDF OCR to Markdown"
    cors_origins: list[str] = ["*"]

    # ── Mistral OCR provider ─────────────────────────────
    mistral_api_key: str = ""
    mistral_base_url: str = "https://api.mistral.ai/v1"
    ocr_model: str = "mistral-ocr-latest"
    include_image_base64: bool = False

    # ── Timeouts (seconds) ───────────────────────────────
    request_timeout_seconds: float = 30.0
    ocr_timeout_seconds: float = 300.0

    # ── Upload readiness ─────────────────────────────────
    upload_settle_seconds: float = 1.0
    signed_url_max_attempts: int = 3
    signed_url_backoff_seconds: float = 0.5
    signed_url_expiry_hours: int = 1

    # ── Limits ───────────────────────────────────────────
    max_upload_mb: int = 50

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def api_key_configured(self) -> bool:
        return bool(self.mistral_api_key.strip())


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
