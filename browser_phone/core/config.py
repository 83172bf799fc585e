"""
Configuration management for the Browser Phone gateway
Uses Pydantic Settings for environment variable management
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

DEFAULT_FRONTEND_DIR = Path(__file__).resolve().parent.parent / "frontend"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Twilio Configuration (required for a working deployment)
    twilio_account_sid: str = Field(default="")
    twilio_auth_token: str = Field(default="")
    twilio_phone_number: str = Field(default="")
    twilio_twiml_app_sid: str = Field(default="")

    # Optional API key pair, preferred over the auth token for signing
    twilio_api_key: Optional[str] = Field(default=None)
    twilio_api_secret: Optional[str] = Field(default=None)

    # Voice
    token_ttl_seconds: int = Field(default=3600)
    incoming_client_identity: str = Field(default="browser_user")
    record_calls: bool = Field(default=True)
    public_base_url: Optional[str] = Field(default=None)

    # Security
    validate_twilio_signature: bool = Field(default=False)
    api_keys: str = Field(default="")

    # Application Settings
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Server Configuration
    server_host: str = Field(default="0.0.0.0")
    server_port: int = Field(default=3000)

    # CORS Settings
    allowed_origins: str = Field(default="*")

    # Static browser phone page
    frontend_dir: Path = Field(default=DEFAULT_FRONTEND_DIR)

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def api_key_list(self) -> List[str]:
        """Parse accepted API keys from comma-separated string"""
        return [key.strip() for key in self.api_keys.split(",") if key.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def twilio_configured(self) -> bool:
        """True when every required Twilio value is non-empty"""
        return all([
            self.twilio_account_sid,
            self.twilio_auth_token,
            self.twilio_phone_number,
            self.twilio_twiml_app_sid,
        ])

    @property
    def signing_key_sid(self) -> str:
        """Key SID used as the token issuer"""
        if self.twilio_api_key and self.twilio_api_secret:
            return self.twilio_api_key
        return self.twilio_account_sid

    @property
    def signing_secret(self) -> str:
        """Secret used to sign access tokens"""
        if self.twilio_api_key and self.twilio_api_secret:
            return self.twilio_api_secret
        return self.twilio_auth_token

    @property
    def secret_values(self) -> List[str]:
        """Configured secrets that must never appear in responses"""
        return [
            value for value in (self.twilio_auth_token, self.twilio_api_secret)
            if value
        ]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
