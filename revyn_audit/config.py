"""Application configuration with validation."""
from typing import Optional, Literal, List
from functools import lru_cache
from pydantic import Field, field_validator, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Revyn Marketing Audit Platform"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:5174"])

    # Snowflake
    SNOWFLAKE_ACCOUNT: Optional[str] = None
    SNOWFLAKE_USER: Optional[str] = None
    SNOWFLAKE_PASSWORD: Optional[SecretStr] = None
    SNOWFLAKE_DATABASE: Optional[str] = None
    SNOWFLAKE_SCHEMA: Optional[str] = None
    SNOWFLAKE_WAREHOUSE: Optional[str] = None
    SNOWFLAKE_ROLE: Optional[str] = None

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_SCORES: int = 3600      # 1 hour
    CACHE_TTL_REPORTS: int = 86400    # 24 hours

    # LLM (report generation + chat)
    OPENAI_API_KEY: Optional[SecretStr] = None
    REPORT_LLM_MODEL: str = "gpt-4o-2024-08-06"
    CHAT_LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = Field(default=0.4, ge=0.0, le=2.0)
    CHAT_HISTORY_LIMIT: int = Field(default=20, ge=1, le=200)

    # Stripe
    STRIPE_SECRET_KEY: Optional[SecretStr] = None
    STRIPE_WEBHOOK_SECRET: Optional[SecretStr] = None
    STRIPE_CURRENCY: str = "usd"
    PAYMENT_SOURCE_TAG: str = "revyn-marketing-audit"

    @field_validator("OPENAI_API_KEY")
    @classmethod
    def validate_openai_key(cls, v: Optional[SecretStr]) -> Optional[SecretStr]:
        if v is not None and not v.get_secret_value().startswith("sk-"):
            raise ValueError("Invalid OpenAI API key format")
        return v

    @field_validator("STRIPE_SECRET_KEY")
    @classmethod
    def validate_stripe_key(cls, v: Optional[SecretStr]) -> Optional[SecretStr]:
        if v is not None and not v.get_secret_value().startswith(("sk_", "rk_")):
            raise ValueError("Invalid Stripe secret key format")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has the external credentials it needs."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if not self.STRIPE_SECRET_KEY or not self.STRIPE_WEBHOOK_SECRET:
                raise ValueError("Stripe secret and webhook keys required in production")
            if not self.OPENAI_API_KEY:
                raise ValueError("OPENAI_API_KEY required in production")
        return self

    @property
    def snowflake_params(self) -> dict:
        """Connection kwargs for snowflake.connector.connect()."""
        return {
            "account": self.SNOWFLAKE_ACCOUNT,
            "user": self.SNOWFLAKE_USER,
            "password": self.SNOWFLAKE_PASSWORD.get_secret_value() if self.SNOWFLAKE_PASSWORD else None,
            "warehouse": self.SNOWFLAKE_WAREHOUSE,
            "database": self.SNOWFLAKE_DATABASE,
            "schema": self.SNOWFLAKE_SCHEMA,
            "role": self.SNOWFLAKE_ROLE,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
