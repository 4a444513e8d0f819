# ==============================================================================
# SETTINGS CONFIGURATION - Environment Management
# ==============================================================================
# Pydantic Settings for type-safe environment variable management
# Covers: database, token signing, payment provider, image storage
# ==============================================================================

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "your-super-secret-key-change-in-production"


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Application Settings Configuration.

    Manages all environment variables with type validation and defaults.
    Values are read from the process environment and an optional .env file.

    Example:
        >>> from thinklock.core.settings import settings
        >>> print(settings.MONGODB_DB)
        'thinklock'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # --------------------------------------------------------------------------
    APP_NAME: str = Field(
        default="ThinkLock API",
        description="Application display name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application semantic version"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (docs, error details)"
    )
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current deployment environment"
    )
    API_PREFIX: str = Field(
        default="",
        description="Route prefix for all resource endpoints"
    )
    API_DESCRIPTION: str = Field(
        default="Online course marketplace: accounts, courses, baskets and orders",
        description="OpenAPI documentation description"
    )
    HOST: str = Field(
        default="0.0.0.0",
        description="Listen address"
    )
    PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Listen port"
    )

    # --------------------------------------------------------------------------
    # MONGODB CONFIGURATION
    # --------------------------------------------------------------------------
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB: str = Field(
        default="thinklock",
        description="MongoDB database name"
    )
    MONGODB_TRANSACTIONS: bool = Field(
        default=True,
        description="Run enrollment finalization in a multi-document transaction"
    )
    DB_POOL_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Database connection pool size"
    )
    DB_POOL_TIMEOUT: int = Field(
        default=30,
        ge=1,
        le=300,
        description="Idle connection timeout in seconds"
    )

    # --------------------------------------------------------------------------
    # SECURITY SETTINGS
    # --------------------------------------------------------------------------
    SECRET_KEY: str = Field(
        default=DEFAULT_SECRET_KEY,
        min_length=32,
        description="JWT signing secret key (min 32 chars)"
    )
    ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60,
        ge=1,
        le=1440,
        description="Access token expiration in minutes"
    )
    INITIAL_ADMIN_ID: Optional[str] = Field(
        default=None,
        description="Identifier of an admin account ensured at startup"
    )
    INITIAL_ADMIN_PASSWORD: Optional[str] = Field(
        default=None,
        description="Password for the bootstrap admin account"
    )
    INITIAL_ADMIN_EMAIL: Optional[str] = Field(
        default=None,
        description="Email for the bootstrap admin account"
    )

    # --------------------------------------------------------------------------
    # PAYMENT PROVIDER (STRIPE)
    # --------------------------------------------------------------------------
    STRIPE_SECRET_KEY: str = Field(
        default="",
        description="Stripe secret API key"
    )
    STRIPE_API_BASE: str = Field(
        default="https://api.stripe.com/v1",
        description="Stripe REST API base URL"
    )
    PAYMENT_CURRENCY: str = Field(
        default="usd",
        description="Currency for payment intents"
    )

    # --------------------------------------------------------------------------
    # IMAGE STORAGE (IMAGEKIT)
    # --------------------------------------------------------------------------
    IMAGEKIT_PUBLIC_KEY: str = Field(
        default="",
        description="ImageKit public key"
    )
    IMAGEKIT_PRIVATE_KEY: str = Field(
        default="",
        description="ImageKit private key (upload authentication)"
    )
    IMAGEKIT_ID: str = Field(
        default="",
        description="ImageKit account identifier"
    )
    IMAGEKIT_UPLOAD_URL: str = Field(
        default="https://upload.imagekit.io/api/v1/files/upload",
        description="ImageKit upload endpoint"
    )
    IMAGEKIT_ROOT_FOLDER: str = Field(
        default="thinklock",
        description="Root folder for uploaded images"
    )
    EXTERNAL_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for calls to external providers"
    )

    # --------------------------------------------------------------------------
    # CORS SETTINGS
    # --------------------------------------------------------------------------
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True,
        description="Allow credentials in CORS requests"
    )

    # --------------------------------------------------------------------------
    # LOGGING CONFIGURATION
    # --------------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # --------------------------------------------------------------------------
    # COMPUTED PROPERTIES
    # --------------------------------------------------------------------------
    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Warn when the default signing key is in use."""
        if v == DEFAULT_SECRET_KEY:
            import warnings
            warnings.warn(
                "Using default SECRET_KEY. Generate a secure key for production!",
                UserWarning
            )
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [origin.strip() for origin in v.split(",")]
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


# Module-level settings instance for convenient imports
settings = get_settings()
