# ==============================================================================
# SETTINGS CONFIGURATION - Environment Management
# ==============================================================================
# Pydantic Settings for type-safe environment variable management
# Covers: host/port, logging, cache, MongoDB, auth, CORS, health thresholds
# ==============================================================================

from __future__ import annotations

import json
from enum import Enum
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Application Settings Configuration.

    Manages all environment variables with type validation and defaults.
    Uses Pydantic BaseSettings for automatic .env file loading and
    environment variable parsing.

    Example:
        >>> from crud_template.core.settings import settings
        >>> print(settings.APP_PORT)
        3000
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
        default="crud-template-service",
        description="Application display name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application semantic version"
    )
    APP_HOST: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )
    APP_PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the HTTP server listens on"
    )
    APP_PROTOCOL: str = Field(
        default="http",
        description="Public protocol of the service (http, https)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current deployment environment"
    )

    # --------------------------------------------------------------------------
    # ROUTING & SWAGGER
    # --------------------------------------------------------------------------
    API_PREFIX: str = Field(
        default="api",
        description="Global route prefix (root and health are excluded)"
    )
    SWAGGER_DOCS: str = Field(
        default="docs",
        description="Path of the Swagger UI"
    )
    SWAGGER_TITLE: str = Field(
        default="API Docs",
        description="OpenAPI documentation title"
    )
    SWAGGER_DESCRIPTION: str = Field(
        default="API - Description",
        description="OpenAPI documentation description"
    )

    # --------------------------------------------------------------------------
    # REQUEST HEADERS & AUTH
    # --------------------------------------------------------------------------
    REQUEST_ID_HEADER: str = Field(
        default="x-request-id",
        description="Header carrying the request correlation id"
    )
    CHANNEL_ID_HEADER: str = Field(
        default="x-channel-id",
        description="Header carrying the calling channel id"
    )
    SERVICE_KEY_HEADER: str = Field(
        default="X-Service-Key",
        description="Header carrying the service API key"
    )
    SERVICE_API_KEYS: str = Field(
        default="[]",
        description="JSON encoded list of accepted service API keys"
    )

    # --------------------------------------------------------------------------
    # CRUD TEMPLATE
    # --------------------------------------------------------------------------
    CRUD_FIELD_IDENTIFIER: str = Field(
        default="_id",
        min_length=1,
        description="Field used to address a single entity"
    )
    ENABLE_ERROR_STACK: bool = Field(
        default=False,
        description="Include tracebacks in error responses"
    )

    # --------------------------------------------------------------------------
    # CORS SETTINGS
    # --------------------------------------------------------------------------
    ENABLE_CORS: bool = Field(
        default=False,
        description="Enable the CORS middleware"
    )
    ENABLE_CORS_ORIGIN: str = Field(
        default="http://localhost:3000",
        description="Comma separated allowed CORS origins"
    )
    ENABLE_CORS_ALLOWED_HEADERS: str = Field(
        default="*",
        description="Comma separated allowed CORS request headers"
    )
    ENABLE_CORS_EXPOSED_HEADERS: str = Field(
        default="*",
        description="Comma separated response headers exposed to the browser"
    )
    ENABLE_CORS_CREDENTIALS: bool = Field(
        default=True,
        description="Allow credentials in CORS requests"
    )

    # --------------------------------------------------------------------------
    # LOGGING CONFIGURATION
    # --------------------------------------------------------------------------
    APP_LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_FORMAT: str = Field(
        default="text",
        pattern="^(text|json)$",
        description="Log format (json, text)"
    )
    LOGS_ENABLE_FILE: bool = Field(
        default=True,
        description="Write rotated log files next to console output"
    )
    LOGS_DIRECTORY_MOUNT: str = Field(
        default="logs",
        description="Root directory of the log files"
    )
    LOGS_SUB_DIRECTORY: str = Field(
        default="",
        description="Optional sub directory below the log mount"
    )
    LOGS_FILE_PREFIX: str = Field(
        default="combined",
        description="File name prefix of the combined log"
    )
    LOGS_ERROR_FILE_PREFIX: str = Field(
        default="error",
        description="File name prefix of the error log"
    )
    LOGS_ROTATE_WHEN: str = Field(
        default="midnight",
        pattern="^(midnight|[SMHD]|W[0-6])$",
        description="Rotation interval unit (midnight rotates daily)"
    )
    LOGS_FILE_MAXFILE: int = Field(
        default=30,
        ge=0,
        description="Number of rotated files kept (days with daily rotation)"
    )
    LOGS_ZIPPED_ARCHIVE: bool = Field(
        default=True,
        description="Gzip rotated log files"
    )

    # --------------------------------------------------------------------------
    # CACHE
    # --------------------------------------------------------------------------
    CACHE_TTL: int = Field(
        default=300,
        ge=1,
        description="Default cache entry TTL in seconds"
    )
    CACHE_MAX_ENTRIES: int = Field(
        default=100,
        ge=1,
        description="Maximum number of cached entries"
    )

    # --------------------------------------------------------------------------
    # MONGODB CONFIGURATION
    # --------------------------------------------------------------------------
    MONGODB_URI: Optional[str] = Field(
        default=None,
        description="Full MongoDB connection URI (overrides host/port)"
    )
    MONGO_HOST: str = Field(
        default="localhost",
        description="MongoDB server hostname"
    )
    MONGO_PORT: int = Field(
        default=27017,
        ge=1,
        le=65535,
        description="MongoDB server port"
    )
    MONGO_DATABASE: str = Field(
        default="crud_template",
        description="MongoDB database name"
    )
    MONGO_REPLICA_SET: Optional[str] = Field(
        default="dbrs",
        description="Replica set name appended to the URI"
    )
    MONGO_DIRECT_CONNECTION: bool = Field(
        default=True,
        description="Connect directly to the configured host"
    )
    MONGO_SERVER_SELECTION_TIMEOUT: int = Field(
        default=5000,
        ge=1,
        description="Server selection timeout in milliseconds"
    )
    MONGO_CONNECT_TIMEOUT: int = Field(
        default=5000,
        ge=1,
        description="Connection timeout in milliseconds"
    )
    MONGO_POOL_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum connection pool size"
    )

    # --------------------------------------------------------------------------
    # ENCRYPTION & CRYPTO SERVICE
    # --------------------------------------------------------------------------
    DATAKEY: str = Field(
        default="u8x/A?D(G+KbPdSgVkYp3s6v9y$B&E)H",
        description="Symmetric payload encryption key"
    )
    ALGORITHM_KEY: str = Field(
        default="aes-256-cbc",
        description="Payload encryption algorithm"
    )
    ENABLE_ENCRYPT_DECRYPT_FEATURE: bool = Field(
        default=False,
        description="Enable payload encryption"
    )
    CRYPTO_BASE_URL: str = Field(
        default="http://127.0.0.1:3010",
        description="Base URL of the crypto service"
    )
    CRYPTO_SERVICE_URL: str = Field(
        default="/api/crypto",
        description="Key exchange path of the crypto service"
    )

    # --------------------------------------------------------------------------
    # HEALTH CHECKS
    # --------------------------------------------------------------------------
    DISK_HEALTH_KEY: str = Field(default="ms-disk")
    DISK_HEALTH_THRESHOLD: float = Field(
        default=0.9,
        gt=0,
        le=1,
        description="Maximum used fraction of the disk"
    )
    DISK_HEALTH_PATH: str = Field(default="/")
    MEMORY_HEALTH_HEAP_KEY: str = Field(default="memory_heap")
    MEMORY_HEALTH_HEAP_THRESHOLD: int = Field(
        default=150 * 1024 * 1024,
        ge=1,
        description="Maximum heap size in bytes"
    )
    MEMORY_HEALTH_RSS_KEY: str = Field(default="memory_rss")
    MEMORY_HEALTH_RSS_THRESHOLD: int = Field(
        default=150 * 1024 * 1024,
        ge=1,
        description="Maximum resident set size in bytes"
    )
    HEALTH_PING_KEY: str = Field(default="http_ping")
    HEALTH_PING_URL: Optional[str] = Field(
        default=None,
        description="Optional URL pinged by the health check"
    )
    HEALTH_PING_TIMEOUT: float = Field(default=3.0, gt=0)

    # --------------------------------------------------------------------------
    # COMPUTED PROPERTIES
    # --------------------------------------------------------------------------
    @computed_field
    @property
    def mongodb_url(self) -> str:
        """
        MongoDB connection URI.

        Returns MONGODB_URI when set, otherwise builds one from the
        host, port, database and replica set settings.
        """
        if self.MONGODB_URI:
            return self.MONGODB_URI
        url = f"mongodb://{self.MONGO_HOST}:{self.MONGO_PORT}/{self.MONGO_DATABASE}"
        options = []
        if self.MONGO_REPLICA_SET:
            options.append(f"replicaSet={self.MONGO_REPLICA_SET}")
        options.append(
            f"directConnection={'true' if self.MONGO_DIRECT_CONNECTION else 'false'}"
        )
        return f"{url}?{'&'.join(options)}"

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def service_api_keys(self) -> List[str]:
        """Decoded list of accepted service API keys."""
        return json.loads(self.SERVICE_API_KEYS)

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("SERVICE_API_KEYS")
    @classmethod
    def validate_service_api_keys(cls, v: str) -> str:
        """Ensure the key list is a JSON encoded list of strings."""
        try:
            keys = json.loads(v)
        except ValueError as e:
            raise ValueError(f"SERVICE_API_KEYS must be a JSON list: {e}")
        if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
            raise ValueError("SERVICE_API_KEYS must be a JSON list of strings")
        return v

    @staticmethod
    def _split(value: str) -> List[str]:
        if value.strip() == "*":
            return ["*"]
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def cors_origins(self) -> List[str]:
        return self._split(self.ENABLE_CORS_ORIGIN)

    @property
    def cors_allowed_headers(self) -> List[str]:
        return self._split(self.ENABLE_CORS_ALLOWED_HEADERS)

    @property
    def cors_exposed_headers(self) -> List[str]:
        return self._split(self.ENABLE_CORS_EXPOSED_HEADERS)

    @field_validator("APP_LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Uses lru_cache to ensure settings are only loaded once,
    providing a singleton-like behavior for the settings object.
    """
    return Settings()


# Module-level settings instance for convenient imports
settings = get_settings()
