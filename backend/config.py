from functools import lru_cache
from typing import Optional

from pydantic import ConfigDict, Field, PostgresDsn, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    env: str = Field(
        "development", description="Environment: development, staging, production"
    )
    debug: bool = Field(False, description="Enable debug mode")

    # API Configuration
    api_title: str = Field("ATM Status Tracker API", description="API title")
    api_version: str = Field("1.0.0", description="API version")
    api_prefix: str = Field("/api/v1", description="Prefix for versioned routes")

    # Monitoring Configuration
    prometheus_enabled: bool = Field(True, description="Enable Prometheus metrics")

    # Database Configuration
    postgres_user: str = Field("postgres", description="PostgreSQL username")
    postgres_password: str = Field("postgres", description="PostgreSQL password")
    postgres_host: str = Field("localhost", description="PostgreSQL host")
    postgres_port: int = Field(5432, description="PostgreSQL port")
    postgres_db: str = Field("atm_status", description="PostgreSQL database name")
    database_url: Optional[str] = Field(
        None, description="Complete database URL", validate_default=True
    )

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # JWT settings
    jwt_secret_key: str = Field(
        "your-jwt-secret-key", description="Secret key for JWT encoding/decoding"
    )
    jwt_algorithm: str = Field("HS256", description="JWT signing algorithm")
    access_token_expire_hours: int = Field(
        12, description="Lifetime of issued access tokens in hours"
    )

    # Reporting
    sla_threshold_minutes: int = Field(
        30, description="Downtime minutes beyond which a DOWN report breaches SLA"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info) -> str:
        if isinstance(v, str):
            return v

        values = info.data if hasattr(info, "data") else {}
        return str(
            PostgresDsn.build(
                scheme="postgresql",
                username=values.get("postgres_user"),
                password=values.get("postgres_password"),
                host=values.get("postgres_host"),
                port=values.get("postgres_port"),
                path=values.get("postgres_db"),
            )
        )

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def uses_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
