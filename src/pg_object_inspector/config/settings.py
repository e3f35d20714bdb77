"""Inspector configuration loading and validation.

Settings come from a YAML file when one is given (or named by
``INSPECTOR_CONFIG``), otherwise from environment variables, with ``.env``
loaded first.
"""
from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import Literal
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class DatabaseConfig(BaseModel):
    """Target database configuration."""
    dsn: str = Field(..., description="PostgreSQL connection URL")
    connect_timeout: float = Field(10.0, gt=0, le=300, description="Connect timeout (seconds)")

    @field_validator("dsn")
    @classmethod
    def validate_dsn(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith(("postgresql://", "postgres://")):
            raise ValueError("dsn must start with 'postgresql://' or 'postgres://'")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("WARNING", description="Log level")
    format: str = Field(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        description="logging format string"
    )


class InspectorConfig(BaseModel):
    """Complete inspector configuration."""
    database: DatabaseConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    system_schemas: list[str] = Field(
        default_factory=lambda: ["information_schema", "pg_catalog"],
        description="Schemas excluded from DDL generation and DROP actions"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> InspectorConfig:
        """Load configuration from YAML file.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If configuration is invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)

        if not data:
            raise ValueError(f"Empty configuration file: {config_path}")

        try:
            return cls.model_validate(data)
        except Exception as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def from_env(cls) -> InspectorConfig:
        """Load configuration from environment variables.

        ``INSPECTOR_CONFIG`` points at a YAML file and takes precedence over
        ``DATABASE_URL``, ``INSPECTOR_CONNECT_TIMEOUT`` and ``INSPECTOR_LOG_LEVEL``.

        Raises:
            ValueError: If no database URL is configured or values are invalid
        """
        load_dotenv()

        config_path = os.getenv("INSPECTOR_CONFIG")
        if config_path:
            return cls.from_yaml(config_path)

        dsn = os.getenv("DATABASE_URL")
        if not dsn:
            raise ValueError("DATABASE_URL is not set and INSPECTOR_CONFIG is not given")

        data: dict = {"database": {"dsn": dsn}}
        timeout = os.getenv("INSPECTOR_CONNECT_TIMEOUT")
        if timeout:
            data["database"]["connect_timeout"] = float(timeout)
        level = os.getenv("INSPECTOR_LOG_LEVEL")
        if level:
            data["logging"] = {"level": level.upper()}

        return cls.model_validate(data)

    def log_redacted(self) -> dict:
        """Configuration dict with the DSN password masked."""
        config_dict = self.model_dump()

        dsn = config_dict["database"]["dsn"]
        if "@" in dsn:
            credentials, host = dsn.rsplit("@", 1)
            scheme, _, user_pass = credentials.partition("://")
            if ":" in user_pass:
                user = user_pass.split(":", 1)[0]
                config_dict["database"]["dsn"] = f"{scheme}://{user}:***@{host}"

        return config_dict


def load_config(config_path: str | Path | None = None) -> InspectorConfig:
    """Load configuration from an explicit file or the environment."""
    if config_path:
        return InspectorConfig.from_yaml(config_path)

    return InspectorConfig.from_env()
