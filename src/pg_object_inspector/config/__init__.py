"""Configuration management for the catalog inspector."""
from .settings import (
    DatabaseConfig,
    LoggingConfig,
    InspectorConfig,
    load_config,
)

__all__ = [
    "DatabaseConfig",
    "LoggingConfig",
    "InspectorConfig",
    "load_config",
]
