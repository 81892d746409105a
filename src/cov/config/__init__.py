"""Config module exports."""

from cov.config.loader import CovSettings, load_config
from cov.config.models import (
    CovConfig,
    LoggingConfig,
    LogOutputConfig,
    ServerConfig,
)

__all__ = [
    "load_config",
    "CovConfig",
    "CovSettings",
    "LoggingConfig",
    "LogOutputConfig",
    "ServerConfig",
]
