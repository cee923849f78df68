"""Configuration management for dumpi-ascii."""

from .schema import (
    DumpiConfig,
    InputConfig,
    LoggingConfig,
    load_config,
    generate_default_config,
)

__all__ = [
    'DumpiConfig',
    'InputConfig',
    'LoggingConfig',
    'load_config',
    'generate_default_config',
]
