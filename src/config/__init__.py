"""Configuration module for the diploma registry.

Available Configurations:
- RegistryConfig: Certificates, QR rendering, export output and logging
"""

from src.config.registry_config import (
    DEFAULT_REGISTRY_CONFIG,
    TEST_REGISTRY_CONFIG,
    RegistryConfig,
)

__all__ = [
    "RegistryConfig",
    "DEFAULT_REGISTRY_CONFIG",
    "TEST_REGISTRY_CONFIG",
]
