"""Configuration module for the Email Builder service."""

from .settings import (
    AppConfig,
    RendererConfig,
    CheckerConfig,
    StorageConfig,
    get_app_config,
    load_brand_kit_presets,
)

__all__ = [
    "AppConfig",
    "RendererConfig",
    "CheckerConfig",
    "StorageConfig",
    "get_app_config",
    "load_brand_kit_presets",
]
