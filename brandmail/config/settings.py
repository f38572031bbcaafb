"""
Configuration settings for the Email Builder service.

Uses dataclasses with environment variable support.
Optional brand kit presets are read from a YAML file.
"""

import os
import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class RendererConfig:
    """HTML renderer defaults."""
    default_content_width: int = 600  # pixels, Gmail-safe
    minify_export: bool = False


@dataclass
class CheckerConfig:
    """Compatibility checker thresholds."""
    subject_max_length: int = 60
    min_text_contrast: float = 4.5  # WCAG AA for body text


@dataclass
class StorageConfig:
    """Persistence backend for brand kits and drafts."""
    backend: str = "memory"  # memory, json, firestore
    data_dir: str = ".brandmail"
    gcp_project_id: Optional[str] = None
    collection_prefix: str = "email_builder"


@dataclass
class AppConfig:
    """Main service configuration."""
    renderer: RendererConfig = field(default_factory=RendererConfig)
    checker: CheckerConfig = field(default_factory=CheckerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    presets_path: Optional[str] = None


def load_brand_kit_presets(config_path: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Load brand kit presets from a YAML configuration file.

    The file holds a ``brand_kits`` list; each entry is a brand kit in the
    editor's JSON shape (camelCase or snake_case keys).

    Args:
        config_path: Path to brand_kits.yaml. If None, uses default location.

    Returns:
        List of raw brand kit dictionaries, empty if the file does not exist.
    """
    if config_path is None:
        path = Path(__file__).parent / "brand_kits.yaml"
    else:
        path = Path(config_path)

    if not path.exists():
        logger.info(f"Brand kit presets file not found: {path}")
        return []

    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    presets = [kit for kit in (config.get("brand_kits") or []) if kit.get("enabled", True)]
    for kit in presets:
        kit.pop("enabled", None)

    logger.info(f"Loaded {len(presets)} brand kit presets from {path}")
    return presets


def get_app_config() -> AppConfig:
    """
    Create service configuration from environment variables.

    Environment Variables:
        BRANDMAIL_CONTENT_WIDTH: Default content width for new documents (default: 600)
        BRANDMAIL_MINIFY_EXPORT: Minify exported HTML (default: false)
        BRANDMAIL_SUBJECT_MAX_LENGTH: Subject length before a warning (default: 60)
        BRANDMAIL_STORAGE_BACKEND: memory, json or firestore (default: memory)
        BRANDMAIL_DATA_DIR: Directory for the json backend (default: .brandmail)
        BRANDMAIL_COLLECTION_PREFIX: Firestore collection prefix (default: email_builder)
        BRANDMAIL_PRESETS_PATH: Path to a brand_kits.yaml presets file
        GCP_PROJECT_ID: Google Cloud project ID for the firestore backend
    """
    renderer_config = RendererConfig(
        default_content_width=int(os.getenv("BRANDMAIL_CONTENT_WIDTH", "600")),
        minify_export=_env_bool("BRANDMAIL_MINIFY_EXPORT"),
    )

    checker_config = CheckerConfig(
        subject_max_length=int(os.getenv("BRANDMAIL_SUBJECT_MAX_LENGTH", "60")),
    )

    storage_config = StorageConfig(
        backend=os.getenv("BRANDMAIL_STORAGE_BACKEND", "memory").lower(),
        data_dir=os.getenv("BRANDMAIL_DATA_DIR", ".brandmail"),
        gcp_project_id=os.getenv("GCP_PROJECT_ID"),
        collection_prefix=os.getenv("BRANDMAIL_COLLECTION_PREFIX", "email_builder"),
    )

    return AppConfig(
        renderer=renderer_config,
        checker=checker_config,
        storage=storage_config,
        presets_path=os.getenv("BRANDMAIL_PRESETS_PATH"),
    )
