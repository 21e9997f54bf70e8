"""Configuration management for photometa.

Supports loading configuration from:
1. Environment variables (PHOTOMETA_*, plus the GA_* / GEMINI_* names
   used by existing deployments)
2. Config file (~/.photometa/config.yaml)
3. Default values

Example config file (~/.photometa/config.yaml):
    gemini:
      api_key: "YOUR_API_KEY"
      model: "gemini-2.0-flash-lite"
      timeout_seconds: 60
    analytics:
      property_id: "123456789"
      credentials_json: '{"type": "service_account", ...}'
    fetch:
      timeout_seconds: 30
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Config file search locations (in priority order)
CONFIG_LOCATIONS = [
    Path.home() / ".photometa" / "config.yaml",
    Path.home() / ".config" / "photometa" / "config.yaml",
    Path(".photometa.yaml"),
]

# Value shipped in the example .env file; treated as "no key"
PLACEHOLDER_API_KEY = "your_api_key_here"

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash-lite"


@dataclass
class GeminiConfig:
    """Remote verifier configuration."""

    api_key: str | None = None
    model: str = DEFAULT_GEMINI_MODEL
    timeout_seconds: float = 60.0

    @property
    def has_api_key(self) -> bool:
        """True for a non-empty, non-placeholder key."""
        return bool(self.api_key) and self.api_key != PLACEHOLDER_API_KEY


@dataclass
class AnalyticsConfig:
    """Visitor-count analytics configuration."""

    property_id: str | None = None
    credentials_json: str | None = None


@dataclass
class FetchConfig:
    """URL fetch configuration."""

    timeout_seconds: float = 30.0
    max_file_size_mb: int = 50


@dataclass
class PhotometaConfig:
    """Main configuration for photometa."""

    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)


def _load_yaml_config() -> dict[str, Any]:
    """Load configuration from YAML file if available."""
    for config_path in CONFIG_LOCATIONS:
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    data = yaml.safe_load(f)
                    return data if isinstance(data, dict) else {}
            except (OSError, yaml.YAMLError):
                continue
    return {}


def _get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with PHOTOMETA_ prefix."""
    return os.environ.get(f"PHOTOMETA_{key}", default)


def load_config() -> PhotometaConfig:
    """Load configuration from file and environment variables.

    Priority (highest first):
    1. Environment variables
    2. Config file (~/.photometa/config.yaml)
    3. Default values
    """
    file_config = _load_yaml_config()

    gemini_config = file_config.get("gemini") or {}
    gemini = GeminiConfig(
        api_key=_get_env("GEMINI_API_KEY")
        or os.environ.get("GEMINI_API_KEY")
        or os.environ.get("VITE_GEMINI_API_KEY")
        or gemini_config.get("api_key"),
        model=_get_env("GEMINI_MODEL") or gemini_config.get("model", DEFAULT_GEMINI_MODEL),
        timeout_seconds=float(
            _get_env("REMOTE_TIMEOUT") or gemini_config.get("timeout_seconds", 60.0)
        ),
    )

    analytics_config = file_config.get("analytics") or {}
    analytics = AnalyticsConfig(
        property_id=os.environ.get("GA_PROPERTY_ID") or analytics_config.get("property_id"),
        credentials_json=os.environ.get("GOOGLE_APPLICATION_CREDENTIALS_JSON")
        or analytics_config.get("credentials_json"),
    )

    fetch_config = file_config.get("fetch") or {}
    fetch = FetchConfig(
        timeout_seconds=float(
            _get_env("FETCH_TIMEOUT") or fetch_config.get("timeout_seconds", 30.0)
        ),
        max_file_size_mb=int(
            _get_env("FETCH_MAX_SIZE") or fetch_config.get("max_file_size_mb", 50)
        ),
    )

    return PhotometaConfig(gemini=gemini, analytics=analytics, fetch=fetch)


# Global config instance (lazy loaded)
_config: PhotometaConfig | None = None


def get_config() -> PhotometaConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
