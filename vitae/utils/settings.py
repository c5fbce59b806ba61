"""
Runtime settings for vitae.

Settings are typed dataclasses merged by OmegaConf in three layers:
structured defaults <- settings.yaml (or VITAE_SETTINGS_PATH) <- environment.

Environment variables (also read from a .env file):
    VITAE_SETTINGS_PATH        Alternative YAML settings file
    VITAE_CURRENT_VERSION      versions.current
    VITAE_LEGACY_VERSION       versions.legacy
    VITAE_COMPRESS_THRESHOLD   embedding.compress_threshold
    VITAE_MAX_FILE_SIZE        embedding.max_file_size
    VITAE_REMOTE_SCHEMAS       remote_schemas.enabled
    VITAE_REMOTE_TIMEOUT       remote_schemas.timeout_s
    VITAE_REMOTE_CACHE_TTL     remote_schemas.cache_ttl_s
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

# Environment variable -> dotted settings key
ENV_OVERRIDES = {
    "VITAE_CURRENT_VERSION": "versions.current",
    "VITAE_LEGACY_VERSION": "versions.legacy",
    "VITAE_COMPRESS_THRESHOLD": "embedding.compress_threshold",
    "VITAE_MAX_FILE_SIZE": "embedding.max_file_size",
    "VITAE_REMOTE_SCHEMAS": "remote_schemas.enabled",
    "VITAE_REMOTE_TIMEOUT": "remote_schemas.timeout_s",
    "VITAE_REMOTE_CACHE_TTL": "remote_schemas.cache_ttl_s",
}


@dataclass
class VersionSettings:
    current: str = "0.1.0"
    legacy: str = "1.0.0"


@dataclass
class EmbeddingSettings:
    compress_threshold: int = 500 * 1024
    max_file_size: int = 10 * 1024 * 1024


@dataclass
class RemoteSchemaSettings:
    enabled: bool = False
    timeout_s: float = 5.0
    cache_ttl_s: float = 3600.0


@dataclass
class ValidationSettings:
    default_priority: int = 5


@dataclass
class Settings:
    versions: VersionSettings = field(default_factory=VersionSettings)
    embedding: EmbeddingSettings = field(default_factory=EmbeddingSettings)
    remote_schemas: RemoteSchemaSettings = field(default_factory=RemoteSchemaSettings)
    validation: ValidationSettings = field(default_factory=ValidationSettings)


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Load settings from YAML and the environment.

    Args:
        config_path: Optional YAML file (defaults to VITAE_SETTINGS_PATH, then
                     the packaged settings.yaml)

    Returns:
        Settings dataclass with every layer merged

    Raises:
        omegaconf.errors.ValidationError: If a value has the wrong type
    """
    if config_path is None:
        config_path = Path(os.getenv("VITAE_SETTINGS_PATH", DEFAULT_SETTINGS_PATH))

    base = OmegaConf.structured(Settings)
    layers = [base]

    if config_path.exists():
        layers.append(OmegaConf.load(config_path))

    env_dotlist = [
        f"{key}={os.environ[variable]}"
        for variable, key in ENV_OVERRIDES.items()
        if os.environ.get(variable)
    ]
    if env_dotlist:
        layers.append(OmegaConf.from_dotlist(env_dotlist))

    merged = OmegaConf.merge(*layers)
    return OmegaConf.to_object(merged)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once. Call get_settings.cache_clear() to reload."""
    return load_settings()
