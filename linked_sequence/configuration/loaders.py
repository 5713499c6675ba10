"""Helper utilities to bootstrap the package-wide configuration hub."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .hub import ConfigurationHub
from .providers import EnvVarConfigProvider, YamlConfigProvider
from .settings import SequenceSettings

_ENV_CONFIG_DIR_KEY = "LINKED_SEQUENCE_CONFIG_DIR"
_ENV_PREFIX = "LINKED_SEQUENCE_"

_default_hub: Optional[ConfigurationHub] = None


def get_hub() -> ConfigurationHub:
    """Return the global configuration hub (lazy singleton)."""

    global _default_hub
    if _default_hub is None:
        _default_hub = ConfigurationHub(_build_default_providers())
    return _default_hub


def get_settings() -> SequenceSettings:
    """Return the ``sequence`` section, falling back to defaults."""

    return get_hub().get("sequence", model=SequenceSettings, default=SequenceSettings())


def reload_settings() -> None:
    """Force refresh of the global configuration hub."""

    get_hub().reload()


def reset_hub() -> None:
    """Drop the global hub so the next access rebuilds it from the environment."""

    global _default_hub
    _default_hub = None


def _build_default_providers():
    providers = []
    config_dir = os.environ.get(_ENV_CONFIG_DIR_KEY)
    if config_dir:
        config_root = Path(config_dir)
        if not config_root.exists():
            raise FileNotFoundError(
                f"Configuration path {config_root} was not found; check {_ENV_CONFIG_DIR_KEY}"
            )
        providers.append(YamlConfigProvider(config_root))
    providers.append(EnvVarConfigProvider(prefix=_ENV_PREFIX))
    return providers
