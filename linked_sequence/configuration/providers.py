"""Sources of raw configuration mappings for the ConfigurationHub."""
from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml


class ConfigProvider(ABC):
    """Return one nested mapping per ``load()`` call."""

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        raise NotImplementedError


class YamlConfigProvider(ConfigProvider):
    """Read a single YAML file, or every ``*.yml``/``*.yaml`` file of a directory.

    Directory files are merged in name order, later files winning.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Config path {self.path} not found")

    def files(self) -> List[Path]:
        if self.path.is_file():
            return [self.path]
        return sorted(
            file for file in self.path.iterdir() if file.suffix in {".yml", ".yaml"}
        )

    def load(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for file in self.files():
            document = yaml.safe_load(file.read_text(encoding="utf-8")) or {}
            if not isinstance(document, dict):
                raise ValueError(f"YAML config at {file} must produce a dictionary")
            merge_into(payload, document)
        return payload


class EnvVarConfigProvider(ConfigProvider):
    """Turn prefixed environment variables into sections.

    ``LINKED_SEQUENCE_SEQUENCE__SHUFFLE_DEPTH=3`` becomes
    ``{"sequence": {"shuffle_depth": 3}}``. Variables without a section part
    (``LINKED_SEQUENCE_CONFIG_DIR``) are skipped.
    """

    def __init__(self, prefix: str = "LINKED_SEQUENCE_", separator: str = "__") -> None:
        self.prefix = prefix
        self.separator = separator

    def load(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for key, raw in os.environ.items():
            if not key.startswith(self.prefix):
                continue
            *sections, name = key[len(self.prefix):].lower().split(self.separator)
            if not sections:
                continue
            cursor = payload
            for section in sections:
                cursor = cursor.setdefault(section, {})
            cursor[name] = _decode(raw)
        return payload


def merge_into(target: Dict[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``incoming`` into ``target`` in place and return it."""
    for key, value in incoming.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merge_into(current, value)
        else:
            target[key] = deepcopy(value)
    return target


def _decode(raw: str) -> Any:
    # JSON first so numbers and booleans arrive typed
    try:
        return json.loads(raw)
    except ValueError:
        if raw.lower() in {"true", "false"}:
            return raw.lower() == "true"
        return raw
