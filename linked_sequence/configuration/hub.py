"""Merge provider payloads and hand out validated settings sections."""
from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from .providers import ConfigProvider, merge_into

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


class ConfigNotFoundError(KeyError):
    """Raised when a configuration section is missing."""


class ConfigurationHub:
    """Configuration merged from providers, later providers overriding earlier ones."""

    def __init__(self, providers: Iterable[ConfigProvider]) -> None:
        self._providers = tuple(providers)
        if not self._providers:
            raise ValueError("ConfigurationHub requires at least one provider")
        self._payload: Dict[str, Any] = {}
        self._models: Dict[Tuple[Optional[str], type], BaseModel] = {}
        self.reload()

    def reload(self) -> None:
        payload: Dict[str, Any] = {}
        for provider in self._providers:
            loaded = provider.load()
            if not isinstance(loaded, Mapping):
                raise TypeError(
                    f"Provider {type(provider).__name__} must return a mapping"
                )
            merge_into(payload, loaded)
        self._payload = payload
        self._models.clear()
        logger.debug("Loaded configuration sections: %s", sorted(payload))

    def get(
        self,
        path: Optional[str] = None,
        *,
        model: Optional[Type[T]] = None,
        default: Optional[Any] = None,
    ) -> Any:
        """Return the section at dotted ``path``, validated into ``model`` when given.

        Validated models are cached until the next ``reload()``. A missing
        section returns ``default`` or raises ``ConfigNotFoundError``.
        """
        section = self._payload
        for piece in path.split(".") if path else ():
            if not isinstance(section, Mapping) or piece not in section:
                if default is not None:
                    return default
                raise ConfigNotFoundError(path)
            section = section[piece]

        if model is None:
            return deepcopy(section)
        key = (path, model)
        if key not in self._models:
            self._models[key] = model.model_validate(section)
        return self._models[key]
