"""Logging bootstrap: stdlib handlers on the root logger, structlog on top."""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import BaseModel

from ..configuration.hub import ConfigNotFoundError, ConfigurationHub
from ..configuration.loaders import get_hub

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_logs: bool = False
    log_dir: Optional[str] = None
    capture_warnings: bool = True
    app_name: str = "linked_sequence"


_is_configured = False


def setup_logging(config: LoggingConfig | dict | None = None) -> LoggingConfig:
    """Configure stdlib logging + structlog and return the resolved config.

    Calling it again replaces (and closes) the handlers installed before.
    """
    global _is_configured
    resolved = config if isinstance(config, LoggingConfig) else LoggingConfig(**(config or {}))

    root = logging.getLogger()
    _close_handlers(root)
    root.setLevel(resolved.level.upper())
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(resolved):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.captureWarnings(resolved.capture_warnings)
    _configure_structlog(resolved.json_logs)

    _is_configured = True
    return resolved


def configure_from_settings(hub: ConfigurationHub | None = None) -> LoggingConfig:
    """Setup logging from the ``logging`` section of the configuration hub."""
    hub = hub or get_hub()
    try:
        settings = hub.get("logging", model=LoggingConfig)
    except ConfigNotFoundError:
        settings = LoggingConfig()
    return setup_logging(settings)


def is_configured() -> bool:
    return _is_configured


def _close_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_dir / f"{config.app_name}.log",
                maxBytes=5 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
        )
    return handlers


def _configure_structlog(json_logs: bool) -> None:
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
