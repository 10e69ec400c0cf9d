"""Logging setup for keycustom.

Provides the package ``LOGGER`` and a small handler registry so the
configuration file can pick console and file handlers by type.

Example:
    from keycustom.loggings import LOGGER, LogConfig, setup_logger

    LOGGER.info("Registry ready")

    logger = setup_logger(LogConfig(
        level="DEBUG",
        handlers=[
            {"type": "console", "level": "INFO"},
            {"type": "file", "filepath": "logs/keycustom.log"},
        ],
    ))
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type, Union

from .config import HandlerConfig, LogConfig
from .formatters import format_log_value
from .handlers import (
    ConsoleHandlerConfig,
    FileHandlerConfig,
    NamedRichHandler,
    create_console_handler,
    create_file_handler,
)
from .theme import LOGGING_THEME


# Handler registry: type -> (ConfigClass, FactoryFunction)
_HANDLER_REGISTRY: Dict[str, Tuple[Type[HandlerConfig], Callable[[HandlerConfig], logging.Handler]]] = {}


def register_handler(
    handler_type: str,
    config_class: Type[HandlerConfig],
    factory: Callable[[HandlerConfig], logging.Handler],
) -> None:
    """Register a handler type with its config class and factory.

    Args:
        handler_type: The handler type identifier (e.g., "syslog")
        config_class: The config class for this handler (extends HandlerConfig)
        factory: Factory function that takes config and returns logging.Handler
    """
    _HANDLER_REGISTRY[handler_type] = (config_class, factory)


def _parse_handler_config(data: Union[HandlerConfig, Dict[str, Any]]) -> HandlerConfig:
    """Parse raw dict or HandlerConfig into the registered config class."""
    if isinstance(data, HandlerConfig) and type(data) is not HandlerConfig:
        return data

    if isinstance(data, HandlerConfig):
        data = data.model_dump()

    handler_type = data.get("type")
    if handler_type in _HANDLER_REGISTRY:
        config_class, _ = _HANDLER_REGISTRY[handler_type]
        return config_class(**data)

    raise ValueError(f"Unknown handler type: {handler_type}")


def remove_handlers(logger: logging.Logger) -> logging.Logger:
    """Remove all handlers from a logger."""
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    return logger


def setup_logger(config: Optional[LogConfig] = None, replace: bool = False) -> logging.Logger:
    """Setup logger from configuration.

    Args:
        config: Log configuration (default: LogConfig())
        replace: Drop existing handlers first, used when a config file is loaded
            after the default logger was already created

    Returns:
        Configured Logger instance
    """
    if config is None:
        config = LogConfig()

    logger = logging.getLogger(config.name)
    logger.setLevel(getattr(logging, config.level.upper()))
    logger.propagate = config.propagate

    if replace:
        remove_handlers(logger)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    for handler_data in config.handlers:
        handler_config = _parse_handler_config(handler_data)
        if not handler_config.enabled:
            continue
        _, factory = _HANDLER_REGISTRY[handler_config.type]
        logger.addHandler(factory(handler_config))

    return logger


register_handler("console", ConsoleHandlerConfig, create_console_handler)
register_handler("file", FileHandlerConfig, create_file_handler)


LOGGER = setup_logger(LogConfig())


__all__ = [
    "LOGGER",
    "LogConfig",
    "HandlerConfig",
    "ConsoleHandlerConfig",
    "FileHandlerConfig",
    "NamedRichHandler",
    "setup_logger",
    "register_handler",
    "remove_handlers",
    "format_log_value",
    "LOGGING_THEME",
]
