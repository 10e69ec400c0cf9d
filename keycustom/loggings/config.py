"""Logging configuration models."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class HandlerConfig(BaseModel):
    """Base handler configuration.

    The ``type`` field selects the registered config class and factory.

    Args:
        type: Handler type identifier (e.g., "console", "file")
        enabled: Enable this handler (default: True)
        level: Log level for this handler (default: DEBUG)
        format_str: Custom format string
    """

    model_config = ConfigDict(extra="allow")

    type: str
    enabled: bool = True
    level: str = "DEBUG"
    format_str: Optional[str] = None


class LogConfig(BaseModel):
    """Logging configuration for the registry logger.

    Handlers may be given as dicts with a ``type`` key (as read from YAML)
    or as HandlerConfig instances.

    Example:
        config = LogConfig(
            level="DEBUG",
            handlers=[
                {"type": "console", "level": "INFO"},
                {"type": "file", "filepath": "logs/keycustom.log"},
            ]
        )
        logger = setup_logger(config)
    """

    name: str = "keycustom"
    level: str = "INFO"
    handlers: List[Union[HandlerConfig, Dict[str, Any]]] = Field(
        default_factory=lambda: [{"type": "console"}]
    )
    propagate: bool = False
