"""Rotating file logging handler."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal, Union

from ..config import HandlerConfig


class FileHandlerConfig(HandlerConfig):
    """File handler configuration (size-based rotation).

    Args:
        filepath: Path to the log file
        max_bytes: Max file size before rotation (default: 1MB)
        backup_count: Number of backup files to keep (default: 3)
        encoding: File encoding (default: utf-8)
    """

    type: Literal["file"] = "file"
    filepath: Union[str, Path]
    max_bytes: int = 1024 * 1024
    backup_count: int = 3
    encoding: str = "utf-8"


def create_file_handler(config: FileHandlerConfig) -> logging.Handler:
    """Create a size-rotated file handler, creating parent directories."""
    filepath = Path(config.filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    format_str = config.format_str or "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"

    handler = RotatingFileHandler(
        filepath,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding=config.encoding,
    )
    handler.setLevel(getattr(logging, config.level.upper()))
    handler.setFormatter(logging.Formatter(format_str, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler
