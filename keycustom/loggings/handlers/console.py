"""Console logging handler."""

import copy
import logging
import sys
from typing import Literal

from rich.console import Console
from rich.highlighter import NullHighlighter
from rich.logging import RichHandler

from ..config import HandlerConfig
from ..theme import LOGGING_THEME


class ConsoleHandlerConfig(HandlerConfig):
    """Console handler configuration.

    Args:
        level: Log level for this handler
        format_str: Format string for the plain handler (ignored with rich)
        use_rich: Use rich output with colors (default: True)
        stderr: Write to stderr instead of stdout (default: True)
    """

    type: Literal["console"] = "console"
    use_rich: bool = True
    stderr: bool = True


class NamedRichHandler(RichHandler):
    """RichHandler that prefixes each message with the logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        level_styles = {
            "DEBUG": "#8b949e",
            "INFO": "white",
            "WARNING": "#d29922",
            "ERROR": "#f85149",
            "CRITICAL": "bold reverse #b81c1c",
        }
        style = level_styles.get(record.levelname, "muted")

        # Copy so other handlers see the untouched record
        record = copy.copy(record)
        record.msg = f"[{style}]\\[{record.name}][/{style}] {record.msg}"
        super().emit(record)


def create_console_handler(config: ConsoleHandlerConfig) -> logging.Handler:
    """Create a console handler from config."""
    stream = sys.stderr if config.stderr else sys.stdout

    if config.use_rich:
        handler = NamedRichHandler(
            console=Console(file=stream, theme=LOGGING_THEME, highlight=False),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            omit_repeated_times=False,
            highlighter=NullHighlighter(),
        )
    else:
        format_str = config.format_str or "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(format_str, datefmt="%H:%M:%S"))

    handler.setLevel(getattr(logging, config.level.upper()))
    return handler
