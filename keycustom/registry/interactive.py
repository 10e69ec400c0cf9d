"""Whether an operator is present to answer prompts."""

import contextvars
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

_interactive = contextvars.ContextVar("keycustom_interactive", default=None)


@contextmanager
def interactive_session(enabled: bool = True) -> Iterator[None]:
    """Force interactivity on (or off) for the enclosed calls."""
    token = _interactive.set(enabled)
    try:
        yield
    finally:
        _interactive.reset(token)


def is_interactive(default: Optional[bool] = None) -> bool:
    """Resolve interactivity.

    An enclosing ``interactive_session`` wins, then ``default`` (the
    configured value), then whether stdin is a terminal.
    """
    forced = _interactive.get()
    if forced is not None:
        return forced
    if default is not None:
        return default
    return sys.stdin is not None and sys.stdin.isatty()
