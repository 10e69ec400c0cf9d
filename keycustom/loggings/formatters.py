"""Compact rendering of registry values for log lines."""

from typing import Any

from keycustom.keymaps import is_keymap


def format_log_value(value: Any, max_length: int = 120, max_items: int = 3) -> str:
    """Render a value for a log line without dumping whole keymaps.

    Keymaps render as ``<Keymap n bindings>`` plus a parent marker; mappings
    and sequences show at most ``max_items`` entries.

    Example:
        >>> format_log_value({"C-a": "beginning-of-line", "C-e": "end-of-line"})
        "{C-a='beginning-of-line', C-e='end-of-line'}"
    """
    if is_keymap(value):
        suffix = " +parent" if value.parent is not None else ""
        return f"<Keymap {len(value)} bindings{suffix}>"

    if isinstance(value, dict):
        if not value:
            return "{}"
        items = []
        for i, (k, v) in enumerate(value.items()):
            if i >= max_items:
                items.append(f"... +{len(value) - max_items} more")
                break
            val_str = f"'{v}'" if isinstance(v, str) else format_log_value(v, max_length=50, max_items=1)
            items.append(f"{k}={val_str}")
        result = "{" + ", ".join(items) + "}"

    elif isinstance(value, (list, tuple, set, frozenset)):
        if not value:
            return type(value).__name__ + "()"
        # Sets have no order; sort so repeated log lines compare equal
        ordered = sorted(value, key=str) if isinstance(value, (set, frozenset)) else list(value)
        items = [str(item)[:50] for item in ordered[:max_items]]
        if len(value) > max_items:
            items.append(f"... +{len(value) - max_items} more")
        result = "[" + ", ".join(items) + "]"

    elif isinstance(value, str):
        result = f"'{value}'"

    else:
        result = repr(value)

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
