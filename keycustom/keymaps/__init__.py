"""Keymap resource type."""

from .keymap import Action, Keymap, KeySequence, format_keys, is_keymap, parse_keys

__all__ = [
    "Action",
    "Keymap",
    "KeySequence",
    "format_keys",
    "is_keymap",
    "parse_keys",
]
