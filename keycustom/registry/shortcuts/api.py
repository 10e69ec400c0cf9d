"""Module-level functions that act on the global registry."""

from typing import Any, List, Optional

from keycustom.keymaps import Keymap

from ..records import CustomizationRecord
from .global_registry import get_registry


def bind(name: str, value: Any) -> Any:
    """Bind ``name`` in the global namespace, as ordinary program code does."""
    get_registry().namespace.bind(name, value)
    return value


def declare_resource(name: str, default: Optional[Keymap] = None, doc: str = "", **options: Any) -> Keymap:
    return get_registry().declare_resource(name, default, doc, **options)


def declare_prefix_resource(
    command: str,
    resource: Optional[str] = None,
    default: Optional[Keymap] = None,
    doc: str = "",
    **options: Any,
) -> Keymap:
    return get_registry().declare_prefix_resource(command, resource, default, doc, **options)


def declare_setting(name: str, default: Any, doc: str = "", **kwargs: Any) -> Any:
    return get_registry().declare_setting(name, default, doc, **kwargs)


def promote_all_bound_resources() -> List[str]:
    return get_registry().promote_all_bound_resources()


def promote_resource_for_feature(feature: str, name: str) -> CustomizationRecord:
    return get_registry().promote_resource_for_feature(feature, name)
