"""Shortcuts for the global registry."""

from .api import (
    bind,
    declare_prefix_resource,
    declare_resource,
    declare_setting,
    promote_all_bound_resources,
    promote_resource_for_feature,
)
from .global_registry import get_registry, reset_global_registry, set_global_registry, startup

__all__ = [
    "get_registry",
    "set_global_registry",
    "reset_global_registry",
    "startup",
    "bind",
    "declare_resource",
    "declare_prefix_resource",
    "declare_setting",
    "promote_all_bound_resources",
    "promote_resource_for_feature",
]
