"""Customization registry for keymaps.

Basic usage:
    from keycustom.registry import CustomRegistry, interactive_session

    registry = CustomRegistry()
    registry.declare_resource("my-mode-map", doc="Keys for my-mode.")

    # Keymaps bound by plain program code become customizable too
    registry.namespace.bind("legacy-map", Keymap())
    registry.promote_all_bound_resources()

Global registry:
    from keycustom.registry import get_registry, startup

    startup()                  # reads keycustom.yaml, runs the sweep once
    get_registry().record("legacy-map")
"""

from .custom_registry import CustomRegistry
from .features import FeatureLoader
from .interactive import interactive_session, is_interactive
from .namespace import UNBOUND, Namespace, ResourceHandle
from .overrides import OverrideApplier
from .prefix import PrefixCommand
from .records import (
    KEYMAP_TYPE,
    RESERVED_OPTIONS,
    CustomizationRecord,
    CustomOptions,
    set_default,
    set_keymap,
    validate_custom_options,
)
from .shortcuts import (
    bind,
    declare_prefix_resource,
    declare_resource,
    declare_setting,
    get_registry,
    promote_all_bound_resources,
    promote_resource_for_feature,
    reset_global_registry,
    set_global_registry,
    startup,
)
from .store import RecordStore

__all__ = [
    # Registry
    "CustomRegistry",
    "RecordStore",
    "CustomizationRecord",
    "CustomOptions",
    "KEYMAP_TYPE",
    "RESERVED_OPTIONS",
    "validate_custom_options",
    "set_default",
    "set_keymap",
    # Namespace
    "Namespace",
    "ResourceHandle",
    "UNBOUND",
    "PrefixCommand",
    # Features and operators
    "FeatureLoader",
    "interactive_session",
    "is_interactive",
    "OverrideApplier",
    # Global registry
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
