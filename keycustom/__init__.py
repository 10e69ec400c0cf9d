"""
keycustom - customizable keymaps for long-running programs

Declare keymaps as customizable settings, retrofit keymaps that plain code
bound earlier, and record which features must load before a saved value
can be applied.

Example:
    ```python
    from keycustom import Keymap, declare_resource, startup

    declare_resource("my-mode-map", Keymap({"C-c C-c": "my-compile"}),
                     doc="Keys for my-mode.", group="my-mode")

    startup()   # once, before saved values are applied
    ```
"""

from keycustom.commands import promote_resource_command
from keycustom.configs import RegistryConfig, load_config
from keycustom.errors import (
    ConfigError,
    FeatureNotFound,
    InteractiveOnly,
    KeycustomError,
    KeymapError,
    LoadError,
    UnboundResource,
    UsageError,
)
from keycustom.keymaps import Keymap, is_keymap
from keycustom.loggings import LOGGER
from keycustom.registry import (
    KEYMAP_TYPE,
    UNBOUND,
    CustomizationRecord,
    CustomRegistry,
    FeatureLoader,
    Namespace,
    OverrideApplier,
    PrefixCommand,
    bind,
    declare_prefix_resource,
    declare_resource,
    declare_setting,
    get_registry,
    interactive_session,
    is_interactive,
    promote_all_bound_resources,
    promote_resource_for_feature,
    reset_global_registry,
    set_global_registry,
    startup,
)

__version__ = "0.1.0"

__all__ = [
    # Registry
    "CustomRegistry",
    "CustomizationRecord",
    "KEYMAP_TYPE",
    "Namespace",
    "UNBOUND",
    "PrefixCommand",
    "FeatureLoader",
    "OverrideApplier",
    "interactive_session",
    "is_interactive",
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
    "promote_resource_command",
    # Keymaps
    "Keymap",
    "is_keymap",
    # Config
    "RegistryConfig",
    "load_config",
    # Errors
    "KeycustomError",
    "UsageError",
    "InteractiveOnly",
    "FeatureNotFound",
    "LoadError",
    "UnboundResource",
    "KeymapError",
    "ConfigError",
    # Logging
    "LOGGER",
]
