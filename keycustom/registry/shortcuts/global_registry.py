"""Global registry singleton utilities."""

from typing import TYPE_CHECKING, Optional

from keycustom.configs import RegistryConfig, load_config
from keycustom.loggings import LOGGER, setup_logger

if TYPE_CHECKING:
    from ..custom_registry import CustomRegistry


# Global registry instance
_GLOBAL_REGISTRY: Optional["CustomRegistry"] = None


def get_registry() -> "CustomRegistry":
    """Get the global CustomRegistry, creating it from the config file.

    The config is looked up through KEYCUSTOM_CONFIG, ./keycustom.yaml and
    ~/.keycustom/config.yaml; defaults apply when none exists.

    Raises:
        ConfigError: If the config file is malformed

    Example:
        from keycustom import get_registry

        registry = get_registry()
        registry.declare_resource("my-mode-map")
    """
    global _GLOBAL_REGISTRY

    if _GLOBAL_REGISTRY is None:
        from ..custom_registry import CustomRegistry

        config = load_config()
        setup_logger(config.logging, replace=True)
        _GLOBAL_REGISTRY = CustomRegistry.from_config(config)

    return _GLOBAL_REGISTRY


def set_global_registry(registry: "CustomRegistry"):
    """Use ``registry`` as the global registry."""
    global _GLOBAL_REGISTRY
    _GLOBAL_REGISTRY = registry


def reset_global_registry():
    """Drop the global registry (for testing)."""
    global _GLOBAL_REGISTRY
    _GLOBAL_REGISTRY = None


def startup(config: Optional[RegistryConfig] = None) -> "CustomRegistry":
    """Configure the global registry and run the startup sweep.

    Call once, after the program has bound its keymaps and before any
    saved values are applied.

    Args:
        config: Registry config (default: discovered config file)

    Returns:
        The global registry
    """
    if config is None:
        config = load_config()
    setup_logger(config.logging, replace=True)

    registry = get_registry()
    registry.configure(config)

    if config.sweep_on_startup:
        registry.promote_all_bound_resources()
    else:
        LOGGER.debug("Startup sweep disabled by config")

    return registry
