"""Exception hierarchy for keycustom."""

from typing import Any, Dict, Mapping, Optional


class KeycustomError(Exception):
    """Base exception for the customization registry."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context is not None else {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class UsageError(KeycustomError, TypeError):
    """Raised at declaration time when a declaration is malformed.

    Reserved option keys, unknown option keys and redeclaring a setting of
    an incompatible kind all land here.
    """


class InteractiveOnly(KeycustomError, RuntimeError):
    """Raised when an operator-only command runs without an operator."""


class FeatureNotFound(KeycustomError, ImportError):
    """Raised when a feature has no importable module."""

    def __init__(self, feature: str, module: str, *, context: Optional[Mapping[str, Any]] = None) -> None:
        ctx = {"feature": feature, "module": module, **dict(context or {})}
        KeycustomError.__init__(self, f"Cannot find feature '{feature}' (module '{module}')", context=ctx)
        self.feature = feature
        self.module = module


class LoadError(KeycustomError, ImportError):
    """Raised when importing a feature module fails."""

    def __init__(self, feature: str, module: str, reason: str, *, context: Optional[Mapping[str, Any]] = None) -> None:
        ctx = {"feature": feature, "module": module, **dict(context or {})}
        KeycustomError.__init__(self, f"Loading feature '{feature}' failed: {reason}", context=ctx)
        self.feature = feature
        self.module = module


class UnboundResource(KeycustomError, LookupError):
    """Raised when reading the value of a name that was never assigned."""

    def __init__(self, name: str) -> None:
        KeycustomError.__init__(self, f"Resource '{name}' is unbound", context={"name": name})
        self.name = name


class KeymapError(KeycustomError, ValueError):
    """Raised for malformed keymap operations."""


class ConfigError(KeycustomError, ValueError):
    """Raised when a configuration file cannot be used."""


__all__ = [
    "KeycustomError",
    "UsageError",
    "InteractiveOnly",
    "FeatureNotFound",
    "LoadError",
    "UnboundResource",
    "KeymapError",
    "ConfigError",
]
