"""Applying saved values once their settings exist and their features are loaded."""

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Set

from keycustom.loggings import LOGGER, format_log_value

if TYPE_CHECKING:
    from .custom_registry import CustomRegistry


class OverrideApplier:
    """Applies saved values through each setting's setter.

    A value is held back while its name has no record, or while the record
    requires features that are not loaded yet. Held values are applied from
    the registry's registration hook and the loader's after-load hook, so a
    saved value always goes through the setter and never stands in for the
    declared default.

    Example:
        applier = OverrideApplier(registry)
        applier.apply_all(saved_values)      # supplied by the persistence layer
        applier.pending()                    # names still waiting
        applier.failed()                     # held values whose setter raised
    """

    def __init__(self, registry: "CustomRegistry"):
        self._registry = registry
        self._pending: Dict[str, Any] = {}
        self._failed: Dict[str, Exception] = {}
        registry.after_register(self._on_registered)
        registry.loader.after_load(self._on_feature_loaded)

    def _missing_features(self, name: str) -> Set[str]:
        record = self._registry.records.get(name)
        if record is None:
            return set()
        loader = self._registry.loader
        return {feature for feature in record.required_features if not loader.is_loaded(feature)}

    def _is_ready(self, name: str) -> bool:
        return name in self._registry.records and not self._missing_features(name)

    def apply(self, name: str, value: Any) -> bool:
        """Apply ``value`` now, or hold it until ``name`` is ready.

        An immediate apply propagates errors from the setter.

        Returns:
            True if applied immediately
        """
        self._failed.pop(name, None)
        if name not in self._registry.records:
            self._pending[name] = value
            LOGGER.debug("Holding saved value of %s until it is declared", name)
            return False

        missing = self._missing_features(name)
        if missing:
            self._pending[name] = value
            LOGGER.debug("Deferring saved value of %s until %s load", name, format_log_value(missing))
            return False

        self._pending.pop(name, None)
        self._registry.set_value(name, value)
        return True

    def apply_all(self, saved: Mapping[str, Any]) -> List[str]:
        """Apply many saved values.

        Returns:
            Names applied immediately
        """
        return [name for name, value in saved.items() if self.apply(name, value)]

    def pending(self) -> List[str]:
        return list(self._pending.keys())

    def failed(self) -> Dict[str, Exception]:
        """Held values whose setter raised when applied from a hook."""
        return dict(self._failed)

    def _apply_held(self, names: Iterable[str], trigger: str) -> None:
        # One bad value must not block the others or the load that triggered it
        for name in list(names):
            if name not in self._pending or not self._is_ready(name):
                continue
            value = self._pending.pop(name)
            LOGGER.info("Applying held saved value of %s after %s", name, trigger)
            try:
                self._registry.set_value(name, value)
            except Exception as e:
                self._failed[name] = e
                LOGGER.error("Failed to apply saved value of %s: %s", name, e)

    def _on_registered(self, name: str) -> None:
        self._apply_held([name], f"declaring {name}")

    def _on_feature_loaded(self, feature: str) -> None:
        self._apply_held(self._pending, f"loading {feature}")
