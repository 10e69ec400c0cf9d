"""Feature loading on top of importlib."""

import importlib
import logging
from types import ModuleType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Set

from keycustom.errors import FeatureNotFound, KeycustomError, LoadError

logger = logging.getLogger(__name__)


class FeatureLoader:
    """Loads features (importable modules) once and remembers which are loaded.

    A feature id maps to a module through an alias table; without an alias
    the id itself is the module name, with ``-`` read as ``_``.

    Example:
        loader = FeatureLoader({"dired": "myapp.features.dired"})
        loader.require("dired")
        loader.is_loaded("dired")   # True
    """

    def __init__(self, modules: Optional[Mapping[str, str]] = None):
        self._modules: Dict[str, str] = dict(modules or {})
        self._loaded: Set[str] = set()
        self._hooks: List[Callable[[str], None]] = []

    def alias(self, feature: str, module: str) -> None:
        self._modules[feature] = module

    def module_for(self, feature: str) -> str:
        return self._modules.get(feature, feature.replace("-", "_"))

    def is_loaded(self, feature: str) -> bool:
        return feature in self._loaded

    def loaded(self) -> FrozenSet[str]:
        return frozenset(self._loaded)

    def after_load(self, callback: Callable[[str], None]) -> None:
        """Call ``callback(feature)`` each time a feature becomes loaded."""
        self._hooks.append(callback)

    def provide(self, feature: str) -> None:
        """Mark ``feature`` as loaded without importing anything."""
        if feature in self._loaded:
            return
        self._loaded.add(feature)
        logger.debug("Feature loaded: %s", feature)
        for callback in list(self._hooks):
            callback(feature)

    def require(self, feature: str) -> Optional[ModuleType]:
        """Load ``feature`` unless it is already loaded.

        Returns:
            The imported module, or None if the feature was already loaded

        Raises:
            FeatureNotFound: If no module exists for the feature
            LoadError: If importing the module raised
        """
        if feature in self._loaded:
            return None

        module_name = self.module_for(feature)
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # A missing dependency inside the feature module is a load failure
            if e.name and e.name != module_name and not module_name.startswith(e.name + "."):
                raise LoadError(feature, module_name, str(e)) from e
            raise FeatureNotFound(feature, module_name) from e
        except KeycustomError:
            raise
        except Exception as e:
            raise LoadError(feature, module_name, f"{type(e).__name__}: {e}") from e

        self.provide(feature)
        return module
