"""Record store: per-name customization metadata."""

import logging
from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Tuple

from keycustom.loggings import format_log_value

from .records import CustomizationRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """Mapping of setting name to its single CustomizationRecord.

    A record is created once and then only amended: later registrations may
    add required features but never replace the type tag, setter or
    standard value.
    """

    def __init__(self):
        self._records: Dict[str, CustomizationRecord] = {}

    def get(self, name: str) -> Optional[CustomizationRecord]:
        return self._records.get(name)

    def has(self, name: str) -> bool:
        return name in self._records

    def names(self) -> List[str]:
        return list(self._records.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[CustomizationRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def ensure(
        self,
        name: str,
        factory: Callable[[], CustomizationRecord],
    ) -> Tuple[CustomizationRecord, bool]:
        """Return the record for ``name``, creating it with ``factory`` if absent.

        Returns:
            (record, created)
        """
        existing = self._records.get(name)
        if existing is not None:
            return existing, False

        record = factory()

        # The factory may have registered the name through a reentrant call
        existing = self._records.get(name)
        if existing is not None:
            return existing, False

        self._records[name] = record
        logger.debug("Registered setting: %s (type=%s)", name, record.type_tag)
        return record, True

    def _require(self, name: str) -> CustomizationRecord:
        record = self._records.get(name)
        if record is None:
            raise KeyError(f"'{name}' is not a customizable setting")
        return record

    def add_requirement(self, name: str, feature: str) -> bool:
        """Record that ``feature`` must be loaded before ``name`` is meaningful.

        Returns:
            True if the feature was new for this setting

        Raises:
            KeyError: If ``name`` has no record
        """
        record = self._require(name)
        if feature in record.required_features:
            return False
        record.required_features.add(feature)
        logger.debug(
            "Setting %s now requires %s",
            name,
            format_log_value(record.required_features),
        )
        return True

    def required_features(self, name: str) -> FrozenSet[str]:
        return frozenset(self._require(name).required_features)

    def standard_value(self, name: str):
        """Evaluate the standard value of ``name``.

        Raises:
            KeyError: If ``name`` has no record
            UnboundResource: If the resource has no value yet
        """
        return self._require(name).standard_value()

    def clear(self):
        """Forget all records (for testing)."""
        self._records.clear()
