"""Process-wide table of named resource bindings."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

from keycustom.errors import UnboundResource


class _Unbound:
    """Marker for a value cell that was never assigned."""

    _instance: Optional["_Unbound"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNBOUND"


UNBOUND = _Unbound()


@dataclass(eq=False)
class ResourceHandle:
    """A named slot with a value cell and a command cell.

    Attributes:
        name: Process-wide unique name
        value: Live value, or UNBOUND
        command: Executable bound under the same name, if any
    """

    name: str
    value: Any = UNBOUND
    command: Optional[Callable[..., Any]] = None

    @property
    def is_bound(self) -> bool:
        return self.value is not UNBOUND

    def get(self) -> Any:
        """Return the live value.

        Raises:
            UnboundResource: If the value cell is empty
        """
        if self.value is UNBOUND:
            raise UnboundResource(self.name)
        return self.value


class Namespace:
    """Explicit name -> handle table that features bind their resources in.

    Handles are interned on first mention and never removed, so closures
    holding a handle always see the current value.

    Example:
        namespace = Namespace()
        namespace.bind("dired-mode-map", Keymap())
        namespace.value("dired-mode-map")
    """

    def __init__(self):
        self._handles: Dict[str, ResourceHandle] = {}

    def handle(self, name: str) -> ResourceHandle:
        """Return the handle for ``name``, creating an unbound one if needed."""
        handle = self._handles.get(name)
        if handle is None:
            handle = self._handles[name] = ResourceHandle(name)
        return handle

    def find(self, name: str) -> Optional[ResourceHandle]:
        return self._handles.get(name)

    def bind(self, name: str, value: Any) -> ResourceHandle:
        """Assign ``value`` to the value cell of ``name``."""
        handle = self.handle(name)
        handle.value = value
        return handle

    def value(self, name: str) -> Any:
        """Return the live value of ``name``.

        Raises:
            UnboundResource: If ``name`` has no value
        """
        handle = self._handles.get(name)
        if handle is None:
            raise UnboundResource(name)
        return handle.get()

    def is_bound(self, name: str) -> bool:
        handle = self._handles.get(name)
        return handle is not None and handle.is_bound

    def set_command(self, name: str, command: Callable[..., Any]) -> ResourceHandle:
        handle = self.handle(name)
        handle.command = command
        return handle

    def command(self, name: str) -> Callable[..., Any]:
        """Return the command bound under ``name``.

        Raises:
            KeyError: If ``name`` has no command
        """
        handle = self._handles.get(name)
        if handle is None or handle.command is None:
            raise KeyError(f"No command named '{name}'")
        return handle.command

    def bound_handles(self) -> List[ResourceHandle]:
        """Snapshot of handles with a value, in first-mention order."""
        return [handle for handle in self._handles.values() if handle.is_bound]

    def names(self) -> List[str]:
        return [handle.name for handle in self.bound_handles()]

    def __contains__(self, name: str) -> bool:
        return self.is_bound(name)

    def __iter__(self) -> Iterator[ResourceHandle]:
        return iter(self.bound_handles())

    def __len__(self) -> int:
        return len(self.bound_handles())
