"""Prefix commands: executables that dispatch through a keymap resource."""

from typing import TYPE_CHECKING, Any

from keycustom.errors import KeymapError
from keycustom.keymaps import Keymap, KeySequence, format_keys, is_keymap, parse_keys

if TYPE_CHECKING:
    from .namespace import Namespace


class PrefixCommand:
    """Callable bound as a command that looks keys up in a keymap resource.

    The keymap is read from the namespace on every call, so replacing or
    customizing the resource takes effect immediately.
    """

    def __init__(self, namespace: "Namespace", command_name: str, resource_name: str):
        self._namespace = namespace
        self.command_name = command_name
        self.resource_name = resource_name

    @property
    def keymap(self) -> Keymap:
        keymap = self._namespace.value(self.resource_name)
        if not is_keymap(keymap):
            raise KeymapError(f"'{self.resource_name}' is not bound to a keymap")
        return keymap

    def __call__(self, keys: KeySequence, *args: Any, **kwargs: Any) -> Any:
        """Dispatch ``keys``.

        A callable action is called with the remaining arguments, a string
        action is run as the command of that name, and a prefix keymap is
        returned for the caller to continue reading keys.

        Raises:
            KeyError: If ``keys`` is not bound
        """
        action = self.keymap.lookup(keys)
        if action is None:
            raise KeyError(f"{format_keys(parse_keys(keys))} is undefined in {self.resource_name}")
        if is_keymap(action):
            return action
        if isinstance(action, str):
            action = self._namespace.command(action)
        return action(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<PrefixCommand {self.command_name} -> {self.resource_name}>"
