"""Keymaps: dispatch tables from key sequences to actions."""

from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from keycustom.errors import KeymapError


Action = Union[Callable[..., Any], str, "Keymap"]
KeySequence = Union[str, Sequence[str]]


def parse_keys(keys: KeySequence) -> Tuple[str, ...]:
    """Split a key sequence into keystrokes.

    Accepts ``"C-x C-f"`` or ``["C-x", "C-f"]``.

    Raises:
        KeymapError: If the sequence is empty
    """
    if isinstance(keys, str):
        strokes = tuple(keys.split())
    else:
        strokes = tuple(stroke.strip() for stroke in keys if stroke and stroke.strip())
    if not strokes:
        raise KeymapError(f"Empty key sequence: {keys!r}")
    return strokes


def format_keys(strokes: Sequence[str]) -> str:
    return " ".join(strokes)


def is_keymap(value: Any) -> bool:
    """True if ``value`` is a structured keymap resource."""
    return isinstance(value, Keymap)


def _action_name(action: Any) -> str:
    if isinstance(action, str):
        return action
    module = getattr(action, "__module__", None)
    qualname = getattr(action, "__qualname__", None) or repr(action)
    return f"{module}:{qualname}" if module else qualname


class Keymap:
    """A mutable dispatch table with an optional parent fallback.

    Bindings are stored one keystroke per level: a multi-stroke sequence
    lives in nested prefix keymaps. Lookup checks this keymap first and then
    walks the parent chain.

    Example:
        global_map = Keymap(name="global-map")
        global_map.define_key("C-x C-f", "find-file")

        mode_map = Keymap({"C-c C-c": compile_buffer}, parent=global_map)
        mode_map.lookup("C-x C-f")   # "find-file", through the parent
    """

    def __init__(
        self,
        bindings: Optional[Mapping[str, Action]] = None,
        parent: Optional["Keymap"] = None,
        name: Optional[str] = None,
    ):
        self.name = name
        self._bindings: Dict[str, Action] = {}
        self._parent: Optional[Keymap] = None
        if parent is not None:
            self.set_parent(parent)
        for keys, action in (bindings or {}).items():
            self.define_key(keys, action)

    # ========================================================================
    # Parent chain
    # ========================================================================

    @property
    def parent(self) -> Optional["Keymap"]:
        return self._parent

    def set_parent(self, parent: Optional["Keymap"]) -> None:
        """Set the fallback keymap.

        Raises:
            KeymapError: If ``parent`` is not a keymap or would create a cycle
        """
        if parent is not None and not is_keymap(parent):
            raise KeymapError(f"Parent must be a Keymap, got {type(parent).__name__}")

        ancestor = parent
        while ancestor is not None:
            if ancestor is self:
                raise KeymapError(f"Setting parent of {self!r} would create a cycle")
            ancestor = ancestor.parent

        self._parent = parent

    def _lookup_stroke(self, stroke: str) -> Optional[Action]:
        keymap: Optional[Keymap] = self
        while keymap is not None:
            action = keymap._bindings.get(stroke)
            if action is not None:
                return action
            keymap = keymap._parent
        return None

    # ========================================================================
    # Bindings
    # ========================================================================

    def define_key(self, keys: KeySequence, action: Optional[Action]) -> None:
        """Bind ``keys`` to ``action``; ``None`` removes the binding.

        Missing intermediate prefixes are created. A new prefix inherits from
        the prefix the parent chain already binds at that position, so child
        keymaps extend rather than hide inherited prefixes.

        Raises:
            KeymapError: If a stroke before the last is bound to a non-keymap
        """
        strokes = parse_keys(keys)
        keymap = self
        for i, stroke in enumerate(strokes[:-1]):
            prefix = keymap._bindings.get(stroke)
            if prefix is None:
                inherited = keymap._parent._lookup_stroke(stroke) if keymap._parent else None
                prefix = Keymap(parent=inherited if is_keymap(inherited) else None)
                keymap._bindings[stroke] = prefix
            elif not is_keymap(prefix):
                raise KeymapError(
                    f"Key sequence {format_keys(strokes)} starts with non-prefix key "
                    f"{format_keys(strokes[:i + 1])}"
                )
            keymap = prefix

        if action is None:
            keymap._bindings.pop(strokes[-1], None)
        else:
            keymap._bindings[strokes[-1]] = action

    def lookup(self, keys: KeySequence) -> Optional[Action]:
        """Resolve ``keys`` through prefixes and the parent chain.

        Returns:
            The bound action, a prefix Keymap for an incomplete sequence, or
            None if nothing is bound
        """
        action: Optional[Action] = self
        for stroke in parse_keys(keys):
            if not is_keymap(action):
                return None
            action = action._lookup_stroke(stroke)
            if action is None:
                return None
        return action

    def __contains__(self, keys: KeySequence) -> bool:
        return self.lookup(keys) is not None

    def __len__(self) -> int:
        return len(self._bindings)

    def bindings(self) -> Dict[str, Action]:
        """Own bindings flattened to full key sequences (parent excluded)."""
        return dict(self._iter_bindings(()))

    def _iter_bindings(self, prefix: Tuple[str, ...]) -> Iterator[Tuple[str, Action]]:
        for stroke, action in self._bindings.items():
            strokes = prefix + (stroke,)
            if is_keymap(action) and action.name is None:
                yield from action._iter_bindings(strokes)
            else:
                yield format_keys(strokes), action

    # ========================================================================
    # Structural operations
    # ========================================================================

    def copy(self) -> "Keymap":
        """Copy bindings recursively; the parent is shared, not copied.

        Named prefix keymaps are other resources and are shared as well.
        """
        clone = Keymap(name=self.name)
        clone._parent = self._parent
        for stroke, action in self._bindings.items():
            if is_keymap(action) and action.name is None:
                action = action.copy()
            clone._bindings[stroke] = action
        return clone

    def replace_contents(self, other: "Keymap") -> None:
        """Make this keymap equal to ``other`` while keeping its identity.

        Keymaps that use this one as a parent or prefix keep seeing it.
        """
        if not is_keymap(other):
            raise KeymapError(f"Expected a Keymap, got {type(other).__name__}")
        if other is self:
            return
        contents = other.copy()
        self.set_parent(contents.parent)
        self._bindings = contents._bindings

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keymap):
            return NotImplemented
        return self._parent is other._parent and self._bindings == other._bindings

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        label = f" {self.name}" if self.name else ""
        return f"<Keymap{label} bindings={len(self._bindings)}>"

    # ========================================================================
    # Plain-data conversion
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain data for the external persistence engine.

        Callables are written as ``module:qualname``; named prefix keymaps and
        the parent are written by name.

        Raises:
            KeymapError: If the parent has no name to write
        """
        if self._parent is not None and self._parent.name is None:
            raise KeymapError(f"Cannot write {self!r}: its parent keymap has no name")

        bindings = {}
        for keys, action in self.bindings().items():
            if is_keymap(action):
                bindings[keys] = {"keymap": action.name}
            else:
                bindings[keys] = _action_name(action)
        return {
            "name": self.name,
            "parent": self._parent.name if self._parent is not None else None,
            "bindings": bindings,
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        resolve_keymap: Optional[Callable[[str], "Keymap"]] = None,
        resolve_action: Optional[Callable[[str], Action]] = None,
    ) -> "Keymap":
        """Build a keymap from ``to_dict`` output.

        Args:
            data: Plain data with ``bindings`` and optional ``parent``/``name``
            resolve_keymap: Maps a keymap name to a Keymap (parent and named
                prefixes); required when the data references one
            resolve_action: Maps action strings to actions (default: keep the
                string as a command name)

        Raises:
            KeymapError: If the data is malformed or references a keymap
                without a resolver
        """
        if not isinstance(data, Mapping):
            raise KeymapError(f"Keymap data must be a mapping, got {type(data).__name__}")

        def keymap_named(name: str) -> "Keymap":
            if resolve_keymap is None:
                raise KeymapError(f"Keymap data references '{name}' but no resolver was given")
            keymap = resolve_keymap(name)
            if not is_keymap(keymap):
                raise KeymapError(f"'{name}' does not name a keymap")
            return keymap

        parent_name = data.get("parent")
        keymap = cls(name=data.get("name"), parent=keymap_named(parent_name) if parent_name else None)

        bindings = data.get("bindings") or {}
        if not isinstance(bindings, Mapping):
            raise KeymapError("Keymap 'bindings' must be a mapping")
        for keys, action in bindings.items():
            if isinstance(action, Mapping) and "keymap" in action:
                action = keymap_named(action["keymap"])
            elif isinstance(action, str):
                action = resolve_action(action) if resolve_action else action
            else:
                raise KeymapError(f"Unsupported action for {keys}: {action!r}")
            keymap.define_key(keys, action)
        return keymap
