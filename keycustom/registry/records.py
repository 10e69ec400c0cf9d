"""Customization records and the setters they carry."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Collection, Mapping, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from keycustom.errors import KeymapError, UsageError
from keycustom.keymaps import Keymap, is_keymap

if TYPE_CHECKING:
    from .namespace import Namespace


# Type tag of structured keymap settings
KEYMAP_TYPE = "keymap"

# Option keys the keymap declaration fixes itself
RESERVED_OPTIONS = ("type", "set")

Setter = Callable[["Namespace", str, Any], None]


class CustomOptions(BaseModel):
    """Declaration options forwarded to the customization engine.

    Args:
        group: Customization group the setting belongs to
        tag: Short label shown instead of the name
        version: Version in which the setting was introduced or changed
        link: Documentation link
        require: Features to load before a saved value can be applied
        risky: Whether file-local values of the setting are unsafe
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    group: Optional[str] = None
    tag: Optional[str] = None
    version: Optional[str] = None
    link: Optional[str] = None
    require: Tuple[str, ...] = ()
    risky: bool = False

    @field_validator("require", mode="before")
    @classmethod
    def _features_as_tuple(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value


def validate_custom_options(
    name: str,
    options: Mapping[str, Any],
    reserved: Collection[str] = RESERVED_OPTIONS,
) -> CustomOptions:
    """Check declaration options before anything is bound or recorded.

    Raises:
        UsageError: If a reserved or unknown key is given, or a value has the
            wrong type
    """
    used = sorted(key for key in reserved if key in options)
    if used:
        raise UsageError(
            f"Option(s) {', '.join(used)} of '{name}' are fixed by the declaration and cannot be given",
            context={"name": name, "keys": used},
        )
    try:
        return CustomOptions(**options)
    except ValidationError as e:
        raise UsageError(f"Invalid options for '{name}': {e}", context={"name": name}) from e


def set_default(namespace: "Namespace", name: str, value: Any) -> None:
    """Plain assignment setter for scalar settings."""
    namespace.bind(name, value)


def set_keymap(namespace: "Namespace", name: str, value: Any) -> None:
    """Structural setter for keymap settings.

    A bound keymap is updated in place, so keymaps that use it as a parent
    or prefix keep pointing at the same object. ``value`` may be a Keymap or
    plain data from ``Keymap.to_dict``.

    Raises:
        KeymapError: If ``value`` is not a keymap
    """
    if isinstance(value, Mapping):
        value = Keymap.from_dict(value, resolve_keymap=namespace.value)
    if not is_keymap(value):
        raise KeymapError(f"Value for '{name}' must be a Keymap, got {type(value).__name__}")

    handle = namespace.handle(name)
    if handle.is_bound and is_keymap(handle.value):
        handle.value.replace_contents(value)
    else:
        handle.value = value


@dataclass(eq=False)
class CustomizationRecord:
    """Registry metadata for one customizable setting.

    Attributes:
        name: Setting name, the key in the record store
        type_tag: KEYMAP_TYPE for keymaps, another tag for scalar settings
        setter: Called instead of assignment when a saved value is applied
        standard: Deferred expression for the value without overrides
        documentation: Docstring given at declaration
        options: Validated declaration options
        required_features: Features that must be loaded first; only grows
    """

    name: str
    type_tag: str
    setter: Setter
    standard: Callable[[], Any]
    documentation: str = ""
    options: CustomOptions = field(default_factory=CustomOptions)
    required_features: Set[str] = field(default_factory=set)

    @property
    def is_keymap(self) -> bool:
        return self.type_tag == KEYMAP_TYPE

    def standard_value(self) -> Any:
        """Evaluate the standard value now."""
        return self.standard()

    def __repr__(self) -> str:
        features = ",".join(sorted(self.required_features)) or "-"
        return f"<CustomizationRecord {self.name} type={self.type_tag} requires={features}>"
