"""Registry of customizable keymaps with lazily loaded features."""

from typing import Any, Callable, List, Optional

from keycustom.configs import RegistryConfig
from keycustom.errors import InteractiveOnly, UsageError
from keycustom.keymaps import Keymap, is_keymap
from keycustom.loggings import LOGGER, format_log_value

from .features import FeatureLoader
from .interactive import is_interactive
from .namespace import Namespace
from .prefix import PrefixCommand
from .records import (
    KEYMAP_TYPE,
    CustomizationRecord,
    CustomOptions,
    Setter,
    set_default,
    set_keymap,
    validate_custom_options,
)
from .store import RecordStore


class CustomRegistry:
    """Declares keymaps as customizable settings and retrofits existing ones.

    Three things are kept consistent per name: the live value in
    ``namespace``, the record in ``records`` (whose standard value always
    re-reads the live value), and the features that must load first.

    Example:
        registry = CustomRegistry()

        # Declare a new customizable keymap
        registry.declare_resource("my-mode-map", doc="Keys for my-mode.")

        # Retrofit keymaps that code bound directly
        registry.namespace.bind("other-map", Keymap())
        registry.promote_all_bound_resources()

        # Operator: this keymap only makes sense once "dired" is loaded
        with interactive_session():
            registry.promote_resource_for_feature("dired", "dired-mode-map")
    """

    def __init__(
        self,
        namespace: Optional[Namespace] = None,
        loader: Optional[FeatureLoader] = None,
        interactive: Optional[bool] = None,
    ):
        """Initialize the registry.

        Args:
            namespace: Table the program binds its resources in
            loader: Feature loader used by promote_resource_for_feature
            interactive: Force interactivity; None detects it from stdin
        """
        self.namespace = namespace if namespace is not None else Namespace()
        self.loader = loader if loader is not None else FeatureLoader()
        self.records = RecordStore()
        self.interactive = interactive
        self.overrides_applied = False
        self._register_hooks: List[Callable[[str], None]] = []

    # ========================================================================
    # Factory Methods
    # ========================================================================

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "CustomRegistry":
        registry = cls()
        registry.configure(config)
        return registry

    def configure(self, config: RegistryConfig) -> None:
        """Apply interactivity and feature aliases from ``config``."""
        self.interactive = config.interactive
        for feature, module in config.feature_modules.items():
            self.loader.alias(feature, module)

    def after_register(self, callback: Callable[[str], None]) -> None:
        """Call ``callback(name)`` each time a new record is created.

        Runs once the name is bound and its required features are recorded.
        """
        self._register_hooks.append(callback)

    def _registered(self, name: str) -> None:
        for callback in list(self._register_hooks):
            callback(name)

    # ========================================================================
    # Record creation
    # ========================================================================

    def _keymap_record(
        self,
        name: str,
        doc: str = "",
        options: Optional[CustomOptions] = None,
    ) -> CustomizationRecord:
        namespace = self.namespace
        return CustomizationRecord(
            name=name,
            type_tag=KEYMAP_TYPE,
            setter=set_keymap,
            # Re-read on every evaluation; a snapshot would freeze in overrides
            standard=lambda: namespace.value(name),
            documentation=doc,
            options=options if options is not None else CustomOptions(),
        )

    def _promote(self, name: str, feature: Optional[str] = None) -> CustomizationRecord:
        record, created = self.records.ensure(name, lambda: self._keymap_record(name))
        if feature is not None:
            self.records.add_requirement(name, feature)
        if created:
            LOGGER.info("Keymap %s is now customizable", name)
            self._registered(name)
        return record

    def _fill_metadata(self, record: CustomizationRecord, doc: str, options: CustomOptions) -> None:
        """Give a record first created by a sweep or promotion its declared doc and options."""
        if doc and not record.documentation:
            record.documentation = doc
        if options != CustomOptions() and record.options == CustomOptions():
            record.options = options

    def _check_kind(self, name: str, type_tag: str) -> None:
        record = self.records.get(name)
        if record is None:
            return
        if (record.type_tag == KEYMAP_TYPE) != (type_tag == KEYMAP_TYPE):
            raise UsageError(
                f"'{name}' is already a customizable setting of type '{record.type_tag}'",
                context={"name": name, "type": record.type_tag},
            )

    # ========================================================================
    # Declaration
    # ========================================================================

    def declare_resource(
        self,
        name: str,
        default: Optional[Keymap] = None,
        doc: str = "",
        **options: Any,
    ) -> Keymap:
        """Declare ``name`` as a customizable keymap.

        Binds ``default`` (or a new empty keymap) if ``name`` is unbound and
        records the setting once. Redeclaring is harmless: an existing binding
        and record are kept and ``require`` features are added. A record
        created by a sweep or promotion gains ``doc`` and options it lacks.

        Args:
            name: Resource name
            default: Initial keymap when ``name`` is unbound
            doc: Documentation string
            **options: CustomOptions fields; ``type`` and ``set`` are fixed

        Returns:
            The live value of ``name``

        Raises:
            UsageError: On reserved or unknown options, a non-keymap default,
                or if ``name`` is already a setting of another kind
        """
        custom_options = validate_custom_options(name, options)
        if default is not None and not is_keymap(default):
            raise UsageError(
                f"Default of '{name}' must be a Keymap, got {type(default).__name__}",
                context={"name": name},
            )
        self._check_kind(name, KEYMAP_TYPE)

        handle = self.namespace.handle(name)
        if not handle.is_bound:
            handle.value = default if default is not None else Keymap(name=name)

        record, created = self.records.ensure(
            name, lambda: self._keymap_record(name, doc, custom_options)
        )
        for feature in custom_options.require:
            self.records.add_requirement(name, feature)
        if created:
            LOGGER.debug("Declared keymap %s = %s", name, format_log_value(handle.value))
            self._registered(name)
        else:
            self._fill_metadata(record, doc, custom_options)

        return handle.value

    def declare_prefix_resource(
        self,
        command: str,
        resource: Optional[str] = None,
        default: Optional[Keymap] = None,
        doc: str = "",
        **options: Any,
    ) -> Keymap:
        """Declare a keymap and bind ``command`` to dispatch through it.

        Without ``resource`` the command name also names the keymap, so both
        live in one handle.

        Returns:
            The live keymap
        """
        resource_name = resource or command
        keymap = self.declare_resource(resource_name, default, doc, **options)
        self.namespace.set_command(command, PrefixCommand(self.namespace, command, resource_name))
        return keymap

    def declare_setting(
        self,
        name: str,
        default: Any,
        doc: str = "",
        type_tag: str = "sexp",
        setter: Optional[Setter] = None,
        **options: Any,
    ) -> Any:
        """Declare a customizable scalar setting.

        The standard value is the declared default.

        Raises:
            UsageError: On unknown options, a keymap type tag, or if ``name``
                is already a customizable keymap
        """
        custom_options = validate_custom_options(name, options, reserved=())
        if type_tag == KEYMAP_TYPE:
            raise UsageError(f"Use declare_resource for keymap '{name}'", context={"name": name})
        self._check_kind(name, type_tag)

        handle = self.namespace.handle(name)
        if not handle.is_bound:
            handle.value = default

        _, created = self.records.ensure(
            name,
            lambda: CustomizationRecord(
                name=name,
                type_tag=type_tag,
                setter=setter or set_default,
                standard=lambda: default,
                documentation=doc,
                options=custom_options,
            ),
        )
        for feature in custom_options.require:
            self.records.add_requirement(name, feature)
        if created:
            self._registered(name)

        return handle.value

    # ========================================================================
    # Retrofit
    # ========================================================================

    def promote_all_bound_resources(self) -> List[str]:
        """Make every bound, unregistered keymap customizable.

        Meant to run once at startup, before saved values are applied. A
        later run still registers new keymaps but cannot repair a standard
        value recorded for a setting that was customized in between.

        Returns:
            Names newly registered by this call
        """
        if self.overrides_applied:
            LOGGER.warning(
                "Sweeping keymaps after saved values were applied; "
                "standard values of already customized settings are not recomputed"
            )

        promoted = []
        for handle in self.namespace.bound_handles():
            if handle.name in self.records or not is_keymap(handle.value):
                continue
            self._promote(handle.name)
            promoted.append(handle.name)

        LOGGER.info("Promoted %d bound keymap(s): %s", len(promoted), format_log_value(promoted))
        return promoted

    def promote_resource_for_feature(self, feature: str, name: str) -> CustomizationRecord:
        """Load ``feature`` and make keymap ``name`` customizable, requiring it.

        Operator-only. If ``name`` is already a setting the record is kept
        and only ``feature`` is added to its requirements.

        Raises:
            InteractiveOnly: If no operator is present; nothing is changed
            FeatureNotFound: From the loader; nothing is changed
            LoadError: From the loader; nothing is changed
        """
        if not is_interactive(self.interactive):
            raise InteractiveOnly(
                "promote_resource_for_feature needs an operator to confirm the feature/keymap pair",
                context={"feature": feature, "name": name},
            )

        self.loader.require(feature)
        return self._promote(name, feature)

    # ========================================================================
    # Accessors for the customization engine
    # ========================================================================

    def record(self, name: str) -> Optional[CustomizationRecord]:
        return self.records.get(name)

    def standard_value(self, name: str) -> Any:
        return self.records.standard_value(name)

    def set_value(self, name: str, value: Any) -> None:
        """Apply a saved value through the setting's setter.

        Names without a record are assigned directly.
        """
        record = self.records.get(name)
        setter: Callable[[Namespace, str, Any], None] = record.setter if record else set_default
        setter(self.namespace, name, value)
        self.overrides_applied = True
        LOGGER.debug("Set %s = %s", name, format_log_value(value))
