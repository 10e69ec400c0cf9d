"""Tests for applying saved values."""

import pytest

from keycustom import Keymap, KeymapError, OverrideApplier, interactive_session


@pytest.fixture
def applier(registry):
    return OverrideApplier(registry)


class TestApply:
    """Test immediate and deferred application."""

    def test_applies_immediately_without_requirements(self, registry, applier):
        keymap = registry.declare_resource("my-map", Keymap({"a": "old"}))

        assert applier.apply("my-map", Keymap({"a": "new"})) is True

        assert registry.namespace.value("my-map") is keymap
        assert keymap.lookup("a") == "new"
        assert applier.pending() == []

    def test_defers_until_required_feature_loads(self, registry, applier, make_feature):
        feature = make_feature("")
        keymap = registry.declare_resource("my-map", Keymap({"a": "old"}), require=feature)

        assert applier.apply("my-map", Keymap({"a": "saved"})) is False
        assert applier.pending() == ["my-map"]
        assert keymap.lookup("a") == "old"

        registry.loader.require(feature)

        assert applier.pending() == []
        assert keymap.lookup("a") == "saved"

    def test_waits_for_every_required_feature(self, registry, applier):
        registry.declare_resource("my-map", require=["f1", "f2"])
        applier.apply("my-map", Keymap({"a": "saved"}))

        registry.loader.provide("f1")
        assert applier.pending() == ["my-map"]

        registry.loader.provide("f2")
        assert applier.pending() == []
        assert registry.namespace.value("my-map").lookup("a") == "saved"

    def test_feature_loading_binds_the_keymap(self, registry, applier, make_feature):
        feature = make_feature("""
            from keycustom import Keymap, bind

            bind("lazy-map", Keymap({"q": "quit-window"}))
        """)
        with interactive_session():
            registry.promote_resource_for_feature(feature, "lazy-map")

        # Feature is loaded now, so the value applies straight away
        assert applier.apply("lazy-map", {"bindings": {"q": "bury-buffer"}}) is True
        assert registry.namespace.value("lazy-map").lookup("q") == "bury-buffer"

    def test_apply_all(self, registry, applier):
        registry.declare_resource("now-map")
        registry.declare_resource("later-map", require="kc-later")

        applied = applier.apply_all({
            "now-map": Keymap({"a": "b"}),
            "later-map": Keymap({"c": "d"}),
        })

        assert applied == ["now-map"]
        assert applier.pending() == ["later-map"]
        assert registry.overrides_applied

    def test_reapplying_replaces_pending_value(self, registry, applier):
        registry.declare_resource("my-map", require="kc-later")
        applier.apply("my-map", Keymap({"a": "first"}))
        applier.apply("my-map", Keymap({"a": "second"}))

        registry.loader.provide("kc-later")

        assert registry.namespace.value("my-map").lookup("a") == "second"


# ============================================================
# Values Saved Before Declaration
# ============================================================

class TestHeldUntilDeclared:
    """Test saved values for names that have no record yet."""

    def test_saved_keymap_goes_through_setter(self, registry, applier):
        assert applier.apply("late-map", {"bindings": {"q": "bury-buffer"}}) is False
        assert applier.pending() == ["late-map"]
        assert not registry.namespace.is_bound("late-map")

        default = Keymap({"q": "quit-window"})
        keymap = registry.declare_resource("late-map", default)

        assert keymap is default
        assert registry.namespace.value("late-map") is default
        assert default.lookup("q") == "bury-buffer"
        assert applier.pending() == []

    def test_scalar_keeps_declared_standard_value(self, registry, applier):
        applier.apply("fill-column", 80)

        assert registry.declare_setting("fill-column", 70) == 80
        assert registry.standard_value("fill-column") == 70

    def test_applied_when_sweep_registers_the_keymap(self, registry, applier):
        applier.apply("legacy-map", Keymap({"a": "saved"}))
        original = Keymap({"a": "original"})
        registry.namespace.bind("legacy-map", original)

        registry.promote_all_bound_resources()

        assert registry.namespace.value("legacy-map") is original
        assert original.lookup("a") == "saved"
        assert applier.pending() == []

    def test_declared_requirements_still_defer(self, registry, applier):
        applier.apply("later-map", Keymap({"a": "saved"}))
        keymap = registry.declare_resource("later-map", require="kc-later")

        assert applier.pending() == ["later-map"]
        assert keymap.lookup("a") is None

        registry.loader.provide("kc-later")

        assert keymap.lookup("a") == "saved"


# ============================================================
# Failing Held Values
# ============================================================

class TestHeldValueFailures:
    """Test that a bad held value does not disturb anything else."""

    def test_bad_value_does_not_block_others(self, registry, applier):
        registry.declare_resource("bad-map", require="kc-shared")
        good = registry.declare_resource("good-map", require="kc-shared")
        applier.apply("bad-map", 42)
        applier.apply("good-map", Keymap({"a": "saved"}))

        registry.loader.provide("kc-shared")

        assert registry.loader.is_loaded("kc-shared")
        assert applier.pending() == []
        assert good.lookup("a") == "saved"
        assert list(applier.failed()) == ["bad-map"]
        assert isinstance(applier.failed()["bad-map"], KeymapError)

    def test_feature_load_succeeds(self, registry, applier, make_feature):
        feature = make_feature("VALUE = 1")
        registry.declare_resource("bad-map", require=feature)
        applier.apply("bad-map", 42)

        module = registry.loader.require(feature)

        assert module.VALUE == 1
        assert "bad-map" in applier.failed()

    def test_bad_value_on_declaration_is_recorded(self, registry, applier):
        applier.apply("bad-map", 42)

        keymap = registry.declare_resource("bad-map")

        assert len(keymap) == 0
        assert "bad-map" in applier.failed()

    def test_reapplying_clears_failure(self, registry, applier):
        applier.apply("bad-map", 42)
        keymap = registry.declare_resource("bad-map")

        assert applier.apply("bad-map", Keymap({"a": "fixed"})) is True

        assert applier.failed() == {}
        assert keymap.lookup("a") == "fixed"

    def test_immediate_apply_raises(self, registry, applier):
        registry.declare_resource("my-map")

        with pytest.raises(KeymapError):
            applier.apply("my-map", 42)
