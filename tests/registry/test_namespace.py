"""Tests for Namespace and ResourceHandle."""

import pytest

from keycustom import Keymap, Namespace, UnboundResource
from keycustom.registry import UNBOUND


@pytest.fixture
def namespace():
    return Namespace()


class TestHandles:
    """Test handle interning and value cells."""

    def test_handle_is_interned(self, namespace):
        handle = namespace.handle("my-map")
        assert namespace.handle("my-map") is handle
        assert handle.value is UNBOUND
        assert not handle.is_bound

    def test_mentioned_name_is_not_bound(self, namespace):
        namespace.handle("my-map")
        assert "my-map" not in namespace
        assert len(namespace) == 0

    def test_bind_and_value(self, namespace):
        keymap = Keymap()
        handle = namespace.bind("my-map", keymap)

        assert handle.get() is keymap
        assert namespace.value("my-map") is keymap
        assert namespace.is_bound("my-map")

    def test_rebinding_is_seen_through_held_handle(self, namespace):
        handle = namespace.handle("my-map")
        namespace.bind("my-map", 1)
        namespace.bind("my-map", 2)
        assert handle.get() == 2

    def test_falsy_values_are_bound(self, namespace):
        namespace.bind("flag", None)
        namespace.bind("count", 0)
        assert namespace.names() == ["flag", "count"]

    def test_unbound_value_raises(self, namespace):
        namespace.handle("my-map")
        with pytest.raises(UnboundResource) as exc_info:
            namespace.value("my-map")
        assert isinstance(exc_info.value, LookupError)

        with pytest.raises(UnboundResource):
            namespace.value("never-mentioned")

    def test_find_does_not_create(self, namespace):
        assert namespace.find("my-map") is None
        assert namespace.find("my-map") is None
        namespace.bind("my-map", 1)
        assert namespace.find("my-map").value == 1


class TestCommands:
    """Test the command cell."""

    def test_command_cell_is_separate(self, namespace):
        namespace.bind("ctl-x", Keymap())
        namespace.set_command("ctl-x", print)

        assert namespace.command("ctl-x") is print
        assert isinstance(namespace.value("ctl-x"), Keymap)

    def test_missing_command(self, namespace):
        namespace.bind("my-map", Keymap())
        with pytest.raises(KeyError, match="No command named 'my-map'"):
            namespace.command("my-map")

    def test_command_only_handle_is_not_bound(self, namespace):
        namespace.set_command("save", print)
        assert "save" not in namespace


class TestBoundHandles:
    """Test iteration over bound handles."""

    def test_order_and_snapshot(self, namespace):
        namespace.bind("a-map", Keymap())
        namespace.handle("unbound")
        namespace.bind("b-map", Keymap())

        snapshot = namespace.bound_handles()
        namespace.bind("c-map", Keymap())

        assert [handle.name for handle in snapshot] == ["a-map", "b-map"]
        assert [handle.name for handle in namespace] == ["a-map", "b-map", "c-map"]
