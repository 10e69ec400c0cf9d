"""Tests for the record store and declaration options."""

import pytest
from pydantic import ValidationError

from keycustom import UsageError
from keycustom.registry import (
    KEYMAP_TYPE,
    CustomizationRecord,
    CustomOptions,
    RecordStore,
    set_default,
    validate_custom_options,
)


def make_record(name: str, type_tag: str = KEYMAP_TYPE) -> CustomizationRecord:
    return CustomizationRecord(name=name, type_tag=type_tag, setter=set_default, standard=lambda: None)


@pytest.fixture
def store():
    return RecordStore()


# ============================================================
# Record Creation
# ============================================================

class TestEnsure:
    """Test at-most-once record creation."""

    def test_creates_once(self, store):
        calls = []

        def factory():
            calls.append(1)
            return make_record("a-map")

        first, created = store.ensure("a-map", factory)
        second, created_again = store.ensure("a-map", factory)

        assert created is True
        assert created_again is False
        assert second is first
        assert len(calls) == 1
        assert len(store) == 1

    def test_reentrant_factory_keeps_inner_record(self, store):
        inner = make_record("a-map", type_tag="inner")

        def factory():
            store.ensure("a-map", lambda: inner)
            return make_record("a-map", type_tag="outer")

        record, created = store.ensure("a-map", factory)

        assert record is inner
        assert created is False
        assert store.get("a-map").type_tag == "inner"


# ============================================================
# Required Features
# ============================================================

class TestRequirements:
    """Test required-feature accumulation."""

    def test_set_semantics(self, store):
        store.ensure("a-map", lambda: make_record("a-map"))

        assert store.add_requirement("a-map", "f1") is True
        assert store.add_requirement("a-map", "f2") is True
        assert store.add_requirement("a-map", "f1") is False

        assert store.required_features("a-map") == frozenset({"f1", "f2"})

    def test_returned_set_is_a_copy(self, store):
        store.ensure("a-map", lambda: make_record("a-map"))
        store.add_requirement("a-map", "f1")

        features = store.required_features("a-map")

        assert isinstance(features, frozenset)
        assert store.get("a-map").required_features == {"f1"}

    def test_unknown_name_raises(self, store):
        with pytest.raises(KeyError, match="not a customizable setting"):
            store.add_requirement("missing", "f1")


class TestStoreAccess:
    """Test lookup helpers."""

    def test_lookup(self, store):
        store.ensure("a-map", lambda: make_record("a-map"))
        store.ensure("b-map", lambda: make_record("b-map"))

        assert store.has("a-map")
        assert "b-map" in store
        assert store.get("c-map") is None
        assert store.names() == ["a-map", "b-map"]
        assert [record.name for record in store] == ["a-map", "b-map"]

    def test_clear(self, store):
        store.ensure("a-map", lambda: make_record("a-map"))
        store.clear()
        assert len(store) == 0


# ============================================================
# Options
# ============================================================

class TestCustomOptions:
    """Test option validation."""

    def test_require_accepts_string(self):
        assert validate_custom_options("x", {"require": "dired"}).require == ("dired",)

    def test_require_accepts_list(self):
        assert validate_custom_options("x", {"require": ["a", "b"]}).require == ("a", "b")

    def test_all_reserved_keys_reported(self):
        with pytest.raises(UsageError) as exc_info:
            validate_custom_options("x", {"type": "a", "set": "b"})
        assert exc_info.value.context["keys"] == ["set", "type"]

    def test_reserved_keys_can_be_lifted(self):
        with pytest.raises(UsageError, match="Invalid options"):
            validate_custom_options("x", {"type": "a"}, reserved=())

    def test_wrong_value_type(self):
        with pytest.raises(UsageError):
            validate_custom_options("x", {"risky": "very"})

    def test_options_are_frozen(self):
        options = CustomOptions(group="g")
        with pytest.raises(ValidationError):
            options.group = "other"

    def test_error_payload(self):
        with pytest.raises(UsageError) as exc_info:
            validate_custom_options("x", {"set": "custom-setter"})
        payload = exc_info.value.to_json_error()
        assert payload["code"] == "UsageError"
        assert payload["context"] == {"name": "x", "keys": ["set"]}
