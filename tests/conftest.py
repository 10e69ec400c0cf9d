"""Shared fixtures for the keycustom test suite."""

import importlib
import sys
import textwrap
import uuid

import pytest

from keycustom import CustomRegistry, reset_global_registry, set_global_registry
from keycustom.loggings import LogConfig, setup_logger


# ============================================================
# Registry Fixtures
# ============================================================

@pytest.fixture(autouse=True)
def isolated_global_registry(monkeypatch, tmp_path):
    """Keep every test away from real config files and the shared registry."""
    monkeypatch.delenv("KEYCUSTOM_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_global_registry()
    yield
    reset_global_registry()
    # get_registry() rebuilds the package logger from the config file
    setup_logger(LogConfig(), replace=True)


@pytest.fixture
def registry():
    """Fresh registry installed as the global one, so feature modules see it."""
    registry = CustomRegistry()
    set_global_registry(registry)
    return registry


# ============================================================
# Feature Module Fixtures
# ============================================================

@pytest.fixture
def make_feature(tmp_path, monkeypatch):
    """Factory writing an importable feature module; returns its feature id.

    Module names are unique per call so sys.modules never serves a module
    from an earlier test.
    """
    feature_dir = tmp_path / "features"
    feature_dir.mkdir()
    monkeypatch.syspath_prepend(str(feature_dir))
    created = []

    def _make_feature(source: str = "") -> str:
        module_name = f"kc_feature_{uuid.uuid4().hex[:8]}"
        (feature_dir / f"{module_name}.py").write_text(textwrap.dedent(source))
        importlib.invalidate_caches()
        created.append(module_name)
        return module_name

    yield _make_feature

    for module_name in created:
        sys.modules.pop(module_name, None)
