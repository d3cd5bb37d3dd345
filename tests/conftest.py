"""pytest configuration and shared fixtures."""

import pytest

from attr_shortcuts import AttributeBuilder, build_default_registry, default_registry


@pytest.fixture
def registry():
    """Fresh registry with the built-in shortcuts and no custom ones."""
    return build_default_registry()


@pytest.fixture
def builder(registry):
    """Builder bound to the fresh ``registry`` fixture."""
    return AttributeBuilder(registry)


@pytest.fixture
def isolated_default_registry(monkeypatch):
    """Let a test register on ``default_registry`` without leaking shortcuts."""
    monkeypatch.setattr(default_registry, "_custom", [])
    return default_registry
