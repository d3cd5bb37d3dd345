"""Builder factory — the single place where all pieces are assembled.

``build_default_builder`` is the recommended entry point for users who want
their own ``AttributeBuilder`` without hand-wiring a registry.  The
package-level helpers (``field``, ``param``, ``option``, ``extended``,
``add_shortcut``) are bound to the process-wide ``default_registry``.

Customisation points:

* **registry**  – share custom shortcuts between builders.
                  ``None`` → ``default_registry``.
* **standard**  – ignore custom shortcuts.  ``None`` → ``settings.standard``.
* **settings**  – markers and defaults.  ``None`` → ``get_settings()``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .config import ShortcutSettings, get_settings
from .core import AttributeBuilder, ShortcutFn, ShortcutMatcher, ShortcutNode, ShortcutPass, ShortcutRegistry
from .naming import PropertyName
from .shortcuts.builtin import build_builtin_shortcuts


def build_default_registry(settings: Optional[ShortcutSettings] = None) -> ShortcutRegistry:
    """Create an empty-custom registry with the built-in shortcuts wired in."""
    settings = settings or get_settings()
    return ShortcutRegistry(
        builtin=build_builtin_shortcuts(privacy_marker=settings.privacy_marker),
    )


#: Process-wide registry behind ``add_shortcut`` and the package-level helpers.
default_registry = build_default_registry()


def build_default_builder(
        *,
        registry: Optional[ShortcutRegistry] = None,
        standard: Optional[bool] = None,
        settings: Optional[ShortcutSettings] = None,
) -> AttributeBuilder:
    """Assemble an ``AttributeBuilder``.

    Args:
        registry: Registry to expand through.  ``None`` → ``default_registry``.
        standard: Skip the registry's custom shortcuts.  ``None`` → taken
                  from *settings*.
        settings: Source of the markers.  ``None`` → ``get_settings()``.

    Example::

        builder = build_default_builder(standard=True)
        builder.field("_cache", lazy=True)
        # → ("_cache", {"is": "ro", "init_arg": None, "lazy": True,
        #               "builder": "_build_cache"})
    """
    settings = settings or get_settings()
    return AttributeBuilder(
        registry if registry is not None else default_registry,
        standard=settings.standard if standard is None else standard,
        extends_marker=settings.extends_marker,
    )


_default_builder = build_default_builder()


# ─────────────────────────────────────────────────────────────────────────────
# Package-level API
# ─────────────────────────────────────────────────────────────────────────────


def add_shortcut(
        shortcut: Union[ShortcutPass, ShortcutFn],
        *,
        name: Optional[str] = None,
        matcher: Optional[ShortcutMatcher] = None,
) -> ShortcutNode:
    """Register a custom shortcut on ``default_registry``.

    Custom shortcuts run before the built-in ones, in registration order,
    for every builder that is not in standard mode.
    """
    return default_registry.register(shortcut, name=name, matcher=matcher)


def field(name: PropertyName, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any):
    return _default_builder.field(name, options, **kwargs)


def param(name: PropertyName, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any):
    return _default_builder.param(name, options, **kwargs)


def option(name: PropertyName, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any):
    return _default_builder.option(name, options, **kwargs)


def extended(name: PropertyName, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any):
    return _default_builder.extended(name, options, **kwargs)
