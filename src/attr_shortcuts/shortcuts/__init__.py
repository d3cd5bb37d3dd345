"""Shortcut sub-package — the built-in ShortcutPass implementations."""

from .builtin import (
    KIND_DEFAULTS,
    CoerceShortcut,
    KindDefaultsShortcut,
    LazyShortcut,
    LiteralShortcut,
    MethodNameShortcut,
    RequiredShortcut,
    TriggerShortcut,
    build_builtin_shortcuts,
    set_exclusive,
)

__all__ = [
    "KIND_DEFAULTS",
    "CoerceShortcut",
    "KindDefaultsShortcut",
    "LazyShortcut",
    "LiteralShortcut",
    "MethodNameShortcut",
    "RequiredShortcut",
    "TriggerShortcut",
    "build_builtin_shortcuts",
    "set_exclusive",
]
