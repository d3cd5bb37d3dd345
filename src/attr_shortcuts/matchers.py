"""Shared ShortcutMatcher implementations.

A matcher keeps a built-in pass from running when the option it rewrites is
absent, so the pass itself only has to deal with the interesting case.

Exports
-------
TruthyKeyMatcher
    Fire when an option is present and truthy.

TypeDescriptorMatcher
    Fire when an option holds a type descriptor.

DirectiveMatcher
    Fire when any of a set of options holds a directive.

EscapedKeyMatcher
    Fire when the options carry at least one ``Escaped`` key.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .core import ShortcutMatcher
from .naming import PropertyName
from .values import Escaped, as_directive, is_type_descriptor


class TruthyKeyMatcher(ShortcutMatcher):
    """Match when ``options[key]`` exists and is truthy.

    ::

        TruthyKeyMatcher("lazy").matches("x", {"lazy": True})    # True
        TruthyKeyMatcher("lazy").matches("x", {"lazy": False})   # False
    """

    def __init__(self, key: str) -> None:
        self._key = key

    def matches(self, name: PropertyName, options: Mapping[Any, Any]) -> bool:
        return bool(options.get(self._key))


class TypeDescriptorMatcher(ShortcutMatcher):
    """Match when ``options[key]`` is a type descriptor, not a plain flag."""

    def __init__(self, key: str) -> None:
        self._key = key

    def matches(self, name: PropertyName, options: Mapping[Any, Any]) -> bool:
        return is_type_descriptor(options.get(self._key))


class DirectiveMatcher(ShortcutMatcher):
    """Match when at least one of *keys* holds a directive (or ``True``)."""

    def __init__(self, keys: Iterable[str]) -> None:
        self._keys = tuple(keys)

    def matches(self, name: PropertyName, options: Mapping[Any, Any]) -> bool:
        return any(as_directive(options.get(k)) is not None for k in self._keys)


class EscapedKeyMatcher(ShortcutMatcher):
    def matches(self, name: PropertyName, options: Mapping[Any, Any]) -> bool:
        return any(isinstance(k, Escaped) for k in options)
