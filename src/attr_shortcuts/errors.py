"""Exceptions raised while registering shortcuts or expanding declarations.

All of them are configuration errors: they surface at declaration time and
abort the current expansion.  The caller's option mapping is never mutated,
so there is nothing to roll back.
"""

from __future__ import annotations

from typing import Any


class ShortcutError(ValueError):
    """Base class for every error raised by this package."""


class UnsupportedMultiName(ShortcutError):
    """A method-name shortcut was used with a list of property names.

    Attributes:
        shortcut: Option key of the shortcut that needed a single name.
    """

    def __init__(self, shortcut: str) -> None:
        self.shortcut = shortcut
        super().__init__(
            f"Could not use attribute shortcut with multiple names: {shortcut} is not supported"
        )


class DuplicateOption(ShortcutError):
    """A shortcut tried to set an option that was already given.

    Attributes:
        key:  The option key that collided.
        name: The property being declared.
    """

    def __init__(self, key: str, name: Any) -> None:
        self.key = key
        self.name = name
        super().__init__(f"Could not expand shortcut: {key} already exists for {name!r}")


class InvalidCustomPass(ShortcutError, TypeError):
    """Registration was attempted with something that is not a pass."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Custom shortcut must be a ShortcutPass or a callable, got {type(value).__name__}"
        )


class InvalidPassResult(ShortcutError, TypeError):
    """A pass returned something other than an option mapping."""

    def __init__(self, pass_name: str, result: Any) -> None:
        self.pass_name = pass_name
        self.result = result
        super().__init__(
            f"Shortcut {pass_name!r} must return a mapping, got {type(result).__name__}"
        )


class UnknownKind(ShortcutError):
    """A declaration was expanded under a kind that does not exist."""

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"Unknown attribute kind {kind!r}")
