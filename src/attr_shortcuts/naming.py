"""Property-name helpers used when method names are synthesized."""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence, Union

import regex

from .errors import UnsupportedMultiName

PropertyName = Union[str, Sequence[str]]

DEFAULT_PRIVACY_MARKER = "_"


@lru_cache(maxsize=None)
def _marker_pattern(marker: str) -> "regex.Pattern[str]":
    return regex.compile(r"\A" + regex.escape(marker))


def is_multi_name(name: PropertyName) -> bool:
    return isinstance(name, (list, tuple))


def normalize_name(name: PropertyName, shortcut: str, marker: str = DEFAULT_PRIVACY_MARKER) -> str:
    """Return *name* with exactly one leading privacy *marker* stripped.

    ``_secret`` → ``secret``, ``__dunder`` → ``_dunder``, ``plain`` → ``plain``.

    Raises:
        UnsupportedMultiName: *name* is a list of names; *shortcut* is the
            option key that needed a single one.
    """
    if is_multi_name(name):
        raise UnsupportedMultiName(shortcut)
    return _marker_pattern(marker).sub("", name, count=1)


def is_hidden_name(name: str, marker: str = DEFAULT_PRIVACY_MARKER) -> bool:
    """Whether *name* starts with the privacy *marker*."""
    return _marker_pattern(marker).match(name) is not None
