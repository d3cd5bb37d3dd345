"""Core abstractions, the shortcut registry, the pipeline, and the builder.

This module owns every *interface* in the system.  Nothing here depends on a
concrete shortcut — the built-in ones live in ``shortcuts.builtin`` and are
wired in by ``factory``.

Expansion flow (``AttributeBuilder.field`` entry point)::

    (name, raw options)
      │
      ▼
    ExpansionPipeline.run(kind, name, options)
      │   options["_kind"] = kind
      ▼
    for node in registry.passes_for(standard):     ← custom first, then built-in
        if node.matcher is None or node.matcher.matches(name, options):
            options = node.processor.apply(name, options)
      │
      ▼
    options without "_kind"  →  (name, options)
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import InvalidCustomPass, InvalidPassResult, UnknownKind
from .naming import PropertyName, is_multi_name
from .values import KIND_KEY, Kind

logger = logging.getLogger(__name__)

#: Signature of a plain-function shortcut.
ShortcutFn = Callable[[PropertyName, dict], Mapping[Any, Any]]


# ─────────────────────────────────────────────────────────────────────────────
# Shortcut passes
# ─────────────────────────────────────────────────────────────────────────────


class ShortcutMatcher(ABC):
    """Predicate that decides whether a ShortcutNode should fire.

    If a node has ``matcher=None`` it fires unconditionally.
    """

    @abstractmethod
    def matches(self, name: PropertyName, options: Mapping[Any, Any]) -> bool: ...


class ShortcutPass(ABC):
    """One rewrite step of the pipeline.

    ``apply`` receives the whole option map produced by the previous pass and
    returns the next one.  It must not mutate its input or keep a reference
    to it after returning.
    """

    @abstractmethod
    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        """Return the (possibly rewritten) option map."""


class FunctionShortcut(ShortcutPass):
    """Adapt a plain ``(name, options) -> options`` callable to ``ShortcutPass``.

    The callable receives a private copy of the options, so it may mutate
    and return it.
    """

    def __init__(self, fn: ShortcutFn) -> None:
        self.fn = fn

    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        return self.fn(name, dict(options))

    def __repr__(self) -> str:
        return f"FunctionShortcut({_callable_name(self.fn)})"


def _callable_name(obj: Any) -> str:
    return getattr(obj, "__name__", None) or type(obj).__name__


@dataclass(frozen=True)
class ShortcutNode:
    """A registered pass together with its label and optional matcher."""

    name: str
    processor: ShortcutPass
    matcher: Optional[ShortcutMatcher] = None

    def run(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        if self.matcher is not None and not self.matcher.matches(name, options):
            return options
        return self.processor.apply(name, options)


# ─────────────────────────────────────────────────────────────────────────────
# ShortcutRegistry
# ─────────────────────────────────────────────────────────────────────────────


class ShortcutRegistry:
    """Ordered custom passes plus a fixed tuple of built-in passes.

    Custom passes always run before built-in ones, in registration order.
    ``standard`` mode leaves the custom list out entirely::

        registry.register(my_shortcut)
        registry.passes_for(standard=False)   # (my_shortcut, *builtin)
        registry.passes_for(standard=True)    # builtin

    There is no duplicate detection and no removal: registering the same
    pass twice makes it run twice.
    """

    def __init__(self, builtin: Iterable[ShortcutNode] = ()) -> None:
        self._builtin: Tuple[ShortcutNode, ...] = tuple(builtin)
        self._custom: List[ShortcutNode] = []
        self._lock = threading.Lock()

    # -- registration ------------------------------------------------------

    def register(
            self,
            shortcut: Union[ShortcutPass, ShortcutFn],
            *,
            name: Optional[str] = None,
            matcher: Optional[ShortcutMatcher] = None,
    ) -> ShortcutNode:
        """Append a custom pass and return the node created for it.

        *shortcut* is either a ``ShortcutPass`` or any callable taking
        ``(name, options)`` and returning the new options.

        Raises:
            InvalidCustomPass: *shortcut* is neither, or is a ``ShortcutPass``
                class rather than an instance.
        """
        if isinstance(shortcut, type) and issubclass(shortcut, ShortcutPass):
            raise InvalidCustomPass(shortcut)
        if isinstance(shortcut, ShortcutPass):
            processor = shortcut
        elif callable(shortcut):
            processor = FunctionShortcut(shortcut)
        else:
            raise InvalidCustomPass(shortcut)

        node = ShortcutNode(
            name=name or _callable_name(shortcut),
            processor=processor,
            matcher=matcher,
        )
        with self._lock:
            self._custom.append(node)
        logger.debug("registered custom shortcut %r (%d custom)", node.name, len(self._custom))
        return node

    # -- lookup -------------------------------------------------------------

    def passes_for(self, standard: bool = False) -> Tuple[ShortcutNode, ...]:
        """Return the nodes an expansion runs, as an immutable snapshot."""
        if standard:
            return self._builtin
        with self._lock:
            custom = tuple(self._custom)
        return custom + self._builtin

    # -- introspection ------------------------------------------------------

    def custom_nodes(self) -> Tuple[ShortcutNode, ...]:
        with self._lock:
            return tuple(self._custom)

    def builtin_nodes(self) -> Tuple[ShortcutNode, ...]:
        return self._builtin

    def nodes(self) -> Tuple[ShortcutNode, ...]:
        """Return every node in execution order."""
        return self.passes_for(standard=False)


# ─────────────────────────────────────────────────────────────────────────────
# ExpansionPipeline
# ─────────────────────────────────────────────────────────────────────────────


def coerce_kind(kind: Union[Kind, str]) -> Kind:
    """Return *kind* as a ``Kind``, accepting its string value.

    Raises:
        UnknownKind: *kind* names no ``Kind``.
    """
    if isinstance(kind, Kind):
        return kind
    try:
        return Kind(kind)
    except ValueError:
        raise UnknownKind(kind) from None


class ExpansionPipeline:
    """Fold a declaration's options through every pass of a registry.

    The pipeline copies the caller's options, so the input mapping is never
    modified.  Each pass sees the full map left behind by the previous one,
    which makes the order of the built-in passes significant.
    """

    def __init__(self, registry: ShortcutRegistry, *, standard: bool = False) -> None:
        self.registry = registry
        self.standard = standard

    def run(
            self,
            kind: Union[Kind, str],
            name: PropertyName,
            options: Optional[Mapping[Any, Any]] = None,
    ) -> dict:
        """Return the fully expanded options for property *name*."""
        start = dict(options or {})
        start[KIND_KEY] = coerce_kind(kind)
        current: Mapping[Any, Any] = start

        for node in self.registry.passes_for(self.standard):
            result = node.run(name, current)
            if not isinstance(result, Mapping):
                raise InvalidPassResult(node.name, result)
            if result is not current:
                logger.debug("shortcut %r rewrote options of %r", node.name, name)
            current = result

        expanded = dict(current)
        expanded.pop(KIND_KEY, None)
        return expanded


# ─────────────────────────────────────────────────────────────────────────────
# AttributeBuilder
# ─────────────────────────────────────────────────────────────────────────────


def _merge_options(options: Optional[Mapping[Any, Any]], kwargs: Mapping[str, Any]) -> dict:
    merged = dict(options or {})
    merged.update(kwargs)
    return merged


class AttributeBuilder:
    """Declaration helpers bound to one registry and one mode.

    Each helper returns ``(name, expanded_options)`` ready for the host
    object system.  Options may be passed as a mapping (needed for keys such
    as ``"is"`` or escaped keys), as keyword arguments, or both — keywords
    win on collision::

        builder.param("size", {"is": "rw"}, default=0)
        # → ("size", {"is": "rw", "default": 0})

    ``standard=True`` ignores every custom pass of the registry; the flag is
    fixed for the lifetime of the builder.
    """

    def __init__(
            self,
            registry: ShortcutRegistry,
            *,
            standard: bool = False,
            extends_marker: str = "+",
    ) -> None:
        self.registry = registry
        self.standard = standard
        self.extends_marker = extends_marker
        self.pipeline = ExpansionPipeline(registry, standard=standard)

    # -- generic ------------------------------------------------------------

    def expand(
            self,
            kind: Union[Kind, str],
            name: PropertyName,
            options: Optional[Mapping[Any, Any]] = None,
            **kwargs: Any,
    ) -> dict:
        """Expand *options* for *name* under *kind* and return them."""
        return self.pipeline.run(kind, name, _merge_options(options, kwargs))

    # -- declaration helpers --------------------------------------------------

    def field(self, name: PropertyName, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any):
        """Read-only property that cannot be set through the constructor."""
        return name, self.expand(Kind.FIELD, name, options, **kwargs)

    def param(self, name: PropertyName, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any):
        """Read-only property that must be passed to the constructor."""
        return name, self.expand(Kind.PARAM, name, options, **kwargs)

    def option(self, name: PropertyName, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any):
        """Read-only, optional constructor argument with a ``has_`` predicate."""
        return name, self.expand(Kind.OPTION, name, options, **kwargs)

    def extended(self, name: PropertyName, options: Optional[Mapping[Any, Any]] = None, **kwargs: Any):
        """Modify an inherited property; contributes no default options.

        The returned name carries the extends marker (``"+name"``); shortcuts
        still see the plain name.
        """
        if is_multi_name(name):
            extended_name: PropertyName = [self.extends_marker + n for n in name]
        else:
            extended_name = self.extends_marker + name
        return extended_name, self.expand(Kind.EXTENDED, name, options, **kwargs)
