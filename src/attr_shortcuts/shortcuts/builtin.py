"""Built-in shortcuts — the fixed tail of every expansion.

Architecture
------------
Each shortcut is a ``ShortcutPass`` wrapped in a ``ShortcutNode``; most carry
a matcher so they only run when the option they rewrite is present.  They run
after every custom shortcut, always in this order:

* ``KindDefaultsShortcut`` — merge the kind's default options under the
  explicit ones
* ``LazyShortcut``         — ``lazy=<callable>`` / ``lazy=<name>``
* ``CoerceShortcut``       — ``coerce=<type>``
* ``RequiredShortcut``     — drop ``required`` when a default exists
* ``MethodNameShortcut``   — ``reader=True`` and friends
* ``TriggerShortcut``      — ``trigger="method"`` → late-bound dispatch
* ``LiteralShortcut``      — ``literal("key")`` escapes

The order is significant: a ``default`` merged by kind defaults must still
suppress the ``required`` injected by the same pass, and escaped keys must
survive every other shortcut untouched.

Example transformation
----------------------
Input (``param("_size", lazy=True, reader=True)``)::

    {"lazy": True, "reader": True, "_kind": Kind.PARAM}

After KindDefaultsShortcut::

    {"is": "ro", "required": True, "lazy": True, "reader": True}

After LazyShortcut::

    {"is": "ro", "required": True, "lazy": True, "reader": True, "builder": True}

After RequiredShortcut::

    {"is": "ro", "lazy": True, "reader": True, "builder": True}

After MethodNameShortcut::

    {"is": "ro", "lazy": True, "reader": "_get_size", "builder": "_build_size"}
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from ..core import ShortcutNode, ShortcutPass
from ..errors import DuplicateOption
from ..matchers import DirectiveMatcher, EscapedKeyMatcher, TruthyKeyMatcher, TypeDescriptorMatcher
from ..naming import DEFAULT_PRIVACY_MARKER, PropertyName, is_hidden_name, normalize_name
from ..values import (
    KIND_KEY,
    Directive,
    Escaped,
    Kind,
    MethodKind,
    TriggerDispatch,
    Visibility,
    as_directive,
)

logger = logging.getLogger(__name__)

#: Default options contributed by each kind; explicit options win.
KIND_DEFAULTS: Mapping[Kind, Mapping[str, Any]] = MappingProxyType({
    Kind.FIELD: MappingProxyType({"is": "ro", "init_arg": None}),
    Kind.PARAM: MappingProxyType({"is": "ro", "required": True}),
    Kind.OPTION: MappingProxyType({"is": "ro", "required": False, "predicate": Directive.ON}),
    Kind.EXTENDED: MappingProxyType({}),
})

_KINDS_BY_VALUE = {kind.value: kind for kind in Kind}


def set_exclusive(options: Dict[Any, Any], name: PropertyName, **pairs: Any) -> None:
    """Set every key of *pairs* in *options*, refusing to overwrite.

    Raises:
        DuplicateOption: one of the keys is already present, whatever its value.
    """
    for key, value in pairs.items():
        if key in options:
            raise DuplicateOption(key, name)
        options[key] = value


# ─────────────────────────────────────────────────────────────────────────────
# kind defaults
# ─────────────────────────────────────────────────────────────────────────────


class KindDefaultsShortcut(ShortcutPass):
    """Consume ``_kind`` and merge that kind's defaults under the options.

    A ``_kind`` that names no ``Kind`` (a custom shortcut may rewrite it)
    contributes no defaults.
    """

    def __init__(self, defaults: Mapping[Kind, Mapping[str, Any]] = KIND_DEFAULTS) -> None:
        self._defaults = defaults

    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        out = dict(options)
        kind = out.pop(KIND_KEY, None)
        if isinstance(kind, str):
            kind = _KINDS_BY_VALUE.get(kind)
        defaults = self._defaults.get(kind, {}) if isinstance(kind, Kind) else {}
        return {**defaults, **out}


# ─────────────────────────────────────────────────────────────────────────────
# lazy / coerce
# ─────────────────────────────────────────────────────────────────────────────


class LazyShortcut(ShortcutPass):
    """Fold the lazy initializer into ``default`` or ``builder``.

    * ``lazy=<callable>``  → ``lazy=True, default=<callable>``
    * ``lazy=<anything>``  → ``lazy=True, builder=<anything>``

    A ``builder`` of ``True`` is later inflated by ``MethodNameShortcut``.
    """

    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        out = dict(options)
        lazy = out["lazy"]
        out["lazy"] = True

        if callable(lazy):
            set_exclusive(out, name, default=lazy)
        else:
            set_exclusive(out, name, builder=lazy)
        return out


class CoerceShortcut(ShortcutPass):
    """``coerce=<type>`` → ``isa=<type>, coerce=True``."""

    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        out = dict(options)
        set_exclusive(out, name, isa=out["coerce"])
        out["coerce"] = True
        return out


# ─────────────────────────────────────────────────────────────────────────────
# required
# ─────────────────────────────────────────────────────────────────────────────


class RequiredShortcut(ShortcutPass):
    """A property with a default or a builder is never required.

    Any ``default`` counts, including falsy ones; ``builder`` must be truthy.
    """

    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        if "default" not in options and not options.get("builder"):
            return options
        return {k: v for k, v in options.items() if k != "required"}


# ─────────────────────────────────────────────────────────────────────────────
# method names
# ─────────────────────────────────────────────────────────────────────────────


class MethodNameShortcut(ShortcutPass):
    """Replace directive values of method options with real method names.

    For a property ``size``::

        reader=True               → "get_size"
        reader=Directive.HIDDEN   → "_get_size"
        builder=True              → "_build_size"   (always hidden)
        builder=Directive.PUBLIC  → "build_size"
        init_arg=True             → "size"

    For ``_size`` every ``True`` / ``Directive.ON`` yields a hidden name.
    """

    def __init__(self, privacy_marker: str = DEFAULT_PRIVACY_MARKER) -> None:
        self._marker = privacy_marker

    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        out = dict(options)
        canonical = None

        for method in MethodKind:
            directive = as_directive(out.get(method.key))
            if directive is None:
                continue

            if canonical is None:
                canonical = normalize_name(name, method.key, self._marker)
                hidden_name = is_hidden_name(name, self._marker)

            visibility = self._visibility(directive, method, hidden_name=hidden_name)
            out[method.key] = self._method_name(method, canonical, visibility)
            logger.debug("%s of %r inflated to %r", method.key, name, out[method.key])

        return out

    @staticmethod
    def _visibility(directive: Directive, method: MethodKind, *, hidden_name: bool) -> Visibility:
        if directive is Directive.HIDDEN:
            return Visibility.HIDDEN
        if directive is Directive.PUBLIC:
            return Visibility.PUBLIC
        if hidden_name or method.always_hidden:
            return Visibility.HIDDEN
        return Visibility.PUBLIC

    def _method_name(self, method: MethodKind, canonical: str, visibility: Visibility) -> str:
        base = "_".join(p for p in (method.prefix, canonical) if p is not None)
        if visibility is Visibility.HIDDEN:
            return self._marker + base
        return base


class TriggerShortcut(ShortcutPass):
    """Wrap a ``trigger`` given as a method name in a ``TriggerDispatch``.

    The method is looked up on the instance each time the trigger fires, so
    it may be defined after the property is declared.
    """

    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        trigger = options.get("trigger")
        if not trigger or not isinstance(trigger, str):
            return options
        return {**options, "trigger": TriggerDispatch(trigger)}


# ─────────────────────────────────────────────────────────────────────────────
# literal escapes
# ─────────────────────────────────────────────────────────────────────────────


class LiteralShortcut(ShortcutPass):
    """Replace every ``Escaped`` key by its plain name, value untouched.

    Runs last, so an escaped value overwrites whatever the other shortcuts
    did to the plain key.
    """

    def apply(self, name: PropertyName, options: Mapping[Any, Any]) -> Mapping[Any, Any]:
        out = {}
        escaped = {}
        for key, value in options.items():
            if isinstance(key, Escaped):
                escaped[key.name] = value
            else:
                out[key] = value
        out.update(escaped)
        return out


# ─────────────────────────────────────────────────────────────────────────────
# Factory helper
# ─────────────────────────────────────────────────────────────────────────────


def build_builtin_shortcuts(
        *,
        privacy_marker: str = DEFAULT_PRIVACY_MARKER,
        kind_defaults: Mapping[Kind, Mapping[str, Any]] = KIND_DEFAULTS,
) -> Tuple[ShortcutNode, ...]:
    """Create the built-in shortcut nodes in execution order.

    Returns a tuple suitable for ``ShortcutRegistry(builtin=...)``.
    """
    return (
        ShortcutNode(
            name="kind_defaults",
            processor=KindDefaultsShortcut(kind_defaults),
        ),
        ShortcutNode(
            name="lazy",
            matcher=TruthyKeyMatcher("lazy"),
            processor=LazyShortcut(),
        ),
        ShortcutNode(
            name="coerce",
            matcher=TypeDescriptorMatcher("coerce"),
            processor=CoerceShortcut(),
        ),
        ShortcutNode(
            name="required",
            matcher=TruthyKeyMatcher("required"),
            processor=RequiredShortcut(),
        ),
        ShortcutNode(
            name="method_names",
            matcher=DirectiveMatcher(m.key for m in MethodKind),
            processor=MethodNameShortcut(privacy_marker),
        ),
        ShortcutNode(
            name="trigger",
            processor=TriggerShortcut(),
        ),
        ShortcutNode(
            name="literal",
            matcher=EscapedKeyMatcher(),
            processor=LiteralShortcut(),
        ),
    )
