"""Value model — the tagged values that flow through the expansion pipeline.

Option maps are plain ``dict`` objects, but the values a caller puts into them
are interpreted by the built-in shortcuts according to what they *are*:

* ``Directive`` members (and the bare ``True``) ask a shortcut to synthesize
  a value, e.g. a method name.
* ``Escaped`` keys carry a value past every shortcut untouched.
* Type descriptors (classes and constraint objects) are recognised by
  ``is_type_descriptor``.

Exports
-------
Kind, MethodKind, Directive, Visibility
    Enumerations of the closed sets the pipeline works with.

Escaped, literal
    Escaped option key and its constructor.

TriggerDispatch
    Late-bound ``trigger`` callable produced from a method name.
"""

from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

# -- kinds --------------------------------------------------------------


class Kind(Enum):
    """Constructor-visibility class of a declared property."""

    FIELD = "field"
    PARAM = "param"
    OPTION = "option"
    EXTENDED = "extended"


#: Reserved option key holding the ``Kind`` while a declaration is expanded.
KIND_KEY = "_kind"


# -- directives ---------------------------------------------------------


class Directive(Enum):
    """Sentinel option values that ask a shortcut to build the real value.

    ``ON`` uses the visibility derived from the property name, ``PUBLIC`` and
    ``HIDDEN`` force it.  ``True`` is accepted everywhere ``ON`` is.
    """

    ON = "on"
    PUBLIC = "public"
    HIDDEN = "hidden"


class Visibility(Enum):
    PUBLIC = "public"
    HIDDEN = "hidden"


def as_directive(value: Any) -> Optional[Directive]:
    """Return the ``Directive`` *value* stands for, or ``None``.

    Only the ``True`` singleton maps to ``Directive.ON`` — ``1`` does not.
    """
    if value is True:
        return Directive.ON
    if isinstance(value, Directive):
        return value
    return None


# -- method kinds -------------------------------------------------------


class MethodKind(Enum):
    """Option keys that name a generated method (or constructor argument).

    Each member knows its option key, the prefix used when a name is
    synthesized, and whether ``Directive.ON`` makes it hidden regardless of
    the property name.
    """

    READER = ("reader", "get", False)
    WRITER = ("writer", "set", False)
    PREDICATE = ("predicate", "has", False)
    CLEARER = ("clearer", "clear", False)
    BUILDER = ("builder", "build", True)
    TRIGGER = ("trigger", "trigger", True)
    INIT_ARG = ("init_arg", None, False)

    def __init__(self, key: str, prefix: Optional[str], always_hidden: bool) -> None:
        self.key = key
        self.prefix = prefix
        self.always_hidden = always_hidden


# -- escaped keys -------------------------------------------------------


@dataclass(frozen=True)
class Escaped:
    """Option key whose value bypasses every shortcut.

    ``{Escaped("builder"): "make"}`` ends up as ``{"builder": "make"}`` in the
    expanded options, even if an earlier shortcut set ``builder`` itself.
    """

    name: str

    def __str__(self) -> str:
        return f"literal({self.name})"


def literal(name: str) -> Escaped:
    """Shorthand for ``Escaped(name)``."""
    return Escaped(name)


OptionKey = Union[str, Escaped]


# -- type descriptors ---------------------------------------------------

_PLAIN_TYPES = (bool, int, float, complex, str, bytes, dict, list, tuple, set, frozenset, Directive, functools.partial)


def is_type_descriptor(value: Any) -> bool:
    """Whether *value* is a structured type descriptor rather than a flag.

    Classes always qualify.  Instances qualify unless they are ``None``, a
    primitive, a builtin container, a directive or a plain routine.
    """
    if isinstance(value, type):
        return True
    if value is None or isinstance(value, _PLAIN_TYPES):
        return False
    return not inspect.isroutine(value)


# -- trigger dispatch ---------------------------------------------------


@dataclass(frozen=True)
class TriggerDispatch:
    """Callable that forwards to ``instance.<method>`` at call time.

    The method is looked up by name on every call, so it does not need to
    exist when the property is declared::

        dispatch = TriggerDispatch("_trigger_size")
        dispatch(obj, new_value)   # → obj._trigger_size(new_value)
    """

    method: str

    def __call__(self, instance: Any, *args: Any, **kwargs: Any) -> Any:
        return getattr(instance, self.method)(*args, **kwargs)
