"""Expand terse attribute declarations into full option maps."""

import logging

from .core import (
    AttributeBuilder,
    ExpansionPipeline,
    FunctionShortcut,
    ShortcutMatcher,
    ShortcutNode,
    ShortcutPass,
    ShortcutRegistry,
)
from .config import ShortcutSettings, get_settings
from .errors import (
    DuplicateOption,
    InvalidCustomPass,
    InvalidPassResult,
    ShortcutError,
    UnknownKind,
    UnsupportedMultiName,
)
from .factory import (
    add_shortcut,
    build_default_builder,
    build_default_registry,
    default_registry,
    extended,
    field,
    option,
    param,
)
from .naming import normalize_name
from .shortcuts import KIND_DEFAULTS, build_builtin_shortcuts
from .values import (
    Directive,
    Escaped,
    Kind,
    MethodKind,
    TriggerDispatch,
    Visibility,
    literal,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # declaration helpers
    "field",
    "param",
    "option",
    "extended",
    "add_shortcut",
    # values
    "Directive",
    "Escaped",
    "Kind",
    "MethodKind",
    "TriggerDispatch",
    "Visibility",
    "literal",
    # core
    "AttributeBuilder",
    "ExpansionPipeline",
    "FunctionShortcut",
    "ShortcutMatcher",
    "ShortcutNode",
    "ShortcutPass",
    "ShortcutRegistry",
    "KIND_DEFAULTS",
    "build_builtin_shortcuts",
    "normalize_name",
    # factory / config
    "build_default_builder",
    "build_default_registry",
    "default_registry",
    "ShortcutSettings",
    "get_settings",
    # errors
    "ShortcutError",
    "UnsupportedMultiName",
    "DuplicateOption",
    "InvalidCustomPass",
    "InvalidPassResult",
    "UnknownKind",
]
