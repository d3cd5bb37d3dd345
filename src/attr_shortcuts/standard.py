"""Declaration helpers that never run custom shortcuts.

Library code that must expand the same way regardless of what the host
application registered imports from here instead of the package root::

    from attr_shortcuts.standard import field, param

The helpers share ``default_registry`` but only consult its built-in
shortcuts.
"""

from __future__ import annotations

from .factory import build_default_builder

_builder = build_default_builder(standard=True)

field = _builder.field
param = _builder.param
option = _builder.option
extended = _builder.extended

__all__ = ["field", "param", "option", "extended"]
