"""Runtime value helpers for Vyx.

A Vyx value is one of: ``None`` (the language's ``null``), ``bool``,
``float`` (every number is a double), ``str``, or a callable implementing
:class:`VyxCallable`. This module holds the rules that apply to every value
regardless of where it came from: truthiness, equality, and the display
form used by ``print`` and string concatenation.
"""

from __future__ import annotations

from typing import Any, List


class VyxCallable:
    """Interface shared by native and user-defined functions."""

    def arity(self) -> int:
        raise NotImplementedError

    def call(self, interpreter: Any, arguments: List[Any]) -> Any:
        raise NotImplementedError


def is_number(value: Any) -> bool:
    # bool is not a float subclass, so True/False never pass here
    return isinstance(value, float)


def is_truthy(value: Any) -> bool:
    """Only ``null`` and ``false`` are falsy; ``0`` and ``""`` are truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    if a is None or b is None:
        return a is b
    # Python would treat True == 1.0; Vyx booleans and numbers never compare equal
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def type_name(value: Any) -> str:
    """Return the Vyx type name of a runtime value."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, VyxCallable):
        return 'function'
    return type(value).__name__


def stringify(value: Any) -> str:
    """Convert a Vyx value to the text shown by ``print``.

    Integral numbers are shown in full without a fractional part, so
    ``2.0`` prints as ``2`` and ``1e16`` as ``10000000000000000``, while
    ``2.5`` prints unchanged.
    """
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if value.is_integer():
            return format(value, '.0f')
        return repr(value)
    return str(value)
