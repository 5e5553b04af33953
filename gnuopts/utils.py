"""
gnuopts utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the descriptor, registry and parser layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None
    or with the empty string (an empty string is a legitimate form or default).
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr); containers
    are handed out as frozen snapshots (tuple/frozenset/mapping proxy).

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce("", "fallback")
    ''
"""
import builtins
import functools
from collections.abc import Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator that will.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Shallow snapshot of container values.

    - list/tuple → tuple
    - Mapping → MappingProxyType over a copy
    - Set → frozenset
    - anything else (sinks included) is returned as-is
    """
    if isinstance(object, list | tuple):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are returned as frozen snapshots so the public API cannot mutate
    internal state. Other objects (including sinks) are returned unchanged.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None or "" is a meaningful user value but you still
need to distinguish “no input” from an explicit value.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
