"""
Argot utilities shared by the models, results, parsers and formatter.

- Unset: "not given" marker for parameters where None is a meaningful value.
- coalesce(object, default): turn Unset into a default, keep everything else.
- rename(...): fix __name__/__qualname__ of generated functions.
- mirror(name): read-only property over "_{name}" returning frozen containers.
- strip_dashes(name): "--all" -> "all".
- ModelType: metaclass of the immutable models (properties, typename, reprs).
"""
import builtins
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    Unset is falsey, prints as "Unset", is the only instance of its type and
    cannot be subclassed. It also composes into unions (str | Unset) so it can
    be used directly in isinstance() checks.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
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

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")


def coalesce(object, default=None, /):
    """
    `default` when `object` is Unset, `object` otherwise (None, 0 and "" included).
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(function, name) renames `function` in place and returns it.
    rename(name) returns a decorator doing the same.
    """
    match parameters:
        case (function, str() as name):
            if not builtins.callable(function):
                raise TypeError("rename() target must be callable")
            try:
                function.__name__ = function.__qualname__ = name
            except (AttributeError, TypeError):
                raise TypeError(f"rename() cannot rename {function!r}") from None
            return function
        case (str() as name,):
            def decorator(function):
                return rename(function, name)

            return decorator
        case _:
            raise TypeError("rename() expects (function, name) or (name)")


def _freeze(object):
    # tuples for sequences, proxies for mappings, frozensets for sets
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set) and not isinstance(object, frozenset):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Property reading "_{name}" and returning it frozen (see _freeze).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() name must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


_DASHES = re.compile(r"^-+")


def strip_dashes(name, /):
    return _DASHES.sub("", name, count=1)


class ModelType(type):
    """
    Metaclass of the argot models.

    For a class listing field names in __introspectable__ it adds:
    - one mirror() property per field, backed by "_{field}";
    - __typename__: the class name in lowercase, hyphen separated ("ParseError" -> "parse-error");
    - __rich_repr__ yielding (field, value) pairs, and a matching __repr__
      unless the class defines its own.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        fields = namespace.get("__introspectable__", ())
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {"__typename__": re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()} | {
                field: mirror(field) for field in fields
            },
        )

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)

        self.__rich_repr__ = __rich_repr__

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"

            self.__repr__ = __repr__

        return self


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "strip_dashes",
    "UnsetType",
    "ModelType",
    "Unset",
)
