"""
Argot parse results: parsed options and the command they belong to.

- Option: a template's names bound to the values supplied on the command line.
- Command: the outcome of one parse (optional name, options, ordered arguments).

Both are immutable and compare by value, so parsing the same tokens twice
yields equal commands. A command keeps at most one option per resolved name:
adding an option whose name matches an existing one replaces it (last wins).

Option lookup accepts names with or without their dashes ("a", "-a", "--all").
"""
from collections.abc import Iterable

from .models import Template, _sanitize_names
from .utils import *

_UNDEFINED = "<undefined>"


def _resolve(name, options, /):
    """
    Internal: find the stored option answering to `name`.

    Leading dashes are stripped from the key, then each option's short name and
    long name are compared. Blank keys never match.
    """
    if not isinstance(name, str) or not name.strip():
        return None
    stripped = strip_dashes(name)
    for option in options:
        if stripped == option.short_name or stripped == option.long_name:
            return option
    return None


class Option(metaclass=ModelType):
    """
    A parsed option: names plus the values given to it, in order.
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "values",
    )

    def __new__(cls, short_name=Unset, long_name=Unset, *, values=()):
        metadata = {
            "short_name": Unset if short_name is None else short_name,
            "long_name": Unset if long_name is None else long_name,
            "values": values,
        }
        _sanitize_names(cls, metadata, "short_name", "long_name")

        if isinstance(values, str) or not isinstance(values, Iterable):
            raise TypeError(f"{cls.__typename__} values must be an iterable of strings")
        metadata["values"] = tuple(values)
        if not all(isinstance(value, str) for value in metadata["values"]):
            raise TypeError(f"{cls.__typename__} values must be strings")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))
        return self

    @classmethod
    def from_template(cls, template, values=(), /):
        """
        Bind `values` to the names of `template`.
        """
        if not isinstance(template, Template):
            raise TypeError(f"{cls.__typename__} template must be a template instance")
        return cls(template.short_name, template.long_name, values=values)

    @property
    def name(self):
        return self.short_name if self.short_name is not None else self.long_name

    @property
    def value(self):
        """
        First value, or None when the option carries none.
        """
        return self._values[0] if self._values else None

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self._short_name, self._long_name, self._values) == (other._short_name, other._long_name, other._values)

    def __hash__(self):
        return hash((self._short_name, self._long_name, self._values))

    def __str__(self):
        text = "-" + self.short_name if self.short_name is not None else "--" + self.long_name
        if self._values:
            text += "=" + ",".join(self._values)
        return text


class Command(metaclass=ModelType):
    """
    Immutable result of parsing tokens against a descriptor.

    Options are inserted in the given order; an option whose name resolves to
    an already inserted one replaces it. Arguments keep their token order.
    """

    __introspectable__ = (
        "name",
        "options",
        "arguments",
    )

    def __new__(cls, name=Unset, /, *, options=(), arguments=()):
        if name is not Unset and name is not None and not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} name must be a string")

        inserted = []
        for option in options:
            if not isinstance(option, Option):
                raise TypeError(f"{cls.__typename__} options must be option instances")
            if (resolved := _resolve(option.name, inserted)) is not None:
                inserted.remove(resolved)
            inserted.append(option)

        if isinstance(arguments, str):
            raise TypeError(f"{cls.__typename__} arguments must be an iterable of strings")
        arguments = tuple(arguments)
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError(f"{cls.__typename__} arguments must be strings")

        self = super().__new__(cls)
        self._name = coalesce(name)
        self._options = tuple(inserted)
        self._arguments = arguments
        return self

    def has_option(self, name, /):
        return _resolve(name, self._options) is not None

    def get_option(self, name, /):
        """
        The option answering to `name`.

        Raises KeyError when the command has no such option; check with
        has_option() first.
        """
        if (option := _resolve(name, self._options)) is None:
            raise KeyError(f"command has no option with name {name!r}")
        return option

    def get_option_values(self, name, /):
        return self.get_option(name).values

    def get_option_value(self, name, /):
        """
        First value of the option answering to `name`, or None when it has no values.
        """
        return self.get_option(name).value

    def argument_count(self):
        return len(self._arguments)

    def get_argument(self, index, /):
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError("argument index must be an integer")
        if not 0 <= index < len(self._arguments):
            raise IndexError(f"no argument at index [{index}]")
        return self._arguments[index]

    def __eq__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return (self._name, self._options, self._arguments) == (other._name, other._options, other._arguments)

    def __hash__(self):
        return hash((self._name, self._options, self._arguments))

    def __str__(self):
        name = self._name if self._name is not None else _UNDEFINED
        return " ".join([name, *map(str, self._options), *self._arguments])


__all__ = (
    "Option",
    "Command",
)
