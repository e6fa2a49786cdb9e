r"""
Argot descriptor model: option templates, exclusive groups and command descriptors.

Overview
- Template: blueprint of one option (short/long name, description, requiredness,
  value arity and a display name for its values).
- Group: a set of templates that are mutually exclusive within one parse. A
  group may itself be required (one of its members must appear).
- Descriptor: the full specification of a command (name, templates, groups and
  the accepted argument-count bounds). Built once, reused across parses.

Metadata (sanitized on construction)
- names: Unset | str, no whitespace, leading dashes removed, non-empty after that.
- descr/value_name: Unset | str, non-blank (trimmed).
- bounds (min/max values and args): int >= 0 with min <= max.
- required: bool.

Validation highlights
- A template needs at least one of short_name/long_name.
- A required template cannot be a member of a group (group requiredness wins).
- Within a descriptor, short and long names are unique and a template belongs
  to at most one group.

Every model is immutable: attributes are read-only properties exposing frozen
views (tuples), and models compare by identity.

Quick example:
    >>> from argot.models import Template, Group, Descriptor
    >>> verbose = Template("v", "verbose", descr="talk more")
    >>> output = Template("o", "output", min_values=1, max_values=1, value_name="FILE")
    >>> quiet, loud = Template("q"), Template("l")
    >>> Descriptor("tool", templates=(verbose, output), groups=(Group(quiet, loud),), max_args=2)
"""
import re
from collections.abc import Iterable

from .utils import *

_UNDEFINED = "<undefined>"


def _sanitize_names(cls, metadata, /, *fields):
    """
    Internal: validate and normalize option names in place.

    Each named field must be Unset or a string without whitespace. Leading
    dashes are removed ("--all" -> "all") and the remainder cannot be empty.
    At least one of the fields must end up set.

    Raises
    - TypeError: a name is not a string, or no name was given at all.
    - ValueError: a name contains whitespace or is made of dashes only.
    """
    for field in fields:
        if (name := metadata[field]) is Unset:
            continue
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} {field.replace('_', ' ')} must be a string")
        if re.search(r"\s", name):
            raise ValueError(f"{cls.__typename__} {field.replace('_', ' ')} {name!r} has a space")
        if not (stripped := strip_dashes(name)):
            raise ValueError(f"{cls.__typename__} {field.replace('_', ' ')} {name!r} is empty")
        metadata[field] = stripped

    if all(metadata[field] is Unset for field in fields):
        raise TypeError(f"{cls.__typename__} must specify a short name or a long name")


def _sanitize_texts(cls, metadata, /, *fields):
    """
    Internal: validate free-text fields (descr, value_name).

    Unset passes through; strings are trimmed and must not be empty afterwards.
    """
    for field in fields:
        if not isinstance(text := metadata[field], str | Unset):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        elif isinstance(text, str) and not (text := text.strip()):
            raise ValueError(f"{cls.__typename__} '{field}' cannot be blank")
        metadata[field] = text


def _sanitize_bounds(cls, metadata, lower, upper, /):
    """
    Internal: validate a pair of [lower, upper] counts (values or arguments).

    Both must be non-negative integers (booleans are rejected) and lower
    cannot exceed upper.
    """
    for field in (lower, upper):
        if not isinstance(count := metadata[field], int) or isinstance(count, bool):
            raise TypeError(f"{cls.__typename__} '{field}' must be an integer")
        if count < 0:
            raise ValueError(f"{cls.__typename__} '{field}' [{count}] is negative")
    if metadata[lower] > metadata[upper]:
        raise ValueError(
            f"{cls.__typename__} '{lower}' [{metadata[lower]}] greater than '{upper}' [{metadata[upper]}]"
        )


def _sanitize_command_name(cls, metadata, /):
    if (name := metadata["name"]) is Unset:
        return
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    if not name:
        raise ValueError(f"{cls.__typename__} name cannot be empty")
    if re.search(r"\s", name):
        raise ValueError(f"{cls.__typename__} name {name!r} has a space")


def _unique(cls, items, kind, /):
    """
    Internal: collect items of the given kind in declaration order, dropping repeats.
    """
    if isinstance(items, str) or not isinstance(items, Iterable):
        raise TypeError(f"{cls.__typename__} {kind.__typename__}s must be iterable")
    collected = {}
    for item in items:
        if not isinstance(item, kind):
            raise TypeError(f"{cls.__typename__} {kind.__typename__}s must be {kind.__typename__} instances")
        collected.setdefault(item)
    return tuple(collected)


class Template(metaclass=ModelType):
    """
    Blueprint for one option.

    A template names an option (short form "-a", long form "--all" or both),
    describes it, marks it as required or not, and bounds how many values it
    takes ("-a=1,2" carries two values). Names are stored without their dashes.

    Properties
    - short_name, long_name, descr, value_name: str | None
    - required: bool
    - min_values, max_values: int
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "descr",
        "required",
        "min_values",
        "max_values",
        "value_name",
    )

    def __new__(
            cls,
            short_name=Unset,
            long_name=Unset,
            *,
            descr=Unset,
            required=False,
            min_values=0,
            max_values=0,
            value_name=Unset,
    ):
        metadata = {
            "short_name": short_name,
            "long_name": long_name,
            "descr": descr,
            "required": bool(required),
            "min_values": min_values,
            "max_values": max_values,
            "value_name": value_name,
        }
        _sanitize_names(cls, metadata, "short_name", "long_name")
        _sanitize_texts(cls, metadata, "descr", "value_name")
        _sanitize_bounds(cls, metadata, "min_values", "max_values")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))
        return self

    @property
    def name(self):
        """
        The short name when there is one, the long name otherwise.
        """
        return self.short_name if self.short_name is not None else self.long_name

    @property
    def requires_values(self):
        return self.min_values != 0

    @property
    def accepts_values(self):
        return self.max_values != 0

    def accepts(self, count, /):
        """
        Whether the template takes exactly `count` values.
        """
        return self.min_values <= count <= self.max_values

    def replace(self, **changes):
        """
        Return a copy of this template with the given fields changed.

        Passing None for an optional field (short_name, long_name, descr,
        value_name) drops it from the copy.
        """
        metadata = dict(self.__rich_repr__()) | changes
        return type(self)(**{name: Unset if object is None else object for name, object in metadata.items()})

    def __str__(self):
        if self.short_name is not None:
            text = "-" + self.short_name
        else:
            text = "--" + self.long_name

        if self.accepts_values:
            value = "<%s>" % (self.value_name if self.value_name is not None else "value")
            text += "=" + (value if self.requires_values else "[%s]" % value)
        return text


class Group(metaclass=ModelType):
    """
    A set of mutually exclusive templates.

    At most one member may appear in a parse. When the group is required,
    exactly one member must appear. Members cannot be required themselves.
    """

    __introspectable__ = (
        "required",
        "templates",
    )

    def __new__(cls, *templates, required=False):
        metadata = {
            "required": bool(required),
            "templates": _unique(cls, templates, Template),
        }
        for template in metadata["templates"]:
            if template.required:
                raise ValueError(f"{cls.__typename__} template {str(template)!r} is required")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __contains__(self, template):
        return template in self._templates

    def __iter__(self):
        return iter(self._templates)

    def __len__(self):
        return len(self._templates)

    def __str__(self):
        return "[%s]" % ",".join(map(str, sorted(self._templates, key=lambda template: template.name)))


class Descriptor(metaclass=ModelType):
    """
    Full specification of a command: its templates, exclusive groups and the
    accepted number of arguments.

    The templates of every group are included in the descriptor's templates
    (after the ones declared directly, in declaration order). Lookup tables by
    short name, by long name and by owning group are built once here so the
    parsers resolve tokens in constant time.
    """

    __introspectable__ = (
        "name",
        "templates",
        "groups",
        "min_args",
        "max_args",
    )

    def __new__(
            cls,
            name=Unset,
            /,
            *,
            templates=(),
            groups=(),
            min_args=0,
            max_args=0,
    ):
        metadata = {
            "name": name,
            "templates": _unique(cls, templates, Template),
            "groups": _unique(cls, groups, Group),
            "min_args": min_args,
            "max_args": max_args,
        }
        _sanitize_command_name(cls, metadata)
        _sanitize_bounds(cls, metadata, "min_args", "max_args")

        owners = {}
        for group in metadata["groups"]:
            for template in group:
                if owners.setdefault(template, group) is not group:
                    raise ValueError(f"{cls.__typename__} template {str(template)!r} belongs to more than one group")
        metadata["templates"] = tuple(dict.fromkeys(metadata["templates"] + tuple(owners)))

        shorts, longs = {}, {}
        for template in metadata["templates"]:
            for table, key in ((shorts, template.short_name), (longs, template.long_name)):
                if key is not None and table.setdefault(key, template) is not template:
                    raise ValueError(f"{cls.__typename__} templates cannot share the name {key!r}")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))
        self._shorts = shorts
        self._longs = longs
        self._owners = owners
        return self

    def template_by_short_name(self, name, /):
        """
        Template whose short name is exactly `name` (no dashes), or None.
        """
        return self._shorts.get(name)

    def template_by_long_name(self, name, /):
        """
        Template whose long name is exactly `name` (no dashes), or None.
        """
        return self._longs.get(name)

    def group(self, template, /):
        """
        Group that owns `template`, or None when the template is in no group.
        """
        return self._owners.get(template)

    def required_templates(self):
        return tuple(template for template in self._templates if template.required)

    def required_groups(self):
        return tuple(group for group in self._groups if group.required)

    @property
    def requires_arguments(self):
        return self.min_args != 0

    @property
    def accepts_arguments(self):
        return self.max_args != 0

    def replace(self, **changes):
        """
        Return a copy of this descriptor with the given fields changed.

        Passing None as the name drops it from the copy.
        """
        metadata = dict(self.__rich_repr__()) | changes
        name = metadata.pop("name")
        return type(self)(Unset if name is None else name, **metadata)

    def __str__(self):
        parts = [self._name if self._name is not None else _UNDEFINED]
        parts.extend(map(str, sorted(self._templates, key=lambda template: template.name)))
        if self.accepts_arguments:
            parts.append("<args>" if self.requires_arguments else "[<args>]")
        return " ".join(parts)


__all__ = (
    # Public API surface for consumers of argot.models.
    # These names are re-exported from the package __init__.
    "Template",
    "Group",
    "Descriptor",
)
