"""
Argot help formatter: usage line and option table for a descriptor.

Output shape (defaults)
    Usage: tool [-a] [-f <FILE>] [<ARG>]
    <header>

     -a,       --all   show everything
     -f <FILE>         input file

    <footer>

- the usage line lists every template (sorted by name), bracketing optional ones,
  followed by the argument placeholder (bracketed when arguments are optional).
- the option table aligns short names, long names and descriptions in columns.

Formatter only reads descriptors; it never parses. print_help() writes the
rendered text through a rich console.
"""
import operator
import re

from rich.console import Console
from rich.text import Text

from .models import Descriptor
from .utils import *

console = Console()

by_name = operator.attrgetter("name")


def _sanitize_paddings(cls, metadata, /):
    for field, minimum in (("option_padding", 0), ("description_padding", 1)):
        if not isinstance(padding := metadata[field], int) or isinstance(padding, bool):
            raise TypeError(f"{cls.__typename__} '{field}' must be an integer")
        if padding < minimum:
            raise ValueError(f"{cls.__typename__} '{field}' [{padding}] must be at least {minimum}")


def _sanitize_labels(cls, metadata, /):
    """
    Internal: prefixes and placeholder names cannot contain whitespace.

    - short_prefix/long_prefix must also be non-empty.
    - value_separator may be a single space.
    - usage_prefix is trimmed and may be empty (no prefix at all).
    """
    for field in ("usage_prefix", "short_prefix", "long_prefix", "value_separator", "value_name", "argument_name"):
        if not isinstance(label := metadata[field], str):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        if field == "usage_prefix":
            metadata[field] = label = label.strip()
        if re.search(r"\s", label) and not (field == "value_separator" and label == " "):
            raise ValueError(f"{cls.__typename__} '{field}' {label!r} has a space")
        if field in ("short_prefix", "long_prefix") and not label:
            raise ValueError(f"{cls.__typename__} '{field}' cannot be empty")

    if not callable(metadata["key"]):
        raise TypeError(f"{cls.__typename__} 'key' must be callable")


class Formatter(metaclass=ModelType):
    """
    Renders usage and help text for descriptors.

    Settings (all keyword-only, validated on construction)
    - option_padding: spaces before each option row (>= 0).
    - description_padding: minimum spaces between names and description (>= 1).
    - usage_prefix: label of the usage line ("Usage:"); empty drops it.
    - short_prefix/long_prefix: dashes rendered before names ("-", "--").
    - value_separator: text between an option and its value name (" ").
    - value_name: value placeholder for templates without a value name ("<ARG>").
    - argument_name: argument placeholder ("<ARG>"); empty hides arguments.
    - key: sort key of templates (by name).
    """

    __introspectable__ = (
        "option_padding",
        "description_padding",
        "usage_prefix",
        "short_prefix",
        "long_prefix",
        "value_separator",
        "value_name",
        "argument_name",
        "key",
    )

    def __new__(
            cls,
            *,
            option_padding=1,
            description_padding=3,
            usage_prefix="Usage:",
            short_prefix="-",
            long_prefix="--",
            value_separator=" ",
            value_name="<ARG>",
            argument_name="<ARG>",
            key=by_name,
    ):
        metadata = {
            "option_padding": option_padding,
            "description_padding": description_padding,
            "usage_prefix": usage_prefix,
            "short_prefix": short_prefix,
            "long_prefix": long_prefix,
            "value_separator": value_separator,
            "value_name": value_name,
            "argument_name": argument_name,
            "key": key,
        }
        _sanitize_paddings(cls, metadata)
        _sanitize_labels(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def _value(self, template):
        if not template.accepts_values:
            return ""
        name = template.value_name if template.value_name is not None else self._value_name
        return self._value_separator + name if name else ""

    def _usage(self, template):
        if template.short_name is not None:
            text = self._short_prefix + template.short_name
        else:
            text = self._long_prefix + template.long_name
        text += self._value(template)
        return text if template.required else "[%s]" % text

    def usage(self, descriptor, syntax=None, /):
        """
        Usage line of `descriptor`, or of the given `syntax` when one is provided.
        """
        _require_descriptor(descriptor)
        parts = [self._usage_prefix] if self._usage_prefix else []

        if syntax is not None and syntax.strip():
            return " ".join([*parts, syntax.strip()])

        parts.append(descriptor.name if descriptor.name is not None else "cmd")
        parts.extend(self._usage(template) for template in sorted(descriptor.templates, key=self._key))
        if descriptor.accepts_arguments and self._argument_name:
            name = self._argument_name
            parts.append(name if descriptor.requires_arguments else "[%s]" % name)
        return " ".join(parts)

    def options(self, descriptor, /):
        """
        Option table of `descriptor`: one aligned row per template.
        """
        templates = sorted(_require_descriptor(descriptor).templates, key=self._key)

        short_width = long_width = 0
        for template in templates:
            value = self._value(template)
            if template.short_name is not None:
                size = len(self._short_prefix) + len(template.short_name) + len(value)
                short_width = max(short_width, size + (template.long_name is not None))
            if template.long_name is not None:
                long_width = max(long_width, len(self._long_prefix) + len(template.long_name) + len(value))

        long_index = self._option_padding + short_width + bool(short_width and long_width)
        description_index = long_index + long_width + self._description_padding

        rows = []
        for template in templates:
            value = self._value(template)
            row = ""
            if template.short_name is not None:
                row = " " * self._option_padding + self._short_prefix + template.short_name + value
                if template.long_name is not None:
                    row += ","
            if template.long_name is not None:
                row += " " * (long_index - len(row)) + self._long_prefix + template.long_name + value
            if template.descr is not None:
                row += " " * (description_index - len(row)) + template.descr
            rows.append(row)
        return "\n".join(rows)

    def help(self, descriptor, syntax=None, header=None, footer=None, /):
        """
        Full help text: usage line, optional header, option table and optional footer.
        """
        lines = [self.usage(descriptor, syntax)]
        if header is not None and header.strip():
            lines.append(header.strip())
        if descriptor.templates:
            lines.extend(("", self.options(descriptor)))
        if footer is not None and footer.strip():
            if descriptor.templates:
                lines.append("")
            lines.append(footer.strip())
        return "\n".join(lines)

    def print_help(self, descriptor, syntax=None, header=None, footer=None, /, *, file=None):
        """
        Print help() through rich (on stdout unless another file is given).
        """
        target = console if file is None else Console(file=file)
        target.print(Text(self.help(descriptor, syntax, header, footer)), soft_wrap=True)


def _require_descriptor(descriptor, /):
    if not isinstance(descriptor, Descriptor):
        raise TypeError("formatter argument must be a descriptor instance")
    return descriptor


__all__ = (
    "Formatter",
    "by_name",
)
