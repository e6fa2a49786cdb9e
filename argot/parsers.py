"""
Argot parsers: the GNU-style engine and the POSIX-style front-end.

GNU syntax
    -short[=<values>] --long[=<values>] [--] [<args>]

  Short options start with a single dash, long options with a double dash.
  Values follow a single '=' and are separated by commas. The first token that
  is not an option ends the options; a double dash ends them explicitly and is
  not kept as an argument. Arguments may start with a dash once options ended.

POSIX syntax
    -abc -o<value> -o <value> [--] [<args>]

  Only short (single character) options. They may be glued together in one
  token, and an option taking values takes one, glued to it or as the next
  token. POSIX tokens are rewritten into GNU tokens and parsed by the GNU
  engine against a copy of the descriptor without long names, so both syntaxes
  share one validation core and raise the same faults.

Entry points
- parse(descriptor, tokens) -> Command: pure function, one fresh context per call.
- parse_posix(descriptor, tokens) -> Command.
- try_parse(descriptor, tokens, posix=False) -> Command | ParseError | ParseWarning: same,
  with the fault returned as a value.
- GnuParser(descriptor) / PosixParser(descriptor): reusable parsers bound to a
  descriptor; safe to share since they keep no per-parse state.

Quick example:
    >>> from argot import Template, Descriptor, parse
    >>> descriptor = Descriptor("tool", templates=(Template("a", max_values=2),), max_args=1)
    >>> command = parse(descriptor, ["-a=1,2", "file"])
    >>> command.get_option_values("a"), command.get_argument(0)
    (('1', '2'), 'file')
"""
from collections import deque
from collections.abc import Iterable

from .faults import *
from .models import Descriptor, Group
from .results import Option, Command

_UNDEFINED = "<undefined>"


def _sanitize_tokens(tokens, /):
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("tokens must be an iterable of strings")
    tokens = list(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("tokens must be strings")
    return tokens


def _require_descriptor(descriptor, /):
    if not isinstance(descriptor, Descriptor):
        raise TypeError("descriptor must be a descriptor instance")
    return descriptor


class _Context:
    """
    Bookkeeping of one parse: still-missing required templates and groups
    (insertion ordered, so the first declared one is reported), the template
    selected for each group, and the options and arguments collected so far.
    """
    __slots__ = ("descriptor", "missing_templates", "missing_groups", "selections", "options", "arguments", "terminated")

    def __init__(self, descriptor):
        self.descriptor = descriptor
        self.missing_templates = dict.fromkeys(descriptor.required_templates())
        self.missing_groups = dict.fromkeys(descriptor.required_groups())
        self.selections = {}
        self.options = []
        self.arguments = []
        self.terminated = False


def _split_values(text, /):
    """
    Split the right side of an option token on commas; trailing empty values
    are dropped ("1,2," -> ("1", "2"), "" -> ()).
    """
    values = text.split(",")
    while values and not values[-1]:
        values.pop()
    return tuple(values)


def _resolve_template(descriptor, input, /):
    if input.startswith("--"):
        return descriptor.template_by_long_name(input[2:])
    return descriptor.template_by_short_name(input[1:])


def _parse_option(context, token, /):
    """
    Parse one option token and record it in the context.

    order of checks
    - shape: at most one '='                       → UnrecognizedTokenError
    - name: resolves to a template                 → UnrecognizedTokenError
    - arity: min_values <= count <= max_values     → MissingValueError / TooManyValuesError
    - exclusivity: one template per group          → ExclusiveOptionsError
    """
    input, separator, text = token.partition("=")
    if "=" in text:
        raise UnrecognizedTokenError(token)

    if (template := _resolve_template(context.descriptor, input)) is None:
        raise UnrecognizedTokenError(input)

    values = _split_values(text)
    if separator and not values:
        trigger(EmptyValueWarning(token))

    if len(values) < template.min_values:
        raise MissingValueError(template)
    if len(values) > template.max_values:
        raise TooManyValuesError(template)

    context.missing_templates.pop(template, None)

    if (group := context.descriptor.group(template)) is not None:
        context.missing_groups.pop(group, None)
        if (selected := context.selections.setdefault(group, template)) is not template:
            raise ExclusiveOptionsError(selected, template)

    context.options.append(Option.from_template(template, values))


def _parse_options(context, tokens, /):
    """
    Consume option tokens from the front of `tokens`.

    Stops at '--' (consumed), at a lone '-' or at the first token that does not
    start with a dash (both left in place as the first argument). Runs only
    when the descriptor declares templates.

    Required templates and groups are checked only when the options run until
    the tokens are exhausted; a '--' or an argument ending them skips the check.
    """
    if not context.descriptor.templates:
        return

    while tokens:
        token = tokens.popleft()
        if token == "--":
            context.terminated = True
            break
        if token == "-" or not token.startswith("-"):
            tokens.appendleft(token)
            break
        _parse_option(context, token)
    else:
        for template in context.missing_templates:
            raise MissingOptionError(template)
        for group in context.missing_groups:
            raise MissingGroupError(group)


def _parse_arguments(context, tokens, /):
    """
    Consume every remaining token as an argument, then check the count.

    A leading '--' still ends the options when none was consumed yet (which is
    the case for descriptors without templates); any other '--' is an argument.
    """
    for token in tokens:
        if token == "--" and not context.terminated and not context.arguments:
            context.terminated = True
            continue
        context.arguments.append(token)

    name = context.descriptor.name if context.descriptor.name is not None else _UNDEFINED
    if len(context.arguments) < context.descriptor.min_args:
        raise MissingArgumentError(name)
    if len(context.arguments) > context.descriptor.max_args:
        raise TooManyArgumentsError(name)


def parse(descriptor, tokens, /):
    """
    Parse GNU-style `tokens` against `descriptor`.

    returns
    - Command: named after the descriptor, options in token order (last wins
      for repeated options), arguments in token order.

    raises
    - ParseError subclasses (see argot.faults); parsing stops at the first one.
    - TypeError for a non-descriptor or non-string tokens.
    """
    context = _Context(_require_descriptor(descriptor))
    tokens = deque(_sanitize_tokens(tokens))

    _parse_options(context, tokens)
    _parse_arguments(context, tokens)

    return Command(context.descriptor.name, options=context.options, arguments=context.arguments)


def _sanitize_descriptor(descriptor, /):
    """
    Internal: copy of `descriptor` that POSIX syntax can express.

    Keeps the name and argument bounds, drops every long name and rebuilds each
    group over the copied templates.

    Raises
    - ValueError: a template has no short name (it could never be given).
    """
    copies = {}
    for template in descriptor.templates:
        if template.short_name is None:
            raise ValueError(f"template {str(template)!r} has no short name and cannot be parsed in posix style")
        copies[template] = template.replace(long_name=None)

    groups = tuple(Group(*(copies[template] for template in group), required=group.required) for group in descriptor.groups)
    return descriptor.replace(templates=tuple(copies.values()), groups=groups)


def _rewrite_option(descriptor, remaining, tokens, /):
    """
    Peel one POSIX option token (without its dash) into GNU tokens.

    Each character becomes "-c". When "c" takes values, its value is the rest
    of the token unless that starts with another known option; when nothing is
    left, the next token is taken unless it starts with a dash. A taken value
    is glued as "-c=value" and ends the token. Unknown characters are kept as
    "-c" so the GNU engine reports them.
    """
    while remaining:
        char, remaining = remaining[0], remaining[1:]
        template = descriptor.template_by_short_name(char)

        if template is None or not template.accepts_values:
            yield "-" + char
        elif remaining:
            if descriptor.template_by_short_name(remaining[0]) is not None:
                yield "-" + char
                continue
            yield "-%s=%s" % (char, remaining)
            return
        elif tokens and not tokens[0].startswith("-"):
            yield "-%s=%s" % (char, tokens.popleft())
        else:
            yield "-" + char


def _rewrite(descriptor, tokens, /):
    """
    Rewrite POSIX-style `tokens` into GNU-style tokens.

    Rewriting stops at a lone '-', at '--' or at the first token that does not
    start with a dash; those and every later token pass through unchanged.
    Long options ("--name") have no POSIX form and raise UnrecognizedTokenError.
    """
    tokens = deque(tokens)
    rewritten = []

    if descriptor.templates:
        while tokens:
            if (token := tokens[0]) in ("-", "--") or not token.startswith("-"):
                break
            tokens.popleft()
            if token.startswith("--"):
                raise UnrecognizedTokenError(token)
            rewritten.extend(_rewrite_option(descriptor, token[1:], tokens))

    rewritten.extend(tokens)
    return rewritten


class GnuParser:
    """
    GNU-style parser bound to a descriptor.
    """
    __slots__ = ("_descriptor",)

    def __init__(self, descriptor, /):
        self._descriptor = _require_descriptor(descriptor)

    @property
    def descriptor(self):
        return self._descriptor

    def parse(self, tokens, /):
        return parse(self._descriptor, tokens)

    def __repr__(self):
        return "gnu-parser(descriptor=%r)" % self._descriptor


class PosixParser:
    """
    POSIX-style parser bound to a descriptor.

    The descriptor is sanitized once, here; every parse rewrites its tokens and
    delegates to a GNU parser over the sanitized copy.
    """
    __slots__ = ("_descriptor", "_delegate")

    def __init__(self, descriptor, /):
        self._descriptor = _require_descriptor(descriptor)
        self._delegate = GnuParser(_sanitize_descriptor(descriptor))

    @property
    def descriptor(self):
        return self._descriptor

    def parse(self, tokens, /):
        tokens = _sanitize_tokens(tokens)
        return self._delegate.parse(_rewrite(self._delegate.descriptor, tokens))

    def __repr__(self):
        return "posix-parser(descriptor=%r)" % self._descriptor


def parse_posix(descriptor, tokens, /):
    """
    Parse POSIX-style `tokens` against `descriptor` (see PosixParser).
    """
    return PosixParser(descriptor).parse(tokens)


def try_parse(descriptor, tokens, /, *, posix=False):
    """
    Like parse() (or parse_posix() when `posix` is set), but the ParseError is
    returned instead of raised: the result is either a Command or the fault
    describing why the tokens were rejected.

    A ParseWarning escalated to an exception by the warnings filters (for
    example under simplefilter("error")) is returned the same way. Misuse
    (TypeError/ValueError) is still raised.
    """
    try:
        return parse_posix(descriptor, tokens) if posix else parse(descriptor, tokens)
    except (ParseError, ParseWarning) as fault:
        return fault


__all__ = (
    "parse",
    "parse_posix",
    "try_parse",
    "GnuParser",
    "PosixParser",
)
