"""
Argot faults (parse errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse fault.
  Codes are grouped by range (tokens, values, requiredness, arguments, warnings).
- ParseError / ParseWarning: base types carrying the offending payload (token,
  template, group or command name) plus rendering options, and knowing how to
  render themselves through rich.
- trigger(): central entry point to surface a fault (raise/warn, or print in shell mode).

Error kinds
- UnrecognizedTokenError(token): no template matches, or the token is malformed.
- MissingValueError(template) / TooManyValuesError(template): value count out of bounds.
- MissingOptionError(template): a required template never appeared.
- MissingGroupError(group): a required group had no member selected.
- ExclusiveOptionsError(first, second): two members of one group were selected.
- MissingArgumentError(command) / TooManyArgumentsError(command): argument count out of bounds.

Every error aborts the parse; no partial command is produced.

Integration
- The parsers raise errors directly and emit warnings through trigger().
- Applications call trigger(fault, shell=True) to print a fault and exit
  instead of raising it. Host overrides are read from __main__:
  __prog__ (program label), __styles__ (style overrides), __codes__ (code relabeling).
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    stable numeric identifiers of the parse faults.

    ranges
    - tokens (1111x)
      • UNRECOGNIZED_TOKEN
    - values (1112x)
      • MISSING_VALUE, TOO_MANY_VALUES
    - requiredness and exclusivity (1113x)
      • MISSING_OPTION, MISSING_GROUP, EXCLUSIVE_OPTIONS
    - arguments (1114x)
      • MISSING_ARGUMENT, TOO_MANY_ARGUMENTS
    - warnings (12xxx)
      • EMPTY_VALUE
    """
    # --- token errors (11xxx) ---
    UNRECOGNIZED_TOKEN          = 11111

    # --- value errors (11xxx) ---
    MISSING_VALUE               = 11121
    TOO_MANY_VALUES             = 11122

    # --- requiredness errors (11xxx) ---
    MISSING_OPTION              = 11131
    MISSING_GROUP               = 11132
    EXCLUSIVE_OPTIONS           = 11133

    # --- argument errors (11xxx) ---
    MISSING_ARGUMENT            = 11141
    TOO_MANY_ARGUMENTS          = 11142

    # --- warnings (12xxx) ---
    EMPTY_VALUE                 = 12121

    def normalize(self):
        """
        label of this code as shown to users: __main__.__codes__[code] when the
        host defines such a mapping with an entry for it, the number otherwise.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, styles):
    """
    Internal: build the rich renderable shared by errors and warnings.

    layout
    - header: "[ prog — code | title ]"
    - body: the fault message
    - hint: " → hint"
    in fancy mode the body and hint are wrapped in a panel titled by the header.
    """
    main = __import__("__main__")
    options = defaultdict(lambda: None, {"colorful": True, "fancy": False} | dict(fault.options))
    styles = defaultdict(str, styles | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not options["colorful"]:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = options["prog"] or getattr(main, "__prog__", "argot")
    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(fault.code.normalize(), "code"),
        " | ",
        text(fault.title.title(), "title"),
        " ]"
    )
    message = text(str(fault), "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(fault.hint, "hint"))

    if options["fancy"]:
        return Panel(Group(message, hint), title=header, title_align="left")
    return Group(header, message, hint)


class ParseError(Exception):
    """
    Base class of every parse failure.

    The positional arguments are the fault payload (kept in self.args, as for
    any exception); keyword options only influence rendering (prog, colorful,
    fancy, shell).
    """
    code: FaultCode
    title = "parse error"
    hint = "run the command with --help to see its usage"

    def __init__(self, *payload, **options):
        super().__init__(*payload)
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(*self.args, **{**self.options, **overrides})


class UnrecognizedTokenError(ParseError):
    code = FaultCode.UNRECOGNIZED_TOKEN
    title = "unrecognized token"

    def __init__(self, token, /, **options):
        super().__init__(token, **options)

    @property
    def token(self):
        return self.args[0]

    def __str__(self):
        return "unrecognized token %r" % self.token


class MissingValueError(ParseError):
    code = FaultCode.MISSING_VALUE
    title = "missing value"
    hint = "give the option its value(s) after '=' (for example: -o=value)"

    def __init__(self, template, /, **options):
        super().__init__(template, **options)

    @property
    def template(self):
        return self.args[0]

    def __str__(self):
        return "missing value for option %s" % self.template


class TooManyValuesError(ParseError):
    code = FaultCode.TOO_MANY_VALUES
    title = "too many values"
    hint = "remove the extra comma-separated values"

    def __init__(self, template, /, **options):
        super().__init__(template, **options)

    @property
    def template(self):
        return self.args[0]

    def __str__(self):
        return "too many values for option %s" % self.template


class MissingOptionError(ParseError):
    code = FaultCode.MISSING_OPTION
    title = "missing option"

    def __init__(self, template, /, **options):
        super().__init__(template, **options)

    @property
    def template(self):
        return self.args[0]

    def __str__(self):
        return "missing required option %s" % self.template


class MissingGroupError(ParseError):
    code = FaultCode.MISSING_GROUP
    title = "missing group"
    hint = "pick exactly one of the grouped options"

    def __init__(self, group, /, **options):
        super().__init__(group, **options)

    @property
    def group(self):
        return self.args[0]

    def __str__(self):
        return "missing required group %s" % self.group


class ExclusiveOptionsError(ParseError):
    code = FaultCode.EXCLUSIVE_OPTIONS
    title = "exclusive options"
    hint = "keep only one of the mutually exclusive options"

    def __init__(self, first, second, /, **options):
        super().__init__(first, second, **options)

    @property
    def templates(self):
        return self.args

    def __str__(self):
        return "mutually exclusive options [%s]" % ", ".join(map(str, self.args))


class MissingArgumentError(ParseError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"

    def __init__(self, command, /, **options):
        super().__init__(command, **options)

    @property
    def command(self):
        return self.args[0]

    def __str__(self):
        return "missing argument(s) for command %s" % self.command


class TooManyArgumentsError(ParseError):
    code = FaultCode.TOO_MANY_ARGUMENTS
    title = "too many arguments"
    hint = "remove the extra arguments"

    def __init__(self, command, /, **options):
        super().__init__(command, **options)

    @property
    def command(self):
        return self.args[0]

    def __str__(self):
        return "too many arguments for command %s" % self.command


class ParseWarning(UserWarning):
    """
    Base class of non-fatal parse diagnostics.
    """
    code: FaultCode
    title = "parse warning"
    hint = ""

    def __init__(self, *payload, **options):
        super().__init__(*payload)
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self):
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(*self.args, **{**self.options, **overrides})


class EmptyValueWarning(ParseWarning):
    code = FaultCode.EMPTY_VALUE
    title = "empty value"
    hint = "add a value after '=' or drop the '='"

    def __init__(self, token, /, **options):
        super().__init__(token, **options)

    @property
    def token(self):
        return self.args[0]

    def __str__(self):
        return "empty value in token %r" % self.token


def trigger(fault, /, **options):
    """
    raise, warn or print `fault` after merging `options` into it.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - outside shell mode errors are raised and warnings go through warnings.warn;
      in shell mode both are printed on stderr through rich and errors exit with status 1.

    typical options
    - shell, fancy, colorful, prog.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "UnrecognizedTokenError",
    "MissingValueError",
    "TooManyValuesError",
    "MissingOptionError",
    "MissingGroupError",
    "ExclusiveOptionsError",
    "MissingArgumentError",
    "TooManyArgumentsError",
    "ParseWarning",
    "EmptyValueWarning",
    "trigger",
)
