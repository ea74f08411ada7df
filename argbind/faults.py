"""
argbind faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and searches predictable.
- ArgumentException / ArgumentWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

UX goals
- Position-first messages: every parse-time message names the ordinal position of
  the offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parser builds faults while walking the token stream and calls
  Parser.trigger(fault, **ctx), which merges its runtime options and surfaces it.
- Outside shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, they are rendered via rich and errors exit with status 1.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - help (110xx)
      • HELP_REQUESTED
    - named arguments (1111x)
      • UNRECOGNIZED_ARGUMENT
    - positional arguments (1112x)
      • MISSING_POSITIONALS, INVALID_POSITIONAL
    - values (1113x)
      • NOT_ENOUGH_VALUES, UNCASTABLE_VALUE
    - warnings (12xxx)
      • REPEATED_ARGUMENT

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- help (11xxx) ---
    HELP_REQUESTED              = 11001

    # --- named argument errors (11xxx) ---
    UNRECOGNIZED_ARGUMENT       = 11111

    # --- positional argument errors (11xxx) ---
    MISSING_POSITIONALS         = 11121
    INVALID_POSITIONAL          = 11122

    # --- value errors (11xxx) ---
    NOT_ENOUGH_VALUES           = 11131
    UNCASTABLE_VALUE            = 11132

    # --- warnings (12xxx) ---
    REPEATED_ARGUMENT           = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    shared rich layout for errors and warnings: a header, the message and a hint.

    palette keys: prog-name, code, title, message, hint-arrow, hint. any key can be
    overridden by a __styles__ mapping in __main__.
    """
    main = __import__("__main__")
    options = fault.options
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", options.get("prog", "argbind")), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
        " | ",
        text(options.get("title", type(fault).__name__).title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))
    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class ArgumentException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    @property
    def help(self):
        """
        plain help text attached by the parser ("" when none).
        """
        return str(self.options.get("help", ""))

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if help := self.options.get("help"):
            console.print()
            console.print(help)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class HelpRequested(ArgumentException):
    """
    raised (or, in shell mode, printed to stdout before exiting) when -h/--help is seen.

    the rendered help travels in options["help"] (see the help property).
    """

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        Console().print(self.options.get("help", ""))
        sys.exit(1)


class MissingPositionalsError(ArgumentException): ...
class InvalidPositionalError(ArgumentException): ...
class NotEnoughValuesError(ArgumentException): ...
class UnrecognizedArgumentError(ArgumentException): ...
class UncastableValueError(ArgumentException): ...


class ArgumentWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RepeatedArgumentWarning(ArgumentWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised
      and warnings are emitted through the warnings module.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, and any other context the
      reporter may want to carry (input, index, argument, ...).
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
    "ArgumentException",
    "HelpRequested",
    "MissingPositionalsError",
    "InvalidPositionalError",
    "NotEnoughValuesError",
    "UnrecognizedArgumentError",
    "UncastableValueError",
    "ArgumentWarning",
    "RepeatedArgumentWarning",
    "FaultCode",
    "trigger",
)
