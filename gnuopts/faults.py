"""
gnuopts faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue.
- ParseError / ParseWarning: base types that carry a message plus keyword context
  and know how to render themselves (single line via str(), rich via __rich__).
- trigger(): central entry point to surface any fault.

Surfacing
- library mode (shell=False): errors are raised, warnings go through warnings.warn.
- shell mode (shell=True): faults are printed on stderr with rich; errors then end
  the process with exit status 1.

Context keys understood by the renderers
- prog, code, title, hint, form, shell, fancy, colorful

Host overrides (looked up in __main__)
- __prog__: program name shown in diagnostics.
- __styles__: palette overrides (see the style keys below).
- __codes__: mapping FaultCode → label, replacing the numeric code in headers.
"""
import copy
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - options (1111x): UNKNOWN_OPTION, UNEXPECTED_ARGUMENT, MISSING_ARGUMENT
    - warnings (1211x): EMPTY_INLINE_VALUE
    """
    # --- option errors (11xxx) ---
    UNKNOWN_OPTION              = 11112
    UNEXPECTED_ARGUMENT         = 11113
    MISSING_ARGUMENT            = 11117

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE          = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _progname(options):
    return getattr(__import__("__main__"), "__prog__", options.get("prog") or "")


def _render(fault, palette, /):
    """
    Build the rich renderable shared by errors and warnings.

    Layout: a single line "[ prog — code | Title ] message". The fancy panel
    carries the header as its title, then the message and " → hint".
    """
    options = fault.options
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(_progname(options), "prog-name"),
        " — ",
        text(code.normalize() if code else "", "code"),
        " | ",
        text(str(options.get("title", "")).title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")

    if fancy:
        hint = Text.assemble(text(" → ", "hint-arrow"), text(options.get("hint", ""), "hint"))
        return Panel(Group(message, hint), title=header, title_align="left", width=console.width - 4)

    return Text.assemble(header, " ", message)


class ParseError(Exception):
    """
    Fatal parse fault. Parsing halts at the first one; no partial results are usable.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def form(self):
        """
        The offending option form, exactly as it was looked up.
        """
        return self.options.get("form")

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        if prog := _progname(self.options):
            return "%s: %s" % (prog, self.message)
        return str(self.message)

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
        if not self.options.get("shell", False):
            raise self from None
        console.print(self, soft_wrap=True)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseError): ...
class MissingArgumentError(ParseError): ...
class UnexpectedArgumentError(ParseError): ...


class ParseWarning(Warning):
    """
    Non-fatal parse fault; parsing goes on after it is surfaced.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def form(self):
        return self.options.get("form")

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        if prog := _progname(self.options):
            return "%s: %s" % (prog, self.message)
        return str(self.message)

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
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=4)
        console.print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(ParseWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) first.
    - errors never return: they are raised, or printed before sys.exit(1).
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
    "ParseError",
    "UnknownOptionError",
    "MissingArgumentError",
    "UnexpectedArgumentError",
    "ParseWarning",
    "EmptyInlineValueWarning",
    "FaultCode",
    "trigger",
)
