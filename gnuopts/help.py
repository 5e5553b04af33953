"""
Help surface: the -h/--help flag and the rich help screen.

The renderer only reads the registry. Every logical option is listed once
(grouped by descriptor identity, in declaration order) with its live forms,
a value placeholder, its description and its default.

Palette keys
- usage-label, program-name, usage-section, description-section
- options-label, options-table
- flag-name, option-name, metavar, argument-description, default
- panel-title

Define a mapping named __styles__ in __main__ to override any palette entry.
Styling only applies when the parser is colorful.
"""
import re
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import *
from .utils import *

HELP_FORMS = ("-h", "--help")


def helper():
    """
    A fresh -h/--help flag.
    """
    return Flag(*HELP_FORMS, descr="show this help message and exit")


def _placeholder(forms):
    for form in forms:
        if form.startswith("--"):
            return re.sub(r"\W+", "_", form[2:]).upper()
    return "VALUE"


def _forms(descriptor, forms, styler):
    """
    Styled forms of one option, e.g. "-f FORMAT, --format=FORMAT".
    """
    if isinstance(descriptor, Flag):
        return Text(", ").join(Text(form, styler("flag-name")) for form in forms)

    metavar = _placeholder(forms)
    segments = []
    for form in forms:
        segment = Text(form, styler("option-name"))
        if isinstance(descriptor, OptionalValue):
            # short forms of an optional value never take one
            if form.startswith("--"):
                segment.append("[=").append(metavar, styler("metavar")).append("]")
        elif form.startswith("--"):
            segment.append("=").append(metavar, styler("metavar"))
        else:
            segment.append(" ").append(metavar, styler("metavar"))
        segments.append(segment)
    return Text(", ").join(segments)


def _default(descriptor):
    match descriptor:
        case RequiredValue():
            return repr(descriptor.default)
        case OptionalValue():
            return "%r (bare: %r)" % (descriptor.absent, descriptor.given)
        case _:
            return ""


def render(parser):
    """
    Build the help screen of 'parser' as a rich renderable.
    """
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # cyan headline
        "program-name": "bold #FF4D94",  # magenta-pink brand pop
        "usage-section": "bold #36C5F0",  # sky-blue
        "description-section": "italic #A3A3A3",  # neutral gray

        "options-label": "bold #FFFFFF",
        "options-table": "#4B5563",  # slate border

        "flag-name": "bold #22C55E",  # green for flags
        "option-name": "bold #00E6FF",  # cyan for value options
        "metavar": "bold #FFD600",  # amber placeholders
        "argument-description": "#9CA3AF",
        "default": "italic #737373",

        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if parser.colorful else ""

    name = parser.name or parser.prog or "prog"
    renders = []

    usage = Text()
    usage.append("usage", styler("usage-label")).append(": ")
    if parser.usage:
        usage.append(parser.usage, styler("usage-section"))
    else:
        usage.append(name, styler("program-name"))
        usage.append(" [options] [-] [arguments]", styler("usage-section"))
    renders.append(usage)

    if parser.descr:
        renders.append(Text("\n").append(parser.descr, styler("description-section")))

    if descriptors := parser.registry.descriptors():
        table = Table(
            "option", "description", "default",
            title=Text("options", styler("options-label")),
            title_justify="left",
            box=ROUNDED,
            style=styler("options-table"),
            header_style=styler("options-label"),
        )
        for descriptor in descriptors:
            table.add_row(
                _forms(descriptor, parser.registry.forms(descriptor), styler),
                Text(descriptor.descr or "", styler("argument-description")),
                Text(_default(descriptor), styler("default")),
            )
        renders.append(Text(""))
        renders.append(table)

    renderable = Group(*renders)

    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{name} help".upper(), " ]", style=styler("panel-title")),
            title_align="left",
        )

    return renderable


def print_help(parser, console=Unset):
    """
    Print the help screen of 'parser' (stdout unless another console is given).
    """
    if console is Unset:
        console = Console()
    console.print(render(parser))


__all__ = (
    "render",
    "print_help",
)
