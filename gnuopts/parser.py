"""
gnuopts parser: the declaration API and the parse entry points.

A Parser owns one Registry. The host declares its options first (every
declaration returns the sink to read afterwards), then parses exactly once:

    >>> parser = Parser("tool", "convert things")
    >>> verbose = parser.flag("v", "verbose", "talk more")
    >>> output = parser.single("o", "output", "where to write", default="-")
    >>> parser.parse_arguments(["tool", "-v", "-o", "out.txt", "in.txt"])
    Parsed(prog='tool', positionals=['in.txt'], help=False)
    >>> verbose.value, output.value
    (True, 'out.txt')

Fatal faults stop the parse. In library mode (the default) they are raised as
ParseError subclasses; with shell=True they are printed on stderr and the
process exits with status 1.
"""
import builtins
import copy
import sys
from collections import namedtuple

from .arguments import *
from .faults import *
from .help import HELP_FORMS, helper as _helper, print_help as _print_help
from .registry import Registry
from .scanner import Scanner
from .utils import *

Parsed = namedtuple("Parsed", (
    "prog",
    "positionals",
    "help",
))


def _declare(kind, short, long, /, **metadata):
    """
    Build a 'kind' descriptor from a short slot and a long slot ("" leaves a slot unused).

    Raises
    - ValueError: the short slot does not name a short form, or the long slot a long one.
    """
    descriptor = kind(short, long, **metadata)
    if (
            len(descriptor.shorts) != bool(short.strip()) or
            len(descriptor.longs) != bool(long.strip()) or
            descriptor.forms != descriptor.shorts + descriptor.longs
    ):
        raise ValueError(f"{descriptor.kind} forms must be a short '-x' then a long '--name'")
    return descriptor


class Parser:
    """
    Host-facing configuration object: declarations, runtime flags and parsing.

    Runtime flags
    - helper: register -h/--help automatically (unless the host declared either form).
    - shell: print faults and exit instead of raising; print help and exit on -h.
    - fancy: draw diagnostics and help inside panels.
    - colorful: style diagnostics and help.
    - reporter: callable(code, form) told about every fatal fault before it surfaces.
    """

    def __init__(
            self,
            name=Unset,
            descr=Unset,
            usage=Unset,
            *,
            registry=Unset,
            helper=True,
            shell=False,
            fancy=False,
            colorful=False,
            reporter=Unset,
    ):
        for label, object in (("name", name), ("descr", descr), ("usage", usage)):
            if not isinstance(object, str | Unset):
                raise TypeError(f"parser {label!r} must be a string")
        if not isinstance(registry, Registry | Unset):
            raise TypeError("parser 'registry' must be a registry")
        if reporter is not Unset and not builtins.callable(reporter):
            raise TypeError("parser 'reporter' must be callable")

        self.name = coalesce(name)
        self.descr = coalesce(descr)
        self.usage = coalesce(usage)
        self.registry = registry if registry is not Unset else Registry()
        self.helper = bool(helper)
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.reporter = coalesce(reporter)

        self._prog = None
        self._positionals = None
        self._parsed = False

    @property
    def prog(self):
        """
        Invocation name (element 0 of the parsed vector); None before parsing.
        """
        return self._prog

    @property
    def positionals(self):
        """
        Non-option arguments in encounter order; None before parsing.
        """
        if self._positionals is None:
            return None
        return tuple(self._positionals)

    def add(self, descriptor, /):
        """
        Register a prebuilt descriptor and return its sink.
        """
        return self.registry.register(descriptor).sink

    def flag(self, short, long, descr=Unset):
        return self.add(_declare(Flag, short, long, descr=descr))

    def shortflag(self, short, descr=Unset):
        return self.add(_declare(Flag, short, "", descr=descr))

    def longflag(self, long, descr=Unset):
        return self.add(_declare(Flag, "", long, descr=descr))

    def single(self, short, long, descr=Unset, default=""):
        return self.add(_declare(RequiredValue, short, long, default=default, descr=descr))

    def shortsingle(self, short, descr=Unset, default=""):
        return self.add(_declare(RequiredValue, short, "", default=default, descr=descr))

    def longsingle(self, long, descr=Unset, default=""):
        return self.add(_declare(RequiredValue, "", long, default=default, descr=descr))

    def half(self, short, long, descr=Unset, absent="", given=""):
        return self.add(_declare(OptionalValue, short, long, absent=absent, given=given, descr=descr))

    def shorthalf(self, short, descr=Unset, absent="", given=""):
        return self.add(_declare(OptionalValue, short, "", absent=absent, given=given, descr=descr))

    def longhalf(self, long, descr=Unset, absent="", given=""):
        return self.add(_declare(OptionalValue, "", long, absent=absent, given=given, descr=descr))

    def multi(self, short, long, descr=Unset):
        return self.add(_declare(Repeatable, short, long, descr=descr))

    def shortmulti(self, short, descr=Unset):
        return self.add(_declare(Repeatable, short, "", descr=descr))

    def longmulti(self, long, descr=Unset):
        return self.add(_declare(Repeatable, "", long, descr=descr))

    def trigger(self, fault, /, **options):
        """
        Surface 'fault' with this parser's runtime flags.

        Fatal faults are reported to the reporter callback first, then raised (or
        printed before exiting with status 1 in shell mode).
        """
        fault = copy.replace(fault, **{
            "prog": self.name or self._prog or "",
            "shell": self.shell,
            "fancy": self.fancy,
            "colorful": self.colorful,
            **options,
        })
        if isinstance(fault, ParseError) and self.reporter is not None:
            self.reporter(fault.code, fault.form)
        trigger(fault)

    def parse(self):
        """
        Parse the process arguments (sys.argv).
        """
        return self.parse_arguments(sys.argv)

    def parse_arguments(self, arguments, /):
        """
        Parse 'arguments' (element 0 is the invocation name) and return a Parsed.

        Sinks are written in place. A parser parses once; calling again raises
        RuntimeError.
        """
        if self._parsed:
            raise RuntimeError("parser can only parse once; declare a new parser instead")
        arguments = list(arguments)
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError("parse_arguments() arguments must be strings")

        self._parsed = True
        self._prog = arguments[0] if arguments else ""

        help = None
        if self.helper and not any(form in self.registry for form in HELP_FORMS):
            help = self.registry.register(_helper())

        try:
            state = Scanner(self.registry, self.trigger).scan(arguments)
        except ParseError as fault:
            self.trigger(fault)
        else:
            self._positionals = state.positionals

        requested = help is not None and help.sink.value
        if requested and self.shell:
            self.print_help()
            sys.exit(0)

        return Parsed(self._prog, list(self._positionals), requested)

    def print_help(self, console=Unset):
        """
        Print the help screen (stdout unless another rich console is given).
        """
        _print_help(self, console)

    def __repr__(self):
        return "parser(name=%r, registry=%r)" % (self.name, self.registry)


__all__ = (
    "Parser",
    "Parsed",
)
