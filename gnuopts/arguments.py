r"""
gnuopts option descriptors.

Overview
- Descriptors (one class per kind, a closed sum type)
  • Flag: presence-only switch, e.g. -v/--verbose. Sink[bool].
  • RequiredValue: option that needs a value, e.g. -f csv / --format=csv. Sink[str].
  • OptionalValue: option whose value may be omitted, e.g. --color / --color=never. Sink[str].
  • Repeatable: value option that may appear many times, e.g. -I a -I b. Sink[list[str]].

- Introspection & representation
  • DescriptorType metaclass provides stable __repr__/__rich_repr__, derives the
    kind name (__typename__) from the class name and exposes the fields listed in
    __introspectable__ as read-only properties.
  • Concrete descriptor classes are sealed: they cannot be subclassed.

Metadata (sanitized on construction)
- forms: one or more strings. Empty strings are ignored (single-form declarations
  pass "" for the unused form). Bare names are normalized: "v" → "-v", "verbose" → "--verbose".
- descr: Unset | str (short help), non-empty when provided.
- default (RequiredValue), absent/given (OptionalValue): strings.

Validation highlights
- Short forms: "-X" where X is one character other than '-', '=' or whitespace.
- Long forms: "--name" where name does not start with '-' and has no '=' or whitespace.
- At least one non-empty form; no duplicates inside one descriptor.

Quick example:
    >>> from gnuopts.arguments import Flag, RequiredValue
    >>> verbose = Flag("-v", "--verbose", descr="talk more")
    >>> verbose.sink.value
    False
    >>> RequiredValue("f", "format", default="csv").forms
    ('-f', '--format')
"""
import functools
import operator
import re

from .sinks import Sink
from .utils import *


class DescriptorType(type):
    """
    Metaclass for option descriptors.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens); it
      doubles as the descriptor's kind ("flag", "required-value", ...).
    - Expose every name listed in __introspectable__ as a read-only property backed
      by the "_" + name attribute.
    - Provide readable __repr__/__rich_repr__ implementations.
    - Seal classes declared with `final=True` against subclassing.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        typename = re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower()
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": typename,
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        if options.get("final", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the 'descr' field shared by every descriptor.

    - descr: optional short description. Unset becomes None; a provided value must be
      a string that is non-empty after trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")

    metadata["descr"] = coalesce(descr)


def _sanitize_forms(cls, metadata, /):
    r"""
    Internal: validate and normalize the textual forms that invoke an option.

    Rules
    - Each form must be a string. Empty (or blank) strings are skipped, so
      Flag("", "--verbose") declares a long-only flag.
    - A form without a leading dash is a bare name: one character becomes a short
      form, anything longer a long form.
    - Short: r"-[^-=\s]". Long: r"--[^-=\s][^=\s]*".
    - Duplicates are rejected; order of declaration is preserved.

    Raises
    - TypeError: non-string form, or no usable form at all.
    - ValueError: malformed or duplicated form.
    """
    forms = []
    for form in metadata["forms"]:
        if not isinstance(form, str):
            raise TypeError(f"{cls.__typename__} forms must be strings")
        elif not (form := form.strip()):
            continue
        if not form.startswith("-"):
            form = ("-" if len(form) == 1 else "--") + form
        if not re.fullmatch(r"-[^-=\s]|--[^-=\s][^=\s]*", form):
            raise ValueError(f"{cls.__typename__} form {form!r} must look like '-x' or '--name'")
        elif form in forms:
            raise ValueError(f"{cls.__typename__} forms cannot contain duplicates")
        forms.append(form)

    if not forms:
        raise TypeError(f"{cls.__typename__} must specify at least one form")

    metadata["forms"] = tuple(forms)


def _sanitize_values(cls, metadata, /, *names):
    """
    Internal: value-bearing defaults ('default', 'absent', 'given') must be strings.
    """
    for name in names:
        if not isinstance(metadata[name], str):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")


class Descriptor(metaclass=DescriptorType):
    """
    Common base of the four descriptor kinds.

    A descriptor is the immutable definition of one logical option: the forms that
    invoke it, its help text and the sink it writes into. The kind (the concrete
    class) fixes the sink type for the descriptor's whole lifetime.
    """

    __introspectable__ = (
        "forms",
        "descr",
        "sink",
    )

    @property
    def kind(self):
        """
        Kind name: "flag", "required-value", "optional-value" or "repeatable".
        """
        return type(self).__typename__

    @property
    def shorts(self):
        return tuple(form for form in self._forms if not form.startswith("--"))

    @property
    def longs(self):
        return tuple(form for form in self._forms if form.startswith("--"))


class Flag(Descriptor, final=True):
    """
    Presence-only option. Seeing any of its forms sets the sink to True.

    A flag never takes a value: "--verbose=yes" is an unexpected-argument fault.
    """

    def __new__(cls, *forms, descr=Unset):
        metadata = {
            "forms": forms,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_forms(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._sink = Sink(False)
        return self


class RequiredValue(Descriptor, final=True):
    """
    Option that always needs a value.

    - long form: the value must be attached with '=' ("--format=csv").
    - short form: the value is the next whole token ("-f csv"), so the short form
      must be the last character of its cluster.

    The sink holds 'default' until the option is seen.
    """

    __introspectable__ = (
        "forms",
        "default",
        "descr",
        "sink",
    )

    def __new__(cls, *forms, default="", descr=Unset):
        metadata = {
            "forms": forms,
            "default": default,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_forms(cls, metadata)
        _sanitize_values(cls, metadata, "default")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._sink = Sink(self._default)
        return self


class OptionalValue(Descriptor, final=True):
    """
    Option whose value may be omitted.

    - 'absent': sink value when the option never appears.
    - 'given': value written when the option appears without an argument
      ("--color", or "-c" inside a cluster).
    - "--color=never" writes "never". Short forms never consume the next token.
    """

    __introspectable__ = (
        "forms",
        "absent",
        "given",
        "descr",
        "sink",
    )

    def __new__(cls, *forms, absent="", given="", descr=Unset):
        metadata = {
            "forms": forms,
            "absent": absent,
            "given": given,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_forms(cls, metadata)
        _sanitize_values(cls, metadata, "absent", "given")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._sink = Sink(self._absent)
        return self


class Repeatable(Descriptor, final=True):
    """
    Value option that accumulates every occurrence, in encounter order.

    Same value rules as RequiredValue ("--include=a", "-I a"); the sink is a list.
    """

    def __new__(cls, *forms, descr=Unset):
        metadata = {
            "forms": forms,
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_forms(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._sink = Sink([])
        return self


__all__ = (
    # Base class (isinstance checks only)
    "Descriptor",

    # Descriptor kinds
    "Flag",
    "RequiredValue",
    "OptionalValue",
    "Repeatable",
)
