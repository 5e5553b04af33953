"""
Scanner: walks the argument vector once, left to right, and dispatches every
token to the sink of the option it names.

Token classes
- positional: anything not starting with "-", or anything at all once options
  were terminated. Collected verbatim, in encounter order.
- "-": terminates option scanning; the marker itself is consumed.
- "--name[=value]": long option. A value is only ever taken from "=value".
- "-abc": short cluster. Each character is the form "-a", "-b", "-c". A
  value-taking short option must close its cluster and takes the next token.

Fatal faults are raised as ParseError subclasses and stop the scan on the spot.
Non-fatal ones are handed to the 'warn' callback and scanning continues.
"""
from .arguments import *
from .faults import *


class State:
    """
    Per-scan state, created fresh for every scan.

    - consumed: cursor into the argument vector (index of the next token).
    - terminated: True once a bare "-" was seen.
    - positionals: non-option tokens, append-only.
    """

    __slots__ = ("consumed", "terminated", "positionals")

    def __init__(self):
        self.consumed = 1
        self.terminated = False
        self.positionals = []

    def __repr__(self):
        return "state(consumed=%r, terminated=%r, positionals=%r)" % (
            self.consumed,
            self.terminated,
            self.positionals,
        )


def _looks_like_option(token):
    return token.startswith("-") and len(token) > 1


def _unknown(form):
    return UnknownOptionError(
        f"unrecognized option {form!r}",
        code=FaultCode.UNKNOWN_OPTION,
        title="unknown option",
        hint="check the spelling, or pass '-' before arguments that start with a dash",
        form=form,
    )


def _missing(form):
    if form.startswith("--"):
        hint = f"attach the value with '=', as in '{form}=VALUE'"
    else:
        hint = f"put {form!r} last in its group and the value in the next argument"
    return MissingArgumentError(
        f"option {form!r} requires an argument",
        code=FaultCode.MISSING_ARGUMENT,
        title="missing argument",
        hint=hint,
        form=form,
    )


def _unexpected(form):
    return UnexpectedArgumentError(
        f"option {form!r} doesn't allow an argument",
        code=FaultCode.UNEXPECTED_ARGUMENT,
        title="unexpected argument",
        hint=f"drop the '=...' part and pass {form!r} on its own",
        form=form,
    )


class Scanner:
    """
    Token-by-token dispatcher over a read-only registry.

    >>> scanner = Scanner(registry, warn=print)
    >>> state = scanner.scan(["prog", "-v", "file"])
    >>> state.positionals
    ['file']
    """

    def __init__(self, registry, warn):
        self._registry = registry
        self._warn = warn

    def scan(self, arguments):
        arguments = list(arguments)
        state = State()

        while state.consumed < len(arguments):
            token = arguments[state.consumed]

            if state.terminated or not token.startswith("-"):
                state.positionals.append(token)
                state.consumed += 1
            elif token == "-":
                state.terminated = True
                state.consumed += 1
            elif token.startswith("--"):
                self._long(token)
                state.consumed += 1
            else:
                state.consumed += self._cluster(token, arguments, state.consumed)

        return state

    def _long(self, token):
        name, separator, value = token.partition("=")
        if (descriptor := self._registry.lookup(name)) is None:
            raise _unknown(name)

        inline = bool(separator)
        if inline and not value and not isinstance(descriptor, Flag):
            self._warn(EmptyInlineValueWarning(
                f"option {name!r} was given an empty value",
                code=FaultCode.EMPTY_INLINE_VALUE,
                title="empty value",
                hint=f"the empty string is stored; drop '=' to skip {name!r}",
                form=name,
            ))

        match descriptor:
            case Flag():
                if inline:
                    raise _unexpected(name)
                descriptor.sink._store(True)
            case RequiredValue():
                if not inline:
                    raise _missing(name)
                descriptor.sink._store(value)
            case OptionalValue():
                descriptor.sink._store(value if inline else descriptor.given)
            case Repeatable():
                if not inline:
                    raise _missing(name)
                descriptor.sink._append(value)

    def _cluster(self, token, arguments, index):
        """
        Dispatch a short cluster; return how many tokens it used up (1 or 2).
        """
        letters = token[1:]
        for position, letter in enumerate(letters):
            form = "-" + letter
            if (descriptor := self._registry.lookup(form)) is None:
                raise _unknown(form)

            match descriptor:
                case Flag():
                    descriptor.sink._store(True)
                case OptionalValue():
                    descriptor.sink._store(descriptor.given)
                case RequiredValue() | Repeatable():
                    if position != len(letters) - 1:
                        raise _missing(form)
                    if index + 1 >= len(arguments) or _looks_like_option(arguments[index + 1]):
                        raise _missing(form)
                    if isinstance(descriptor, Repeatable):
                        descriptor.sink._append(arguments[index + 1])
                    else:
                        descriptor.sink._store(arguments[index + 1])
                    return 2

        return 1


__all__ = (
    "State",
    "Scanner",
)
