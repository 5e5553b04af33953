"""
Value sinks: the mutable cells option descriptors write into.

A sink is allocated when an option is declared and handed back to the host,
which reads `sink.value` once parsing is over. Only the scanner writes to it.

Shapes (fixed by the descriptor kind)
- flag            → Sink[bool], starts at False
- required-value  → Sink[str], starts at the declared default
- optional-value  → Sink[str], starts at the "absent" default
- repeatable      → Sink[list[str]], starts empty, grows in encounter order
"""


class Sink[_T]:
    """
    Mutable destination for one option's resolved value.
    """

    __slots__ = ("_value",)

    def __init__(self, value, /):
        self._value = value

    @property
    def value(self):
        """
        The current value (the final, resolved value once parsing completed).
        """
        return self._value

    def _store(self, value, /):
        self._value = value

    def _append(self, value, /):
        self._value.append(value)

    def __repr__(self):
        return "sink(%r)" % (self._value,)

    def __rich_repr__(self):
        yield "value", self._value


__all__ = (
    "Sink",
)
