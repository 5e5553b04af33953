"""
Option registry: the form → descriptor index consulted by the scanner.

Every form of a descriptor ("-f", "--format") is a key; several keys may point
to the same descriptor. Registering a form that already exists silently
replaces the previous entry (last registration wins), the way later
declarations shadow earlier ones in GNU tools.

The registry is filled during the host's declaration phase and only read
while parsing. It is a read-only Mapping for consumers; register() is the
single mutation point.
"""
from collections.abc import Mapping

from .arguments import Descriptor


class Registry(Mapping):
    """
    Mapping from form string to option descriptor (many-to-one).

    Invariant
    - every key is one of the forms listed by the descriptor it maps to.
    """

    def __init__(self):
        self._forms = {}
        # declaration order of logical options (identity, not forms)
        self._order = []

    def register(self, descriptor, /):
        """
        Index 'descriptor' under each of its forms and return it.

        Raises
        - TypeError: when 'descriptor' is not an option descriptor.
        """
        if not isinstance(descriptor, Descriptor):
            raise TypeError("register() argument must be an option descriptor")
        for form in descriptor.forms:
            self._forms[form] = descriptor
        if all(known is not descriptor for known in self._order):
            self._order.append(descriptor)
        return descriptor

    def lookup(self, form, /):
        """
        Return the descriptor registered for 'form', or None.
        """
        return self._forms.get(form)

    def forms(self, descriptor, /):
        """
        Forms of 'descriptor' that still resolve to it (shadowed ones are left out).
        """
        return tuple(form for form in descriptor.forms if self._forms.get(form) is descriptor)

    def descriptors(self):
        """
        Each logical option once, in declaration order.

        Descriptors whose forms were all taken over by later registrations are
        unreachable and therefore skipped.
        """
        return tuple(descriptor for descriptor in self._order if self.forms(descriptor))

    def __getitem__(self, form, /):
        return self._forms[form]

    def __iter__(self):
        return iter(self._forms)

    def __len__(self):
        return len(self._forms)

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self.descriptors()))

    def __rich_repr__(self):
        for descriptor in self.descriptors():
            yield descriptor


__all__ = (
    "Registry",
)
