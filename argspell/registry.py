"""
Argspell option registry: ordered storage, token dispatch and lookups.

Responsibilities
- Keep every declared entry (options and help sections) in declaration order.
- For a token, find the first option whose matches() accepts it and hand the
  token over to that option's assign().
- Look options up by name (optionally restricted to one Kind).
- Fan out validation and reset to every option, in declaration order.

Dispatch order
- Entries are scanned in the order they were declared, whatever their kind;
  sections are skipped. The first match wins, so when two options accept the
  same token the earlier declaration takes it.

Unmatched tokens
- A token equal to the bare spelling of a value-bearing option (e.g. "-e="
  for an option spelled "-e=") is reported as MissingValueError, in both
  strict and permissive mode.
- Anything else unmatched is returned as None so the caller can either fail
  (strict) or keep it as a positional argument (permissive).
"""
from .faults import *
from .options import Option, Section, Kind
from .utils import *


class Registry:
    """
    Ordered, immutable collection of option declarations.
    """

    def __init__(self, entries, /):
        for entry in (entries := tuple(entries)):
            if not isinstance(entry, Option | Section):
                raise TypeError("registry entries must be options or sections")
        self._entries = entries
        self._options = tuple(entry for entry in entries if isinstance(entry, Option))

    entries = mirror("entries")
    options = mirror("options")

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __contains__(self, name):
        return any(option.name == name for option in self._options)

    def find(self, token, /):
        """
        Return the first option accepting `token`, or None.
        """
        for option in self._options:
            if option.matches(token):
                return option
        return None

    def dispatch(self, token, /):
        """
        Assign `token` to the option that accepts it.

        Returns
        - the option that took the token, or None when no option matched.

        Raises
        - MissingValueError: the token is the bare spelling of a value-bearing
          option.
        - any parsing fault raised by the option's assign().
        """
        if (option := self.find(token)) is not None:
            option.assign(token)
            return option

        for option in self._options:
            if option.kind is not Kind.SWITCH and token in option.spellings:
                raise MissingValueError(name=option.name, spelling=token, token=token)
        return None

    def lookup(self, name, /, kind=Unset):
        """
        Return the first option named `name` (of `kind`, when given).

        Raises
        - NameNotFoundError: no such option.
        """
        for option in self._options:
            if option.name == name and (kind is Unset or option.kind is kind):
                return option
        raise NameNotFoundError(name=name, kind="declared" if kind is Unset else kind.name.lower())

    def validate(self):
        for option in self._options:
            option.check_validity()

    def reset(self):
        for option in self._options:
            option.reset()


__all__ = (
    "Registry",
)
