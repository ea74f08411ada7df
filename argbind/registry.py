"""
argbind registry: the set of declared arguments.

Overview
- One heterogeneous collection keyed by long name and (for named arguments) short
  name, so a token is resolved with a single lookup whatever the value kind.
- Required arguments additionally live in a dense list indexed by their positional
  index, assigned from a counter owned by the registry instance. Independent
  registries never share or disturb each other's numbering.
- Name collisions are detected at registration time, across every kind.

Quick example
    >>> registry = Registry("tool", "does things")
    >>> stored = registry.register(Argument("file", message="input file"))
    >>> stored.positional
    0
    >>> registry.lookup_by_position(0) is stored
    True
"""
import copy
import os.path
import sys

from .arguments import Argument
from .utils import *

# Reserved for the built-in help entry.
HELP_NAMES = ("-h", "--help")


class Registry:
    """
    Registry of declared arguments.

    Parameters
    - name: str | Unset
      Program name shown in usage. Defaults to the basename of sys.argv[0].
    - description: str | Unset
      Free-text description shown in help.

    Properties
    - required: number of required (positional) arguments registered so far.
    - positionals: required arguments in positional order.
    - optionals: named arguments in registration order.
    """

    def __init__(self, name=Unset, description=Unset, /):
        if not isinstance(name, str | Unset):
            raise TypeError("registry 'name' must be a string")
        if not isinstance(description, str | Unset):
            raise TypeError("registry 'description' must be a string")
        self.name = coalesce(name, os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "")
        self.description = coalesce(description, "").strip()
        self._arguments = {}
        self._positionals = []
        self._order = []

    @property
    def required(self):
        return len(self._positionals)

    @property
    def positionals(self):
        return tuple(self._positionals)

    @property
    def optionals(self):
        return tuple(argument for argument in self._order if not argument.required)

    def register(self, argument, /):
        """
        Add an argument and return the stored copy.

        behavior
        - accepts an Argument or anything supporting __argument__() (e.g. an
          unapplied @argument(...) factory).
        - rejects names already in use (long or short, regardless of kind) and the
          reserved help names; the registry is left unchanged on failure.
        - required arguments receive the next positional index.

        raises
        - TypeError: not an argument.
        - ValueError: name conflict.
        """
        if not isinstance(argument, Argument):
            hook = getattr(argument, "__argument__", None)
            if not callable(hook) or not isinstance(argument := hook(), Argument):
                raise TypeError("register() argument must be an argument")

        for name in argument.names:
            if name in HELP_NAMES:
                raise ValueError(f"argument name {name!r} is reserved for the built-in help")
            if name in self._arguments:
                raise ValueError(f"argument with name {name!r} is in conflict with an already registered argument")

        if argument.required:
            argument = copy.replace(argument, positional=len(self._positionals))
            self._positionals.append(argument)
        elif argument.positional != -1:
            argument = copy.replace(argument, positional=-1)

        self._arguments.update(dict.fromkeys(argument.names, argument))
        self._order.append(argument)
        return argument

    def lookup_by_name(self, key, /):
        """
        Exact-match lookup by long or short name; None when unknown.
        """
        return self._arguments.get(key)

    def lookup_by_position(self, index, /):
        """
        Required argument at 'index'; None when out of range.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._positionals):
            return None
        return self._positionals[index]

    def __contains__(self, name, /):
        return name in self._arguments

    def __iter__(self):
        return iter(tuple(self._order))

    def __len__(self):
        return len(self._order)

    def __repr__(self):
        return "registry(name=%r, required=%d, arguments=%d)" % (self.name, self.required, len(self))


__all__ = (
    "Registry",
    "HELP_NAMES",
)
