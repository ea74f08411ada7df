"""
argbind value kinds.

A Kind is the tagged variant that tells the parser how to turn a raw token into
a value and which value marks the mere presence of a flag (length 0).

Built-ins
- STRING: identity; flag marker is the flag token itself.
- INT:    base-10 integer; flag marker 1.
- FLOAT:  decimal float; flag marker 1.0.
- DOUBLE: decimal float (Python floats are doubles); flag marker 1.0.
- BOOL:   integer, then non-zero test ("0" → False, "3" → True); flag marker True.

Extending
    >>> import pathlib
    >>> PATH = Kind("path", pathlib.Path)
    >>> PATH("/tmp")
    PosixPath('/tmp')

Conversion is strict and locale-independent: tokens must be ASCII decimal literals
(no digit separators, no surrounding whitespace, no inf/nan) before int()/float()
see them.
"""
import re

from .utils import *

_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?", re.ASCII)


def _integer(token, /):
    if not _INTEGER.fullmatch(token):
        raise ValueError(f"invalid integer literal: {token!r}")
    return int(token, 10)


def _decimal(token, /):
    if not _DECIMAL.fullmatch(token):
        raise ValueError(f"invalid decimal literal: {token!r}")
    return float(token)


def _boolean(token, /):
    return _integer(token) != 0


class Kind:
    """
    Value kind: a display name, a converter and a flag presence marker.

    Parameters
    - name: str
      Label shown in help ("<int>", "<3 ints>"). Must be non-empty.
    - converter: Callable[[str], T]
      Applied to every consumed token. Any ValueError/TypeError/ArithmeticError it
      raises is reported by the parser as an uncastable value.
    - marker: Callable[[str], T] | Unset
      Produces the value delivered for a flag (length 0); receives the flag token.
      Defaults to always True.
    """

    __slots__ = ("_name", "_converter", "_marker")

    def __init__(self, name, converter, /, marker=Unset):
        if not isinstance(name, str):
            raise TypeError("kind 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("kind 'name' cannot be empty")
        if not callable(converter):
            raise TypeError("kind 'converter' must be callable")
        if marker is not Unset and not callable(marker):
            raise TypeError("kind 'marker' must be callable")
        self._name = name
        self._converter = converter
        self._marker = coalesce(marker, lambda token: True)

    @property
    def name(self):
        return self._name

    @property
    def converter(self):
        return self._converter

    def __call__(self, token, /):
        """
        Convert a single raw token.
        """
        return self._converter(token)

    def mark(self, token, /):
        """
        Return the presence marker for a flag spelled as 'token'.
        """
        return self._marker(token)

    @classmethod
    def of(cls, object, /):
        """
        Resolve a Kind or one of the supported Python types into a Kind.

        str → STRING, int → INT, float → DOUBLE, bool → BOOL.
        """
        if isinstance(object, Kind):
            return object
        try:
            return _builtins[object]
        except (KeyError, TypeError):
            raise TypeError("kind must be a Kind or one of str, int, float, bool") from None

    def __repr__(self):
        return f"kind({self._name!r})"

    def __rich_repr__(self):
        yield self._name


STRING = Kind("string", str, lambda token: token)
INT = Kind("int", _integer, lambda token: 1)
FLOAT = Kind("float", _decimal, lambda token: 1.0)
DOUBLE = Kind("double", _decimal, lambda token: 1.0)
BOOL = Kind("bool", _boolean, lambda token: True)

_builtins = {
    str: STRING,
    int: INT,
    float: DOUBLE,
    bool: BOOL,
}


__all__ = (
    "Kind",
    "STRING",
    "INT",
    "FLOAT",
    "DOUBLE",
    "BOOL",
)
