r"""
argbind argument specifications and the argument decorator.

Overview
- Argument: a declared parameter. Required (positional) when declared with a bare
  name, optional (named) when declared with dash-prefixed names.
    • Argument("file", message="input file")                      # required
    • Argument("--count", message="how many", kind=int)           # named, long only
    • Argument("-c", "--count", message="how many", kind=int)     # named, short + long
    • Argument("-v", "--verbose", kind=bool, length=0)            # flag
- @argument(...): build an Argument and bind the decorated function as its sink.

Metadata (sanitized on construction)
- names: one bare name, one dashed name, or a short/long pair.
  • long names: at least 3 characters, r"--[^\W\d_](-?[^\W_]+)*"
  • short names: exactly 2 characters, r"-[^\W\d_]"
  • bare names: r"[^\W\d][\w-]*"
- message: str, shown in help (may be empty).
- kind: Kind | str | int | float | bool (see argbind.kinds).
- sink: None | callable | object implementing __accept__ (see argbind.sinks).
- length: int >= 0; 0 marks a flag and is forbidden for required arguments.

Introspection & representation
- ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields listed in __introspectable__ as read-only properties.
- Calling an Argument with converted values delivers them to its sink.

Positional indices are not chosen here: a Registry assigns them on registration
and stores its own copy (copy.replace(argument, positional=index)).
"""
import functools
import operator
import re
from types import MethodType

from .kinds import Kind
from .sinks import accepts, deliver
from .utils import *

_LONG = re.compile(r"--[^\W\d_](-?[^\W_]+)*")
_SHORT = re.compile(r"-[^\W\d_]")
_BARE = re.compile(r"[^\W\d][\w-]*")


class ArgumentType(type):
    """
    Metaclass that turns argument specs into introspectable descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(name='--count', short_name='-c', kind=kind('int'), ...)
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the declared names and classify them.

    Outcome (written back into metadata)
    - name: canonical name (the long one when both are given).
    - short_name: the short alias, or None.
    - required: True for a single bare name.

    Raises
    - TypeError: wrong number of names, or non-string names.
    - ValueError: empty names, long names under 3 characters, short names not
      exactly 2 characters, malformed names, or an invalid pairing.
    """
    names = metadata.pop("names")
    if not 1 <= len(names) <= 2:
        raise TypeError(f"{cls.__typename__} takes one or two names but {len(names)} were given")

    longs, shorts, bares = [], [], []
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not name:
            raise ValueError(f"{cls.__typename__} name must not be an empty string")
        elif name.startswith("--"):
            if len(name) < 3:
                raise ValueError(f"{cls.__typename__} {name!r} name must be at least 3 characters long (--<name>)")
            if not _LONG.fullmatch(name):
                raise ValueError(f"{cls.__typename__} {name!r} is not a valid long name")
            longs.append(name)
        elif name.startswith("-"):
            if len(name) != 2:
                raise ValueError(f"{cls.__typename__} {name!r} shorthand must be exactly 2 characters long (-<letter>)")
            if not _SHORT.fullmatch(name):
                raise ValueError(f"{cls.__typename__} {name!r} is not a valid shorthand")
            shorts.append(name)
        else:
            if not _BARE.fullmatch(name):
                raise ValueError(f"{cls.__typename__} {name!r} is not a valid positional name")
            bares.append(name)

    if len(names) == 1:
        metadata["name"], = names
        metadata["short_name"] = None
        metadata["required"] = bool(bares)
        return

    if bares:
        raise ValueError(f"required {cls.__typename__} {bares[0]!r} cannot have a short name")
    if len(longs) != 1 or len(shorts) != 1:
        raise ValueError(f"{cls.__typename__} names must be one short name and one long name")

    metadata["name"], = longs
    metadata["short_name"], = shorts
    metadata["required"] = False


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate message, kind, sink and length.

    - message: string (trimmed); defaults to "".
    - kind: resolved through Kind.of (str/int/float/bool or a Kind instance).
    - sink: None, a callable, or an object implementing __accept__. When the sink
      exposes an integer 'capacity', it must hold at least 'length' values.
    - length: non-negative integer; 0 (flag) is only valid for named arguments.
    """
    if not isinstance(message := metadata["message"], str):
        raise TypeError(f"{cls.__typename__} 'message' must be a string")
    metadata["message"] = message.strip()

    metadata["kind"] = Kind.of(metadata["kind"])

    if isinstance(length := metadata["length"], bool) or not isinstance(length, int):
        raise TypeError(f"{cls.__typename__} 'length' must be an integer")
    elif length < 0:
        raise ValueError(f"{cls.__typename__} 'length' cannot be negative")
    elif length == 0 and metadata["required"]:
        raise ValueError(f"required {cls.__typename__} {metadata['name']!r} must consume at least one value")

    if not accepts(sink := metadata["sink"]):
        raise TypeError(f"{cls.__typename__} 'sink' must be callable or implement __accept__")
    if isinstance(capacity := getattr(sink, "capacity", None), int) and capacity < max(length, 1):
        raise ValueError(
            f"{cls.__typename__} {metadata['name']!r} sink holds {capacity} values but {length} are expected"
        )


class Argument(metaclass=ArgumentType):
    """
    A declared command-line parameter.

    Properties
    - name: canonical identifier ("--count", "-v" when only a short name is given,
      or the bare positional name).
    - short_name: one-letter alias ("-c") or None.
    - names: every declared spelling, short first.
    - message: description rendered in help.
    - kind: value kind (argbind.kinds.Kind).
    - sink: where converted values are delivered (may be None).
    - length: number of tokens consumed; 0 for flags.
    - required: True for bare-named (positional) arguments.
    - positional: index among required arguments once registered, else -1.

    Instances are immutable; use copy.replace() to derive a modified copy.
    """

    __introspectable__ = (
        "name",
        "short_name",
        "message",
        "kind",
        "length",
        "required",
        "positional",
    )

    __displayable__ = (
        "name",
        "short_name",
        "kind",
        "length",
        "required",
        "positional",
    )

    def __init__(self, *names, message="", kind=str, sink=None, length=1):
        metadata = {
            "names": names,
            "message": message,
            "kind": kind,
            "sink": sink,
            "length": length,
        }
        _sanitize_names(type(self), metadata)
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._positional = -1

    @property
    def sink(self):
        # Not mirrored: a Buffer sink must come back as itself, not as a copy.
        return self._sink

    @property
    def names(self):
        return tuple(name for name in (self._short_name, self._name) if name)

    @property
    def flag(self):
        """
        True for named arguments that consume no value.
        """
        return not self._required and self._length == 0

    def __call__(self, *values):
        """
        Deliver converted values to the bound sink.
        """
        deliver(self._sink, values)

    def __argument__(self):
        """
        Introspection hook: identify this spec as an Argument.
        """
        return self

    def __replace__(self, *unused, **overrides):
        """
        Build a copy with some fields replaced (message, kind, sink, length, positional).

        The copy is validated like a freshly declared argument; a positional index
        is only meaningful for required arguments.
        """
        assert not unused, "positional arguments are not allowed"
        if unknown := overrides.keys() - {"message", "kind", "sink", "length", "positional"}:
            raise TypeError(f"{type(self).__typename__} cannot replace {', '.join(sorted(unknown))}")

        clone = type(self)(
            *self.names,
            message=overrides.get("message", self._message),
            kind=overrides.get("kind", self._kind),
            sink=overrides.get("sink", self._sink),
            length=overrides.get("length", self._length),
        )

        positional = overrides.get("positional", self._positional)
        if isinstance(positional, bool) or not isinstance(positional, int):
            raise TypeError(f"{type(self).__typename__} 'positional' must be an integer")
        elif positional < -1 or (positional >= 0 and not clone.required):
            raise ValueError(f"{type(self).__typename__} {clone.name!r} cannot take positional index {positional}")
        clone._positional = positional
        return clone


def argument(*args, **kwargs):
    """
    Decorator/factory binding a handler function as an Argument's sink.

    Usage
        >>> @argument("-r", "--range", message="window", kind=int, length=2)
        ... def on_range(start, stop): ...

    Behavior
    - The decorated function becomes the sink; it receives the converted values
      as positional arguments.
    - Returns the configured Argument (registrable as-is).
    - Enforces single application and forbids an explicit 'sink'.

    Parameters
    - *args, **kwargs: forwarded to Argument(...) (names, message, kind, length).
    """
    if "sink" in kwargs:
        raise TypeError("@argument() binds the decorated function as sink; 'sink' is not allowed")
    spec = Argument(*args, **kwargs)

    @rename("argument")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@argument() must be applied to a callable")
        if spec._sink is not None:  # NOQA: E-501
            raise TypeError("@argument() must be applied only once")
        spec._sink = callback
        return spec

    # Advertise SupportsArgument so the undecorated factory can still be registered.
    wrapper.__argument__ = MethodType(rename(lambda self: spec, "__argument__"), wrapper)
    return wrapper


__all__ = (
    "Argument",
    "argument",
)

# The metaclass is an implementation detail of this module.
del ArgumentType
