"""
argbind sinks: where converted values go.

A sink is the capability an Argument writes through. The parser never touches
caller memory directly; it hands the converted values to the sink, which decides
how to store them.

Protocol
- Any object implementing __accept__(self, values, /), where values is a tuple of
  converted values (exactly 'length' items, or a single marker for flags).
- Any plain callable, which receives the values as positional arguments.
- deliver(sink, values) dispatches between the two.

Provided sinks
- Slot:      holds the last delivered value in .value (scalar or tuple).
- Buffer:    fixed-length storage written from its head, bounds-checked.
- Attribute: setattr(target, name, value) on a caller-owned object.
- Item:      mapping[key] = value on a caller-owned mapping.

Single values are stored as scalars; multiple values as tuples (see collapse()).
"""
from collections.abc import Sequence


def collapse(values, /):
    """
    Return the sole element of a one-item sequence, otherwise a tuple.
    """
    values = tuple(values)
    return values[0] if len(values) == 1 else values


class Slot:
    """
    Scalar holder.

    >>> slot = Slot(0)
    >>> deliver(slot, (42,))
    >>> slot.value
    42
    """

    __slots__ = ("value",)

    def __init__(self, default=None, /):
        self.value = default

    def __accept__(self, values, /):
        self.value = collapse(values)

    def __repr__(self):
        return f"slot({self.value!r})"


class Buffer(Sequence):
    """
    Fixed-length storage for multi-valued arguments.

    Built from a size (filled with the default) or from an initial iterable.
    Deliveries write successive elements starting at the head; writing more
    values than the capacity raises IndexError and leaves the buffer untouched.
    """

    __slots__ = ("_items",)

    def __init__(self, source, /, default=None):
        if isinstance(source, bool | str) or not isinstance(source, int | Sequence):
            raise TypeError("buffer source must be a size or a sequence")
        if isinstance(source, int):
            if source < 1:
                raise ValueError("buffer size must be a positive integer")
            self._items = [default] * source
        else:
            if not source:
                raise ValueError("buffer cannot be empty")
            self._items = list(source)

    @property
    def capacity(self):
        return len(self._items)

    def __accept__(self, values, /):
        values = tuple(values)
        if len(values) > self.capacity:
            raise IndexError("buffer of capacity %d cannot hold %d values" % (self.capacity, len(values)))
        self._items[:len(values)] = values

    def __getitem__(self, index, /):
        return self._items[index]

    def __len__(self):
        return len(self._items)

    def __eq__(self, other, /):
        if isinstance(other, Sequence) and not isinstance(other, str):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"buffer({self._items!r})"


class Attribute:
    """
    Write-through to an attribute of a caller-owned object.

    >>> class Options: verbose = False
    >>> options = Options()
    >>> deliver(Attribute(options, "verbose"), (True,))
    >>> options.verbose
    True
    """

    __slots__ = ("_target", "_name")

    def __init__(self, target, name, /):
        if not isinstance(name, str):
            raise TypeError("attribute name must be a string")
        elif not name.isidentifier():
            raise ValueError("attribute name must be a valid identifier")
        self._target = target
        self._name = name

    def __accept__(self, values, /):
        setattr(self._target, self._name, collapse(values))

    def __repr__(self):
        return f"attribute({type(self._target).__name__}.{self._name})"


class Item:
    """
    Write-through to a key of a caller-owned mutable mapping.
    """

    __slots__ = ("_mapping", "_key")

    def __init__(self, mapping, key, /):
        if not hasattr(mapping, "__setitem__"):
            raise TypeError("item mapping must support item assignment")
        self._mapping = mapping
        self._key = key

    def __accept__(self, values, /):
        self._mapping[self._key] = collapse(values)

    def __repr__(self):
        return f"item({self._key!r})"


def accepts(sink, /):
    """
    Tell whether 'sink' can be delivered to (None counts: nothing is written).
    """
    if sink is None:
        return True
    return callable(getattr(sink, "__accept__", None)) or callable(sink)


def deliver(sink, values, /):
    """
    Hand converted values to a sink.

    contract
    - None: nothing happens (the parse result still carries the value).
    - objects with __accept__ receive the tuple of values.
    - plain callables receive the values as positional arguments.
    """
    values = tuple(values)
    if sink is None:
        return
    if callable(accept := getattr(sink, "__accept__", None)):
        accept(values)
    elif callable(sink):
        sink(*values)
    else:
        raise TypeError("deliver() sink must implement __accept__ or be callable")


__all__ = (
    "Slot",
    "Buffer",
    "Attribute",
    "Item",
    "accepts",
    "deliver",
    "collapse",
)
