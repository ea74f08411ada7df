"""
argbind parser: walk an argument vector and deliver values to sinks.

What this module provides
- Parser: binds a Registry to runtime options (shell/colorful/fancy) and parses
  argument vectors against it.
- parse(registry, argv, **options): convenience runner.

Algorithm (one forward pass; argv[0] is the program name and is stripped)
1. help short-circuit: any '-h'/'--help' token requests help, before anything else.
2. sufficiency: fewer tokens than required arguments is a fault.
3. empty input with no required arguments returns at once.
4. positional phase: position 0..N-1 takes the current token (which must not start
   with '-') plus length-1 following tokens.
5. named phase: each remaining token is looked up by name; its following 'length'
   tokens are consumed (none for flags, which receive the kind's marker).

States: ExpectHelp → ExpectPositional(0..N-1) → ExpectNamed (loops) → Done, with
any violation going to Failed. Failed has no recovery edge: the fault is raised,
or printed together with the full help before exiting in shell mode.

Quick start
    from argbind import Argument, Registry, Slot, parse

    registry = Registry("tool")
    path = Slot()
    count = Slot(1)
    registry.register(Argument("path", message="input file", sink=path))
    registry.register(Argument("-c", "--count", message="how many", kind=int, sink=count))

    parse(registry, ["tool", "notes.txt", "--count", "3"])
    # path.value == "notes.txt", count.value == 3
"""
import difflib
import os.path
import sys
from collections.abc import Iterable
from types import MappingProxyType

from rich.console import Console

from .faults import *
from .helper import render
from .registry import HELP_NAMES, Registry
from .sinks import collapse
from .utils import *


class Parser:
    """
    Parse argument vectors against a registry.

    Parameters
    - registry: Registry
    - shell: bool (keyword-only)
      When True, faults print their diagnostic and the full help, then exit with
      status 1; help requests print the help to stdout and exit with status 1.
      When False, faults are raised (HelpRequested for help requests).
    - colorful: bool (keyword-only); style diagnostics and help with the palette.
    - fancy: bool (keyword-only); draw diagnostics inside rich panels.
    """

    def __init__(self, registry, /, *, shell=False, colorful=False, fancy=False):
        if not isinstance(registry, Registry):
            raise TypeError("parser 'registry' must be a registry")
        self._registry = registry
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._tokens = []
        self._index = 0

    registry = property(lambda self: self._registry)
    shell = property(lambda self: self._shell)
    colorful = property(lambda self: self._colorful)
    fancy = property(lambda self: self._fancy)

    def format_help(self):
        """
        Plain help text for the bound registry.
        """
        return render(self._registry).plain

    def print_help(self, *, stderr=False):
        """
        Print the help screen (stdout unless stderr=True); never exits.
        """
        Console(stderr=stderr).print(render(self._registry, colorful=self._colorful))

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options merged in.

        Errors never return: they are raised, or printed followed by the help
        before exiting (shell mode). Warnings return after being emitted.
        """
        if isinstance(fault, ArgumentException):
            options["help"] = render(self._registry, colorful=self._colorful and self._shell)
        trigger(
            fault,
            **options,
            prog=self._registry.name,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def _hint(self):
        return "run '%s --help' to see the expected usage" % self._registry.name

    def _convert(self, argument, token, index):
        """
        convert one raw token with the argument's kind; failures become faults.
        """
        try:
            return argument.kind(token)
        except (ValueError, TypeError, ArithmeticError) as exception:
            self.trigger(UncastableValueError(
                "value %r at %s position cannot be converted to %s for argument %r" % (
                    token, ordinal(index + 1), argument.kind.name, argument.name
                ),
                title="uncastable value",
                code=FaultCode.UNCASTABLE_VALUE,
                input=token,
                index=index,
                argument=argument,
                exception=exception,
                hint="provide a valid %s value; %s" % (argument.kind.name, self._hint()),
            ))

    def _getvalues(self, argument, count):
        """
        consume and convert 'count' tokens following the current one.

        each token must exist and must not look like an option (leading '-');
        otherwise there are no more values to parse for this argument.
        """
        start = self._index
        values = []
        for _ in range(count):
            index = self._index + 1
            if index >= len(self._tokens) or self._tokens[index].startswith("-"):
                if argument.short_name:
                    label = "%r (%s)" % (argument.name, argument.short_name)
                else:
                    label = repr(argument.name)
                self.trigger(NotEnoughValuesError(
                    "no more values to parse for argument %s at %s position, expected %d value%s" % (
                        label, ordinal(start + 1), argument.length, "" if argument.length == 1 else "s"
                    ),
                    title="not enough values",
                    code=FaultCode.NOT_ENOUGH_VALUES,
                    input=self._tokens[start],
                    index=start,
                    argument=argument,
                    hint="add the missing value%s (values cannot start with '-'); %s" % (
                        "" if count == 1 else "s", self._hint()
                    ),
                ))
            self._index = index
            values.append(self._convert(argument, self._tokens[index], index))
        return values

    def _parse_positional(self, position):
        argument = self._registry.lookup_by_position(position)
        token = self._tokens[self._index]

        if token.startswith("-"):
            self.trigger(InvalidPositionalError(
                "invalid argument %r at %s position, expected a value for %r" % (
                    token, ordinal(self._index + 1), argument.name
                ),
                title="invalid positional",
                code=FaultCode.INVALID_POSITIONAL,
                input=token,
                index=self._index,
                argument=argument,
                hint="required values come first and cannot start with '-'; %s" % self._hint(),
            ))

        # the positional token is the first of the argument's values
        values = [self._convert(argument, token, self._index)]
        values.extend(self._getvalues(argument, argument.length - 1))
        self._index += 1
        return argument, values

    def _parse_named(self, namespace):
        token = self._tokens[self._index]
        argument = self._registry.lookup_by_name(token)

        # required arguments are matched by position only
        if argument is None or argument.required:
            suggestions = difflib.get_close_matches(token, [
                name for argument in self._registry.optionals for name in argument.names
            ] + list(HELP_NAMES), 5)
            try:
                hint = "did you mean %r? %s" % (suggestions[0], self._hint())
            except IndexError:
                hint = self._hint()
            self.trigger(UnrecognizedArgumentError(
                "unrecognized argument %r at %s position" % (token, ordinal(self._index + 1)),
                title="unrecognized argument",
                code=FaultCode.UNRECOGNIZED_ARGUMENT,
                input=token,
                index=self._index,
                suggestions=suggestions,
                hint=hint,
            ))

        if argument.name in namespace:
            self.trigger(RepeatedArgumentWarning(
                "argument %r at %s position was already provided, the last value wins" % (
                    token, ordinal(self._index + 1)
                ),
                title="repeated argument",
                code=FaultCode.REPEATED_ARGUMENT,
                input=token,
                index=self._index,
                argument=argument,
                hint="keep a single %r" % argument.name,
            ))

        if argument.flag:
            values = [argument.kind.mark(token)]
        else:
            values = self._getvalues(argument, argument.length)
        self._index += 1
        return argument, values

    def parse(self, argv=Unset, /):
        """
        Parse an argument vector (sys.argv when omitted).

        Returns
        - a read-only mapping from canonical argument name to the delivered value
          (scalar for one value, tuple for several) for every argument seen.

        Raises (outside shell mode)
        - HelpRequested, MissingPositionalsError, InvalidPositionalError,
          NotEnoughValuesError, UnrecognizedArgumentError, UncastableValueError.
        - TypeError when argv is not an iterable of strings.
        """
        if argv is Unset:
            argv = sys.argv
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        argv = list(argv)
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("parse() argument must be an iterable of strings")

        if argv and argv[0]:
            self._registry.name = os.path.basename(argv[0])

        self._tokens = argv[1:]
        self._index = 0
        namespace = {}

        # ExpectHelp
        for index, token in enumerate(self._tokens):
            if token in HELP_NAMES:
                self.trigger(HelpRequested(
                    "help requested at %s position" % ordinal(index + 1),
                    title="help",
                    code=FaultCode.HELP_REQUESTED,
                    input=token,
                    index=index,
                ))

        if len(self._tokens) < self._registry.required:
            missing = [argument.name for argument in self._registry.positionals[len(self._tokens):]]
            self.trigger(MissingPositionalsError(
                "%d required argument%s expected but %d given, missing %s" % (
                    self._registry.required,
                    "" if self._registry.required == 1 else "s",
                    len(self._tokens),
                    ", ".join(map(repr, missing)),
                ),
                title="missing positionals",
                code=FaultCode.MISSING_POSITIONALS,
                missing=missing,
                hint="add the missing values in order; %s" % self._hint(),
            ))

        if not self._tokens:
            return MappingProxyType(namespace)

        # ExpectPositional(i)
        for position in range(self._registry.required):
            if self._index >= len(self._tokens):
                missing = [argument.name for argument in self._registry.positionals[position:]]
                self.trigger(MissingPositionalsError(
                    "required argument%s %s missing at %s position" % (
                        "" if len(missing) == 1 else "s", ", ".join(map(repr, missing)), ordinal(self._index + 1)
                    ),
                    title="missing positionals",
                    code=FaultCode.MISSING_POSITIONALS,
                    missing=missing,
                    hint="add the missing values in order; %s" % self._hint(),
                ))
            argument, values = self._parse_positional(position)
            argument(*values)
            namespace[argument.name] = collapse(values)

        # ExpectNamed
        while self._index < len(self._tokens):
            argument, values = self._parse_named(namespace)
            argument(*values)
            namespace[argument.name] = collapse(values)

        return MappingProxyType(namespace)

    def __repr__(self):
        return "parser(registry=%r, shell=%r, colorful=%r, fancy=%r)" % (
            self._registry, self._shell, self._colorful, self._fancy
        )


def parse(registry, argv=Unset, /, **options):
    """
    Convenience runner: Parser(registry, **options).parse(argv).
    """
    return Parser(registry, **options).parse(argv)


__all__ = (
    "Parser",
    "parse",
)
