"""
argbind help/usage rendering.

render() is pure: it builds a rich Text from a registry and never prints or exits.
format_help() flattens it to plain text. Printing and terminating are decided by
the parser (see Parser.print_help and HelpRequested).

Layout
    Usage : <prog> <required names> <optional names>

    Description: <description>

    Required Arguments:
      file                     - input file <string>

    Optional Arguments:
      -c, --count              - how many <int>
      -h, --help               - show this help message and exit

Ordering rules
- required arguments: positional order.
- optional arguments: de-duplicated by canonical name (the built-in help entry
  included), sorted by name with leading dashes stripped, ties by full name.

Palette keys (override through __styles__ in __main__, honored when colorful=True)
- usage-label, program-name, description-section, group-label,
  positional-name, option-name, argument-description, kind
"""
from collections import defaultdict, namedtuple

from rich.text import Text

from .utils import pluralize

_Entry = namedtuple("_Entry", ("name", "short_name", "message", "tag"))

# Name column width (short and long names, padded).
COLUMN = 24

HELP_ENTRY = _Entry("--help", "-h", "show this help message and exit", "")


def _tag(argument, /):
    """
    kind/arity label: nothing for flags, <int> for one value, <3 ints> for several.
    """
    if argument.length == 0:
        return ""
    if argument.length == 1:
        return f"<{argument.kind.name}>"
    return f"<{argument.length} {pluralize(argument.kind.name)}>"


def _entries(registry, /):
    required = [
        _Entry(argument.name, None, argument.message, _tag(argument))
        for argument in registry.positionals
    ]

    optionals = {}
    for argument in registry.optionals:
        optionals.setdefault(argument.name, _Entry(argument.name, argument.short_name, argument.message, _tag(argument)))
    optionals.setdefault(HELP_ENTRY.name, HELP_ENTRY)

    return required, sorted(optionals.values(), key=lambda entry: (entry.name.lstrip("-"), entry.name))


def render(registry, /, *, colorful=False):
    """
    Render the help screen of 'registry' as a rich Text.

    parameters
    - registry: Registry
    - colorful: bool (keyword-only); when False the result carries no styles.

    returns
    - rich.text.Text; identical for identical registries.
    """
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray
        "group-label": "bold #FFFFFF",  # Pure white headers
        "positional-name": "bold #FFD600",  # AMBER for positionals
        "option-name": "bold #00E6FF",  # CYAN for named arguments
        "argument-description": "#9CA3AF",  # Muted gray
        "kind": "bold #22C55E",  # GREEN for kind labels
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    required, optionals = _entries(registry)

    def section(label, entries, style):
        text = Text()
        text.append(label, styler("group-label")).append(":\n")
        for entry in entries:
            names = entry.name if not entry.short_name else f"{entry.short_name}, {entry.name}"
            text.append("  ").append(names, styler(style))
            text.append(" " * max(COLUMN - len(names), 0)).append(" - ")
            body = Text(" ").join(
                fragment for fragment in (
                    Text(entry.message, styler("argument-description")),
                    Text(entry.tag, styler("kind")),
                ) if fragment
            )
            text.append_text(body)
            text.rstrip()
            text.append("\n")
        return text

    output = Text()
    output.append("Usage", styler("usage-label")).append(" : ")
    output.append(registry.name, styler("program-name"))
    for entry in (*required, *optionals):
        output.append(" ").append(entry.name)
    output.append("\n\n")

    if registry.description:
        output.append("Description: ").append(registry.description, styler("description-section")).append("\n\n")

    if required:
        output.append_text(section("Required Arguments", required, "positional-name"))
        output.append("\n")

    output.append_text(section("Optional Arguments", optionals, "option-name"))
    output.rstrip()
    return output


def format_help(registry, /):
    """
    Render the help screen of 'registry' as plain text.
    """
    return render(registry).plain


__all__ = (
    "render",
    "format_help",
)
