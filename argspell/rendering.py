"""
Argspell presentation: usage/help text and fault reports.

What this module provides
- render_usage(parser) / render_help(parser): rich Text renderings of the
  declared options. Styles apply only when colorful rendering is requested.
- format_usage(parser) / format_help(parser): the same content as plain strings.
- report(fault): print a fault's rich rendering to stderr. Never exits.

Layout
- usage:
    <program>
    Legend: I=integer; D=decimal; T=text; S=custom string; *=required;
    Usage:[ <executable>] spelling+marker [spelling+marker] ...
  Required options are bare, optional ones are bracketed. Only the first
  spelling of each option is shown.
- help: usage, then one line per entry in declaration order. An option line
  lists every spelling+marker followed by a space, is padded to the parser's
  indentation (or broken onto a new, indented line when longer), then shows
  "*" for required options and the description. Sections print their title.
  A final empty line closes the text.

Palette keys
- program-name, legend, usage-label, executable, spelling, marker,
  required-mark, deprecated-mark, description, section-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
"""
import copy
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .options import Option, Section
from .utils import *

_stderr = Console(stderr=True)

LEGEND = "Legend: I=integer; D=decimal; T=text; S=custom string; *=required;"


def _styling(colorful, /):
    styles = defaultdict(str, {
        # === Head sections ===
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "legend": "#737373",  # Dim gray
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "executable": "bold #36C5F0",  # SKY-BLUE

        # === Options ===
        "spelling": "bold #00E6FF",  # CYAN for spellings
        "marker": "bold #FFD600",  # AMBER for type markers
        "required-mark": "bold #EF4444",  # RED asterisk
        "deprecated-mark": "bold #F97316",  # ORANGE
        "description": "#9CA3AF",  # Muted gray

        # === Sections ===
        "section-title": "bold #FFFFFF",  # Pure white headers
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        # Normalize to Rich Text. In non-colorful mode, strip styles; preserve existing Text spans.
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def render_usage(parser, /, *, colorful=Unset):
    """
    Build the usage block of a parser as rich Text (ends with a newline).
    """
    styler, text = _styling(coalesce(colorful, parser.colorful))

    usage = Text()
    usage.append(text(parser.program, styler("program-name"))).append("\n")
    usage.append(text(LEGEND, styler("legend"))).append("\n")
    usage.append(text("Usage", styler("usage-label"))).append(":")

    if parser.executable_name is not None:
        usage.append(" ").append(text(parser.executable_name, styler("executable")))

    for option in filter(lambda x: isinstance(x, Option) and not x.hidden, parser.entries):
        usage.append(" ")
        if not option.required:
            usage.append("[")
        usage.append(text(option.spellings[0], styler("spelling")))
        usage.append(text(option.marker, styler("marker")))
        if not option.required:
            usage.append("]")

    return usage.append("\n")


def render_help(parser, /, *, colorful=Unset):
    """
    Build the full help text of a parser as rich Text.
    """
    styler, text = _styling(colorful := coalesce(colorful, parser.colorful))

    help = render_usage(parser, colorful=colorful)
    indent = parser.indent

    for entry in parser.entries:
        if isinstance(entry, Section):
            help.append(text(entry.title, styler("section-title"))).append("\n")
            continue
        if entry.hidden:
            continue

        line = Text("  ")
        for spelling in entry.spellings:
            line.append(text(spelling, styler("spelling")))
            line.append(text(entry.marker, styler("marker")))
            line.append(" ")

        # Column-align the description, or break the line when the spellings overflow.
        if len(line) <= indent:
            line.append(" " * (indent - len(line)))
        else:
            line.append("\n").append(" " * indent)

        if entry.required:
            line.append(text("*", styler("required-mark")))
        if entry.deprecated:
            line.append(text("(deprecated)", styler("deprecated-mark"))).append(" ")
        if entry.descr:
            line.append(text(entry.descr, styler("description")))

        help.append(line).append("\n")

    return help.append("\n")


def format_usage(parser, /):
    return render_usage(parser, colorful=False).plain


def format_help(parser, /):
    return render_help(parser, colorful=False).plain


def report(fault, /, *, console=Unset, **options):
    """
    Print a fault (exception or warning) with rich styling.

    options are merged into the fault via copy.replace() before rendering;
    recognized ones are program, colorful and fancy. The process is never
    terminated here: deciding to exit is up to the caller.
    """
    if not callable(getattr(fault, "__replace__", None)) or not callable(getattr(fault, "__rich__", None)):
        raise TypeError("report() argument must have __replace__ and __rich__ methods")
    coalesce(console, _stderr).print(copy.replace(fault, **options))


__all__ = (
    "LEGEND",
    "render_usage",
    "render_help",
    "format_usage",
    "format_help",
    "report",
)
