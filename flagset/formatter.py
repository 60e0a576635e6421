"""
Flagset usage rendering (rich).

Layout
    usage: <prog> [flags]
    <description>

    flags:
      -h, --help          show this help message (default: false)
      -p, --port <int>    port to listen on (default: 8080)

Palette keys
- usage-label, program-name, usage-section, description-section
- group-label, flag-name, switch-name, metavar
- argument-description, default-label, default-value
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Define __prog__ in __main__ to override the program name.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset
from .values import Kind

# Widest names column before descriptions move to their own line.
MAX_INDENT = 30


def render_usage(flagset, console=Unset, /):
    """
    Build the usage renderable for a FlagSet.

    Parameters
    - flagset: the registry to describe (flags are listed in declaration order).
    - console: used to measure the width for wrapping; a default Console when omitted.

    Returns
    - rich renderable (Group, or Panel when the registry is fancy).
    """
    if console is Unset:
        console = Console()

    main = __import__("__main__")
    colorful = flagset.colorful

    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Groups / flags ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "flag-name": "bold #00E6FF",  # CYAN for value-taking flags
        "switch-name": "bold #22C55E",  # GREEN for boolean switches
        "metavar": "bold #FFD600",  # AMBER for value types
        "argument-description": "#9CA3AF",  # Muted gray
        "default-label": "#737373",
        "default-value": "#D1D5DB",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    width = console.width - 4 * flagset.fancy  # panel gutters
    prog = getattr(main, "__prog__", flagset.name)

    renders = []

    usage = Text()
    usage.append(text("usage", styler("usage-label"))).append(":")
    usage.append(" ")
    usage.append(text(prog, styler("program-name")))
    if len(flagset):
        usage.append(" ")
        usage.append(text("[flags]", styler("usage-section")))
    renders.append(usage)

    if flagset.descr:
        renders.append(text(flagset.descr, styler("description-section")))

    def names(flag):
        style = styler("switch-name" if flag.kind is Kind.BOOL else "flag-name")
        column = Text()
        if flag.short is not None:
            column.append(text("-" + flag.short, style)).append(", ")
        column.append(text("--" + flag.name, style))
        if flag.kind is not Kind.BOOL:
            column.append(" ").append(text("<%s>" % flag.kind.typename, styler("metavar")))
        return column

    def description(flag):
        default = flag.default.render()
        if flag.kind is Kind.STRING:
            default = default or '""'
        descr = Text()
        if flag.usage:
            descr.append(text(flag.usage, styler("argument-description"))).append(" ")
        descr.append(text("(default: ", styler("default-label")))
        descr.append(text(default, styler("default-value")))
        descr.append(text(")", styler("default-label")))
        return descr

    padding = 2
    columns = [(names(flag), description(flag)) for flag in flagset]
    indent = min(max((padding + len(column) + 2 for column, _ in columns), default=0), MAX_INDENT)

    section = Text()
    section.append(text("flags", styler("group-label"))).append(":")
    for column, descr in columns:
        section.append("\n").append(" " * padding).append(column)
        # Hanging indent: break before the description when the names column is too wide.
        if padding + len(column) + 2 > indent:
            section.append("\n").append(" " * indent)
        else:
            section.append(" " * (indent - padding - len(column)))
        wrapped = descr.wrap(console, max(width - indent, 10))
        try:
            section.append(wrapped.pop(0))
        except IndexError:
            pass
        for line in wrapped:
            section.append("\n").append(" " * indent).append(line)

    if columns:
        renders.append(Text(""))
        renders.append(section)

    renderable = Group(*renders)

    if flagset.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{prog} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    return renderable


__all__ = (
    "render_usage",
)
