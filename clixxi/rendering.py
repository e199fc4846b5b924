"""
Shared rich helpers for the help/version renderers.

Palette
- Every renderer starts from its own default palette; a mapping named __styles__
  in __main__ overrides any entry (same keys, rich style strings).
- When colorful is False, styles are suppressed and output is plain text.

Layout
- entries(): two-column "name  description" rows with a hanging indent, wrapped to
  the console width (used for option lists).
- framed(): optional panel chrome when fancy is True.
"""
from collections import defaultdict

from rich.panel import Panel
from rich.text import Text

PADDING = 2
INDENT = 16


def palette(defaults, /):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class Painter:
    """
    Styling front-end bound to a palette and a colorful switch.
    """

    def __init__(self, styles, *, colorful):
        self.styles = styles
        self.colorful = bool(colorful)

    def style(self, name):
        return self.styles[name] if self.colorful else ""

    def text(self, fragment, name=""):
        if isinstance(fragment, Text):
            return fragment if self.colorful else Text(fragment.plain)
        return Text(str(fragment), self.style(name))


def entries(console, painter, rows, *, width, name="name", description="description"):
    """
    Lay out (name, descr) rows as an indented two-column block.

    Names longer than the description column push the description to the next line.
    """
    block = Text()
    for label, descr in rows:
        section = Text(" " * PADDING).append(painter.text(label, name))
        if descr:
            if len(section) >= INDENT:
                section.append("\n").append(" " * INDENT)
            else:
                section.append(" " * (INDENT - len(section)))
            wrapped = painter.text(descr, description).wrap(console, max(width - INDENT, 1))
            for index, line in enumerate(wrapped):
                if index:
                    section.append("\n").append(" " * INDENT)
                section.append(line)
        block.append(section).append("\n")
    block.rstrip()
    return block


def framed(renderable, title, painter, *, fancy, subtitle=None):
    if not fancy:
        return renderable
    return Panel(
        renderable,
        title=Text.assemble("[", " ", title.upper(), " ", "]", style=painter.style("panel-title")),
        title_align="left",
        subtitle=painter.text(subtitle, "panel-subtitle") if subtitle else None,
    )


__all__ = (
    "palette",
    "Painter",
    "entries",
    "framed",
)
