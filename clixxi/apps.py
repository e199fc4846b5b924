"""
Clixxi application layer: command registry and top-level dispatch.

Routing (first matching rule wins)
1. no arguments, or 'help'  → render the application help (works with zero commands).
2. 'version'                → render "<name> — <version>".
3. '<command> [--opt ...]'  → build a Context from the remaining tokens and execute
                              the command; unknown names raise CommandNotFoundError.

'help' and 'version' are reserved: a command registered under either name is never
reached through dispatch.

Host boundary
- run() raises clixxi faults to the caller; it never exits the process.
- main() wraps run() for scripts: faults are logged as errors and turned into exit
  statuses, so the host writes ``sys.exit(app.main())``.
"""
import difflib
import sys
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .commands import Command, tokenize
from .context import Context
from .faults import CommandException, CommandNotFoundError
from .logger import getlogger
from .rendering import palette, Painter, framed
from .utils import Unset, coalesce, mirror


class App:
    """
    Application: owns the command table and routes one invocation per run.

    Parameters
    - name: str, program name (help, version and usage lines).
    - descr: str, one-line description.
    - version: str, shown by the 'version' word.
    - logger: object with warn()/error(); defaults to the process logger.
    - colorful, fancy: rendering flags shared with every command (default False).
    - console: rich Console for help/version output (defaults to stdout).
    """
    __typename__ = "app"

    name = mirror("name")
    descr = mirror("descr")
    version = mirror("version")
    commands = mirror("commands")

    def __init__(self, name, descr="", version="1.0", /, *, logger=Unset, colorful=Unset, fancy=Unset, console=Unset):
        for field, value in (("name", name), ("descr", descr), ("version", version)):
            if not isinstance(value, str):
                raise TypeError(f"{self.__typename__} {field!r} must be a string")
        if not (name := name.strip()):
            raise ValueError(f"{self.__typename__} 'name' must be a non-empty string")
        if logger is not Unset and not callable(getattr(logger, "warn", None)):
            raise TypeError(f"{self.__typename__} 'logger' must implement a warn method")
        if console is not Unset and not isinstance(console, Console):
            raise TypeError(f"{self.__typename__} 'console' must be a rich console")
        self._name = name
        self._descr = descr.strip()
        self._version = version.strip()
        self._commands = {}
        self._logger = logger
        self._colorful = bool(coalesce(colorful, False))
        self._fancy = bool(coalesce(fancy, False))
        self._console = coalesce(console)

    @property
    def logger(self):
        return coalesce(self._logger, getlogger())

    @property
    def colorful(self):
        return self._colorful

    @property
    def fancy(self):
        return self._fancy

    @property
    def console(self):
        return self._console

    def command(self, name, descr="", /):
        """
        Get or create the command registered under `name`.

        The first call creates it; later calls return the same instance (the
        original description is kept), so options and handlers accumulate.
        """
        if not isinstance(name, str):
            raise TypeError(f"{self.__typename__} command name must be a string")
        try:
            return self._commands[name.strip()]
        except KeyError:
            pass
        command = Command(name, descr, app=self)
        return self._commands.setdefault(command.name, command)

    def run(self, argv=Unset, /):
        """
        Dispatch a full process argument vector (program token first).

        When argv is Unset, sys.argv is used.

        Raises
        - CommandNotFoundError: the selector matches no registered command.
        - CommandHasNotHandlerError: the matched command has no handler.
        - anything raised by the handler, unchanged.
        """
        argv = sys.argv if argv is Unset else argv
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError(f"{self.__typename__} run() argument must be an iterable of strings")
        self._dispatch(tokenize(argv)[1:])

    def __invoke__(self, prompt=Unset):
        """
        Dispatch a prompt that excludes the program token (str or Iterable[str]).
        """
        self._dispatch(tokenize(prompt))

    def main(self, argv=Unset, /):
        """
        Run and translate clixxi faults into an exit status (0 ok, 1 failure).

        Faults are reported through the logger's error() (warn() when the logger has
        no error method). Other exceptions propagate.
        """
        try:
            self.run(argv)
        except CommandException as error:
            logger = self.logger
            getattr(logger, "error", logger.warn)(error)
            return 1
        return 0

    def _dispatch(self, args):
        if not args or args[0] == "help":
            self._helper()
            return
        if args[0] == "version":
            self._versioner()
            return
        try:
            command = self._commands[selector := args[0]]
        except KeyError:
            raise CommandNotFoundError(selector, hint=self._suggest(selector)) from None
        command.execute(Context(args[1:], logger=self.logger))

    def _suggest(self, selector):
        if matches := difflib.get_close_matches(selector, self._commands, n=1):
            return f"did you mean {matches[0]!r}?"
        return f"run '{self.name} help' to list the available commands"

    def _painter(self, defaults):
        return Painter(palette(defaults), colorful=self.colorful)

    def _output(self):
        return self._console if self._console is not None else Console()

    def _helper(self):
        """
        Render application help: usage, description and the commands table.

        Palette keys
        - usage-label, program-name, usage-section, description-section, epilog-section
        - children-title, children-table, children, children-description, panel-title
        """
        console = self._output()
        painter = self._painter({
            "usage-label": "bold #00E6FF",
            "program-name": "bold #FF4D94",
            "usage-section": "bold #36C5F0",
            "description-section": "italic #A3A3A3",
            "epilog-section": "#737373",
            "children-title": "bold #FFFFFF",
            "children-table": "#4B5563",
            "children": "bold #36C5F0",
            "children-description": "#9CA3AF",
            "panel-title": "bold #FF4D94",
        })

        renders = []
        width = console.width - 4 * self.fancy

        usage = Text()
        usage.append("usage", painter.style("usage-label")).append(": ")
        usage.append(painter.text(self.name, "program-name")).append(" ")
        usage.append(painter.text("<command> [--<option> [<value>]]...", "usage-section"))
        renders.append(usage.append("\n"))

        if self.descr:
            renders.append(painter.text(self.descr, "description-section").append("\n"))

        if self._commands:
            table = Table(
                "name", "help",
                title=painter.text("commands", "children-title"),
                width=max(int(width * (2 / 3)), 40),
                box=ROUNDED,
                style=painter.style("children-table"),
                header_style=painter.style("children-title"),
            )
            for name, command in self._commands.items():
                table.add_row(
                    painter.text(name, "children"),
                    painter.text(command.descr or f"run '{self.name} {name} --help' for details", "children-description"),
                )
            renders.append(table)
        else:
            renders.append(painter.text("no commands registered", "epilog-section").append("\n"))

        renders.append(painter.text(
            f"run '{self.name} <command> --help' for command options, '{self.name} version' for the version",
            "epilog-section",
        ))

        console.print(framed(Group(*renders), f"{self.name} help", painter, fancy=self.fancy))

    def _versioner(self):
        """
        Render "<name> — <version>".
        """
        console = self._output()
        painter = self._painter({
            "program-name": "bold #FF4D94",
            "program-version": "bold #00E6FF",
            "panel-title": "bold #FF4D94",
        })
        renderable = Text(" — ").join((
            painter.text(self.name, "program-name"),
            painter.text(self.version, "program-version"),
        ))
        console.print(framed(renderable, f"{self.name} version", painter, fancy=self.fancy))

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "version", self.version
        yield "commands", tuple(self._commands)

    def __repr__(self):
        return f"{self.__typename__}({', '.join('%s=%r' % pair for pair in self.__rich_repr__())})"


__all__ = (
    "App",
)
