"""
Clixxi command layer: declare options, attach a handler, execute.

What this module provides
- Command: a named unit of work owned by an App.
  • option(name, descr) declares an option (documentation for help; not enforced).
  • run(handler) attaches the callable executed with the invocation Context.
  • execute(context) routes '--help' to the help renderer, otherwise calls the handler.

States
- unconfigured: no handler yet; execute() raises CommandHasNotHandlerError.
- ready: a handler is attached; run() may be called again to replace it.

Quick start
    from clixxi import App

    app = App("demo", "Demo application.", "1.0")

    def greet(context):
        print("hello", context.get("name", str, "world"))

    app.command("greet", "Say hello.").option("name", "Who to greet").run(greet)

    app.run(["demo", "greet", "--name", "Alice"])  # hello Alice
    app.run(["demo", "greet", "--help"])           # usage: demo greet ...
"""
import shlex
from collections.abc import Iterable

from rich.console import Console, Group
from rich.text import Text

from .context import Context
from .faults import OptionNotFoundError, CommandHasNotHandlerError
from .options import Option
from .rendering import palette, Painter, entries, framed
from .utils import Unset, coalesce, mirror


class Command:
    """
    Named command with declared options and a single handler.

    Parameters
    - name: str, dispatch key (unique within its app).
    - descr: str, one-line description (help output).
    - app: App | Unset, owner; used for the usage line and to inherit rendering flags.
    - colorful, fancy: bool | Unset, rendering flags (inherited from the app when Unset).
    - console: rich Console | Unset, where help is printed (inherited, then stdout).

    Properties
    - name, descr, app: identity.
    - options: read-only mapping of option name → Option, in declaration order.
    - handler: the attached callable, or None.
    - ready: True once a handler is attached.
    """
    __typename__ = "command"

    name = mirror("name")
    descr = mirror("descr")
    app = mirror("app")
    options = mirror("options")
    handler = mirror("handler")

    def __init__(self, name, descr="", /, *, app=Unset, colorful=Unset, fancy=Unset, console=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{self.__typename__} 'name' must be a string")
        if not (name := name.strip()):
            raise ValueError(f"{self.__typename__} 'name' must be a non-empty string")
        if not isinstance(descr, str):
            raise TypeError(f"{self.__typename__} 'descr' must be a string")
        if console is not Unset and not isinstance(console, Console):
            raise TypeError(f"{self.__typename__} 'console' must be a rich console")
        self._name = name
        self._descr = descr.strip()
        self._app = coalesce(app)
        self._options = {}
        self._handler = None
        self._colorful = colorful
        self._fancy = fancy
        self._console = console

    @property
    def ready(self):
        return self._handler is not None

    @property
    def colorful(self):
        return bool(coalesce(self._colorful, getattr(self._app, "colorful", False)))

    @property
    def fancy(self):
        return bool(coalesce(self._fancy, getattr(self._app, "fancy", False)))

    @property
    def console(self):
        console = coalesce(self._console, getattr(self._app, "console", None))
        return console if console is not None else Console()

    @property
    def route(self):
        """
        Invocation prefix shown in usage lines, e.g. 'demo sum'.
        """
        return f"{self._app.name} {self.name}" if self._app is not None else self.name

    def option(self, name, descr="", /):
        """
        Declare (or redeclare) an option; returns self for chaining.
        """
        self._options[name] = Option(name, descr)
        return self

    def getoption(self, name, /):
        """
        Return the declared Option for `name`.

        Raises
        - OptionNotFoundError: when no option with that name was declared.
        """
        try:
            return self._options[name]
        except KeyError:
            raise OptionNotFoundError(name, command=self.route) from None

    def run(self, handler, /):
        """
        Attach the handler called as handler(context); returns self for chaining.

        Calling run() again replaces the previous handler.
        """
        if not callable(handler):
            raise TypeError(f"{self.__typename__} handler must be callable")
        self._handler = handler
        return self

    def execute(self, context, /):
        """
        Execute this command for one invocation.

        - '--help' present → render help, handler is not called.
        - no handler → CommandHasNotHandlerError.
        - otherwise → handler(context); its exceptions propagate unchanged.
        """
        if not isinstance(context, Context):
            raise TypeError(f"{self.__typename__} execute() argument must be a context")
        if context.has("help"):
            self._helper()
            return
        if self._handler is None:
            raise CommandHasNotHandlerError(self.name)
        self._handler(context)

    def _helper(self):
        """
        Render command help: usage line, description and the options block.

        Palette keys
        - usage-label, program-name, usage-section, description-section
        - group-label, option-name, metavar, argument-description, panel-title
        """
        console = self.console
        painter = Painter(palette({
            "usage-label": "bold #00E6FF",
            "program-name": "bold #FF4D94",
            "usage-section": "bold #36C5F0",
            "description-section": "italic #A3A3A3",
            "group-label": "bold #FFFFFF",
            "option-name": "bold #00E6FF",
            "flag-name": "bold #22C55E",
            "metavar": "bold #FFD600",
            "argument-description": "#9CA3AF",
            "panel-title": "bold #FF4D94",
        }), colorful=self.colorful)

        renders = []
        width = console.width - 4 * self.fancy

        usage = Text()
        usage.append("usage", painter.style("usage-label")).append(": ")
        usage.append(painter.text(self.route, "program-name"))
        usage.append(" ").append(Text.assemble("[", painter.text("--help", "flag-name"), "]"))
        for name in self._options:
            usage.append(" ").append(Text.assemble(
                "[", painter.text("--" + name, "option-name"), " ", painter.text("<value>", "metavar"), "]"
            ))
        renders.append(usage.append("\n"))

        if self.descr:
            renders.append(painter.text(self.descr, "description-section").append("\n"))

        rows = [("--" + option.name, option.descr) for option in self._options.values()]
        rows.append(("--help", "show this help message and exit"))
        section = Text()
        section.append(painter.text("options", "group-label")).append(":\n")
        section.append(entries(console, painter, rows, width=width, name="option-name", description="argument-description"))
        renders.append(section)

        console.print(framed(Group(*renders), f"{self.name} help", painter, fancy=self.fancy))

    def __invoke__(self, prompt=Unset):
        """
        Execute this command directly with a token stream.

        - Unset: nothing but the defaults (an empty context).
        - str: shell-like string, split via shlex.split.
        - Iterable[str]: pre-tokenized sequence.
        """
        logger = getattr(self._app, "logger", Unset)
        self.execute(Context(tokenize(prompt), logger=logger))

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr
        yield "options", tuple(self._options)
        yield "ready", self.ready

    def __repr__(self):
        return f"{self.__typename__}({', '.join('%s=%r' % pair for pair in self.__rich_repr__())})"


def tokenize(prompt=Unset, /):
    """
    Normalize a prompt into a list of tokens.

    - Unset → []
    - str → shlex.split(prompt)
    - Iterable[str] → list, validating element types.
    """
    if prompt is Unset:
        return []
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("prompt must be a string or an iterable of strings")


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for apps and commands.

    Parameters
    - object: anything implementing __invoke__(prompt) (App, Command).
    - prompt: str (split with shlex) or Iterable[str]; excludes the program token.

    Raises
    - TypeError: when 'object' does not implement __invoke__.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        object.__invoke__(prompt)
        return
    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Command",
    "tokenize",
    "invoke",
)
