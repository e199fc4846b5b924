"""
Console logging sink for clixxi.

The framework only consumes a logging *capability*: any object with a callable
``warn(message)`` (and ``error(message)`` for App.main). Logger is the default,
rich-based implementation writing to standard error:

    clixxi warning: [12111] option 'x' cannot be converted to int
     → falling back to the default 0

Messages may be plain strings or clixxi faults (CommandException/CommandWarning),
which render themselves through __rich__.

Process default
- getlogger() lazily builds a single Logger, guarded by a lock so that concurrent
  first calls still observe one instance.
- setlogger() replaces it (typically once, at startup). Contexts and apps that were
  given an explicit logger never consult the default.
"""
import threading

from rich.console import Console
from rich.text import Text

from .utils import Unset, coalesce


class Logger:
    def __init__(self, console=Unset, *, colorful=True):
        if console is not Unset and not isinstance(console, Console):
            raise TypeError("Logger 'console' must be a rich console")
        self.colorful = bool(colorful)
        self.console = coalesce(console, Console(stderr=True, highlight=False, no_color=not self.colorful))

    def _emit(self, prefix, style, message):
        if hasattr(message, "__rich__"):
            message = message.__rich__()
        if not isinstance(message, Text):
            message = str(message)
        self.console.print(Text.assemble((prefix, style if self.colorful else ""), message))

    def warn(self, message, /):
        self._emit("clixxi warning: ", "bold yellow", message)

    def error(self, message, /):
        self._emit("clixxi error: ", "bold red", message)

    def __repr__(self):
        return f"logger(colorful={self.colorful!r})"


_lock = threading.Lock()
_logger = Unset


def getlogger():
    """
    Return the process-wide default logger, creating it on first use.
    """
    global _logger
    if _logger is Unset:
        with _lock:
            if _logger is Unset:
                _logger = Logger()
    return _logger


def setlogger(logger, /):
    """
    Replace the process-wide default logger.

    The replacement must expose a callable warn(); passing Unset restores the
    lazily created console logger on next use.
    """
    global _logger
    if logger is not Unset and not callable(getattr(logger, "warn", None)):
        raise TypeError("setlogger() argument must implement a warn method")
    with _lock:
        _logger = logger


__all__ = (
    "Logger",
    "getlogger",
    "setlogger",
)
