"""
Clixxi faults (errors and warnings) and rendering.

Scope
- FaultCode: the seven numeric codes printed in front of clixxi messages; 111xx for
  errors (routing, then options) and 121xx for the two warnings a context can log.
  Hosts may relabel them through a __codes__ mapping in __main__.
- CommandException / CommandWarning: base types that carry message + hint and
  know how to render themselves through rich (__rich__).

Closed error family
- OptionNotFoundError         declared-option lookup of an unknown name
- MissingRequiredOptionError  typed access of an absent, non-boolean option
- BadOptionTypeError          stored raw value cannot be coerced to the requested type
- CommandNotFoundError        dispatch selector matches no registered command
- CommandHasNotHandlerError   a matched command is executed without a handler

Policy
- Accessor-level faults (missing/bad type) can be absorbed by the defaulted accessor;
  a bad type is then reported as an UncastableOptionWarning through the logger.
- Dispatch-level faults are always raised; the host catches them (see App.main).
- Warnings are never raised: they are handed to the logger and rendered there.
"""
from collections import defaultdict
from enum import IntEnum

from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    numeric ids of clixxi errors and warnings; values never change between releases.

    ranges
    - routing (1110x)
      • UNKNOWN_COMMAND, MISSING_HANDLER
    - options (1111x/1112x)
      • UNKNOWN_OPTION, MISSING_OPTION, UNCASTABLE_OPTION
    - warnings (12xxx)
      • UNCASTABLE_OPTION_FALLBACK, DUPLICATED_OPTION
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND            = 11101
    MISSING_HANDLER            = 11103

    # --- option errors (11xxx) ---
    UNKNOWN_OPTION             = 11112
    MISSING_OPTION             = 11117
    UNCASTABLE_OPTION          = 11126

    # --- warnings (12xxx) ---
    UNCASTABLE_OPTION_FALLBACK = 12111
    DUPLICATED_OPTION          = 12115

    def normalize(self):
        """
        return the label printed for this code.

        a __codes__ mapping in __main__ (FaultCode -> label) replaces the
        number; codes missing from it print as their numeric value.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, kind):
    styles = defaultdict(str, {
        "error-code": "bold #00E5FF",  # neon cyan fault code
        "error-message": "#C8C8D0",  # soft light gray message
        "warning-code": "bold #FFB400",  # amber fault code for warnings
        "warning-message": "#D6D6DE",
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",
    } | getattr(__import__("__main__"), "__styles__", {}))

    text = Text()
    if fault.code is not Unset:
        text.append("[" + fault.code.normalize() + "]", styles[kind + "-code"]).append(" ")
    text.append(str(fault.message), styles[kind + "-message"])
    if fault.hint:
        text.append("\n")
        text.append(" → ", styles["hint-arrow"])
        text.append(str(fault.hint), styles["hint"])
    return text


class CommandException(Exception):
    """
    Base class of every clixxi error.

    Attributes
    - message: str, human-readable and lowercased (“command 'x' not found”).
    - hint: str | None, one actionable suggestion.
    - code/title: class-level identity used by renderers and hosts.
    """
    code = Unset
    title = "error"

    def __init__(self, message, /, *, hint=Unset):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.hint = coalesce(hint)

    def __rich__(self):
        return _render(self, "error")


class OptionNotFoundError(CommandException):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"

    def __init__(self, name, /, *, command=Unset, hint=Unset):
        if command is Unset:
            message = f"option {name!r} not found"
        else:
            message = f"option {name!r} not found in command {command!r}"
            hint = coalesce(hint, f"run '{command} --help' to see the declared options")
        super().__init__(message, hint=hint)
        self.name = name
        self.command = coalesce(command)


class MissingRequiredOptionError(CommandException):
    code = FaultCode.MISSING_OPTION
    title = "missing option"

    def __init__(self, name, /, *, hint=Unset):
        super().__init__(f"missing required option {name!r}", hint=coalesce(hint, f"pass it as '--{name} <value>'"))
        self.name = name


class BadOptionTypeError(CommandException):
    code = FaultCode.UNCASTABLE_OPTION
    title = "bad option type"

    def __init__(self, name, expected, /, value=Unset, *, hint=Unset):
        super().__init__(f"option {name!r} cannot be converted to {expected}", hint=hint)
        self.name = name
        self.expected = expected
        self.value = coalesce(value)


class CommandNotFoundError(CommandException):
    code = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"

    def __init__(self, name, /, *, hint=Unset):
        super().__init__(f"command {name!r} not found", hint=hint)
        self.name = name


class CommandHasNotHandlerError(CommandException):
    code = FaultCode.MISSING_HANDLER
    title = "missing handler"

    def __init__(self, name, /, *, hint=Unset):
        super().__init__(f"command {name!r} has no handler", hint=coalesce(hint, "attach one with .run(handler)"))
        self.name = name


class CommandWarning(Warning):
    """
    Base class of clixxi warnings; these are logged, never raised by the framework.
    """
    code = Unset
    title = "warning"

    def __init__(self, message, /, *, hint=Unset):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.hint = coalesce(hint)

    def __rich__(self):
        return _render(self, "warning")


class UncastableOptionWarning(CommandWarning):
    code = FaultCode.UNCASTABLE_OPTION_FALLBACK
    title = "default used"

    def __init__(self, error, /, default=None):
        if not isinstance(error, BadOptionTypeError):
            raise TypeError("UncastableOptionWarning argument must be a bad-option-type error")
        super().__init__(error.message, hint=f"falling back to the default {default!r}")
        self.error = error
        self.default = default


class DuplicatedOptionWarning(CommandWarning):
    code = FaultCode.DUPLICATED_OPTION
    title = "duplicated option"

    def __init__(self, name, /, *, hint=Unset):
        super().__init__(f"option {name!r} given more than once", hint=coalesce(hint, "only the first occurrence is used"))
        self.name = name


__all__ = (
    "FaultCode",
    "CommandException",
    "OptionNotFoundError",
    "MissingRequiredOptionError",
    "BadOptionTypeError",
    "CommandNotFoundError",
    "CommandHasNotHandlerError",
    "CommandWarning",
    "UncastableOptionWarning",
    "DuplicatedOptionWarning",
)
