"""
Invocation context: argument binding and typed option access.

A Context is built once per dispatched command from the tokens that follow the
command name, and discarded when the handler returns.

Binding
- Tokens are scanned left to right; only tokens starting with '--' are options,
  anything else is skipped (there are no positionals).
- '--name value' binds "value" when the next token is not itself an option;
  a bare '--name' binds the literal "true".
- The first occurrence of a name wins; later duplicates are reported as a
  DuplicatedOptionWarning through the logger and otherwise ignored.

Access
- get(name, type) coerces the raw string on every call; nothing is cached.
- get(name, type, default) absorbs a missing option silently and a malformed one
  with a single UncastableOptionWarning.
- An absent boolean option is False, never an error.

Example
    >>> context = Context(["--name", "Alice", "--verbose", "--retries", "3x"])
    >>> context.get("name")
    'Alice'
    >>> context.get("verbose", bool)
    True
    >>> context.get("retries", int, 1)  # logs a warning
    1
"""
import functools
import operator
import re
from collections.abc import Iterable
from types import MappingProxyType

from .faults import BadOptionTypeError, MissingRequiredOptionError, UncastableOptionWarning, DuplicatedOptionWarning
from .logger import getlogger
from .utils import Unset, coalesce, mirror

MARKER = "--"

TRUTHY = frozenset({"true", "1", "on", "yes"})
FALSY = frozenset({"false", "0", "off", "no"})

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1
FLOAT_MAX = 3.4028234663852886e+38
FLOAT_TINY = 1.401298464324817e-45
INT_DIGITS = len(str(INT_MAX))

_integer = re.compile(r"[+-]?[0-9]+")
_floating = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_nonzero = re.compile(r"[1-9]")


def _to_str(name, value):
    return value


def _to_bool(name, value):
    if value in TRUTHY:
        return True
    if value in FALSY:
        return False
    raise BadOptionTypeError(name, "bool", value, hint="use one of: true, false, 1, 0, on, off, yes, no")


def _to_int(name, value):
    # the digit count is bounded before int() sees the string
    if _integer.fullmatch(value) and len(value.lstrip("+-").lstrip("0")) <= INT_DIGITS:
        if INT_MIN <= (result := int(value)) <= INT_MAX:
            return result
    raise BadOptionTypeError(name, "int", value, hint=f"use a whole number between {INT_MIN} and {INT_MAX}")


def _to_float(name, value):
    if _floating.fullmatch(value):
        magnitude = abs(result := float(value))
        mantissa = re.split(r"[eE]", value, maxsplit=1)[0]
        if magnitude <= FLOAT_MAX and (magnitude >= FLOAT_TINY or not _nonzero.search(mantissa)):
            return result
    raise BadOptionTypeError(name, "float", value, hint="use a decimal number such as 1.5 or 2e-3")


# One converter per semantic type; lookups are by exact type so bool never falls into int.
_converters = MappingProxyType({
    str: _to_str,
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
})


def ismarker(token, /):
    """
    Return True when a token names an option (starts with '--').
    """
    return token[:len(MARKER)] == MARKER


class Context:
    """
    Raw option store plus typed accessor for one command invocation.

    Parameters
    - args: Iterable[str], tokens following the command name.
    - logger: object with warn(message); defaults to the process logger (resolved lazily).

    Properties
    - options: read-only mapping of option name → raw string value, in input order.
    - logger: the logging capability warnings are sent to.
    """
    __typename__ = "context"

    options = mirror("options")

    def __init__(self, args=(), /, *, logger=Unset):
        if isinstance(args, str) or not isinstance(args, Iterable):
            raise TypeError(f"{self.__typename__} 'args' must be an iterable of strings")
        if logger is not Unset and not callable(getattr(logger, "warn", None)):
            raise TypeError(f"{self.__typename__} 'logger' must implement a warn method")
        self._logger = logger
        self._options = {}

        tokens = list(args)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError(f"{self.__typename__} 'args' must be an iterable of strings")

        index = 0
        while index < len(tokens):
            token = tokens[index]
            if not ismarker(token):
                index += 1
                continue

            name = token[len(MARKER):]
            if index + 1 < len(tokens) and not ismarker(tokens[index + 1]):
                value = tokens[index + 1]
                index += 2
            else:
                value = "true"
                index += 1

            if name in self._options:
                self.logger.warn(DuplicatedOptionWarning(name))
                continue
            self._options[name] = value

    @property
    def logger(self):
        return coalesce(self._logger, getlogger())

    def has(self, name, /):
        """
        Pure membership test; never coerces, never fails.
        """
        return name in self._options

    def __contains__(self, name):
        return self.has(name)

    def get(self, name, type=str, /, default=Unset):
        """
        Look up an option and coerce it to `type` (str, bool, int or float).

        Without a default
        - absent bool → False; absent other → MissingRequiredOptionError.
        - uncoercible value → BadOptionTypeError.

        With a default
        - absent bool → False (the default is not consulted).
        - absent other → default, silently.
        - uncoercible value → default, after one UncastableOptionWarning is logged.

        Raises
        - TypeError: when `type` is not one of the supported semantic types.
        """
        try:
            converter = _converters[type]
        except (KeyError, TypeError):
            raise TypeError(f"{self.__typename__} cannot convert options to {type!r}") from None

        try:
            return self._lookup(name, type, converter)
        except MissingRequiredOptionError:
            if default is Unset:
                raise
            return default
        except BadOptionTypeError as error:
            if default is Unset:
                raise
            self.logger.warn(UncastableOptionWarning(error, default))
            return default

    def _lookup(self, name, type, converter):
        if name not in self._options:
            if type is bool:
                return False
            raise MissingRequiredOptionError(name)
        return converter(name, self._options[name])

    def __rich_repr__(self):
        yield "options", dict(self._options)

    def __repr__(self):
        return f"{self.__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"


__all__ = (
    "Context",
    "ismarker",
)
