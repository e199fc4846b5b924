"""
Option descriptors.

An Option is static, immutable metadata (name + description) for an option a
command declares. Declarations document the command (help output, getoption());
they are not a validation schema: the binder accepts undeclared names as well.

Names are given without their marker ("verbose", not "--verbose").
"""
import functools
import operator

from .utils import mirror

# Semantic option value produced on demand by Context.get().
OptionType = bool | int | float | str


class Option:
    """
    Declared option of a command.

    Properties
    - name: str, unique within the owning command, no leading '--'.
    - descr: str, short help line (empty when not provided).
    """
    __slots__ = ("_name", "_descr")
    __typename__ = "option"

    name = mirror("name")
    descr = mirror("descr")

    def __init__(self, name, /, descr=""):
        if not isinstance(name, str):
            raise TypeError(f"{self.__typename__} 'name' must be a string")
        if name.startswith("--"):
            raise ValueError(f"{self.__typename__} 'name' must be given without the '--' marker")
        if not isinstance(descr, str):
            raise TypeError(f"{self.__typename__} 'descr' must be a string")
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_descr", descr.strip())

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{self.__typename__} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{self.__typename__} is read-only")

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self.name, self.descr) == (other.name, other.descr)

    def __hash__(self):
        return hash((self.name, self.descr))

    def __rich_repr__(self):
        yield "name", self.name
        yield "descr", self.descr

    def __repr__(self):
        return f"{self.__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"


__all__ = (
    "Option",
    "OptionType",
)
