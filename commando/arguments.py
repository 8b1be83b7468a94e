r"""
Commando argument and option definitions.

Overview
- Definitions
  • Argument: positional, bound by declaration order (index in the command's argument list).
  • Option: named, bound by name; either a long option (--name) or a single-letter
    flag option (-n) that can be clustered with other flags (-abc).

- Constants
  • PARAMETER_REQUIRED / PARAMETER_OPTIONAL: whether an Argument must be given.
  • OPTION_VALUE_REQUIRED / OPTION_VALUE_OPTIONAL: whether an Option, when given,
    must carry a value.

Lifecycle
- Declaration data (name, required-ness, default, flag) is fixed at construction.
- Binding state (order, provided, has_been_provided) is owned by the Parameter
  binder and is reset every time a bind runs; the same definition object can be
  bound again and again against new input.

Introspection & representation
- DefinitionType metaclass exposes every name listed in __introspectable__ as a
  read-only property over the private "_name" field and provides stable
  __repr__/__rich_repr__ implementations.

Value resolution
- value: the provided string when there is one, else the declared default.
  Option.value does NOT apply the bare-flag rule (see Parameter.get_option).

Quick example
    >>> argument = Argument("path", PARAMETER_REQUIRED)
    >>> option = Option("v", flag=True)
    >>> option.dashes
    '-'
"""
import functools
import operator
import re
from enum import IntEnum

from .faults import ConfigurationError
from .utils import *


class Presence(IntEnum):
    """required-ness of a positional argument."""
    REQUIRED = 1
    OPTIONAL = 2


class ValueType(IntEnum):
    """value requirement of an option once it is present on the command line."""
    REQUIRED = 11
    OPTIONAL = 12


PARAMETER_REQUIRED = Presence.REQUIRED
PARAMETER_OPTIONAL = Presence.OPTIONAL

OPTION_VALUE_REQUIRED = ValueType.REQUIRED
OPTION_VALUE_OPTIONAL = ValueType.OPTIONAL


class DefinitionType(type):
    """
    Metaclass that turns definitions into introspectable, read-only records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(name='verbose', value_required=False, default=None, flag=False, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, /):
    """
    Internal: validate a definition name.

    Raises
    - TypeError: when name is not a string.
    - ValueError: when name is empty after trimming.
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name.strip():
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    return name


class Argument(metaclass=DefinitionType):
    """
    Positional argument definition.

    Parameters
    - name: str
      Key under which the bound value is reported (get_argument/get_arguments).
    - required: PARAMETER_REQUIRED | PARAMETER_OPTIONAL
      Anything else raises ConfigurationError.
    - default: any
      Returned by .value when no token was bound.

    Binding state
    - order: index assigned by the binder (None until the argument is registered).
    - provided: the bound token, or None.
    - has_been_provided: whether a token existed at index .order.
    """
    __introspectable__ = (
        "name",
        "required",
        "default",
        "order",
        "provided",
        "has_been_provided",
    )

    def __init__(self, name, required=PARAMETER_OPTIONAL, default=None):
        self._name = _sanitize_name(type(self), name)
        if isinstance(required, bool) or required not in tuple(Presence):
            raise ConfigurationError(
                "Required must be one of the PARAMETER_* constants.",
                hint="use PARAMETER_REQUIRED or PARAMETER_OPTIONAL",
                name=name,
                value=required,
            )
        self._required = Presence(required) is Presence.REQUIRED
        self._default = default
        self._order = None
        self._provided = None
        self._has_been_provided = False

    @property
    def value(self):
        return self._provided if self._provided is not None else self._default

    def place(self, order, /):
        """Assign the declaration index this argument is bound against."""
        if isinstance(order, bool) or not isinstance(order, int):
            raise TypeError(f"{type(self).__typename__} 'order' must be an integer")
        self._order = order

    def bind(self, positionals, /):
        """
        Bind against the positional token list, resetting any previous state.

        The token at index .order (if present) becomes the provided value.
        """
        self._provided = None
        self._has_been_provided = False

        if self._order is None or not 0 <= self._order < len(positionals):
            return

        self._has_been_provided = True
        self._provided = positionals[self._order]


class Option(metaclass=DefinitionType):
    """
    Named option definition.

    Parameters
    - name: str
      Option name without dashes ("verbose" for --verbose, "v" for -v).
    - value_type: OPTION_VALUE_REQUIRED | OPTION_VALUE_OPTIONAL
      Anything else raises ConfigurationError.
    - default: any
      Returned by .value when the option is absent or passed bare.
    - flag: bool
      True for single-letter flag options read from "-x" clusters; a longer name
      raises ConfigurationError.

    Binding state
    - provided: the string value given with "=", or None (absent or bare).
    - has_been_provided: whether the option appeared at all.
    """
    __introspectable__ = (
        "name",
        "value_required",
        "default",
        "flag",
        "provided",
        "has_been_provided",
    )

    def __init__(self, name, value_type=OPTION_VALUE_OPTIONAL, default=None, flag=False):
        self._name = _sanitize_name(type(self), name)
        if isinstance(value_type, bool) or value_type not in tuple(ValueType):
            raise ConfigurationError(
                "Value type must be one of the OPTION_* constants.",
                hint="use OPTION_VALUE_REQUIRED or OPTION_VALUE_OPTIONAL",
                name=name,
                value=value_type,
            )
        if not isinstance(flag, bool):
            raise TypeError(f"{type(self).__typename__} 'flag' must be a boolean")
        if flag and len(name) > 1:
            raise ConfigurationError(
                "Flag options can only have a single-letter name.",
                hint=f"declare {name!r} as a long option (--{name}) or pick a single letter",
                name=name,
            )
        self._value_required = ValueType(value_type) is ValueType.REQUIRED
        self._default = default
        self._flag = flag
        self._provided = None
        self._has_been_provided = False

    @property
    def dashes(self):
        return "-" if self._flag else "--"

    @property
    def value(self):
        return self._provided if self._provided is not None else self._default

    def bind(self, source, /):
        """
        Bind against a parsed option map (flag map or long-option map).

        - absent            → not provided, no value
        - present as True   → provided, no value (bare "--name" / "-n")
        - present as string → provided with that value (may be empty)
        """
        self._provided = None
        self._has_been_provided = False

        if self._name not in source:
            return

        self._has_been_provided = True

        if (value := source[self._name]) is not True:
            self._provided = value


__all__ = (
    "Argument",
    "Option",
    "Presence",
    "ValueType",
    "PARAMETER_REQUIRED",
    "PARAMETER_OPTIONAL",
    "OPTION_VALUE_REQUIRED",
    "OPTION_VALUE_OPTIONAL",
)
