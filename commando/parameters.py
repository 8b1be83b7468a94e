"""
Commando parameter parsing and binding.

What this module provides
- Parameter: turns a raw argv-like token list into a parse result and binds a
  command's declared arguments/options against it.

Parse result (rebuilt from scratch on every set_parameters call)
- script_name: first token (always consumed, never classified).
- command_name: first non-option token while command-name mode is enabled.
- long_options: {"name": True | "value"} from "--name" / "--name=value".
- flag_options: {"n": True | "value"} from "-n", "-abc", "-ab=value".
- positionals: every other non-option token, in encounter order.

Token classification (in this order)
1. "--..."  → long option; split on the first "=" only.
2. "-..."   → flag cluster; each character is a flag set to True, until a
               character is directly followed by "=": that character receives
               the rest of the token after "=" and scanning of the token stops.
3. other    → command name (once, while enabled) or positional argument.

Command-name mode
- disable_command_name() folds an already captured command name back into the
  positionals as index 0; enable_command_name() takes it out again, but only
  when index 0 still is that command name. The dispatcher calls exactly one of
  them before binding, so argument indices always match the active policy.

Binding
- bind_arguments(definitions): order = index in the given list, token at
  positionals[order] becomes the provided value; afterwards every required
  argument must have been provided (MissingRequiredArgumentError).
- bind_options(definitions): flag options read flag_options, others read
  long_options; afterwards every value-required option that was provided must
  resolve to a truthy value (MissingRequiredOptionValueError).

Examples
    >>> parameter = Parameter(["./tool", "build", "-vf=out.txt", "--jobs=4", "src"])
    >>> parameter.command_name, parameter.flag_options, parameter.long_options
    ('build', {'v': True, 'f': 'out.txt'}, {'jobs': '4'})
    >>> parameter.positionals
    ['src']
"""
import logging
import sys
from collections.abc import Iterable, Mapping

from .arguments import Argument, Option
from .faults import ConfigurationError, MissingRequiredArgumentError, MissingRequiredOptionValueError
from .utils import *

logger = logging.getLogger(__name__)


class Parameter:
    """
    Parser and binder for a single argv-like token list.

    Parameters
    - tokens: Iterable[str] | Unset
      Full token list, script name first. Unset reads sys.argv.

    Read-only state (copies are returned for containers)
    - parameters, script_name, command_name, long_options, flag_options,
      positionals, command_name_enabled, command_arguments, command_options.
    """

    parameters = mirror("parameters")
    script_name = mirror("script_name")
    command_name = mirror("command_name")
    long_options = mirror("long_options")
    flag_options = mirror("flag_options")
    positionals = mirror("positionals")
    command_name_enabled = mirror("command_name_enabled")
    command_arguments = mirror("command_arguments")
    command_options = mirror("command_options")

    def __init__(self, tokens=Unset):
        self._parameters = []
        self._command_arguments = []
        self._command_options = {}
        self._reset()
        self.set_parameters(coalesce(tokens, sys.argv))

    def __repr__(self):
        return (
            f"{type(self).__name__}(script_name={self._script_name!r}, command_name={self._command_name!r}, "
            f"long_options={self._long_options!r}, flag_options={self._flag_options!r}, "
            f"positionals={self._positionals!r})"
        )

    def _reset(self):
        self._script_name = None
        self._command_name = None
        self._long_options = {}
        self._flag_options = {}
        self._positionals = []
        self._command_name_enabled = True

    def set_parameters(self, tokens, /):
        """
        Replace the token list and parse it into a fresh parse result.

        Raises
        - TypeError: when tokens is a string, not iterable, or holds non-strings.
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("set_parameters() argument must be an iterable of strings")
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("set_parameters() argument must be an iterable of strings")

        self._reset()
        self._script_name = tokens[0] if tokens else None
        self._parameters = tokens[1:]
        self._parse()

    def _parse(self):
        for token in self._parameters:
            if token.startswith("--"):
                self._parse_option(token.lstrip("-"))
            elif token.startswith("-"):
                self._parse_flag_option(token[1:])
            else:
                self._parse_argument(token)

        logger.debug(
            "parsed %d token(s): command=%r long=%r flags=%r positionals=%r",
            len(self._parameters),
            self._command_name,
            self._long_options,
            self._flag_options,
            self._positionals,
        )

    def _parse_option(self, string):
        key, separator, value = string.partition("=")
        self._long_options[key] = value if separator else True

    def _parse_flag_option(self, string):
        # "-ab=c" → a=True, b="c"; everything after the first "=" belongs to the
        # flag just before it, so the scan ends there.
        for index, char in enumerate(string):
            if char == "=":
                break
            if (remainder := string[index + 1:]).startswith("="):
                self._flag_options[char] = remainder[1:]
                break
            self._flag_options[char] = True

    def _parse_argument(self, token):
        if self._command_name_enabled and self._command_name is None:
            self._command_name = token
        else:
            self._positionals.append(token)

    def enable_command_name(self):
        """
        Take the command name back out of the positionals (if it was folded in).

        Index 0 is only removed when it still equals the captured command name.
        """
        if (
            not self._command_name_enabled
            and self._command_name is not None
            and self._positionals
            and self._positionals[0] == self._command_name
        ):
            del self._positionals[0]

        self._command_name_enabled = True

    def disable_command_name(self):
        """
        Fold the captured command name into the positionals as index 0.

        Calling it again while already disabled changes nothing.
        """
        if self._command_name_enabled and self._command_name is not None:
            self._positionals.insert(0, self._command_name)

        self._command_name_enabled = False

    def set_command_arguments(self, arguments, /):
        """
        Register the argument definitions to bind, assigning each its index as order.

        Raises
        - ConfigurationError: when an item is not an Argument.
        """
        ordered = []
        for index, argument in enumerate(arguments):
            if not isinstance(argument, Argument):
                raise ConfigurationError(
                    "Arguments must be instances of Argument. The item at index %d is not." % index,
                    hint="declare arguments with Command.add_argument() or Argument(...)",
                    index=index,
                )
            argument.place(index)
            ordered.append(argument)
        self._command_arguments = ordered

    def check_command_arguments(self):
        for argument in self._command_arguments:
            argument.bind(self._positionals)

        for argument in self._command_arguments:
            if argument.required and not argument.has_been_provided:
                raise MissingRequiredArgumentError(
                    "Required argument with index #%d '%s' not provided." % (argument.order, argument.name),
                    hint="pass a value for %r at position %d" % (argument.name, argument.order + 1),
                    order=argument.order,
                    name=argument.name,
                )

    def bind_arguments(self, arguments, /):
        self.set_command_arguments(arguments)
        self.check_command_arguments()

    def set_command_options(self, options, /):
        """
        Register the option definitions to bind.

        Accepts a sequence of Option or a mapping of key → Option; definitions are
        stored under their own name.

        Raises
        - ConfigurationError: when an item is not an Option.
        """
        items = options.items() if isinstance(options, Mapping) else enumerate(options)
        named = {}
        for key, option in items:
            if not isinstance(option, Option):
                raise ConfigurationError(
                    "Options must be instances of Option. %s is not." % key,
                    hint="declare options with Command.add_option() or Option(...)",
                    key=key,
                )
            named[option.name] = option
        self._command_options = named

    def check_command_options(self):
        for option in self._command_options.values():
            option.bind(self._flag_options if option.flag else self._long_options)

        for option in self._command_options.values():
            if option.value_required and option.has_been_provided and not option.value:
                raise MissingRequiredOptionValueError(
                    "Option '%s%s' requires a value, which is not provided." % (option.dashes, option.name),
                    hint="pass it as %s%s=<value>" % (option.dashes, option.name),
                    name=option.name,
                    dashes=option.dashes,
                )

    def bind_options(self, options, /):
        self.set_command_options(options)
        self.check_command_options()

    def get_option(self, name, /):
        """
        Resolve a bound option: provided value, else default.

        An option passed bare with neither a value nor a default resolves to True.
        Unknown names resolve to None.
        """
        try:
            option = self._command_options[name]
        except KeyError:
            return None

        if option.has_been_provided and option.provided is None and option.default is None:
            return True

        return option.value

    def get_options(self):
        return {name: self.get_option(name) for name in self._command_options}

    def get_argument(self, name, /):
        for argument in self._command_arguments:
            if argument.name == name:
                return argument.value
        return None

    def get_arguments(self):
        return {argument.name: argument.value for argument in self._command_arguments}


__all__ = (
    "Parameter",
)
