"""
Commando application: command registry and dispatch.

Registry
- Each name maps to either Resolved(command), an instance ready to run, or
  Deferred(identifier), a token the container turns into a command the first
  time the name is looked up. A deferred entry is constructed and prepared at
  most once per application; afterwards the name maps to Resolved(command).

Dispatch (run)
1. Resolve the default command by its configured name (may be absent).
2. Default-only mode off: resolve the command named on the command line (if
   any) and enable command-name mode on the parameter.
   Default-only mode on: disable command-name mode, folding the command name
   (if any) into the positional arguments as argument 0.
3. Pick the command-line command, else the default; none → NoCommandResolvedError.
4. Prepare the command if it is not prepared yet.
5. Bind its arguments and options (binding faults abort the run).
6. Run it and return its result.

Entry point
- main(tokens) wraps run() for processes: faults are rendered with rich
  followed by the failed command's usage, and an exit status is returned.
"""
import copy
import logging
from typing import NamedTuple

from rich.markup import escape

from .commands import Command
from .container import Container
from .faults import CommandException, ConfigurationError, NoCommandResolvedError
from .input import Input
from .output import Output
from .parameters import Parameter
from .utils import *

logger = logging.getLogger(__name__)


class Resolved(NamedTuple):
    command: Command


class Deferred(NamedTuple):
    identifier: object


class Application:
    """
    Command registry plus dispatcher bound to one parameter (parsed argv).

    Parameters
    - output, input, parameter, container: collaborators; Unset creates the
      package defaults (Parameter() parses sys.argv).
    - name: str | Unset
      Application name, printed by the help command and used in fault headers.
    - default: Command | str | Unset
      Default command (added when a Command is given) or its registered name.
    - only_default: bool
      Run the default command regardless of any command name on the input.
    """

    output = mirror("output")
    input = mirror("input")
    parameter = mirror("parameter")
    container = mirror("container")
    active_command = mirror("active_command")

    def __init__(
            self,
            output=Unset,
            input=Unset,
            parameter=Unset,
            container=Unset,
            *,
            name=Unset,
            default=Unset,
            only_default=False
    ):
        if not isinstance(parameter, Parameter | Unset):
            raise TypeError(f"{type(self).__name__} 'parameter' must be a parameter")
        if not isinstance(name, str | Unset):
            raise TypeError(f"{type(self).__name__} 'name' must be a string")

        self._output = Output() if output is Unset else output
        self._input = Input() if input is Unset else input
        self._parameter = Parameter() if parameter is Unset else parameter
        self._container = Container() if container is Unset else container
        self._commands = {}
        self._default_command = None
        self._only_default = bool(only_default)
        self._active_command = None
        self.name = coalesce(name)

        if isinstance(default, Command):
            self.set_default_command(default)
        elif default is not Unset:
            self.set_default_command_by_name(default)

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r}, commands={list(self._commands)!r})"

    def add_command(self, command, /):
        """Prepare a command instance and register it under its name."""
        if not isinstance(command, Command):
            raise TypeError("add_command() argument must be a command")
        if not command.name:
            raise ConfigurationError(
                "Commands must have a name to be added.",
                hint="pass a name to Command(...) or set it as a class attribute",
            )
        command.prepare(self, self._output, self._input, self._parameter)
        self._commands[command.name] = Resolved(command)

    def add_commands(self, commands, /):
        for command in commands:
            self.add_command(command)

    def add_command_by_name(self, name, identifier, /):
        """
        Register a command lazily: identifier is handed to the container on first lookup.
        """
        if not isinstance(name, str) or not name:
            raise TypeError("add_command_by_name() first argument must be a non-empty string")
        self._commands[name] = Deferred(identifier)

    def set_default_command_by_name(self, name, /):
        if not isinstance(name, str):
            raise TypeError("set_default_command_by_name() argument must be a string")
        self._default_command = name

    def set_default_command(self, command, /):
        self.add_command(command)
        self.set_default_command_by_name(command.name)

    def set_only_use_default_command(self, only_default, /):
        self._only_default = bool(only_default)

    def should_only_use_default_command(self):
        return self._only_default

    def has_command(self, name, /):
        return name in self._commands

    def get_command(self, name, /):
        """
        Return the command registered under name, constructing it if deferred.

        Unknown names return None.

        Raises
        - ConfigurationError: when a deferred identifier does not construct a Command.
        """
        match self._commands.get(name):
            case None:
                return None
            case Resolved(command):
                return command
            case Deferred(identifier):
                logger.debug("resolving deferred command %r from %r", name, identifier)
                command = self._container.construct(identifier)
                if not isinstance(command, Command):
                    raise ConfigurationError(
                        "Deferred command %r did not construct a command." % name,
                        hint="register a Command subclass or a factory returning a Command",
                        name=name,
                        identifier=identifier,
                    )
                command.prepare(self, self._output, self._input, self._parameter)
                self._commands[name] = Resolved(command)
                return command

    def get_commands(self):
        """Return every registered command by name, constructing deferred ones."""
        return {name: self.get_command(name) for name in list(self._commands)}

    def remove_command_by_name(self, name, /):
        self._commands.pop(name, None)

    def get_command_usage(self, command, /):
        return command.usage

    def get_argument(self, name, /):
        return self._parameter.get_argument(name)

    def get_arguments(self):
        return self._parameter.get_arguments()

    def get_option(self, name, /):
        return self._parameter.get_option(name)

    def get_options(self):
        return self._parameter.get_options()

    def run(self):
        """
        Select, bind and run one command against the current parameter state.

        Returns whatever the command's run() returns.

        Raises
        - NoCommandResolvedError: neither a command-line nor a default command resolved.
        - MissingRequiredArgumentError / MissingRequiredOptionValueError: binding failed.
        """
        self._active_command = None

        default = None
        command = None

        if self._default_command:
            default = self.get_command(self._default_command)

        if not self._only_default:
            if (name := self._parameter.command_name) is not None:
                command = self.get_command(name)
            self._parameter.enable_command_name()
        else:
            self._parameter.disable_command_name()

        # Mutually exclusive by construction: command is only set when default-only is off.
        command = command if command is not None else default

        if command is None:
            raise NoCommandResolvedError(
                "No valid commands found.",
                hint="pass one of the registered command names, or configure a default command",
                commands=list(self._commands),
            )

        logger.debug(
            "dispatching %r (command line=%r, default=%r, only default=%s)",
            command.name,
            self._parameter.command_name,
            self._default_command,
            self._only_default,
        )

        self._active_command = command

        if not command.prepared:
            command.prepare(self, self._output, self._input, self._parameter)

        self._parameter.bind_arguments(command.arguments)
        self._parameter.bind_options(command.options)

        return command.run()

    def main(self, tokens=Unset, /):
        """
        Process entry point: run, render faults, and return an exit status.

        Parameters
        - tokens: Iterable[str] | Unset
          When given, the parameter is re-parsed from these tokens (script name
          first) before running.

        Returns
        - 0 when the command ran, 1 when a fault was raised. The fault is
          written through the output, followed by the selected command's usage.
        """
        if tokens is not Unset:
            self._parameter.set_parameters(tokens)

        try:
            self.run()
        except CommandException as fault:
            logger.debug("run aborted: %s", fault)
            self._output.write_fault(copy.replace(fault, tool=self.name) if self.name else fault)
            if self._active_command is not None:
                self._output.writeln(
                    "[yellow]Usage[/yellow]: " + escape(self.get_command_usage(self._active_command))
                )
            return 1

        return 0


__all__ = (
    "Application",
    "Resolved",
    "Deferred",
)
