"""
Commando command layer: declare and run commands.

What this module provides
- Command: couples a name, a description, declared positional arguments and
  named options, and a handler. Subclasses may set name/description as class
  attributes and override run() instead of passing a handler.
- command(...): decorator factory that wraps a handler function into a Command.

Handler contract
- A handler receives exactly four context references, in this order:
  (application, output, input, parameter). Its return value is returned by run().
- The parameter is already bound to the command's declarations when the
  Application dispatches, so handlers read values with
  parameter.get_argument(name) / parameter.get_option(name).

Usage string
- name, then each argument as "name" (required) or "[name]" (optional), then
  each option as "[-x[=value]]", "[-x=value]", "[--name[=value]]" or
  "[--name=value]". See Command.usage.

Quick start
    from commando import Application, command, PARAMETER_REQUIRED

    @command(description="Say hello.")
    def greet(application, output, input, parameter):
        output.writeln("hello, %s" % parameter.get_argument("who"))

    greet.add_argument("who", PARAMETER_REQUIRED)

    application = Application()
    application.add_command(greet)
    raise SystemExit(application.main())
"""
import inspect

from .arguments import Argument, Option, PARAMETER_OPTIONAL, OPTION_VALUE_OPTIONAL
from .parameters import Parameter
from .utils import *


class Command:
    """
    A runnable command with declared arguments and options.

    Parameters
    - name: str | Unset
      Registry key and first word of the usage string. Unset keeps the class
      attribute (None on the base class).
    - description: str | Unset
      Short help text shown by the help command.
    - handler: Callable[[application, output, input, parameter], Any] | Unset
      Invoked by run(). Unset keeps the class attribute (None on the base class).

    Context
    - prepare() attaches the application, output, input and parameter; the
      command counts as prepared once all four are attached.
    """
    name = None
    description = None
    handler = None

    arguments = mirror("arguments")
    options = mirror("options")
    application = mirror("application")
    output = mirror("output")
    input = mirror("input")
    parameter = mirror("parameter")

    def __init__(self, name=Unset, description=Unset, handler=Unset):
        if not isinstance(name, str | Unset):
            raise TypeError(f"{type(self).__name__} 'name' must be a string")
        elif isinstance(name, str) and not name.strip():
            raise ValueError(f"{type(self).__name__} 'name' cannot be empty")
        if not isinstance(description, str | Unset):
            raise TypeError(f"{type(self).__name__} 'description' must be a string")
        if handler is not Unset and not callable(handler):
            raise TypeError(f"{type(self).__name__} 'handler' must be callable")

        if name is not Unset:
            self.name = name
        if description is not Unset:
            self.description = description
        if handler is not Unset:
            self.handler = handler

        self._arguments = []
        self._options = {}
        self._application = None
        self._output = None
        self._input = None
        self._parameter = None

    def __repr__(self):
        return f"{type(self).__name__}(name={self.name!r}, description={self.description!r})"

    def __rich_repr__(self):
        yield "name", self.name
        yield "description", self.description
        yield "arguments", self._arguments
        yield "options", list(self._options.values())
        yield "prepared", self.prepared

    @property
    def prepared(self):
        return all(
            context is not None
            for context in (self._application, self._output, self._input, self._parameter)
        )

    def prepare(self, application, output, input, parameter):
        """Attach the context handed to the handler when the command runs."""
        self._application = application
        self._output = output
        self._input = input
        self._parameter = parameter

    def add_argument(self, name, required=PARAMETER_OPTIONAL, default=None):
        """Declare the next positional argument and return its definition."""
        self._arguments.append(argument := Argument(name, required, default))
        return argument

    def add_option(self, name, value_type=OPTION_VALUE_OPTIONAL, default=None, flag=False):
        """Declare (or redeclare) a named option and return its definition."""
        self._options[name] = option = Option(name, value_type, default, flag)
        return option

    @property
    def usage(self):
        """
        Usage string derived from the declarations (pure, no side effects).

        Example
        - "cmd a [b] [--o1[=value]] [--o2=value]"
        """
        parts = [self.name] if self.name else []

        for argument in self._arguments:
            parts.append(argument.name if argument.required else f"[{argument.name}]")

        for option in self._options.values():
            value = "=value" if option.value_required else "[=value]"
            parts.append(f"[{option.dashes}{option.name}{value}]")

        return " ".join(parts)

    def run(self):
        """
        Invoke the handler with (application, output, input, parameter).

        Returns the handler's result, or None when no handler is set.
        """
        if self.handler is None:
            return None
        return self.handler(self._application, self._output, self._input, self._parameter)

    def run_command(self, command, tokens=(), /):
        """
        Run another command from inside this one.

        The other command gets a fresh Parameter built from tokens (without a
        script name: this command's script name is reused), this command's
        application/output/input, and its declarations bound before it runs.
        Every token is positional input for that command; none selects a command.
        """
        if not isinstance(command, Command):
            raise TypeError("run_command() first argument must be a command")

        script = self._parameter.script_name if self._parameter is not None else ""
        parameter = Parameter([script or "", *tokens])
        parameter.disable_command_name()

        command.prepare(self._application, self._output, self._input, parameter)
        parameter.bind_arguments(command.arguments)
        parameter.bind_options(command.options)

        return command.run()


def command(source=Unset, /, name=Unset, description=Unset):
    """
    Create a Command from a handler, or return a decorator that does it later.

    Invocation modes
    - Direct:    greet = command(handler, name="greet")
    - Decorator: @command  /  @command("greet", description="...")

    Defaults
    - name: the handler's __name__ with underscores turned into hyphens.
    - description: the handler's docstring, when it has one.
    """
    if isinstance(source, str):
        if name is not Unset:
            raise TypeError("command() got multiple values for argument 'name'")
        source, name = Unset, source

    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(
            coalesce(name, getattr(source, "__name__", "").replace("_", "-") or Unset),
            coalesce(description, inspect.getdoc(source) or Unset),
            source,
        )

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Command",
    "command",
)
