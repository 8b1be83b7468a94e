"""
Built-in help command.

- "tool help"          → list every registered command with its description.
- "tool help <name>"   → description and usage of one command.

The command only reads the application through its public accessors
(name, get_commands, get_command, get_command_usage).
"""
import difflib

from rich.markup import escape

from .commands import Command
from .faults import UnknownCommandError


class HelpCommand(Command):
    name = "help"
    description = "Shows all commands available."

    def __init__(self):
        super().__init__()
        self.add_argument("command_name")

    def run(self):
        if self.application.name:
            self.output.writeln(self.application.name)
            self.output.newline()

        command_name = self.parameter.get_argument("command_name")

        if command_name and self.parameter.command_name == self.name:
            self._show_command_help(command_name)
        else:
            self._show_general_help()

    def _show_general_help(self):
        self.output.writeln("[yellow]Available commands:[/yellow]")

        commands = self.application.get_commands()
        width = max(map(len, commands), default=0)

        for name, command in commands.items():
            self.output.writeln(
                "  [green]%s[/green]  %s" % (escape(name.ljust(width)), escape(command.description or ""))
            )

    def _show_command_help(self, command_name):
        command = self.application.get_command(command_name)

        if command is None:
            suggestions = difflib.get_close_matches(command_name, self.application.get_commands().keys(), 5)
            try:
                hint = "did you mean %r? run '%s' to see all commands" % (suggestions[0], self.name)
            except IndexError:
                hint = "run '%s' to see all commands" % self.name
            raise UnknownCommandError(
                "Unknown command: %s" % command_name,
                hint=hint,
                name=command_name,
                suggestions=suggestions,
            )

        if command.description:
            self.output.writeln("[yellow]Description:[/yellow]")
            self.output.writeln("  " + escape(command.description))
            self.output.newline()

        self.output.writeln("[yellow]Usage:[/yellow]")
        self.output.writeln("  " + escape(self.application.get_command_usage(command)))


__all__ = (
    "HelpCommand",
)
