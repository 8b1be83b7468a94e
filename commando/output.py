"""
Commando output, written through a rich console.

Markup
- Lines accept rich console markup: "[yellow]Usage[/yellow]: ...". Text that
  may contain square brackets (usage strings, user input) must be passed
  through rich.markup.escape first.

Blocks
- write_block() frames lines in a square box, with an empty line before and
  after; the error/info/success variants only pick the style.
"""
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .utils import *


class Output:
    """
    Thin writer over rich.console.Console.

    Parameters
    - console: Console | Unset
      Console to write to. Unset creates a console on stdout (syntax
      highlighting disabled so plain text stays plain).
    """

    console = mirror("console")

    def __init__(self, console=Unset):
        if not isinstance(console, Console | Unset):
            raise TypeError(f"{type(self).__name__} 'console' must be a rich console")
        self._console = Console(highlight=False) if console is Unset else console

    def write(self, string, /):
        self._console.print(string, end="")

    def writeln(self, line="", /):
        self._console.print(line)

    def writelns(self, lines, /):
        for line in lines:
            self.writeln(line)

    def newline(self, count=1, /):
        for _ in range(count):
            self._console.print()

    def write_block(self, lines, /, style=""):
        # A single entry may itself hold several lines.
        content = "\n".join(part for line in lines for part in str(line).split("\n"))
        self.newline()
        self._console.print(Panel(Text.from_markup(content), box=box.SQUARE, style=style, expand=False))
        self.newline()

    def write_error_block(self, lines, /):
        self.write_block(lines, style="bold white on red")

    def write_info_block(self, lines, /):
        self.write_block(lines, style="bold black on cyan")

    def write_success_block(self, lines, /):
        self.write_block(lines, style="bold black on green")

    def write_fault(self, fault, /):
        """Render a fault through its own __rich__ representation."""
        self._console.print(fault)


__all__ = (
    "Output",
)
