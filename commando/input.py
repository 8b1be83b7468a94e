"""
Commando input, read through a rich console.

- get(): one line, surrounding whitespace removed.
- get_hidden(): one line without echo (passwords).
- get_yes_no(default): "y" → True, "n" → False, empty → default, anything else → False.
"""
from rich.console import Console

from .utils import *


class Input:
    """
    Line reader over rich.console.Console.

    Parameters
    - console: Console | Unset
      Console used for prompting; Unset creates a default console.
    - stream: TextIO | Unset
      File to read lines from instead of stdin (hidden input always uses the terminal).
    """

    console = mirror("console")

    def __init__(self, console=Unset, stream=Unset):
        if not isinstance(console, Console | Unset):
            raise TypeError(f"{type(self).__name__} 'console' must be a rich console")
        self._console = Console(highlight=False) if console is Unset else console
        self._stream = coalesce(stream)

    def get(self, prompt="", /):
        return self._console.input(prompt, stream=self._stream).strip()

    def get_hidden(self, prompt="", /):
        return self._console.input(prompt, password=True).strip()

    def get_yes_no(self, default=True, /, prompt=""):
        value = self.get(prompt).lower()

        if value == "y":
            return True
        elif value == "n":
            return False

        if not value:
            return default

        return False


__all__ = (
    "Input",
)
