"""
Commando faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain to keep logs and searches predictable.
- CommandException: base type that carries a message plus options (title, code,
  hint and any context such as the offending name or index) and knows how to
  render itself with rich.
- One subclass per failure the parsing/dispatch core can surface.

Integration
- The core raises these exceptions; nothing inside the core catches them.
- Application.main() is the single place that renders them (via rich) together
  with the usage string of the command that failed.
- str(exception) is always the plain message, so non-rich callers can log it.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the toolkit (stable identifiers).

    grouping (by high-level domain)
    - configuration (1100x)
      • CONFIGURATION
    - routing (1110x)
      • UNKNOWN_COMMAND, NO_COMMAND_RESOLVED
    - binding (1112x)
      • MISSING_REQUIRED_ARGUMENT, MISSING_REQUIRED_OPTION_VALUE
    """
    # --- configuration errors (110xx) ---
    CONFIGURATION                 = 11001

    # --- routing errors (111xx) ---
    UNKNOWN_COMMAND               = 11101
    NO_COMMAND_RESOLVED           = 11103

    # --- binding errors (1112x) ---
    MISSING_REQUIRED_ARGUMENT     = 11121
    MISSING_REQUIRED_OPTION_VALUE = 11122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base class for every fault raised by the toolkit.

    options
    - title: short, lowercase headline ("missing required argument").
    - code: FaultCode member.
    - hint: one actionable sentence.
    - tool: program name shown in the rendered header.
    - colorful / fancy: rendering switches (plain text / panel chrome).
    - anything else is context for the reporter and is exposed as an attribute
      (e.g. error.name, error.order).
    """
    __title__ = "command error"
    __code__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType({
            "title": type(self).__title__,
            "code": type(self).__code__,
        } | options)

    def __getattr__(self, name):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        tool = getattr(main, "__prog__", self.options.get("tool") or os.path.basename(sys.argv[0]))
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            text(tool, styler("prog-name")),
            *((" — ", text(code.normalize(), styler("code"))) if code else ()),
            " | ",
            text(str(self.options["title"]).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message or "", styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(CommandException):
    """A command, argument or option was declared with an invalid shape."""
    __title__ = "invalid configuration"
    __code__ = FaultCode.CONFIGURATION


class UnknownCommandError(CommandException):
    """A command name was looked up that the registry does not hold."""
    __title__ = "unknown command"
    __code__ = FaultCode.UNKNOWN_COMMAND


class NoCommandResolvedError(CommandException):
    """Neither a command given on the command line nor a default command could be resolved."""
    __title__ = "no command to run"
    __code__ = FaultCode.NO_COMMAND_RESOLVED


class MissingRequiredArgumentError(CommandException):
    """A required positional argument had no token bound to it (carries order and name)."""
    __title__ = "missing required argument"
    __code__ = FaultCode.MISSING_REQUIRED_ARGUMENT


class MissingRequiredOptionValueError(CommandException):
    """A value-required option was passed without a usable value (carries name and dashes)."""
    __title__ = "option value required"
    __code__ = FaultCode.MISSING_REQUIRED_OPTION_VALUE


__all__ = (
    "FaultCode",
    "CommandException",
    "ConfigurationError",
    "UnknownCommandError",
    "NoCommandResolvedError",
    "MissingRequiredArgumentError",
    "MissingRequiredOptionValueError",
)
