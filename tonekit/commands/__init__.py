"""tonekit subcommands, one module each.

A command module defines a `command` object (see tonekit.core.types.Command)
and its docstring doubles as `tonekit help <name>` output. New modules are
added to COMMANDS below.
"""

from tonekit.commands import contrast, convert, dislike, distance, extract, theme
from tonekit.core.types import Command

COMMANDS: dict[str, Command] = {
    module.command.name: module.command for module in (contrast, convert, dislike, distance, extract, theme)
}
