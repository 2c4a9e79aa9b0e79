"""Single-character console commands."""

from __future__ import annotations

from dataclasses import dataclass

DASHES = " ------------------- "
LINE = "." * 58 + "\n"

_FIRST_COMMAND = ord("*")
_LAST_COMMAND = ord("z")


@dataclass
class Console:
    """Holds console state toggled by typed commands."""

    verbose: bool = False

    def process_command(self, char: str) -> str | None:
        """Apply a typed character; return the message to show, if any."""
        if len(char) != 1 or not _FIRST_COMMAND <= ord(char) <= _LAST_COMMAND:
            return None
        if char.upper() == "V":
            self.verbose = not self.verbose
            return "\nVERBOSE - ON\n" if self.verbose else "\nVERBOSE - off\n\n"
        return None