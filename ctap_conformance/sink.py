"""Output sinks for the human-readable report."""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, TextIO

_RESET = "\x1b[0m"


class Emphasis(Enum):
    """How an emphasized line is highlighted."""

    WARNING = "\x1b[0;33m"
    FAILURE = "\x1b[0;31m"


class ReportSink(Protocol):
    """Destination for report lines."""

    def line(self, text: str) -> None:
        """Emit a plain line."""

    def emphasized(self, text: str, emphasis: Emphasis) -> None:
        """Emit a highlighted line."""


@dataclass(kw_only=True)
class StreamSink:
    """Writes report lines to a text stream, optionally with ANSI colors."""

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    colored: bool = True

    def line(self, text: str) -> None:
        self.stream.write(f"{text}\n")

    def emphasized(self, text: str, emphasis: Emphasis) -> None:
        if self.colored:
            text = f"{emphasis.value}{text}{_RESET}"
        self.line(text)
