"""Append-only text log of generated painting descriptions."""

import os
import re

from painting_narrator.errors import LogWriteError
from painting_narrator.models import NarrationLogEntry

# Descriptions may contain blank lines, so a record ends only where the next begins.
_ENTRY_RE = re.compile(r"Painting: ([^\n]*)\nDescription: (.*?)\n\n(?=Painting: |\Z)", re.DOTALL)


def format_entry(title: str, description: str) -> str:
    return f"Painting: {title}\nDescription: {description}\n\n"


class NarrationLog:
    def __init__(self, path: str):
        self.path = path

    def append(self, title: str, description: str) -> NarrationLogEntry:
        """Append one record. Raises LogWriteError if the file can't be written."""
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(format_entry(title, description))
        except OSError as e:
            raise LogWriteError(self.path, e) from e
        return NarrationLogEntry(title=title, description=description)

    def entries(self) -> list[NarrationLogEntry]:
        """Read the log back. Returns [] if it doesn't exist yet."""
        if not os.path.exists(self.path):
            return []
        with open(self.path, encoding="utf-8") as f:
            text = f.read()
        return [NarrationLogEntry(title=t, description=d) for t, d in _ENTRY_RE.findall(text)]
