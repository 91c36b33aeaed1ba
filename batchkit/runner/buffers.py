"""
Append-only output buffers for external tool output.
Each named buffer collects structured entries; ordering across
concurrently dispatched operations is not guaranteed.
"""
from pathlib import Path
from typing import Dict, List, Optional
import logging

from ..core.interfaces import ILogSink, LogEntry

logger = logging.getLogger(__name__)

OPTIMIZER_BUFFER = "optipng"
METADATA_BUFFER = "exiftool"
COMMAND_BUFFER = "commands"

SEPARATOR = "-" * 40


class OutputBuffer(ILogSink):
    """Named, append-only collection of LogEntry records."""

    def __init__(self, name: str):
        self.name = name
        self._entries: List[LogEntry] = []

    def append(
        self,
        text: str,
        command: Optional[str] = None,
        file: Optional[Path] = None
    ) -> LogEntry:
        entry = LogEntry(text=text, command=command, file=file)
        self._entries.append(entry)
        logger.debug(f"[{self.name}] {text}")
        return entry

    def append_separator(self) -> LogEntry:
        return self.append(SEPARATOR)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    @property
    def lines(self) -> List[str]:
        return [e.text for e in self._entries]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def __len__(self) -> int:
        return len(self._entries)


class BufferRegistry:
    """
    Holds the named buffers of a session.

    Example:
        buffers = BufferRegistry()
        out = buffers.fresh(OPTIMIZER_BUFFER)
        out.append("OK")
    """

    def __init__(self):
        self._buffers: Dict[str, OutputBuffer] = {}

    def get(self, name: str) -> OutputBuffer:
        """Return the buffer called name, creating it if needed."""
        if name not in self._buffers:
            self._buffers[name] = OutputBuffer(name)
        return self._buffers[name]

    def fresh(self, name: str) -> OutputBuffer:
        """Return the buffer called name with previous content dropped."""
        buffer = self.get(name)
        buffer.clear()
        return buffer

    def names(self) -> List[str]:
        return sorted(self._buffers)

    def __contains__(self, name: str) -> bool:
        return name in self._buffers
