"""
Abstract interfaces following Interface Segregation Principle (SOLID).
Defines contracts for all batchkit components.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Set
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import shlex


class Platform(Enum):
    """Operating system families with distinct tool conventions."""
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"


class SelectionContext(Enum):
    """Where the files for an action come from, in priority order."""
    FILE_BROWSER = "file_browser"
    SINGLE_FILE = "single_file"
    MANUAL = "manual"


class SortKey(Enum):
    """Directory listing sort orders."""
    NAME = "name"
    DATE = "date"
    SIZE = "size"
    DIRS_FIRST = "dirs-first"


@dataclass
class BatchRequest:
    """One batch of files to push through the image converter."""
    input_files: List[Path]
    tool_args: str = ""
    name_suffix: str = ""
    output_ext: str = ""

    def __post_init__(self):
        self.input_files = [Path(f) for f in self.input_files]


@dataclass
class ToolInvocation:
    """A single external command, ready to execute."""
    command_name: str
    argv: List[str] = field(default_factory=list)

    @property
    def command(self) -> List[str]:
        return [self.command_name, *self.argv]

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)


@dataclass
class RunResult:
    """Outcome of one executed invocation."""
    invocation: ToolInvocation
    input_path: Path
    output_path: Optional[Path] = None
    returncode: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.returncode == 0


@dataclass
class LogEntry:
    """Structured line appended to an output buffer."""
    text: str
    command: Optional[str] = None
    file: Optional[Path] = None
    timestamp: datetime = field(default_factory=datetime.now)


class ILogSink(ABC):
    """Interface for append-only output buffers."""

    @abstractmethod
    def append(
        self,
        text: str,
        command: Optional[str] = None,
        file: Optional[Path] = None
    ) -> LogEntry:
        """Append a line of output."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop all buffered entries."""
        pass


class ISelectionSource(ABC):
    """Interface for resolving the current file selection."""

    context: SelectionContext = SelectionContext.MANUAL

    @abstractmethod
    def files(self) -> List[Path]:
        """Return the selected files in selection order."""
        pass


class IPrompter(ABC):
    """Interface for asking the user for operation parameters."""

    @abstractmethod
    def ask_string(self, prompt: str, default: Optional[str] = None) -> str:
        """Read free text."""
        pass

    @abstractmethod
    def ask_int(self, prompt: str, default: Optional[int] = None) -> int:
        """Read an integer."""
        pass

    @abstractmethod
    def ask_yes_no(self, prompt: str) -> bool:
        """Ask a yes/no question about an operation parameter."""
        pass

    @abstractmethod
    def ask_confirm(self, prompt: str) -> bool:
        """Ask the user to confirm an action; assume-yes applies here only."""
        pass

    @abstractmethod
    def ask_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        default: Optional[str] = None
    ) -> str:
        """Pick one value from a closed list."""
        pass


class IBatchRunner(ABC):
    """Interface for running an external tool over a batch of files."""

    @abstractmethod
    def run(
        self,
        input_files: Sequence[Path],
        tool_args: str,
        name_suffix: str,
        output_ext: str,
        taken: Optional[Set[Path]] = None
    ) -> List[RunResult]:
        """Run the tool once per input file and wait for each."""
        pass

    @abstractmethod
    async def run_async(
        self,
        input_files: Sequence[Path],
        tool_args: str,
        name_suffix: str,
        output_ext: str,
        taken: Optional[Set[Path]] = None
    ) -> List[RunResult]:
        """Launch the tool for every input file concurrently."""
        pass


class IArchiver(ABC):
    """Interface for archive creation."""

    @abstractmethod
    def create(self, source: Path) -> Optional[Path]:
        """Create an archive next to source."""
        pass


class IAppLauncher(ABC):
    """Interface for opening files in external applications."""

    @abstractmethod
    def open(self, files: Sequence[Path]) -> int:
        """Open each file; return the number of open requests dispatched."""
        pass
