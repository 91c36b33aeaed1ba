"""
Selection sources.
One capability - "which files does this action apply to" - implemented per
embedding environment and chosen through an explicit SelectionContext.
"""
from pathlib import Path
from typing import List, Optional, Sequence
import logging

from ..core.interfaces import IPrompter, ISelectionSource, SelectionContext

logger = logging.getLogger(__name__)


class FileBrowserSelection(ISelectionSource):
    """Marked files of a listing view; the file under the cursor when nothing is marked."""

    context = SelectionContext.FILE_BROWSER

    def __init__(self, marked: Sequence[Path] = (), current: Optional[Path] = None):
        self.marked = [Path(p) for p in marked]
        self.current = Path(current) if current is not None else None

    def files(self) -> List[Path]:
        if self.marked:
            return list(self.marked)
        if self.current is not None:
            return [self.current]
        return []


class SingleFileSelection(ISelectionSource):
    """The file behind a single-file viewer."""

    context = SelectionContext.SINGLE_FILE

    def __init__(self, path: Path):
        self.path = Path(path)

    def files(self) -> List[Path]:
        return [self.path]


class ManualSelection(ISelectionSource):
    """A path typed in by the user."""

    context = SelectionContext.MANUAL

    def __init__(self, prompter: IPrompter, prompt: str = "File"):
        self.prompter = prompter
        self.prompt = prompt

    def files(self) -> List[Path]:
        answer = self.prompter.ask_string(self.prompt).strip()
        return [Path(answer).expanduser()] if answer else []


def make_selection(
    context: SelectionContext,
    marked: Sequence[Path] = (),
    current: Optional[Path] = None,
    prompter: Optional[IPrompter] = None
) -> ISelectionSource:
    """Build the selection source for a calling context."""
    if context is SelectionContext.FILE_BROWSER:
        return FileBrowserSelection(marked, current)
    elif context is SelectionContext.SINGLE_FILE:
        if current is None:
            raise ValueError("Single-file context needs the current file")
        return SingleFileSelection(current)
    elif context is SelectionContext.MANUAL:
        if prompter is None:
            raise ValueError("Manual selection needs a prompter")
        return ManualSelection(prompter)
    raise ValueError(f"Unknown selection context: {context}")


def resolve_files(source: ISelectionSource) -> List[Path]:
    """Files of a source; an empty selection is an error."""
    files = source.files()
    if not files:
        raise ValueError("No files selected")
    logger.debug(f"Selected {len(files)} file(s)")
    return files
