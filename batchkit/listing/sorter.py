"""
Directory listing sort orders.
Each sort key maps to the ls switches a file browser would re-list with;
DirectoryListing renders the same order in-process.
"""
from pathlib import Path
from typing import Dict, List, Optional
from dataclasses import dataclass
from datetime import datetime
import logging

from natsort import natsorted, ns

from ..core.errors import ConfigurationError
from ..core.interfaces import SortKey

logger = logging.getLogger(__name__)

SORT_SWITCHES: Dict[SortKey, str] = {
    SortKey.NAME: "-al",
    SortKey.DATE: "-alt",
    SortKey.SIZE: "-alS",
    SortKey.DIRS_FIRST: "-al --group-directories-first",
}


def parse_sort_key(value) -> SortKey:
    """Accept a SortKey or its string value."""
    if isinstance(value, SortKey):
        return value
    try:
        return SortKey(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError("sort key", value, [k.value for k in SortKey]) from None


def sort_switches(key) -> str:
    return SORT_SWITCHES[parse_sort_key(key)]


@dataclass
class ListingEntry:
    """One row of a directory listing."""
    path: Path
    is_dir: bool
    size: int
    mtime: float

    @property
    def name(self) -> str:
        return self.path.name

    def render(self) -> str:
        kind = "d" if self.is_dir else "-"
        stamp = datetime.fromtimestamp(self.mtime).strftime("%Y-%m-%d %H:%M")
        return f"{kind} {self.size:>12} {stamp} {self.name}"


class DirectoryListing:
    """Lists a folder and re-sorts it by a SortKey."""

    def __init__(self, folder: Path):
        self.folder = Path(folder)
        self.sort_key = SortKey.NAME

    def entries(self) -> List[ListingEntry]:
        if not self.folder.is_dir():
            raise ValueError(f"Not a directory: {self.folder}")
        result = []
        for child in self.folder.iterdir():
            try:
                stat = child.stat()
            except OSError:
                # dangling symlink: list the link itself, as ls does
                stat = child.lstat()
            result.append(ListingEntry(child, child.is_dir(), stat.st_size, stat.st_mtime))
        return result

    def sorted_entries(self, key=None) -> List[ListingEntry]:
        key = parse_sort_key(key) if key is not None else self.sort_key
        by_name = natsorted(self.entries(), key=lambda e: e.name, alg=ns.IGNORECASE)

        if key is SortKey.NAME:
            return by_name
        elif key is SortKey.DATE:
            return sorted(by_name, key=lambda e: e.mtime, reverse=True)
        elif key is SortKey.SIZE:
            return sorted(by_name, key=lambda e: e.size, reverse=True)
        elif key is SortKey.DIRS_FIRST:
            return sorted(by_name, key=lambda e: not e.is_dir)
        raise ConfigurationError("sort key", key, [k.value for k in SortKey])

    def resort(self, key) -> List[str]:
        """Switch the sort order and return the re-rendered listing."""
        self.sort_key = parse_sort_key(key)
        logger.info(f"Sorting {self.folder} by {self.sort_key.value} ({SORT_SWITCHES[self.sort_key]})")
        return self.render()

    def render(self, key: Optional[SortKey] = None) -> List[str]:
        return [entry.render() for entry in self.sorted_entries(key)]
