"""
File selection sources.
"""
from .sources import (
    FileBrowserSelection,
    SingleFileSelection,
    ManualSelection,
    make_selection,
    resolve_files,
)

__all__ = [
    'FileBrowserSelection',
    'SingleFileSelection',
    'ManualSelection',
    'make_selection',
    'resolve_files',
]
