"""
BatchKit - File-manager actions backed by external tools.

Batch-invokes external programs against a file or a selection of files:
- Image scaling, autocrop, transparency removal and format conversion (ImageMagick)
- Drawing-palette reduction
- Lossless in-place optimization (optipng)
- Metadata display and removal (exiftool)
- Zipping a single file
- Opening files in external editors and viewers
- Re-sorting directory listings

The package only assembles arguments, picks output names that never
overwrite existing files, and dispatches commands.

Example usage:
    from batchkit import FileActions, FileBrowserSelection

    actions = FileActions()
    source = FileBrowserSelection([Path("photo.jpg")])

    # photo.jpg -> photo-s60.jpg
    actions.scale(source, percent=60, quality=90, sharpen=True, output_ext=".jpg")

    # art.jpg -> art-2.png, 16 gray levels
    actions.reduce_palette(source, max_colors="16", grayscale=True)
"""

__version__ = "1.0.0"

from .actions import FileActions, FileActionsConfig, PromptDefaults
from .core.interfaces import (
    Platform,
    SelectionContext,
    SortKey,
    BatchRequest,
    ToolInvocation,
    RunResult,
    LogEntry,
)
from .core.errors import BatchKitError, ConfigurationError, UnsupportedPlatformError
from .core.platform import current_platform
from .runner import (
    BatchCommandRunner,
    RunnerConfig,
    BufferRegistry,
    OutputBuffer,
    unique_output_path,
)
from .image import ImageConverter, PngOptimizer, palette_depth
from .metadata import MetadataTool
from .archive import ZipArchiver, ZipConfig
from .launcher import AppLauncher, ExternalAppConfig
from .listing import DirectoryListing
from .prompt import ConsolePrompter, ScriptedPrompter
from .selection import (
    FileBrowserSelection,
    SingleFileSelection,
    ManualSelection,
    make_selection,
)

__all__ = [
    # Main facade
    "FileActions",
    "FileActionsConfig",
    "PromptDefaults",

    # Core types
    "Platform",
    "SelectionContext",
    "SortKey",
    "BatchRequest",
    "ToolInvocation",
    "RunResult",
    "LogEntry",
    "current_platform",

    # Errors
    "BatchKitError",
    "ConfigurationError",
    "UnsupportedPlatformError",

    # Execution
    "BatchCommandRunner",
    "RunnerConfig",
    "BufferRegistry",
    "OutputBuffer",
    "unique_output_path",

    # Tools
    "ImageConverter",
    "PngOptimizer",
    "palette_depth",
    "MetadataTool",
    "ZipArchiver",
    "ZipConfig",
    "AppLauncher",
    "ExternalAppConfig",
    "DirectoryListing",

    # Prompting and selection
    "ConsolePrompter",
    "ScriptedPrompter",
    "FileBrowserSelection",
    "SingleFileSelection",
    "ManualSelection",
    "make_selection",
]
