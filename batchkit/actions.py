"""
FileActions - Main facade for file-manager actions.
Resolves the selection, asks for missing parameters and hands the work
to the converter, optimizer, metadata tool, archiver or launcher.
Follows Facade Pattern for simplified API.
"""
import asyncio
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
import logging

from .core.extensions import is_png
from .core.interfaces import (
    IPrompter,
    ISelectionSource,
    RunResult,
    SelectionContext,
    SortKey,
)
from .image.convert import (
    ImageConverter,
    PALETTE_DEPTHS,
    autocrop_requests,
    convert_to_jpg_requests,
    convert_to_png_requests,
    palette_requests,
    remove_transparency_requests,
    scale_requests,
)
from .image.optimizer import PngOptimizer
from .metadata.exiftool import MetadataTool
from .archive.zipper import ZipArchiver
from .launcher.apps import (
    AppLauncher,
    ExternalAppConfig,
    alternate_viewer_spec,
    editor_spec,
    viewer_spec,
)
from .listing.sorter import DirectoryListing
from .prompt.prompter import ScriptedPrompter
from .runner.batch import BatchCommandRunner, RunnerConfig
from .runner.buffers import BufferRegistry, COMMAND_BUFFER
from .selection.sources import resolve_files

logger = logging.getLogger(__name__)


@dataclass
class PromptDefaults:
    """Values offered when the user just presses enter."""
    scale_percent: int = 50
    scale_quality: int = 90
    browser_jpg_quality: int = 85
    viewer_jpg_quality: int = 90
    max_colors: str = "16"


@dataclass
class FileActionsConfig:
    """Configuration for FileActions."""
    runner: RunnerConfig = field(default_factory=RunnerConfig)
    apps: ExternalAppConfig = field(default_factory=ExternalAppConfig)
    prompts: PromptDefaults = field(default_factory=PromptDefaults)
    concurrent: bool = False


class FileActions:
    """
    Main facade for the file-manager actions.

    Example:
        actions = FileActions(prompter=ConsolePrompter())
        source = FileBrowserSelection([Path("a.jpg"), Path("b.jpg")])

        actions.scale(source, percent=60, quality=90, sharpen=True)
        actions.convert_to_png(source)
        actions.zip(source)
    """

    def __init__(
        self,
        config: Optional[FileActionsConfig] = None,
        prompter: Optional[IPrompter] = None,
        buffers: Optional[BufferRegistry] = None
    ):
        self.config = config or FileActionsConfig()
        self.prompter = prompter or ScriptedPrompter()
        self.buffers = buffers or BufferRegistry()

        self.runner = BatchCommandRunner(self.config.runner, self.buffers.get(COMMAND_BUFFER))
        self.converter = ImageConverter(self.runner)
        self.optimizer = PngOptimizer(self.runner, self.buffers)
        self.metadata = MetadataTool(self.runner, self.buffers)
        self.archiver = ZipArchiver()

    def _convert(self, requests) -> List[RunResult]:
        if self.config.concurrent:
            return asyncio.run(self.converter.submit_async(requests))
        return self.converter.submit(requests)

    def scale(
        self,
        source: ISelectionSource,
        percent: Optional[int] = None,
        quality: Optional[int] = None,
        sharpen: Optional[bool] = None,
        output_ext: Optional[str] = None
    ) -> List[RunResult]:
        """Scale by a percentage; quality and sharpen only matter for non-png inputs."""
        files = resolve_files(source)
        defaults = self.config.prompts

        if percent is None:
            percent = self.prompter.ask_int("Scale percent", defaults.scale_percent)

        if not all(is_png(f) for f in files):
            if quality is None:
                quality = self.prompter.ask_int("Quality (1-100)", defaults.scale_quality)
            if sharpen is None:
                sharpen = self.prompter.ask_yes_no("Sharpen")

        if output_ext is None:
            output_ext = "." + self.prompter.ask_choice("Output format", ["jpg", "png"], "jpg")

        return self._convert(scale_requests(
            files,
            percent,
            quality if quality is not None else defaults.scale_quality,
            bool(sharpen),
            output_ext
        ))

    def autocrop(self, source: ISelectionSource) -> List[RunResult]:
        return self._convert(autocrop_requests(resolve_files(source)))

    def remove_transparency(self, source: ISelectionSource) -> List[RunResult]:
        """Flatten png files onto white; other files are skipped."""
        return self._convert(remove_transparency_requests(resolve_files(source)))

    def convert_to_jpg(self, source: ISelectionSource, quality: Optional[int] = None) -> List[RunResult]:
        files = resolve_files(source)
        if quality is None:
            if source.context is SelectionContext.SINGLE_FILE:
                default = self.config.prompts.viewer_jpg_quality
            else:
                default = self.config.prompts.browser_jpg_quality
            quality = self.prompter.ask_int("Quality (1-100)", default)
        return self._convert(convert_to_jpg_requests(files, quality))

    def convert_to_png(self, source: ISelectionSource) -> List[RunResult]:
        return self._convert(convert_to_png_requests(resolve_files(source)))

    def reduce_palette(
        self,
        source: ISelectionSource,
        max_colors: Optional[str] = None,
        grayscale: Optional[bool] = None
    ) -> List[RunResult]:
        """Drawing mode: few colors, no dithering, png output."""
        files = resolve_files(source)
        if max_colors is None:
            max_colors = self.prompter.ask_choice(
                "Max colors", list(PALETTE_DEPTHS), self.config.prompts.max_colors
            )
        if grayscale is None:
            grayscale = self.prompter.ask_yes_no("Grayscale")
        return self._convert(palette_requests(files, max_colors, grayscale))

    def optimize(self, source: ISelectionSource) -> List[RunResult]:
        return self.optimizer.optimize(resolve_files(source))

    def show_metadata(self, source: ISelectionSource) -> List[RunResult]:
        return self.metadata.show(resolve_files(source))

    def strip_metadata(self, source: ISelectionSource) -> List[RunResult]:
        """Destructive: originals are overwritten."""
        return self.metadata.strip(resolve_files(source))

    def zip(self, source: ISelectionSource) -> Optional[Path]:
        """Archive the first selected file only."""
        return self.archiver.create_first(resolve_files(source))

    def open_in_editor(self, source: ISelectionSource) -> int:
        launcher = AppLauncher(editor_spec(self.config.apps), self.prompter, self.config.runner.platform)
        return launcher.open(resolve_files(source))

    def open_in_viewer(self, source: ISelectionSource) -> int:
        launcher = AppLauncher(viewer_spec(), self.prompter, self.config.runner.platform)
        return launcher.open(resolve_files(source))

    def open_in_alternate_viewer(self, source: ISelectionSource) -> int:
        """Windows only."""
        launcher = AppLauncher(alternate_viewer_spec(self.config.apps), self.prompter,
                               self.config.runner.platform)
        launcher.check_platform()
        return launcher.open(resolve_files(source))

    def sort_listing(self, listing: DirectoryListing, key=None) -> List[str]:
        if key is None:
            key = self.prompter.ask_choice(
                "Sort by", [k.value for k in SortKey], SortKey.NAME.value
            )
        return listing.resort(key)
