"""
Metadata display and removal using exiftool.
Follows Single Responsibility Principle - only builds and runs exiftool calls.
"""
from pathlib import Path
from typing import List, Optional, Sequence
import logging

from ..core.interfaces import RunResult, ToolInvocation
from ..runner.batch import BatchCommandRunner, relative_to_cwd
from ..runner.buffers import BufferRegistry, METADATA_BUFFER

logger = logging.getLogger(__name__)

EXIFTOOL = "exiftool"
STRIP_ARGS = ["-all=", "-overwrite_original"]


class MetadataTool:
    """
    Shows or strips metadata, one exiftool call per file.

    strip() rewrites the original files and cannot be undone.
    """

    def __init__(
        self,
        runner: Optional[BatchCommandRunner] = None,
        buffers: Optional[BufferRegistry] = None,
        command: str = EXIFTOOL
    ):
        self.runner = runner or BatchCommandRunner()
        self.buffers = buffers or BufferRegistry()
        self.command = command

    def build_invocation(self, file: Path, strip: bool = False) -> ToolInvocation:
        args = list(STRIP_ARGS) if strip else []
        args.append(relative_to_cwd(file, self.runner.working_dir))
        return ToolInvocation(self.command, args)

    def show(self, files: Sequence[Path]) -> List[RunResult]:
        """Print all metadata fields of each file."""
        return self._run(files, strip=False)

    def strip(self, files: Sequence[Path]) -> List[RunResult]:
        """Clear every metadata field, overwriting the originals."""
        logger.warning(f"Stripping metadata in place from {len(files)} file(s)")
        return self._run(files, strip=True)

    def _run(self, files: Sequence[Path], strip: bool) -> List[RunResult]:
        buffer = self.buffers.fresh(METADATA_BUFFER)
        results = []
        for file in files:
            file = Path(file)
            invocation = self.build_invocation(file, strip)
            code = self.runner.execute(invocation, file, sink=buffer)
            buffer.append_separator()
            results.append(RunResult(invocation, file, file if strip else None, code))
        return results
