"""
Batch execution of an external tool over a list of files.
Computes collision-free output names, builds one invocation per input,
runs it and records what was run.
"""
import asyncio
import os
import shlex
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set
from dataclasses import dataclass
import logging

from ..core.extensions import normalize_ext
from ..core.interfaces import (
    IBatchRunner,
    ILogSink,
    Platform,
    RunResult,
    ToolInvocation,
)
from ..core.platform import current_platform
from .buffers import COMMAND_BUFFER, OutputBuffer

logger = logging.getLogger(__name__)

MISSING_EXECUTABLE = 127


def converter_command(platform: Platform) -> str:
    """ImageMagick entry point for the platform."""
    # Windows ships its own convert.exe, so ImageMagick installs as magick.
    if platform is Platform.WINDOWS:
        return "magick"
    elif platform in (Platform.MACOS, Platform.LINUX):
        return "convert"
    raise ValueError(f"Unknown platform: {platform}")


def unique_output_path(
    input_path: Path,
    name_suffix: str,
    output_ext: str,
    taken: Optional[Set[Path]] = None
) -> Path:
    """
    Derive an output path that does not exist yet.

    The input's extension is replaced by name_suffix + output_ext. While the
    candidate exists, name_suffix is repeated once more:
    photo.jpg -> photo-s60.jpg -> photo-s60-s60.jpg -> ...

    Args:
        input_path: Source file
        name_suffix: Token appended to the stem
        output_ext: Target extension, with or without leading dot
        taken: Paths already reserved by the current batch

    Returns:
        First candidate that is neither on disk nor in taken
    """
    input_path = Path(input_path)
    ext = normalize_ext(output_ext)
    taken = taken or set()

    base = input_path.with_suffix("")
    candidate = base.with_name(base.name + name_suffix + ext)

    while candidate.exists() or candidate in taken:
        if not name_suffix:
            raise ValueError(f"Refusing to overwrite existing file: {candidate}")
        base = base.with_name(base.name + name_suffix)
        candidate = base.with_name(base.name + name_suffix + ext)

    return candidate


def relative_to_cwd(path: Path, cwd: Optional[Path] = None) -> str:
    """Path relative to cwd, or unchanged when no relative form exists."""
    cwd = cwd or Path.cwd()
    try:
        return os.path.relpath(path, cwd)
    except ValueError:
        # Different drives on Windows
        return str(path)


@dataclass
class RunnerConfig:
    """Configuration for batch execution."""
    platform: Optional[Platform] = None
    command_name: Optional[str] = None
    working_dir: Optional[Path] = None
    capture_output: bool = True


class BatchCommandRunner(IBatchRunner):
    """
    Runs the image converter once per input file.

    Example:
        runner = BatchCommandRunner()
        runner.run([Path("photo.jpg")], "-scale 60%", "-s60", ".jpg")
    """

    def __init__(
        self,
        config: Optional[RunnerConfig] = None,
        sink: Optional[ILogSink] = None
    ):
        self.config = config or RunnerConfig()
        self.sink = sink if sink is not None else OutputBuffer(COMMAND_BUFFER)

    @property
    def platform(self) -> Platform:
        return self.config.platform or current_platform()

    @property
    def command_name(self) -> str:
        return self.config.command_name or converter_command(self.platform)

    @property
    def working_dir(self) -> Path:
        return Path(self.config.working_dir) if self.config.working_dir else Path.cwd()

    def build_invocation(
        self,
        input_path: Path,
        output_path: Path,
        tool_args: str
    ) -> ToolInvocation:
        """Tool name, split arguments, then relative input and output paths."""
        cwd = self.working_dir
        argv = shlex.split(tool_args)
        argv.append(relative_to_cwd(input_path, cwd))
        argv.append(relative_to_cwd(output_path, cwd))
        return ToolInvocation(self.command_name, argv)

    def plan(
        self,
        input_files: Iterable[Path],
        tool_args: str,
        name_suffix: str,
        output_ext: str,
        taken: Optional[Set[Path]] = None
    ) -> List[RunResult]:
        """
        Compute output paths and invocations without executing anything.
        Outputs are reserved in taken, so several plans sharing one set
        never hand out the same path.
        """
        if taken is None:
            taken = set()
        planned = []
        for input_path in input_files:
            input_path = Path(input_path)
            output_path = unique_output_path(input_path, name_suffix, output_ext, taken)
            taken.add(output_path)
            invocation = self.build_invocation(input_path, output_path, tool_args)
            planned.append(RunResult(invocation, input_path, output_path))
        return planned

    def run(
        self,
        input_files: Sequence[Path],
        tool_args: str,
        name_suffix: str,
        output_ext: str,
        taken: Optional[Set[Path]] = None
    ) -> List[RunResult]:
        """
        Run the converter for each input, one after the other.
        Outputs already reserved in taken are skipped.

        Returns:
            One RunResult per input, in input order
        """
        results = []
        if taken is None:
            taken = set()
        for input_path in input_files:
            input_path = Path(input_path)
            output_path = unique_output_path(input_path, name_suffix, output_ext, taken)
            taken.add(output_path)
            invocation = self.build_invocation(input_path, output_path, tool_args)
            result = RunResult(invocation, input_path, output_path)
            result.returncode = self.execute(invocation, input_path)
            results.append(result)
        return results

    async def run_async(
        self,
        input_files: Sequence[Path],
        tool_args: str,
        name_suffix: str,
        output_ext: str,
        taken: Optional[Set[Path]] = None
    ) -> List[RunResult]:
        """Launch every invocation at once and gather their exit codes."""
        planned = self.plan(input_files, tool_args, name_suffix, output_ext, taken)
        codes = await asyncio.gather(
            *(self.execute_async(r.invocation, r.input_path) for r in planned)
        )
        for result, code in zip(planned, codes):
            result.returncode = code
        return planned

    def execute(
        self,
        invocation: ToolInvocation,
        file: Optional[Path] = None,
        sink: Optional[ILogSink] = None
    ) -> int:
        """Run one invocation to completion and return its exit code."""
        sink = sink if sink is not None else self.sink
        self._record(invocation, file, sink)

        try:
            result = subprocess.run(
                invocation.command,
                cwd=self.working_dir,
                stdout=subprocess.PIPE if self.config.capture_output else None,
                stderr=subprocess.STDOUT if self.config.capture_output else None,
                universal_newlines=True
            )
        except FileNotFoundError:
            logger.error(f"{invocation.command_name} not found. Install it and add to PATH")
            sink.append(f"{invocation.command_name}: command not found",
                        command=invocation.command_line, file=file)
            return MISSING_EXECUTABLE

        if result.stdout:
            self._append_output(result.stdout, invocation, file, sink)
        self._check_returncode(invocation, result.returncode)
        return result.returncode

    async def execute_async(
        self,
        invocation: ToolInvocation,
        file: Optional[Path] = None,
        sink: Optional[ILogSink] = None
    ) -> int:
        """Run one invocation as an asyncio subprocess."""
        sink = sink if sink is not None else self.sink
        self._record(invocation, file, sink)

        try:
            process = await asyncio.create_subprocess_exec(
                *invocation.command,
                cwd=str(self.working_dir),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT
            )
        except FileNotFoundError:
            logger.error(f"{invocation.command_name} not found. Install it and add to PATH")
            sink.append(f"{invocation.command_name}: command not found",
                        command=invocation.command_line, file=file)
            return MISSING_EXECUTABLE

        stdout, _ = await process.communicate()
        if stdout:
            self._append_output(stdout.decode(errors="replace"), invocation, file, sink)
        self._check_returncode(invocation, process.returncode)
        return process.returncode

    def _record(self, invocation: ToolInvocation, file: Optional[Path], sink: ILogSink) -> None:
        logger.info(f"Running: {invocation.command_line}")
        sink.append(invocation.command_line, command=invocation.command_line, file=file)

    def _append_output(
        self,
        output: str,
        invocation: ToolInvocation,
        file: Optional[Path],
        sink: ILogSink
    ) -> None:
        for line in output.splitlines():
            line = line.rstrip()
            if line:
                sink.append(line, command=invocation.command_line, file=file)

    def _check_returncode(self, invocation: ToolInvocation, returncode: int) -> None:
        if returncode != 0:
            logger.warning(f"{invocation.command_name} exited with code {returncode}")
