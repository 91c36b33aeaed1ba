"""
Lossless in-place optimization using optipng.
"""
from pathlib import Path
from typing import List, Optional, Sequence
from dataclasses import dataclass, field
import logging

from ..core.interfaces import RunResult, ToolInvocation
from ..runner.batch import BatchCommandRunner, relative_to_cwd
from ..runner.buffers import BufferRegistry, OPTIMIZER_BUFFER, OutputBuffer

logger = logging.getLogger(__name__)


@dataclass
class OptimizerConfig:
    """Configuration for the optimizer invocation."""
    command: str = "optipng"
    args: List[str] = field(default_factory=lambda: ["-o2"])


class PngOptimizer:
    """Optimizes files in place; output goes to a dedicated buffer."""

    def __init__(
        self,
        runner: Optional[BatchCommandRunner] = None,
        buffers: Optional[BufferRegistry] = None,
        config: Optional[OptimizerConfig] = None
    ):
        self.runner = runner or BatchCommandRunner()
        self.buffers = buffers or BufferRegistry()
        self.config = config or OptimizerConfig()

    def build_invocation(self, file: Path) -> ToolInvocation:
        return ToolInvocation(
            self.config.command,
            [*self.config.args, relative_to_cwd(file, self.runner.working_dir)]
        )

    def optimize(self, files: Sequence[Path]) -> List[RunResult]:
        """Run the optimizer on each file; the buffer starts empty."""
        buffer: OutputBuffer = self.buffers.fresh(OPTIMIZER_BUFFER)
        results = []
        for file in files:
            file = Path(file)
            invocation = self.build_invocation(file)
            code = self.runner.execute(invocation, file, sink=buffer)
            results.append(RunResult(invocation, file, file, code))
        logger.info(f"Optimized {len(results)} file(s)")
        return results
