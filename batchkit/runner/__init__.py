"""
Batch command execution and output buffers.
"""
from .batch import (
    BatchCommandRunner,
    RunnerConfig,
    converter_command,
    relative_to_cwd,
    unique_output_path,
)
from .buffers import (
    BufferRegistry,
    OutputBuffer,
    COMMAND_BUFFER,
    METADATA_BUFFER,
    OPTIMIZER_BUFFER,
)

__all__ = [
    'BatchCommandRunner',
    'RunnerConfig',
    'converter_command',
    'relative_to_cwd',
    'unique_output_path',
    'BufferRegistry',
    'OutputBuffer',
    'COMMAND_BUFFER',
    'METADATA_BUFFER',
    'OPTIMIZER_BUFFER',
]
