"""
Zip archive creation for a single selected file.
"""
from pathlib import Path
from typing import List, Optional, Sequence
from dataclasses import dataclass, field
import subprocess
import logging

from ..core.interfaces import IArchiver

logger = logging.getLogger(__name__)


@dataclass
class ZipConfig:
    """Configuration for archive creation."""
    command: str = "zip"
    args: List[str] = field(default_factory=lambda: ["-r"])


class ZipArchiver(IArchiver):
    """
    Creates <file>.zip next to a file using the zip tool.
    Only one target per call; a multi-file selection archives its first file.
    """

    def __init__(self, config: Optional[ZipConfig] = None):
        self.config = config or ZipConfig()

    @staticmethod
    def archive_path(source: Path) -> Path:
        source = Path(source)
        return source.with_name(source.name + ".zip")

    def build_command(self, source: Path) -> List[str]:
        """Run from the file's directory so the entry is just its name."""
        source = Path(source)
        return [self.config.command, *self.config.args, self.archive_path(source).name, source.name]

    def create_first(self, files: Sequence[Path]) -> Optional[Path]:
        """Archive the first file of a selection."""
        if not files:
            raise ValueError("No files selected")
        if len(files) > 1:
            logger.info(f"Archiving only the first of {len(files)} selected files")
        return self.create(files[0])

    def create(self, source: Path) -> Optional[Path]:
        """
        Create the archive.

        Returns:
            Archive path, or None when zip failed
        """
        source = Path(source)
        if not source.exists():
            logger.error(f"File not found: {source}")
            return None

        cmd = self.build_command(source)
        archive = self.archive_path(source)

        logger.info(f"Creating archive: {archive.name}")
        logger.debug(f"Command: {' '.join(cmd)}")

        try:
            process = subprocess.Popen(
                cmd,
                cwd=source.parent,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                universal_newlines=True
            )

            for line in iter(process.stdout.readline, ''):
                line = line.strip()
                if line:
                    logger.debug(line)

            process.wait()

            if process.returncode == 0:
                return archive
            else:
                logger.error(f"zip failed with code: {process.returncode}")
                return None

        except FileNotFoundError:
            logger.error("zip not found. Install zip and add to PATH")
            return None
