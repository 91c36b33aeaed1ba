"""
Opening files in external editors and viewers.
One fire-and-forget open request per file; large selections need confirmation.
"""
import os
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence
from dataclasses import dataclass
import logging

from ..core.errors import UnsupportedPlatformError
from ..core.interfaces import IAppLauncher, IPrompter, Platform
from ..core.platform import current_platform

logger = logging.getLogger(__name__)

EDITOR_THRESHOLD = 20
VIEWER_THRESHOLD = 5

DEFAULT_EDITOR_PATH = r"C:\Program Files\GIMP 2\bin\gimp-2.10.exe"
DEFAULT_VIEWER_PATH = r"C:\Program Files\IrfanView\i_view64.exe"


@dataclass
class ExternalAppConfig:
    """Windows install locations of the editor and the alternate viewer."""
    editor_path: str = DEFAULT_EDITOR_PATH
    viewer_path: str = DEFAULT_VIEWER_PATH
    editor_macos_app: str = "GIMP"
    editor_linux_command: str = "gimp"

    @classmethod
    def from_env(cls) -> 'ExternalAppConfig':
        """Defaults overridden by BATCHKIT_EDITOR_PATH / BATCHKIT_VIEWER_PATH."""
        return cls(
            editor_path=os.environ.get("BATCHKIT_EDITOR_PATH", DEFAULT_EDITOR_PATH),
            viewer_path=os.environ.get("BATCHKIT_VIEWER_PATH", DEFAULT_VIEWER_PATH),
        )


@dataclass
class AppSpec:
    """How to reach one application on each platform."""
    name: str
    threshold: int
    windows_path: Optional[str] = None
    macos_app: Optional[str] = None
    linux_command: Optional[str] = None
    windows_only: bool = False


def editor_spec(config: ExternalAppConfig) -> AppSpec:
    return AppSpec(
        name="image editor",
        threshold=EDITOR_THRESHOLD,
        windows_path=config.editor_path,
        macos_app=config.editor_macos_app,
        linux_command=config.editor_linux_command,
    )


def viewer_spec() -> AppSpec:
    """System default viewer."""
    return AppSpec(name="default viewer", threshold=VIEWER_THRESHOLD)


def alternate_viewer_spec(config: ExternalAppConfig) -> AppSpec:
    return AppSpec(
        name="alternate viewer",
        threshold=VIEWER_THRESHOLD,
        windows_path=config.viewer_path,
        windows_only=True,
    )


class AppLauncher(IAppLauncher):
    """
    Opens files in one external application.

    Example:
        launcher = AppLauncher(editor_spec(ExternalAppConfig()), prompter)
        launcher.open([Path("a.png"), Path("b.png")])
    """

    def __init__(
        self,
        spec: AppSpec,
        prompter: Optional[IPrompter] = None,
        platform: Optional[Platform] = None
    ):
        self.spec = spec
        self.prompter = prompter
        self.platform = platform or current_platform()

    def build_command(self, file: Path) -> Optional[List[str]]:
        """Command for one file, or None when the OS shell opens it directly."""
        file = str(file)
        if self.platform is Platform.WINDOWS:
            if self.spec.windows_path:
                return [self.spec.windows_path, file]
            return None
        elif self.platform is Platform.MACOS:
            if self.spec.macos_app:
                return ["open", "-a", self.spec.macos_app, file]
            return ["open", file]
        elif self.platform is Platform.LINUX:
            if self.spec.linux_command:
                return [self.spec.linux_command, file]
            return ["xdg-open", file]
        raise ValueError(f"Unknown platform: {self.platform}")

    def check_platform(self) -> None:
        if self.spec.windows_only and self.platform is not Platform.WINDOWS:
            raise UnsupportedPlatformError(f"Opening files in the {self.spec.name}", self.platform)

    def confirm(self, count: int) -> bool:
        if count <= self.spec.threshold:
            return True
        if self.prompter is None:
            logger.warning(f"Refusing to open {count} files without confirmation")
            return False
        return self.prompter.ask_confirm(f"Open {count} files in {self.spec.name}?")

    def open(self, files: Sequence[Path]) -> int:
        """
        Dispatch one open request per file without waiting.

        Returns:
            Number of requests dispatched
        """
        self.check_platform()

        if not files:
            raise ValueError("No files selected")

        if not self.confirm(len(files)):
            logger.info("Open cancelled")
            return 0

        for file in files:
            self._dispatch(Path(file))
        return len(files)

    def _dispatch(self, file: Path) -> None:
        cmd = self.build_command(file)
        if cmd is None:
            logger.info(f"Opening {file} with the associated application")
            os.startfile(str(file))
            return

        logger.info(f"Opening: {' '.join(cmd)}")
        subprocess.Popen(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True
        )
