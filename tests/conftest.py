"""
Pytest configuration and fixtures for BatchKit tests.
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock, patch
from PIL import Image

from batchkit import FileActions, FileActionsConfig, Platform, RunnerConfig, ScriptedPrompter


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="batchkit_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_jpg(temp_dir) -> Path:
    """Create a sample JPEG image."""
    image_path = temp_dir / "photo.jpg"
    img = Image.new("RGB", (800, 600), color="blue")
    img.save(image_path, "JPEG", quality=90)
    return image_path


@pytest.fixture
def png_image(temp_dir) -> Path:
    """Create a PNG image with transparency."""
    image_path = temp_dir / "transparent.png"
    img = Image.new("RGBA", (400, 400), color=(255, 0, 0, 128))
    img.save(image_path, "PNG")
    return image_path


@pytest.fixture
def sample_selection(temp_dir) -> list:
    """Three images of mixed formats, in selection order."""
    paths = []
    for name, fmt, color in [("a.jpg", "JPEG", "red"), ("b.png", "PNG", "green"), ("c.jpg", "JPEG", "blue")]:
        path = temp_dir / name
        Image.new("RGB", (64, 48), color=color).save(path, fmt)
        paths.append(path)
    return paths


@pytest.fixture
def runner_config(temp_dir) -> RunnerConfig:
    """Linux runner rooted at the temporary directory."""
    return RunnerConfig(platform=Platform.LINUX, working_dir=temp_dir)


@pytest.fixture
def fake_run():
    """Patch subprocess.run used by the runner; every command succeeds."""
    with patch("batchkit.runner.batch.subprocess.run") as run:
        run.return_value = Mock(returncode=0, stdout="")
        yield run


@pytest.fixture
def make_actions(runner_config):
    """Factory for FileActions with scripted answers."""
    def _make(answers=(), assume_yes=False, **config_kwargs):
        config = FileActionsConfig(runner=runner_config, **config_kwargs)
        return FileActions(config, ScriptedPrompter(answers, assume_yes=assume_yes))
    return _make


@pytest.fixture
def executed(fake_run):
    """Argument lists passed to the patched subprocess.run so far."""
    return lambda: [c.args[0] for c in fake_run.call_args_list]
