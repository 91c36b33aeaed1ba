"""
Tests for core interfaces, errors and data types.
"""
import pytest
from pathlib import Path
from batchkit.core.interfaces import (
    BatchRequest,
    LogEntry,
    Platform,
    RunResult,
    ToolInvocation,
)
from batchkit.core.errors import BatchKitError, ConfigurationError, UnsupportedPlatformError
from batchkit.core.extensions import extension_of, is_image, is_png, normalize_ext
from batchkit.core.platform import detect_platform


class TestBatchRequest:
    """Tests for BatchRequest dataclass."""

    def test_converts_inputs_to_paths(self):
        request = BatchRequest(["a.jpg", "b.jpg"], "-scale 50%", "-s50", ".jpg")
        assert request.input_files == [Path("a.jpg"), Path("b.jpg")]

    def test_defaults(self):
        request = BatchRequest([Path("a.jpg")])
        assert request.tool_args == ""
        assert request.name_suffix == ""
        assert request.output_ext == ""


class TestToolInvocation:
    """Tests for ToolInvocation dataclass."""

    def test_command(self):
        inv = ToolInvocation("convert", ["-scale", "60%", "in.jpg", "out.jpg"])
        assert inv.command == ["convert", "-scale", "60%", "in.jpg", "out.jpg"]

    def test_command_line_quotes_spaces(self):
        inv = ToolInvocation("convert", ["my photo.jpg", "out.jpg"])
        assert inv.command_line == "convert 'my photo.jpg' out.jpg"


class TestRunResult:
    """Tests for RunResult dataclass."""

    def test_success(self):
        inv = ToolInvocation("convert")
        assert RunResult(inv, Path("a.jpg"), returncode=0).success is True
        assert RunResult(inv, Path("a.jpg"), returncode=1).success is False
        assert RunResult(inv, Path("a.jpg")).success is False


class TestLogEntry:
    """Tests for LogEntry dataclass."""

    def test_timestamp_set(self):
        entry = LogEntry("hello")
        assert entry.timestamp is not None
        assert entry.command is None


class TestErrors:
    """Tests for error types."""

    def test_configuration_error_message(self):
        err = ConfigurationError("max colors", "8", ["256", "16"])
        assert "max colors" in str(err)
        assert "'8'" in str(err)
        assert isinstance(err, BatchKitError)
        assert isinstance(err, ValueError)

    def test_unsupported_platform_message(self):
        err = UnsupportedPlatformError("Opening files", Platform.LINUX)
        assert str(err) == "Opening files is not supported on linux"


class TestExtensions:
    """Tests for extension helpers."""

    def test_is_png_is_case_sensitive(self):
        assert is_png("a.png") is True
        assert is_png("a.PNG") is False
        assert is_png("a.jpg") is False
        assert is_png("png") is False

    def test_extension_of(self):
        assert extension_of("dir/a.tar.gz") == "gz"
        assert extension_of("noext") == ""

    def test_is_image(self):
        assert is_image("a.JPG") is True
        assert is_image("a.txt") is False

    def test_normalize_ext(self):
        assert normalize_ext("jpg") == ".jpg"
        assert normalize_ext(".png") == ".png"
        assert normalize_ext("") == ""


class TestPlatform:
    """Tests for platform detection."""

    @pytest.mark.parametrize("identifier,expected", [
        ("win32", Platform.WINDOWS),
        ("cygwin", Platform.WINDOWS),
        ("darwin", Platform.MACOS),
        ("linux", Platform.LINUX),
        ("freebsd13", Platform.LINUX),
    ])
    def test_detect_platform(self, identifier, expected):
        assert detect_platform(identifier) is expected
