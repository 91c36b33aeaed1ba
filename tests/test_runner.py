"""
Tests for batch execution and output buffers.
"""
import asyncio
import pytest
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

from batchkit.core.interfaces import Platform, ToolInvocation
from batchkit.runner import (
    BatchCommandRunner,
    BufferRegistry,
    OutputBuffer,
    RunnerConfig,
    converter_command,
    unique_output_path,
)
from batchkit.runner.batch import MISSING_EXECUTABLE


class TestUniqueOutputPath:
    """Tests for unique_output_path."""

    def test_no_collision(self, temp_dir):
        result = unique_output_path(temp_dir / "photo.jpg", "-s60", ".jpg")
        assert result == temp_dir / "photo-s60.jpg"

    def test_extension_without_dot(self, temp_dir):
        result = unique_output_path(temp_dir / "art.jpg", "-2", "png")
        assert result == temp_dir / "art-2.png"

    @pytest.mark.parametrize("existing", [1, 2, 5])
    def test_returns_next_candidate(self, temp_dir, existing):
        for n in range(1, existing + 1):
            (temp_dir / f"photo{'-s60' * n}.jpg").touch()

        result = unique_output_path(temp_dir / "photo.jpg", "-s60", ".jpg")

        assert result == temp_dir / f"photo{'-s60' * (existing + 1)}.jpg"
        assert not result.exists()

    def test_taken_paths_are_skipped(self, temp_dir):
        taken = {temp_dir / "a-2.png"}
        result = unique_output_path(temp_dir / "a.jpg", "-2", ".png", taken)
        assert result == temp_dir / "a-2-2.png"

    def test_empty_suffix_never_overwrites(self, temp_dir):
        (temp_dir / "a.png").touch()
        with pytest.raises(ValueError, match="overwrite"):
            unique_output_path(temp_dir / "a.png", "", ".png")

    def test_original_is_untouched(self, sample_jpg):
        before = sample_jpg.read_bytes()
        unique_output_path(sample_jpg, "_crop", ".jpg")
        assert sample_jpg.read_bytes() == before


class TestConverterCommand:
    """Tests for platform-specific converter name."""

    def test_windows(self):
        assert converter_command(Platform.WINDOWS) == "magick"

    @pytest.mark.parametrize("platform", [Platform.LINUX, Platform.MACOS])
    def test_unix(self, platform):
        assert converter_command(platform) == "convert"


class TestBatchCommandRunner:
    """Tests for BatchCommandRunner class."""

    def test_build_invocation_uses_relative_paths(self, temp_dir, runner_config):
        runner = BatchCommandRunner(runner_config)

        inv = runner.build_invocation(temp_dir / "sub" / "a.jpg", temp_dir / "sub" / "a-2.png", "-depth 4")

        assert inv.command_name == "convert"
        assert inv.argv == ["-depth", "4", str(Path("sub") / "a.jpg"), str(Path("sub") / "a-2.png")]

    def test_windows_command_name(self, temp_dir):
        runner = BatchCommandRunner(RunnerConfig(platform=Platform.WINDOWS, working_dir=temp_dir))
        inv = runner.build_invocation(temp_dir / "a.jpg", temp_dir / "a-2.jpg", "")
        assert inv.command_name == "magick"

    def test_run_executes_in_order(self, sample_selection, runner_config, fake_run, executed):
        runner = BatchCommandRunner(runner_config)

        results = runner.run(sample_selection, "-trim", "_crop", ".jpg")

        assert [r.input_path for r in results] == sample_selection
        assert [cmd[-2] for cmd in executed()] == ["a.jpg", "b.png", "c.jpg"]
        assert all(r.success for r in results)

    def test_run_records_command_lines(self, sample_jpg, runner_config, fake_run):
        sink = OutputBuffer("commands")
        runner = BatchCommandRunner(runner_config, sink)

        runner.run([sample_jpg], "-scale 60%", "-s60", ".jpg")

        assert sink.lines == ["convert -scale 60% photo.jpg photo-s60.jpg"]
        assert sink.entries[0].file == sample_jpg

    def test_run_appends_tool_output(self, sample_jpg, runner_config, fake_run):
        fake_run.return_value = Mock(returncode=1, stdout="convert: bad input\n\n")
        sink = OutputBuffer("commands")
        runner = BatchCommandRunner(runner_config, sink)

        results = runner.run([sample_jpg], "", "-2", ".png")

        assert sink.lines[-1] == "convert: bad input"
        assert results[0].returncode == 1
        assert results[0].success is False

    def test_same_output_within_batch_is_not_reused(self, temp_dir, runner_config, fake_run):
        files = [temp_dir / "a.jpg", temp_dir / "a.gif"]
        runner = BatchCommandRunner(runner_config)

        results = runner.run(files, "", "-2", ".png")

        assert [r.output_path.name for r in results] == ["a-2.png", "a-2-2.png"]

    def test_missing_executable(self, sample_jpg, runner_config):
        sink = OutputBuffer("commands")
        runner = BatchCommandRunner(runner_config, sink)

        with patch("batchkit.runner.batch.subprocess.run", side_effect=FileNotFoundError):
            results = runner.run([sample_jpg], "", "-2", ".png")

        assert results[0].returncode == MISSING_EXECUTABLE
        assert "command not found" in sink.lines[-1]

    def test_plan_does_not_execute(self, sample_jpg, runner_config, fake_run):
        runner = BatchCommandRunner(runner_config)

        planned = runner.plan([sample_jpg], "-trim", "_crop", ".jpg")

        assert planned[0].output_path.name == "photo_crop.jpg"
        assert planned[0].returncode is None
        fake_run.assert_not_called()

    def test_plans_sharing_reservations(self, temp_dir, runner_config):
        runner = BatchCommandRunner(runner_config)
        taken = set()

        first = runner.plan([temp_dir / "a.jpg"], "", "-s60", ".jpg", taken)
        second = runner.plan([temp_dir / "a.gif"], "", "-s60", ".jpg", taken)

        assert first[0].output_path.name == "a-s60.jpg"
        assert second[0].output_path.name == "a-s60-s60.jpg"
        assert taken == {first[0].output_path, second[0].output_path}

    def test_run_async(self, sample_selection, runner_config):
        process = Mock(returncode=0)
        process.communicate = AsyncMock(return_value=(b"done\n", None))
        sink = OutputBuffer("commands")
        runner = BatchCommandRunner(runner_config, sink)

        with patch("batchkit.runner.batch.asyncio.create_subprocess_exec",
                   new=AsyncMock(return_value=process)) as spawn:
            results = asyncio.run(runner.run_async(sample_selection, "", "-2", ".png"))

        assert spawn.await_count == 3
        assert [r.output_path.name for r in results] == ["a-2.png", "b-2.png", "c-2.png"]
        assert all(r.success for r in results)
        assert sink.lines.count("done") == 3

    def test_execute_with_separate_sink(self, sample_jpg, runner_config, fake_run):
        runner = BatchCommandRunner(runner_config)
        other = OutputBuffer("other")

        code = runner.execute(ToolInvocation("optipng", ["photo.jpg"]), sample_jpg, sink=other)

        assert code == 0
        assert other.lines == ["optipng photo.jpg"]
        assert len(runner.sink) == 0


class TestBuffers:
    """Tests for OutputBuffer and BufferRegistry."""

    def test_append_and_text(self):
        buffer = OutputBuffer("test")
        buffer.append("one")
        buffer.append("two")
        assert buffer.text == "one\ntwo"
        assert len(buffer) == 2

    def test_separator(self):
        buffer = OutputBuffer("test")
        buffer.append_separator()
        assert set(buffer.lines[0]) == {"-"}

    def test_registry_get_reuses(self):
        registry = BufferRegistry()
        assert registry.get("a") is registry.get("a")
        assert "a" in registry

    def test_registry_fresh_clears(self):
        registry = BufferRegistry()
        registry.get("a").append("old")

        fresh = registry.fresh("a")

        assert len(fresh) == 0
        assert registry.names() == ["a"]
