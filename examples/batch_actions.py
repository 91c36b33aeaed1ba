"""
Example: Batch file actions with BatchKit

This example demonstrates how to:
- Run actions through the FileActions facade with scripted answers
- Use individual components for specific tasks
"""
from pathlib import Path
from batchkit import (
    FileActions,
    FileActionsConfig,
    FileBrowserSelection,
    ScriptedPrompter,
    ImageConverter,
    DirectoryListing,
    ZipArchiver,
)
from batchkit.runner import OPTIMIZER_BUFFER


def process_selection(files):
    """Scale, convert and optimize a selection using the facade."""
    actions = FileActions(FileActionsConfig(), ScriptedPrompter(assume_yes=True))
    source = FileBrowserSelection(files)

    for result in actions.scale(source, percent=60, quality=90, sharpen=True, output_ext=".jpg"):
        print(f"Scaled: {result.input_path} -> {result.output_path} (exit {result.returncode})")

    for result in actions.reduce_palette(source, max_colors="16", grayscale=True):
        print(f"Drawing: {result.output_path}")

    actions.optimize(source)
    print(actions.buffers.get(OPTIMIZER_BUFFER).text)

    archive = actions.zip(source)
    print(f"Archive: {archive}")


def use_individual_components(folder: Path):
    """Use individual components for specific tasks."""
    images = sorted(folder.glob("*.png"))

    converter = ImageConverter()
    converter.remove_transparency(images)
    converter.convert_to_jpg(images, quality=85)

    listing = DirectoryListing(folder)
    for line in listing.resort("size"):
        print(line)

    if images:
        print(ZipArchiver().create(images[0]))


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python batch_actions.py <file> [<file> ...]")
        sys.exit(1)

    files = [Path(p) for p in sys.argv[1:]]
    missing = [f for f in files if not f.exists()]
    if missing:
        print(f"File not found: {missing[0]}")
        sys.exit(1)

    process_selection(files)
