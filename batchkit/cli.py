"""
Command line entry point: one subcommand per file action.
Parameters left out on the command line are asked for on the console.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .actions import FileActions, FileActionsConfig
from .core.interfaces import ISelectionSource, RunResult, SortKey
from .image.convert import PALETTE_DEPTHS
from .launcher.apps import ExternalAppConfig
from .listing.sorter import DirectoryListing
from .prompt.prompter import ConsolePrompter
from .runner.buffers import METADATA_BUFFER, OPTIMIZER_BUFFER
from .selection.sources import FileBrowserSelection, ManualSelection

logger = logging.getLogger(__name__)

FILE_COMMANDS = {
    "scale": "Scale images by a percentage.",
    "autocrop": "Trim borders, keeping the format.",
    "flatten": "Remove transparency from png files.",
    "to-jpg": "Convert to jpg.",
    "to-png": "Convert to png.",
    "palette": "Reduce to a small drawing palette (png).",
    "optimize": "Optimize files in place with optipng.",
    "show-metadata": "Show metadata with exiftool.",
    "strip-metadata": "Remove all metadata in place (destructive).",
    "zip": "Zip the first selected file.",
    "edit": "Open files in the image editor.",
    "view": "Open files in the default viewer.",
    "view-alt": "Open files in the alternate viewer (Windows only).",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batchkit",
        description="Batch image and file actions backed by external tools.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    parser.add_argument("-y", "--yes", action="store_true", help="Answer yes to confirmations.")
    parser.add_argument(
        "--concurrent",
        action="store_true",
        help="Launch image conversions concurrently instead of one by one.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in FILE_COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text, description=help_text)
        sub.add_argument("files", nargs="*", type=Path, help="Files to process; asked for when omitted.")

        if name == "scale":
            sub.add_argument("--percent", type=int)
            sub.add_argument("--quality", type=int)
            sub.add_argument("--sharpen", action=argparse.BooleanOptionalAction, default=None)
            sub.add_argument("--format", dest="output_format", choices=["jpg", "png"])
        elif name == "to-jpg":
            sub.add_argument("--quality", type=int)
        elif name == "palette":
            sub.add_argument("--colors", choices=list(PALETTE_DEPTHS))
            sub.add_argument("--grayscale", action=argparse.BooleanOptionalAction, default=None)

    sort_parser = subparsers.add_parser("sort", help="List a directory in a chosen order.")
    sort_parser.add_argument("directory", nargs="?", type=Path, default=Path("."))
    sort_parser.add_argument("--by", choices=[k.value for k in SortKey])

    return parser


def _selection(files: Sequence[Path], prompter: ConsolePrompter) -> ISelectionSource:
    if files:
        return FileBrowserSelection(files)
    return ManualSelection(prompter)


def _report(results: List[RunResult]) -> int:
    failed = [r for r in results if not r.success]
    for r in results:
        target = r.output_path or r.input_path
        status = "ok" if r.success else f"exit {r.returncode}"
        print(f"{status}: {target}")
    return 1 if failed else 0


def run_command(args: argparse.Namespace, actions: FileActions, prompter: ConsolePrompter) -> int:
    command = args.command

    if command == "sort":
        for line in actions.sort_listing(DirectoryListing(args.directory), args.by):
            print(line)
        return 0

    source = _selection(args.files, prompter)

    if command == "scale":
        output_ext = f".{args.output_format}" if args.output_format else None
        return _report(actions.scale(source, args.percent, args.quality, args.sharpen, output_ext))
    elif command == "autocrop":
        return _report(actions.autocrop(source))
    elif command == "flatten":
        return _report(actions.remove_transparency(source))
    elif command == "to-jpg":
        return _report(actions.convert_to_jpg(source, args.quality))
    elif command == "to-png":
        return _report(actions.convert_to_png(source))
    elif command == "palette":
        return _report(actions.reduce_palette(source, args.colors, args.grayscale))
    elif command == "optimize":
        results = actions.optimize(source)
        print(actions.buffers.get(OPTIMIZER_BUFFER).text)
        return 1 if any(not r.success for r in results) else 0
    elif command in ("show-metadata", "strip-metadata"):
        if command == "show-metadata":
            results = actions.show_metadata(source)
        else:
            results = actions.strip_metadata(source)
        print(actions.buffers.get(METADATA_BUFFER).text)
        return 1 if any(not r.success for r in results) else 0
    elif command == "zip":
        archive = actions.zip(source)
        if archive is None:
            return 1
        print(archive)
        return 0
    elif command in ("edit", "view", "view-alt"):
        opened = {
            "edit": actions.open_in_editor,
            "view": actions.open_in_viewer,
            "view-alt": actions.open_in_alternate_viewer,
        }[command](source)
        return 0 if opened else 1

    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    prompter = ConsolePrompter(assume_yes=args.yes)
    config = FileActionsConfig(apps=ExternalAppConfig.from_env(), concurrent=args.concurrent)
    actions = FileActions(config, prompter)

    try:
        return run_command(args, actions, prompter)
    except ValueError as e:
        # BatchKitError included
        print(f"batchkit: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
