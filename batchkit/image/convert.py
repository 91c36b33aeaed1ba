"""
Image conversion operations using ImageMagick.
Each operation builds BatchRequests; ImageConverter submits them to a runner.
"""
import asyncio
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set
import logging

from ..core.errors import ConfigurationError
from ..core.extensions import is_image, is_png, normalize_ext
from ..core.interfaces import BatchRequest, IBatchRunner, RunResult
from ..runner.batch import BatchCommandRunner

logger = logging.getLogger(__name__)

AUTOCROP_ARGS = "-trim +repage"
FLATTEN_ARGS = "-background white -alpha remove -alpha off"

AUTOCROP_SUFFIX = "_crop"
FLATTEN_SUFFIX = "_opa"
CONVERT_SUFFIX = "-2"

DEFAULT_QUALITY = 90
SCALE_FORMATS = (".jpg", ".png")

# max colors -> bits per pixel
PALETTE_DEPTHS: Dict[str, int] = {
    "256": 8,
    "16": 4,
    "4": 2,
    "2": 1,
}


def check_quality(quality: int) -> int:
    """Quality must be within 1..100."""
    quality = int(quality)
    if not 1 <= quality <= 100:
        raise ValueError(f"Quality must be between 1 and 100, got {quality}")
    return quality


def check_percent(percent: int) -> int:
    percent = int(percent)
    if percent <= 0:
        raise ValueError(f"Scale percent must be positive, got {percent}")
    return percent


def scale_suffix(percent: int) -> str:
    return f"-s{percent}"


def scale_args(input_path: Path, percent: int, quality: int = DEFAULT_QUALITY, sharpen: bool = False) -> str:
    """PNG inputs only get the scale flag; others also get quality and sharpen."""
    args = f"-scale {percent}%"
    if is_png(input_path):
        return args
    args += f" -quality {quality}%"
    if sharpen:
        args += " -sharpen 1"
    return args


def jpg_args(quality: int = DEFAULT_QUALITY) -> str:
    return f"-quality {check_quality(quality)}%"


def palette_depth(max_colors) -> int:
    """Map a max colors choice from {2, 4, 16, 256} to a color depth."""
    key = str(max_colors).strip()
    if key not in PALETTE_DEPTHS:
        raise ConfigurationError("max colors", max_colors, PALETTE_DEPTHS.keys())
    return PALETTE_DEPTHS[key]


def palette_args(max_colors, grayscale: bool = False) -> str:
    args = "+dither"
    if grayscale:
        args += " -type grayscale"
    args += f" -depth {palette_depth(max_colors)}"
    return args


def scale_requests(
    files: Sequence[Path],
    percent: int,
    quality: int = DEFAULT_QUALITY,
    sharpen: bool = False,
    output_ext: str = ".jpg"
) -> List[BatchRequest]:
    """One request per file, since the arguments depend on each extension."""
    percent = check_percent(percent)
    quality = check_quality(quality)
    ext = normalize_ext(output_ext)
    if ext not in SCALE_FORMATS:
        raise ConfigurationError("output format", output_ext, SCALE_FORMATS)

    return [
        BatchRequest([f], scale_args(f, percent, quality, sharpen), scale_suffix(percent), ext)
        for f in files
    ]


def autocrop_requests(files: Sequence[Path]) -> List[BatchRequest]:
    """Cropped copies keep each file's own extension."""
    return [
        BatchRequest([f], AUTOCROP_ARGS, AUTOCROP_SUFFIX, Path(f).suffix)
        for f in files
    ]


def remove_transparency_requests(files: Sequence[Path]) -> List[BatchRequest]:
    pngs = []
    for f in files:
        if is_png(f):
            pngs.append(f)
        else:
            logger.info(f"Skipping {Path(f).name}: not a png file")
    if not pngs:
        return []
    return [BatchRequest(pngs, FLATTEN_ARGS, FLATTEN_SUFFIX, ".png")]


def convert_to_jpg_requests(files: Sequence[Path], quality: int = DEFAULT_QUALITY) -> List[BatchRequest]:
    return [BatchRequest(list(files), jpg_args(quality), CONVERT_SUFFIX, ".jpg")]


def convert_to_png_requests(files: Sequence[Path]) -> List[BatchRequest]:
    return [BatchRequest(list(files), "", CONVERT_SUFFIX, ".png")]


def palette_requests(files: Sequence[Path], max_colors, grayscale: bool = False) -> List[BatchRequest]:
    return [BatchRequest(list(files), palette_args(max_colors, grayscale), CONVERT_SUFFIX, ".png")]


class ImageConverter:
    """
    Runs ImageMagick conversions over a selection.

    Example:
        converter = ImageConverter()
        converter.scale([Path("photo.jpg")], percent=60, sharpen=True)
    """

    def __init__(self, runner: Optional[IBatchRunner] = None):
        self.runner = runner or BatchCommandRunner()

    def submit(self, requests: Sequence[BatchRequest]) -> List[RunResult]:
        """Run requests one after the other, reserving outputs across all of them."""
        results = []
        taken: Set[Path] = set()
        for request in requests:
            if not request.input_files:
                continue
            self._warn_unknown(request)
            results.extend(self.runner.run(
                request.input_files, request.tool_args, request.name_suffix, request.output_ext, taken
            ))
        return results

    def _warn_unknown(self, request: BatchRequest) -> None:
        for f in request.input_files:
            if not is_image(f):
                logger.warning(f"{Path(f).name} does not look like an image; running anyway")

    async def submit_async(self, requests: Sequence[BatchRequest]) -> List[RunResult]:
        """Launch all requests concurrently; output names are shared across requests."""
        taken: Set[Path] = set()
        for request in requests:
            self._warn_unknown(request)
        batches = await asyncio.gather(*(
            self.runner.run_async(r.input_files, r.tool_args, r.name_suffix, r.output_ext, taken)
            for r in requests
            if r.input_files
        ))
        return [result for batch in batches for result in batch]

    def scale(
        self,
        files: Sequence[Path],
        percent: int,
        quality: int = DEFAULT_QUALITY,
        sharpen: bool = False,
        output_ext: str = ".jpg"
    ) -> List[RunResult]:
        return self.submit(scale_requests(files, percent, quality, sharpen, output_ext))

    def autocrop(self, files: Sequence[Path]) -> List[RunResult]:
        return self.submit(autocrop_requests(files))

    def remove_transparency(self, files: Sequence[Path]) -> List[RunResult]:
        return self.submit(remove_transparency_requests(files))

    def convert_to_jpg(self, files: Sequence[Path], quality: int = DEFAULT_QUALITY) -> List[RunResult]:
        return self.submit(convert_to_jpg_requests(files, quality))

    def convert_to_png(self, files: Sequence[Path]) -> List[RunResult]:
        return self.submit(convert_to_png_requests(files))

    def reduce_palette(self, files: Sequence[Path], max_colors, grayscale: bool = False) -> List[RunResult]:
        return self.submit(palette_requests(files, max_colors, grayscale))
