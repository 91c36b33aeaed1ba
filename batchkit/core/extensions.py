"""
Centralized file extension checks.

Used by: image actions, runner.
"""
from pathlib import Path

IMAGE_EXTENSIONS = {
    '.jpg', '.jpeg', '.png', '.webp', '.gif', '.bmp', '.tiff', '.tif',
    '.heic', '.heif',
}


def extension_of(path) -> str:
    """Return the extension without the leading dot, case preserved."""
    return Path(path).suffix[1:]


def is_png(path) -> bool:
    """Exact, case-sensitive check for a 'png' extension."""
    return extension_of(path) == "png"


def is_image(path) -> bool:
    """Check if path is an image file."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def normalize_ext(ext: str) -> str:
    """Return ext with exactly one leading dot, or '' for an empty ext."""
    ext = ext.strip()
    if not ext:
        return ""
    return "." + ext.lstrip(".")
