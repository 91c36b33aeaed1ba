"""
External application launching.
"""
from .apps import (
    AppLauncher,
    AppSpec,
    ExternalAppConfig,
    alternate_viewer_spec,
    editor_spec,
    viewer_spec,
)

__all__ = [
    'AppLauncher',
    'AppSpec',
    'ExternalAppConfig',
    'alternate_viewer_spec',
    'editor_spec',
    'viewer_spec',
]
