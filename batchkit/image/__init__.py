"""
Image operations for batchkit.
"""
from .convert import (
    ImageConverter,
    PALETTE_DEPTHS,
    palette_args,
    palette_depth,
    scale_args,
)
from .optimizer import PngOptimizer, OptimizerConfig

__all__ = [
    'ImageConverter',
    'PALETTE_DEPTHS',
    'palette_args',
    'palette_depth',
    'scale_args',
    'PngOptimizer',
    'OptimizerConfig',
]
