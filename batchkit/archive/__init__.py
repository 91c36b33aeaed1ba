"""
Archive creation module.
"""
from .zipper import ZipArchiver, ZipConfig

__all__ = ['ZipArchiver', 'ZipConfig']
