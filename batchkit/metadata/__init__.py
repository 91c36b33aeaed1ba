"""
Metadata inspection and removal.
"""
from .exiftool import MetadataTool

__all__ = ['MetadataTool']
