"""Archive extraction core module"""
from .resolver import (
    ArchiveFormat,
    ArchiveStage,
    ArchiveDescriptor,
    ArchiveFormatResolver,
    strip_extension,
    extension_of
)

__all__ = [
    'ArchiveFormat',
    'ArchiveStage',
    'ArchiveDescriptor',
    'ArchiveFormatResolver',
    'strip_extension',
    'extension_of'
]
