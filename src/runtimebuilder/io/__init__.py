"""
Runtime Builder IO Module

- FileSystem: Abstract file system interface used by probes, steps and the pipeline
- DiskFileSystem: Local disk file system (fsspec "file")
- MemoryFileSystem: In-memory file system for testing (fsspec "memory")
- probe: Marker-file checks on a workspace root (build descriptors, wrappers, artifacts)

Usage:
    from runtimebuilder.io import DiskFileSystem

    fs = DiskFileSystem()
    content = fs.read_text("/workspace/app.yaml")
"""

from .fs import (
    FileSystem,
    FsspecFileSystem,
    DiskFileSystem,
    MemoryFileSystem,
    wrap_io_error,
)
from . import probe

__all__ = [
    'probe',
    'FileSystem',
    'FsspecFileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'wrap_io_error',
]
