from abc import ABC, abstractmethod
from functools import wraps
from pathlib import Path, PurePosixPath
from typing import List, Union
import logging
import os

import fsspec

from ..exceptions import (
    PathExistsError,
    PathNotFoundError,
    PathNotAFileError,
    PathNotADirectoryError,
    PathDecodeError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def wrap_io_error(func):
    """Decorator to wrap IO errors into Runtime-Builder exceptions."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FileExistsError as e:
            raise PathExistsError(e) from e
        except FileNotFoundError as e:
            raise PathNotFoundError(e) from e
        except IsADirectoryError as e:
            raise PathNotAFileError(e) from e
        except NotADirectoryError as e:
            raise PathNotADirectoryError(e) from e
        except UnicodeDecodeError as e:
            raise PathDecodeError(f"not valid UTF-8: {e}") from e

    return wrapper

# --------------------
#
# Abstract FileSystem
#
# --------------------

class FileSystem(ABC):
    """Runtime Builder File System Abstract Base Class"""

    @abstractmethod
    def read_text(self, path: PathLike) -> str:
        """Read text from a file"""
        pass

    @abstractmethod
    def write_text(self, path: PathLike, content: str):
        """Write text to a file, creating parent directories"""
        pass

    @abstractmethod
    def move(self, src: PathLike, dst: PathLike):
        """Move a file, replacing a file already at the destination"""
        pass

    @abstractmethod
    def remove(self, path: PathLike):
        """Remove a file"""
        pass

    @abstractmethod
    def exists(self, path: PathLike) -> bool:
        """Check if a path exists"""
        pass

    @abstractmethod
    def is_dir(self, path: PathLike) -> bool:
        """Check if a path is a directory"""
        pass

    @abstractmethod
    def is_file(self, path: PathLike) -> bool:
        """Check if a path is a file"""
        pass

    @abstractmethod
    def listdir(self, path: PathLike) -> List[Path]:
        """List directory contents"""
        pass

# --------------------
#
# fsspec FileSystem
#
# --------------------

class FsspecFileSystem(FileSystem):
    """fsspec-based File System"""

    def __init__(self, protocol: str = "file"):
        self.fs = fsspec.filesystem(protocol)
        self.protocol = protocol
        self.name = f"{protocol}FS"

    def path2str(self, path: PathLike) -> str:
        """Convert a path to the string form fsspec expects"""
        return PurePosixPath(os.fspath(path)).as_posix()

    @wrap_io_error
    def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        logger.debug(f"[{self.name}] Reading from: {path}")
        with self.fs.open(self.path2str(path), "r", encoding=encoding) as f:
            return f.read()

    @wrap_io_error
    def write_text(self, path: PathLike, content: str, encoding: str = "utf-8"):
        logger.debug(f"[{self.name}] Writing to: {path}")
        self.fs.mkdirs(self.path2str(PurePosixPath(self.path2str(path)).parent), exist_ok=True)
        with self.fs.open(self.path2str(path), "w", encoding=encoding) as f:
            f.write(content)

    @wrap_io_error
    def move(self, src: PathLike, dst: PathLike):
        logger.debug(f"[{self.name}] Moving {src} -> {dst}")
        self.fs.mv(self.path2str(src), self.path2str(dst))

    @wrap_io_error
    def remove(self, path: PathLike):
        logger.debug(f"[{self.name}] Removing: {path}")
        self.fs.rm_file(self.path2str(path))

    def exists(self, path: PathLike) -> bool:
        return self.fs.exists(self.path2str(path))

    def is_dir(self, path: PathLike) -> bool:
        return self.fs.isdir(self.path2str(path))

    def is_file(self, path: PathLike) -> bool:
        return self.fs.isfile(self.path2str(path))

    @wrap_io_error
    def listdir(self, path: PathLike) -> List[Path]:
        if not self.fs.exists(self.path2str(path)):
            raise FileNotFoundError(f"No such directory: '{path}'")
        if not self.fs.isdir(self.path2str(path)):
            raise NotADirectoryError(f"Not a directory: '{path}'")
        return sorted(Path(p) for p in self.fs.ls(self.path2str(path), detail=False))


class DiskFileSystem(FsspecFileSystem):
    """Local disk file system using fsspec"""

    def __init__(self):
        super().__init__(protocol="file")


class MemoryFileSystem(FsspecFileSystem):
    """
    in-memory filesystem using fsspec

    fsspec shares one memory store per process, so callers should keep
    their trees under distinct roots.
    """
    def __init__(self):
        super().__init__(protocol="memory")
