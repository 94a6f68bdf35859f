# Directory handle abstraction for sourcedirs.
# The resolver only ever talks to a filesystem through this surface, so the
# same code can drive a local tree or a tree reached through a remote channel.
#
# Every method may block and may raise OSError.

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Protocol, Sequence


class DirectoryHandle(Protocol):
    def list_subdirectories(self) -> Optional[Sequence["DirectoryHandle"]]:
        # Immediate child directories, in listing order.
        # None means the system reported nothing at this location.
        ...

    def absolutize(self) -> "DirectoryHandle":
        ...

    def native_path(self) -> str:
        ...

    def locate(self, path: str) -> "DirectoryHandle":
        # A handle for another path on the same filesystem.
        ...


class LocalDirectory:
    # DirectoryHandle backed by the local filesystem.
    def __init__(self, path: str | os.PathLike[str]):
        self.path = os.fspath(path)

    def __repr__(self) -> str:
        return f"LocalDirectory({self.path!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LocalDirectory) and other.path == self.path

    def __hash__(self) -> int:
        return hash(self.path)

    def list_subdirectories(self) -> Optional[List["LocalDirectory"]]:
        # A missing path, or a path that is not a directory, lists as None.
        # Anything else (permissions, I/O) is a real failure and propagates.
        try:
            with os.scandir(self.path) as it:
                entries = list(it)
        except (FileNotFoundError, NotADirectoryError):
            return None

        here = os.path.realpath(self.path)
        return [LocalDirectory(entry.path) for entry in entries if _is_walkable(entry, here)]

    def absolutize(self) -> "LocalDirectory":
        # Path.absolute() neither collapses ".." nor follows symlinks.
        return LocalDirectory(Path(self.path).absolute())

    def native_path(self) -> str:
        return self.path

    def locate(self, path: str) -> "LocalDirectory":
        return LocalDirectory(path)


def _is_walkable(entry: os.DirEntry, here: str) -> bool:
    # A symlink back to this directory or one of its ancestors would be
    # walked forever, so it is dropped. An entry whose type cannot be read
    # (ELOOP, dangling link) is treated as a non-directory.
    try:
        if not entry.is_dir():
            return False
        if entry.is_symlink():
            target = os.path.realpath(entry.path)
            if here == target or here.startswith(target.rstrip(os.sep) + os.sep):
                return False
    except OSError:
        return False
    return True
