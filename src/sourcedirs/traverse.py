# Directory traversal and wildcard matching for sourcedirs.
# This module centralizes all path comparison logic so behavior is
# consistent across platforms, especially on Windows.
#
# Nothing here ever mutates the paths used for I/O.

from __future__ import annotations

import fnmatch
from typing import Callable, Iterator, Optional, Protocol, Sequence

from sourcedirs.errors import ResolutionCancelled
from sourcedirs.handles import DirectoryHandle


class CancelEvent(Protocol):
    # threading.Event satisfies this.
    def is_set(self) -> bool:
        ...


def normalize_separators(path: str) -> str:
    # Backslashes become forward slashes; comparison use only.
    return path.replace("\\", "/")


def wildcard_match(candidate: str, pattern: str) -> bool:
    # Whole-string match where "*" is any run of characters (including "/")
    # and "?" is exactly one character. Everything else is literal, so "["
    # is escaped before handing the pattern to fnmatch. No case folding.
    pattern = normalize_separators(pattern).replace("[", "[[]")
    return fnmatch.fnmatchcase(normalize_separators(candidate), pattern)


def matches_any(candidate: str, patterns: Sequence[str]) -> bool:
    return any(wildcard_match(candidate, pat) for pat in patterns)


def walk_directories(
    root: DirectoryHandle,
    predicate: Callable[[DirectoryHandle], bool],
    cancel: Optional[CancelEvent] = None,
) -> Iterator[DirectoryHandle]:
    # Yield every directory below root that satisfies predicate.
    # root itself is never tested; only its descendants are candidates.
    # Pre-order depth-first: a directory is tested before its children, and
    # its children are visited whether or not it matched.
    # Listing order is kept as reported; nothing is sorted.
    if cancel is not None and cancel.is_set():
        raise ResolutionCancelled(f"Walk cancelled at {root.native_path()}")

    # An absent listing is the same as no children.
    entries = root.list_subdirectories() or ()

    for entry in entries:
        if predicate(entry):
            yield entry
        yield from walk_directories(entry, predicate, cancel)
