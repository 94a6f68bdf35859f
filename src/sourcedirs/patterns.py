# Pattern classification and outside-anchor detection for sourcedirs.
# Turns the raw comma-separated input into Pattern values and decides, for
# each wildcard, which directory it should be walked from.
#
# Anchor detection is best-effort: any doubt falls back to the base directory.

from __future__ import annotations

from typing import List, Optional

from sourcedirs.errors import ResolutionCancelled
from sourcedirs.handles import DirectoryHandle
from sourcedirs.models import Anchor, Pattern
from sourcedirs.traverse import normalize_separators

WILDCARD_CHARS = ("*", "?")


def is_wildcard(token: str) -> bool:
    return any(ch in token for ch in WILDCARD_CHARS)


def classify(raw_input: Optional[str]) -> List[Pattern]:
    # Split on commas, trim, and drop empty tokens. Order is preserved.
    if not raw_input:
        return []

    patterns: List[Pattern] = []
    for token in raw_input.split(","):
        text = token.strip()
        if not text:
            continue
        patterns.append(Pattern(raw_text=text, is_wildcard=is_wildcard(text)))
    return patterns


def first_wildcard_index(text: str) -> int:
    # Lowest index of "*" or "?", or -1 when neither is present.
    found = [i for i in (text.find(ch) for ch in WILDCARD_CHARS) if i != -1]
    return min(found) if found else -1


def fixed_prefix_dir(text: str) -> Optional[str]:
    # The directory part of the text before the first wildcard, trailing "/"
    # included, e.g. "/ext/lib*/src" -> "/ext/". None when there is no
    # usable prefix.
    normalized = normalize_separators(text)
    index = first_wildcard_index(normalized)
    if index <= 0:
        return None

    prefix = normalized[:index]
    slash = prefix.rfind("/")
    if slash == -1:
        return None
    return prefix[: slash + 1]


def _strip_trailing_separators(path: str) -> str:
    return normalize_separators(path).rstrip("/")


def resolve_anchor(pattern: Pattern, base: DirectoryHandle) -> Optional[Anchor]:
    # Return an outside Anchor when the pattern's fixed prefix is already an
    # absolute path distinct from base, else None (walk it from base).
    if not pattern.is_wildcard:
        return None

    candidate = fixed_prefix_dir(pattern.raw_text)
    if candidate is None:
        return None

    directory = base.locate(candidate)
    try:
        absolute = normalize_separators(directory.absolutize().native_path())
    except (OSError, ResolutionCancelled):
        return None

    # A relative candidate resolves against some working directory and
    # comes back different; only self-describing absolute paths qualify.
    if candidate != absolute and candidate != absolute + "/":
        return None

    if _strip_trailing_separators(candidate) == _strip_trailing_separators(base.native_path()):
        return None

    return Anchor(
        directory=directory,
        patterns=(pattern.normalized_text,),
        outside=True,
    )
