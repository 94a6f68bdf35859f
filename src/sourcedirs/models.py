# Shared data models for sourcedirs.
# Lives in its own module to avoid circular imports between cli, core and patterns.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path as FSPath
from typing import Dict, Optional, Tuple

from sourcedirs.handles import DirectoryHandle


class OutputFormat(str, Enum):
    lines = "lines"
    json = "json"
    sources = "sources"


class Origin(str, Enum):
    literal = "literal"
    workspace = "workspace"
    outside = "outside"


@dataclass(frozen=True)
class Pattern:
    # One trimmed, non-empty token of the comma-separated input.
    raw_text: str
    is_wildcard: bool

    @property
    def normalized_text(self) -> str:
        # Forward-slash form, used only for matching.
        return self.raw_text.replace("\\", "/")


@dataclass(frozen=True)
class Anchor:
    # A walk root plus the match patterns tested beneath it.
    directory: DirectoryHandle
    patterns: Tuple[str, ...]
    outside: bool = False


@dataclass(frozen=True)
class ResolvedDir:
    path: str
    origin: Origin

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "origin": self.origin.value}


@dataclass(frozen=True)
class Options:
    base: FSPath
    patterns: str

    variables: Dict[str, str] = field(default_factory=dict)
    inherit_env: bool = True

    output_format: OutputFormat = OutputFormat.lines
    report_path: Optional[FSPath] = None
    verbose: bool = False
