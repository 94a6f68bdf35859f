# Core orchestration logic for sourcedirs.
# This file ties classification, anchor detection and traversal into the
# ordered list of source directories, and drives a CLI run around it.
#
# It intentionally contains no CLI parsing and no low-level matching logic.

from __future__ import annotations

import json
import threading
from collections import Counter
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from sourcedirs.expand import VariableExpander
from sourcedirs.handles import DirectoryHandle, LocalDirectory
from sourcedirs.models import Anchor, Options, Origin, OutputFormat, Pattern, ResolvedDir
from sourcedirs.patterns import classify, resolve_anchor
from sourcedirs.report import ReportWriter
from sourcedirs.traverse import CancelEvent, matches_any, normalize_separators, walk_directories

console = Console()
_err = Console(stderr=True)

Expand = Callable[[str], str]


def resolve_source_dirs(
    raw_input: Optional[str],
    base: DirectoryHandle,
    expand: Expand,
    cancel: Optional[CancelEvent] = None,
) -> List[str]:
    # Resolve a comma-separated pattern list into directory path strings.
    return [entry.path for entry in resolve_entries(raw_input, base, expand, cancel)]


def resolve_entries(
    raw_input: Optional[str],
    base: DirectoryHandle,
    expand: Expand,
    cancel: Optional[CancelEvent] = None,
) -> List[ResolvedDir]:
    # Same as resolve_source_dirs, with each path tagged by where it came from.
    # Order: literals, then base-tree matches, then outside-anchor matches.
    patterns = classify(raw_input)
    literals, base_anchor, outside = plan_anchors(patterns, base, expand)

    results: List[ResolvedDir] = [
        ResolvedDir(path=expand(p.raw_text), origin=Origin.literal) for p in literals
    ]

    if base_anchor is not None:
        results.extend(
            ResolvedDir(path=d.native_path(), origin=Origin.workspace)
            for d in _walk_anchor(base_anchor, cancel, fallback_root=base.native_path())
        )

    for anchor in outside:
        results.extend(
            ResolvedDir(path=d.native_path(), origin=Origin.outside)
            for d in _walk_anchor(anchor, cancel)
        )

    return results


def plan_anchors(
    patterns: List[Pattern],
    base: DirectoryHandle,
    expand: Expand,
) -> Tuple[List[Pattern], Optional[Anchor], List[Anchor]]:
    # Bucket patterns into literals, the shared base anchor and one anchor
    # per distinct outside pattern (declaration order).
    literals: List[Pattern] = []
    inside: List[str] = []
    outside: Dict[Tuple[str, str], Anchor] = {}

    for pattern in patterns:
        if not pattern.is_wildcard:
            literals.append(pattern)
            continue

        anchor = resolve_anchor(pattern, base)
        if anchor is None:
            # Only base-tree wildcards are expanded; outside patterns are
            # matched as written.
            inside.append(normalize_separators(expand(pattern.raw_text)))
            continue

        key = (normalize_separators(anchor.directory.native_path()), anchor.patterns[0])
        outside.setdefault(key, anchor)

    base_anchor = Anchor(directory=base, patterns=tuple(inside)) if inside else None
    return literals, base_anchor, list(outside.values())


def _walk_anchor(
    anchor: Anchor,
    cancel: Optional[CancelEvent],
    fallback_root: Optional[str] = None,
) -> Iterator[DirectoryHandle]:
    # For the base anchor, a pattern that omits the base path is also tried
    # with "<base>/" in front, so "folder/*/x" reads as "<base>/folder/*/x".
    fallbacks: Tuple[str, ...] = ()
    if fallback_root is not None:
        prefix = normalize_separators(fallback_root).rstrip("/")
        fallbacks = tuple(f"{prefix}/{pat}" for pat in anchor.patterns)

    def accept(directory: DirectoryHandle) -> bool:
        path = directory.native_path()
        return matches_any(path, anchor.patterns) or matches_any(path, fallbacks)

    return walk_directories(anchor.directory, accept, cancel)


def run_resolve(opts: Options, cancel: Optional[threading.Event] = None) -> List[ResolvedDir]:
    # Entry point for the CLI: resolve, render, optionally report.
    expand = VariableExpander.from_environment(
        overrides=opts.variables,
        inherit_env=opts.inherit_env,
    )
    base = LocalDirectory(opts.base.absolute())

    if opts.verbose:
        _print_plan(classify(opts.patterns), base)

    entries = resolve_entries(opts.patterns, base, expand, cancel)

    _render(entries, opts.output_format)

    if opts.report_path:
        report_writer = ReportWriter(opts.report_path)
        try:
            for entry in entries:
                report_writer.write(entry)
        finally:
            report_writer.close()

    if opts.verbose:
        _print_summary(entries, opts)

    return entries


def _render(entries: List[ResolvedDir], output_format: OutputFormat) -> None:
    # Paths are printed verbatim; markup and highlighting would mangle them.
    if output_format is OutputFormat.json:
        text = json.dumps([e.to_dict() for e in entries], indent=2)
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
    elif output_format is OutputFormat.sources:
        text = ",".join(normalize_separators(e.path) for e in entries)
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
    else:
        for entry in entries:
            console.print(entry.path, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _print_plan(patterns: List[Pattern], base: DirectoryHandle) -> None:
    # Show how each token was classified before walking anything.
    _err.print(f"[bold]Base:[/bold] {escape(base.native_path())}", highlight=False)
    for pattern in patterns:
        if not pattern.is_wildcard:
            kind = "literal"
        else:
            anchor = resolve_anchor(pattern, base)
            if anchor is None:
                kind = "workspace wildcard"
            else:
                kind = f"outside wildcard, walked from {anchor.directory.native_path()}"
        _err.print(f"  {pattern.raw_text} -> {kind}", markup=False, highlight=False, emoji=False)


def _print_summary(entries: List[ResolvedDir], opts: Options) -> None:
    counts = Counter(entry.origin for entry in entries)
    _err.print()
    _err.print("[bold]Summary[/bold]")
    _err.print(f"Literal:   {counts[Origin.literal]}")
    _err.print(f"Workspace: {counts[Origin.workspace]}")
    _err.print(f"Outside:   {counts[Origin.outside]}")
    _err.print(f"Total:     {len(entries)}")
    if opts.report_path:
        _err.print(f"Report:    {escape(str(opts.report_path))}", highlight=False)
