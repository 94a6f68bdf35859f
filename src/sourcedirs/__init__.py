# Package initialization for sourcedirs.
# Only metadata and the public resolution entry points are exported here.
# Everything else is imported from its submodule explicitly.

from sourcedirs.core import resolve_entries, resolve_source_dirs
from sourcedirs.errors import ResolutionCancelled, SourceDirsError

__all__ = [
    "__version__",
    "resolve_entries",
    "resolve_source_dirs",
    "ResolutionCancelled",
    "SourceDirsError",
]

# Keep in sync with pyproject.toml.
__version__ = "0.1.0"
