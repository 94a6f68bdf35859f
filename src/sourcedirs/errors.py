# Exception types raised by sourcedirs.
# Filesystem failures are plain OSError and are never wrapped.


class SourceDirsError(Exception):
    # Base class for errors raised by this package.
    pass


class ResolutionCancelled(SourceDirsError):
    # Raised when the caller's cancel event is set mid-walk.
    # Deliberately not an OSError so callers can tell an abort from a failure.
    pass


class InvalidVariable(SourceDirsError, ValueError):
    # A NAME=VALUE override could not be parsed.
    pass
