"""Fatal, run-level errors. Per-source and per-item failures never raise."""


class FeedDigestError(Exception):
    """Base exception for errors that should stop the current command."""


class SourcesError(FeedDigestError):
    """Raised when the sources file is missing or malformed."""


class PayloadNotFoundError(FeedDigestError):
    """Raised when no daily payload exists for the requested date."""
