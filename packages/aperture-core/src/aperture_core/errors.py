"""Exception hierarchy for Aperture."""


class ApertureError(Exception):
    """Base class for errors raised by aperture_core I/O boundaries."""


class TokenLoadError(ApertureError):
    """A token document could not be read or did not match the schema."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load tokens from {source}: {reason}")


class HistoryError(ApertureError):
    """History or baseline storage could not be written."""


class AnalysisError(ApertureError):
    """A usage scan could not run (e.g. a directory does not exist)."""
