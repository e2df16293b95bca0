"""Exception types raised while resolving and exporting track links."""


class OsmLinkError(Exception):
    """Base class for track link errors."""


class ParseError(OsmLinkError, ValueError):
    """Raised when a link path does not match the track link grammar."""

    def __init__(self, raw_path: str, reason: str):
        self.raw_path = raw_path
        self.reason = reason
        super().__init__(f"Cannot parse track link '{raw_path}': {reason}")


class RenderError(OsmLinkError, RuntimeError):
    """Raised when the artifact renderer fails to produce an artifact."""
