"""Track link resolution and multi-format export.

Resolves ``track:`` links (coordinate list + image filename) into rendered
SVG artifacts and renders them for interactive viewing or for HTML, LaTeX
and plain-path export. Published copies of artifacts get their embedded
tile-cache references rewritten relative to the publish location.
"""

from .errors import OsmLinkError, ParseError, RenderError
from .schemas import ExportFormat, PathContext, TrackLink
from .engine import EngineConfig, TrackLinkEngine

__all__ = [
    "OsmLinkError",
    "ParseError",
    "RenderError",
    "ExportFormat",
    "PathContext",
    "TrackLink",
    "EngineConfig",
    "TrackLinkEngine",
]

__version__ = "0.1.0"
