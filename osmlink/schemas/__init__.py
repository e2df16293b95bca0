"""Data schemas for track links and export."""

from .link import (
    Coordinate,
    TrackLink,
    ExportFormat,
    PathContext,
    ResolvedPaths,
    RenderTemplates,
    PublishContext,
)

__all__ = [
    "Coordinate",
    "TrackLink",
    "ExportFormat",
    "PathContext",
    "ResolvedPaths",
    "RenderTemplates",
    "PublishContext",
]
