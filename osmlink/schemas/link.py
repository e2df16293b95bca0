"""Track link, export and publish schemas."""

from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

Coordinate = Tuple[float, float]  # (latitude, longitude)


class ExportFormat(str, Enum):
    """Output formats a track link can be exported to."""

    HYPERTEXT = "html"
    TYPESETTING_MACRO = "latex"
    PLAIN = "plain"


class PathContext(str, Enum):
    """Context a resolved artifact path is used in."""

    INTERACTIVE = "interactive"  # Canonical path for a viewer
    EXPORT_RELATIVE = "export_relative"  # Relative to the export document
    EXPORT_ABSOLUTE = "export_absolute"  # Expanded absolute path


class TrackLink(BaseModel):
    """Parsed track link: ordered coordinates plus artifact filename."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "coordinates": [[12.0399212, 14.919293], [32.12394, 15.342345]],
                "filename": "FILE.svg",
                "description": "Track",
            }
        },
    )

    coordinates: Tuple[Coordinate, ...] = Field(..., description="Ordered (latitude, longitude) pairs")
    filename: str = Field(..., description="Artifact filename, including extension", min_length=1)
    description: Optional[str] = Field(None, description="Link description")

    @field_validator("coordinates")
    @classmethod
    def _at_least_one_pair(cls, value: Tuple[Coordinate, ...]) -> Tuple[Coordinate, ...]:
        if not value:
            raise ValueError("A track needs at least one coordinate pair")
        return value

    @property
    def link_path(self) -> str:
        """Link path without the link type prefix."""
        pairs = "".join(f"({lat!r} {lon!r})" for lat, lon in self.coordinates)
        return f"{pairs}{self.filename}"


class ResolvedPaths(BaseModel):
    """Artifact paths computed for one export call."""

    relative: str = Field(..., description="Path relative to the export document directory")
    absolute: str = Field(..., description="Expanded absolute path")


class RenderTemplates(BaseModel):
    """Export templates.

    The hypertext template takes two positional ``%s`` placeholders (path,
    description). The typesetting macro template takes the named tokens
    ``%f`` (relative path), ``%F`` (absolute path) and ``%d`` (description).
    ``%%`` stands for a literal percent sign in both.
    """

    hypertext: str = Field('<a href="%s" target="_blank">%s</a>', description="HTML template")
    typesetting_macro: str = Field("\\href{file://%F}{%d}", description="LaTeX template")

    @field_validator("hypertext")
    @classmethod
    def _two_positional_placeholders(cls, value: str) -> str:
        count = value.replace("%%", "").count("%s")
        if count != 2:
            raise ValueError(
                f"Hypertext template needs exactly two '%s' placeholders, found {count}"
            )
        return value


class PublishContext(BaseModel):
    """Inputs of one publish step."""

    source_artifact_path: Path = Field(..., description="Artifact to publish")
    publish_directory: Path = Field(..., description="Destination directory")
    cache_directory: Path = Field(..., description="Tile cache the copy should reference")
