"""Track link parsing, artifact resolution and path resolution."""

from .parser import parse_link, parse_bracket_link, compose_link
from .artifacts import ArtifactRenderer, ArtifactResolver
from .paths import PathResolver

__all__ = [
    "parse_link",
    "parse_bracket_link",
    "compose_link",
    "ArtifactRenderer",
    "ArtifactResolver",
    "PathResolver",
]
