"""Parsing and composition of track link paths.

A link path is one or more parenthesised ``(lat lon)`` pairs directly
followed by the artifact filename::

    track:(12.0399212 14.919293)(32.12394,15.342345)FILE.svg
"""

import re
from typing import Optional, Sequence

from pydantic import ValidationError

from osmlink.conf.settings import settings
from osmlink.errors import ParseError
from osmlink.schemas.link import Coordinate, TrackLink
from osmlink.utils.logging_utils import get_logger

logger = get_logger(__name__)

_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"
_PAIR_PATTERN = re.compile(rf"\(\s*({_NUMBER})\s*(?:,\s*|\s+)({_NUMBER})\s*\)")
_FILENAME_PATTERN = re.compile(r"[^()\[\]]+")
_BRACKET_LINK_PATTERN = re.compile(
    r"\[\[(?P<path>[^\]]+)\](?:\[(?P<description>.*)\])?\]", re.DOTALL
)


def _strip_link_type(raw_path: str) -> str:
    prefix = f"{settings.link_type}:"
    if raw_path.startswith(prefix):
        return raw_path[len(prefix):]
    return raw_path


def parse_link(
    raw_path: str,
    description: Optional[str] = None,
    extension: Optional[str] = None,
) -> TrackLink:
    """Parse a link path into a TrackLink.

    Coordinates are not range-checked and the extension is never added
    here; a filename without it is rejected.

    Args:
        raw_path: Link path, with or without the ``track:`` prefix
        description: Optional link description
        extension: Required filename extension (defaults to settings.image_extension)

    Returns:
        Parsed TrackLink

    Raises:
        ParseError: If the path does not match the link grammar
    """
    extension = extension or settings.image_extension
    payload = _strip_link_type(raw_path.strip())

    if not payload:
        raise ParseError(raw_path, "empty link path")

    coordinates = []
    pos = 0
    while pos < len(payload) and payload[pos] == "(":
        match = _PAIR_PATTERN.match(payload, pos)
        if match is None:
            raise ParseError(raw_path, f"malformed coordinate pair at position {pos}")
        coordinates.append((float(match.group(1)), float(match.group(2))))
        pos = match.end()

    if not coordinates:
        raise ParseError(raw_path, "expected at least one '(lat lon)' pair")

    filename = payload[pos:].strip()
    if not filename:
        raise ParseError(raw_path, "missing filename")
    if not _FILENAME_PATTERN.fullmatch(filename):
        raise ParseError(raw_path, f"invalid characters in filename '{filename}'")
    if not filename.endswith(extension) or filename == extension:
        raise ParseError(raw_path, f"filename '{filename}' must end with '{extension}'")

    try:
        link = TrackLink(coordinates=coordinates, filename=filename, description=description)
    except ValidationError as e:
        raise ParseError(raw_path, str(e)) from e

    logger.debug(f"Parsed track link: {len(coordinates)} points -> {filename}")
    return link


def parse_bracket_link(text: str, extension: Optional[str] = None) -> TrackLink:
    """Parse a bracket link ``[[track:...][description]]``.

    Args:
        text: Bracket link text; the description part is optional and may
            itself contain brackets, it runs up to the closing "]]"
        extension: Required filename extension

    Returns:
        Parsed TrackLink carrying the description, if any

    Raises:
        ParseError: If the text is not a bracket link or its path is malformed
    """
    match = _BRACKET_LINK_PATTERN.fullmatch(text.strip())
    if match is None:
        raise ParseError(text, "not a bracket link")

    description = match.group("description")
    return parse_link(match.group("path"), description=description or None, extension=extension)


def compose_link(
    coordinates: Sequence[Coordinate],
    filename: str,
    extension: Optional[str] = None,
) -> str:
    """Build a ``track:`` link path.

    The extension is appended to the filename when missing.

    Args:
        coordinates: Ordered (latitude, longitude) pairs
        filename: Artifact filename
        extension: Image extension (defaults to settings.image_extension)

    Returns:
        Link path, e.g. 'track:(12.0 14.9)(32.1 15.3)FILE.svg'
    """
    extension = extension or settings.image_extension

    if not coordinates:
        raise ValueError("A track needs at least one coordinate pair")

    if not filename.endswith(extension):
        filename = f"{filename}{extension}"

    pairs = "".join(f"({float(lat)!r} {float(lon)!r})" for lat, lon in coordinates)
    return f"{settings.link_type}:{pairs}{filename}"
