"""Test track link parsing and composition."""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from osmlink.errors import ParseError
from osmlink.links.parser import compose_link, parse_bracket_link, parse_link
from osmlink.utils.logging_utils import get_logger

logger = get_logger(__name__)

COORDINATES = [(12.0399212, 14.919293), (32.12394, 15.342345)]


def test_round_trip_through_composed_link():
    """Parsing a composed link gives back coordinates, filename and description."""
    path = compose_link(COORDINATES, "FILE.svg")
    logger.info(f"Composed: {path}")

    link = parse_link(path, description="Track")

    assert path == "track:(12.0399212 14.919293)(32.12394 15.342345)FILE.svg"
    assert [tuple(pair) for pair in link.coordinates] == COORDINATES
    assert link.filename == "FILE.svg"
    assert link.description == "Track"


def test_bracket_link_carries_description():
    path = compose_link(COORDINATES, "FILE.svg")

    link = parse_bracket_link(f"[[{path}][Track]]")
    assert link.description == "Track"
    assert link.filename == "FILE.svg"

    link = parse_bracket_link(f"[[{path}]]")
    assert link.description is None


def test_comma_separator_and_prefix_is_optional():
    link = parse_link("(1.5,-2.25)( 3 , 4 )(-.5 1e2)my track.svg")

    assert link.coordinates == ((1.5, -2.25), (3.0, 4.0), (-0.5, 100.0))
    assert link.filename == "my track.svg"


def test_coordinates_are_not_range_checked():
    link = parse_link("track:(123.0 -999.0)FILE.svg")
    assert link.coordinates == ((123.0, -999.0),)


def test_compose_appends_extension_but_parse_does_not():
    assert compose_link([(1, 2)], "FILE") == "track:(1.0 2.0)FILE.svg"

    with pytest.raises(ParseError):
        parse_link("track:(1 2)FILE")


@pytest.mark.parametrize(
    "raw_path",
    [
        "track:(abc)FILE.svg",  # Non-numeric coordinate
        "track:(1 2FILE.svg",  # Unclosed parenthesis
        "track:(1 2)(3)FILE.svg",  # Incomplete pair
        "track:FILE.svg",  # No coordinates
        "track:(1 2)",  # Missing filename
        "track:(1 2)FILE.png",  # Wrong extension
        "track:(1 2)FI(LE.svg",  # Bracket inside filename
        "track:(1 2).svg",  # Extension only
        "track:",
        "",
    ],
)
def test_malformed_links_are_rejected(raw_path):
    with pytest.raises(ParseError) as exc_info:
        parse_link(raw_path)

    assert exc_info.value.raw_path == raw_path
    assert isinstance(exc_info.value, ValueError)


def test_malformed_bracket_link_is_rejected():
    with pytest.raises(ParseError):
        parse_bracket_link("track:(1 2)FILE.svg")


def test_parsed_link_is_immutable():
    link = parse_link("track:(1 2)FILE.svg")

    with pytest.raises(ValidationError):
        link.filename = "OTHER.svg"


def test_custom_extension():
    link = parse_link("track:(1 2)FILE.png", extension=".png")
    assert link.filename == "FILE.png"
    assert link.link_path == "(1.0 2.0)FILE.png"


def test_bracket_description_may_contain_brackets():
    link = parse_bracket_link("[[track:(1 2)FILE.svg][Track [2024]]]")

    assert link.description == "Track [2024]"
    assert link.filename == "FILE.svg"
