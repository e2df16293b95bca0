"""Test format rendering and single-pass template substitution."""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from osmlink.export.renderer import FormatRenderer
from osmlink.export.templates import substitute_named, substitute_ordered
from osmlink.schemas.link import ExportFormat, RenderTemplates, ResolvedPaths

PATHS = ResolvedPaths(relative="FILE.svg", absolute="/home/u/proj/FILE.svg")


@pytest.fixture
def renderer():
    return FormatRenderer(
        RenderTemplates(
            hypertext='<a href="%s" target="_blank">%s</a>',
            typesetting_macro="\\href{file://%F}{%d}",
        )
    )


def test_hypertext_output(renderer):
    output = renderer.render(ExportFormat.HYPERTEXT, PATHS, "Track")
    assert output == '<a href="FILE.svg" target="_blank">Track</a>'


@pytest.mark.parametrize("description", [None, ""])
def test_missing_description_falls_back_to_relative_path(renderer, description):
    output = renderer.render(ExportFormat.HYPERTEXT, PATHS, description)
    assert output == '<a href="FILE.svg" target="_blank">FILE.svg</a>'


def test_typesetting_macro_output(renderer):
    output = renderer.render(ExportFormat.TYPESETTING_MACRO, PATHS, "Track")

    assert output == "\\href{file:///home/u/proj/FILE.svg}{Track}"
    assert "%" not in output


def test_typesetting_macro_relative_path_token():
    renderer = FormatRenderer(RenderTemplates(typesetting_macro="\\includegraphics{%f} %% %d"))

    output = renderer.render(ExportFormat.TYPESETTING_MACRO, PATHS, "Track")

    assert output == "\\includegraphics{FILE.svg} % Track"


def test_plain_ignores_description(renderer):
    assert renderer.render(ExportFormat.PLAIN, PATHS, "Track") == "FILE.svg"
    assert renderer.render("plain", PATHS) == "FILE.svg"


def test_unknown_format_is_rejected(renderer):
    with pytest.raises(ValueError):
        renderer.render("odt", PATHS, "Track")


def test_description_is_not_rescanned(renderer):
    output = renderer.render(ExportFormat.HYPERTEXT, PATHS, "%s and %d")
    assert output == '<a href="FILE.svg" target="_blank">%s and %d</a>'

    output = renderer.render(ExportFormat.TYPESETTING_MACRO, PATHS, "%F %f %d")
    assert output == "\\href{file:///home/u/proj/FILE.svg}{%F %f %d}"


def test_substitution_does_not_create_new_tokens():
    # 'a%' followed by 'd' must not be read back as a '%d' token
    assert substitute_named("%f%d", {"%f": "a%", "%d": "d"}) == "a%d"
    assert substitute_ordered("%s%s", ["%", "s"]) == "%s"


def test_literal_percent_is_not_a_partial_match():
    output = substitute_named("%F %f %%d", {"%f": "rel", "%F": "/abs", "%d": "desc"})
    assert output == "/abs rel %d"


def test_ordered_substitution_counts_must_match():
    with pytest.raises(ValueError):
        substitute_ordered("%s", ["a", "b"])
    with pytest.raises(ValueError):
        substitute_ordered("%s %s %s", ["a", "b"])


def test_hypertext_template_needs_two_placeholders():
    with pytest.raises(ValidationError):
        RenderTemplates(hypertext='<a href="%s">link</a>')

    templates = RenderTemplates(hypertext='<a title="100%%" href="%s">%s</a>')
    output = FormatRenderer(templates).render(ExportFormat.HYPERTEXT, PATHS, "Track")
    assert output == '<a title="100%" href="FILE.svg">Track</a>'
