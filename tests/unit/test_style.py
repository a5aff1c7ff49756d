"""Tests for the style resolver."""

from enum import Enum

import pytest
from structlog.testing import capture_logs

from sdui.interpreter.style import BODY, CLEAR, PRIMARY, PresentationFont, StyleResolver


@pytest.fixture
def style():
    return StyleResolver()


@pytest.mark.unit
@pytest.mark.parametrize("token", ["red", "RED", " Red "])
def test_named_colors_case_insensitive(style, token):
    assert style.resolve_color(token).name == "red"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("token", "expected"),
    [("warning", "orange"), ("critical", "red"), ("success", "green"), ("info", "blue")],
)
def test_semantic_aliases(style, token, expected):
    assert style.resolve_color(token).name == expected


@pytest.mark.unit
def test_hex_colors(style):
    color = style.resolve_color("#FF8800")

    assert color.rgb == (255, 136, 0)
    assert color.hex == "#ff8800"


@pytest.mark.unit
def test_hex_colors_with_alpha(style):
    color = style.resolve_color("#FF880080")

    assert color.rgb == (255, 136, 0)
    assert color.opacity == 0.502
    assert style.resolve_color("#ff8800ff").opacity == 1.0
    assert style.resolve_background("#00000000") is None


@pytest.mark.unit
@pytest.mark.parametrize("token", ["#fff", "#gggggg", "#1234567", "#123456789", "chartreuse-ish"])
def test_malformed_color_falls_back_to_primary(style, token):
    with capture_logs() as logs:
        color = style.resolve_color(token)

    assert color == PRIMARY
    assert logs[0]["event"] == "style_parse_failed"
    assert logs[0]["token"] == token


@pytest.mark.unit
def test_absent_color_is_primary(style):
    assert style.resolve_color(None) == PRIMARY


@pytest.mark.unit
@pytest.mark.parametrize("token", ["clear", "transparent", "Clear"])
def test_clear_is_fully_transparent(style, token):
    assert style.resolve_color(token) == CLEAR
    assert style.resolve_color(token).is_clear
    assert style.resolve_background(token) is None


@pytest.mark.unit
def test_background_resolves_fill(style):
    assert style.resolve_background("blue").name == "blue"
    assert style.resolve_background(None) is None


@pytest.mark.unit
@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("pending", "gray"),
        ("in_progress", "blue"),
        ("In Progress", "blue"),
        ("completed", "green"),
        ("skipped", "orange"),
    ],
)
def test_status_color_from_scoped_item(style, status, expected):
    assert style.resolve_color("statusColor", {"status": status}).name == expected


@pytest.mark.unit
def test_status_color_accepts_enums(style):
    class JobStatus(Enum):
        IN_PROGRESS = "inProgress"

    assert style.resolve_color("statusColor", {"status": JobStatus.IN_PROGRESS}).name == "blue"


@pytest.mark.unit
def test_status_color_without_status(style):
    assert style.resolve_color("statusColor", None) == PRIMARY
    assert style.resolve_color("statusColor", {"status": "unknown"}) == PRIMARY


@pytest.mark.unit
@pytest.mark.parametrize("token", ["headline", "title2", "largeTitle", "CAPTION"])
def test_font_styles(style, token):
    assert style.resolve_font(token).style.lower() == token.lower()


@pytest.mark.unit
def test_design_font_aliases(style):
    assert style.resolve_font("headlineMedium") == PresentationFont("title2")
    assert style.resolve_font("captionEmphasis") == PresentationFont("caption", "bold")


@pytest.mark.unit
def test_unknown_font_falls_back_to_body(style):
    with capture_logs() as logs:
        assert style.resolve_font("comic-sans") == BODY
    assert logs[0]["kind"] == "font"
