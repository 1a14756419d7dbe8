from __future__ import annotations

import pytest

from actpdf.writer.commands import FillRect, Font, StrokeLine, StrokeRect, Text
from actpdf.writer.content import (
    build_content_stream,
    escape_text,
    format_color,
    format_number,
    render_command,
)


def test_escape_text_escapes_parentheses_and_backslash() -> None:
    assert escape_text("Test (A)\\B") == "Test \\(A\\)\\\\B"


def test_escape_text_leaves_other_characters_untouched() -> None:
    assert escape_text("Ubicación — Piso 2 <ok> [x]") == "Ubicación — Piso 2 <ok> [x]"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, "0.00"), (40, "40.00"), (595.28, "595.28"), (841.89 - 160, "681.89"), (-3.5, "-3.50")],
)
def test_format_number_uses_two_decimals(value: float, expected: str) -> None:
    assert format_number(value) == expected


def test_format_color_uses_three_decimals_and_clamps() -> None:
    assert format_color((0.043, 0.365, 0.639)) == "0.043 0.365 0.639"
    assert format_color((1, 0, 0.5)) == "1.000 0.000 0.500"
    assert format_color((1.2, -0.1, 0.25)) == "1.000 0.000 0.250"


def test_fill_rect_sets_fill_colour_before_filling() -> None:
    lines = render_command(FillRect(0, 681.89, 595.28, 160, (0.043, 0.365, 0.639)))

    assert lines == ["q", "0.043 0.365 0.639 rg", "0.00 681.89 595.28 160.00 re", "f", "Q"]


def test_stroke_rect_uses_stroke_colour_operator() -> None:
    lines = render_command(StrokeRect(40, 160, 515.28, 521.89, (0, 0, 1), 1))

    assert lines == [
        "q",
        "0.000 0.000 1.000 RG",
        "1.00 w",
        "40.00 160.00 515.28 521.89 re",
        "S",
        "Q",
    ]


def test_stroke_line_moves_then_lines_then_strokes() -> None:
    lines = render_command(StrokeLine(50, 210, 287.64, 210, (0.2, 0.2, 0.2)))

    assert lines[1] == "0.200 0.200 0.200 RG"
    assert lines[3:6] == ["50.00 210.00 m", "287.64 210.00 l", "S"]


def test_text_is_bracketed_and_escaped() -> None:
    lines = render_command(Text("Test (A)\\B", 50, 641.89, 12, Font.BOLD, (1, 1, 1)))

    assert lines == [
        "BT",
        "/F2 12.00 Tf",
        "1.000 1.000 1.000 rg",
        "50.00 641.89 Td (Test \\(A\\)\\\\B) Tj",
        "ET",
    ]


def test_render_command_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        render_command("not a command")  # type: ignore[arg-type]


def test_build_content_stream_preserves_command_order() -> None:
    stream = build_content_stream(
        [
            FillRect(0, 0, 10, 10, (1, 0, 0)),
            Text("first", 1, 2, 10),
            Text("second", 1, 2, 10, Font.BOLD),
        ]
    )

    assert stream.index("re") < stream.index("(first)") < stream.index("(second)")
    assert not stream.endswith("\n")
    assert stream.count("BT") == stream.count("ET") == 2


def test_build_content_stream_of_nothing_is_empty() -> None:
    assert build_content_stream([]) == ""
