"""Unit tests for /src/squares/palette.py"""

from src.squares.palette import COLORS, TEAM_PRESETS, color_for_index


def test_palette_colors_are_unique_hex() -> None:
    assert len(set(COLORS)) == len(COLORS)
    assert all(color.startswith("#") and len(color) == 7 for color in COLORS)


def test_color_for_index_wraps() -> None:
    assert [color_for_index(i) for i in range(len(COLORS))] == list(COLORS)
    assert color_for_index(len(COLORS) * 3 + 2) == COLORS[2]


def test_team_presets_have_names_and_colors() -> None:
    names = [preset.name for preset in TEAM_PRESETS]
    assert "KC Chiefs" in names
    assert len(set(names)) == len(names)
    assert all(preset.color.startswith("#") for preset in TEAM_PRESETS)
