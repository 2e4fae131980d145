from __future__ import annotations

from invoicegen.engine.styles import (
    CARD_SHADOW,
    NO_SHADOW,
    blend,
    corner_radius,
    layout_rules,
    logo_placement,
    normalize_color,
    resolve_style,
    table_rules,
)


def test_corner_radius_mapping_and_fallback() -> None:
    assert [corner_radius(name).px for name in ("none", "small", "medium", "large")] == [0, 4, 8, 16]
    assert corner_radius("LARGE").name == "large"
    assert corner_radius("huge").name == "medium"
    assert corner_radius(None).px == 8


def test_logo_placement() -> None:
    assert logo_placement("left").alignment == "start"
    assert logo_placement(" center ").alignment == "center"
    fallback = logo_placement("top")
    assert fallback.position == "right"
    assert fallback.alignment == "end"


def test_table_rules() -> None:
    bordered = table_rules("bordered", "#7c3aed")
    assert bordered.cell_borders
    assert bordered.cell_padding == (12, 16)
    assert bordered.header_padding == (16, 16)

    minimal = table_rules("minimal")
    assert not minimal.cell_borders
    assert minimal.header_rule_px == 1

    assert table_rules("zebra").style == "bordered"


def test_striped_rows_follow_background() -> None:
    light = table_rules("striped", "#7c3aed", "#ffffff")
    dark = table_rules("striped", "#7c3aed", "#111111")
    assert light.striped and dark.striped
    assert light.stripe_color == "#000000"
    assert dark.stripe_color == "#ffffff"


def test_layout_rules() -> None:
    assert layout_rules("minimal").padding == (64, 32, 64, 32)
    assert layout_rules("detailed").padding == (48, 48, 48, 48)
    modern = layout_rules("modern")
    assert modern.radius_px == 16
    assert modern.shadow == CARD_SHADOW
    standard = layout_rules("fancy")
    assert standard.layout == "standard"
    assert standard.shadow == NO_SHADOW


def test_colours() -> None:
    assert normalize_color("red") == "#ff0000"
    assert normalize_color("#7C3AED") == "#7c3aed"
    assert normalize_color("definitely not a colour", "#000000") == "#000000"
    assert normalize_color("", None) is None
    assert blend("#000000", "#ffffff", 0.5) == "#808080"


def test_colour_notations() -> None:
    assert normalize_color("7c3aed") == "#7c3aed"
    assert normalize_color("#abc") == "#aabbcc"
    assert normalize_color("abc", "#000000") == "#000000"
    assert normalize_color("rgb(255, 0, 0)") == "#ff0000"
    assert normalize_color("rgba(0,0,255,0.5)") == "#0000ff"
    assert normalize_color("1e5", "#000000") == "#000000"
    assert normalize_color("(1,2,3)", "#000000") == "#000000"
    assert normalize_color(["red"], "#000000") == "#000000"
    assert normalize_color(3.5, "#000000") == "#000000"


def test_resolve_style_falls_back_per_field() -> None:
    style = resolve_style({"style.layout": "modern", "style.table_style": "nope", "style.background_color": "#0f172a"})
    assert style.layout.layout == "modern"
    assert style.table.style == "bordered"
    assert style.corner_radius.name == "medium"
    assert style.palette.primary == "#7c3aed"
    assert style.dark
