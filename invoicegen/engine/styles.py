from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from reportlab.lib import colors

from .records import CORNER_RADII, LAYOUTS, LOGO_POSITIONS, TABLE_STYLES


DEFAULT_CORNER_RADIUS = "medium"
DEFAULT_LOGO_POSITION = "right"
DEFAULT_TABLE_STYLE = "bordered"
DEFAULT_LAYOUT = "standard"

RADIUS_PX: Dict[str, int] = {"none": 0, "small": 4, "medium": 8, "large": 16}
LOGO_ALIGNMENT: Dict[str, str] = {"left": "start", "center": "center", "right": "end"}

_HEX_PATTERN = re.compile(r"#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})")
_RGB_PATTERN = re.compile(
    r"rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[0-9.]+%?\s*)?\)",
    re.IGNORECASE,
)

LAYOUT_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "minimal": {"padding": (64, 32, 64, 32), "radius_px": 0, "shadow": False},
    "standard": {"padding": (32, 32, 32, 32), "radius_px": 0, "shadow": False},
    "detailed": {"padding": (48, 48, 48, 48), "radius_px": 0, "shadow": False},
    "modern": {"padding": (40, 40, 40, 40), "radius_px": 16, "shadow": True},
}


@dataclass(frozen=True)
class CornerRadius:
    name: str
    px: int


@dataclass(frozen=True)
class LogoPlacement:
    position: str
    alignment: str


@dataclass(frozen=True)
class TableRules:
    style: str
    cell_borders: bool
    row_dividers: bool
    border_width_px: int
    border_color: str
    header_rule_px: int
    header_rule_color: str
    striped: bool
    stripe_color: str
    stripe_opacity: float
    cell_padding: Tuple[int, int]
    header_padding: Tuple[int, int]


@dataclass(frozen=True)
class Shadow:
    offset_y_px: int
    blur_px: int
    spread_px: int
    color: str
    opacity: float


NO_SHADOW = Shadow(0, 0, 0, "#000000", 0.0)
CARD_SHADOW = Shadow(4, 6, -1, "#000000", 0.1)


@dataclass(frozen=True)
class LayoutRules:
    layout: str
    padding: Tuple[int, int, int, int]
    radius_px: int
    shadow: Shadow


@dataclass(frozen=True)
class Palette:
    primary: str
    accent: str
    text: str
    background: str
    muted: str
    rule: str


@dataclass(frozen=True)
class Typography:
    family: str
    size: str
    weight: str


@dataclass(frozen=True)
class ResolvedStyle:
    palette: Palette
    typography: Typography
    corner_radius: CornerRadius
    logo: LogoPlacement
    table: TableRules
    layout: LayoutRules
    dark: bool


def _key(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def _hex(color: colors.Color) -> str:
    r, g, b = (int(round(channel * 255)) for channel in color.rgb())
    return f"#{r:02x}{g:02x}{b:02x}"


def _parse_color(text: str) -> Optional[colors.Color]:
    named = colors.getAllNamedColors().get(text.lower())
    if named is not None:
        return named
    match = _RGB_PATTERN.fullmatch(text)
    if match:
        channels = [int(part) for part in match.groups()]
        if any(channel > 255 for channel in channels):
            return None
        return colors.Color(*(channel / 255 for channel in channels))
    match = _HEX_PATTERN.fullmatch(text)
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        if not text.startswith("#"):
            return None
        digits = "".join(digit * 2 for digit in digits)
    return colors.HexColor("#" + digits)


def normalize_color(value: Any, default: Optional[str] = None) -> Optional[str]:
    """
    "#RRGGBB" for a hex colour ("#7c3aed", "7c3aed", "#abc"), a CSS colour
    name or rgb()/rgba() notation. Anything else, including non-string
    values, gives `default`.
    """
    if not isinstance(value, str):
        return default
    text = value.strip()
    if not text:
        return default
    color = _parse_color(text)
    if not isinstance(color, colors.Color):
        return default
    return _hex(color)


def blend(color: str, toward: str, amount: float) -> str:
    """Mix `amount` (0..1) of `toward` into `color`."""
    mixed = colors.linearlyInterpolatedColor(
        colors.toColor(color), colors.toColor(toward), 0, 1, amount
    )
    return _hex(mixed)


def is_dark(color: str) -> bool:
    r, g, b = colors.toColor(color).rgb()
    return 0.2126 * r + 0.7152 * g + 0.0722 * b < 0.5


def corner_radius(value: Any) -> CornerRadius:
    name = _key(value)
    if name not in CORNER_RADII:
        name = DEFAULT_CORNER_RADIUS
    return CornerRadius(name=name, px=RADIUS_PX[name])


def logo_placement(value: Any) -> LogoPlacement:
    position = _key(value)
    if position not in LOGO_POSITIONS:
        position = DEFAULT_LOGO_POSITION
    return LogoPlacement(position=position, alignment=LOGO_ALIGNMENT[position])


def table_rules(value: Any, primary: str = "#e5e7eb", background: str = "#ffffff") -> TableRules:
    style = _key(value)
    if style not in TABLE_STYLES:
        style = DEFAULT_TABLE_STYLE
    dark = is_dark(background)
    if style == "bordered":
        return TableRules(
            style=style,
            cell_borders=True,
            row_dividers=True,
            border_width_px=1,
            border_color=primary,
            header_rule_px=1,
            header_rule_color=primary,
            striped=False,
            stripe_color=background,
            stripe_opacity=0.0,
            cell_padding=(12, 16),
            header_padding=(16, 16),
        )
    if style == "minimal":
        return TableRules(
            style=style,
            cell_borders=False,
            row_dividers=False,
            border_width_px=0,
            border_color=background,
            header_rule_px=1,
            header_rule_color=primary,
            striped=False,
            stripe_color=background,
            stripe_opacity=0.0,
            cell_padding=(16, 16),
            header_padding=(16, 16),
        )
    # striped: alternate rows get a translucent stripe that stays visible on dark backgrounds
    return TableRules(
        style=style,
        cell_borders=False,
        row_dividers=True,
        border_width_px=1,
        border_color=blend(primary, background, 0.875),
        header_rule_px=1,
        header_rule_color=primary,
        striped=True,
        stripe_color="#ffffff" if dark else "#000000",
        stripe_opacity=0.05,
        cell_padding=(16, 16),
        header_padding=(16, 16),
    )


def layout_rules(value: Any) -> LayoutRules:
    layout = _key(value)
    if layout not in LAYOUTS:
        layout = DEFAULT_LAYOUT
    override = LAYOUT_OVERRIDES[layout]
    return LayoutRules(
        layout=layout,
        padding=override["padding"],
        radius_px=override["radius_px"],
        shadow=CARD_SHADOW if override["shadow"] else NO_SHADOW,
    )


def resolve_style(values: Dict[str, Any]) -> ResolvedStyle:
    """
    Aggregate already-resolved "style.*" field values into a ResolvedStyle.
    Each mapping still falls back on its own, so a partial dict is safe.
    """
    primary = normalize_color(values.get("style.primary_color"), "#7c3aed")
    accent = normalize_color(values.get("style.accent_color"), primary)
    text = normalize_color(values.get("style.text_color"), "#1a1a2e")
    background = normalize_color(values.get("style.background_color"), "#ffffff")
    palette = Palette(
        primary=primary,
        accent=accent,
        text=text,
        background=background,
        muted=blend(text, background, 0.5),
        rule=blend(primary, background, 0.875),
    )
    typography = Typography(
        family=str(values.get("style.font_family") or "Inter"),
        size=str(values.get("style.font_size") or "14px"),
        weight=str(values.get("style.font_weight") or "400"),
    )
    return ResolvedStyle(
        palette=palette,
        typography=typography,
        corner_radius=corner_radius(values.get("style.corner_radius")),
        logo=logo_placement(values.get("style.logo_position")),
        table=table_rules(values.get("style.table_style"), primary, background),
        layout=layout_rules(values.get("style.layout")),
        dark=is_dark(background),
    )
