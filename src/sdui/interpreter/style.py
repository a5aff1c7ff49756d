"""Style Resolver - presentation tokens to concrete colors and fonts.

Style errors never fail a render: unparsable tokens fall back to defaults.
"""

import re
from dataclasses import dataclass
from typing import Any

from sdui.core import get_logger
from sdui.core.errors import StyleParseError
from .bindings import MISSING, lookup_path

logger = get_logger(__name__)

HEX_PATTERN = re.compile(r"^#([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})?$")


@dataclass(frozen=True)
class PresentationColor:
    """A resolved color: semantic name plus RGB when known."""

    name: str
    rgb: tuple[int, int, int] | None = None
    opacity: float = 1.0

    @property
    def is_clear(self) -> bool:
        return self.opacity == 0.0

    @property
    def hex(self) -> str | None:
        if self.rgb is None:
            return None
        return "#{:02x}{:02x}{:02x}".format(*self.rgb)


@dataclass(frozen=True)
class PresentationFont:
    """A resolved text style."""

    style: str = "body"
    weight: str = "regular"


PRIMARY = PresentationColor("primary")
CLEAR = PresentationColor("clear", opacity=0.0)
BODY = PresentationFont()

NAMED_COLORS: dict[str, PresentationColor] = {
    "primary": PRIMARY,
    "secondary": PresentationColor("secondary"),
    "accent": PresentationColor("accent"),
    "red": PresentationColor("red", (255, 59, 48)),
    "blue": PresentationColor("blue", (0, 122, 255)),
    "green": PresentationColor("green", (52, 199, 89)),
    "gray": PresentationColor("gray", (142, 142, 147)),
    "black": PresentationColor("black", (0, 0, 0)),
    "white": PresentationColor("white", (255, 255, 255)),
    "orange": PresentationColor("orange", (255, 149, 0)),
    "yellow": PresentationColor("yellow", (255, 204, 0)),
    "purple": PresentationColor("purple", (175, 82, 222)),
    "pink": PresentationColor("pink", (255, 45, 85)),
    "cyan": PresentationColor("cyan", (50, 173, 230)),
    "mint": PresentationColor("mint", (0, 199, 190)),
    "teal": PresentationColor("teal", (48, 176, 199)),
    "indigo": PresentationColor("indigo", (88, 86, 214)),
    "brown": PresentationColor("brown", (162, 132, 94)),
    "clear": CLEAR,
    "transparent": CLEAR,
}
NAMED_COLORS["grey"] = NAMED_COLORS["gray"]

SEMANTIC_ALIASES = {
    "warning": "orange",
    "critical": "red",
    "success": "green",
    "info": "blue",
}

STATUS_COLORS = {
    "pending": "gray",
    "inprogress": "blue",
    "completed": "green",
    "skipped": "orange",
}

FONT_STYLES: dict[str, PresentationFont] = {
    name.lower(): PresentationFont(name)
    for name in (
        "headline",
        "subheadline",
        "caption",
        "caption2",
        "footnote",
        "title",
        "title2",
        "title3",
        "largeTitle",
        "callout",
        "body",
    )
}

# Design-system aliases
FONT_STYLES.update(
    {
        "headlinelarge": PresentationFont("title"),
        "headlinemedium": PresentationFont("title2"),
        "headlinesmall": PresentationFont("title3"),
        "bodylarge": PresentationFont("body"),
        "bodymedium": PresentationFont("callout"),
        "bodysmall": PresentationFont("caption"),
        "captionemphasis": PresentationFont("caption", "bold"),
        "displaylarge": PresentationFont("largeTitle"),
        "displaysmall": PresentationFont("title"),
        "titlemedium": PresentationFont("title2"),
        "titlelarge": PresentationFont("title"),
    }
)


class StyleResolver:
    """Maps color and font tokens to presentation values."""

    def resolve_color(self, token: str | None, scope_data: Any = None) -> PresentationColor:
        """
        Resolve a color token.

        Args:
            token: Semantic name, `#RRGGBB` or `#RRGGBBAA`, "clear"/"transparent", or "statusColor"
            scope_data: Current row item (used by "statusColor")

        Returns:
            Presentation color; primary when the token is absent or malformed
        """
        if token is None:
            return PRIMARY
        try:
            return self._parse_color(token, scope_data)
        except StyleParseError as e:
            logger.warning("style_parse_failed", kind=e.kind, token=e.token)
            return PRIMARY

    def resolve_background(self, token: str | None, scope_data: Any = None) -> PresentationColor | None:
        """Background fill, or None when no fill should be painted."""
        if token is None:
            return None
        color = self.resolve_color(token, scope_data)
        return None if color.is_clear else color

    def resolve_font(self, token: str | None) -> PresentationFont:
        """Resolve a font token; unknown tokens fall back to body."""
        if token is None:
            return BODY
        font = FONT_STYLES.get(token.strip().lower())
        if font is None:
            logger.warning("style_parse_failed", kind="font", token=token)
            return BODY
        return font

    def _parse_color(self, token: str, scope_data: Any) -> PresentationColor:
        name = token.strip().lower()

        if name == "statuscolor":
            return self._status_color(scope_data)

        name = SEMANTIC_ALIASES.get(name, name)
        if name in NAMED_COLORS:
            return NAMED_COLORS[name]

        if name.startswith("#"):
            match = HEX_PATTERN.match(name)
            if match is None:
                raise StyleParseError(token)
            red, green, blue, alpha = match.groups()
            rgb = (int(red, 16), int(green, 16), int(blue, 16))
            opacity = 1.0 if alpha is None else round(int(alpha, 16) / 255, 3)
            return PresentationColor(name, rgb, opacity)

        raise StyleParseError(token)

    def _status_color(self, scope_data: Any) -> PresentationColor:
        status = lookup_path(scope_data, "status") if scope_data is not None else MISSING
        if status is MISSING or status is None:
            return PRIMARY
        raw = getattr(status, "value", status)
        normalised = str(raw).lower().replace("_", "").replace(" ", "").replace("-", "")
        color = STATUS_COLORS.get(normalised)
        return NAMED_COLORS[color] if color else PRIMARY


__all__ = [
    "PresentationColor",
    "PresentationFont",
    "PRIMARY",
    "CLEAR",
    "BODY",
    "StyleResolver",
]
