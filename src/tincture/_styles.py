"""Style definitions and the static registry of named styles."""

from __future__ import annotations

import dataclasses
import difflib
import enum
import types
from typing import Mapping

from . import _convert
from ._convert import RGB, sgr
from ._levels import ColorLevel


class StyleCategory(enum.Enum):
    """Axis a style acts on. Codes in the same category override each other."""

    FOREGROUND = "foreground"
    BACKGROUND = "background"
    MODIFIER = "modifier"


class UnknownStyleError(KeyError):
    """Raised when deriving a style from a name that isn't in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name
        self.suggestions = difflib.get_close_matches(name, STYLES.keys(), n=3)

    def __str__(self) -> str:
        message = f"Unknown style {self.name!r}."
        if len(self.suggestions) > 0:
            message += " Did you mean " + ", ".join(map(repr, self.suggestions)) + "?"
        return message


@dataclasses.dataclass(frozen=True)
class StyleDefinition:
    """A single style application.

    Static styles carry full escape sequences in `open` and `close`. Dynamic colors
    carry `rgb` or `ansi256` instead, and their open code is computed at invocation
    time for the level in effect."""

    name: str
    category: StyleCategory
    open: str = ""
    close: str = ""
    rgb: RGB | None = None
    ansi256: int | None = None

    def resolve(self, level: ColorLevel) -> tuple[str, str] | None:
        """Returns the `(open, close)` pair at `level`, or None if the style emits
        nothing there."""
        if level <= ColorLevel.NONE:
            return None
        background = self.category is StyleCategory.BACKGROUND
        if self.rgb is not None:
            open_code = _convert.downsample(self.rgb, level, background)
        elif self.ansi256 is not None:
            open_code = _convert.downsample_ansi256(self.ansi256, level, background)
        else:
            open_code = self.open
        if open_code is None:
            return None
        return open_code, self.close


_FOREGROUND_CLOSE = sgr("39")
_BACKGROUND_CLOSE = sgr("49")

_COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


def _build_registry() -> dict[str, StyleDefinition]:
    out: dict[str, StyleDefinition] = {}

    def add(name: str, category: StyleCategory, open_: int, close: int) -> None:
        out[name] = StyleDefinition(name, category, sgr(str(open_)), sgr(str(close)))

    modifiers = {
        "reset": (0, 0),
        "bold": (1, 22),
        "dim": (2, 22),
        "italic": (3, 23),
        "underline": (4, 24),
        "inverse": (7, 27),
        "hidden": (8, 28),
        "strikethrough": (9, 29),
    }
    for name, (open_, close) in modifiers.items():
        add(name, StyleCategory.MODIFIER, open_, close)

    # No escape codes. Only affects whether the text is shown at all.
    out["visible"] = StyleDefinition("visible", StyleCategory.MODIFIER)

    for offset, color in enumerate(_COLOR_NAMES):
        add(color, StyleCategory.FOREGROUND, 30 + offset, 39)
        add(f"bright_{color}", StyleCategory.FOREGROUND, 90 + offset, 39)
        add(f"bg_{color}", StyleCategory.BACKGROUND, 40 + offset, 49)
        add(f"bg_bright_{color}", StyleCategory.BACKGROUND, 100 + offset, 49)

    # Aliases share the canonical definition object.
    for alias in ("gray", "grey"):
        out[alias] = out["bright_black"]
        out[f"bg_{alias}"] = out["bg_bright_black"]
    return out


STYLES: Mapping[str, StyleDefinition] = types.MappingProxyType(_build_registry())
"""Registry of every named style, including aliases."""

STYLE_NAMES: tuple[str, ...] = tuple(STYLES.keys())


def lookup(name: str) -> StyleDefinition:
    try:
        return STYLES[name]
    except (KeyError, TypeError):
        raise UnknownStyleError(str(name)) from None


def _category(background: bool) -> StyleCategory:
    return StyleCategory.BACKGROUND if background else StyleCategory.FOREGROUND


def _close(background: bool) -> str:
    return _BACKGROUND_CLOSE if background else _FOREGROUND_CLOSE


def rgb(r: float, g: float, b: float, background: bool = False) -> StyleDefinition:
    """Dynamic 24-bit color. Out-of-range components are clamped."""
    triple = (_convert.clamp(r), _convert.clamp(g), _convert.clamp(b))
    prefix = "bg_rgb" if background else "rgb"
    return StyleDefinition(
        name=f"{prefix}{triple}",
        category=_category(background),
        close=_close(background),
        rgb=triple,
    )


def hex(value: str, background: bool = False) -> StyleDefinition:
    """Dynamic color from a hex string such as `#FF0000` or `f00`."""
    return rgb(*_convert.hex_to_rgb(value), background=background)


def ansi256(index: int, background: bool = False) -> StyleDefinition:
    """Dynamic color from a 256-color palette index."""
    index = _convert.clamp(index)
    prefix = "bg_ansi256" if background else "ansi256"
    return StyleDefinition(
        name=f"{prefix}({index})",
        category=_category(background),
        close=_close(background),
        ansi256=index,
    )
