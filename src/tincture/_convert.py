"""Color-space conversion from 24-bit RGB down to 256-color and 16-color codes.

Everything in here is a pure function of its inputs."""

from __future__ import annotations

import functools
import re
from typing import Tuple

from ._levels import ColorLevel

RGB = Tuple[int, int, int]

# Channel intensities of the 6x6x6 color cube occupying indices 16-231.
_CUBE_STEPS = (0, 95, 135, 175, 215, 255)

# Approximate RGB values of the 16 basic colors (xterm defaults).
_BASIC_PALETTE: tuple[RGB, ...] = (
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
    (127, 127, 127),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (92, 92, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def sgr(params: str) -> str:
    """Wrap SGR parameters in a CSI sequence: `sgr("31") == "\\x1b[31m"`."""
    return f"\x1b[{params}m"


def clamp(value: float) -> int:
    """Clamp a (possibly computed) color component into 0-255, rounding to the
    nearest integer. NaN maps to 0."""
    if value != value:
        return 0
    return _round_half_up(max(0.0, min(255.0, value)))


def _round_half_up(x: float) -> int:
    # `round()` rounds half to even; color math expects half up.
    return int(x + 0.5)


def _nearest_cube_index(value: int) -> int:
    if value < 48:
        return 0
    if value < 115:
        return 1
    return (value - 35) // 40


@functools.lru_cache(maxsize=4096)
def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Map an RGB triple to the closest entry of the 256-color palette.

    Grays go through the 24-step ramp at 232-255, except that pure-enough black and
    white snap to the exact cube corners (16 and 231)."""
    r, g, b = clamp(r), clamp(g), clamp(b)
    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return _round_half_up((r - 8) / 247 * 24) + 232
    return (
        16
        + 36 * _nearest_cube_index(r)
        + 6 * _nearest_cube_index(g)
        + _nearest_cube_index(b)
    )


def ansi256_to_rgb(index: int) -> RGB:
    index = clamp(index)
    if index < 16:
        return _BASIC_PALETTE[index]
    if index >= 232:
        c = (index - 232) * 10 + 8
        return (c, c, c)
    index -= 16
    return (
        _CUBE_STEPS[index // 36],
        _CUBE_STEPS[(index % 36) // 6],
        _CUBE_STEPS[index % 6],
    )


def ansi256_to_ansi16(index: int) -> int:
    """Collapse a 256-color index to a basic palette index in 0-15.

    Indices below 16 are returned unchanged. Everything else is decomposed back into
    RGB; each channel votes for one of the 8 base hues, and the result is made
    bright when the dominant channel is above the midpoint."""
    index = clamp(index)
    if index < 16:
        return index
    r, g, b = ansi256_to_rgb(index)
    value = _round_half_up(max(r, g, b) * 2 / 255)
    if value == 0:
        return 0
    hue = (
        (_round_half_up(b / 255) << 2)
        | (_round_half_up(g / 255) << 1)
        | _round_half_up(r / 255)
    )
    return hue + 8 if value == 2 else hue


def ansi16_params(index: int, background: bool = False) -> str:
    """SGR parameter for a basic palette index: 30-37/90-97, or 40-47/100-107."""
    base = 30 if index < 8 else 90
    return str(base + index % 8 + (10 if background else 0))


def hex_to_rgb(value: str) -> RGB:
    """Parse `#RRGGBB`, `RRGGBB`, `#RGB` or `RGB`. Raises ValueError otherwise."""
    match = _HEX_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid hex color: {value!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    number = int(digits, 16)
    return ((number >> 16) & 0xFF, (number >> 8) & 0xFF, number & 0xFF)


def downsample(rgb: RGB, level: ColorLevel, background: bool = False) -> str | None:
    """Escape code for an RGB color at a given level, or None at `ColorLevel.NONE`."""
    r, g, b = (clamp(c) for c in rgb)
    if level >= ColorLevel.TRUECOLOR:
        return sgr(f"{48 if background else 38};2;{r};{g};{b}")
    if level == ColorLevel.ANSI256:
        return sgr(f"{48 if background else 38};5;{rgb_to_ansi256(r, g, b)}")
    if level == ColorLevel.BASIC:
        index = ansi256_to_ansi16(rgb_to_ansi256(r, g, b))
        return sgr(ansi16_params(index, background))
    return None


def downsample_ansi256(
    index: int, level: ColorLevel, background: bool = False
) -> str | None:
    """Escape code for a 256-color palette index. True color terminals get the
    palette code as-is."""
    index = clamp(index)
    if level >= ColorLevel.ANSI256:
        return sgr(f"{48 if background else 38};5;{index}")
    if level == ColorLevel.BASIC:
        return sgr(ansi16_params(ansi256_to_ansi16(index), background))
    return None
