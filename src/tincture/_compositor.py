"""Wraps text in the escape codes of a style stack.

The compositor is a pure function of `(styles, level, text)`. Two rewrites make
nesting and multi-line output behave:

- If the text already contains the close code of a style in the stack (an inner
  style of the same category ended there), the style is reopened right after it.
  Matching is purely literal, so escape codes that didn't come from us are treated
  the same way.
- Every line is wrapped separately, since many terminals reset attributes at a line
  break.
"""

from __future__ import annotations

import re
from typing import Sequence

from ._convert import sgr
from ._levels import ColorLevel, LevelLike, as_level
from ._styles import STYLES, StyleDefinition

_LINE_BREAK = re.compile(r"(\r?\n)")

_LEGACY_BLUE_OPEN = sgr("94")


def is_visible_only(styles: Sequence[StyleDefinition]) -> bool:
    """True if the stack contains `visible`: text is hidden when colors are off."""
    return any(style is STYLES["visible"] for style in styles)


def resolve_codes(
    styles: Sequence[StyleDefinition],
    level: ColorLevel,
    legacy_windows: bool = False,
) -> list[tuple[str, str]]:
    """Resolve a style stack into `(open, close)` pairs, in access order. Styles
    that emit nothing at `level` are dropped."""
    has_gray = any(style is STYLES["bright_black"] for style in styles)
    out: list[tuple[str, str]] = []
    for style in styles:
        codes = style.resolve(level)
        if codes is None:
            continue
        open_code, close_code = codes
        if legacy_windows:
            # Plain blue is unreadable in cmd.exe, and dimmed gray is invisible.
            if style is STYLES["blue"]:
                open_code = _LEGACY_BLUE_OPEN
            elif style is STYLES["dim"] and has_gray:
                open_code = ""
        if open_code == "" and close_code == "":
            continue
        out.append((open_code, close_code))
    return out


def compose(
    styles: Sequence[StyleDefinition],
    level: LevelLike,
    text: str,
    legacy_windows: bool = False,
) -> str:
    """Apply `styles` (outermost first) to `text` at an explicit color level."""
    level = as_level(level)
    if level == ColorLevel.NONE:
        return "" if is_visible_only(styles) else text

    codes = resolve_codes(styles, level, legacy_windows)
    if len(codes) == 0:
        return text

    # Innermost style first, so that when several styles share a close code the
    # innermost one is reopened last and wins.
    for open_code, close_code in reversed(codes):
        if close_code != "" and close_code in text:
            text = text.replace(close_code, close_code + open_code)

    opens = "".join(open_code for open_code, _ in codes)
    closes = "".join(close_code for _, close_code in reversed(codes))

    # Odd indices hold the line breaks themselves.
    parts = _LINE_BREAK.split(text)
    return "".join(
        part if i % 2 == 1 else opens + part + closes for i, part in enumerate(parts)
    )
