"""Color capability levels, and the shared mutable context that carries them."""

from __future__ import annotations

import enum
import threading
from typing import Union

from typing_extensions import TypeAlias


class ColorLevel(enum.IntEnum):
    """Color depth supported by a terminal. Ordered from no color to 24-bit."""

    NONE = 0
    BASIC = 1
    ANSI256 = 2
    TRUECOLOR = 3


LevelLike: TypeAlias = Union[ColorLevel, int]


def as_level(level: LevelLike) -> ColorLevel:
    """Validate and convert an int to a :class:`ColorLevel`."""
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"Color level must be an int in 0-3, got {level!r}")
    try:
        return ColorLevel(level)
    except ValueError:
        raise ValueError(f"Color level must be an int in 0-3, got {level!r}") from None


class LevelContext:
    """Mutable color level shared by a root style and every style derived from it.

    Only the level is stored; `enabled` is derived, so a snapshot from :meth:`get`
    never mixes two writes."""

    __slots__ = ("_level", "_lock")

    def __init__(self, level: LevelLike) -> None:
        self._level = as_level(level)
        self._lock = threading.Lock()

    def get(self) -> tuple[bool, ColorLevel]:
        with self._lock:
            level = self._level
        return level > ColorLevel.NONE, level

    def set(self, level: LevelLike) -> None:
        level = as_level(level)
        with self._lock:
            self._level = level

    @property
    def level(self) -> ColorLevel:
        return self.get()[1]

    @property
    def enabled(self) -> bool:
        return self.get()[0]

    def set_enabled(self, enabled: bool) -> None:
        """Boolean shortcut: disabling drops to NONE, enabling a disabled
        context raises it to BASIC. An already-enabled level is kept."""
        with self._lock:
            if not enabled:
                self._level = ColorLevel.NONE
            elif self._level == ColorLevel.NONE:
                self._level = ColorLevel.BASIC

    def __repr__(self) -> str:
        return f"LevelContext(level={self.level!r})"
