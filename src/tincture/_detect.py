"""Terminal color capability detection.

Settings are read from the environment:

- `NO_COLOR`: any non-empty value disables colors.
- `FORCE_COLOR`: `""` or `"true"` forces at least basic colors even when not writing
  to a TTY, `"0"` or `"false"` disables colors, `"1"`-`"3"` selects a level directly.
- `TERM`, `COLORTERM`, `TERM_PROGRAM`, `TERM_PROGRAM_VERSION` and `CI` are used to
  guess the color depth.
"""

from __future__ import annotations

import os
import platform as _platform
import re
import sys
import warnings
from typing import Any, Mapping

from ._levels import ColorLevel
from ._warnings import TinctureWarning

_COLOR_TERM_PATTERN = re.compile(
    r"^screen|^xterm|^vt100|^vt220|^rxvt|color|ansi|cygwin|linux", re.IGNORECASE
)
_TERM_256_PATTERN = re.compile(r"-256(color)?$", re.IGNORECASE)
_CI_VENDORS = ("TRAVIS", "CIRCLECI", "APPVEYOR", "GITLAB_CI", "BUILDKITE", "DRONE")


def read_option(env: Mapping[str, str], name: str) -> str | None:
    """Read an environment option. Returns None when it isn't set."""
    if name not in env:
        return None
    return env[name].strip()


def _forced_level(env: Mapping[str, str]) -> tuple[ColorLevel | None, bool]:
    """Returns `(level, explicit)`. An explicit level is used as-is; otherwise the
    level is a minimum and detection carries on."""
    value = read_option(env, "FORCE_COLOR")
    if value is None:
        return None, False
    value = value.lower()
    if value in ("", "true"):
        return ColorLevel.BASIC, False
    if value in ("0", "false"):
        return ColorLevel.NONE, True
    if value in ("1", "2", "3"):
        return ColorLevel(int(value)), True
    warnings.warn(
        f"Unrecognized value FORCE_COLOR={value!r}, treating it as 'true'.",
        category=TinctureWarning,
        stacklevel=3,
    )
    return ColorLevel.BASIC, False


def _is_tty(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed file.
        return False


def _windows_build() -> int | None:
    match = re.match(r"^10\.0\.(\d+)", _platform.version())
    return int(match.group(1)) if match is not None else None


def _windows_level() -> ColorLevel:
    # ANSI sequences in the Windows 10 console: 256 colors since build 10586, true
    # color since build 14931.
    build = _windows_build()
    if build is None:
        return ColorLevel.BASIC
    if build >= 14931:
        return ColorLevel.TRUECOLOR
    if build >= 10586:
        return ColorLevel.ANSI256
    return ColorLevel.BASIC


def detect_color_level(
    stream: Any = None,
    env: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> ColorLevel:
    """Guess the color level supported by the terminal `stream` writes to.

    Args:
        stream: Output stream. Defaults to `sys.stdout`.
        env: Environment variables. Defaults to `os.environ`.
        platform: Platform name, in the format of `sys.platform`.
    """
    env = os.environ if env is None else env
    platform = sys.platform if platform is None else platform
    stream = sys.stdout if stream is None else stream

    forced, explicit = _forced_level(env)
    if forced is not None and explicit:
        return forced
    if forced is None and read_option(env, "NO_COLOR"):
        return ColorLevel.NONE
    if forced is None and not _is_tty(stream):
        return ColorLevel.NONE

    minimum = ColorLevel.NONE if forced is None else forced
    if platform == "win32":
        return max(minimum, _windows_level())

    term = env.get("TERM", "")
    if term == "dumb":
        return minimum

    if "CI" in env:
        if "GITHUB_ACTIONS" in env:
            return ColorLevel.ANSI256
        if any(vendor in env for vendor in _CI_VENDORS):
            return ColorLevel.BASIC
        return minimum

    if env.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return ColorLevel.TRUECOLOR

    term_program = env.get("TERM_PROGRAM", "")
    if term_program == "iTerm.app":
        major = env.get("TERM_PROGRAM_VERSION", "").partition(".")[0]
        if major.isdigit() and int(major) >= 3:
            return ColorLevel.TRUECOLOR
        return ColorLevel.ANSI256
    if term_program == "Apple_Terminal":
        return ColorLevel.ANSI256

    if _TERM_256_PATTERN.search(term):
        return ColorLevel.ANSI256
    if _COLOR_TERM_PATTERN.search(term) or "COLORTERM" in env:
        return ColorLevel.BASIC
    return minimum


def is_legacy_windows_console(
    env: Mapping[str, str] | None = None, platform: str | None = None
) -> bool:
    """True for the classic Windows console (`cmd.exe`), which renders some codes
    poorly. Terminals that identify as xterm-compatible are excluded."""
    env = os.environ if env is None else env
    platform = sys.platform if platform is None else platform
    return platform == "win32" and not env.get("TERM", "").lower().startswith("xterm")
