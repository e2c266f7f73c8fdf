import io

import pytest

from tincture import ColorLevel, TinctureWarning, _detect
from tincture import detect_color_level, is_legacy_windows_console


class _FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def _detect_tty(**env: str) -> ColorLevel:
    return detect_color_level(stream=_FakeTTY(), env=env, platform="linux")


def test_not_a_tty() -> None:
    env = {"TERM": "xterm-256color", "COLORTERM": "truecolor"}
    assert detect_color_level(io.StringIO(), env, "linux") == ColorLevel.NONE


def test_closed_stream() -> None:
    stream = io.StringIO()
    stream.close()
    assert detect_color_level(stream, {"TERM": "xterm"}, "linux") == ColorLevel.NONE


def test_term() -> None:
    assert _detect_tty(TERM="xterm") == ColorLevel.BASIC
    assert _detect_tty(TERM="screen") == ColorLevel.BASIC
    assert _detect_tty(TERM="xterm-256color") == ColorLevel.ANSI256
    assert _detect_tty(TERM="screen-256") == ColorLevel.ANSI256
    assert _detect_tty(TERM="dumb") == ColorLevel.NONE
    assert _detect_tty(TERM="unknown") == ColorLevel.NONE
    assert _detect_tty() == ColorLevel.NONE
    assert _detect_tty(COLORTERM="1") == ColorLevel.BASIC


def test_truecolor() -> None:
    assert _detect_tty(TERM="xterm", COLORTERM="truecolor") == ColorLevel.TRUECOLOR
    assert _detect_tty(COLORTERM="24bit") == ColorLevel.TRUECOLOR


def test_term_program() -> None:
    assert (
        _detect_tty(TERM_PROGRAM="iTerm.app", TERM_PROGRAM_VERSION="3.4.1")
        == ColorLevel.TRUECOLOR
    )
    assert (
        _detect_tty(TERM_PROGRAM="iTerm.app", TERM_PROGRAM_VERSION="2.9")
        == ColorLevel.ANSI256
    )
    assert _detect_tty(TERM_PROGRAM="Apple_Terminal") == ColorLevel.ANSI256


def test_ci() -> None:
    assert _detect_tty(CI="true", GITHUB_ACTIONS="true") == ColorLevel.ANSI256
    assert _detect_tty(CI="true", TRAVIS="1", TERM="xterm-256color") == (
        ColorLevel.BASIC
    )
    assert _detect_tty(CI="true") == ColorLevel.NONE


def test_no_color() -> None:
    assert _detect_tty(NO_COLOR="1", TERM="xterm-256color") == ColorLevel.NONE
    # Empty NO_COLOR is ignored.
    assert _detect_tty(NO_COLOR="", TERM="xterm-256color") == ColorLevel.ANSI256


def test_force_color() -> None:
    not_tty = io.StringIO()
    assert detect_color_level(not_tty, {"FORCE_COLOR": ""}, "linux") == ColorLevel.BASIC
    assert detect_color_level(not_tty, {"FORCE_COLOR": "true"}, "linux") == (
        ColorLevel.BASIC
    )
    assert detect_color_level(
        not_tty, {"FORCE_COLOR": "true", "TERM": "xterm-256color"}, "linux"
    ) == ColorLevel.ANSI256
    assert detect_color_level(not_tty, {"FORCE_COLOR": "3"}, "linux") == (
        ColorLevel.TRUECOLOR
    )
    env = {"FORCE_COLOR": "2", "NO_COLOR": "1"}
    assert detect_color_level(not_tty, env, "linux") == ColorLevel.ANSI256
    assert _detect_tty(FORCE_COLOR="0", TERM="xterm-256color") == ColorLevel.NONE
    assert _detect_tty(FORCE_COLOR="false", TERM="xterm") == ColorLevel.NONE
    assert _detect_tty(FORCE_COLOR="", TERM="dumb") == ColorLevel.BASIC


def test_force_color_unrecognized() -> None:
    with pytest.warns(TinctureWarning, match="FORCE_COLOR"):
        level = detect_color_level(io.StringIO(), {"FORCE_COLOR": "yes"}, "linux")
    assert level == ColorLevel.BASIC


@pytest.mark.parametrize(
    "build,expected",
    [
        (19041, ColorLevel.TRUECOLOR),
        (14931, ColorLevel.TRUECOLOR),
        (10586, ColorLevel.ANSI256),
        (10240, ColorLevel.BASIC),
        (None, ColorLevel.BASIC),
    ],
)
def test_windows(monkeypatch: pytest.MonkeyPatch, build, expected) -> None:
    monkeypatch.setattr(_detect, "_windows_build", lambda: build)
    assert detect_color_level(_FakeTTY(), {"TERM": "dumb"}, "win32") == expected


def test_default_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("FORCE_COLOR", "2")
    assert detect_color_level() == ColorLevel.ANSI256
    clean_env.setenv("FORCE_COLOR", "0")
    assert detect_color_level() == ColorLevel.NONE


def test_legacy_windows_console() -> None:
    assert is_legacy_windows_console({"TERM": "dumb"}, "win32")
    assert is_legacy_windows_console({}, "win32")
    assert not is_legacy_windows_console({"TERM": "xterm-256color"}, "win32")
    assert not is_legacy_windows_console({"TERM": "XTERM"}, "win32")
    assert not is_legacy_windows_console({}, "linux")
    assert not is_legacy_windows_console({"TERM": "dumb"}, "darwin")
