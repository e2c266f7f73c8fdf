import threading

import pytest

from tincture import ColorLevel, LevelContext, Style


def test_disabled_manually() -> None:
    style = Style(level=1)
    style.level = 0
    assert style["red"]("foo") == "foo"
    assert not style.enabled


def test_derived_styles_follow_root() -> None:
    root = Style(level=1)
    red = root["red"]
    assert red.level == 1
    root.level = 0
    assert red.level == root.level == ColorLevel.NONE


def test_changes_propagate_from_children() -> None:
    root = Style(level=1)
    red = root["red"]
    assert red.level == 1
    assert root.level == 1
    red.level = 0
    assert red.level == 0
    assert root.level == 0
    root.level = 1
    assert red.level == 1
    assert root.level == 1

    # Siblings share the context too.
    root["bold"].level = 3
    assert red["underline"].level == ColorLevel.TRUECOLOR


def test_isolated_roots() -> None:
    disabled = Style(level=0)
    enabled = Style(level=1)
    assert disabled["red"]("foo") == "foo"
    assert enabled["red"]("foo") == "\x1b[31mfoo\x1b[39m"

    disabled.level = 3
    assert enabled.level == ColorLevel.BASIC
    assert disabled["red"].chain.context is not enabled["red"].chain.context


def test_enabled_shortcut() -> None:
    root = Style(level=2)
    child = root["red"]
    assert root.enabled
    child.enabled = False
    assert root.level == ColorLevel.NONE
    assert root["red"]("foo") == "foo"
    child.enabled = True
    assert root.level == ColorLevel.BASIC

    root.level = 2
    root.enabled = True
    assert root.level == ColorLevel.ANSI256


@pytest.mark.parametrize("level", [-1, 4, 1.5, "2", True])
def test_invalid_level(level) -> None:
    with pytest.raises(ValueError):
        Style(level=level)
    with pytest.raises(ValueError):
        LevelContext(1).set(level)


def test_context_get() -> None:
    context = LevelContext(ColorLevel.ANSI256)
    assert context.get() == (True, ColorLevel.ANSI256)
    context.set(0)
    assert context.get() == (False, ColorLevel.NONE)
    assert isinstance(context.get()[1], ColorLevel)


def test_concurrent_reads_are_consistent() -> None:
    context = LevelContext(0)
    errors = []
    stop = threading.Event()

    def write() -> None:
        i = 0
        while not stop.is_set():
            context.set(i % 4)
            i += 1

    def read() -> None:
        for _ in range(10000):
            enabled, level = context.get()
            if enabled != (level > ColorLevel.NONE):
                errors.append((enabled, level))

    writer = threading.Thread(target=write)
    readers = [threading.Thread(target=read) for _ in range(4)]
    writer.start()
    for t in readers:
        t.start()
    for t in readers:
        t.join()
    stop.set()
    writer.join()
    assert errors == []
