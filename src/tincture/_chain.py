"""Style chains: immutable style stacks, and the callable `Style` wrapper users hold."""

from __future__ import annotations

import dataclasses

from typing_extensions import final

from . import _detect, _styles
from ._compositor import compose, is_visible_only
from ._levels import ColorLevel, LevelContext, LevelLike
from ._styles import StyleDefinition


@dataclasses.dataclass(frozen=True)
class StyleChain:
    """Ordered stack of styles, outermost (first accessed) first, bound to a shared
    :class:`LevelContext`."""

    styles: tuple[StyleDefinition, ...]
    context: LevelContext
    legacy_windows: bool = False

    def with_style(self, style: StyleDefinition) -> StyleChain:
        return dataclasses.replace(self, styles=self.styles + (style,))

    def render(self, *args: object) -> str:
        if len(args) == 0:
            return ""
        text = " ".join(str(arg) for arg in args)
        if len(text) == 0:
            return text

        # Read the level once per call.
        enabled, level = self.context.get()
        if not enabled:
            return "" if is_visible_only(self.styles) else text
        return compose(self.styles, level, text, self.legacy_windows)


@final
class Style:
    """Callable text style.

    Constructing a `Style` creates a new root with its own color level. Styles
    derived from it, via subscripting or the color methods, share that level:
    changing `level` on any of them changes it for all.

    .. code-block:: python

        style = Style(level=ColorLevel.TRUECOLOR)
        warning = style["yellow", "bold"]
        print(warning("careful:"), style.hex("#FF8800")("orange"))
    """

    __slots__ = ("_chain",)

    def __init__(
        self,
        level: LevelLike | None = None,
        *,
        legacy_windows: bool | None = None,
    ) -> None:
        """
        Args:
            level: Color level of the new root. Detected from the environment and
                `sys.stdout` when None.
            legacy_windows: Apply workarounds for the classic Windows console.
                Detected when None.
        """
        if level is None:
            level = _detect.detect_color_level()
        if legacy_windows is None:
            legacy_windows = _detect.is_legacy_windows_console()
        self._chain = StyleChain((), LevelContext(level), legacy_windows)

    @classmethod
    def _from_chain(cls, chain: StyleChain) -> Style:
        out = cls.__new__(cls)
        out._chain = chain
        return out

    @property
    def chain(self) -> StyleChain:
        return self._chain

    @property
    def styles(self) -> tuple[StyleDefinition, ...]:
        return self._chain.styles

    # Derivation.

    def with_style(self, style: str | StyleDefinition) -> Style:
        """Returns a new style with one more style applied inside this one. Names
        are looked up in the registry; unknown names raise `UnknownStyleError`."""
        if not isinstance(style, StyleDefinition):
            style = _styles.lookup(style)
        return Style._from_chain(self._chain.with_style(style))

    def __getitem__(self, names: str | tuple[str, ...]) -> Style:
        out = self
        for name in names if isinstance(names, tuple) else (names,):
            out = out.with_style(name)
        return out

    def rgb(self, r: float, g: float, b: float) -> Style:
        return self.with_style(_styles.rgb(r, g, b))

    def hex(self, value: str) -> Style:
        return self.with_style(_styles.hex(value))

    def ansi256(self, index: int) -> Style:
        return self.with_style(_styles.ansi256(index))

    def bg_rgb(self, r: float, g: float, b: float) -> Style:
        return self.with_style(_styles.rgb(r, g, b, background=True))

    def bg_hex(self, value: str) -> Style:
        return self.with_style(_styles.hex(value, background=True))

    def bg_ansi256(self, index: int) -> Style:
        return self.with_style(_styles.ansi256(index, background=True))

    # Invocation.

    def apply(self, *args: object) -> str:
        """Style the arguments, joined by spaces. Same as calling the style."""
        return self._chain.render(*args)

    def __call__(self, *args: object) -> str:
        return self._chain.render(*args)

    # Shared configuration.

    @property
    def level(self) -> ColorLevel:
        return self._chain.context.level

    @level.setter
    def level(self, level: LevelLike) -> None:
        self._chain.context.set(level)

    @property
    def enabled(self) -> bool:
        return self._chain.context.enabled

    @enabled.setter
    def enabled(self, enabled: bool) -> None:
        self._chain.context.set_enabled(enabled)

    def __repr__(self) -> str:
        names = [style.name for style in self._chain.styles]
        return f"Style({names}, level={self.level!r})"
