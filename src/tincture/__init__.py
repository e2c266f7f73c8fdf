__version__ = "0.1.0"

from ._chain import Style as Style
from ._chain import StyleChain as StyleChain
from ._compositor import compose as compose
from ._convert import ansi256_to_ansi16 as ansi256_to_ansi16
from ._convert import downsample as downsample
from ._convert import hex_to_rgb as hex_to_rgb
from ._convert import rgb_to_ansi256 as rgb_to_ansi256
from ._detect import detect_color_level as detect_color_level
from ._detect import is_legacy_windows_console as is_legacy_windows_console
from ._levels import ColorLevel as ColorLevel
from ._levels import LevelContext as LevelContext
from ._styles import STYLE_NAMES as STYLE_NAMES
from ._styles import STYLES as STYLES
from ._styles import StyleCategory as StyleCategory
from ._styles import StyleDefinition as StyleDefinition
from ._styles import UnknownStyleError as UnknownStyleError
from ._warnings import TinctureWarning as TinctureWarning

style = Style()
"""Default root style, with a color level detected from the environment and
`sys.stdout` at import time."""
