"""smu-jiggle package.

Read SMU jiggle pattern files and derive scaled offsets, extents and counts.
"""

from .coords import CoordinateSystem, JiggleOffset
from .jiggle import (
    JiggleError,
    JiggleOptions,
    JigglePattern,
    PatternParseError,
    PatternValidationError,
    parse_pattern_text,
)
from .version import __version__

__all__ = [
    "__version__",
    "CoordinateSystem",
    "JiggleError",
    "JiggleOffset",
    "JiggleOptions",
    "JigglePattern",
    "PatternParseError",
    "PatternValidationError",
    "parse_pattern_text",
]
