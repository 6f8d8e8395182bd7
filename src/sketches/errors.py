"""
Error types for sketch generation.

Failures surface before any drawing starts:
- PaletteLoadError: palette file missing or unreadable (fatal)
- PaletteFormatError: corrupt palette table or out-of-range index (contract error)
- InvalidParameterError: malformed size/seed/template input at the boundary
"""


class SketchError(Exception):
    """Base class for all sketch errors."""
    pass


class PaletteLoadError(SketchError, OSError):
    """Palette file could not be opened or read."""
    pass


class PaletteFormatError(SketchError, ValueError):
    """Palette data violates the fixed-record format."""
    pass


class InvalidParameterError(SketchError, ValueError):
    """A caller-supplied parameter is malformed or out of range."""
    pass
