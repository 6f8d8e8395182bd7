"""
Sketches - seeded procedural vector art.

Every image is a pure function of (seed, canvas size, palette file). Generators
build a recorded Drawing from a palette, a grid and a deterministic RNG, and
the renderer turns it into PNG or PDF.
"""

__version__ = "0.1.0"

# Core exports
from .color import Color
from .config import SketchConfig, ConfigManager, get_config_manager
from .drawing import Drawing, DrawOp, Path
from .errors import SketchError, PaletteLoadError, PaletteFormatError, InvalidParameterError
from .geometry import Point, Size
from .grid import CenteredGrid, InsetGrid
from .nodes import Node, BernoulliPolicy, RandomWalkPolicy, build_vline, select_nodes
from .options import RenderOptions
from .palette import PaletteStore, encode_palettes, write_palettes
from .rng import RngContext, Seed
from .smoothing import area_path, hill_region, smooth_stroke
from .theme import color_contrasting_with, segment_theme, select_background
from .families import get_family, list_families, render_sketch

__all__ = [
    "Color",
    "SketchConfig",
    "ConfigManager",
    "get_config_manager",
    "Drawing",
    "DrawOp",
    "Path",
    "SketchError",
    "PaletteLoadError",
    "PaletteFormatError",
    "InvalidParameterError",
    "Point",
    "Size",
    "CenteredGrid",
    "InsetGrid",
    "Node",
    "BernoulliPolicy",
    "RandomWalkPolicy",
    "build_vline",
    "select_nodes",
    "RenderOptions",
    "PaletteStore",
    "encode_palettes",
    "write_palettes",
    "RngContext",
    "Seed",
    "area_path",
    "hill_region",
    "smooth_stroke",
    "color_contrasting_with",
    "segment_theme",
    "select_background",
    "get_family",
    "list_families",
    "render_sketch",
]
