"""
Theme Segmentation - assign roles to palette colors by luminance.

The darkest and brightest entries become the role colors (background and a
contrasting foreground). Everything else is the residual pool used to color
nodes and fills.
"""

from typing import List, Sequence, Tuple

from .color import Color


def index_of_min(colors: Sequence[Color]) -> int:
    """Index of the darkest color. Ties go to the first occurrence."""
    if not colors:
        raise ValueError("cannot rank an empty palette")
    best = 0
    for i in range(1, len(colors)):
        if colors[i].luminance() < colors[best].luminance():
            best = i
    return best


def index_of_max(colors: Sequence[Color]) -> int:
    """Index of the brightest color. Ties go to the first occurrence."""
    if not colors:
        raise ValueError("cannot rank an empty palette")
    best = 0
    for i in range(1, len(colors)):
        if colors[i].luminance() > colors[best].luminance():
            best = i
    return best


def segment_theme(rng, theme: Sequence[Color]) -> Tuple[Color, Color, List[Color]]:
    """Split a theme into (background, foreground, residual pool).

    The extremes are found deterministically; a single coin flip decides which
    one becomes the background. Residual colors keep their palette order.
    """
    lo = index_of_min(theme)
    hi = index_of_max(theme)
    if hi == lo:
        # Every color ties; take the last one so the roles stay distinct
        hi = len(theme) - 1
    rest = [c for i, c in enumerate(theme) if i != lo and i != hi]
    if rng.boolean():
        return theme[lo], theme[hi], rest
    return theme[hi], theme[lo], rest


def select_background(rng, theme: Sequence[Color]) -> Tuple[Color, List[Color]]:
    """Coin flip between the brightest and darkest color as background.

    Only the chosen extreme leaves the pool.
    """
    ix = index_of_max(theme) if rng.boolean() else index_of_min(theme)
    rest = [c for i, c in enumerate(theme) if i != ix]
    return theme[ix], rest


def color_contrasting_with(color: Color) -> Color:
    """Black over light colors, white over dark ones."""
    return color.contrasting()
