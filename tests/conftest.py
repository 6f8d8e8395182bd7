"""
Shared test fixtures for the sketches test suite.

Palette files are written to tmp_path with write_palettes so every test sees
the same, known themes.
"""

import pytest

from sketches.color import Color
from sketches.geometry import Size
from sketches.options import RenderOptions
from sketches.palette import PaletteStore, encode_palettes, write_palettes
from sketches.rng import RngContext, Seed


def gray(v: int) -> Color:
    return Color.from_rgb(v, v, v)


# ---------------------------------------------------------------------------
# Palettes
# ---------------------------------------------------------------------------

@pytest.fixture
def reference_palette():
    """Five grays with luminance ~0.1, 0.9, 0.3, 0.5, 0.7 (in that order)."""
    return [gray(26), gray(230), gray(77), gray(128), gray(179)]


@pytest.fixture
def warm_palette():
    return [
        Color.from_hex("#2b1b17"),
        Color.from_hex("#f7e7ce"),
        Color.from_hex("#c0392b"),
        Color.from_hex("#e67e22"),
        Color.from_hex("#f1c40f"),
    ]


@pytest.fixture
def palettes(reference_palette, warm_palette):
    return [reference_palette, warm_palette]


@pytest.fixture
def palette_file(tmp_path):
    """Factory: write palettes to a file under tmp_path and return its path."""
    def _make(palettes, encoding="rgb", name="themes.bin"):
        path = tmp_path / name
        write_palettes(path, palettes, encoding)
        return path
    return _make


@pytest.fixture
def themes_file(palette_file, palettes):
    return palette_file(palettes)


@pytest.fixture
def store(palettes):
    return PaletteStore(encode_palettes(palettes))


# ---------------------------------------------------------------------------
# Render inputs
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Seeded RNG context."""
    return RngContext(1)


@pytest.fixture
def render_options(store):
    """Small canvas, fixed seed, preloaded store."""
    return RenderOptions(seed=Seed(1), canvas=Size(320, 200), store=store)
