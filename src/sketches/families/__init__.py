"""
Sketch Family Registry - manages the available generators.

Families are pluggable objects implementing the SketchFamily protocol. Each one
is registered under its name at import time and looked up by the CLI.
"""

from typing import Dict, List, Optional

from ..config import SketchConfig
from ..drawing import Drawing
from ..errors import InvalidParameterError
from ..family import SketchFamily
from ..options import RenderOptions


# Registry of all available families
_FAMILIES: Dict[str, SketchFamily] = {}


def register_family(family: SketchFamily) -> None:
    """Register a family instance."""
    _FAMILIES[family.name] = family


def get_family(name: str) -> SketchFamily:
    """Get family by name. Raises InvalidParameterError if unknown."""
    family = _FAMILIES.get(name)
    if family is None:
        raise InvalidParameterError(
            f"unknown sketch family: {name} (available: {', '.join(list_families())})"
        )
    return family


def get_family_info(name: str) -> dict:
    """Family metadata: name and description."""
    family = _FAMILIES.get(name)
    if not family:
        return {}
    return {
        "name": family.name,
        "description": family.description,
    }


def list_families() -> List[str]:
    """List all registered family names."""
    return list(_FAMILIES.keys())


def list_all_family_info() -> List[dict]:
    return [get_family_info(name) for name in _FAMILIES]


def render_sketch(name: str, opts: RenderOptions, config: Optional[SketchConfig] = None) -> Drawing:
    """Record one image of family `name` for opts."""
    family = get_family(name)
    config = config or SketchConfig()
    width, height = opts.size()
    drawing = Drawing(width, height)
    family.render(opts, drawing, config.family(name))
    return drawing


# --- Register families at import time ---
from .transit import TransitFamily  # noqa: E402
from .series import SeriesFamily  # noqa: E402
from .burst import BurstFamily  # noqa: E402
from .lattice import LatticeFamily  # noqa: E402
from .iso import IsoFamily  # noqa: E402

register_family(TransitFamily())
register_family(SeriesFamily())
register_family(BurstFamily())
register_family(LatticeFamily())
register_family(IsoFamily())
