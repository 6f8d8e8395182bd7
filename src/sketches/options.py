"""
Render options - the capability every sketch family consumes.

size() gives the canvas, rng() a freshly seeded context on every call and
themes() the palette store. Families receive this object explicitly and
never reach for global state.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .geometry import Size
from .palette import PaletteStore
from .rng import RngContext, Seed


@dataclass
class RenderOptions:
    seed: Seed
    canvas: Size
    themes_path: Union[str, Path] = "themes.bin"
    encoding: str = "rgb"
    store: Optional[PaletteStore] = None  # preloaded store, skips the file

    def size(self) -> Tuple[int, int]:
        return self.canvas.width, self.canvas.height

    def rng(self) -> RngContext:
        return RngContext(self.seed)

    def themes(self) -> PaletteStore:
        """Palette store. Raises PaletteLoadError/PaletteFormatError."""
        if self.store is not None:
            return self.store
        return PaletteStore.open(self.themes_path, self.encoding)

    def with_seed(self, seed: Union[int, Seed]) -> "RenderOptions":
        if not isinstance(seed, Seed):
            seed = Seed(seed)
        return RenderOptions(seed, self.canvas, self.themes_path, self.encoding, self.store)
