"""
Color algebra - RGBA samples, luminance and shading.

Channels are 8-bit. Luminance uses the ITU-R BT.709 weights over normalized
channels and is the single rule for classifying a color as light or dark.
"""

from dataclasses import dataclass
from typing import Tuple

DARKER = 0.7
BRIGHTER = 1.0 / DARKER

# Above this luminance a color counts as "light"
LIGHT_THRESHOLD = 0.5


def _channel(value: float) -> int:
    """Truncate to an 8-bit channel, saturating at the ends."""
    return max(0, min(255, int(value)))


@dataclass(frozen=True)
class Color:
    """An RGBA color with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 0xFF

    def __post_init__(self):
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"channel {name} out of range: {value}")

    # --- Construction ---

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        return cls(r, g, b, 0xFF)

    @classmethod
    def from_rgba(cls, r: int, g: int, b: int, a: float) -> "Color":
        """Build from 8-bit channels and a normalized alpha in [0, 1]."""
        return cls(r, g, b, _channel(a * 255.0))

    @classmethod
    def from_rgb_u32(cls, c: int) -> "Color":
        """Decode 0xRRGGBB (any high byte is ignored)."""
        return cls.from_rgb((c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF)

    @classmethod
    def from_rgba_u32(cls, c: int) -> "Color":
        """Decode 0xAARRGGBB."""
        return cls.from_rgba(
            (c >> 16) & 0xFF,
            (c >> 8) & 0xFF,
            c & 0xFF,
            ((c >> 24) & 0xFF) / 255.0,
        )

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse '#rrggbb' or '#aarrggbb'."""
        digits = value.lstrip("#")
        if len(digits) == 6:
            return cls.from_rgb_u32(int(digits, 16))
        if len(digits) == 8:
            return cls.from_rgba_u32(int(digits, 16))
        raise ValueError(f"invalid hex color: {value}")

    @classmethod
    def white(cls) -> "Color":
        return cls.from_rgb(0xFF, 0xFF, 0xFF)

    @classmethod
    def black(cls) -> "Color":
        return cls.from_rgb(0x00, 0x00, 0x00)

    # --- Encoding ---

    def to_rgb_u32(self) -> int:
        return (self.r << 16) | (self.g << 8) | self.b

    def to_rgba_u32(self) -> int:
        return (self.a << 24) | self.to_rgb_u32()

    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def rgba(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def as_floats(self) -> Tuple[float, float, float]:
        """Normalized (r, g, b) in [0, 1]."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)

    @property
    def alpha(self) -> float:
        return self.a / 255.0

    @property
    def is_opaque(self) -> bool:
        return self.a == 0xFF

    # --- Algebra ---

    def luminance(self) -> float:
        r, g, b = self.as_floats()
        return 0.2126 * r + 0.7152 * g + 0.0722 * b

    def is_light(self) -> bool:
        return self.luminance() > LIGHT_THRESHOLD

    def with_alpha(self, a: float) -> "Color":
        return Color.from_rgba(self.r, self.g, self.b, a)

    def brighter(self, k: float = 1.0) -> "Color":
        return self._scaled(BRIGHTER ** k)

    def darker(self, k: float = 1.0) -> "Color":
        return self._scaled(DARKER ** k)

    def _scaled(self, factor: float) -> "Color":
        return Color(
            _channel(self.r * factor),
            _channel(self.g * factor),
            _channel(self.b * factor),
            self.a,
        )

    def contrasting(self) -> "Color":
        """Black on light colors, white on dark ones."""
        return Color.black() if self.is_light() else Color.white()

    def __str__(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
