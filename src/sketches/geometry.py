"""Plane geometry primitives: points and canvas sizes."""

from dataclasses import dataclass

from .errors import InvalidParameterError


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def __iter__(self):
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"({self.x:0.3f}, {self.y:0.3f})"


@dataclass(frozen=True)
class Size:
    """Canvas size in whole pixels."""

    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidParameterError(f"invalid size: {self.width}x{self.height}")

    @classmethod
    def parse(cls, value: str) -> "Size":
        """Parse 'WxH', or a single number for a square canvas."""
        text = str(value).strip().lower()
        try:
            if "x" in text:
                w, h = text.split("x", 1)
                return cls(int(w), int(h))
            n = int(text)
            return cls(n, n)
        except ValueError:
            raise InvalidParameterError(f"invalid size: {value}") from None

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
