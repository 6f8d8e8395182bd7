"""
Sketch Family Protocol - the minimal interface for pluggable generators.

A family turns render options into a Drawing. layout() is the pure,
deterministic part: theme, grid and geometry derived from the seed.
render() replays a layout as paint requests.

Families READ the options; they never keep state between renders.
"""

from __future__ import annotations

from typing import Any, Protocol

from .drawing import Drawing
from .options import RenderOptions


class SketchFamily(Protocol):
    """Protocol for sketch families. Duck-typed, no inheritance required."""

    name: str
    description: str

    def layout(self, opts: RenderOptions, settings: Any) -> Any:
        """Derive the geometric skeleton for opts.

        Must consume opts.rng() in a fixed, documented order.
        """
        ...

    def render(self, opts: RenderOptions, drawing: Drawing, settings: Any) -> None:
        """Append the paint requests for one image to drawing."""
        ...
