"""
Configuration - output defaults and per-family generation ranges.

Every integer range below is a half-open [lo, hi) drawn from the RNG, so
changing one changes the artwork for a given seed. Loaded from YAML (or JSON)
and validated; an invalid file falls back to defaults with a warning.
"""

import json
import sys
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import InvalidParameterError
from .geometry import Size
from .nodes import DEFAULT_DENSITY, POLICY_NAMES
from .palette import ENCODINGS

FORMATS = ("png", "pdf")

Range = Tuple[int, int]


def _check_range(name: str, value: Range, minimum: int = 1) -> Optional[str]:
    lo, hi = value
    if lo < minimum:
        return f"{name} lower bound must be >= {minimum}"
    if hi <= lo:
        return f"{name} must be a non-empty [lo, hi) range"
    return None


@dataclass
class TransitConfig:
    """Subway-map strands on the inset grid."""
    nx_range: Range = (20, 50)
    ny_range: Range = (5, 20)
    policy: str = "walk"
    density: float = DEFAULT_DENSITY  # bernoulli policy only
    show_grid: bool = False
    smooth: bool = True
    line_width: float = 4.0
    shadow_offset: Tuple[float, float] = (3.0, 2.0)
    shadow_alpha: float = 0.2
    jitter: float = 1.5  # strand offset as a multiple of node radius

    def validate(self) -> Optional[str]:
        for name in ("nx_range", "ny_range"):
            error = _check_range(name, getattr(self, name))
            if error:
                return error
        if self.policy not in POLICY_NAMES:
            return f"unknown policy {self.policy!r} (expected one of {', '.join(POLICY_NAMES)})"
        if not 0.0 <= self.density <= 1.0:
            return "density must be 0-1"
        if not 0.0 <= self.shadow_alpha <= 1.0:
            return "shadow_alpha must be 0-1"
        if self.line_width <= 0:
            return "line_width must be positive"
        return None


@dataclass
class SeriesConfig:
    """One sample per column on the centered grid, filled as a hill."""
    nw_range: Range = (5, 40)
    nh_range: Range = (5, 40)
    show_grid: bool = True
    smooth: bool = True
    fill_alpha: float = 0.6
    grid_alpha: float = 0.6

    def validate(self) -> Optional[str]:
        for name in ("nw_range", "nh_range"):
            error = _check_range(name, getattr(self, name))
            if error:
                return error
        if not 0.0 <= self.fill_alpha <= 1.0 or not 0.0 <= self.grid_alpha <= 1.0:
            return "alpha values must be 0-1"
        return None


@dataclass
class BurstConfig:
    """Star burst with tendrils fanned to both edges."""
    half_points_range: Range = (4, 10)
    spacing_range: Range = (10, 40)
    inner_ratio: float = 0.6
    tendril_width: float = 2.0

    def validate(self) -> Optional[str]:
        error = _check_range("half_points_range", self.half_points_range, minimum=2)
        if error:
            return error
        error = _check_range("spacing_range", self.spacing_range)
        if error:
            return error
        if not 0.0 < self.inner_ratio <= 1.0:
            return "inner_ratio must be in (0, 1]"
        return None


@dataclass
class LatticeConfig:
    """Plain vertical and dashed horizontal rules."""
    nx_range: Range = (20, 80)
    ny_range: Range = (5, 20)
    dash: Tuple[float, float] = (2.0, 3.0)
    line_width: float = 2.0

    def validate(self) -> Optional[str]:
        for name in ("nx_range", "ny_range"):
            error = _check_range(name, getattr(self, name))
            if error:
                return error
        if self.line_width <= 0:
            return "line_width must be positive"
        return None


@dataclass
class IsoConfig:
    """Isometric boxes standing on a floor lattice."""
    cell: float = 40.0
    columns_range: Range = (2, 6)
    rows_range: Range = (2, 6)
    height_range: Range = (1, 5)
    fill_chance: float = 0.7
    background: str = "#333333"

    def validate(self) -> Optional[str]:
        for name in ("columns_range", "rows_range", "height_range"):
            error = _check_range(name, getattr(self, name))
            if error:
                return error
        if self.cell <= 0:
            return "cell must be positive"
        if not 0.0 <= self.fill_chance <= 1.0:
            return "fill_chance must be 0-1"
        return None


_FAMILY_FIELDS = {
    "transit": TransitConfig,
    "series": SeriesConfig,
    "burst": BurstConfig,
    "lattice": LatticeConfig,
    "iso": IsoConfig,
}


def _family_from_dict(cls, data: Dict[str, Any]):
    known = {f.name for f in fields(cls)}
    values = {}
    for key, value in (data or {}).items():
        if key not in known:
            continue
        # YAML/JSON hand back lists for tuple fields
        values[key] = tuple(value) if isinstance(value, list) else value
    return cls(**values)


@dataclass
class SketchConfig:
    """Complete configuration for sketch rendering."""
    size: str = "1600x600"
    themes: str = "themes.bin"
    encoding: str = "rgb"
    format: str = "png"
    dest: str = "{name}.{extension}"
    batch_dest: str = "{name}/{seed}.{extension}"
    count: int = 10

    transit: TransitConfig = field(default_factory=TransitConfig)
    series: SeriesConfig = field(default_factory=SeriesConfig)
    burst: BurstConfig = field(default_factory=BurstConfig)
    lattice: LatticeConfig = field(default_factory=LatticeConfig)
    iso: IsoConfig = field(default_factory=IsoConfig)

    def family(self, name: str):
        """Settings block for a family."""
        return getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Plain lists keep yaml.safe_dump happy
        for name in _FAMILY_FIELDS:
            data[name] = {
                k: list(v) if isinstance(v, tuple) else v
                for k, v in data[name].items()
            }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SketchConfig":
        data = dict(data or {})
        families = {
            name: _family_from_dict(family_cls, data.pop(name, {}))
            for name, family_cls in _FAMILY_FIELDS.items()
        }
        known = {f.name for f in fields(cls)} - set(_FAMILY_FIELDS)
        top = {k: v for k, v in data.items() if k in known}
        return cls(**top, **families)

    def validate(self) -> Tuple[bool, Optional[str]]:
        try:
            Size.parse(self.size)
        except InvalidParameterError as e:
            return False, str(e)
        if self.encoding not in ENCODINGS:
            return False, f"encoding must be one of {', '.join(ENCODINGS)}"
        if self.format not in FORMATS:
            return False, f"format must be one of {', '.join(FORMATS)}"
        if self.count < 1:
            return False, "count must be positive"
        for name in _FAMILY_FIELDS:
            error = self.family(name).validate()
            if error:
                return False, f"{name}: {error}"
        return True, None


class ConfigManager:
    """Loads and saves SketchConfig files."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to config file (default: sketches.yaml in current dir)
        """
        if config_path is None:
            config_path = Path("sketches.yaml")
        self.config_path = Path(config_path)
        self._config: Optional[SketchConfig] = None

    def _is_yaml(self) -> bool:
        return self.config_path.suffix in (".yaml", ".yml")

    def load(self, force_reload: bool = False) -> SketchConfig:
        """Load configuration from file or return defaults."""
        if self._config is not None and not force_reload:
            return self._config

        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = yaml.safe_load(f) if self._is_yaml() else json.load(f)
                self._config = SketchConfig.from_dict(data)

                valid, error = self._config.validate()
                if not valid:
                    print(f"[Config] Warning: Invalid config, using defaults: {error}", file=sys.stderr)
                    self._config = SketchConfig()
            except (OSError, ValueError, TypeError, AttributeError, yaml.YAMLError) as e:
                print(f"[Config] Error loading config, using defaults: {e}", file=sys.stderr)
                self._config = SketchConfig()
        else:
            self._config = SketchConfig()

        return self._config

    def save(self, config: Optional[SketchConfig] = None) -> bool:
        """Validate and write config. Returns True if saved."""
        if config is None:
            config = self._config or self.load()

        valid, error = config.validate()
        if not valid:
            print(f"[Config] Cannot save invalid config: {error}", file=sys.stderr)
            return False

        try:
            data = config.to_dict()
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                if self._is_yaml():
                    yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(data, f, indent=2)
            self._config = config
            return True
        except OSError as e:
            print(f"[Config] Error saving config: {e}", file=sys.stderr)
            return False

    def reload(self) -> SketchConfig:
        self._config = None
        return self.load()


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_path: Optional[Path] = None) -> ConfigManager:
    """Get global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(config_path)
    return _config_manager
