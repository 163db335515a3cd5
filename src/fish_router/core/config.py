"""Configuration loader and dataclasses for trajectory reconstruction settings."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional
import yaml


@dataclass
class SearchConfig:
    """Goal matching and search bounds."""
    goal_tolerance: int = 0  # pixels; models receiver detection range
    max_expansions: Optional[int] = None

    def __post_init__(self) -> None:
        if self.goal_tolerance < 0:
            raise ValueError(f"goal_tolerance must be >= 0, got {self.goal_tolerance}")
        if self.max_expansions is not None and self.max_expansions <= 0:
            raise ValueError(f"max_expansions must be positive, got {self.max_expansions}")


@dataclass
class ToleranceConfig:
    """Initial depth tolerances in raster depth units."""
    seabed: float = 0.0
    benthic: float = math.inf

    def __post_init__(self) -> None:
        self.seabed = float(self.seabed)
        self.benthic = float(self.benthic)
        if self.seabed < 0 or self.benthic < 0:
            raise ValueError(f"tolerances must be >= 0, got seabed={self.seabed}, benthic={self.benthic}")


@dataclass
class AdaptationConfig:
    """Tolerance widening applied when a segment has no feasible path."""
    steps: int = 0
    seabed_rate: float = 0.0
    benthic_rate: float = 0.0

    def __post_init__(self) -> None:
        if self.steps < 0:
            raise ValueError(f"adaptation steps must be >= 0, got {self.steps}")
        if self.seabed_rate < 0 or self.benthic_rate < 0:
            raise ValueError("adaptation rates must be >= 0")


@dataclass
class RasterConfig:
    """How raw raster values map to seabed depth."""
    nodata: Optional[float] = None
    positive_down: bool = True  # False for elevation rasters (water negative)


@dataclass
class TrackerConfig:
    """Complete tracker configuration."""
    search: SearchConfig = field(default_factory=SearchConfig)
    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    adaptation: AdaptationConfig = field(default_factory=AdaptationConfig)
    raster: RasterConfig = field(default_factory=RasterConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TrackerConfig":
        data = data or {}
        return cls(
            search=SearchConfig(**(data.get("search") or {})),
            tolerance=ToleranceConfig(**(data.get("tolerance") or {})),
            adaptation=AdaptationConfig(**(data.get("adaptation") or {})),
            raster=RasterConfig(**(data.get("raster") or {})),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "TrackerConfig":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_overrides(
        self,
        goal_tolerance: Optional[int] = None,
        seabed_tolerance: Optional[float] = None,
        seabed_adapt_rate: Optional[float] = None,
        benthic_tolerance: Optional[float] = None,
        benthic_adapt_rate: Optional[float] = None,
        adaptation_steps: Optional[int] = None,
    ) -> "TrackerConfig":
        """Return a copy with the given options replaced; ``None`` keeps the current value."""
        search = self.search
        if goal_tolerance is not None:
            search = replace(search, goal_tolerance=goal_tolerance)
        tolerance = self.tolerance
        if seabed_tolerance is not None:
            tolerance = replace(tolerance, seabed=seabed_tolerance)
        if benthic_tolerance is not None:
            tolerance = replace(tolerance, benthic=benthic_tolerance)
        adaptation = self.adaptation
        if seabed_adapt_rate is not None:
            adaptation = replace(adaptation, seabed_rate=seabed_adapt_rate)
        if benthic_adapt_rate is not None:
            adaptation = replace(adaptation, benthic_rate=benthic_adapt_rate)
        if adaptation_steps is not None:
            adaptation = replace(adaptation, steps=adaptation_steps)
        return replace(self, search=search, tolerance=tolerance, adaptation=adaptation)


# Global config instance - lazily loaded
_config: Optional[TrackerConfig] = None


def default_config_path() -> Path:
    """configs/tracking_defaults.yaml relative to the project root."""
    return Path(__file__).resolve().parents[3] / "configs" / "tracking_defaults.yaml"


def get_config(config_path: Optional[Path] = None) -> TrackerConfig:
    """Get the global configuration, loading from file if not already loaded.

    Args:
        config_path: Path to the config file. If None, uses the default location.

    Returns:
        The TrackerConfig instance.
    """
    global _config

    if _config is None or config_path is not None:
        if config_path is None:
            config_path = default_config_path()

        if config_path.exists():
            _config = TrackerConfig.from_yaml(config_path)
        else:
            _config = TrackerConfig()

    return _config


def reload_config(config_path: Optional[Path] = None) -> TrackerConfig:
    """Force reload of configuration from file."""
    global _config
    _config = None
    return get_config(config_path)
