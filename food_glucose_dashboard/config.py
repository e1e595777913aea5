"""
Configuration management for the Food / Glucose Dashboard.

This module provides dataclasses for all configurable settings, with support
for loading from YAML files and runtime modification via the sidebar.
"""

from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Optional, Dict, Any
import yaml


NUTRIENTS = ("carb", "sugar", "fiber", "protein", "fat")


@dataclass
class DataSources:
    """Locations of the three cleaned CSV exports."""
    food_log: str = "data/food_log_001cleaned.csv"
    glucose: str = "data/dexcom_001cleaned.csv"
    heart_rate: str = "data/hr_001cleaned.csv"


@dataclass
class NavigationSettings:
    """Settings for the drill-down views."""
    # Half-width of the glucose window around a meal
    glucose_window_minutes: int = 60

    # Readings exactly glucose_window_minutes away are excluded unless True
    window_inclusive: bool = False

    # Nutrient compared against total calories in the calendar view
    secondary_nutrient: str = "carb"


@dataclass
class GlucoseThresholds:
    """Glucose reference lines in mg/dL drawn on the glucose detail chart."""
    low: float = 70
    tight_high: float = 140
    target_high: float = 180


@dataclass
class VisualizationSettings:
    """Settings for chart rendering."""
    width: int = 1000
    height: int = 600

    # Meal marker radius range (px), square-root scaled by calories
    marker_min_radius: float = 5.0
    marker_max_radius: float = 20.0

    font_family: str = "Inter, sans-serif"

    calorie_color: str = "rgba(50, 110, 160, 0.5)"
    secondary_color: str = "rgba(220, 20, 60, 0.6)"
    glucose_color: str = "red"
    selected_color: str = "orange"
    meal_marker_color: str = "blue"
    heart_rate_color: str = "rgba(120, 120, 120, 0.7)"


@dataclass
class LoggingSettings:
    level: str = "INFO"


@dataclass
class DashboardConfig:
    """Master configuration container."""
    data: DataSources = field(default_factory=DataSources)
    navigation: NavigationSettings = field(default_factory=NavigationSettings)
    glucose: GlucoseThresholds = field(default_factory=GlucoseThresholds)
    visualization: VisualizationSettings = field(default_factory=VisualizationSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DashboardConfig':
        """Create config from dictionary."""
        return cls(
            data=DataSources(**data.get('data', {})),
            navigation=NavigationSettings(**data.get('navigation', {})),
            glucose=GlucoseThresholds(**data.get('glucose', {})),
            visualization=VisualizationSettings(**data.get('visualization', {})),
            logging=LoggingSettings(**data.get('logging', {})),
        )


def load_config(config_path: Optional[Path] = None) -> DashboardConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml. If None, looks for config.yaml
                    in the food_glucose_dashboard package directory.

    Returns:
        DashboardConfig with values from file merged with defaults.

    Raises:
        ValueError: If the configured secondary nutrient is not supported.
    """
    if config_path is None:
        config_path = Path(__file__).parent / "config.yaml"
    config_path = Path(config_path)

    config = DashboardConfig()

    if not config_path.exists():
        return config

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    # Override defaults section by section, ignoring unknown keys
    for section in fields(config):
        values = data.get(section.name) or {}
        target = getattr(config, section.name)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    if config.navigation.secondary_nutrient not in NUTRIENTS:
        raise ValueError(
            f"Unsupported secondary nutrient {config.navigation.secondary_nutrient!r}. "
            f"Expected one of {', '.join(NUTRIENTS)}"
        )

    return config


def save_config(config: DashboardConfig, config_path: Path) -> None:
    """Save configuration to YAML file."""
    with open(config_path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
