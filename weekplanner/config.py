"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.clock import Time
from .domain.day import DAY_LABELS
from .domain.exceptions import PlannerError
from .domain.options import DEFAULT_END_LIMIT, DEFAULT_START_LIMIT, SeriesOptions
from .domain.series import TimeslotSeries

CONFIG_FILENAME = "weekplanner.yaml"


class LimitsConfig(BaseModel):
    """Day boundaries and series behaviour."""
    start: str = DEFAULT_START_LIMIT
    end: str = DEFAULT_END_LIMIT
    allow_timeslot_merging: bool = True
    enforce_overlapping_check: bool = False

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, value: str) -> str:
        """Ensure limits are strict HH:MM strings."""
        try:
            Time.parse(value)
        except PlannerError as exc:
            raise ValueError(f"Limit must be HH:MM, got {value!r}") from exc
        return value

    @model_validator(mode="after")
    def validate_limits_order(self) -> "LimitsConfig":
        """Ensure the day opens before it closes."""
        if not Time.parse(self.start).is_before(Time.parse(self.end)):
            raise ValueError("end limit must be later than start limit")
        return self

    def to_series_options(self) -> SeriesOptions:
        """Build the domain options from this configuration."""
        return SeriesOptions(
            allow_timeslot_merging=self.allow_timeslot_merging,
            default_start_limit=Time.parse(self.start),
            default_end_limit=Time.parse(self.end),
            enforce_overlapping_check=self.enforce_overlapping_check,
        )


class PlannerConfig(BaseModel):
    """Application configuration."""
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    daily_pattern: str = ""
    days: Dict[str, str] = Field(default_factory=dict)
    log_level: str = "WARNING"

    @field_validator("daily_pattern")
    @classmethod
    def validate_daily_pattern(cls, value: str) -> str:
        """Ensure the pattern is a valid, non-overlapping series string."""
        try:
            TimeslotSeries.from_string(value)
        except PlannerError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("days")
    @classmethod
    def validate_days(cls, value: Dict[str, str]) -> Dict[str, str]:
        """Ensure overrides use known labels and valid series strings."""
        normalized: Dict[str, str] = {}
        for label, pattern in value.items():
            key = label.lower()
            if key not in DAY_LABELS:
                raise ValueError(f"Unknown day label: {label}. Use one of {', '.join(DAY_LABELS)}")
            try:
                TimeslotSeries.from_string(pattern)
            except PlannerError as exc:
                raise ValueError(f"{label}: {exc}") from exc
            normalized[key] = pattern
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def pattern_for(self, label: str) -> str:
        """Series string for a day, the override winning over the daily pattern."""
        return self.days.get(label, self.daily_pattern)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "PlannerConfig":
        """
        Read a planner configuration file. An empty file yields the defaults.

        Raises:
            FileNotFoundError: If the file is missing
            ValueError: If the YAML is broken, the root is not a mapping or a field is invalid
        """
        if not config_path.is_file():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Copy {CONFIG_FILENAME}.example to {CONFIG_FILENAME} and adjust the limits and patterns."
            )

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(
                f"{config_path}: expected a mapping at the root level, got {type(data).__name__}"
            )

        return cls.model_validate(data)


def get_default_config_path(start_dir: Optional[Path] = None) -> Path:
    """
    Locate the config file: the start directory (cwd by default) first, then
    the directory above the package. The last candidate is returned when
    none exists.
    """
    candidates = [
        (start_dir or Path.cwd()) / CONFIG_FILENAME,
        Path(__file__).resolve().parent.parent / CONFIG_FILENAME,
    ]
    return next((path for path in candidates if path.is_file()), candidates[-1])
