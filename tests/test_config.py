"""
Tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from weekplanner.config import (
    CONFIG_FILENAME,
    LimitsConfig,
    PlannerConfig,
    get_default_config_path,
)
from weekplanner.domain.clock import Time


class TestLimitsConfig:
    """Tests for the day limits section."""

    def test_defaults(self):
        """Test the defaults span the whole day."""
        options = LimitsConfig().to_series_options()

        assert options.default_start_limit == Time.parse("00:00")
        assert options.default_end_limit == Time.parse("23:59")
        assert options.allow_timeslot_merging is True
        assert options.enforce_overlapping_check is False

    def test_to_series_options(self):
        """Test every field reaches the domain options."""
        options = LimitsConfig(
            start="06:00",
            end="20:00",
            allow_timeslot_merging=False,
            enforce_overlapping_check=True,
        ).to_series_options()

        assert options.default_start_limit == Time.parse("06:00")
        assert options.default_end_limit == Time.parse("20:00")
        assert options.allow_timeslot_merging is False
        assert options.enforce_overlapping_check is True

    @pytest.mark.parametrize("value", ["6:00", "24:00", "noon"])
    def test_invalid_time(self, value):
        """Test limits must be HH:MM."""
        with pytest.raises(ValidationError, match="Limit must be HH:MM"):
            LimitsConfig(start=value)

    def test_end_before_start(self):
        """Test the day must open before it closes."""
        with pytest.raises(ValidationError, match="later than start"):
            LimitsConfig(start="18:00", end="08:00")


class TestPlannerConfig:
    """Tests for the root configuration model."""

    def test_pattern_for(self):
        """Test overrides win over the daily pattern."""
        config = PlannerConfig(daily_pattern="08:00-12:00", days={"Friday": "08:00-10:00"})

        assert config.pattern_for("monday") == "08:00-12:00"
        assert config.pattern_for("friday") == "08:00-10:00"

    def test_invalid_daily_pattern(self):
        """Test the daily pattern must be a valid series."""
        with pytest.raises(ValidationError, match="overlaps"):
            PlannerConfig(daily_pattern="08:00-10:00,09:00-11:00")

    def test_unknown_day(self):
        """Test overrides must use weekday labels."""
        with pytest.raises(ValidationError, match="Unknown day label"):
            PlannerConfig(days={"someday": "08:00-10:00"})

    def test_invalid_day_pattern(self):
        """Test overrides must be valid series."""
        with pytest.raises(ValidationError, match="monday"):
            PlannerConfig(days={"monday": "8:00-10:00"})

    def test_log_level(self):
        """Test log levels are normalized and checked."""
        assert PlannerConfig(log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError, match="Unknown log level"):
            PlannerConfig(log_level="chatty")


class TestLoadFromYaml:
    """Tests for reading the YAML file."""

    def test_load(self, tmp_path):
        """Test a complete file is parsed."""
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text(
            "limits:\n"
            "  start: \"07:00\"\n"
            "  end: \"19:00\"\n"
            "  enforce_overlapping_check: true\n"
            "daily_pattern: \"08:00-12:00,13:00-17:00\"\n"
            "days:\n"
            "  saturday: \"09:00-11:00\"\n"
            "log_level: info\n",
            encoding="utf-8",
        )

        config = PlannerConfig.load_from_yaml(config_path)

        assert config.limits.start == "07:00"
        assert config.limits.enforce_overlapping_check is True
        assert config.pattern_for("saturday") == "09:00-11:00"
        assert config.log_level == "INFO"

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test an empty file is a default configuration."""
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("", encoding="utf-8")

        assert PlannerConfig.load_from_yaml(config_path) == PlannerConfig()

    def test_missing_file(self, tmp_path):
        """Test a missing file is reported."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            PlannerConfig.load_from_yaml(tmp_path / CONFIG_FILENAME)

    def test_directory_is_not_a_config_file(self, tmp_path):
        """Test a directory path is reported as a missing file."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            PlannerConfig.load_from_yaml(tmp_path)

    def test_invalid_field(self, tmp_path):
        """Test field validation errors surface as value errors."""
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("limits:\n  start: \"18:00\"\n  end: \"08:00\"\n", encoding="utf-8")

        with pytest.raises(ValueError, match="later than start"):
            PlannerConfig.load_from_yaml(config_path)

    def test_invalid_yaml(self, tmp_path):
        """Test broken YAML is reported as a value error."""
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("limits: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            PlannerConfig.load_from_yaml(config_path)

    def test_root_must_be_mapping(self, tmp_path):
        """Test a list at the root is rejected."""
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("- monday\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping at the root"):
            PlannerConfig.load_from_yaml(config_path)


class TestDefaultConfigPath:
    """Tests for locating the config file."""

    def test_prefers_given_directory(self, tmp_path):
        """Test a file in the start directory is used."""
        (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")

        assert get_default_config_path(tmp_path) == tmp_path / CONFIG_FILENAME

    def test_falls_back_to_project_root(self, tmp_path):
        """Test the project root is used when the directory has no file."""
        path = get_default_config_path(tmp_path)

        assert path.name == CONFIG_FILENAME
        assert path.parent != tmp_path
