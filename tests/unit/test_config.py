"""Tests for ControlConfig corrective validation."""

import logging

import pytest
from pydantic import ValidationError

from autotemp.config import ControlConfig


@pytest.mark.unit
class TestControlConfigDefaults:
    """Test the stock configuration."""

    def test_defaults(self):
        """Test default values match the documented options."""
        config = ControlConfig()

        assert config.interval_ms == 2500
        assert config.floor_speed == 35
        assert config.ramp_start_temp == 66
        assert config.max_temp == 90
        assert config.step == 5
        assert config.verbose is False

    def test_valid_values_are_kept(self):
        """Test in-range values pass through unchanged."""
        config = ControlConfig(
            interval_ms=500,
            floor_speed=20,
            ramp_start_temp=50,
            max_temp=85,
            step=10,
        )

        assert (config.interval_ms, config.floor_speed) == (500, 20)
        assert (config.ramp_start_temp, config.max_temp) == (50, 85)
        assert config.step == 10

    def test_immutability(self):
        """Test the configuration cannot change after construction."""
        config = ControlConfig()

        with pytest.raises(ValidationError):
            config.step = 10

    def test_wrong_type_is_rejected(self):
        """Test corrections apply to values, not to types."""
        with pytest.raises(ValidationError):
            ControlConfig(step="fast")


@pytest.mark.unit
class TestControlConfigCorrections:
    """Test out-of-range values are replaced instead of rejected."""

    def test_zero_step_corrected(self):
        config = ControlConfig(step=0)
        assert config.step == 5

    def test_step_above_100_corrected(self):
        config = ControlConfig(step=101)
        assert config.step == 5

    def test_step_of_100_kept(self):
        config = ControlConfig(step=100)
        assert config.step == 100

    @pytest.mark.parametrize("interval", [0, -250])
    def test_non_positive_interval_corrected(self, interval):
        config = ControlConfig(interval_ms=interval)
        assert config.interval_ms == 1000

    @pytest.mark.parametrize("floor", [-1, 101])
    def test_floor_out_of_range_corrected(self, floor):
        config = ControlConfig(floor_speed=floor)
        assert config.floor_speed == 40

    @pytest.mark.parametrize("floor", [0, 100])
    def test_floor_bounds_kept(self, floor):
        config = ControlConfig(floor_speed=floor, ramp_start_temp=70)
        assert config.floor_speed == floor

    def test_ramp_below_floor_corrected(self):
        config = ControlConfig(floor_speed=50, ramp_start_temp=45)
        assert config.ramp_start_temp == 60

    def test_ramp_at_limit_corrected(self):
        config = ControlConfig(ramp_start_temp=80)
        assert config.ramp_start_temp == 60

    def test_ramp_checked_against_corrected_floor(self):
        """Test a corrected floor of 40 is used for the ramp check."""
        config = ControlConfig(floor_speed=150, ramp_start_temp=38)
        assert config.floor_speed == 40
        assert config.ramp_start_temp == 60

    def test_default_ramp_checked_against_floor(self):
        """Test an omitted ramp start is still validated against the floor."""
        config = ControlConfig(floor_speed=70)

        assert config.floor_speed == 70
        assert config.ramp_start_temp == 60

    def test_omitted_fields_report_corrections(self, caplog):
        with caplog.at_level(logging.WARNING, logger="autotemp.config"):
            ControlConfig(floor_speed=70)

        messages = [r.getMessage() for r in caplog.records]
        assert "Invalid ramp up threshold temp: 66. Setting to default (60°C)." in messages

    def test_max_not_above_ramp_corrected(self):
        config = ControlConfig(ramp_start_temp=70, max_temp=70)
        assert config.max_temp == 80

    def test_max_above_100_corrected(self):
        config = ControlConfig(max_temp=110)
        assert config.max_temp == 80

    def test_max_always_above_ramp(self):
        """Test corrections never leave max_temp at or below the ramp."""
        config = ControlConfig(ramp_start_temp=79, max_temp=5)
        assert config.max_temp == 80
        assert config.max_temp > config.ramp_start_temp

    def test_correction_is_reported(self, caplog):
        """Test every correction is logged as a warning."""
        with caplog.at_level(logging.WARNING, logger="autotemp.config"):
            ControlConfig(step=0, interval_ms=-1)

        messages = [r.getMessage() for r in caplog.records]
        assert "Invalid fan speed step: 0. Setting to default (5%)." in messages
        assert "Invalid interval: -1. Setting to default (1000ms)." in messages

    def test_describe(self):
        lines = ControlConfig().describe()
        assert "Interval: 2500ms" in lines
        assert "Fan Speed Step: 5%" in lines
        assert len(lines) == 6
