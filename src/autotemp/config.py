"""Control loop configuration.

Validation is corrective: an out-of-range value is replaced by a fixed
fallback and reported with a warning instead of being rejected, so the
controller always starts with a usable configuration.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

log = logging.getLogger(__name__)

# Linux only: CPU temperatures come from hwmon through psutil
DEFAULT_IPMICFG_PATH = "IPMICFG-Linux.x86_64"

# Replacement values used when a setting is out of range. These differ
# from the defaults for some settings.
FALLBACK_INTERVAL_MS = 1000
FALLBACK_FLOOR_SPEED = 40
FALLBACK_RAMP_START_TEMP = 60
FALLBACK_MAX_TEMP = 80
FALLBACK_STEP = 5

# Ramp must start below this temperature, which is also FALLBACK_MAX_TEMP,
# so a corrected max_temp always lies above the ramp start.
RAMP_START_LIMIT = 80
MAX_TEMP_LIMIT = 100


def _corrected(setting: str, value: int, fallback: int, unit: str) -> int:
    log.warning(
        "Invalid %s: %s. Setting to default (%s%s).",
        setting,
        value,
        fallback,
        unit,
    )
    return fallback


class ControlConfig(BaseModel):
    """Validated, immutable control parameters.

    Fields are validated in declaration order, so the ramp start is
    checked against the already corrected floor speed and the max
    temperature against the already corrected ramp start.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    interval_ms: int = Field(default=2500, description="Delay between loop iterations (ms)")
    floor_speed: int = Field(default=35, description="Minimum fan speed (%) below the ramp")
    ramp_start_temp: int = Field(default=66, description="Temperature where the ramp begins (C)")
    max_temp: int = Field(default=90, description="Temperature of full fan speed (C)")
    step: int = Field(default=5, description="Fan speed quantization step (%)")
    ipmicfg_path: str = Field(default=DEFAULT_IPMICFG_PATH, description="Path to the IPMICFG executable")
    verbose: bool = Field(default=False, description="Enable debug logging")

    @field_validator("interval_ms")
    @classmethod
    def _check_interval(cls, value: int) -> int:
        if value <= 0:
            return _corrected("interval", value, FALLBACK_INTERVAL_MS, "ms")
        return value

    @field_validator("floor_speed")
    @classmethod
    def _check_floor_speed(cls, value: int) -> int:
        if not 0 <= value <= 100:
            return _corrected(
                "floor fan speed", value, FALLBACK_FLOOR_SPEED, "%"
            )
        return value

    @field_validator("ramp_start_temp")
    @classmethod
    def _check_ramp_start_temp(cls, value: int, info: ValidationInfo) -> int:
        floor = info.data.get("floor_speed", FALLBACK_FLOOR_SPEED)
        if value < floor or value >= RAMP_START_LIMIT:
            return _corrected(
                "ramp up threshold temp",
                value,
                FALLBACK_RAMP_START_TEMP,
                "°C",
            )
        return value

    @field_validator("max_temp")
    @classmethod
    def _check_max_temp(cls, value: int, info: ValidationInfo) -> int:
        ramp = info.data.get("ramp_start_temp", FALLBACK_RAMP_START_TEMP)
        if value <= ramp or value > MAX_TEMP_LIMIT:
            return _corrected("max temp", value, FALLBACK_MAX_TEMP, "°C")
        return value

    @field_validator("step")
    @classmethod
    def _check_step(cls, value: int) -> int:
        if not 0 < value <= 100:
            return _corrected("fan speed step", value, FALLBACK_STEP, "%")
        return value

    def describe(self) -> list[str]:
        """Return one human-readable line per control parameter."""
        return [
            f"Interval: {self.interval_ms}ms",
            f"Floor Fan Speed: {self.floor_speed}%",
            f"Ramp Up Threshold Temp: {self.ramp_start_temp}°C",
            f"Max Temp: {self.max_temp}°C",
            f"Fan Speed Step: {self.step}%",
            f"IPMICFG Path: {self.ipmicfg_path}",
        ]
