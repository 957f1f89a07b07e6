"""Piecewise linear fan ramp with step quantization."""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import Field

from autotemp.base import Actuator, Controller, Sensor, State
from autotemp.config import ControlConfig

FULL_SPEED = 100


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Python's round() sends ties to the even neighbour, which would move
    half-step temperatures down a step every other time.
    """
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_speed(temp_c: int, config: ControlConfig) -> int:
    """Map a CPU temperature to a fan speed percentage.

    Below or at the ramp start the fan runs at the floor speed; at or
    above the max temperature it runs at full speed. In between the
    speed rises linearly from floor to 100 and is rounded to the nearest
    multiple of the step, kept within [floor, 100].
    """
    floor = config.floor_speed
    if temp_c >= config.max_temp:
        return FULL_SPEED
    if temp_c <= config.ramp_start_temp:
        return floor

    span = config.max_temp - config.ramp_start_temp
    raw = floor + ((temp_c - config.ramp_start_temp) / span) * (
        FULL_SPEED - floor
    )
    stepped = round_half_away(raw / config.step) * config.step
    return min(max(stepped, floor), FULL_SPEED)


class RampController(Controller):
    """Controller that turns the CPU temperature into a fan command.

    Reads the ``cpu_temp`` sensor from the actual state and writes the
    ``fan`` actuator into the desired state. A missing reading is
    treated as the worst case: the fan is commanded to full speed.
    """

    config: ControlConfig = Field(description="Ramp parameters")
    sensor_name: str = Field(default="cpu_temp", description="Temperature sensor to follow")
    actuator_name: str = Field(default="fan", description="Fan actuator to command")

    def _decide(self, actual: State) -> list[Actuator]:
        sensor = actual.get_device(self.sensor_name)
        temp = sensor.value if isinstance(sensor, Sensor) else None

        if temp is None:
            self._logger.warning(
                "Failed to get a valid CPU temperature. "
                "Setting fan speed to max (100%)."
            )
            speed = FULL_SPEED
        else:
            self._logger.debug("Current CPU Temperature: %d C", temp)
            speed = compute_speed(temp, self.config)

        return [Actuator(name=self.actuator_name, value=speed)]
