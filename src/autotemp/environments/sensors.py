"""CPU temperature sensor access via psutil."""

import logging
import math

import psutil
from pydantic import Field

from autotemp.base import Entity
from autotemp.controllers.ramp import round_half_away
from autotemp.errors import SensorError

log = logging.getLogger(__name__)

# hwmon driver names that report CPU package/core temperatures
CPU_CHIPS = (
    "coretemp",
    "k10temp",
    "zenpower",
    "cpu_thermal",
    "cpu-thermal",
)

Reading = tuple[str, float]


class SensorSession:
    """Open handle on the CPU temperature sensors.

    The set of chips is discovered when the session is opened. hwmon
    numbering can change across suspend, which is why the control loop
    opens a fresh session after every resume.
    """

    def __init__(self, chips: tuple[str, ...]) -> None:
        self.chips = chips
        self.closed = False

    def read(self) -> list[Reading]:
        """Return (name, celsius) for every CPU temperature sensor.

        Raises:
            SensorError: If the session was closed

        """
        if self.closed:
            raise SensorError("Sensor session is closed")

        readings: list[Reading] = []
        temps = psutil.sensors_temperatures()
        for chip in self.chips:
            for index, entry in enumerate(temps.get(chip, ())):
                if entry.current is None or math.isnan(entry.current):
                    continue
                label = entry.label or f"temp{index + 1}"
                log.debug("Sensor: %s:%s, Value: %s C", chip, label, entry.current)
                readings.append((f"{chip}:{label}", float(entry.current)))
        return readings

    def close(self) -> None:
        """Release the session. Safe to call more than once."""
        self.closed = True


class CpuTemperatureSensor(Entity):
    """Factory for sensor sessions over the CPU hwmon chips."""

    chips: tuple[str, ...] = Field(default=CPU_CHIPS, description="hwmon chip names treated as CPU")

    def open(self) -> SensorSession:
        """Discover the available CPU chips and open a session.

        Raises:
            SensorError: If the platform has no temperature sensor API

        """
        if not hasattr(psutil, "sensors_temperatures"):
            raise SensorError(
                "Temperature sensors are not supported on this platform"
            )

        available = psutil.sensors_temperatures()
        found = tuple(chip for chip in self.chips if chip in available)
        if found:
            log.info("Initializing hardware sensors: %s", ", ".join(found))
        else:
            log.warning(
                "No CPU temperature sensors found (looked for %s)",
                ", ".join(self.chips),
            )
        return SensorSession(found)


def cpu_temperature(readings: list[Reading]) -> int | None:
    """Return the hottest reading in whole degrees, or None if empty."""
    if not readings:
        return None
    return round_half_away(max(celsius for _, celsius in readings))
