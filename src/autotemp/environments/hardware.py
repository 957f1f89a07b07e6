"""Environment connecting the control loop to the physical machine."""

import threading
from typing import Any

from pydantic import Field

from autotemp.base import Actuator, Environment, Sensor, State
from autotemp.errors import ActuatorError

from .ipmi import FanActuator
from .sensors import CpuTemperatureSensor, SensorSession, cpu_temperature

FULL_SPEED = 100


class FanEnvironment(Environment):
    """Reads the CPU temperature and applies fan speed commands.

    FanEnvironment owns the loop state: the open sensor session and the
    last fan speed that was successfully applied. Both are guarded by a
    single lock because initialize() may be called from the resume
    watcher thread while a tick is running.

    The actuation gate suppresses a command equal to the last applied
    speed. After a failed command the last applied speed is left as it
    was, so the next tick retries.
    """

    sensor: CpuTemperatureSensor = Field(description="Source of CPU temperature sessions")
    actuator: FanActuator = Field(description="Fan speed actuator")
    sensor_name: str = Field(default="cpu_temp", description="Name of the published sensor")
    actuator_name: str = Field(default="fan", description="Name of the consumed actuator")

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        self._lock = threading.RLock()
        self._session: SensorSession | None = None
        self._last_applied_speed: int | None = None

    @property
    def last_applied_speed(self) -> int | None:
        """Last speed the actuator accepted, None if unknown."""
        with self._lock:
            return self._last_applied_speed

    @property
    def session(self) -> SensorSession | None:
        """Currently open sensor session, if any."""
        with self._lock:
            return self._session

    def initialize(self) -> None:
        """Replace the sensor session and forget the applied speed.

        The next command after this call always reaches the actuator,
        even if it equals the speed applied before.
        """
        with self._lock:
            self.release()
            self._logger.info("Initializing hardware sensors...")
            self._session = self.sensor.open()

    def release(self) -> None:
        """Close the sensor session, if open, and reset the gate."""
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None
            self._last_applied_speed = None

    def _read_sensors(self) -> State:
        with self._lock:
            if self._session is None:
                self._logger.debug(
                    "No sensor session. Skipping sensor reading."
                )
                temp = None
            else:
                self._logger.debug("Reading CPU temperature sensors...")
                temp = cpu_temperature(self._session.read())

        sensor = Sensor(name=self.sensor_name, value=temp)
        return State(devices={sensor.name: sensor})

    def _write_actuators(self, desired: State) -> None:
        device = desired.get_device(self.actuator_name)
        if isinstance(device, Actuator) and device.value is not None:
            self.apply_speed(device.value)

    def apply_speed(self, speed: int) -> bool:
        """Send a speed to the actuator unless it is already applied.

        Returns:
            False if the actuator failed, True otherwise

        """
        if not 0 <= speed <= FULL_SPEED:
            self._logger.warning(
                "Invalid fan speed: %d. Setting fan speed to max (100%%).",
                speed,
            )
            speed = FULL_SPEED

        with self._lock:
            if speed == self._last_applied_speed:
                self._logger.debug(
                    "Fan speed already set to: %d%%. No action taken.", speed
                )
                return True

            self._logger.info("Setting fan speed to: %d%%", speed)
            try:
                self.actuator.apply(speed)
            except ActuatorError as e:
                self._logger.error("Error setting fan speed: %s", e)
                return False
            self._last_applied_speed = speed
            return True

    def force_full_speed(self) -> bool:
        """Apply 100% regardless of the last applied speed."""
        with self._lock:
            self._last_applied_speed = None
            return self.apply_speed(FULL_SPEED)
