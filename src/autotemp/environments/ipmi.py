"""Fan speed actuator driving Supermicro boards through IPMICFG."""

import logging
import subprocess
from abc import ABC, abstractmethod

from pydantic import Field

from autotemp.base import Entity
from autotemp.errors import ActuatorError

log = logging.getLogger(__name__)

# OEM raw command: set fan zone 0 duty cycle
RAW_SET_ZONE_SPEED = ("-raw", "0x30", "0x70", "0x66", "0x01", "0x00")


class FanActuator(Entity, ABC):
    """Something that can set the fan speed."""

    @abstractmethod
    def apply(self, speed: int) -> None:
        """Set the fan speed in percent.

        Raises:
            ActuatorError: If the speed could not be applied

        """


class IpmiFanActuator(FanActuator):
    """Sets the fan speed by running the IPMICFG utility.

    The speed is encoded as a two-digit hex byte, e.g. 35% -> 0x23.
    """

    executable: str = Field(description="Path to the IPMICFG executable")
    timeout_s: float = Field(default=10.0, gt=0, description="Time limit for one invocation")

    def command(self, speed: int) -> list[str]:
        """Build the argument vector for the given speed."""
        return [self.executable, *RAW_SET_ZONE_SPEED, f"0x{speed:02x}"]

    def apply(self, speed: int) -> None:
        cmd = self.command(speed)
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout_s
            )
        except subprocess.TimeoutExpired as e:
            # subprocess.run() kills the child before raising
            raise ActuatorError(
                f"IPMICFG process timed out after {self.timeout_s:g}s"
            ) from e
        except OSError as e:
            raise ActuatorError(f"Failed to start IPMICFG: {e}") from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise ActuatorError(
                f"IPMICFG exited with status {result.returncode}"
                + (f": {detail}" if detail else "")
            )
        log.debug("IPMICFG accepted fan speed %d%%", speed)
