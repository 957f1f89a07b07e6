"""Device classes for sensor readings and actuator commands."""

from pydantic import Field

from .entity import Entity


class Device(Entity):
    """Base class for hardware interface points (sensors and actuators).

    A Device carries a single integer value together with its unit. A
    value of None means the device has nothing to report; for a sensor
    this is "no valid sample", which is never the same as zero.
    """

    value: int | None = Field(default=None, description="Current reading or setting")
    unit: str = Field(default="", description="Measurement unit")


class Sensor(Device):
    """A device that reports a value from the environment.

    The control loop uses a single temperature sensor, ``cpu_temp``,
    holding the hottest CPU reading in whole degrees Celsius.
    """

    unit: str = "C"


class Actuator(Device):
    """A device that performs an action on the environment.

    The control loop uses a single actuator, ``fan``, whose value is the
    commanded fan speed in percent.
    """

    unit: str = "%"
