"""Exceptions raised by autotemp components."""


class AutotempError(Exception):
    """Base class for all autotemp errors."""


class SensorError(AutotempError):
    """The temperature sensor subsystem is unavailable or broken.

    This is not raised for a missing reading, which is an expected
    condition reported as None.
    """


class ActuatorError(AutotempError):
    """The fan control utility could not apply a speed.

    Raised for launch failures, timeouts and non-zero exit codes. The
    control loop recovers by retrying on the next tick.
    """
