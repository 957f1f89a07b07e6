"""Temperature driven fan speed control for server motherboards."""

__version__ = "0.1.0"

from .base import (
    Actuator,
    Controller,
    Device,
    Entity,
    Environment,
    FastRunner,
    Pipeline,
    Process,
    Runner,
    Sensor,
    StandardRunner,
    State,
    States,
    TickOutcome,
)
from .config import ControlConfig
from .controllers import RampController, compute_speed
from .daemon import FanDaemon
from .environments import (
    CpuTemperatureSensor,
    FanActuator,
    FanEnvironment,
    IpmiFanActuator,
    SensorSession,
)
from .errors import ActuatorError, AutotempError, SensorError
from .power import (
    ClockGapResumeWatcher,
    NullResumeWatcher,
    PowerEvent,
    ResumeWatcher,
)

__all__ = [
    "Actuator",
    "ActuatorError",
    "AutotempError",
    "ClockGapResumeWatcher",
    "ControlConfig",
    "Controller",
    "CpuTemperatureSensor",
    "Device",
    "Entity",
    "Environment",
    "FanActuator",
    "FanDaemon",
    "FanEnvironment",
    "FastRunner",
    "IpmiFanActuator",
    "NullResumeWatcher",
    "Pipeline",
    "PowerEvent",
    "Process",
    "RampController",
    "ResumeWatcher",
    "Runner",
    "Sensor",
    "SensorError",
    "SensorSession",
    "StandardRunner",
    "State",
    "States",
    "TickOutcome",
    "__version__",
    "compute_speed",
]
