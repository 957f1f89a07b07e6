"""Hardware sensors, actuators and the environment built from them."""

from .hardware import FanEnvironment
from .ipmi import FanActuator, IpmiFanActuator
from .sensors import CpuTemperatureSensor, SensorSession, cpu_temperature

__all__ = [
    "CpuTemperatureSensor",
    "FanActuator",
    "FanEnvironment",
    "IpmiFanActuator",
    "SensorSession",
    "cpu_temperature",
]
