"""Base classes for the autotemp control loop."""

from autotemp.base.device import Actuator, Device, Sensor
from autotemp.base.entity import Entity
from autotemp.base.pipeline import Pipeline
from autotemp.base.process import Controller, Environment, Process
from autotemp.base.runner import FastRunner, Runner, StandardRunner, TickOutcome
from autotemp.base.state import State, States

__all__ = [
    "Actuator",
    "Controller",
    "Device",
    "Entity",
    "Environment",
    "FastRunner",
    "Pipeline",
    "Process",
    "Runner",
    "Sensor",
    "StandardRunner",
    "State",
    "States",
    "TickOutcome",
]
