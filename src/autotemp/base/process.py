"""Process classes for control loop execution.

A Process transforms a dictionary of named states. The control loop is
built from two kinds of process: an Environment, which talks to the
hardware, and a Controller, which decides what the hardware should do.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ConfigDict

from .device import Actuator
from .entity import Entity
from .state import State, States


class Process(Entity, ABC):
    """Base class for computational units in the control loop.

    Each process receives a dictionary of named states and produces a
    transformed dictionary of states. Input states are never modified;
    State objects are immutable and processes return new ones.

    Exceptions raised by _execute() propagate to the caller. The runner
    is the single place where unexpected failures are handled.
    """

    model_config = ConfigDict(frozen=False)

    def __init__(self, **data: Any) -> None:
        """Initialize process with a per-instance logger."""
        super().__init__(**data)
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}."
            f"{self.__class__.__name__}."
            f"{self.name}"
        )

    def execute(self, states: States) -> States:
        """Execute this process, transforming the input states.

        Args:
            states: Dictionary of named states (e.g., "actual",
                "desired")

        Returns:
            Dictionary of transformed states

        """
        return self._execute(states)

    @abstractmethod
    def _execute(self, states: States) -> States:
        """Transform states. Implemented by subclasses."""

    def initialize(self) -> None:
        """Prepare the process for execution.

        Default implementation does nothing. Processes that hold
        hardware resources override this to (re)acquire them.
        """


class Environment(Process, ABC):
    """Abstract base class for hardware interfaces.

    Environments use a position-dependent execution pattern:

    - Pipeline start (no input): read sensors into an "actual" state
    - Pipeline end (has input): write the "desired" actuators to
      hardware and pass the states through

    The same Environment instance serves as both sensor source and
    actuator sink within one pipeline.
    """

    def _execute(self, states: States) -> States:
        """Execute position-dependent environment operations.

        Args:
            states: Input states from pipeline (empty if at start)

        Returns:
            Fresh states if at start, or passed-through states if not

        """
        if not states:
            return States({"actual": self._read_sensors()})
        if "desired" in states:
            self._write_actuators(states["desired"])
        return states

    @abstractmethod
    def _read_sensors(self) -> State:
        """Read current sensor values from the world."""

    @abstractmethod
    def _write_actuators(self, desired: State) -> None:
        """Write actuator values to the world.

        Args:
            desired: State containing target actuator values to write

        """


class Controller(Process, ABC):
    """Abstract base class for control logic.

    A Controller reads Sensors from the "actual" state and decides the
    Actuator settings placed in the "desired" state. It never talks to
    hardware directly.
    """

    def _execute(self, states: States) -> States:
        """Compute desired actuators from the actual state."""
        actual = states.get("actual", State())
        desired = states.get("desired", State())
        for actuator in self._decide(actual):
            desired = desired.with_device(actuator)

        result = States(states)
        result["desired"] = desired
        return result

    @abstractmethod
    def _decide(self, actual: State) -> list[Actuator]:
        """Return the actuator settings for the given sensor readings."""
