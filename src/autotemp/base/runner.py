"""Runner classes for periodic execution of the control loop."""

import enum
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ConfigDict, Field

from .entity import Entity
from .process import Process
from .state import States


class TickOutcome(enum.Enum):
    """Result of a single execution of the main process."""

    CONTINUE = "continue"
    FATAL = "fatal"


class Runner(Entity, ABC):
    """Base class for periodic execution of a main process.

    Runner calls main_process.execute() once per tick and sleeps for
    interval_ms after every tick. Any exception escaping the process is
    fatal: it is logged, the loop ends, and run() reports
    TickOutcome.FATAL so the owner can shut down safely. No retries are
    attempted at this layer.

    Key characteristics:
    - Blocking loop on the caller's thread
    - Sleep after every tick, except the fatal one
    - Single top-level recovery boundary
    """

    model_config = ConfigDict(frozen=False)

    main_process: Process = Field(description="The root process to execute once per tick")
    interval_ms: int = Field(gt=0, description="Delay between ticks in milliseconds")
    tick_count: int = Field(default=0, description="Number of ticks executed so far")

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}."
            f"{self.name}"
        )
        self._stop_requested = False

    @abstractmethod
    def _sleep(self, seconds: float) -> None:
        """Wait between ticks."""

    def tick(self) -> TickOutcome:
        """Execute the main process once.

        Returns:
            TickOutcome.FATAL if the process raised, else CONTINUE

        """
        self.tick_count += 1
        try:
            self.main_process.execute(States())
        except Exception as e:
            self._logger.exception(
                f"Unexpected error in tick {self.tick_count}: {e}"
            )
            return TickOutcome.FATAL
        return TickOutcome.CONTINUE

    def run(self) -> TickOutcome:
        """Tick until a fatal error occurs or stop() is called.

        Returns:
            TickOutcome.FATAL after a fatal tick, CONTINUE after stop()

        """
        self._logger.info(
            f"Starting runner {self.name} ({self.interval_ms}ms interval)"
        )
        self._stop_requested = False
        while not self._stop_requested:
            if self.tick() is TickOutcome.FATAL:
                return TickOutcome.FATAL
            self._sleep(self.interval_ms / 1000.0)

        self._logger.info(f"Runner {self.name} stopped")
        return TickOutcome.CONTINUE

    def stop(self) -> None:
        """Ask the loop to end after the current tick."""
        self._stop_requested = True


class StandardRunner(Runner):
    """Production runner that sleeps in real time between ticks."""

    def _sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class FastRunner(Runner):
    """Test runner that advances simulated time instead of sleeping.

    FastRunner records every requested sleep and stops by itself after
    max_ticks ticks, so the otherwise endless loop can be driven
    deterministically from tests.
    """

    max_ticks: int = Field(default=100, ge=1, description="Stop after this many ticks to prevent infinite loops")
    simulated_seconds: float = Field(default=0.0, description="Total simulated time slept")
    sleeps: list[float] = Field(default_factory=list, description="Every requested sleep, in order")

    def _sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.simulated_seconds += seconds
        if self.tick_count >= self.max_ticks:
            self.stop()
