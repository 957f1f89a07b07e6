"""Lifecycle of the fan control daemon.

FanDaemon wires the control pipeline together and owns its lifecycle:

    Uninitialized -> Running -> FailSafeShutdown

While running, every resume from sleep re-initializes the hardware
environment. Any unexpected error ends the loop; the daemon then forces
the fan to full speed, releases the sensors and reports exit status 1.
Hot and loud is always preferred over silent and cold.
"""

import logging
from typing import Any

from pydantic import ConfigDict, Field

from autotemp.base import Entity, Pipeline, Runner, StandardRunner, TickOutcome
from autotemp.config import ControlConfig
from autotemp.controllers import RampController
from autotemp.environments import (
    CpuTemperatureSensor,
    FanActuator,
    FanEnvironment,
    IpmiFanActuator,
)
from autotemp.power import PowerEvent, ResumeWatcher, default_resume_watcher

EXIT_FATAL = 1


class FanDaemon(Entity):
    """Always-on closed loop from CPU temperature to fan speed."""

    model_config = ConfigDict(frozen=False)

    config: ControlConfig = Field(description="Control parameters")
    environment: FanEnvironment = Field(description="Sensor and actuator access, owner of the loop state")
    watcher: ResumeWatcher = Field(description="Source of resume events")
    runner: Runner = Field(description="Periodic executor of the pipeline")

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}."
            f"{self.name}"
        )
        self._shut_down = False

    @classmethod
    def from_config(
        cls,
        config: ControlConfig,
        *,
        sensor: CpuTemperatureSensor | None = None,
        actuator: FanActuator | None = None,
        watcher: ResumeWatcher | None = None,
        runner_class: type[Runner] = StandardRunner,
        **runner_options: Any,
    ) -> "FanDaemon":
        """Build a daemon with the standard control pipeline.

        One tick runs: environment (read) -> ramp controller ->
        environment (write).
        """
        environment = FanEnvironment(
            name="hardware",
            sensor=sensor or CpuTemperatureSensor(name="cpu"),
            actuator=actuator
            or IpmiFanActuator(name="ipmicfg", executable=config.ipmicfg_path),
        )
        controller = RampController(name="ramp", config=config)
        pipeline = Pipeline(
            name="control", children=[environment, controller, environment]
        )
        runner = runner_class(
            name="loop",
            main_process=pipeline,
            interval_ms=config.interval_ms,
            **runner_options,
        )
        return cls(
            name="autotemp",
            config=config,
            environment=environment,
            watcher=watcher or default_resume_watcher(),
            runner=runner,
        )

    def initialize(self) -> None:
        """(Re)open the sensors and reset the actuation gate.

        Called once at startup and again on every resume. May run on the
        watcher thread while a tick is in progress; the environment
        serializes the two.
        """
        self.runner.main_process.initialize()
        self.watcher.unsubscribe(self._on_resume)
        self.watcher.subscribe(self._on_resume)

    def tick(self) -> TickOutcome:
        """Run one iteration of the control pipeline."""
        return self.runner.tick()

    def run_forever(self) -> int:
        """Run the control loop until a fatal error.

        The shutdown routine runs on every way out of this method,
        including SystemExit and KeyboardInterrupt.

        Returns:
            Process exit status: 1 after a fatal error, 0 if the runner
            was stopped deliberately

        """
        outcome = TickOutcome.FATAL
        try:
            self.initialize()
            self.watcher.start()
            outcome = self.runner.run()
        except Exception as e:
            self._logger.exception(f"Failed to start fan control: {e}")
        finally:
            if outcome is TickOutcome.FATAL:
                self._logger.error(
                    "Setting fan speed to max (100%) and terminating the program."
                )
            self.shutdown()

        return EXIT_FATAL if outcome is TickOutcome.FATAL else 0

    def shutdown(self) -> None:
        """Force full speed and release every resource. Idempotent."""
        if self._shut_down:
            return
        self._shut_down = True

        self.runner.stop()
        # The watcher goes first so no resume re-opens released sensors
        try:
            self.watcher.unsubscribe(self._on_resume)
            self.watcher.stop()
        finally:
            try:
                if not self.environment.force_full_speed():
                    self._logger.critical("Could not force fan speed to 100%")
            finally:
                self.environment.release()

    def _on_resume(self, event: PowerEvent) -> None:
        if self._shut_down:
            self._logger.debug("Ignoring resume during shutdown")
            return
        self._logger.info(
            "System resumed from sleep (%s). Reinitializing...", event.mode
        )
        self.initialize()
