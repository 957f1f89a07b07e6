"""Power state notifications.

On Linux, time spent suspended advances CLOCK_BOOTTIME but not
CLOCK_MONOTONIC. ClockGapResumeWatcher polls the difference between the
two clocks from a background thread; when it grows, the machine has
been asleep and subscribers are told that it resumed.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from autotemp.base import Entity

log = logging.getLogger(__name__)


class PowerEvent(BaseModel):
    """A detected power state transition."""

    model_config = ConfigDict(frozen=True)

    mode: str = Field(description='Transition kind, e.g. "resume"')
    slept_seconds: float = Field(default=0.0, description="Approximate time spent asleep")


PowerCallback = Callable[[PowerEvent], None]


class ResumeWatcher(Entity, ABC):
    """Source of resume notifications.

    Callbacks run on the watcher's own thread, not on the thread that
    subscribed them. A callback that raises is logged and does not stop
    the watcher.
    """

    model_config = ConfigDict(frozen=False)

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}."
            f"{self.name}"
        )
        self._callbacks: list[PowerCallback] = []
        self._callbacks_lock = threading.Lock()

    def subscribe(self, callback: PowerCallback) -> None:
        """Register a callback. Subscribing twice has no extra effect."""
        with self._callbacks_lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)

    def unsubscribe(self, callback: PowerCallback) -> None:
        """Remove a callback if it is registered."""
        with self._callbacks_lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def subscriber_count(self) -> int:
        with self._callbacks_lock:
            return len(self._callbacks)

    def publish(self, event: PowerEvent) -> None:
        """Deliver an event to every subscriber on the calling thread."""
        with self._callbacks_lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            try:
                callback(event)
            except Exception:
                self._logger.exception(
                    "Power event handler failed for %s", event.mode
                )

    @abstractmethod
    def start(self) -> None:
        """Begin watching for power events."""

    @abstractmethod
    def stop(self) -> None:
        """Stop watching. Safe to call more than once."""


class NullResumeWatcher(ResumeWatcher):
    """Watcher for platforms without resume detection.

    Never publishes anything. The control loop still corrects itself
    through periodic polling.
    """

    def start(self) -> None:
        self._logger.info("Resume detection is not available on this platform")

    def stop(self) -> None:
        pass


def suspend_offset() -> float:
    """Seconds the system has spent suspended since boot."""
    return time.clock_gettime(time.CLOCK_BOOTTIME) - time.clock_gettime(
        time.CLOCK_MONOTONIC
    )


class ClockGapResumeWatcher(ResumeWatcher):
    """Detects resume from sleep by watching the suspend clock offset."""

    poll_interval_s: float = Field(default=1.0, gt=0, description="How often to sample the clocks")
    threshold_s: float = Field(default=2.0, gt=0, description="Minimum offset growth reported as a resume")
    offset_source: Callable[[], float] = Field(
        default=suspend_offset, exclude=True, description="Returns the current suspend offset in seconds"
    )

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        self._last_offset: float | None = None
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    def check(self) -> PowerEvent | None:
        """Sample the clocks once and publish a resume if one happened.

        The first call only records a baseline.
        """
        offset = self.offset_source()
        last, self._last_offset = self._last_offset, offset
        if last is None:
            return None

        gap = offset - last
        if gap < self.threshold_s:
            return None

        event = PowerEvent(mode="resume", slept_seconds=gap)
        self._logger.info(
            "Power mode changed: %s (asleep for %.0fs)",
            event.mode,
            event.slept_seconds,
        )
        self.publish(event)
        return event

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return

        self._stop_event.clear()
        self.check()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name=f"ResumeWatcher-{self.name}",
            daemon=True,
        )
        self._thread.start()
        self._logger.debug("Watching for resume from sleep")

    def stop(self) -> None:
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=5.0)

    def _watch_loop(self) -> None:
        while not self._stop_event.wait(self.poll_interval_s):
            self.check()


def default_resume_watcher() -> ResumeWatcher:
    """Return the best resume watcher for this platform."""
    if hasattr(time, "CLOCK_BOOTTIME"):
        return ClockGapResumeWatcher(name="resume")
    log.debug("CLOCK_BOOTTIME unavailable, resume detection disabled")
    return NullResumeWatcher(name="resume")
