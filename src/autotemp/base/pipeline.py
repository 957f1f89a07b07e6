"""Pipeline class for the serial control flow."""

from pydantic import Field

from .process import Process
from .state import States


class Pipeline(Process):
    """Sequential execution unit for serial control.

    Pipeline executes child processes in order, passing states through
    them: input -> child1.execute() -> child2.execute() -> ... -> output

    A failing child aborts the pipeline. Recovery from expected
    conditions happens inside the children; anything that escapes is
    for the runner to handle.
    """

    children: list[Process] = Field(default_factory=list, description="Child processes in execution order")

    def initialize(self) -> None:
        """Initialize every distinct child once, in order.

        An Environment usually appears twice (sensor source and actuator
        sink), but its resources must only be acquired once.
        """
        seen: set[int] = set()
        for child in self.children:
            if id(child) in seen:
                continue
            seen.add(id(child))
            child.initialize()

    def _execute(self, states: States) -> States:
        """Execute child processes serially.

        Args:
            states: Dictionary of named states to transform

        Returns:
            Dictionary of transformed states after serial execution

        """
        current_states = states
        for child in self.children:
            self._logger.debug("Executing %s", child.name)
            current_states = child.execute(current_states)
        return current_states
