"""State classes for control loop snapshots."""

from pydantic import BaseModel, ConfigDict, Field

from .device import Device


class State(BaseModel):
    """A snapshot of devices at a specific moment.

    States are unopinionated about their meaning; their role (like
    "actual" or "desired") is defined by how a Process uses them.
    States are immutable; modifications return a new State.
    """

    model_config = ConfigDict(frozen=True)

    devices: dict[str, Device] = Field(default_factory=dict, description="Collection of devices indexed by name")

    def get_device(self, name: str) -> Device | None:
        """Get a device by name, returning None if not found."""
        return self.devices.get(name)

    def device_names(self) -> list[str]:
        """Return a list of all device names in this state."""
        return list(self.devices.keys())

    def with_device(self, device: Device) -> "State":
        """Return a new State with the given device added or updated."""
        new_devices = dict(self.devices)
        new_devices[device.name] = device
        return State(devices=new_devices)

    def __repr__(self) -> str:
        """Return a string representation showing device names."""
        device_names = ", ".join(self.device_names())
        return f"State({len(self.devices)} devices: {device_names})"


class States(dict[str, State]):
    """Named states passed between processes, e.g. "actual", "desired"."""
