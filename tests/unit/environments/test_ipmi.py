"""Tests for the IPMICFG fan actuator."""

import shutil
import subprocess

import pytest

from autotemp.environments.ipmi import IpmiFanActuator
from autotemp.errors import ActuatorError


class FakeRun:
    """Stand-in for subprocess.run recording its calls."""

    def __init__(self, returncode=0, stdout="", stderr="", error=None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.error = error
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(
            cmd, self.returncode, stdout=self.stdout, stderr=self.stderr
        )


@pytest.fixture
def actuator():
    return IpmiFanActuator(name="ipmicfg", executable="/opt/ipmicfg")


@pytest.mark.unit
class TestIpmiFanActuator:
    """Test command construction and failure mapping."""

    @pytest.mark.parametrize(
        ("speed", "byte"), [(0, "0x00"), (35, "0x23"), (70, "0x46"), (100, "0x64")]
    )
    def test_speed_encoded_as_hex_byte(self, actuator, speed, byte):
        assert actuator.command(speed) == [
            "/opt/ipmicfg",
            "-raw",
            "0x30",
            "0x70",
            "0x66",
            "0x01",
            "0x00",
            byte,
        ]

    def test_apply_runs_with_timeout(self, actuator, monkeypatch):
        fake = FakeRun()
        monkeypatch.setattr(subprocess, "run", fake)

        actuator.apply(35)

        cmd, kwargs = fake.calls[0]
        assert cmd[-1] == "0x23"
        assert kwargs["timeout"] == 10.0

    def test_nonzero_exit_raises(self, actuator, monkeypatch):
        monkeypatch.setattr(
            subprocess, "run", FakeRun(returncode=1, stderr="BMC busy\n")
        )

        with pytest.raises(ActuatorError, match="status 1: BMC busy"):
            actuator.apply(50)

    def test_launch_failure_raises(self, actuator, monkeypatch):
        monkeypatch.setattr(
            subprocess,
            "run",
            FakeRun(error=FileNotFoundError(2, "No such file", "/opt/ipmicfg")),
        )

        with pytest.raises(ActuatorError, match="Failed to start IPMICFG"):
            actuator.apply(50)

    def test_timeout_raises(self, monkeypatch):
        actuator = IpmiFanActuator(
            name="ipmicfg", executable="/opt/ipmicfg", timeout_s=2.5
        )
        monkeypatch.setattr(
            subprocess,
            "run",
            FakeRun(error=subprocess.TimeoutExpired(["/opt/ipmicfg"], 2.5)),
        )

        with pytest.raises(ActuatorError, match="timed out after 2.5s"):
            actuator.apply(50)

    @pytest.mark.skipif(shutil.which("sleep") is None, reason="needs sleep(1)")
    def test_real_timeout_kills_child(self):
        """Test a hanging utility is cut off and reported as a failure."""

        class HangingActuator(IpmiFanActuator):
            def command(self, speed: int) -> list[str]:
                return [self.executable, "5"]

        actuator = HangingActuator(
            name="sleeper", executable="sleep", timeout_s=0.2
        )

        with pytest.raises(ActuatorError, match="timed out"):
            actuator.apply(50)
