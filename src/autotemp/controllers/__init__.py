"""Fan control algorithms."""

from .ramp import RampController, compute_speed, round_half_away

__all__ = [
    "RampController",
    "compute_speed",
    "round_half_away",
]
