"""Simulation parameters announced by the simulator after registration."""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["SimParams"]


@dataclass
class SimParams:
    """Global simulation parameters, with the values used before the server replies."""

    obst_noise: float = 0.0
    beacon_noise: float = 0.0
    motors_noise: float = 0.0
    compass_noise: float = 0.0

    sim_time_final: int = 1500
    key_time: int = 1500
    cycle_time: int = 80
    n_beacons: int = 0

    obst_latency: int = 1
    beacon_latency: int = 1
    ground_latency: int = 1
    compass_latency: int = 1
    collision_latency: int = 1

    obst_requestable: bool = False
    beacon_requestable: bool = False
    ground_requestable: bool = False
    compass_requestable: bool = False
    collision_requestable: bool = False

    beacon_aperture: float = math.pi / 3

    n_req_per_cycle: int = 2