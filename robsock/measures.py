"""Sensor readings received from the simulator in one cycle."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["BeaconMeasure", "Measures", "NUM_IR_SENSORS", "N_LINE_ELEMENTS", "N_MESSAGE_SLOTS"]

NUM_IR_SENSORS = 4
N_LINE_ELEMENTS = 7
N_MESSAGE_SLOTS = 10


@dataclass
class BeaconMeasure:
    """A beacon reading; ``direction`` is meaningful only when ``visible``."""

    visible: bool = False
    direction: float = 0.0


class Measures:
    """All the values carried by one sensor message."""

    def __init__(self, n_beacons: int = 0) -> None:
        if n_beacons < 0:
            raise ValueError(f"number of beacons must not be negative: {n_beacons}")

        self.time = 0

        self.compass_ready = False
        self.compass = 0.0

        self.ir_sensor_ready = [False] * NUM_IR_SENSORS
        self.ir_sensor = [0.0] * NUM_IR_SENSORS

        self.beacon_ready = [False] * n_beacons
        self.beacon = [BeaconMeasure() for _ in range(n_beacons)]

        self.line_sensor_ready = False
        self.line_sensor = [False] * N_LINE_ELEMENTS

        self.ground_ready = False
        self.ground = -1

        self.collision_ready = False
        self.collision = False

        self.start = False
        self.stop = False
        self.end_led = False
        self.returning_led = False
        self.visiting_led = False

        self.gps_ready = False
        self.gps_dir_ready = False
        self.x = 0.0
        self.y = 0.0
        self.dir = 0.0

        self.score_ready = False
        self.score = 0
        self.arrival_time_ready = False
        self.arrival_time = 0
        self.returning_time_ready = False
        self.returning_time = 0
        self.collisions_ready = False
        self.collisions = 0

        self.hear_message = [""] * N_MESSAGE_SLOTS

    @property
    def n_beacons(self) -> int:
        """Number of beacon slots held."""
        return len(self.beacon)

    def __repr__(self) -> str:
        return f"Measures(n_beacons={self.n_beacons}, time={self.time})"