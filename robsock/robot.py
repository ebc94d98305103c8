"""High-level robot agent interface to the simulator."""

from __future__ import annotations

from collections.abc import Sequence

from robsock.link import LinkError, RobLink
from robsock.measures import BeaconMeasure

__all__ = [
    "Robot",
    "init_robot",
    "init_robot2",
    "init_robot_beacon",
    "CENTER",
    "LEFT",
    "RIGHT",
    "OTHER1",
]

# Identifiers of the obstacle sensors.
CENTER = 0
LEFT = 1
RIGHT = 2
OTHER1 = 3


class Robot:
    """A robot agent connected to the simulator through a registered link.

    Sensor values reflect the last message fetched by :meth:`read_sensors`;
    reading them does not fetch new values.
    """

    def __init__(self, link: RobLink) -> None:
        self.link = link

    # Sensors

    def read_sensors(self) -> int:
        """Wait for the next sensor message; return its size in bytes."""
        size = self.link.read_sensors()
        if size <= 0:
            raise LinkError("empty sensor message")
        return size

    @property
    def time(self) -> int:
        """Simulation time of the last sensor message."""
        return self.link.measures.time

    def is_obstacle_ready(self, sensor_id: int) -> bool:
        return self.link.ir_sensor_ready(sensor_id)

    def obstacle_sensor(self, sensor_id: int) -> float:
        """Value inversely proportional to the obstacle distance."""
        return float(self.link.ir_sensor(sensor_id))

    @property
    def number_of_beacons(self) -> int:
        return self.link.sim_params.n_beacons

    def is_beacon_ready(self, beacon_id: int) -> bool:
        return self.link.beacon_ready(beacon_id)

    def beacon_sensor(self, beacon_id: int) -> BeaconMeasure:
        """Beacon direction in robot coordinates, in degrees."""
        return self.link.beacon(beacon_id)

    @property
    def is_line_sensor_ready(self) -> bool:
        return self.link.measures.line_sensor_ready

    def line_sensor(self) -> list[bool]:
        """State of each line sensor element."""
        return list(self.link.measures.line_sensor)

    @property
    def is_compass_ready(self) -> bool:
        return self.link.measures.compass_ready

    @property
    def compass_sensor(self) -> float:
        """Direction of the robot in ground coordinates, in degrees."""
        return float(self.link.measures.compass)

    def new_message_from(self, sender: int) -> bool:
        return self.link.new_message(sender)

    def message_from(self, sender: int) -> str:
        return self.link.message(sender)

    @property
    def is_gps_ready(self) -> bool:
        return self.link.measures.gps_ready

    @property
    def is_gps_dir_ready(self) -> bool:
        return self.link.measures.gps_dir_ready

    @property
    def x(self) -> float:
        return float(self.link.measures.x)

    @property
    def y(self) -> float:
        return float(self.link.measures.y)

    @property
    def dir(self) -> float:
        return float(self.link.measures.dir)

    @property
    def is_ground_ready(self) -> bool:
        return self.link.measures.ground_ready

    @property
    def ground_sensor(self) -> int:
        """Id of the target area the robot is on, or -1."""
        return self.link.measures.ground

    @property
    def is_bumper_ready(self) -> bool:
        return self.link.measures.collision_ready

    @property
    def bumper_sensor(self) -> bool:
        return self.link.measures.collision

    @property
    def is_score_ready(self) -> bool:
        return self.link.measures.score_ready

    @property
    def score_sensor(self) -> int:
        return self.link.measures.score

    # Sensor requests

    def request_ground_sensor(self) -> None:
        self.link.request_ground()

    def request_compass_sensor(self) -> None:
        self.link.request_compass()

    def request_beacon_sensor(self, beacon_id: int) -> None:
        self.link.request_beacon(beacon_id)

    def request_obstacle_sensor(self, sensor_id: int) -> None:
        self.link.request_obstacle(sensor_id)

    def request_sensors(self, *args: str) -> None:
        """Request sensors by name: "Compass", "Ground", "IRSensor0", "Beacon1", ..."""
        self.link.request_sensors(*args)

    # Buttons and leds

    @property
    def start_button(self) -> bool:
        return self.link.measures.start

    @property
    def stop_button(self) -> bool:
        return self.link.measures.stop

    @property
    def finished(self) -> bool:
        return self.link.measures.end_led

    @property
    def returning_led(self) -> bool:
        return self.link.measures.returning_led

    @property
    def visiting_led(self) -> bool:
        return self.link.measures.visiting_led

    # Actions

    def drive_motors(self, left: float, right: float) -> None:
        self.link.drive_motors(left, right)

    def set_returning_led(self, value: bool) -> None:
        self.link.set_returning_led(value)

    def set_visiting_led(self, value: bool) -> None:
        self.link.set_visiting_led(value)

    def finish(self) -> None:
        self.link.finish()

    def say(self, text: str) -> None:
        self.link.say(text)

    # Parameters

    @property
    def cycle_time(self) -> int:
        return self.link.sim_params.cycle_time

    @property
    def final_time(self) -> int:
        return self.link.sim_params.sim_time_final

    @property
    def key_time(self) -> int:
        return self.link.sim_params.key_time

    @property
    def requests_per_cycle(self) -> int:
        return self.link.sim_params.n_req_per_cycle

    @property
    def noise_obstacle_sensor(self) -> float:
        return float(self.link.sim_params.obst_noise)

    @property
    def noise_beacon_sensor(self) -> float:
        return float(self.link.sim_params.beacon_noise)

    @property
    def noise_compass_sensor(self) -> float:
        return float(self.link.sim_params.compass_noise)

    @property
    def noise_motors(self) -> float:
        return float(self.link.sim_params.motors_noise)

    @property
    def beacon_aperture(self) -> float:
        return self.link.sim_params.beacon_aperture

    @property
    def beacon_latency(self) -> int:
        return self.link.sim_params.beacon_latency

    @property
    def ground_latency(self) -> int:
        return self.link.sim_params.ground_latency

    @property
    def ir_latency(self) -> int:
        return self.link.sim_params.obst_latency

    @property
    def bumper_latency(self) -> int:
        return self.link.sim_params.collision_latency

    @property
    def beacon_requestable(self) -> bool:
        return self.link.sim_params.beacon_requestable

    @property
    def ground_requestable(self) -> bool:
        return self.link.sim_params.ground_requestable

    @property
    def ir_requestable(self) -> bool:
        return self.link.sim_params.obst_requestable

    @property
    def bumper_requestable(self) -> bool:
        return self.link.sim_params.collision_requestable

    # Lifetime

    def close(self) -> None:
        self.link.close()

    def __enter__(self) -> "Robot":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def init_robot(name: str, robot_id: int, host: str = "localhost") -> Robot:
    """Register a robot with the simulator at ``host`` (optionally ``host:port``)."""
    return Robot(RobLink(name, robot_id, host))


def init_robot2(
    name: str, robot_id: int, ir_sensor_angles: Sequence[float], host: str = "localhost"
) -> Robot:
    """Register a robot whose four obstacle sensors sit at the given angles (degrees)."""
    return Robot(RobLink(name, robot_id, host, ir_sensor_angles=ir_sensor_angles))


def init_robot_beacon(name: str, robot_id: int, height: float, host: str = "localhost") -> Robot:
    """Register a robot that also acts as a beacon of the given height."""
    return Robot(RobLink(name, robot_id, host, beacon_height=height))