"""Connection of one robot to the simulator: registration, sensors and actions."""

from __future__ import annotations

from collections.abc import Sequence

from robsock.measures import NUM_IR_SENSORS, BeaconMeasure, Measures
from robsock.netif import DEFAULT_PORT, NetworkError, Port
from robsock.params import SimParams
from robsock.parser import ParseError, parse

__all__ = [
    "LinkError",
    "RobLink",
    "register_message",
    "register_message_with_ir",
    "robot_beacon_register_message",
    "sensor_request_message",
    "drive_motors_message",
    "say_message",
    "returning_led_message",
    "visiting_led_message",
    "finish_message",
]

MESSAGE_MAX_SIZE = 4096
REGISTRATION_TIMEOUT = 2.0


class LinkError(Exception):
    """Raised when registration fails or the simulator cannot be reached."""


def _on_off(value: bool) -> str:
    return "On" if value else "Off"


def register_message(name: str, robot_id: int) -> str:
    """Registration of a plain robot."""
    return f'<Robot Name="{name}" Id="{robot_id:d}"></Robot>'


def register_message_with_ir(name: str, robot_id: int, ir_sensor_angles: Sequence[float]) -> str:
    """Registration of a robot that places its infra-red sensors at the given angles."""
    angles = list(ir_sensor_angles)
    if len(angles) != NUM_IR_SENSORS:
        raise ValueError(f"expected {NUM_IR_SENSORS} sensor angles, got {len(angles)}")
    sensors = "".join(
        f'<IRSensor Id="{i}" Angle="{angle:g}"/>' for i, angle in enumerate(angles)
    )
    return f'<Robot Name="{name}" Id="{robot_id:d}">{sensors}</Robot>'


def robot_beacon_register_message(name: str, robot_id: int, height: float) -> str:
    """Registration of a robot that also acts as a beacon."""
    return f'<RobotBeacon Name="{name}" Id="{robot_id:d}" Height="{height:g}"/>'


def sensor_request_message(*args: str) -> str:
    """Request for the named sensors, e.g. ``"Compass"``, ``"IRSensor0"``, ``"Beacon1"``."""
    requests = "".join(f'{sensor}="Yes" ' for sensor in args)
    return f"<Actions>\n\t<SensorRequests {requests}/>\n</Actions>"


def _single_request(sensor: str) -> str:
    return f'<Actions> <SensorRequests {sensor}="Yes" /> </Actions>\n'


def drive_motors_message(left: float, right: float) -> str:
    """Command setting both motor powers."""
    return f'<Actions LeftMotor="{left:g}" RightMotor="{right:g}"/>\n'


def say_message(text: str) -> str:
    """Broadcast of a text message to the other robots."""
    return f"<Actions><Say><![CDATA[{text}]]></Say></Actions>\n"


def returning_led_message(value: bool) -> str:
    """Command switching the returning led, with motors stopped."""
    return f'<Actions LeftMotor="{0.0:g}" RightMotor="{0.0:g}" ReturningLed="{_on_off(value)}"/>\n'


def visiting_led_message(value: bool) -> str:
    """Command switching the visiting led, with motors stopped."""
    return f'<Actions LeftMotor="{0.0:g}" RightMotor="{0.0:g}" VisitingLed="{_on_off(value)}"/>\n'


def finish_message() -> str:
    """Command ending the robot's round."""
    return '<Actions LeftMotor="0.0" RightMotor="0.0" EndLed="On"/>\n'


class RobLink:
    """A registered robot: sends actions and holds the latest measures."""

    def __init__(
        self,
        name: str,
        robot_id: int,
        host: str,
        *,
        ir_sensor_angles: Sequence[float] | None = None,
        beacon_height: float | None = None,
    ) -> None:
        if ir_sensor_angles is not None and beacon_height is not None:
            raise ValueError("a robot beacon cannot set sensor angles")
        if ir_sensor_angles is not None:
            registration = register_message_with_ir(name, robot_id, ir_sensor_angles)
        elif beacon_height is not None:
            registration = robot_beacon_register_message(name, robot_id, beacon_height)
        else:
            registration = register_message(name, robot_id)

        self.sim_params = SimParams()
        self.measures = Measures(0)
        self.port = Port(DEFAULT_PORT, host, 0)
        try:
            self.port.open()
            if ir_sensor_angles is None and beacon_height is None:
                self.port.set_receive_timeout(REGISTRATION_TIMEOUT)
            self._send(registration)
            self._parse_server_reply()
        except NetworkError as exc:
            self.port.close()
            raise LinkError(f"cannot register with simulator: {exc}") from exc
        except LinkError:
            self.port.close()
            raise

    def _send(self, text: str) -> None:
        self.port.send(text.encode("latin-1", errors="replace") + b"\0")

    def _parse_server_reply(self) -> None:
        data = self.port.receive(MESSAGE_MAX_SIZE)
        try:
            handler = parse(data, self.sim_params.n_beacons)
        except ParseError as exc:
            raise LinkError(f"registration refused: {exc}") from exc
        self.sim_params = handler.sim_params
        self.measures = Measures(self.sim_params.n_beacons)
        self.port.remote = self.port.last_sender

    def read_sensors(self) -> int:
        """Wait for the next sensor message; return its size in bytes."""
        try:
            data = self.port.receive(MESSAGE_MAX_SIZE)
        except NetworkError as exc:
            raise LinkError(f"no sensor message: {exc}") from exc
        try:
            handler = parse(data, self.sim_params.n_beacons)
        except ParseError as exc:
            if exc.parser is None:
                raise LinkError(f"unreadable sensor message: {exc}") from exc
            handler = exc.parser
        self.measures = handler.measures
        return len(data)

    def drive_motors(self, left: float, right: float) -> None:
        self._send(drive_motors_message(left, right))

    def say(self, text: str) -> None:
        self._send(say_message(text))

    def set_returning_led(self, value: bool) -> None:
        self._send(returning_led_message(value))

    def set_visiting_led(self, value: bool) -> None:
        self._send(visiting_led_message(value))

    def finish(self) -> None:
        self._send(finish_message())

    def request_ground(self) -> None:
        self._send(_single_request("Ground"))

    def request_compass(self) -> None:
        self._send(_single_request("Compass"))

    def request_beacon(self, beacon_id: int) -> None:
        self._send(_single_request(f"Beacon{beacon_id:d}"))

    def request_obstacle(self, sensor_id: int) -> None:
        self._send(_single_request(f"IRSensor{sensor_id:d}"))

    def request_sensors(self, *args: str) -> None:
        self._send(sensor_request_message(*args))

    def ir_sensor_ready(self, sensor_id: int) -> bool:
        if 0 <= sensor_id < NUM_IR_SENSORS:
            return self.measures.ir_sensor_ready[sensor_id]
        return False

    def ir_sensor(self, sensor_id: int) -> float:
        return self.measures.ir_sensor[sensor_id]

    def beacon_ready(self, beacon_id: int) -> bool:
        if 0 <= beacon_id < self.sim_params.n_beacons:
            return self.measures.beacon_ready[beacon_id]
        return False

    def beacon(self, beacon_id: int) -> BeaconMeasure:
        if not 0 <= beacon_id < self.sim_params.n_beacons:
            raise IndexError(f"no beacon {beacon_id}")
        return self.measures.beacon[beacon_id]

    def new_message(self, sender: int) -> bool:
        return self.measures.hear_message[sender - 1] != ""

    def message(self, sender: int) -> str:
        return self.measures.hear_message[sender - 1]

    def close(self) -> None:
        self.port.close()

    def __enter__(self) -> "RobLink":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()