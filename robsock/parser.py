"""Parsing of the XML messages sent by the simulator and of lab map files."""

from __future__ import annotations

import os
import re
import xml.sax
from collections.abc import Callable, Mapping
from typing import Any

from robsock.measures import N_LINE_ELEMENTS, N_MESSAGE_SLOTS, NUM_IR_SENSORS, Measures
from robsock.params import SimParams

__all__ = [
    "ParseError",
    "StructureParser",
    "parse",
    "parse_map",
    "read_map",
    "CELLROWS",
    "CELLCOLS",
    "MAP_ROWS",
    "MAP_COLS",
]

CELLROWS = 7
CELLCOLS = 14
MAP_ROWS = CELLROWS * 2 - 1
MAP_COLS = CELLCOLS * 2 - 1

_INT = re.compile(r"[+-]?\d+")
_UINT = re.compile(r"\+?\d+")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_UINT_MAX = 2**32 - 1


class ParseError(ValueError):
    """Raised when a message is malformed or a handler rejects its content.

    ``parser`` holds the handler with whatever was read before the failure.
    """

    def __init__(self, message: str, parser: "StructureParser | None" = None) -> None:
        super().__init__(message)
        self.parser = parser


def _to_int(text: str) -> int:
    text = text.strip()
    if not _INT.fullmatch(text):
        return 0
    value = int(text)
    return value if _INT_MIN <= value <= _INT_MAX else 0


def _to_uint(text: str) -> int:
    text = text.strip()
    if not _UINT.fullmatch(text):
        return 0
    value = int(text)
    return value if value <= _UINT_MAX else 0


def _to_float(text: str) -> float:
    text = text.strip()
    if "_" in text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _choice(true_word: str, false_word: str) -> Callable[[str], bool | None]:
    def convert(text: str) -> bool | None:
        if text == true_word:
            return True
        if text == false_word:
            return False
        return None

    return convert


_on_off = _choice("On", "Off")
_yes_no = _choice("Yes", "No")

_PARAMETER_FIELDS: tuple[tuple[str, str, Callable[[str], Any]], ...] = (
    ("CompassNoise", "compass_noise", _to_float),
    ("BeaconNoise", "beacon_noise", _to_float),
    ("ObstacleNoise", "obst_noise", _to_float),
    ("MotorsNoise", "motors_noise", _to_float),
    ("SimTime", "sim_time_final", _to_uint),
    ("KeyTime", "key_time", _to_uint),
    ("CycleTime", "cycle_time", _to_uint),
    ("NBeacons", "n_beacons", _to_uint),
    ("RequestsPerCycle", "n_req_per_cycle", _to_uint),
    ("ObstacleRequestable", "obst_requestable", _on_off),
    ("BeaconRequestable", "beacon_requestable", _on_off),
    ("GroundRequestable", "ground_requestable", _on_off),
    ("CompassRequestable", "compass_requestable", _on_off),
    ("CollisionRequestable", "collision_requestable", _on_off),
    ("ObstacleLatency", "obst_latency", _to_uint),
    ("BeaconLatency", "beacon_latency", _to_uint),
    ("GroundLatency", "ground_latency", _to_uint),
    ("CompassLatency", "compass_latency", _to_uint),
    ("CollisionLatency", "collision_latency", _to_uint),
    ("BeaconAperture", "beacon_aperture", _to_float),
)


def _read(target: object, attrs: Mapping[str, str], name: str, field: str,
          convert: Callable[[str], Any]) -> bool:
    """Store a converted attribute on ``target``; report whether it was read."""
    text = attrs.get(name)
    if text is None:
        return False
    value = convert(text)
    if value is None:
        return False
    setattr(target, field, value)
    return True


class StructureParser(xml.sax.handler.ContentHandler):
    """SAX handler collecting simulation parameters, measures and a lab map."""

    def __init__(self, n_beacons: int = 0) -> None:
        super().__init__()
        self.sim_params = SimParams()
        self.measures = Measures(n_beacons)
        self.map: list[list[str]] = [[" "] * MAP_COLS for _ in range(MAP_ROWS)]
        self.active_tag = ""
        self.hear_from = 0
        self._handlers: dict[str, Callable[[Mapping[str, str]], None]] = {
            "Reply": self._reply,
            "Parameters": self._parameters,
            "Measures": self._measures,
            "Sensors": self._sensors,
            "IRSensor": self._ir_sensor,
            "BeaconSensor": self._beacon_sensor,
            "GPS": self._gps,
            "LineSensor": self._line_sensor,
            "Leds": self._leds,
            "Buttons": self._buttons,
            "Score": self._score,
            "Message": self._message,
            "Row": self._row,
        }

    def startElement(self, name: str, attrs: Mapping[str, str]) -> None:
        self.active_tag = name
        handler = self._handlers.get(name)
        if handler is not None:
            handler(attrs)

    def endElement(self, name: str) -> None:
        self.active_tag = ""

    def characters(self, content: str) -> None:
        if self.active_tag == "Message" and 1 <= self.hear_from <= N_MESSAGE_SLOTS:
            self.measures.hear_message[self.hear_from - 1] += content

    def map_rows(self) -> list[str]:
        """The wall map as one string per row."""
        return ["".join(row) for row in self.map]

    def _reply(self, attrs: Mapping[str, str]) -> None:
        status = attrs.get("Status")
        if status != "Ok":
            raise ParseError(f"registration not accepted (Status={status!r})")

    def _parameters(self, attrs: Mapping[str, str]) -> None:
        for name, field, convert in _PARAMETER_FIELDS:
            _read(self.sim_params, attrs, name, field, convert)

    def _measures(self, attrs: Mapping[str, str]) -> None:
        _read(self.measures, attrs, "Time", "time", _to_uint)

    def _sensors(self, attrs: Mapping[str, str]) -> None:
        m = self.measures
        m.compass_ready = _read(m, attrs, "Compass", "compass", _to_float)
        m.collision_ready = _read(m, attrs, "Collision", "collision", _yes_no)
        m.ground_ready = _read(m, attrs, "Ground", "ground", _to_int)

    def _ir_sensor(self, attrs: Mapping[str, str]) -> None:
        id_text = attrs.get("Id")
        if id_text is None:
            raise ParseError("IRSensor without Id")
        sensor_id = _to_uint(id_text)
        if sensor_id >= NUM_IR_SENSORS:
            raise ParseError(f"IRSensor Id out of range: {sensor_id}")
        value = attrs.get("Value")
        self.measures.ir_sensor_ready[sensor_id] = value is not None
        if value is not None:
            self.measures.ir_sensor[sensor_id] = _to_float(value)

    def _beacon_sensor(self, attrs: Mapping[str, str]) -> None:
        id_text = attrs.get("Id")
        if id_text is None:
            raise ParseError("BeaconSensor without Id")
        beacon_id = _to_uint(id_text)
        if beacon_id >= len(self.measures.beacon_ready):
            return
        self.measures.beacon_ready[beacon_id] = True
        value = attrs.get("Value")
        if value is None:
            raise ParseError("BeaconSensor without Value")
        beacon = self.measures.beacon[beacon_id]
        if value == "NotVisible":
            beacon.visible = False
            beacon.direction = 0.0
        else:
            beacon.direction = _to_float(value)
            beacon.visible = True

    def _gps(self, attrs: Mapping[str, str]) -> None:
        m = self.measures
        m.gps_ready = _read(m, attrs, "X", "x", _to_float)
        _read(m, attrs, "Y", "y", _to_float)
        m.gps_dir_ready = _read(m, attrs, "Dir", "dir", _to_float)

    def _line_sensor(self, attrs: Mapping[str, str]) -> None:
        pattern = attrs.get("Value") or ""
        self.measures.line_sensor_ready = True
        self.measures.line_sensor = [
            pattern[i:i + 1] == "1" for i in range(N_LINE_ELEMENTS)
        ]

    def _leds(self, attrs: Mapping[str, str]) -> None:
        m = self.measures
        _read(m, attrs, "EndLed", "end_led", _on_off)
        _read(m, attrs, "ReturningLed", "returning_led", _on_off)
        _read(m, attrs, "VisitingLed", "visiting_led", _on_off)

    def _buttons(self, attrs: Mapping[str, str]) -> None:
        _read(self.measures, attrs, "Start", "start", _on_off)
        _read(self.measures, attrs, "Stop", "stop", _on_off)

    def _score(self, attrs: Mapping[str, str]) -> None:
        m = self.measures
        m.score_ready = _read(m, attrs, "Score", "score", _to_uint)
        m.arrival_time_ready = _read(m, attrs, "ArrivalTime", "arrival_time", _to_uint)
        m.returning_time_ready = _read(m, attrs, "ReturningTime", "returning_time", _to_uint)
        m.collisions_ready = _read(m, attrs, "Collisions", "collisions", _to_uint)

    def _message(self, attrs: Mapping[str, str]) -> None:
        _read(self, attrs, "From", "hear_from", _to_uint)

    def _row(self, attrs: Mapping[str, str]) -> None:
        pos = attrs.get("Pos")
        if pos is None:
            raise ParseError("Row without Pos")
        row = _to_int(pos)
        if not 0 <= row < MAP_ROWS:
            return
        cells = self.map[row]
        for col, char in enumerate(attrs.get("Pattern") or ""):
            if row % 2 == 0:
                # even rows hold only vertical walls
                index = (col + 1) // 3 * 2 - 1
                if char == "|" and 0 <= index < MAP_COLS:
                    cells[index] = "|"
            elif col % 3 == 0 and char == "-":
                # odd rows hold only horizontal walls
                index = col // 3 * 2
                if index < MAP_COLS:
                    cells[index] = "-"


def _until_nul(data: bytes | str) -> bytes | str:
    if isinstance(data, bytes):
        return data.split(b"\0", 1)[0]
    return data.split("\0", 1)[0]


def parse(data: bytes | str, n_beacons: int = 0) -> StructureParser:
    """Parse one message; anything after a NUL character is ignored."""
    handler = StructureParser(n_beacons)
    try:
        xml.sax.parseString(_until_nul(data), handler)
    except ParseError as exc:
        exc.parser = handler
        raise
    except xml.sax.SAXException as exc:
        raise ParseError(f"malformed message: {exc}", handler) from exc
    return handler


def parse_map(data: bytes | str) -> list[str]:
    """Parse a lab description and return its wall map, one string per row."""
    return parse(data, 1).map_rows()


def read_map(filename: str | os.PathLike[str]) -> list[str]:
    """Read a lab file and return its wall map, one string per row."""
    with open(filename, "rb") as stream:
        return parse_map(stream.read())