import pytest

from robsock.measures import (
    N_LINE_ELEMENTS,
    NUM_IR_SENSORS,
    BeaconMeasure,
    Measures,
)


def test_beacon_measure_defaults():
    measure = BeaconMeasure()
    assert measure.visible is False
    assert measure.direction == 0.0


@pytest.mark.parametrize("n_beacons", [0, 1, 3])
def test_beacon_lists_sized_by_count(n_beacons):
    measures = Measures(n_beacons)
    assert len(measures.beacon_ready) == n_beacons
    assert len(measures.beacon) == n_beacons
    assert measures.n_beacons == n_beacons
    assert not any(measures.beacon_ready)
    assert all(b == BeaconMeasure() for b in measures.beacon)


def test_beacon_entries_are_independent():
    measures = Measures(2)
    measures.beacon[0].visible = True
    measures.beacon[0].direction = 45.0
    assert measures.beacon[1] == BeaconMeasure()


def test_ir_sensors_initialised():
    measures = Measures(0)
    assert measures.ir_sensor == [0.0] * NUM_IR_SENSORS
    assert measures.ir_sensor_ready == [False] * NUM_IR_SENSORS


def test_line_sensor_initialised():
    measures = Measures(0)
    assert measures.line_sensor == [False] * N_LINE_ELEMENTS
    assert measures.line_sensor_ready is False


def test_ground_starts_outside_targets():
    assert Measures(1).ground == -1


def test_ready_flags_start_false():
    measures = Measures(1)
    flags = [
        measures.compass_ready,
        measures.ground_ready,
        measures.collision_ready,
        measures.gps_ready,
        measures.gps_dir_ready,
        measures.score_ready,
        measures.arrival_time_ready,
        measures.returning_time_ready,
        measures.collisions_ready,
    ]
    assert flags == [False] * len(flags)


def test_counters_start_at_zero():
    measures = Measures(0)
    assert (measures.time, measures.score, measures.arrival_time) == (0, 0, 0)
    assert (measures.returning_time, measures.collisions) == (0, 0)


def test_message_slots_empty():
    measures = Measures(0)
    assert measures.hear_message == [""] * len(measures.hear_message)
    assert len(measures.hear_message) == 10


def test_instances_do_not_share_lists():
    first = Measures(1)
    second = Measures(1)
    first.ir_sensor[0] = 5.0
    first.hear_message[0] = "hello"
    assert second.ir_sensor[0] == 0.0
    assert second.hear_message[0] == ""


def test_negative_beacon_count_rejected():
    with pytest.raises(ValueError):
        Measures(-1)