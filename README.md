# robsock

A client library for robot agents in a maze-robot simulator. A robot registers
with the simulator over UDP. Each cycle it receives an XML sensor report. It
answers with motor, LED, message and sensor-request actions.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## A minimal agent

```python
from robsock.robot import init_robot, CENTER

with init_robot("explorer", 1, "localhost") as robot:
    while True:
        robot.read_sensors()
        if robot.is_obstacle_ready(CENTER) and robot.obstacle_sensor(CENTER) > 2.0:
            robot.drive_motors(-0.1, 0.1)
        else:
            robot.drive_motors(0.1, 0.1)
```

The host may carry a port as `"host:port"`. Without one, the port is 6000. The
host defaults to `"localhost"`.

## Registering

All three functions are in `robsock.robot`:

- `init_robot(name, robot_id, host)` registers a plain robot. It waits at most
  two seconds for the simulator's reply.
- `init_robot2(name, robot_id, ir_sensor_angles, host)` also sets the angles of
  the four infra-red sensors, in degrees. It raises `ValueError` unless exactly
  four angles are given.
- `init_robot_beacon(name, robot_id, height, host)` registers a robot that
  also acts as a beacon of the given height.

Each returns a `Robot`. If the socket cannot be opened, the simulator cannot be
reached, or the reply refuses the registration or cannot be read, they raise
`robsock.link.LinkError`.

## Using a `Robot`

Call `Robot.read_sensors()` once per cycle. It waits for the next report and
returns its size in bytes. If no report arrives, it raises `LinkError`. Every
other accessor reports values from the last report that was read.

Sensors:

- `is_obstacle_ready(id)` and `obstacle_sensor(id)`. The ids are `CENTER`,
  `LEFT`, `RIGHT` and `OTHER1`.
- `number_of_beacons`, `is_beacon_ready(id)` and `beacon_sensor(id)`.
  `beacon_sensor` returns a `BeaconMeasure` with `visible` and `direction`.
- `is_compass_ready` and `compass_sensor`
- `is_ground_ready` and `ground_sensor`
- `is_bumper_ready` and `bumper_sensor`
- `is_line_sensor_ready` and `line_sensor()`. `line_sensor()` returns a list of
  seven booleans.
- `is_gps_ready`, `is_gps_dir_ready`, `x`, `y` and `dir`
- `is_score_ready` and `score_sensor`
- `time`
- `new_message_from(sender)` and `message_from(sender)`. Senders are numbered
  from 1 to 10.

Buttons and LEDs: `start_button`, `stop_button`, `finished`, `returning_led`
and `visiting_led`.

Actions:

- `drive_motors(left, right)`
- `set_returning_led(value)`
- `set_visiting_led(value)`
- `finish()`
- `say(text)`
- `request_sensors("Compass", "Ground", "IRSensor0", "Beacon1", ...)`
- `request_ground_sensor()`
- `request_compass_sensor()`
- `request_beacon_sensor(id)`
- `request_obstacle_sensor(id)`

Simulation parameters, as announced by the simulator:

- Times: `cycle_time`, `final_time`, `key_time` and `requests_per_cycle`.
- Noise levels: `noise_obstacle_sensor`, `noise_beacon_sensor`,
  `noise_compass_sensor` and `noise_motors`.
- Beacon aperture: `beacon_aperture`.
- Latencies: `beacon_latency`, `ground_latency`, `ir_latency` and
  `bumper_latency`.
- Requestable sensors: `beacon_requestable`, `ground_requestable`,
  `ir_requestable` and `bumper_requestable`.

`close()` releases the socket. Leaving a `with` block does the same.

## Lower layers

These modules can be used on their own:

- `robsock.link`:
  - `RobLink` holds the connection and the latest `Measures` and `SimParams`.
  - `register_message`, `drive_motors_message`, `say_message` and the other
    `*_message` functions build the XML sent to the simulator.
- `robsock.parser`:
  - `parse(data, n_beacons)` parses one simulator message. It returns a
    `StructureParser` with `sim_params`, `measures` and `map`.
  - A refused registration or malformed XML raises `ParseError`.
  - `parse_map(data)` and `read_map(filename)` read a lab description into a
    13 × 27 grid of wall characters (`|`, `-` or space), one string per row.
- `robsock.params.SimParams` holds the simulation parameters. Its defaults are
  used until the simulator replies.
- `robsock.measures.Measures` and `BeaconMeasure` hold one cycle's readings.
- `robsock.netif`:
  - `Port` is a small UDP endpoint with `open`, `send`, `receive`,
    `set_receive_timeout` and `close`. Errors are raised as `NetworkError`.
  - `parse_host` splits `"host:port"`.

## What this package does not do

This package is only the agent side. It has no simulator, no viewer and no
command-line program. It cannot drive a robot without a simulator running
elsewhere that speaks the same XML-over-UDP protocol.