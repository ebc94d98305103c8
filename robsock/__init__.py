"""Client library for robot agents of a maze-robot simulator: registration, sensor reports, actions and lab maps."""

__version__ = "0.1.0"