"""
Orrery: Solar-System Time Integration and Orbital Positions

A Python package that animates a solar-system view: it advances simulated
time, places every body from Keplerian elements with linear time terms and
derives rings, cloud layers, visual radii and camera zoom limits.
"""

# Core classes
from .core import Orrery
from .orbital_elements import OrbitalElements, OrbitalElements as OE
from .catalog import Body, BodyParams, RingParams
from .registry import BodyRegistry, BodyState
from .clock import SimulatedClock, BurstSpeed, TimeIntegrator
from .solver import PositionSolver, orbital_position, absolute_position
from .scale import ScaleController, ScaleState, RingRadii
from .geometry import DerivedGeometryUpdater
from .view import Camera, CameraController, VisualEntity
from .ephemeris import Ephemeris

# Configuration
from .config import config, temp_config

# Built-in bodies
from .catalog import (SUN, MERCURY, VENUS, EARTH, MARS, JUPITER, SATURN,
                      URANUS, NEPTUNE, PLUTO, MOON, SOLAR_SYSTEM)

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from orrery import *"
__all__ = [
    # Classes
    "Orrery",
    "OrbitalElements",
    "Body",
    "BodyParams",
    "RingParams",
    "BodyRegistry",
    "BodyState",
    "SimulatedClock",
    "BurstSpeed",
    "TimeIntegrator",
    "PositionSolver",
    "ScaleController",
    "ScaleState",
    "RingRadii",
    "DerivedGeometryUpdater",
    "Camera",
    "CameraController",
    "VisualEntity",
    "Ephemeris",
    # Functions
    "orbital_position",
    "absolute_position",
    # Abbreviations
    "OE",
    # Configuration
    "config",
    "temp_config",
    # Constants
    "SUN",
    "MERCURY",
    "VENUS",
    "EARTH",
    "MARS",
    "JUPITER",
    "SATURN",
    "URANUS",
    "NEPTUNE",
    "PLUTO",
    "MOON",
    "SOLAR_SYSTEM",
]
