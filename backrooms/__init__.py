"""Procedural backrooms maze generation and first-person agent movement."""

from .errors import BackroomsError, InvalidConfiguration, InvalidDimensions
from .sim.grid import CellState, Grid
from .sim.coords import CoordinateMapping
from .sim.map_gen import generate
from .sim.controller import AgentController, AgentState, MovementIntent, step

__all__ = [
    "BackroomsError",
    "InvalidConfiguration",
    "InvalidDimensions",
    "CellState",
    "Grid",
    "CoordinateMapping",
    "generate",
    "AgentController",
    "AgentState",
    "MovementIntent",
    "step",
]
