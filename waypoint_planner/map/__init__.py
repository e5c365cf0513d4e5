# waypoint_planner/map/__init__.py

from .base import MapBase
from .grid_world import GridWorld
from .generator import WorldGenerator

__all__ = ["MapBase", "GridWorld", "WorldGenerator"]
