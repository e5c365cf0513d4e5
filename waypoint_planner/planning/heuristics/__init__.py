# waypoint_planner/planning/heuristics/__init__.py

from .base import Heuristic
from .euclidean import EuclideanHeuristic
from .zero import ZeroHeuristic
from .manhattan import ManhattanHeuristic


__all__ = [
    "Heuristic",
    "EuclideanHeuristic",
    "ZeroHeuristic",
    "ManhattanHeuristic",
]
