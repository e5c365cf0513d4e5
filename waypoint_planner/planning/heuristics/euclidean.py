# waypoint_planner/planning/heuristics/euclidean.py
import math
from waypoint_planner.types import Coordinate
from .base import Heuristic

class EuclideanHeuristic(Heuristic):
    """
    欧氏距离启发式
    对 4-连通栅格同样 Admissible，但比 Manhattan 更松，扩展节点更多。
    """
    def estimate(self, current: Coordinate, goal: Coordinate) -> float:
        return math.hypot(current[0] - goal[0], current[1] - goal[1])
