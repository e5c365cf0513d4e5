# waypoint_planner/planning/heuristics/manhattan.py
from waypoint_planner.types import Coordinate
from .base import Heuristic

class ManhattanHeuristic(Heuristic):
    """
    曼哈顿距离 (L1).
    Cost = |dx| + |dy|
    在 4-连通、单位代价的栅格上，它恰好等于无障碍时的真实步数，
    因此既 Admissible 又 Consistent，A* 返回的路径一定最优。
    """
    def estimate(self, current: Coordinate, goal: Coordinate) -> float:
        return float(abs(current[0] - goal[0]) + abs(current[1] - goal[1]))
