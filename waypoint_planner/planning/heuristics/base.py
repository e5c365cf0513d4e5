from abc import ABC, abstractmethod
from waypoint_planner.types import Coordinate

class Heuristic(ABC):
    @abstractmethod
    def estimate(self, current: Coordinate, goal: Coordinate) -> float:
        """统一接口：只接受当前格子坐标和目标格子坐标"""
        pass
