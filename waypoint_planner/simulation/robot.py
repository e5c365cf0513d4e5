from typing import List, Optional, Tuple

from waypoint_planner.map.grid_world import GridWorld
from waypoint_planner.types import INVALID_LOC, Coordinate, WaypointMessage

class SimulatedRobot:
    """
    模拟机器人：接收路点指令，一次移动一格，并回报 (x, y, 已到达路点序号)
    """
    def __init__(self, start: Coordinate, world: Optional[GridWorld] = None):
        self.world = world
        self.location: Coordinate = tuple(start)
        self.goal: Coordinate = (INVALID_LOC, INVALID_LOC)
        self.last_waypoint = INVALID_LOC
        self.trajectory: List[Coordinate] = [self.location]

    @property
    def arrived(self) -> bool:
        return self.location == self.goal

    def report(self) -> Tuple[int, int, int]:
        return self.location[0], self.location[1], self.last_waypoint

    def receive(self, msg: WaypointMessage) -> Tuple[int, int, int]:
        if msg.is_goal_broadcast:
            self.goal = (msg.x, msg.y)
            return self.report()

        # 重复发送的同一路点直接回报
        if msg.waypoint_id == self.last_waypoint:
            return self.report()

        target = (msg.x, msg.y)
        if abs(target[0] - self.location[0]) + abs(target[1] - self.location[1]) != 1:
            raise ValueError(f"Waypoint {msg.waypoint_id} {target} is not adjacent to {self.location}")
        if self.world is not None and self.world.is_blocked(self.world.index_from_coordinate(*target)):
            raise ValueError(f"Waypoint {msg.waypoint_id} {target} is blocked")

        self.location = target
        self.last_waypoint = msg.waypoint_id
        self.trajectory.append(target)
        return self.report()
