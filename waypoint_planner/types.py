# waypoint_planner/types.py
from dataclasses import dataclass
from typing import Tuple

# 无效位置哨兵值：表示 "尚未获知" 的坐标/索引，永远不会是合法的格子
INVALID_LOC = -1

Coordinate = Tuple[int, int]  # (x, y)


@dataclass
class SearchRecord:
    """
    A* 搜索记录 (算法意义上的节点，不是消息总线上的 Node)
    按栅格索引存放在 arena 中，每次 search 调用重新分配。
    """
    index: int
    g: float = float("inf")   # 起点到当前格子的实际代价
    h: float = 0.0            # 启发式估计
    parent: int = INVALID_LOC # 前驱格子索引
    closed: bool = False      # 是否已进入 ClosedSet

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class WaypointMessage:
    """
    发给机器人的运动指令
    waypoint_id / total 为 INVALID_LOC 时表示这是一条目标点广播消息。
    """
    waypoint_id: int
    total: int
    x: int
    y: int

    @property
    def is_goal_broadcast(self) -> bool:
        return self.waypoint_id == INVALID_LOC
