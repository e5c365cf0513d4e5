# waypoint_planner/errors.py
"""
规划核心的异常类型。
全部是调用方可恢复的本地错误，核心内部不做重试。
"""


class PlanningError(Exception):
    """所有规划错误的基类"""


class OutOfBoundsError(PlanningError, IndexError):
    """坐标/索引超出地图范围"""


class BlockedCellError(PlanningError, ValueError):
    """起点或终点落在障碍物上"""


class UnreachableError(PlanningError):
    """OpenSet 耗尽仍未到达终点"""


class OutOfRangeError(PlanningError, IndexError):
    """请求的路点序号超出已计算路径的范围"""


class InvalidStateError(PlanningError, RuntimeError):
    """在前置状态未满足时调用了操作 (例如 search 之前取路点)"""
