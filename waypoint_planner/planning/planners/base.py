# waypoint_planner/planning/planners/base.py
from abc import ABC, abstractmethod
from enum import Enum

class PlannerState(Enum):
    UNCONFIGURED = "unconfigured"
    GOAL_SET = "goal_set"
    SEARCHING = "searching"
    PATH_READY = "path_ready"
    FAILED = "failed"


class PlannerBase(ABC):
    """
    路径规划器的能力接口
    宿主层 (SearchSession 或消息总线适配器) 只通过这几个方法与规划器交互，
    不再通过继承节点基类的回调耦合。
    """

    @abstractmethod
    def goal_x(self) -> int:
        pass

    @abstractmethod
    def goal_y(self) -> int:
        pass

    @property
    @abstractmethod
    def waypoint_count(self) -> int:
        """已计算路径的路点数量 (包含起点和终点)"""
        pass

    @abstractmethod
    def search(self, start_index: int) -> int:
        """
        从 start_index 搜索到目标点
        :return: 路点数量
        """
        pass

    @abstractmethod
    def get_next_waypoint(self, sequence_index: int) -> int:
        """
        :param sequence_index: 路点序号 (0 为起点)
        :return: 该路点的栅格索引
        """
        pass
