# waypoint_planner/map/base.py
from abc import ABC, abstractmethod
import numpy as np
from typing import List, Tuple

class MapBase(ABC):
    """
    栅格地图抽象基类
    """

    @property
    @abstractmethod
    def data(self) -> np.ndarray:
        """
        返回地图数据矩阵 (height, width)，通常用于可视化或底层计算。
        约定：0 表示空闲，1 表示障碍物。
        """
        pass

    @property
    @abstractmethod
    def width(self) -> int:
        """网格宽度 (x方向数量)"""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """网格高度 (y方向数量)"""
        pass

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @abstractmethod
    def index_from_coordinate(self, x: int, y: int) -> int:
        """
        [关键接口] 栅格坐标 -> 线性索引
        index = y * width + x
        """
        pass

    @abstractmethod
    def coordinate_from_index(self, index: int) -> Tuple[int, int]:
        """
        [关键接口] 线性索引 -> 栅格坐标 (x, y)
        """
        pass

    @abstractmethod
    def neighbors(self, index: int) -> List[int]:
        """返回可通行的 4-邻域索引，顺序固定"""
        pass

    @abstractmethod
    def is_blocked(self, index: int) -> bool:
        """检查特定索引是否为障碍物"""
        pass

    @abstractmethod
    def step_cost(self, from_index: int, to_index: int) -> float:
        """相邻格子之间的移动代价"""
        pass

    @abstractmethod
    def is_inside(self, x: int, y: int) -> bool:
        """检查栅格坐标是否在地图范围内"""
        pass
