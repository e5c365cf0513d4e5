# waypoint_planner/map/grid_world.py
import operator
import numpy as np
from typing import Iterable, List, Optional, Tuple, Union
from scipy import ndimage

from .base import MapBase
from waypoint_planner.errors import OutOfBoundsError

ObstacleSpec = Union[np.ndarray, Iterable[Tuple[int, int]]]

# 邻居扩展顺序固定为 N, E, S, W，保证搜索时的平局打破可复现
# y 轴向下增长，N 即 y - 1
NEIGHBOR_OFFSETS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class GridWorld(MapBase):
    """
    固定尺寸的二维占据栅格。
    构造后不可修改 (底层数组被设置为只读)，所有查询都是纯函数。
    """

    def __init__(self, width: int, height: int, obstacles: Optional[ObstacleSpec] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")

        self._width = int(width)
        self._height = int(height)
        self._grid = np.zeros((self._height, self._width), dtype=np.int8)  # 0 空闲, 1 障碍

        if obstacles is not None:
            self._load_obstacles(obstacles)

        self._grid.setflags(write=False)
        self._labels = None  # 连通域标记，懒加载

    def _load_obstacles(self, obstacles: ObstacleSpec):
        if isinstance(obstacles, np.ndarray):
            if obstacles.shape != self._grid.shape:
                raise ValueError(
                    f"Obstacle mask shape {obstacles.shape} does not match grid "
                    f"({self._height}, {self._width})")
            self._grid[obstacles != 0] = 1
            return

        for x, y in obstacles:
            if not self.is_inside(x, y):
                raise OutOfBoundsError(f"Obstacle ({x}, {y}) is outside the {self._width}x{self._height} grid")
            self._grid[y, x] = 1

    @property
    def data(self) -> np.ndarray:
        return self._grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def is_inside(self, x: int, y: int) -> bool:
        return (0 <= x < self._width) and (0 <= y < self._height)

    def _check_index(self, index: int) -> int:
        # 非整数 (如 1.0) 直接抛 TypeError
        index = operator.index(index)
        if not (0 <= index < self.cell_count):
            raise OutOfBoundsError(f"Index {index} is outside [0, {self.cell_count})")
        return index

    def index_from_coordinate(self, x: int, y: int) -> int:
        x, y = operator.index(x), operator.index(y)
        if not self.is_inside(x, y):
            raise OutOfBoundsError(f"Coordinate ({x}, {y}) is outside the {self._width}x{self._height} grid")
        return y * self._width + x

    def coordinate_from_index(self, index: int) -> Tuple[int, int]:
        index = self._check_index(index)
        y, x = divmod(index, self._width)
        return x, y

    def is_blocked(self, index: int) -> bool:
        x, y = self.coordinate_from_index(index)
        return bool(self._grid[y, x] == 1)

    def step_cost(self, from_index: int, to_index: int) -> float:
        # 均匀代价；保留接口以便将来支持加权地形
        return 1.0

    def neighbors(self, index: int) -> List[int]:
        x, y = self.coordinate_from_index(index)
        result = []
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.is_inside(nx, ny) and self._grid[ny, nx] == 0:
                result.append(ny * self._width + nx)
        return result

    def free_indices(self) -> List[int]:
        """按索引升序返回所有空闲格子"""
        return [int(i) for i in np.flatnonzero(self._grid.ravel() == 0)]

    def component_labels(self) -> np.ndarray:
        """
        4-连通空闲区域标记 (scipy.ndimage.label)。
        0 表示障碍物，其余正整数为连通域编号。
        """
        if self._labels is None:
            structure = ndimage.generate_binary_structure(2, 1)
            labels, _ = ndimage.label(self._grid == 0, structure=structure)
            labels.setflags(write=False)
            self._labels = labels
        return self._labels

    def is_connected(self, a: int, b: int) -> bool:
        """两个格子是否位于同一个空闲连通域内"""
        ax, ay = self.coordinate_from_index(a)
        bx, by = self.coordinate_from_index(b)
        labels = self.component_labels()
        return labels[ay, ax] != 0 and labels[ay, ax] == labels[by, bx]

    def __repr__(self) -> str:
        return f"GridWorld({self._width}x{self._height}, blocked={int(self._grid.sum())})"
