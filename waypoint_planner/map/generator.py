# waypoint_planner/map/generator.py
import numpy as np
from typing import Iterable, Optional, Tuple

from waypoint_planner.config import GlobalConfig
from waypoint_planner.map.grid_world import GridWorld

class WorldGenerator:
    """
    随机地图生成器
    所有随机性都来自一个可注入的 numpy Generator，测试时可固定 seed。
    """

    def __init__(
        self,
        obstacle_density: float = 0.1,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ):
        if not 0.0 <= obstacle_density < 1.0:
            raise ValueError(f"obstacle_density must be in [0, 1), got {obstacle_density}")
        self.density = obstacle_density
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @classmethod
    def from_config(cls, config: GlobalConfig, rng: Optional[np.random.Generator] = None) -> "WorldGenerator":
        return cls(obstacle_density=config.default_obstacle_density, seed=config.seed, rng=rng)

    def generate(self, width: int, height: int,
                 keep_free: Iterable[Tuple[int, int]] = ()) -> GridWorld:
        """
        生成随机障碍底图
        :param keep_free: 强制保持空闲的格子 (通常是起点/终点)
        """
        mask = self.rng.random((height, width)) < self.density
        for x, y in keep_free:
            if 0 <= x < width and 0 <= y < height:
                mask[y, x] = False
        return GridWorld(width, height, obstacles=mask)

    def default_world(self, config: Optional[GlobalConfig] = None) -> GridWorld:
        cfg = config or GlobalConfig()
        return self.generate(cfg.default_width, cfg.default_height)

    def sample_free_index(self, world: GridWorld, connected_to: Optional[int] = None) -> int:
        """
        伪随机抽取一个空闲格子。
        - 指定 connected_to 时只在该格子所在连通域内抽取
        - 否则在最大的连通域内抽取，保证随后给出的起点大概率可达
        """
        grid_labels = world.component_labels()
        labels = grid_labels.ravel()
        if not np.any(labels):
            raise ValueError(f"{world!r} has no free cells")

        if connected_to is not None:
            # 越界 (包括 INVALID_LOC) 抛出 OutOfBoundsError，不能让负索引回绕
            cx, cy = world.coordinate_from_index(connected_to)
            target = grid_labels[cy, cx]
            if target == 0:
                raise ValueError(f"Cell {connected_to} is blocked")
        else:
            counts = np.bincount(labels)
            counts[0] = 0  # 障碍物不算
            target = int(np.argmax(counts))

        candidates = np.flatnonzero(labels == target)
        return int(self.rng.choice(candidates))
