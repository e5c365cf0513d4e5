# 绘图逻辑 (Matplotlib)

import os
from typing import Any, List, Optional, Sequence

import matplotlib.pyplot as plt

from waypoint_planner.map.grid_world import GridWorld
from waypoint_planner.types import Coordinate


class Visualizer:
    """
    把一次搜索的结果画在栅格地图上。
    坐标约定：imshow 使用 origin='upper'，第 y 行即栅格 y，与 N = y - 1 一致。
    """
    def __init__(self, world: GridWorld, ax=None):
        self.world = world
        if ax is None:
            self.fig, self.ax = plt.subplots(figsize=(8, 8))
        else:
            self.fig, self.ax = ax.figure, ax

    def draw_world(self):
        self.ax.imshow(self.world.data, cmap='Greys', origin='upper', vmin=0, vmax=1,
                       extent=[-0.5, self.world.width - 0.5, self.world.height - 0.5, -0.5])
        self.ax.set_xlabel("X [cell]")
        self.ax.set_ylabel("Y [cell]")
        self.ax.set_aspect('equal')

    def draw_observer(self, observer: Any):
        """画出已扩展节点 (需要 ExperimentObserver / DebugObserver)"""
        expanded = getattr(observer, 'expanded_nodes', None)
        if expanded:
            xs = [n[0] for n in expanded]
            ys = [n[1] for n in expanded]
            self.ax.scatter(xs, ys, c='orange', s=12, alpha=0.5, label='Expanded')

    def draw_path(self, path: Sequence[int]):
        if not path:
            return
        coords = [self.world.coordinate_from_index(i) for i in path]
        self.ax.plot([c[0] for c in coords], [c[1] for c in coords],
                     'b.-', linewidth=2, markersize=6, label='Path')

    def draw_endpoints(self, start: Optional[Coordinate], goal: Optional[Coordinate]):
        if start is not None:
            self.ax.plot(start[0], start[1], 'go', markersize=10, label='Start')
        if goal is not None:
            self.ax.plot(goal[0], goal[1], 'rx', markersize=10, label='Goal')

    def render(self, path: Sequence[int] = (), observer: Any = None,
               start: Optional[Coordinate] = None, goal: Optional[Coordinate] = None,
               title: str = "A* Grid Search"):
        self.draw_world()
        if observer is not None:
            self.draw_observer(observer)
        self.draw_path(path)
        self.draw_endpoints(start, goal)
        self.ax.set_title(title)
        handles, _ = self.ax.get_legend_handles_labels()
        if handles:
            self.ax.legend(loc='upper right')
        return self.fig

    def save(self, outfile: str):
        out_dir = os.path.dirname(outfile)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        self.fig.savefig(outfile)
        plt.close(self.fig)  # Ensure closure
        return outfile


def plot_trajectory(world: GridWorld, trajectory: List[Coordinate], outfile: str,
                    title: str = "Robot Trajectory") -> str:
    """画出模拟机器人实际走过的格子并保存"""
    viz = Visualizer(world)
    viz.draw_world()
    viz.ax.plot([p[0] for p in trajectory], [p[1] for p in trajectory],
                'b.-', linewidth=2, markersize=6, label='Traversed Path')
    if trajectory:
        viz.draw_endpoints(trajectory[0], trajectory[-1])
    viz.ax.set_title(title)
    viz.ax.legend(loc='upper right')
    return viz.save(outfile)
