# waypoint_planner/planning/planners/a_star.py
import heapq
from typing import Iterator, List, Optional, Tuple

import numpy as np

from waypoint_planner.config import GlobalConfig
from waypoint_planner.errors import (
    BlockedCellError,
    InvalidStateError,
    OutOfRangeError,
    UnreachableError,
)
from waypoint_planner.map.grid_world import GridWorld
from waypoint_planner.map.generator import WorldGenerator
from waypoint_planner.planning.heuristics import Heuristic, ManhattanHeuristic
from waypoint_planner.planning.interfaces import IPlannerObserver
from waypoint_planner.planning.planners.base import PlannerBase, PlannerState
from waypoint_planner.types import INVALID_LOC, Coordinate, SearchRecord
from waypoint_planner.visualization.observers import DebugObserver, EfficientObserver

class AStarPlanner(PlannerBase):
    """
    4-连通栅格上的 A* 规划器，并按序号逐个提供路点。

    工作流程：
    1. 绑定一个 GridWorld (未提供时按 GlobalConfig 生成默认随机地图)。
    2. 设定目标点 (外部指定或在最大连通域内伪随机抽取)。
    3. 起点已知后调用 search() 一次，路径保存在内部。
    4. 宿主层反复调用 get_next_waypoint(i) 取出第 i 个路点。

    状态机: UNCONFIGURED -> GOAL_SET -> SEARCHING -> PATH_READY / FAILED
    """

    def __init__(self,
                 world: Optional[GridWorld] = None,
                 goal: Optional[Coordinate] = None,
                 heuristic: Optional[Heuristic] = None,
                 auto_goal: bool = True,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None,
                 config: Optional[GlobalConfig] = None,
                 observer: Optional[IPlannerObserver] = None):

        self.config = config or GlobalConfig()
        if seed is None:
            seed = self.config.seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.generator = WorldGenerator(
            obstacle_density=self.config.default_obstacle_density, rng=self.rng)

        if observer is None:
            observer = DebugObserver(self.config.log_dir) if self.config.debug_mode else EfficientObserver()
        self.observer = observer

        self.world = world if world is not None else self.generator.default_world(self.config)
        self.h_fn = heuristic or ManhattanHeuristic()
        self.observer.set_map_info(self.world)

        self._state = PlannerState.UNCONFIGURED
        self._goal_index = INVALID_LOC
        self._start_index = INVALID_LOC
        self._path: List[int] = []
        self._current_target: Coordinate = (INVALID_LOC, INVALID_LOC)
        self.nodes_expanded = 0

        if goal is not None:
            self.set_goal(*goal)
        elif auto_goal:
            self._assign_goal(self.generator.sample_free_index(self.world))

    # ------------------------------------------------------------------
    # 目标点管理
    # ------------------------------------------------------------------
    def set_goal(self, x: int, y: int):
        """外部指定目标点；会丢弃已存储的路径"""
        index = self.world.index_from_coordinate(x, y)
        if self.world.is_blocked(index):
            raise BlockedCellError(f"Goal ({x}, {y}) is blocked")
        self._assign_goal(index)

    def _assign_goal(self, index: int):
        self._goal_index = index
        self._path = []
        self._current_target = (INVALID_LOC, INVALID_LOC)
        self._state = PlannerState.GOAL_SET
        self.observer.log("Goal set", payload={"goal": self.world.coordinate_from_index(index)})

    def goal_x(self) -> int:
        if self._goal_index == INVALID_LOC:
            return INVALID_LOC
        return self.world.coordinate_from_index(self._goal_index)[0]

    def goal_y(self) -> int:
        if self._goal_index == INVALID_LOC:
            return INVALID_LOC
        return self.world.coordinate_from_index(self._goal_index)[1]

    @property
    def goal_index(self) -> int:
        return self._goal_index

    @property
    def start_index(self) -> int:
        return self._start_index

    @property
    def state(self) -> PlannerState:
        return self._state

    @property
    def path(self) -> List[int]:
        return list(self._path)

    @property
    def waypoint_count(self) -> int:
        return len(self._path)

    @property
    def current_target(self) -> Coordinate:
        """最近一次 get_next_waypoint 返回的坐标"""
        return self._current_target

    # ------------------------------------------------------------------
    # 搜索
    # ------------------------------------------------------------------
    def search(self, start_index: int) -> int:
        if self._state == PlannerState.UNCONFIGURED:
            raise InvalidStateError("Goal must be set before searching")
        if self._state == PlannerState.SEARCHING:
            raise InvalidStateError("A search is already running on this planner")

        # 越界 (包括 INVALID_LOC) 会在这里抛出 OutOfBoundsError
        start_xy = self.world.coordinate_from_index(start_index)
        if self.world.is_blocked(start_index):
            raise BlockedCellError(f"Start {start_xy} is blocked")

        self._start_index = start_index
        self._path = []
        self._current_target = (INVALID_LOC, INVALID_LOC)
        self._state = PlannerState.SEARCHING
        try:
            self.observer.log("Search started", payload={
                "start": start_xy, "goal": self.world.coordinate_from_index(self._goal_index)})
            path = self._run_a_star(start_index, self._goal_index)
        except BaseException:
            # 启发式/观察者抛出异常或被中断时不能卡在 SEARCHING
            self._state = PlannerState.FAILED
            self._path = []
            raise

        if path is None:
            self._state = PlannerState.FAILED
            self.observer.log("Open set is empty, no path found.", level='WARN',
                              payload={"expanded": self.nodes_expanded})
            raise UnreachableError(
                f"No path from {start_xy} to {self.world.coordinate_from_index(self._goal_index)}")

        self._path = path
        self._state = PlannerState.PATH_READY
        self.observer.log("Path found", payload={
            "waypoints": len(path), "expanded": self.nodes_expanded})
        return len(path)

    def _run_a_star(self, start: int, goal: int) -> Optional[List[int]]:
        world = self.world
        goal_xy = world.coordinate_from_index(goal)

        # Arena: 按栅格索引存放搜索记录，生命周期仅限本次搜索
        records: List[Optional[SearchRecord]] = [None] * world.cell_count
        records[start] = SearchRecord(
            index=start, g=0.0, h=self.h_fn.estimate(world.coordinate_from_index(start), goal_xy))

        # OpenSet: (f, 插入序号, index)，插入序号保证同 f 时按发现顺序出队
        open_set: List[Tuple[float, int, int]] = []
        counter = 0
        heapq.heappush(open_set, (records[start].f, counter, start))
        self.nodes_expanded = 0

        while open_set:
            current_f, _, current_idx = heapq.heappop(open_set)
            current = records[current_idx]

            # 过期条目 (同一格子以更小 f 重新入队过)
            if current.closed or current_f > current.f:
                continue
            current.closed = True
            self.nodes_expanded += 1

            current_xy = world.coordinate_from_index(current_idx)
            self.observer.record_current_expansion(current_xy)

            # 终止条件
            if current_idx == goal:
                return self._reconstruct_path(records, goal)

            for neighbor_idx in world.neighbors(current_idx):
                neighbor = records[neighbor_idx]
                if neighbor is not None and neighbor.closed:
                    continue

                new_g = current.g + world.step_cost(current_idx, neighbor_idx)
                if neighbor is None:
                    neighbor_xy = world.coordinate_from_index(neighbor_idx)
                    neighbor = SearchRecord(index=neighbor_idx, h=self.h_fn.estimate(neighbor_xy, goal_xy))
                    records[neighbor_idx] = neighbor

                if new_g < neighbor.g:
                    neighbor.g = new_g
                    neighbor.parent = current_idx
                    counter += 1
                    heapq.heappush(open_set, (neighbor.f, counter, neighbor_idx))

                    neighbor_xy = world.coordinate_from_index(neighbor_idx)
                    self.observer.record_open_set_node(neighbor_xy, neighbor.f, neighbor.h)
                    self.observer.record_edge(current_xy, neighbor_xy)

        return None

    @staticmethod
    def _reconstruct_path(records: List[Optional[SearchRecord]], goal: int) -> List[int]:
        """沿前驱回溯到起点，再反转"""
        path = []
        current = goal
        while current != INVALID_LOC:
            path.append(current)
            current = records[current].parent
        path.reverse()
        return path

    # ------------------------------------------------------------------
    # 路点读取
    # ------------------------------------------------------------------
    def get_next_waypoint(self, sequence_index: int) -> int:
        if self._state != PlannerState.PATH_READY:
            raise InvalidStateError(f"No path available (planner state: {self._state.value})")
        if not (0 <= sequence_index < len(self._path)):
            raise OutOfRangeError(
                f"Waypoint {sequence_index} is outside [0, {len(self._path)})")

        index = self._path[sequence_index]
        self._current_target = self.world.coordinate_from_index(index)
        return index

    def waypoints(self) -> Iterator[Tuple[int, int]]:
        """依次产出 (序号, 栅格索引)"""
        for i in range(self.waypoint_count):
            yield i, self.get_next_waypoint(i)
