# waypoint_planner/simulation/session.py
from typing import List, Optional

from waypoint_planner.config import GlobalConfig
from waypoint_planner.planning.interfaces import IPlannerObserver
from waypoint_planner.planning.planners.base import PlannerBase
from waypoint_planner.types import INVALID_LOC, Coordinate, WaypointMessage
from waypoint_planner.simulation.robot import SimulatedRobot
from waypoint_planner.visualization.observers import EfficientObserver

class SearchSession:
    """
    规划器一侧的宿主协议 (不依赖消息总线)。

    每次 step() 相当于节点 ok 状态的一次周期回调：
    1. 起点未知：广播目标点，等待机器人上报位置
    2. 起点已知、尚未搜索：调用一次 search()
    3. 已有路径：在机器人确认第 i-1 个路点后发送第 i 个路点

    终点作为最后一个独立路点下发 (序号 count-1)，机器人确认后会话结束。
    起点 (序号 0) 不下发。
    """

    def __init__(self, planner: PlannerBase, observer: Optional[IPlannerObserver] = None):
        self.planner = planner
        self.observer = observer or getattr(planner, 'observer', None) or EfficientObserver()

        self.robot_location: Coordinate = (INVALID_LOC, INVALID_LOC)
        self.start: Coordinate = (INVALID_LOC, INVALID_LOC)
        self.acknowledged = INVALID_LOC
        self.num_waypoints = INVALID_LOC
        self.sent: List[WaypointMessage] = []
        self._searched = False

    @property
    def start_known(self) -> bool:
        return INVALID_LOC not in self.start

    @property
    def is_complete(self) -> bool:
        return self._searched and self.acknowledged == self.num_waypoints - 1

    def goal_message(self) -> WaypointMessage:
        return WaypointMessage(waypoint_id=INVALID_LOC, total=INVALID_LOC,
                               x=self.planner.goal_x(), y=self.planner.goal_y())

    def report_robot_location(self, x: int, y: int, waypoint_id: int = INVALID_LOC):
        """机器人上报当前位置以及最近到达的路点序号"""
        if x == INVALID_LOC or y == INVALID_LOC:
            return

        self.robot_location = (x, y)
        if not self.start_known:
            self.start = (x, y)
            self.observer.log("Robot start location received", payload={"start": self.start})
            return

        # 迟到或重复的确认不能让计数回退
        if waypoint_id != INVALID_LOC and waypoint_id > self.acknowledged:
            self.acknowledged = waypoint_id
            self.observer.log(f"Robot reached waypoint {waypoint_id}", level='DEBUG')

    def step(self) -> Optional[WaypointMessage]:
        if not self.start_known:
            return self.goal_message()

        if not self._searched:
            self._run_search()

        if self.is_complete:
            return None

        next_id = self.acknowledged + 1
        index = self.planner.get_next_waypoint(next_id)
        x, y = self.planner.world.coordinate_from_index(index)
        msg = WaypointMessage(waypoint_id=next_id, total=self.num_waypoints, x=x, y=y)
        self.sent.append(msg)
        return msg

    def _run_search(self):
        start_index = self.planner.world.index_from_coordinate(*self.start)
        self.observer.log("Begin searching for optimal path", payload={"start": self.start})
        # UnreachableError 直接抛给调用方，由宿主决定如何处理
        self.num_waypoints = self.planner.search(start_index)
        self.acknowledged = 0
        self._searched = True


def run_session(planner: PlannerBase, start: Coordinate, max_steps: Optional[int] = None) -> List[Coordinate]:
    """
    驱动规划会话与模拟机器人直到机器人到达终点
    :return: 机器人实际经过的栅格坐标序列
    """
    if max_steps is None:
        config = getattr(planner, 'config', None) or GlobalConfig()
        max_steps = config.max_session_steps

    session = SearchSession(planner)
    robot = SimulatedRobot(start, world=getattr(planner, 'world', None))

    for _ in range(max_steps):
        msg = session.step()
        if session.is_complete:
            session.observer.log(
                f"Robot arrived at goal after {session.acknowledged} waypoints")
            return robot.trajectory
        if msg is not None:
            session.report_robot_location(*robot.receive(msg))

    raise RuntimeError(f"Session did not finish within {max_steps} steps")
