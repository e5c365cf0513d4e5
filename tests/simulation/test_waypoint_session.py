# tests/simulation/test_waypoint_session.py
import sys
import os
import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from waypoint_planner.config import GlobalConfig
from waypoint_planner.errors import UnreachableError
from waypoint_planner.map.generator import WorldGenerator
from waypoint_planner.map.grid_world import GridWorld
from waypoint_planner.planning.planners import AStarPlanner
from waypoint_planner.simulation import SearchSession, SimulatedRobot, run_session
from waypoint_planner.types import INVALID_LOC, WaypointMessage


def test_goal_broadcast_until_start_known():
    planner = AStarPlanner(GridWorld(5, 5), goal=(4, 4))
    session = SearchSession(planner)

    for _ in range(3):
        msg = session.step()
        assert msg.is_goal_broadcast
        assert (msg.x, msg.y) == (4, 4)

    # 哨兵值视为 "尚未获知"
    session.report_robot_location(INVALID_LOC, INVALID_LOC)
    assert not session.start_known
    assert session.step().is_goal_broadcast


def test_waypoints_sent_after_acknowledgement():
    world = GridWorld(5, 5)
    planner = AStarPlanner(world, goal=(4, 4))
    session = SearchSession(planner)
    session.report_robot_location(0, 0)

    first = session.step()
    assert first.waypoint_id == 1
    assert first.total == 9
    assert session.num_waypoints == 9

    # 未确认前重复发送同一个路点
    assert session.step() == first

    session.report_robot_location(first.x, first.y, first.waypoint_id)
    assert session.step().waypoint_id == 2


def test_goal_delivered_as_last_waypoint():
    world = GridWorld(5, 5)
    planner = AStarPlanner(world, goal=(4, 4))
    trajectory = run_session(planner, start=(0, 0))

    assert trajectory[0] == (0, 0)
    assert trajectory[-1] == (4, 4)
    assert len(trajectory) == 9
    assert trajectory == [world.coordinate_from_index(i) for i in planner.path]


def test_session_completes_after_final_ack():
    planner = AStarPlanner(GridWorld(3, 1), goal=(2, 0))
    session = SearchSession(planner)
    robot = SimulatedRobot((0, 0))

    session.report_robot_location(*robot.receive(session.step()))
    assert robot.goal == (2, 0)

    ids = []
    while not session.is_complete:
        msg = session.step()
        if msg is None:
            break
        ids.append(msg.waypoint_id)
        session.report_robot_location(*robot.receive(msg))

    assert session.is_complete
    assert robot.arrived
    assert ids == [1, 2]
    assert session.step() is None


def test_start_equals_goal_session():
    planner = AStarPlanner(GridWorld(3, 3), goal=(1, 1))
    session = SearchSession(planner)
    session.report_robot_location(1, 1)
    assert session.step() is None
    assert session.is_complete
    assert run_session(AStarPlanner(GridWorld(3, 3), goal=(1, 1)), start=(1, 1)) == [(1, 1)]


def test_unreachable_propagates_to_host():
    world = GridWorld(3, 3, obstacles=[(1, 0), (1, 1), (1, 2)])
    planner = AStarPlanner(world, goal=(2, 2))
    with pytest.raises(UnreachableError):
        run_session(planner, start=(0, 0))


def test_session_step_limit():
    planner = AStarPlanner(GridWorld(10, 10), goal=(9, 9))
    with pytest.raises(RuntimeError):
        run_session(planner, start=(0, 0), max_steps=5)


def test_random_world_session():
    generator = WorldGenerator(obstacle_density=0.2, seed=21)
    world = generator.generate(20, 20)
    planner = AStarPlanner(world, seed=4)
    start = world.coordinate_from_index(generator.sample_free_index(world, connected_to=planner.goal_index))

    trajectory = run_session(planner, start=start)
    assert trajectory[-1] == (planner.goal_x(), planner.goal_y())
    for (x, y) in trajectory:
        assert not world.is_blocked(world.index_from_coordinate(x, y))


def test_robot_rejects_jump():
    robot = SimulatedRobot((0, 0))
    with pytest.raises(ValueError):
        robot.receive(WaypointMessage(waypoint_id=1, total=5, x=2, y=0))


def test_robot_rejects_blocked_cell():
    world = GridWorld(3, 3, obstacles=[(1, 0)])
    robot = SimulatedRobot((0, 0), world=world)
    with pytest.raises(ValueError):
        robot.receive(WaypointMessage(waypoint_id=1, total=5, x=1, y=0))


def test_robot_ignores_duplicate_waypoint():
    robot = SimulatedRobot((0, 0))
    msg = WaypointMessage(waypoint_id=1, total=3, x=0, y=1)
    assert robot.receive(msg) == (0, 1, 1)
    assert robot.receive(msg) == (0, 1, 1)
    assert robot.trajectory == [(0, 0), (0, 1)]


def test_stale_acknowledgement_does_not_rewind():
    planner = AStarPlanner(GridWorld(5, 5), goal=(4, 4))
    session = SearchSession(planner)
    session.report_robot_location(0, 0)

    session.step()
    session.report_robot_location(1, 0, 1)
    session.step()
    session.report_robot_location(2, 0, 2)
    # 迟到的第 1 个路点确认
    session.report_robot_location(1, 0, 1)
    assert session.acknowledged == 2
    third = session.step()
    assert third.waypoint_id == 3


def test_session_step_limit_from_config():
    cfg = GlobalConfig(max_session_steps=5)
    planner = AStarPlanner(GridWorld(10, 10), goal=(9, 9), config=cfg)
    with pytest.raises(RuntimeError, match="within 5 steps"):
        run_session(planner, start=(0, 0))
    # 默认配置足够完成同样的会话
    trajectory = run_session(AStarPlanner(GridWorld(10, 10), goal=(9, 9)), start=(0, 0))
    assert trajectory[-1] == (9, 9)
