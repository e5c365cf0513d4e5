# waypoint_planner/simulation/__init__.py

from .robot import SimulatedRobot
from .session import SearchSession, run_session

__all__ = ["SimulatedRobot", "SearchSession", "run_session"]
