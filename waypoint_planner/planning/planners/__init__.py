# waypoint_planner/planning/planners/__init__.py

from .base import PlannerBase, PlannerState
from .a_star import AStarPlanner


__all__ = [
    "PlannerBase",
    "PlannerState",
    "AStarPlanner",
]
