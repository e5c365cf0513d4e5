# [关键] 全局配置定义

# waypoint_planner/config.py
from dataclasses import dataclass
from typing import Optional

@dataclass
class GlobalConfig:
    # 规划器内部生成默认地图时使用
    default_width: int = 20
    default_height: int = 20
    default_obstacle_density: float = 0.15
    seed: Optional[int] = None

    # 会话驱动 (SearchSession) 的最大 tick 数
    max_session_steps: int = 10000

    debug_mode: bool = False
    log_dir: str = "logs/planning_debug"
