import logging
import time
import os
from typing import Any, List, Tuple, Dict, Optional
from waypoint_planner.planning.interfaces import IPlannerObserver

class EfficientObserver(IPlannerObserver):
    """
    高效运行模式
    除了必要的流程不额外进行信息记录。
    相当于 NoOp。
    """
    def record_open_set_node(self, node: Any, f: float = 0.0, h: float = 0.0): pass
    def record_current_expansion(self, node: Any): pass
    def record_edge(self, start_node: Any, end_node: Any): pass
    def set_map_info(self, map_info: Any): pass
    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        # 仅在 ERROR 级别打印
        if level == 'ERROR':
            print(f"[ERROR] {message}")


class ExperimentObserver(IPlannerObserver):
    """
    实验模式
    记录开集、拓展节点、搜索树边等关键算法执行内容。
    这些信息主要用于算法的比较和可视化 (Replay)。
    节点统一以栅格坐标 (x, y) 存储。
    """
    def __init__(self):
        # 存储格式: List[Tuple[x, y, f, h]]
        self.open_set_history: List[Tuple[int, int, float, float]] = []
        # 存储格式: List[Tuple[x, y]]
        self.expanded_nodes: List[Tuple[int, int]] = []
        # 存储格式: List[Tuple[(x, y), (x, y)]]
        self.edges: List[Tuple[Any, Any]] = []
        # 存储格式: List[Tuple[level, message]]
        self.messages: List[Tuple[str, str]] = []
        self.map_info = None

    def record_open_set_node(self, node: Any, f: float = 0.0, h: float = 0.0):
        x, y = node[0], node[1]
        self.open_set_history.append((x, y, f, h))

    def record_current_expansion(self, node: Any):
        self.expanded_nodes.append(node)

    def record_edge(self, start_node: Any, end_node: Any):
        self.edges.append((start_node, end_node))

    def set_map_info(self, map_info: Any):
        self.map_info = map_info

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        # 实验模式不打印，只留档供事后查看
        self.messages.append((level, message))


class DebugObserver(IPlannerObserver):
    """
    Debug 模式
    用于详细分析一次实验为什么效果不好甚至失败。
    将详细日志写入文件，同时保留可视化数据以便对照。
    """
    def __init__(self, log_dir: str = "logs/planning_debug"):
        # 复用 ExperimentObserver 的存储，以便 Debug 时也能画图
        self.viz_observer = ExperimentObserver()

        self.log_dir = log_dir
        os.makedirs(self.log_dir, exist_ok=True)

        # 配置 Logger
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        self.log_file = os.path.join(self.log_dir, f"plan_debug_{timestamp}.log")

        self.logger = logging.getLogger(f"PlannerDebug_{timestamp}_{id(self)}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        # 避免添加重复 Handler
        if not self.logger.handlers:
            fh = logging.FileHandler(self.log_file, encoding='utf-8')
            fh.setLevel(logging.DEBUG)
            formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
            fh.setFormatter(formatter)
            self.logger.addHandler(fh)

        self.logger.info("=== Debug Session Started ===")

    def record_open_set_node(self, node: Any, f: float = 0.0, h: float = 0.0):
        self.viz_observer.record_open_set_node(node, f, h)

    def record_current_expansion(self, node: Any):
        self.viz_observer.record_current_expansion(node)
        self.logger.debug(f"Expanding: {node}")

    def record_edge(self, start_node: Any, end_node: Any):
        self.viz_observer.record_edge(start_node, end_node)

    def set_map_info(self, map_info: Any):
        self.viz_observer.set_map_info(map_info)
        self.logger.info(f"Map Info set: {map_info}")

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        self.viz_observer.log(message, level, payload)
        if payload:
            message = f"{message} | Payload: {payload}"

        if level == 'DEBUG':
            self.logger.debug(message)
        elif level == 'WARN':
            self.logger.warning(message)
        elif level == 'ERROR':
            self.logger.error(message)
        else:
            self.logger.info(message)

    def close(self):
        """释放文件句柄"""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    # Proxy properties for ExperimentObserver compatibility
    @property
    def expanded_nodes(self): return self.viz_observer.expanded_nodes
    @property
    def open_set_history(self): return self.viz_observer.open_set_history
    @property
    def edges(self): return self.viz_observer.edges
    @property
    def messages(self): return self.viz_observer.messages
    @property
    def map_info(self): return self.viz_observer.map_info
