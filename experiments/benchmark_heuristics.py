import sys
import os
import time
import numpy as np
import pandas as pd

# --- 路径设置 ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from waypoint_planner.errors import UnreachableError
from waypoint_planner.map.generator import WorldGenerator
from waypoint_planner.planning.planners import AStarPlanner
from experiments.benchmark_config import BenchmarkConfig as cfg

def run_benchmark():
    """
    在同一批随机地图上比较不同启发式的扩展节点数与耗时。
    所有启发式都是 Admissible 的，因此路径长度应完全一致。
    """
    results = []

    print(f"{'Density':<10} | {'Heuristic':<10} | {'Success%':<10} | {'Time(ms)':<10} | {'Nodes':<10} | {'Len':<10}")
    print("-" * 75)

    for density in cfg.DENSITIES:
        stats = {name: {'success': 0, 'time': [], 'nodes': [], 'length': []} for name in cfg.HEURISTICS}

        for i in range(cfg.NUM_TRIALS):
            seed = cfg.RANDOM_SEED_BASE + i + int(density * 1000)
            generator = WorldGenerator(obstacle_density=density, seed=seed)
            world = generator.generate(cfg.MAP_WIDTH, cfg.MAP_HEIGHT, keep_free=[cfg.START, cfg.GOAL])
            start_idx = world.index_from_coordinate(*cfg.START)

            for name, heuristic_cls in cfg.HEURISTICS.items():
                planner = AStarPlanner(world, goal=cfg.GOAL, heuristic=heuristic_cls())

                t0 = time.perf_counter()
                try:
                    count = planner.search(start_idx)
                except UnreachableError:
                    continue
                t1 = time.perf_counter()

                stats[name]['success'] += 1
                stats[name]['time'].append((t1 - t0) * 1000)
                stats[name]['nodes'].append(planner.nodes_expanded)
                stats[name]['length'].append(count)

        for name in cfg.HEURISTICS:
            succ_rate = (stats[name]['success'] / cfg.NUM_TRIALS) * 100
            avg_time = np.mean(stats[name]['time']) if stats[name]['time'] else 0
            avg_nodes = np.mean(stats[name]['nodes']) if stats[name]['nodes'] else 0
            avg_len = np.mean(stats[name]['length']) if stats[name]['length'] else 0

            print(f"{density:<10.2f} | {name:<10} | {succ_rate:<10.1f} | {avg_time:<10.2f} | {avg_nodes:<10.1f} | {avg_len:<10.2f}")

            results.append({
                'Density': density,
                'Heuristic': name,
                'SuccessRate': succ_rate,
                'AvgTime_ms': avg_time,
                'AvgNodes': avg_nodes,
                'AvgWaypoints': avg_len,
            })

    df = pd.DataFrame(results)
    os.makedirs(cfg.LOG_DIR, exist_ok=True)
    csv_path = os.path.join(cfg.LOG_DIR, "heuristic_benchmark.csv")
    df.to_csv(csv_path, index=False)
    print(f"\nResults saved to: {csv_path}")
    return df

if __name__ == "__main__":
    run_benchmark()
