import os
import sys
import time
import argparse

import matplotlib
matplotlib.use("Agg")

# --- Path Setup ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from waypoint_planner.config import GlobalConfig
from waypoint_planner.errors import UnreachableError
from waypoint_planner.map.generator import WorldGenerator
from waypoint_planner.planning.planners import AStarPlanner
from waypoint_planner.simulation import run_session
from waypoint_planner.visualization.observers import DebugObserver, ExperimentObserver
from waypoint_planner.visualization.plotter import Visualizer, plot_trajectory

def run_experiment(mode="session", width=20, height=20, density=0.15, seed=42, debug=False):
    print(f"=== Running Experiment (Mode={mode}, Size={width}x{height}, Density={density}, Seed={seed}) ===")

    config = GlobalConfig(default_width=width, default_height=height,
                          default_obstacle_density=density, seed=seed, debug_mode=debug)
    observer = DebugObserver(log_dir=config.log_dir) if debug else ExperimentObserver()

    # 规划器自己生成地图和目标点；起点取目标所在连通域内的随机格子
    planner = AStarPlanner(config=config, observer=observer)
    world = planner.world
    start_idx = WorldGenerator(seed=seed + 1).sample_free_index(world, connected_to=planner.goal_index)
    start = world.coordinate_from_index(start_idx)
    goal = (planner.goal_x(), planner.goal_y())
    print(f"World: {world!r}, Start: {start}, Goal: {goal}")

    if mode == "static":
        run_static_mode(planner, start_idx, observer, start, goal, seed)
    elif mode == "session":
        run_session_mode(planner, start, config, seed)
    else:
        raise ValueError(f"Unknown mode: {mode}")

def run_static_mode(planner, start_idx, observer, start, goal, seed):
    print("--- Static Search Mode ---")
    t0 = time.perf_counter()
    try:
        count = planner.search(start_idx)
        success = True
    except UnreachableError as e:
        print(f"Search failed: {e}")
        count, success = 0, False
    t1 = time.perf_counter()

    print(f"Search Finished. Success: {success}, Waypoints: {count}, "
          f"Expanded: {planner.nodes_expanded}, Time: {(t1 - t0) * 1000:.2f} ms")

    viz = Visualizer(planner.world)
    viz.render(planner.path, observer, start, goal,
               title=f"A* | Seed={seed} | {'SUCCESS' if success else 'FAIL'}")
    outfile = viz.save(f"logs/planning_debug/static_viz_{seed}.png")
    print(f"Visualization saved to: {outfile}")

def run_session_mode(planner, start, config, seed):
    print("--- Waypoint Session Mode ---")
    t0 = time.time()
    trajectory = run_session(planner, start, max_steps=config.max_session_steps)
    t1 = time.time()

    print(f"Robot arrived at goal after {len(trajectory) - 1} waypoints ({t1 - t0:.3f}s)")
    outfile = plot_trajectory(planner.world, trajectory, f"logs/session/session_viz_{seed}.png",
                              title=f"Waypoint Session | Seed={seed}")
    print(f"Visualization saved to: {outfile}")

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", type=str, default="session", choices=["session", "static"], help="Experiment mode")
    parser.add_argument("--width", type=int, default=20, help="Grid width")
    parser.add_argument("--height", type=int, default=20, help="Grid height")
    parser.add_argument("--density", type=float, default=0.15, help="Obstacle density")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--debug", action="store_true", help="Write a debug log")
    args = parser.parse_args()

    run_experiment(args.mode, args.width, args.height, args.density, args.seed, args.debug)
