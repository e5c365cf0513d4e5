import sys
import os

# Ensure waypoint_planner can be imported if this config is used standalone
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from waypoint_planner.planning.heuristics import ManhattanHeuristic, EuclideanHeuristic, ZeroHeuristic

class BenchmarkConfig:
    # --- Experiment Settings ---
    DENSITIES = [0.0, 0.10, 0.20, 0.30]  # Obstacle densities to test
    NUM_TRIALS = 10                       # Number of trials per density
    RANDOM_SEED_BASE = 1000               # Base seed for reproducibility

    # --- Output Paths ---
    _BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    _PROJECT_DIR = os.path.dirname(_BASE_DIR)
    LOG_DIR = os.path.join(_PROJECT_DIR, "logs", "experiments")

    # --- Map Parameters ---
    MAP_WIDTH = 40
    MAP_HEIGHT = 40

    # --- Start & Goal (grid cells) ---
    START = (0, 0)
    GOAL = (MAP_WIDTH - 1, MAP_HEIGHT - 1)

    # Simulation Limits
    MAX_STEPS = 5000

    # --- Heuristics to compare ---
    HEURISTICS = {
        'Manhattan': ManhattanHeuristic,
        'Euclidean': EuclideanHeuristic,
        'Zero': ZeroHeuristic,
    }
