import sys
import os
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from waypoint_planner.map.grid_world import GridWorld
from waypoint_planner.planning.planners import AStarPlanner
from waypoint_planner.simulation import run_session
from waypoint_planner.visualization.observers import ExperimentObserver
from waypoint_planner.visualization.plotter import Visualizer, plot_trajectory


def test_render_search_result(tmp_path):
    world = GridWorld(10, 10, obstacles=[(5, y) for y in range(8)])
    observer = ExperimentObserver()
    planner = AStarPlanner(world, goal=(9, 0), observer=observer)
    planner.search(0)

    viz = Visualizer(world)
    fig = viz.render(planner.path, observer, start=(0, 0), goal=(9, 0), title="test")
    labels = viz.ax.get_legend_handles_labels()[1]
    assert {'Expanded', 'Path', 'Start', 'Goal'} <= set(labels)

    # 路径线的顶点与路径格子一一对应
    path_line = [line for line in viz.ax.lines if line.get_label() == 'Path'][0]
    assert len(path_line.get_xdata()) == planner.waypoint_count

    outfile = viz.save(str(tmp_path / "viz" / "search.png"))
    assert os.path.exists(outfile)
    assert not plt.fignum_exists(fig.number)


def test_plot_trajectory(tmp_path):
    world = GridWorld(6, 6)
    trajectory = run_session(AStarPlanner(world, goal=(5, 5)), start=(0, 0))
    outfile = plot_trajectory(world, trajectory, str(tmp_path / "trajectory.png"))
    assert os.path.exists(outfile)
