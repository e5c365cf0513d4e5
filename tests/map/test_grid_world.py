# tests/map/test_grid_world.py
import sys
import os
import numpy as np
import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from waypoint_planner.map.grid_world import GridWorld
from waypoint_planner.errors import OutOfBoundsError
from waypoint_planner.types import INVALID_LOC


def test_index_coordinate_round_trip():
    world = GridWorld(7, 4)
    for y in range(world.height):
        for x in range(world.width):
            idx = world.index_from_coordinate(x, y)
            assert idx == y * 7 + x
            assert world.coordinate_from_index(idx) == (x, y)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 0), (0, 3), (INVALID_LOC, INVALID_LOC)])
def test_index_from_coordinate_out_of_bounds(x, y):
    world = GridWorld(5, 3)
    with pytest.raises(OutOfBoundsError):
        world.index_from_coordinate(x, y)


@pytest.mark.parametrize("index", [-1, 15, 100])
def test_coordinate_from_index_out_of_bounds(index):
    world = GridWorld(5, 3)
    with pytest.raises(OutOfBoundsError):
        world.coordinate_from_index(index)


def test_out_of_bounds_is_an_index_error():
    world = GridWorld(2, 2)
    with pytest.raises(IndexError):
        world.coordinate_from_index(4)


def test_neighbors_order_is_north_east_south_west():
    world = GridWorld(3, 3)
    center = world.index_from_coordinate(1, 1)
    expected = [world.index_from_coordinate(*c) for c in [(1, 0), (2, 1), (1, 2), (0, 1)]]
    assert world.neighbors(center) == expected


def test_neighbors_clipped_at_boundary():
    world = GridWorld(3, 3)
    corner = world.index_from_coordinate(0, 0)
    # N 和 W 越界，只剩 E, S
    assert world.neighbors(corner) == [world.index_from_coordinate(1, 0), world.index_from_coordinate(0, 1)]


def test_blocked_cells_never_returned_as_neighbors():
    world = GridWorld(3, 3, obstacles=[(1, 0), (0, 1)])
    center = world.index_from_coordinate(1, 1)
    assert world.neighbors(center) == [world.index_from_coordinate(2, 1), world.index_from_coordinate(1, 2)]
    assert world.is_blocked(world.index_from_coordinate(1, 0))
    assert not world.is_blocked(center)


def test_obstacles_from_array_mask():
    mask = np.zeros((2, 3), dtype=np.int8)
    mask[1, 2] = 1
    world = GridWorld(3, 2, obstacles=mask)
    assert world.is_blocked(world.index_from_coordinate(2, 1))
    assert world.free_indices() == [0, 1, 2, 3, 4]


def test_obstacle_mask_shape_mismatch():
    with pytest.raises(ValueError):
        GridWorld(3, 2, obstacles=np.zeros((3, 2)))


def test_obstacle_outside_grid_rejected():
    with pytest.raises(OutOfBoundsError):
        GridWorld(3, 3, obstacles=[(3, 0)])


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        GridWorld(0, 5)


def test_world_is_immutable():
    world = GridWorld(3, 3)
    with pytest.raises(ValueError):
        world.data[0, 0] = 1


def test_step_cost_is_uniform():
    world = GridWorld(3, 3)
    assert world.step_cost(0, 1) == 1.0
    assert world.step_cost(4, 7) == 1.0


def test_connectivity_labels():
    # 中间一堵竖墙把地图分成左右两块
    world = GridWorld(5, 3, obstacles=[(2, 0), (2, 1), (2, 2)])
    left = world.index_from_coordinate(0, 0)
    right = world.index_from_coordinate(4, 2)
    assert world.is_connected(left, world.index_from_coordinate(1, 2))
    assert not world.is_connected(left, right)
    assert not world.is_connected(left, world.index_from_coordinate(2, 1))


def test_non_integral_coordinates_rejected():
    world = GridWorld(3, 3)
    with pytest.raises(TypeError):
        world.index_from_coordinate(1.0, 0)
    with pytest.raises(TypeError):
        world.coordinate_from_index(1.0)
    # numpy 整数按普通 int 处理
    assert world.index_from_coordinate(np.int64(1), np.int64(2)) == 7
    assert type(world.index_from_coordinate(np.int64(1), np.int64(2))) is int
