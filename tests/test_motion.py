import pytest

from pacman4k.config import TILE_SIZE
from pacman4k.motion import (PRIORITY, Direction, Rect, Vec2, at_tile_center,
                             distance, distance_to_next_center, grid_to_pixel,
                             pixel_to_grid, rects_overlap, vector_to_direction)


def test_every_direction_has_a_unique_opposite():
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.NONE.opposite is Direction.NONE
    for d in (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT):
        assert d.opposite.opposite is d


def test_vector_round_trip():
    for d in Direction:
        v = d.vector
        assert vector_to_direction(v.x, v.y) is d
    assert vector_to_direction(2, 0) is Direction.NONE


def test_grid_to_pixel_is_tile_centre():
    assert grid_to_pixel(0, 0) == Vec2(TILE_SIZE / 2, TILE_SIZE / 2)
    assert grid_to_pixel(14, 27) == Vec2(27 * TILE_SIZE + 8, 14 * TILE_SIZE + 8)


def test_pixel_to_grid_floors():
    assert pixel_to_grid(0, 0) == (0, 0)
    assert pixel_to_grid(TILE_SIZE - 0.01, TILE_SIZE) == (1, 0)
    assert pixel_to_grid(-1, 5) == (0, -1)


def test_tile_centre_tolerance():
    c = grid_to_pixel(5, 5)
    assert at_tile_center(c.x, c.y)
    assert at_tile_center(c.x + 0.9, c.y - 0.9)
    assert not at_tile_center(c.x + 2, c.y)


def test_distance():
    assert distance(Vec2(0, 0), Vec2(3, 4)) == pytest.approx(5)


def test_distance_to_next_center():
    c = grid_to_pixel(5, 5)
    assert distance_to_next_center(c.x, c.y, Direction.RIGHT) == TILE_SIZE
    assert distance_to_next_center(c.x + 3, c.y, Direction.RIGHT) == pytest.approx(13)
    assert distance_to_next_center(c.x + 3, c.y, Direction.LEFT) == pytest.approx(3)
    assert distance_to_next_center(c.x, c.y - 5, Direction.DOWN) == pytest.approx(5)
    assert distance_to_next_center(c.x, c.y, Direction.NONE) == 0


def test_adjacent_tiles_do_not_overlap():
    a = Rect.around(grid_to_pixel(5, 5))
    b = Rect.around(grid_to_pixel(5, 6))
    assert not rects_overlap(a, b)
    nudged = Rect.around(grid_to_pixel(5, 6) - Vec2(1, 0))
    assert rects_overlap(a, nudged)


def test_priority_order():
    assert PRIORITY == (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT)
