import pytest

from conftest import SMALL_LAYOUT

from pacman4k.maze import Maze, MazeError, TileKind
from pacman4k.motion import Direction


def test_classic_dimensions_and_counts(maze):
    assert (maze.rows, maze.cols) == (31, 28)
    assert maze.total_dots == 244
    assert maze.dots_remaining == 244
    assert maze.pacman_spawn == (23, 13)
    assert maze.door_tiles == [(12, 13), (12, 14)]
    assert maze.ghost_spawns == {
        "blinky": (14, 12), "pinky": (14, 14), "inky": (15, 12), "clyde": (15, 14),
    }
    assert maze.fruit_cell == (17, 13)


def test_out_of_bounds_queries_never_raise(maze):
    assert maze.tile_at(-1, 0) is TileKind.EMPTY
    assert maze.tile_at(0, 99) is TileKind.EMPTY
    assert not maze.is_walkable(14, -1)
    assert not maze.is_walkable(31, 5)
    assert not maze.is_tunnel(99, 99)
    assert maze.opposite_tunnel(99, 99) is None
    assert maze.consume_dot(-5, -5) is TileKind.EMPTY


def test_tunnels_pair_up(maze):
    assert maze.is_tunnel(14, 0) and maze.is_tunnel(14, 27)
    assert maze.opposite_tunnel(14, 0) == (14, 27)
    assert maze.opposite_tunnel(14, 27) == (14, 0)
    assert maze.opposite_tunnel(5, 5) is None


def test_spawn_tiles_are_inside_the_house(maze):
    for cell in maze.ghost_spawns.values():
        assert maze.is_ghost_house(*cell)
    assert maze.is_ghost_house(13, 13)
    assert maze.is_ghost_door(12, 13)
    assert not maze.is_ghost_house(11, 13)


def test_valid_directions_priority_order(maze):
    assert maze.valid_directions(5, 6) == [
        Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT]
    assert maze.valid_directions(5, 13) == [Direction.LEFT, Direction.RIGHT]


def test_door_only_for_permitted_ghosts(maze):
    assert Direction.DOWN not in maze.valid_directions(11, 13)
    assert Direction.DOWN in maze.valid_directions(11, 13, can_use_door=True)
    assert not maze.can_enter(12, 13)
    assert maze.can_enter(12, 13, can_use_door=True)


def test_consume_dot_and_reset(maze):
    assert maze.consume_dot(5, 13) is TileKind.DOT
    assert maze.tile_at(5, 13) is TileKind.EMPTY
    assert maze.consume_dot(5, 13) is TileKind.EMPTY
    assert maze.consume_dot(3, 1) is TileKind.POWER_PELLET
    assert maze.dots_remaining == 242

    maze.reset()
    assert maze.dots_remaining == 244
    assert maze.tile_at(5, 13) is TileKind.DOT


def test_small_layout_is_playable():
    small = Maze(SMALL_LAYOUT)
    assert small.total_dots == 21
    assert small.door_tiles == [(2, 4)]
    assert small.fruit_cell is None
    assert small.opposite_tunnel(5, 0) == (5, 9)


@pytest.mark.parametrize("layout, message", [
    ([], "empty"),
    (["####", "###"], "width"),
    (SMALL_LAYOUT[:1] + ["#P..X....#"] + SMALL_LAYOUT[2:], "unknown tile"),
    ([row.replace("c", "h") for row in SMALL_LAYOUT], "clyde"),
    ([row.replace("P", ".") for row in SMALL_LAYOUT], "player spawn"),
    ([row.replace("-", "#") for row in SMALL_LAYOUT], "door"),
    (SMALL_LAYOUT[:5] + ["T.........", "##########"], "pairs"),
])
def test_malformed_layouts_rejected(layout, message):
    with pytest.raises(MazeError, match=message):
        Maze(layout)
