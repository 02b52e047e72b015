from conftest import put

from pacman4k.config import DEATH_FRAMES, DOT_SCORE, POWER_PELLET_SCORE
from pacman4k.game import GameState
from pacman4k.maze import TileKind
from pacman4k.modes import SCATTER
from pacman4k.motion import Direction, grid_to_pixel


def test_queued_turn_waits_for_an_opening(playing):
    pacman = playing.pacman
    put(pacman, 5, 13, Direction.RIGHT)
    pacman.set_direction(Direction.UP)
    for _ in range(100):
        pacman.update(playing, 16)
        if pacman.direction is Direction.UP:
            break
    assert pacman.direction is Direction.UP
    assert pacman.col == 15
    assert pacman.next_direction is Direction.UP


def test_blocked_direction_halts_on_centre(playing):
    pacman = playing.pacman
    put(pacman, 5, 25, Direction.RIGHT)
    for _ in range(40):
        pacman.update(playing, 16)
    assert pacman.pos == grid_to_pixel(5, 26)
    assert pacman.direction is Direction.RIGHT

    pacman.set_direction(Direction.DOWN)
    pacman.update(playing, 16)
    assert pacman.direction is Direction.DOWN
    assert pacman.y > grid_to_pixel(5, 26).y


def test_none_is_not_a_queued_direction(playing):
    pacman = playing.pacman
    pacman.set_direction(Direction.LEFT)
    pacman.set_direction(Direction.NONE)
    assert pacman.next_direction is Direction.LEFT


def test_eats_dot_at_centre(playing, audio):
    pacman = playing.pacman
    put(pacman, 5, 13, Direction.LEFT)
    pacman.update(playing, 16)
    assert pacman.score == DOT_SCORE
    assert pacman.dots_eaten == 1
    assert playing.maze.tile_at(5, 13) is TileKind.EMPTY
    assert audio.events == ["munch"]


def test_power_pellet_frightens_ghosts(playing, audio):
    pacman = playing.pacman
    ghost = playing.ghosts[0]
    put(ghost, 29, 13, Direction.LEFT)
    ghost.mode = SCATTER

    pacman.ghosts_eaten = 2
    put(pacman, 3, 1, Direction.DOWN)
    pacman.update(playing, 16)

    assert pacman.score == POWER_PELLET_SCORE
    assert pacman.dots_eaten == 1
    assert pacman.power_mode
    assert pacman.power_duration == playing.config.fright_duration_ms
    assert pacman.ghosts_eaten == 0
    assert ghost.frightened
    assert not playing.ghosts[1].frightened
    assert "power" in audio.events


def test_power_mode_and_fright_end_on_the_same_tick(playing):
    pacman = playing.pacman
    ghost = playing.ghosts[0]
    put(ghost, 29, 13, Direction.LEFT, offset=2)
    ghost.mode = SCATTER
    put(pacman, 5, 26, Direction.RIGHT)

    pacman.activate_power_mode(6000)
    ghost.enter_frightened(6000)
    pacman.ghosts_eaten = 2
    for _ in range(59):
        pacman.update(playing, 100)
        ghost.update(100, pacman, playing.ghosts, SCATTER, 0, playing.config)
    assert pacman.power_mode and ghost.frightened
    assert pacman.ghosts_eaten == 2

    pacman.update(playing, 100)
    ghost.update(100, pacman, playing.ghosts, SCATTER, 0, playing.config)
    assert not pacman.power_mode and not ghost.frightened
    assert pacman.ghosts_eaten == 0


def test_runs_through_tunnel(playing):
    pacman = playing.pacman
    put(pacman, 14, 1, Direction.LEFT)
    for _ in range(100):
        pacman.update(playing, 16)
        if pacman.col > 20:
            break
    assert pacman.col in (26, 27)
    assert pacman.direction is Direction.LEFT


def test_death_sequence_then_new_life(session):
    pacman = session.pacman
    put(pacman, 5, 13, Direction.LEFT)
    session.state = GameState.DYING
    pacman.die()
    for _ in range(DEATH_FRAMES - 1):
        session.update(100)
    assert pacman.dying
    assert pacman.lives == 3

    session.update(100)
    assert not pacman.dying
    assert pacman.lives == 2
    assert session.state is GameState.READY
    assert pacman.cell == (23, 13)


def test_resets(playing):
    pacman = playing.pacman
    put(pacman, 5, 13, Direction.LEFT)
    pacman.update(playing, 16)
    pacman.activate_power_mode(6000)

    pacman.reset()
    assert pacman.score == DOT_SCORE and pacman.dots_eaten == 1
    assert not pacman.power_mode
    assert pacman.direction is Direction.NONE
    assert pacman.cell == (23, 13)

    pacman.reset_level()
    assert pacman.dots_eaten == 0 and pacman.score == DOT_SCORE

    pacman.lives = 1
    pacman.reset_game()
    assert pacman.score == 0 and pacman.lives == 3


def test_mouth_animates_only_while_moving(playing):
    pacman = playing.pacman
    pacman.update(playing, 16)
    assert pacman.mouth_angle == 0

    put(pacman, 5, 13, Direction.LEFT)
    pacman.update(playing, 16)
    assert pacman.mouth_angle > 0
