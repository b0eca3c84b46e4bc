import io

import pytest

from totoro_long.game import KEY_ESCAPE, Direction, Game, Outcome
from totoro_long.mapfile import GameMap

STRAIGHT = ["1111111\n", "1P0C0E1\n", "1111111"]
EXIT_FIRST = ["111111\n", "1PEC01\n", "111111"]


def make_game(lines):
    out = io.StringIO()
    return Game(GameMap.from_lines(lines), stream=out), out


def test_initial_state_matches_map():
    game, _ = make_game(STRAIGHT)
    assert game.player == (1, 1)
    assert game.door == (1, 5)
    assert game.collectibles_left == 1
    assert game.moves == 0
    assert not game.finished


def test_wall_blocks_without_counting():
    game, out = make_game(STRAIGHT)
    assert game.move(Direction.UP) is Outcome.BLOCKED
    assert game.moves == 0
    assert game.player == (1, 1)
    assert out.getvalue() == ""


def test_move_onto_floor_updates_grid_and_reports():
    game, out = make_game(STRAIGHT)
    assert game.move(Direction.RIGHT) is Outcome.MOVED
    assert game.player == (1, 2)
    assert game.tile_at(1, 1) == "0"
    assert game.tile_at(1, 2) == "P"
    assert out.getvalue() == "moves: 1\n"


def test_collecting_decrements_counter():
    game, _ = make_game(STRAIGHT)
    game.move(Direction.RIGHT)
    game.move(Direction.RIGHT)
    assert game.collectibles_left == 0
    assert sum(1 for _, _, ch in game.cells() if ch == "C") == 0


def test_win_after_collecting_everything():
    game, out = make_game(STRAIGHT)
    outcomes = [game.move(Direction.RIGHT) for _ in range(4)]
    assert outcomes[-1] is Outcome.WON
    assert game.finished
    assert game.moves == 4
    assert out.getvalue().splitlines()[-1] == "You Win! Moves: 4"


def test_standing_on_exit_with_collectibles_left():
    game, _ = make_game(EXIT_FIRST)
    assert game.move(Direction.RIGHT) is Outcome.MOVED
    assert game.tile_at(1, 2) == "S"
    assert game.tile_at(1, 1) == "0"
    assert game.move(Direction.RIGHT) is Outcome.MOVED
    assert game.tile_at(1, 2) == "E"
    assert game.tile_at(1, 3) == "P"
    assert game.collectibles_left == 0
    assert game.move(Direction.LEFT) is Outcome.WON
    assert game.moves == 3


def test_keys_map_to_directions():
    game, _ = make_game(STRAIGHT)
    assert game.press_key(100) is Outcome.MOVED
    assert game.player == (1, 2)
    assert game.press_key(97) is Outcome.MOVED
    assert game.player == (1, 1)
    assert game.press_key(119) is Outcome.BLOCKED
    assert game.press_key(115) is Outcome.BLOCKED


def test_unknown_key_is_ignored():
    game, out = make_game(STRAIGHT)
    assert game.press_key(120) is Outcome.IGNORED
    assert game.moves == 0
    assert out.getvalue() == ""


def test_escape_quits_and_reports_moves():
    game, out = make_game(STRAIGHT)
    game.press_key(100)
    assert game.press_key(KEY_ESCAPE) is Outcome.QUIT
    assert game.finished
    assert out.getvalue().splitlines()[-1] == "You lost! Moves: 1"


def test_no_moves_after_game_over():
    game, _ = make_game(STRAIGHT)
    game.quit()
    with pytest.raises(RuntimeError):
        game.move(Direction.RIGHT)


def test_tile_at_outside_raises():
    game, _ = make_game(STRAIGHT)
    with pytest.raises(IndexError):
        game.tile_at(-1, 0)
    with pytest.raises(IndexError):
        game.tile_at(0, game.width)


def test_cells_cover_whole_grid():
    game, _ = make_game(STRAIGHT)
    cells = list(game.cells())
    assert len(cells) == game.width * game.height
    assert "".join(ch for _, _, ch in cells) == "".join(line.strip() for line in STRAIGHT)


def test_map_without_player_is_rejected():
    with pytest.raises(ValueError):
        Game(GameMap(("111", "1E1", "111")))