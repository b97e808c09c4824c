import random

import pytest

from blockfall.controls import Action, Direction, Handling, UserControl
from blockfall.engine import PIECES, Game


@pytest.fixture
def game():
    return Game(rng=random.Random(7))


def filled(game):
    return sum(1 for row in game.board for cell in row if cell)


def test_left_press_moves_one_column(game):
    control = UserControl()
    x, y = game.current_position
    assert control.action(game, "a", True) is False
    assert game.current_position == (x - 1, y)
    assert control.direction is Direction.LEFT


def test_unmapped_key_does_nothing(game):
    control = UserControl()
    before = game.current_position
    assert control.action(game, "q", True) is False
    assert game.current_position == before
    assert not any(control.pressed.values())


@pytest.mark.parametrize("key,rotation", [("l", 1), ("j", 3), ("k", 2)])
def test_rotation_keys(game, key, rotation):
    control = UserControl()
    control.action(game, key, True)
    assert game.current_rotation == rotation


def test_hard_drop_places_four_cells(game):
    control = UserControl()
    assert control.action(game, "space", True) is False
    assert filled(game) == 4
    assert control.touching is False


def test_hold_key_swaps_once(game):
    control = UserControl()
    original = game.current_piece
    control.action(game, "left shift", True)
    assert game.hold_piece is original
    current = game.current_piece
    control.action(game, "left shift", True)
    assert game.hold_piece is original
    assert game.current_piece is current


def test_gravity_at_level_zero(game):
    control = UserControl()
    y = game.current_position[1]
    for _ in range(47):
        assert control.update(game) is False
    assert game.current_position[1] == y
    control.update(game)
    assert game.current_position[1] == y + 1


def test_soft_drop_falls_every_frame(game):
    control = UserControl()
    y = game.current_position[1]
    control.action(game, "s", True)
    control.update(game)
    control.update(game)
    assert game.current_position[1] == y + 2
    control.action(game, "s", False)
    assert control.dropping is False


def test_auto_shift_reaches_wall(game):
    twin = Game(rng=random.Random(7))
    twin.hard_move(1)
    control = UserControl()
    control.action(game, "d", True)
    for _ in range(30):
        control.update(game)
    assert game.current_position == twin.current_position


def test_auto_shift_waits_for_delay(game):
    control = UserControl()
    control.action(game, "d", True)
    after_press = game.current_position
    for _ in range(9):
        control.update(game)
    assert game.current_position == after_press


def test_release_stops_auto_shift(game):
    control = UserControl()
    control.action(game, "d", True)
    after_press = game.current_position
    control.action(game, "d", False)
    for _ in range(20):
        control.update(game)
    assert game.current_position == after_press
    assert control.direction is Direction.NONE
    assert control.pressed[Action.RIGHT] is False


def test_lock_delay_places_piece(game):
    control = UserControl()
    while game.drop():
        pass
    for _ in range(100):
        control.update(game)
    assert filled(game) == 0
    for _ in range(50):
        assert control.update(game) is False
    assert filled(game) == 4


def test_drop_reports_game_over(game):
    game.current_piece = next(p for p in PIECES if p.name == "T")
    game.current_rotation = 0
    game.current_position = (4, 0)
    game.board[1] = [1] * 9 + [0]
    control = UserControl()
    assert control.action(game, "space", True) is True


def test_custom_handling_shifts_sooner():
    fast_game = Game(rng=random.Random(3))
    slow_game = Game(rng=random.Random(3))
    fast = UserControl(handling=Handling(das_delay=1))
    slow = UserControl()
    fast.action(fast_game, "d", True)
    slow.action(slow_game, "d", True)
    fast.update(fast_game)
    slow.update(slow_game)
    assert fast_game.current_position[0] > slow_game.current_position[0]


def test_custom_key_map(game):
    control = UserControl(key_map={"left": Action.LEFT})
    x = game.current_position[0]
    control.action(game, "a", True)
    assert game.current_position[0] == x
    control.action(game, "left", True)
    assert game.current_position[0] == x - 1