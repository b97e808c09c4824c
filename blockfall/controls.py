"""Keyboard handling: key bindings, gravity, auto-shift and lock delay."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType

from .engine import Game


class Action(Enum):
    """Something the player can ask the game to do."""

    LEFT = auto()
    RIGHT = auto()
    DOWN = auto()
    ROTATE_C = auto()
    ROTATE_A = auto()
    ROTATE_H = auto()
    DROP = auto()
    HOLD = auto()


class Direction(Enum):
    """Horizontal movement currently held; the value is the column step."""

    LEFT = -1
    RIGHT = 1
    NONE = 0


_ROTATIONS = {Action.ROTATE_C: 1, Action.ROTATE_A: 3, Action.ROTATE_H: 2}

DEFAULT_KEY_MAP: Mapping[str, Action] = MappingProxyType(
    {
        "a": Action.LEFT,
        "d": Action.RIGHT,
        "s": Action.DOWN,
        "space": Action.DROP,
        "l": Action.ROTATE_C,
        "j": Action.ROTATE_A,
        "k": Action.ROTATE_H,
        "left shift": Action.HOLD,
    }
)


@dataclass
class Handling:
    """Timing settings, all counted in frames."""

    gravity_frame: int = 40
    das_delay: int = 10
    arr: int = 1
    sdf: int = 30
    lock_delay: int = 60


class UserControl:
    """Turns key presses and the passing of frames into game moves."""

    def __init__(
        self,
        key_map: Mapping[str, Action] | None = None,
        handling: Handling | None = None,
    ) -> None:
        self.key_map = dict(DEFAULT_KEY_MAP if key_map is None else key_map)
        self.handling = handling if handling is not None else Handling()
        self.pressed = {action: False for action in Action}

        self.frame = 0
        self.direction = Direction.NONE
        self.dropping = False
        self.touching = False
        self._last_gravity = 0
        self._das = 0
        self._last_shift = 0
        self._lock = 0

    def action(self, game: Game, key: str, pressed: bool) -> bool:
        """Handle a key going down or up; True means the game is over."""
        action = self.key_map.get(key)
        if action is None:
            return False
        self.pressed[action] = pressed
        if pressed:
            return self._press(game, action)
        self._release(action)
        return False

    def _press(self, game: Game, action: Action) -> bool:
        if action in (Action.LEFT, Action.RIGHT):
            direction = Direction.LEFT if action is Action.LEFT else Direction.RIGHT
            if self.direction is not direction:
                self._das = 0
                self._last_shift = self.frame
                self.direction = direction
                game.move_piece(direction.value)
        elif action in _ROTATIONS:
            game.rotate(_ROTATIONS[action])
        elif action is Action.DROP:
            if game.hard_drop():
                return True
            self._reset_lock()
        elif action is Action.DOWN:
            self.dropping = True
        elif action is Action.HOLD:
            if game.swap_hold():
                self._reset_lock()
        return False

    def _release(self, action: Action) -> None:
        if action in (Action.LEFT, Action.RIGHT):
            self._das = 0
            self._last_shift = self.frame
            self.direction = Direction.NONE
        elif action is Action.DOWN:
            self.dropping = False

    def _reset_lock(self) -> None:
        self.touching = False
        self._lock = 0

    def update(self, game: Game) -> bool:
        """Advance one frame; True means the game is over."""
        self.frame += 1
        self._das += 1

        if self.touching:
            self._lock += 1
            if self._lock >= self.handling.lock_delay:
                if game.place():
                    return True
                self._lock = 0

        gravity = max(1, 48 - game.level() * 5)
        if self.dropping:
            gravity //= self.handling.sdf
        if self.frame - self._last_gravity >= gravity:
            self._last_gravity = self.frame
            if game.drop():
                self._reset_lock()
            else:
                self.touching = True

        if self.direction is not Direction.NONE and self._das >= self.handling.das_delay:
            if self.frame - self._last_shift >= self.handling.arr:
                game.move_piece(self.direction.value)
                self._last_shift = self.frame
        return False