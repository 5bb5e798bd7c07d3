"""Keyboard and mouse state tracking, fed by window-system events."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_TICK_MODULUS = 2**64
_NEVER = _TICK_MODULUS - 1

MOUSE_BUTTON_LEFT = 0
MOUSE_BUTTON_RIGHT = 1
MOUSE_BUTTON_MIDDLE = 2
MOUSE_BUTTON_COUNT = 8

Position = tuple[float, float]


class KeyState(enum.IntFlag):
    PRESSED = 1 << 0
    RELEASED = 1 << 1
    JUST_PRESSED = 1 << 2
    JUST_RELEASED = 1 << 3


class Action(enum.IntEnum):
    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class Key(enum.IntEnum):
    UNKNOWN = -1
    SPACE = 32
    A = 65
    D = 68
    E = 69
    Q = 81
    S = 83
    W = 87
    ESCAPE = 256
    F4 = 293
    LEFT_SHIFT = 340
    LEFT_CONTROL = 341
    LEFT_ALT = 342
    LEFT_SUPER = 343


@dataclass
class _InputState:
    down_tick: int = _NEVER
    up_tick: int = _NEVER
    is_down: bool = False


def _check_button(button: int) -> int:
    button = int(button)
    if not 0 <= button < MOUSE_BUTTON_COUNT:
        raise IndexError(f"mouse button {button} out of range")
    return button


class InputHandler:
    """Tracks pressed keys and buttons per tick, plus the mouse position."""

    def __init__(self) -> None:
        self._scancodes: dict[int, _InputState] = {}
        self._keycodes: dict[int, _InputState] = {}
        self._mouse_buttons: dict[int, _InputState] = {}
        self._mouse_position: Position = (-1.0, -1.0)
        self._position_switched: list[Position] = [
            self._mouse_position
        ] * MOUSE_BUTTON_COUNT
        self._mouse_captured_by_ui = False
        self._keyboard_captured_by_ui = False
        self._tick = 0

    def advance(self) -> None:
        """Move on to the next tick."""
        self._tick = (self._tick + 1) % _TICK_MODULUS

    def _down(self, states: dict[int, _InputState], loc: int) -> None:
        state = states.setdefault(int(loc), _InputState())
        state.is_down = True
        state.down_tick = self._tick

    def _up(self, states: dict[int, _InputState], loc: int) -> None:
        state = states.setdefault(int(loc), _InputState())
        state.is_down = False
        state.up_tick = self._tick

    def _state(self, states: dict[int, _InputState], loc: int) -> KeyState:
        state = states.get(int(loc))
        if state is None:
            return KeyState.RELEASED
        result = KeyState.PRESSED if state.is_down else KeyState.RELEASED
        previous = (self._tick - 1) % _TICK_MODULUS
        if previous == state.down_tick:
            result |= KeyState.JUST_PRESSED
        if previous == state.up_tick:
            result |= KeyState.JUST_RELEASED
        return result

    def feed_keyboard(self, key: int, scancode: int, action: int) -> None:
        if action == Action.PRESS:
            self._down(self._scancodes, scancode)
            self._down(self._keycodes, key)
        elif action == Action.RELEASE:
            self._up(self._scancodes, scancode)
            self._up(self._keycodes, key)

    def feed_mouse_buttons(self, button: int, action: int) -> None:
        index = _check_button(button)
        if action == Action.PRESS:
            self._down(self._mouse_buttons, index)
        elif action == Action.RELEASE:
            self._up(self._mouse_buttons, index)
        self._position_switched[index] = self._mouse_position

    def feed_mouse_motion(self, position) -> None:
        x, y = position
        self._mouse_position = (float(x), float(y))

    def scancode_state(self, scancode: int) -> KeyState:
        return self._state(self._scancodes, scancode)

    def keycode_state(self, key: int) -> KeyState:
        return self._state(self._keycodes, key)

    def mouse_state(self, button: int) -> KeyState:
        return self._state(self._mouse_buttons, button)

    def mouse_position_at_state_shift(self, button: int) -> Position:
        """Mouse position when ``button`` last changed state."""
        return self._position_switched[_check_button(button)]

    def mouse_position(self) -> Position:
        return self._mouse_position

    def is_mouse_captured_by_ui(self) -> bool:
        return self._mouse_captured_by_ui

    def is_keyboard_captured_by_ui(self) -> bool:
        return self._keyboard_captured_by_ui

    def set_ui_capture(self, mouse_capture: bool, keyboard_capture: bool) -> None:
        self._mouse_captured_by_ui = bool(mouse_capture)
        self._keyboard_captured_by_ui = bool(keyboard_capture)