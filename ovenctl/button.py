"""Debounced push button with press and long-press events."""

from __future__ import annotations

import enum
import time
from typing import Callable, Optional

BUTTON_DEBOUNCE_TIME_MS = 100
BUTTON_LONG_PRESS_TIME_MS = 1000


class ButtonState(enum.Enum):
    UP = enum.auto()
    UP_DEBOUNCE = enum.auto()
    DOWN = enum.auto()
    LONG_DOWN = enum.auto()
    DOWN_DEBOUNCE = enum.auto()


def _default_clock() -> float:
    return time.monotonic() * 1000


class Button:
    """A button polled through ``read_pin`` (true when the pin is high).

    With ``inverse`` set the button is pressed while the pin is low.
    """

    def __init__(
        self,
        read_pin: Callable[[], bool],
        inverse: bool = False,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._read_pin = read_pin
        self.inverse = inverse
        self._clock = clock or _default_clock
        self.state = ButtonState.UP
        self._debounce_deadline = 0.0
        self._long_press_deadline = 0.0
        self._press_event = False
        self._long_press_event = False

    def _start(self, duration_ms: float) -> float:
        return self._clock() + duration_ms

    def _expired(self, deadline: float) -> bool:
        return self._clock() >= deadline

    def process(self) -> None:
        """Advance the debounce state machine by one poll."""
        down = self.is_pressed()
        state = self.state

        if state is ButtonState.UP:
            if down:
                self.state = ButtonState.UP_DEBOUNCE
                self._debounce_deadline = self._start(BUTTON_DEBOUNCE_TIME_MS)

        elif state is ButtonState.UP_DEBOUNCE:
            if self._expired(self._debounce_deadline):
                if down:
                    self.state = ButtonState.DOWN
                    self._long_press_deadline = self._start(BUTTON_LONG_PRESS_TIME_MS)
                else:
                    self.state = ButtonState.UP

        elif state is ButtonState.DOWN:
            if not down:
                self.state = ButtonState.DOWN_DEBOUNCE
                self._debounce_deadline = self._start(BUTTON_DEBOUNCE_TIME_MS)
            elif self._expired(self._long_press_deadline):
                self.state = ButtonState.LONG_DOWN
                self._long_press_event = True

        elif state is ButtonState.LONG_DOWN:
            if not down:
                self.state = ButtonState.DOWN_DEBOUNCE
                self._debounce_deadline = self._start(BUTTON_DEBOUNCE_TIME_MS)

        elif state is ButtonState.DOWN_DEBOUNCE:
            if self._expired(self._debounce_deadline):
                long_elapsed = self._expired(self._long_press_deadline)
                if not down:
                    if not long_elapsed:
                        self._press_event = True
                    self.state = ButtonState.UP
                elif long_elapsed:
                    self.state = ButtonState.LONG_DOWN
                else:
                    self.state = ButtonState.DOWN

    def is_pressed(self) -> bool:
        """Raw (undebounced) pressed state."""
        return bool(self._read_pin()) != self.inverse

    def take_press_event(self) -> bool:
        """Return and clear the short-press event flag."""
        event, self._press_event = self._press_event, False
        return event

    def take_long_press_event(self) -> bool:
        """Return and clear the long-press event flag."""
        event, self._long_press_event = self._long_press_event, False
        return event

    def clear_events(self) -> None:
        self._press_event = False
        self._long_press_event = False