"""Process LED and buzzer sharing one output."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import Callable, Optional

LED_ERROR_BLINK_MS = 600


@dataclass(frozen=True)
class Melody:
    """A pattern of alternating on/off durations played ``repeats`` times."""

    repeats: int
    durations_ms: tuple[int, ...]


BEEP_MELODY = Melody(1, (500,))
PROCESS_DONE_MELODY = Melody(5, (1000, 800))
ERROR_MELODY = Melody(5, (200, 100, 200, 100, 200, 1000))


class _BuzzerState(enum.Enum):
    IDLE = enum.auto()
    PLAYING = enum.auto()


def _default_clock() -> float:
    return time.monotonic() * 1000


class Indicators:
    """Drives the LED through ``set_led`` and the buzzer through ``set_buzzer``.

    While a melody plays the LED is left alone.
    """

    def __init__(
        self,
        set_led: Callable[[bool], None],
        set_buzzer: Callable[[bool], None],
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._set_led = set_led
        self._set_buzzer = set_buzzer
        self._clock = clock or _default_clock
        self._led_process = False
        self._led_error = False
        self._led_on = False
        self._led_deadline = 0.0

        self._state = _BuzzerState.IDLE
        self._task: Optional[Melody] = None
        self._deadline = 0.0
        self._duration_index = 0
        self._repeat_index = 0
        self._buzzer_on = False

    @property
    def buzzer_active(self) -> bool:
        return self._state is _BuzzerState.PLAYING

    @property
    def buzzer_on(self) -> bool:
        return self._buzzer_on

    def process(self) -> None:
        self._process_led()
        self._process_buzzer()

    def led_process(self, enabled: bool) -> None:
        self._led_process = enabled

    def led_error(self, enabled: bool) -> None:
        self._led_error = enabled

    def buzzer_terminate(self) -> None:
        """Stop any melody at once."""
        self._task = None
        self._state = _BuzzerState.IDLE
        self._buzzer_on = False
        self._set_buzzer(False)

    def short_beep(self) -> None:
        self._task = BEEP_MELODY

    def process_done_beep(self) -> None:
        self._task = PROCESS_DONE_MELODY

    def error_beep(self) -> None:
        self._task = ERROR_MELODY

    def _process_buzzer(self) -> None:
        if self._state is _BuzzerState.IDLE:
            if self._task is not None:
                self._duration_index = 0
                self._repeat_index = 0
                self._deadline = self._clock() + self._task.durations_ms[0]
                self._state = _BuzzerState.PLAYING
                self._buzzer_on = True
                self._set_buzzer(True)
            return

        if self._task is None or self._clock() < self._deadline:
            return
        melody = self._task
        self._duration_index += 1
        if self._duration_index >= len(melody.durations_ms):
            self._duration_index = 0
            self._repeat_index += 1
            if self._repeat_index >= melody.repeats:
                self._state = _BuzzerState.IDLE
                self._task = None
                self._set_buzzer(False)
                return

        self._deadline = self._clock() + melody.durations_ms[self._duration_index]
        self._buzzer_on = not self._buzzer_on
        self._set_buzzer(self._buzzer_on)

    def _process_led(self) -> None:
        if self._state is not _BuzzerState.IDLE:
            return
        if self._led_error:
            if self._clock() >= self._led_deadline:
                self._led_on = not self._led_on
                self._set_led(self._led_on)
                self._led_deadline = self._clock() + LED_ERROR_BLINK_MS
        else:
            self._set_led(self._led_process)