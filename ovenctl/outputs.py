"""Heater and fan control driven by an averaged temperature sensor reading."""

from __future__ import annotations

import enum
import time
from typing import Callable, Optional

ADC_MAX_RAW = 4095
ADC_DEFAULT_REF_MV = 3300
TEMPERATURE_CHANNEL = 5
TEMPERATURE_SAMPLES_QTY = 20

HEATER_ACTIVE_TIME_MS = 1 * 1000
HEATER_DELAY_TIME_MS = 10 * 1000
HEATER_MAX_TEMP_C = 200
HEATER_TEMP_OFFSET_C = 7
HEATER_HYST_ON_C = 0
HEATER_HYST_OFF_C = 5

_UINT8_MASK = 0xFF
_UINT16_MASK = 0xFFFF
_UINT32_MASK = 0xFFFFFFFF


def _default_clock() -> float:
    return time.monotonic() * 1000


class AdcChannel:
    """One converter channel that averages a fixed number of samples."""

    def __init__(
        self,
        channel_number: int = TEMPERATURE_CHANNEL,
        samples_qty: int = TEMPERATURE_SAMPLES_QTY,
        ref_mv: int = ADC_DEFAULT_REF_MV,
    ) -> None:
        if not 0 <= channel_number < 17:
            raise ValueError("channel number must be in 0..16")
        if samples_qty < 1:
            raise ValueError("samples_qty must be positive")
        self.channel_number = channel_number
        self.samples_qty = samples_qty
        self.ref_mv = ref_mv
        self._sum = 0
        self._count = 0

    @property
    def is_ready(self) -> bool:
        return self._count >= self.samples_qty

    def add_sample(self, raw: int) -> None:
        """Accumulate a conversion result; ignored once the batch is complete."""
        if self._count < self.samples_qty:
            self._sum += raw & _UINT16_MASK
            self._count += 1

    def take_raw(self) -> Optional[int]:
        """Return the batch average and start a new batch, or ``None`` if not complete."""
        if not self.is_ready:
            return None
        average = (self._sum // self.samples_qty) & _UINT16_MASK
        self._sum = 0
        self._count = 0
        return average

    def take_voltage_mv(self) -> Optional[int]:
        """Like :meth:`take_raw`, scaled to millivolts."""
        raw = self.take_raw()
        if raw is None:
            return None
        return ((raw * self.ref_mv) // ADC_MAX_RAW) & _UINT16_MASK


class _FanState(enum.Enum):
    IDLE = enum.auto()
    ACTIVE = enum.auto()
    INACTIVE = enum.auto()


class _HeaterState(enum.Enum):
    IDLE = enum.auto()
    ACTIVE = enum.auto()
    INACTIVE = enum.auto()
    OVERTEMP = enum.auto()


class Outputs:
    """Pulses the heater towards a target temperature and cycles the fan.

    ``set_fan`` and ``set_heater`` switch the outputs; ``clock`` returns
    milliseconds.
    """

    def __init__(
        self,
        set_fan: Callable[[bool], None],
        set_heater: Callable[[bool], None],
        adc_channel: Optional[AdcChannel] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._set_fan = set_fan
        self._set_heater = set_heater
        self.adc_channel = adc_channel if adc_channel is not None else AdcChannel()
        self._clock = clock or _default_clock
        self._fan_on = False
        self._heater_on = False
        self._fan(False)
        self._heater(False)

        self.current_temperature_c = HEATER_MAX_TEMP_C
        self.target_temperature_c = 0
        self._fan_state = _FanState.IDLE
        self._fan_deadline = 0.0
        self._fan_on_ms = 0
        self._fan_off_ms = 0
        self._heater_state = _HeaterState.IDLE
        self._heater_deadline = 0.0

    @property
    def fan_on(self) -> bool:
        return self._fan_on

    @property
    def heater_on(self) -> bool:
        return self._heater_on

    @property
    def fan_enabled(self) -> bool:
        return self._fan_state is not _FanState.IDLE

    @property
    def heater_enabled(self) -> bool:
        return self._heater_state is not _HeaterState.IDLE

    @property
    def heater_overtemp(self) -> bool:
        return self._heater_state is _HeaterState.OVERTEMP

    def _fan(self, on: bool) -> None:
        self._fan_on = on
        self._set_fan(on)

    def _heater(self, on: bool) -> None:
        self._heater_on = on
        self._set_heater(on)

    def _expired(self, deadline: float) -> bool:
        return self._clock() >= deadline

    def process(self) -> None:
        """Update the temperature reading and advance fan and heater timing."""
        voltage = self.adc_channel.take_voltage_mv()
        if voltage is not None:
            self.current_temperature_c = (voltage // 10) & _UINT8_MASK

        self._process_fan()
        self._process_heater()

    def _process_fan(self) -> None:
        if self._fan_state is _FanState.ACTIVE:
            if self._expired(self._fan_deadline):
                self._fan(False)
                self._fan_deadline += self._fan_off_ms
                self._fan_state = _FanState.INACTIVE
        elif self._fan_state is _FanState.INACTIVE:
            if self._expired(self._fan_deadline):
                self._fan(True)
                self._fan_deadline += self._fan_on_ms
                self._fan_state = _FanState.ACTIVE

    def _process_heater(self) -> None:
        current = self.current_temperature_c
        target = self.target_temperature_c
        upper = target + HEATER_HYST_ON_C - HEATER_TEMP_OFFSET_C
        lower = target - HEATER_HYST_OFF_C - HEATER_TEMP_OFFSET_C

        if self._heater_state is _HeaterState.ACTIVE:
            if current > upper:
                self._heater(False)
                self._heater_state = _HeaterState.OVERTEMP
            elif self._expired(self._heater_deadline):
                self._heater(False)
                self._heater_deadline += HEATER_DELAY_TIME_MS
                self._heater_state = _HeaterState.INACTIVE
        elif self._heater_state is _HeaterState.INACTIVE:
            if current > upper:
                self._heater(False)
                self._heater_state = _HeaterState.OVERTEMP
            elif self._expired(self._heater_deadline):
                self._heater(True)
                self._heater_deadline += HEATER_ACTIVE_TIME_MS
                self._heater_state = _HeaterState.ACTIVE
        elif self._heater_state is _HeaterState.OVERTEMP:
            if current < lower:
                self._heater(True)
                self._heater_deadline = self._clock() + HEATER_ACTIVE_TIME_MS
                self._heater_state = _HeaterState.ACTIVE

    def heater_enable(self, target_temperature_c: int) -> None:
        """Start heating towards ``target_temperature_c`` (capped at the maximum)."""
        target = min(target_temperature_c & _UINT8_MASK, HEATER_MAX_TEMP_C)
        self.target_temperature_c = target
        self._heater_deadline = self._clock() + HEATER_ACTIVE_TIME_MS
        self._heater(True)
        self._heater_state = _HeaterState.ACTIVE

    def heater_disable(self) -> None:
        self._heater(False)
        self._heater_state = _HeaterState.IDLE

    def fan_enable(self, period_s: int, duty_cycle_pct: int) -> None:
        """Cycle the fan with the given period and duty cycle; zero of either stops it."""
        period = period_s & _UINT32_MASK
        duty = min(duty_cycle_pct & _UINT8_MASK, 100)
        if period > 0 and duty > 0:
            self._fan_on_ms = (period * duty * 10) & _UINT32_MASK
            self._fan_off_ms = (period * 1000 - self._fan_on_ms) & _UINT32_MASK
            self._fan(True)
            self._fan_deadline = self._clock() + self._fan_on_ms
            self._fan_state = _FanState.ACTIVE
        else:
            self._fan(False)
            self._fan_state = _FanState.IDLE

    def fan_disable(self) -> None:
        self._fan(False)
        self._fan_state = _FanState.IDLE