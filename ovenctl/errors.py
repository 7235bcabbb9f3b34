"""Device fault and warning bookkeeping."""

from __future__ import annotations

import enum

E_OK = 0


class FailCode(enum.IntFlag):
    FW_ERROR = 1 << 0
    CFG_ERROR = 1 << 1
    EXT_OSCILLATOR_ERROR = 1 << 2
    LCD_ERROR = 1 << 3


class WarningCode(enum.IntFlag):
    ERR_WDT_RESET = 1 << 0


class ErrorHandler:
    """Accumulates fail and warning flags; nothing ever clears them."""

    def __init__(self) -> None:
        self.fail_code = FailCode(0)
        self.warning_code = WarningCode(0)
        self.fw_error_extended_code = E_OK

    @property
    def is_failed(self) -> bool:
        return bool(self.fail_code)

    def set_fail_fw_error(self, extended_code: int) -> None:
        """Flag a firmware error; only the first one's extended code is kept."""
        if self.fail_code & FailCode.FW_ERROR:
            return
        self.fail_code |= FailCode.FW_ERROR
        if self.fw_error_extended_code == E_OK:
            self.fw_error_extended_code = extended_code

    def set_fail_cfg_error(self) -> None:
        self.fail_code |= FailCode.CFG_ERROR

    def set_fail_ext_oscillator_error(self) -> None:
        self.fail_code |= FailCode.EXT_OSCILLATOR_ERROR

    def set_fail_lcd_error(self) -> None:
        self.fail_code |= FailCode.LCD_ERROR

    def set_warn_err_wdt_reset(self) -> None:
        self.warning_code |= WarningCode.ERR_WDT_RESET