"""Driver for a 128x32 SSD1306 OLED panel with a built-in 5x8 font."""

from __future__ import annotations

import enum
from typing import Callable, Union

SSD1306_W = 128
SSD1306_H = 32
SSD1306_SIMW_W = 5
SSD1306_SIMW_W_WITH_SPACE = SSD1306_SIMW_W + 1
SSD1306_SIMW_H = 8

CONTROL_COMMAND = 0x00
CONTROL_DATA = 0x40

CONTRAST = 0x81
DISPLAYALL_ON_RESUME = 0xA4
DISPLAYALL_ON = 0xA5
INVERTED_OFF = 0xA6
INVERTED_ON = 0xA7
DISPLAY_OFF = 0xAE
DISPLAY_ON = 0xAF
DISPLAYOFFSET = 0xD3
COMPINS = 0xDA
VCOMDETECT = 0xDB
DISPLAYCLOCKDIV = 0xD5
PRECHARGE = 0xD9
MULTIPLEX = 0xA8
LOWCOLUMN = 0x00
HIGHCOLUMN = 0x10
STARTLINE = 0x40
MEMORYMODE = 0x20
MEMORYMODE_HORIZONTAL = 0x00
COLUMNADDR = 0x21
PAGEADDR = 0x22
CHARGEPUMP = 0x8D

_SETUP = (
    DISPLAY_OFF,
    LOWCOLUMN,
    HIGHCOLUMN,
    STARTLINE,
    MEMORYMODE, MEMORYMODE_HORIZONTAL,
    CONTRAST, 0xFF,
    INVERTED_OFF,
    MULTIPLEX, 63,
    DISPLAYOFFSET, 0x00,
    DISPLAYCLOCKDIV, 0x80,
    PRECHARGE, 0x22,
    COMPINS, 0x02,
    VCOMDETECT, 0x40,
    CHARGEPUMP, 0x14,
    DISPLAYALL_ON_RESUME,
    DISPLAY_ON,
)

_CLEAR_CHUNK = 16
_CLEAR_CHUNKS = 33

# Index 0 is a solid block, then ASCII 0x20..0x60 and "{|}~".
# Lower-case letters are drawn with the upper-case glyphs.
_FONT = tuple(
    bytes.fromhex(row)
    for row in (
        "FFFFFFFFFF",
        "0000000000", "000CBE0C00", "0E06000E06", "48FC48FC48", "4856D42400",
        "C62610C8C6", "6C92AC40A0", "000E060000", "007C820000", "00827C0000",
        "107C387C10", "10107C1010", "00E0600000", "1010101010", "0060600000",
        "4020100804",
        "7CA2928A7C", "0084FE8000", "C4A292928C", "449292926C", "302824FE20",
        "5E92929262", "7894929260", "02E2120A06", "6C9292926C", "0C9292523C",
        "006C6C0000", "00EC6C0000", "1028448200", "4848484848", "0082442810",
        "0402B2120C", "7C82BAAA3C",
        "FC222222FC", "FE9292926C", "7C82828244", "FE8282827C", "FE92929282",
        "FE12121202", "7C829292F4", "FE101010FE", "0082FE8200", "608080807E",
        "FE10284482", "FE80808080", "FE040804FE", "FE040810FE", "7C8282827C",
        "FE1212120C", "7C82A242BC", "FE121232CC", "4C92929264", "0202FE0202",
        "7E8080807E", "3E4080403E", "7E8078807E", "C6281028C6", "0E10E0100E",
        "E2928A8600",
        "00FE828200", "0408102040", "008282FE00", "0804020408", "8080808080",
        "00060E0000",
        "107C828200", "0000FF0000", "0082827C10", "0402040200",
    )
)

Char = Union[str, int]


class FontMode(enum.IntEnum):
    """Glyph scale factor."""

    K1 = 1
    K2 = 2
    K3 = 3


def digit_to_string(digit: int, visible_zeros: bool) -> str:
    """Render a 16-bit number as five characters.

    Leading zeros become spaces unless ``visible_zeros`` is set; the value is
    truncated to 16 bits first.
    """
    digit &= 0xFFFF
    zero = "0" if visible_zeros else " "
    digits = f"{digit:05d}"
    chars: list[str] = []
    leading = True
    for position, char in enumerate(digits):
        if position < 4 and char == "0" and leading:
            chars.append(zero)
        else:
            chars.append(char)
            leading = False
    return "".join(chars)


def _font_index(char: Char) -> int:
    code = ord(char) if isinstance(char, str) else int(char)
    if code < 0x20 or code > 0x7E:
        code = ord("#")
    if ord("a") <= code <= ord("z"):
        code -= ord("a") - ord("A")
    elif code > ord("z"):
        code -= ord("z") - ord("a") + 1
    return code - (0x20 - 1)


def glyph_columns(char: Char, mode: FontMode) -> bytes:
    """Return the display data bytes that draw ``char`` at scale ``mode``.

    For scale 2 the first half of the bytes covers the upper page and the
    second half the lower page.
    """
    scale = int(FontMode(mode))
    rows = _FONT[_font_index(char)]
    buffer = bytearray(max(21, 1 + SSD1306_SIMW_W * scale * scale))
    index = 1
    bit_count = 0
    pixel_mask = (0xFF << (8 - scale)) & 0xFF
    for shift in range(scale - 1, -1, -1):
        for column in rows:
            data = (column << (4 * shift)) & 0xFF
            for _ in range(8 // scale):
                if data & 0x80:
                    buffer[index] |= pixel_mask >> bit_count
                bit_count += scale
                if bit_count > 7:
                    bit_count = 0
                    index += scale
                data = (data << 1) & 0xFF
    if scale == 2:
        buffer[2:21:2] = buffer[1:20:2]
    return bytes(buffer[1:index])


_COMMAND_ARGUMENTS = {
    CONTRAST: 1,
    MULTIPLEX: 1,
    DISPLAYOFFSET: 1,
    DISPLAYCLOCKDIV: 1,
    PRECHARGE: 1,
    COMPINS: 1,
    VCOMDETECT: 1,
    CHARGEPUMP: 1,
    MEMORYMODE: 1,
    COLUMNADDR: 2,
    PAGEADDR: 2,
}


class FrameBuffer:
    """Model of the panel's graphic RAM fed with the bytes the driver writes.

    Horizontal addressing is assumed; column and page addresses wrap the way
    the controller wraps them.
    """

    WIDTH = 128
    PAGES = 8
    HEIGHT = PAGES * 8

    def __init__(self) -> None:
        self.pages = [bytearray(self.WIDTH) for _ in range(self.PAGES)]
        self.display_on = False
        self._pending: int | None = None
        self._arguments: list[int] = []
        self._column_start, self._column_end = 0, self.WIDTH - 1
        self._page_start, self._page_end = 0, self.PAGES - 1
        self._column = 0
        self._page = 0

    def feed(self, data: bytes) -> None:
        """Accept one bus transfer: a control byte followed by its payload."""
        transfer = bytes(data)
        if not transfer:
            raise ValueError("empty transfer")
        control, payload = transfer[0], transfer[1:]
        if control == CONTROL_COMMAND:
            for byte in payload:
                self._command_byte(byte)
        elif control == CONTROL_DATA:
            for byte in payload:
                self._data_byte(byte)
        else:
            raise ValueError(f"unknown control byte 0x{control:02X}")

    def pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.WIDTH and 0 <= y < self.HEIGHT):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        return bool((self.pages[y >> 3][x] >> (y & 7)) & 1)

    def _command_byte(self, byte: int) -> None:
        if self._pending is not None:
            self._arguments.append(byte)
            if len(self._arguments) == _COMMAND_ARGUMENTS[self._pending]:
                self._apply(self._pending, self._arguments)
                self._pending = None
                self._arguments = []
        elif byte in _COMMAND_ARGUMENTS:
            self._pending = byte
            self._arguments = []
        elif byte == DISPLAY_OFF:
            self.display_on = False
        elif byte == DISPLAY_ON:
            self.display_on = True

    def _apply(self, command: int, arguments: list[int]) -> None:
        if command == COLUMNADDR:
            self._column_start = arguments[0] & 0x7F
            self._column_end = arguments[1] & 0x7F
            self._column = self._column_start
        elif command == PAGEADDR:
            self._page_start = arguments[0] & 0x07
            self._page_end = arguments[1] & 0x07
            self._page = self._page_start

    def _data_byte(self, byte: int) -> None:
        self.pages[self._page][self._column] = byte
        if self._column >= self._column_end:
            self._column = self._column_start
            if self._page >= self._page_end:
                self._page = self._page_start
            else:
                self._page += 1
        else:
            self._column += 1


class Display:
    """SSD1306 panel driven through ``write(bytes)``, one bus transfer per call."""

    def __init__(self, write: Callable[[bytes], object]) -> None:
        self._write = write

    def _command(self, *commands: int) -> None:
        for command in commands:
            self._write(bytes([CONTROL_COMMAND, command & 0xFF]))

    def _data(self, payload: bytes) -> None:
        self._write(bytes([CONTROL_DATA]) + bytes(payload))

    def _set_area(self, x_start: int, x_end: int, page_start: int, page_end: int) -> None:
        self._command(COLUMNADDR, x_start, x_end, PAGEADDR, page_start, page_end)

    def init(self) -> None:
        """Send the power-up configuration and switch the panel on."""
        self._command(*_SETUP)

    def standby(self, enabled: bool) -> None:
        """Switch the panel off (``True``) or on; the picture is kept."""
        self._command(DISPLAY_OFF if enabled else DISPLAY_ON)

    def clear(self) -> None:
        self._set_area(0, SSD1306_W - 1, 0, SSD1306_H - 1)
        for _ in range(_CLEAR_CHUNKS):
            self._data(bytes(_CLEAR_CHUNK))

    def set_image(self, data: int, x: int, y: int) -> None:
        """Write one column byte at ``x`` in the page that holds row ``y``."""
        self._set_area(x, x + 1, y >> 3, (SSD1306_H - 1) >> 3)
        self._data(bytes([data & 0xFF]))

    def print_digit(
        self,
        digit: int,
        max_len: int,
        visible_zeros: bool,
        mode: FontMode,
        x: int,
        y: int,
    ) -> None:
        """Print the last ``max_len`` characters of the five-digit rendering."""
        if not 0 <= max_len <= 5:
            raise ValueError("max_len must be in 0..5")
        text = digit_to_string(digit, visible_zeros)
        self.print_str(text[5 - max_len:], mode, x, y)

    def print_str(self, text: str, mode: FontMode, x: int, y: int) -> None:
        scale = int(FontMode(mode))
        current_x = x
        for char in text:
            self.print_char(char, mode, current_x, y)
            current_x = (current_x + SSD1306_SIMW_W * scale + scale) & 0xFF

    def print_char(self, char: Char, mode: FontMode, x: int, y: int) -> None:
        scale = int(FontMode(mode))
        glyph = glyph_columns(char, mode)
        width = SSD1306_SIMW_W * scale - 1
        self._set_area(x, x + width, y >> 3, (SSD1306_H - 1) >> 3)
        self._data(glyph)