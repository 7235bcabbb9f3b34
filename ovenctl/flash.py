"""Simulated on-chip flash memory with halfword programming."""

from __future__ import annotations

FLASH_PAGE_SIZE = 1024
FLASH_BASE_ADDRESS = 0x08000000
FLASH_SIZE = 32 * 1024
ERASED_BYTE = 0xFF


class FlashError(Exception):
    """Raised when a flash operation fails."""


class FlashMemory:
    """Flash memory that is erased in pages and programmed in halfwords.

    Programming can only clear bits; a write that does not read back as
    written raises :class:`FlashError`.
    """

    def __init__(
        self,
        base_address: int = FLASH_BASE_ADDRESS,
        size: int = FLASH_SIZE,
        page_size: int = FLASH_PAGE_SIZE,
    ) -> None:
        if page_size < 2 or page_size % 2:
            raise ValueError("page size must be a positive even number")
        if size < page_size or size % page_size:
            raise ValueError("flash size must be a multiple of the page size")
        self.base_address = base_address
        self.size = size
        self.page_size = page_size
        self._cells = bytearray([ERASED_BYTE]) * size

    def _offset(self, address: int, length: int = 1) -> int:
        offset = address - self.base_address
        if offset < 0 or length < 0 or offset + length > self.size:
            raise FlashError(f"0x{address:08X}+{length} is outside flash memory")
        return offset

    def erase_page(self, address: int) -> None:
        """Erase the page that contains ``address``."""
        offset = self._offset(address)
        start = offset - offset % self.page_size
        self._cells[start:start + self.page_size] = bytes([ERASED_BYTE]) * self.page_size

    def write_word(self, address: int, data: int) -> None:
        """Program a halfword; its high byte goes to ``address``, its low byte after it."""
        if address % 2:
            raise FlashError(f"0x{address:08X} is not halfword aligned")
        if not 0 <= data <= 0xFFFF:
            raise ValueError("halfword must be in 0..0xFFFF")
        offset = self._offset(address, 2)
        high, low = data >> 8, data & 0xFF
        self._cells[offset] &= high
        self._cells[offset + 1] &= low
        if self._cells[offset] != high or self._cells[offset + 1] != low:
            raise FlashError(f"verification failed at 0x{address:08X}")

    def write_bytes(self, address: int, data: bytes) -> None:
        """Program ``data`` at ``address``, padding odd edges with erased bytes."""
        chunk = bytes(data)
        if not chunk:
            return
        if address % 2:
            chunk = bytes([ERASED_BYTE]) + chunk
            address -= 1
        if len(chunk) % 2:
            chunk += bytes([ERASED_BYTE])
        self._offset(address, len(chunk))
        addresses = range(address, address + len(chunk), 2)
        for word_address, high, low in zip(addresses, chunk[0::2], chunk[1::2]):
            self.write_word(word_address, (high << 8) | low)

    def read_bytes(self, address: int, size: int) -> bytes:
        offset = self._offset(address, size)
        return bytes(self._cells[offset:offset + size])

    def read_byte(self, address: int) -> int:
        return self._cells[self._offset(address)]

    def read_word_le(self, address: int) -> int:
        """Read a halfword with the byte at ``address`` as the high byte."""
        offset = self._offset(address, 2)
        return (self._cells[offset] << 8) | self._cells[offset + 1]

    def read_word_be(self, address: int) -> int:
        """Read a halfword with the byte at ``address`` as the low byte."""
        offset = self._offset(address, 2)
        return (self._cells[offset + 1] << 8) | self._cells[offset]