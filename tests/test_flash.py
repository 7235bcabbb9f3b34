import pytest

from ovenctl.flash import FlashError, FlashMemory

PROFILES_ADDR = 0x08007C00


@pytest.fixture
def flash():
    return FlashMemory()


def test_fresh_flash_is_erased(flash):
    assert flash.read_bytes(PROFILES_ADDR, 4) == b"\xff\xff\xff\xff"
    assert flash.read_byte(PROFILES_ADDR) == 0xFF


def test_write_word_round_trip(flash):
    flash.write_word(PROFILES_ADDR, 0x1234)
    assert flash.read_word_le(PROFILES_ADDR) == 0x1234
    assert flash.read_bytes(PROFILES_ADDR, 2) == b"\x12\x34"


def test_read_word_be_is_byte_swapped(flash):
    flash.write_word(PROFILES_ADDR, 0xA55A)
    le = flash.read_word_le(PROFILES_ADDR)
    be = flash.read_word_be(PROFILES_ADDR)
    assert be == ((le & 0xFF) << 8) | (le >> 8)


def test_write_bytes_round_trip_even(flash):
    payload = b"Bread\x00\x01\x02\x03"
    flash.write_bytes(PROFILES_ADDR, payload)
    assert flash.read_bytes(PROFILES_ADDR, len(payload)) == payload
    assert flash.read_byte(PROFILES_ADDR + len(payload)) == 0xFF


def test_write_bytes_odd_address_keeps_neighbours_erased(flash):
    payload = b"xyz"
    flash.write_bytes(PROFILES_ADDR + 1, payload)
    assert flash.read_bytes(PROFILES_ADDR + 1, 3) == payload
    assert flash.read_byte(PROFILES_ADDR) == 0xFF
    assert flash.read_byte(PROFILES_ADDR + 4) == 0xFF


def test_write_bytes_empty_is_noop(flash):
    flash.write_bytes(PROFILES_ADDR, b"")
    assert flash.read_bytes(PROFILES_ADDR, 2) == b"\xff\xff"


def test_overwrite_without_erase_fails(flash):
    flash.write_word(PROFILES_ADDR, 0x00FF)
    with pytest.raises(FlashError):
        flash.write_word(PROFILES_ADDR, 0xFF00)


def test_erase_page_restores_only_that_page(flash):
    page = flash.page_size
    flash.write_bytes(PROFILES_ADDR, b"abcd")
    flash.write_bytes(PROFILES_ADDR - page, b"keep")
    flash.erase_page(PROFILES_ADDR + 10)
    assert flash.read_bytes(PROFILES_ADDR, 4) == b"\xff\xff\xff\xff"
    assert flash.read_bytes(PROFILES_ADDR - page, 4) == b"keep"
    flash.write_bytes(PROFILES_ADDR, b"new!")
    assert flash.read_bytes(PROFILES_ADDR, 4) == b"new!"


def test_misaligned_word_write_fails(flash):
    with pytest.raises(FlashError):
        flash.write_word(PROFILES_ADDR + 1, 0x1234)


def test_out_of_range_access_fails(flash):
    end = flash.base_address + flash.size
    with pytest.raises(FlashError):
        flash.read_byte(end)
    with pytest.raises(FlashError):
        flash.read_bytes(flash.base_address - 1, 2)
    with pytest.raises(FlashError):
        flash.write_bytes(end - 1, b"ab")
    with pytest.raises(FlashError):
        flash.erase_page(end)


def test_invalid_word_value(flash):
    with pytest.raises(ValueError):
        flash.write_word(PROFILES_ADDR, 0x10000)


def test_invalid_geometry():
    with pytest.raises(ValueError):
        FlashMemory(size=1000, page_size=1024)