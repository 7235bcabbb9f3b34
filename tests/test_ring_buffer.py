import pytest

from ovenctl.ring_buffer import RingBuffer, RingBufferEmpty, RingBufferFull


def test_single_bytes_round_trip():
    buf = RingBuffer(4)
    for value in (1, 2, 3):
        buf.write(value)
    assert len(buf) == 3
    assert [buf.read(), buf.read(), buf.read()] == [1, 2, 3]
    assert buf.is_empty


def test_read_from_empty_raises():
    buf = RingBuffer(4)
    with pytest.raises(RingBufferEmpty):
        buf.read()
    with pytest.raises(RingBufferEmpty):
        buf.read_block(3)


def test_write_until_full():
    buf = RingBuffer(3)
    buf.write_block(b"abc")
    assert buf.is_full
    assert len(buf) == 3
    with pytest.raises(RingBufferFull):
        buf.write(1)
    with pytest.raises(RingBufferFull):
        buf.write_block(b"x")


def test_write_block_too_large_leaves_buffer_untouched():
    buf = RingBuffer(4)
    buf.write_block(b"ab")
    with pytest.raises(RingBufferFull):
        buf.write_block(b"cde")
    assert buf.read_block(10) == b"ab"


def test_wrap_around_block():
    buf = RingBuffer(4)
    buf.write_block(b"abc")
    assert buf.read_block(2) == b"ab"
    buf.write_block(b"def")
    assert buf.is_full
    assert buf.peek() == b"cd"
    assert buf.read_block(10) == b"cdef"
    assert buf.is_empty


def test_read_block_limited():
    buf = RingBuffer(8)
    buf.write_block(b"hello")
    assert buf.read_block(0) == b""
    assert buf.read_block(3) == b"hel"
    assert buf.read_block(3) == b"lo"


def test_peek_does_not_consume():
    buf = RingBuffer(8)
    assert buf.peek() == b""
    buf.write_block(b"xyz")
    assert buf.peek() == b"xyz"
    assert len(buf) == 3


def test_clear_discards_oldest():
    buf = RingBuffer(8)
    buf.write_block(b"abcdef")
    buf.clear(4)
    assert buf.read_block(8) == b"ef"
    buf.clear(5)
    assert buf.is_empty


def test_clear_on_empty_is_harmless():
    buf = RingBuffer(2)
    buf.clear(1)
    buf.write_block(b"qr")
    assert buf.read_block(2) == b"qr"


def test_empty_block_write_keeps_empty():
    buf = RingBuffer(2)
    buf.write_block(b"")
    assert buf.is_empty
    assert len(buf) == 0


def test_invalid_size():
    with pytest.raises(ValueError):
        RingBuffer(0)