"""A small line-oriented command shell over a byte stream."""

from __future__ import annotations

import contextlib
import enum
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Union

from ovenctl.parsers import tokenize
from ovenctl.ring_buffer import RingBuffer, RingBufferFull

CLI_CMD_MAX_ARG_QTY = 10
CLI_TX_BUFF_SIZE = 100
CLI_RX_BUFF_SIZE = 100
CLI_RX_RAW_BUFF_SIZE = 100
CLI_PROMPT = "\r\n> "
SAFE_PRINT_TIMEOUT_MS = 100

_NOT_FOUND_MESSAGE = "\r\nCMD not found!"
_INVALID_ARG_MESSAGE = "Incorrect arg!\r\n"

_KEY_ENTER = 0x0D
_KEY_BACKSPACE = 0x7F
_KEY_CTRL_C = 0x03

Text = Union[str, bytes]


class CallState(enum.Enum):
    """Why a command callback is being called."""

    FIRST = enum.auto()
    REPEATED = enum.auto()
    TERMINATE = enum.auto()


class InvalidArgument(Exception):
    """Raised by a command whose arguments are wrong."""


CommandFunc = Callable[["CommandLine", Sequence[str], CallState], Optional[bool]]


@dataclass(frozen=True)
class Command:
    """A named command.

    ``func`` returns a true value while it wants to keep running; it is then
    called again with :attr:`CallState.REPEATED` on every ``process`` call
    until it returns a false value or the user presses Ctrl-C.
    ``usage`` is shown by ``help`` after the name; ``None`` shows nothing.
    """

    name: str
    func: CommandFunc
    usage: Optional[str] = None


def _encode(text: Text) -> bytes:
    if isinstance(text, str):
        return text.encode("latin-1")
    return bytes(text)


def _default_clock() -> float:
    return time.monotonic() * 1000


class CommandLine:
    """Line editor and command dispatcher driven by repeated ``process`` calls.

    ``send(data)`` returns how many bytes it accepted; ``receive(max_size)``
    returns the bytes received so far (possibly none); ``clock()`` returns
    milliseconds.
    """

    def __init__(
        self,
        send: Callable[[bytes], int],
        receive: Callable[[int], bytes],
        commands: Iterable[Command],
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._send = send
        self._receive = receive
        self.commands = tuple(commands)
        self._clock = clock or _default_clock
        self._tx = RingBuffer(CLI_TX_BUFF_SIZE)
        self._line: list[str] = []
        self._overflow = False
        self._active: Optional[Command] = None
        self._argv: list[str] = []

    @property
    def active_command(self) -> Optional[Command]:
        """The command that is still running, if any."""
        return self._active

    def process(self) -> None:
        """Handle input, run the active command and send queued output."""
        self._handle_input()
        self._run_active()
        self._flush()

    def print(self, text: Text) -> None:
        """Queue ``text`` for sending; raises :class:`RingBufferFull` if it does not fit."""
        self._tx.write_block(_encode(text))

    def safe_print(self, text: Text) -> None:
        """Queue ``text``, sending meanwhile; raises :class:`TimeoutError` if stuck."""
        data = _encode(text)
        deadline = self._clock() + SAFE_PRINT_TIMEOUT_MS
        while data:
            self._flush()
            block = data[:CLI_TX_BUFF_SIZE]
            try:
                self._tx.write_block(block)
            except RingBufferFull:
                pass
            else:
                data = data[len(block):]
            if data and self._clock() >= deadline:
                raise TimeoutError("output stream does not drain")

    def _emit(self, text: Text) -> None:
        with contextlib.suppress(RingBufferFull):
            self.print(text)

    def _safe_emit(self, text: Text) -> None:
        with contextlib.suppress(TimeoutError):
            self.safe_print(text)

    def _echo(self, byte: int) -> None:
        with contextlib.suppress(RingBufferFull):
            self._tx.write(byte)

    def _flush(self) -> None:
        data = self._tx.peek()
        if data:
            accepted = self._send(data) or 0
            self._tx.clear(min(len(data), accepted))

    def _handle_input(self) -> None:
        for byte in self._receive(CLI_RX_RAW_BUFF_SIZE) or b"":
            if self._active is None:
                if 0x20 <= byte <= 0x7E:
                    self._echo(byte)
                    if len(self._line) < CLI_RX_BUFF_SIZE - 1:
                        self._line.append(chr(byte))
                    else:
                        self._overflow = True
                elif byte == _KEY_BACKSPACE:
                    self._echo(byte)
                    if self._line and not self._overflow:
                        self._line.pop()
                elif byte == _KEY_ENTER:
                    self._start()
            elif byte == _KEY_CTRL_C:
                self._break()

    def _start(self) -> None:
        self._argv = tokenize("".join(self._line), " ", CLI_CMD_MAX_ARG_QTY)
        if not self._argv:
            self._emit(CLI_PROMPT)
            return
        if self._overflow:
            self._line.clear()
            self._overflow = False
            self._emit(_NOT_FOUND_MESSAGE)
            self._emit(CLI_PROMPT)
            return

        name = self._argv[0]
        command = next((cmd for cmd in reversed(self.commands) if cmd.name == name), None)
        if command is not None:
            self._active = command
            try:
                pending = command.func(self, self._argv, CallState.FIRST)
            except InvalidArgument:
                self._finish(_INVALID_ARG_MESSAGE)
                return
            if not pending:
                self._finish()
        elif name == "help":
            self._help()
            self._line.clear()
            self._emit(CLI_PROMPT)
        else:
            self._line.clear()
            self._emit(_NOT_FOUND_MESSAGE)
            self._emit(CLI_PROMPT)

    def _run_active(self) -> None:
        if self._active is None:
            return
        try:
            pending = self._active.func(self, self._argv, CallState.REPEATED)
        except InvalidArgument:
            pending = False
        if not pending:
            self._finish()

    def _break(self) -> None:
        if self._active is None:
            return
        with contextlib.suppress(InvalidArgument):
            self._active.func(self, self._argv, CallState.TERMINATE)
        self._finish()

    def _finish(self, message: str = "") -> None:
        self._active = None
        self._line.clear()
        if message:
            self._emit(message)
        self._emit(CLI_PROMPT)

    def _help(self) -> None:
        for command in self.commands:
            self._safe_emit("\r\n")
            self._safe_emit(command.name)
            if command.usage is not None:
                self._safe_emit(" ")
                self._safe_emit(command.usage)
        self._safe_emit("\r\n")