# ovenctl

`ovenctl` holds the building blocks for controlling a small heating oven
that runs in stages. Each part is a plain Python object. You give it
callables for hardware access and, where timing matters, a clock that
returns milliseconds. That lets the same code run against real I/O, a
simulator or a test harness. The package has no dependencies outside the
standard library.

## Installation

```
pip install ovenctl
pip install "ovenctl[test]"   # with pytest for the test suite
```

## Modules

### `ovenctl.ring_buffer`

`RingBuffer(size)` is a fixed-size byte ring buffer that holds exactly
`size` bytes.

- `write(value)` and `write_block(data)` raise `RingBufferFull` when the data
  does not fit. `write_block` writes either all of its data or none of it.
- `read()` and `read_block(max_size)` raise `RingBufferEmpty` when the buffer
  holds nothing.
- `peek()` returns the contiguous run of readable bytes and leaves them in
  the buffer.
- `clear(count)` discards up to `count` of the oldest bytes.
- `len()`, `is_empty` and `is_full` report how full the buffer is.

### `ovenctl.parsers`

- `contains_template(text, template)`: tells whether `template` occurs in
  `text`. A `*` in the template matches any character.
- `tokenize(text, delimiters, max_tokens)`: splits the text at any of the
  delimiter characters and drops empty tokens. It returns at most
  `max_tokens` tokens.
- `parse_number(text)`: reads a decimal number or a `0x`-prefixed hex number
  as a signed 32-bit value. It raises `ValueError` on trailing garbage.

```python
from ovenctl.parsers import contains_template, parse_number, tokenize

tokenize("psets  1 2", " ", 10)         # ['psets', '1', '2']
parse_number("0x1F")                    # 31
contains_template("hello world", "w*r") # True
```

### `ovenctl.flash`

`FlashMemory(base_address, size, page_size)` emulates internal flash.

- Memory starts erased, with every byte at `0xFF`.
- `erase_page(address)` erases the page that contains the address.
- `write_word(address, data)` programs one 16-bit halfword. Programming can
  only clear bits. A write that does not read back as written raises
  `FlashError`, and so do out-of-range addresses and unaligned halfword
  writes.
- `write_bytes(address, data)` pads odd edges with erased bytes.
- `read_bytes`, `read_byte`, `read_word_le` and `read_word_be` read the
  memory back.

### `ovenctl.cli`

`CommandLine(send, receive, commands, clock)` is a line-oriented console that
you drive by calling `process()` over and over. Its callables are:

- `send(data)`: returns how many bytes it accepted.
- `receive(max_size)`: returns the bytes that have arrived.
- `clock()`: returns milliseconds. It is optional and defaults to a
  monotonic clock.

The console echoes printable characters and handles backspace (`0x7F`). It
runs a line when it receives Enter (`0x0D`). A built-in `help` command lists
each `Command` with its `usage`. Unknown names print `CMD not found!`.

A command function is called as `func(cli, argv, state)`, where `state` is a
`CallState`:

- It gets `CallState.FIRST` on its first call.
- If it returns a true value it keeps running. It is then called with
  `CallState.REPEATED` on every `process()` until it returns a false value.
- Ctrl-C (`0x03`) ends it with a call in `CallState.TERMINATE`.
- Raising `InvalidArgument` prints `Incorrect arg!`.

For output inside a command, `print(text)` queues text and raises
`RingBufferFull` if the text does not fit. `safe_print(text)` keeps sending
while it queues, and raises `TimeoutError` if the output does not drain
within 100 ms.

```python
from ovenctl.cli import Command, CommandLine

sent = bytearray()
incoming = [b"echo hello\r"]

def send(data: bytes) -> int:
    sent.extend(data)
    return len(data)

def receive(max_size: int) -> bytes:
    return incoming.pop(0) if incoming else b""

def echo(cli, argv, state):
    cli.print("\r\n" + " ".join(argv[1:]))
    return False

cli = CommandLine(send, receive, [Command("echo", echo, "TEXT")], clock=lambda: 0)
cli.process()
print(sent.decode())   # "echo hello\r\nhello\r\n> "
```

### `ovenctl.button`

`Button(read_pin, inverse, clock)` is a debounced button that you poll with
`process()`.

- The debounce time is 100 ms.
- A release before 1000 ms sets a short-press event. Holding the button
  longer sets a long-press event instead.
- `take_press_event()` and `take_long_press_event()` return an event flag
  and clear it.
- `clear_events()` clears both flags.
- `is_pressed()` gives the raw pin state, taking `inverse` into account.
- `state` holds the current `ButtonState`.

### `ovenctl.indicators`

`Indicators(set_led, set_buzzer, clock)` drives a process LED and a buzzer,
which share an output.

- `led_process(enabled)` turns the steady LED on or off.
- `led_error(enabled)` makes the LED blink every 600 ms.
- `short_beep()`, `process_done_beep()` and `error_beep()` queue the
  predefined `Melody` patterns.
- `buzzer_terminate()` stops a melody at once.
- While a melody plays, the LED is left alone.

### `ovenctl.errors`

`ErrorHandler` gathers `FailCode` and `WarningCode` flags, which are never
cleared.

- `set_fail_fw_error(code)` keeps the extended code of the first firmware
  error only.
- `is_failed` tells whether any fail flag is set.

### `ovenctl.ssd1306`

`Display(write)` drives a 128x32 SSD1306 panel through `write(bytes)`, one
bus transfer per call. It has these methods: `init`, `standby`, `clear`,
`set_image`, `print_char`, `print_str` and `print_digit`.

The built-in 5x8 font draws lower-case letters with the upper-case glyphs.
It scales by `FontMode.K1`, `K2` or `K3`.

Helper functions:

- `digit_to_string(digit, visible_zeros)`: renders a 16-bit number as five
  characters.
- `glyph_columns(char, mode)`: returns the data bytes for one glyph.

`FrameBuffer` is a model of the panel's graphic RAM. `feed(data)` takes the
same transfers that `Display` writes, and `pixel(x, y)` tells whether a
pixel is lit. It is handy for checking output without hardware.

```python
from ovenctl.ssd1306 import Display, FontMode, FrameBuffer

frame = FrameBuffer()
display = Display(frame.feed)
display.init()
display.print_str("HOT", FontMode.K2, 0, 0)
```

### `ovenctl.outputs`

`AdcChannel(channel_number, samples_qty, ref_mv)` averages batches of raw
converter samples.

- `add_sample(raw)` adds one sample to the batch.
- `take_raw()` and `take_voltage_mv()` return the average once a batch is
  complete, and `None` before that.

`Outputs(set_fan, set_heater, adc_channel, clock)` controls the heater and
the fan.

- Each `process()` updates `current_temperature_c` as millivolts / 10.
- `heater_enable(target)` pulses the heater: 1 s on, 10 s off. It caps the
  target at 200 °C. With hysteresis, it stops heating above target − 7 °C
  and resumes below target − 12 °C.
- `fan_enable(period_s, duty_cycle_pct)` cycles the fan. A zero period or
  zero duty cycle stops it.
- `heater_disable()` and `fan_disable()` switch the outputs off.

## What the package does not do

- It stores no heating profiles. There is no profile data format and no code
  that loads profiles from or saves them to `FlashMemory`.
- It has no ready-made console commands. `CommandLine` comes with only
  `help`, and you supply your own `Command` objects.
- It draws no menus or process screens. `Display` offers text and digit
  primitives only.
- It has no top-level controller that ties buttons, indicators, outputs and
  the display into a heating run. You write that loop yourself.
- It has no command-line program.

## Running the tests

```
pytest
```