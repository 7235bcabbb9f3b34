"""Building blocks for a staged heating oven controller: ring buffer, parsers, emulated flash,
command line, buttons, indicators, SSD1306 display driver and heater/fan outputs."""

__version__ = "0.1.0"