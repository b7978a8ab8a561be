"""Mode registers of the HD44780.

The controller has three write-only mode registers. Each one is an opcode
prefix OR'd with option bits; an option's "off" half is the cleared bit
(e.g. decrement is entry mode without ``INCREMENT``). The driver keeps the
last written value in a :class:`ModeState` since it cannot read them back.

Setters are plain functions ``ModeState -> ModeState``. They only change the
in-memory value; :meth:`hd44780_i2c.lcd.HD44780.set_mode` writes them out.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntFlag
from typing import Callable

# Instruction opcodes
CLEAR_DISPLAY = 0x01
RETURN_HOME = 0x02
SET_ENTRY_MODE = 0x04
SET_DISPLAY_MODE = 0x08
CURSOR_SHIFT = 0x10
SET_FUNCTION_MODE = 0x20
SET_CGRAM_ADDR = 0x40
SET_DDRAM_ADDR = 0x80

# Cursor/display shift options
SHIFT_DISPLAY = 0x08
SHIFT_RIGHT = 0x04


class EntryMode(IntFlag):
    SHIFT = 0x01
    INCREMENT = 0x02


class DisplayMode(IntFlag):
    BLINK = 0x01
    CURSOR = 0x02
    DISPLAY = 0x04


class FunctionMode(IntFlag):
    FONT_5X10 = 0x04
    TWO_LINES = 0x08
    EIGHT_BIT = 0x10


@dataclass(frozen=True, slots=True)
class ModeState:
    entry: EntryMode = EntryMode.INCREMENT
    display: DisplayMode = DisplayMode.DISPLAY
    function: FunctionMode = FunctionMode.TWO_LINES

    def apply(self, *setters: "ModeSetter") -> "ModeState":
        state = self
        for setter in setters:
            state = setter(state)
        return state

    def commands(self) -> tuple[int, int, int]:
        """Instruction bytes in commit order: entry, display, function."""
        return (
            SET_ENTRY_MODE | int(self.entry),
            SET_DISPLAY_MODE | int(self.display),
            SET_FUNCTION_MODE | int(self.function),
        )

    @property
    def is_increment(self) -> bool:
        return EntryMode.INCREMENT in self.entry

    @property
    def is_shift(self) -> bool:
        return EntryMode.SHIFT in self.entry

    @property
    def is_display_on(self) -> bool:
        return DisplayMode.DISPLAY in self.display

    @property
    def is_cursor_on(self) -> bool:
        return DisplayMode.CURSOR in self.display

    @property
    def is_blink_on(self) -> bool:
        return DisplayMode.BLINK in self.display

    @property
    def bus_width(self) -> int:
        return 8 if FunctionMode.EIGHT_BIT in self.function else 4

    @property
    def line_count(self) -> int:
        return 2 if FunctionMode.TWO_LINES in self.function else 1

    @property
    def glyph_height(self) -> int:
        return 10 if FunctionMode.FONT_5X10 in self.function else 8


ModeSetter = Callable[[ModeState], ModeState]

# Power-on defaults: 4-bit bus, two lines, 5x8 glyphs, increment without
# shift, display on, no cursor, no blink.
DEFAULT_MODES = ModeState()


def _entry(flag: EntryMode, on: bool) -> ModeSetter:
    def setter(state: ModeState) -> ModeState:
        entry = state.entry | flag if on else state.entry & ~flag
        return replace(state, entry=EntryMode(entry))

    return setter


def _display(flag: DisplayMode, on: bool) -> ModeSetter:
    def setter(state: ModeState) -> ModeState:
        display = state.display | flag if on else state.display & ~flag
        return replace(state, display=DisplayMode(display))

    return setter


def _function(flag: FunctionMode, on: bool) -> ModeSetter:
    def setter(state: ModeState) -> ModeState:
        function = state.function | flag if on else state.function & ~flag
        return replace(state, function=FunctionMode(function))

    return setter


entry_increment = _entry(EntryMode.INCREMENT, True)
entry_decrement = _entry(EntryMode.INCREMENT, False)
shift_on = _entry(EntryMode.SHIFT, True)
shift_off = _entry(EntryMode.SHIFT, False)

display_on = _display(DisplayMode.DISPLAY, True)
display_off = _display(DisplayMode.DISPLAY, False)
cursor_on = _display(DisplayMode.CURSOR, True)
cursor_off = _display(DisplayMode.CURSOR, False)
blink_on = _display(DisplayMode.BLINK, True)
blink_off = _display(DisplayMode.BLINK, False)

# The driver always talks 4-bit after init; an 8-bit function set would
# desynchronize it from the controller.
four_bit_bus = _function(FunctionMode.EIGHT_BIT, False)
eight_bit_bus = _function(FunctionMode.EIGHT_BIT, True)
one_line = _function(FunctionMode.TWO_LINES, False)
two_lines = _function(FunctionMode.TWO_LINES, True)
font_5x8 = _function(FunctionMode.FONT_5X10, False)
font_5x10 = _function(FunctionMode.FONT_5X10, True)
