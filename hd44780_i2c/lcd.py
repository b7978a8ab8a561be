from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from .errors import InvalidAddressError, InvalidConfigurationError
from .frames import FrameEncoder
from .glyphs import CGRAM_SLOTS, CustomChar
from .modes import (
    CLEAR_DISPLAY,
    CURSOR_SHIFT,
    DEFAULT_MODES,
    RETURN_HOME,
    SET_CGRAM_ADDR,
    SET_DDRAM_ADDR,
    SHIFT_DISPLAY,
    SHIFT_RIGHT,
    ModeSetter,
    ModeState,
    blink_off,
    blink_on,
    cursor_off,
    cursor_on,
    display_off,
    display_on,
)
from .pins import PinMapping
from .transport import Transport
from .writer import CLEAR_HOME_DELAY, INSTRUCTION_DELAY, NibbleWriter

logger = logging.getLogger(__name__)

# DDRAM address of column 0 for each row.
ROW_OFFSETS_DEFAULT = (0x00, 0x40, 0x10, 0x54)
ROW_OFFSETS_16_COL = (0x00, 0x40, 0x10, 0x50)
ROW_OFFSETS_20_COL = (0x00, 0x40, 0x14, 0x54)

DDRAM_SIZE = 0x80

# Power-on reset timing, in seconds.
POWER_ON_DELAY = 0.015
RESET_LONG_DELAY = 0.0041
RESET_SHORT_DELAY = 0.0001

# Function set, 8-bit: the only nibble an uninitialized controller is
# guaranteed to understand whatever bus width it wakes up in.
RESET_NIBBLE = 0x03
FOUR_BIT_NIBBLE = 0x02

Text = Union[str, bytes, bytearray]


@dataclass(slots=True)
class HD44780Config:
    row_offsets: tuple[int, ...] = ROW_OFFSETS_DEFAULT
    encoding: str = "latin-1"
    errors: str = "replace"

    def validate(self) -> None:
        if not self.row_offsets:
            raise InvalidConfigurationError("row_offsets must name at least one row")
        for offset in self.row_offsets:
            if not 0 <= offset < DDRAM_SIZE:
                raise InvalidConfigurationError(f"row offset 0x{offset:02X} is outside DDRAM")


class HD44780:
    """HD44780 (4-bit) behind an I2C port expander.

    Construction runs the datasheet power-on sequence, so a returned object is
    always ready for use. Any TransportError from then on means the controller
    may have received half a byte; build a new HD44780 to recover.

    Not thread-safe. One instance owns its transport.
    """

    def __init__(
        self,
        transport: Transport,
        mapping: PinMapping,
        *mode_setters: ModeSetter,
        config: Optional[HD44780Config] = None,
        backlight: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._cfg = config or HD44780Config()
        self._cfg.validate()

        modes = DEFAULT_MODES.apply(*mode_setters)
        _check_bus_width(modes)

        self._transport = transport
        self._mapping = mapping
        self._writer = NibbleWriter(transport, FrameEncoder(mapping), sleep)
        self._sleep = sleep
        self._modes = modes
        self._backlight = bool(backlight)

        self._initialize()

    def _initialize(self) -> None:
        logger.debug("power-on wait")
        self._sleep(POWER_ON_DELAY)

        # Three 8-bit function sets bring the controller to a known state
        # from any starting bus width, then one nibble switches it to 4-bit.
        logger.debug("reset sequence")
        self._writer.write_nibble(RESET_NIBBLE, rs=False, backlight=self._backlight)
        self._sleep(RESET_LONG_DELAY)
        self._writer.write_nibble(RESET_NIBBLE, rs=False, backlight=self._backlight)
        self._sleep(RESET_SHORT_DELAY)
        self._writer.write_nibble(RESET_NIBBLE, rs=False, backlight=self._backlight)
        self._sleep(RESET_SHORT_DELAY)
        self._writer.write_nibble(FOUR_BIT_NIBBLE, rs=False, backlight=self._backlight)
        self._sleep(RESET_SHORT_DELAY)

        self.clear()
        logger.debug("controller ready: %s", self._modes)

    # --- state ---

    @property
    def mapping(self) -> PinMapping:
        return self._mapping

    @property
    def config(self) -> HD44780Config:
        return self._cfg

    @property
    def modes(self) -> ModeState:
        return self._modes

    @property
    def backlight(self) -> bool:
        return self._backlight

    @property
    def is_increment(self) -> bool:
        return self._modes.is_increment

    @property
    def is_shift(self) -> bool:
        return self._modes.is_shift

    @property
    def is_display_on(self) -> bool:
        return self._modes.is_display_on

    @property
    def is_cursor_on(self) -> bool:
        return self._modes.is_cursor_on

    @property
    def is_blink_on(self) -> bool:
        return self._modes.is_blink_on

    @property
    def bus_width(self) -> int:
        return self._modes.bus_width

    @property
    def line_count(self) -> int:
        return self._modes.line_count

    @property
    def glyph_height(self) -> int:
        return self._modes.glyph_height

    # --- modes ---

    def set_mode(self, *setters: ModeSetter) -> None:
        """Apply setters left to right, then write all three mode registers."""
        modes = self._modes.apply(*setters)
        _check_bus_width(modes)
        self._modes = modes
        self.commit()

    def commit(self) -> None:
        logger.debug("commit %s", self._modes)
        for cmd in self._modes.commands():
            self.write_instruction(cmd)

    def display_on(self) -> None:
        self.set_mode(display_on)

    def display_off(self) -> None:
        self.set_mode(display_off)

    def underline_cursor_on(self) -> None:
        self.set_mode(cursor_on)

    def underline_cursor_off(self) -> None:
        self.set_mode(cursor_off)

    def blink_cursor_on(self) -> None:
        self.set_mode(blink_on)

    def blink_cursor_off(self) -> None:
        self.set_mode(blink_off)

    # --- instructions ---

    def write_instruction(self, cmd: int) -> None:
        cmd &= 0xFF
        # Clear (0x01) and home (0x02/0x03) are the two slow instructions.
        settle = CLEAR_HOME_DELAY if 0 < cmd <= 0x03 else INSTRUCTION_DELAY
        self._writer.write_byte(cmd, rs=False, backlight=self._backlight, settle=settle)

    def write_char(self, ch: int) -> None:
        self._writer.write_byte(ch & 0xFF, rs=True, backlight=self._backlight)

    def clear(self) -> None:
        """Blank the display and home the cursor.

        The controller resets its entry mode on clear, so the last known
        modes are written again straight after.
        """
        self.write_instruction(CLEAR_DISPLAY)
        self.commit()

    def home(self) -> None:
        self.write_instruction(RETURN_HOME)

    def shift_left(self) -> None:
        self.write_instruction(CURSOR_SHIFT | SHIFT_DISPLAY)

    def shift_right(self) -> None:
        self.write_instruction(CURSOR_SHIFT | SHIFT_DISPLAY | SHIFT_RIGHT)

    def move_cursor_left(self) -> None:
        self.write_instruction(CURSOR_SHIFT)

    def move_cursor_right(self) -> None:
        self.write_instruction(CURSOR_SHIFT | SHIFT_RIGHT)

    # --- text ---

    def address_for(self, line: int, column: int = 0) -> int:
        offsets = self._cfg.row_offsets
        if not 0 <= line < len(offsets):
            raise InvalidAddressError(f"line must be 0..{len(offsets) - 1}, got {line}")
        if column < 0:
            raise InvalidAddressError(f"column must be >= 0, got {column}")
        address = offsets[line] + column
        if address >= DDRAM_SIZE:
            raise InvalidAddressError(f"line {line} column {column} is past the end of DDRAM")
        return address

    def set_cursor_address(self, address: int) -> None:
        if not 0 <= address < DDRAM_SIZE:
            raise InvalidAddressError(f"DDRAM address must be 0..0x7F, got 0x{address:02X}")
        self.write_instruction(SET_DDRAM_ADDR | address)

    def set_cursor(self, column: int, line: int) -> None:
        self.set_cursor_address(self.address_for(line, column))

    def display_string(self, text: Text, line: int, column: int = 0) -> None:
        """Write text starting at (line, column).

        The cursor is positioned once; the controller's auto-increment places
        the remaining characters. Text past the end of a row continues at
        whatever DDRAM address follows, which is not the next visible row.
        """
        address = self.address_for(line, column)
        data = self._encode(text)
        self.set_cursor_address(address)
        for b in data:
            self.write_char(b)

    def write(self, text: Text) -> None:
        """Write text at the current cursor position."""
        for b in self._encode(text):
            self.write_char(b)

    def _encode(self, text: Text) -> bytes:
        if isinstance(text, (bytes, bytearray)):
            return bytes(text)
        return text.encode(self._cfg.encoding, errors=self._cfg.errors)

    # --- custom characters ---

    def load_custom_chars(self, chars: Sequence[CustomChar]) -> None:
        """Upload all eight CGRAM glyphs, slot 0 first.

        The controller's address counter is left in CGRAM; position the
        cursor (e.g. with display_string) before writing text again.
        """
        glyphs = [_as_glyph(c) for c in chars]
        if len(glyphs) != CGRAM_SLOTS:
            raise InvalidConfigurationError(f"expected {CGRAM_SLOTS} glyphs, got {len(glyphs)}")

        self.write_instruction(SET_CGRAM_ADDR)
        for glyph in glyphs:
            for row in glyph.rows:
                self.write_char(row)

    def create_char(self, slot: int, glyph: CustomChar) -> None:
        if not 0 <= slot < CGRAM_SLOTS:
            raise InvalidAddressError(f"CGRAM slot must be 0..7, got {slot}")
        glyph = _as_glyph(glyph)
        self.write_instruction(SET_CGRAM_ADDR | (slot << 3))
        for row in glyph.rows:
            self.write_char(row)

    # --- backlight ---

    def set_backlight(self, on: bool) -> None:
        self._backlight = bool(on)
        self._writer.write_raw(self._writer.encoder.idle_frame(self._backlight))

    def backlight_on(self) -> None:
        self.set_backlight(True)

    def backlight_off(self) -> None:
        self.set_backlight(False)

    # --- lifetime ---

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "HD44780":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _check_bus_width(modes: ModeState) -> None:
    if modes.bus_width != 4:
        raise InvalidConfigurationError("the expander wires D4..D7 only; bus width must stay 4-bit")


def _as_glyph(value: Union[CustomChar, bytes, Sequence[int]]) -> CustomChar:
    if isinstance(value, CustomChar):
        return value
    return CustomChar(bytes(int(r) & 0x1F for r in value))
