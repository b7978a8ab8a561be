from .errors import HD44780Error, InvalidAddressError, InvalidConfigurationError, TransportError
from .pins import PinMapping, PCF8574_PIN_MAP, MCP23008_PIN_MAP
from .frames import FrameEncoder
from .writer import NibbleWriter
from .glyphs import CustomChar
from .modes import (
    DEFAULT_MODES,
    DisplayMode,
    EntryMode,
    FunctionMode,
    ModeSetter,
    ModeState,
    blink_off,
    blink_on,
    cursor_off,
    cursor_on,
    display_off,
    display_on,
    eight_bit_bus,
    entry_decrement,
    entry_increment,
    font_5x8,
    font_5x10,
    four_bit_bus,
    one_line,
    shift_off,
    shift_on,
    two_lines,
)
from .lcd import (
    HD44780,
    HD44780Config,
    ROW_OFFSETS_16_COL,
    ROW_OFFSETS_20_COL,
    ROW_OFFSETS_DEFAULT,
)
from .transport import MCP2221ATransport, MCP23008Transport, SMBusTransport, Transport

__all__ = [
    "HD44780Error",
    "InvalidAddressError",
    "InvalidConfigurationError",
    "TransportError",
    "PinMapping",
    "PCF8574_PIN_MAP",
    "MCP23008_PIN_MAP",
    "FrameEncoder",
    "NibbleWriter",
    "CustomChar",
    "DEFAULT_MODES",
    "DisplayMode",
    "EntryMode",
    "FunctionMode",
    "ModeSetter",
    "ModeState",
    "blink_off",
    "blink_on",
    "cursor_off",
    "cursor_on",
    "display_off",
    "display_on",
    "eight_bit_bus",
    "entry_decrement",
    "entry_increment",
    "font_5x8",
    "font_5x10",
    "four_bit_bus",
    "one_line",
    "shift_off",
    "shift_on",
    "two_lines",
    "HD44780",
    "HD44780Config",
    "ROW_OFFSETS_16_COL",
    "ROW_OFFSETS_20_COL",
    "ROW_OFFSETS_DEFAULT",
    "MCP2221ATransport",
    "MCP23008Transport",
    "SMBusTransport",
    "Transport",
]
