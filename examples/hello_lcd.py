from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

# Allow running this file directly via: `python examples/hello_lcd.py`
# by ensuring the project root (parent of `examples/`) is on sys.path.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from hd44780_i2c import (
    HD44780,
    HD44780Config,
    MCP23008_PIN_MAP,
    PCF8574_PIN_MAP,
    ROW_OFFSETS_20_COL,
    CustomChar,
    HD44780Error,
    MCP2221ATransport,
    MCP23008Transport,
    SMBusTransport,
)

# Battery charge levels, empty to full, plus a blank slot.
BATTERY = [
    CustomChar.from_rows(0xE, 0x1B, 0x11, 0x11, 0x11, 0x11, 0x11, 0x1F),
    CustomChar.from_rows(0xE, 0x1B, 0x11, 0x11, 0x11, 0x11, 0x1F, 0x1F),
    CustomChar.from_rows(0xE, 0x1B, 0x11, 0x11, 0x11, 0x1F, 0x1F, 0x1F),
    CustomChar.from_rows(0xE, 0x1B, 0x11, 0x11, 0x1F, 0x1F, 0x1F, 0x1F),
    CustomChar.from_rows(0xE, 0x1B, 0x11, 0x1F, 0x1F, 0x1F, 0x1F, 0x1F),
    CustomChar.from_rows(0xE, 0x1B, 0x1F, 0x1F, 0x1F, 0x1F, 0x1F, 0x1F),
    CustomChar.from_rows(0xE, 0x1F, 0x1F, 0x1F, 0x1F, 0x1F, 0x1F, 0x1F),
    CustomChar.from_rows(0, 0, 0, 0, 0, 0, 0, 0),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="HD44780 via an I2C port expander")
    parser.add_argument(
        "--address",
        default=None,
        help="Expander 7-bit I2C address (default: 0x27 for pcf8574, 0x20 for mcp23008)",
    )
    parser.add_argument("--bus", type=int, default=1, help="Linux I2C bus number (default: 1)")
    parser.add_argument(
        "--mcp2221a",
        action="store_true",
        help="Use an MCP2221A USB bridge instead of /dev/i2c-N",
    )
    parser.add_argument(
        "--map",
        choices=["pcf8574", "mcp23008"],
        default="pcf8574",
        help="Expander -> HD44780 pin mapping (default: pcf8574)",
    )
    parser.add_argument("--rows-20col", action="store_true", help="Use 20x4 row addresses")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log driver debug output")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.mcp2221a and args.map == "mcp23008":
        parser.error("--mcp2221a only drives byte-write expanders (pcf8574)")

    address_7bit = int(args.address, 0) if args.address else {"pcf8574": 0x27, "mcp23008": 0x20}[args.map]
    mapping = {"pcf8574": PCF8574_PIN_MAP, "mcp23008": MCP23008_PIN_MAP}[args.map]
    config = HD44780Config(row_offsets=ROW_OFFSETS_20_COL) if args.rows_20col else HD44780Config()

    if args.mcp2221a:
        transport = MCP2221ATransport(address_7bit=address_7bit)
    elif args.map == "mcp23008":
        transport = MCP23008Transport(bus=args.bus, address_7bit=address_7bit)
    else:
        transport = SMBusTransport(bus=args.bus, address_7bit=address_7bit)

    try:
        transport.open()
        with HD44780(transport, mapping, config=config) as lcd:
            lcd.display_string("HD44780 via I2C", 0)
            lcd.display_string(f"@0x{address_7bit:02X}", 1)
            time.sleep(2)

            lcd.clear()
            lcd.load_custom_chars(BATTERY)
            lcd.display_string("Charging ", 0)
            for i in range(21):
                lcd.display_string(bytes([i % 7]), 0, 9)
                time.sleep(0.3)

            lcd.backlight_off()
            time.sleep(1)
            lcd.backlight_on()
            lcd.blink_cursor_on()
    except HD44780Error as exc:
        transport.close()
        raise SystemExit(f"LCD error: {exc}") from exc


if __name__ == "__main__":
    main()
