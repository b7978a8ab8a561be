from __future__ import annotations

from dataclasses import dataclass, fields

from .errors import InvalidConfigurationError


@dataclass(frozen=True, slots=True)
class PinMapping:
    """Expander bit mapping for an HD44780 in 4-bit mode.

    Bits are expander pin indices (0..7). Every signal needs its own pin;
    a shared pin would drive two lines at once, so duplicates are rejected
    here rather than on the first write.
    """

    rs: int
    rw: int
    e: int
    bl: int
    d4: int
    d5: int
    d6: int
    d7: int
    bl_active_high: bool = True

    def __post_init__(self) -> None:
        used: dict[int, str] = {}
        for name, bit in self.signals().items():
            if not isinstance(bit, int) or not 0 <= bit <= 7:
                raise InvalidConfigurationError(f"pin {name} must be 0..7, got {bit!r}")
            if bit in used:
                raise InvalidConfigurationError(
                    f"pins {used[bit]} and {name} share expander bit {bit}"
                )
            used[bit] = name

    def signals(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "bl_active_high"}

    @property
    def used_mask(self) -> int:
        mask = 0
        for bit in self.signals().values():
            mask |= bit_mask(bit)
        return mask


# PCF8574 backpack (very common): P0=RS, P1=RW, P2=E, P3=BL, P4..P7=D4..D7
PCF8574_PIN_MAP = PinMapping(rs=0, rw=1, e=2, bl=3, d4=4, d5=5, d6=6, d7=7, bl_active_high=True)

# MCP23008 backpack (Adafruit style): GP0 unused (RW tied low), GP1=RS, GP2=E,
# GP3..GP6=D4..D7, GP7=BL. Drive it through MCP23008Transport, which writes OLAT.
MCP23008_PIN_MAP = PinMapping(rs=1, rw=0, e=2, bl=7, d4=3, d5=4, d6=5, d7=6, bl_active_high=True)


def bit_mask(bit: int) -> int:
    if not 0 <= bit <= 7:
        raise InvalidConfigurationError(f"expander bit must be 0..7, got {bit}")
    return 1 << bit
