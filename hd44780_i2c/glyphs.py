from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidConfigurationError

CGRAM_SLOTS = 8
GLYPH_ROWS = 8


@dataclass(frozen=True, slots=True)
class CustomChar:
    """One 5x8 glyph for CGRAM, top row first.

    Only the low 5 bits of each row are displayed; the rest are dropped.
    https://www.quinapalus.com/hd44780udg.html generates the row values.
    """

    rows: bytes

    def __post_init__(self) -> None:
        rows = bytes(int(r) & 0x1F for r in self.rows)
        if len(rows) != GLYPH_ROWS:
            raise InvalidConfigurationError(f"glyph must have {GLYPH_ROWS} rows, got {len(rows)}")
        object.__setattr__(self, "rows", rows)

    @classmethod
    def from_rows(cls, *rows: int) -> "CustomChar":
        return cls(bytes(int(r) & 0x1F for r in rows))

    def __bytes__(self) -> bytes:
        return self.rows

