from __future__ import annotations

import time
from typing import Callable

from .frames import FrameEncoder
from .transport import Transport

# HD44780 timing, in seconds.
SETTLE_DELAY = 0.000001  # before every expander write
ENABLE_HOLD_DELAY = 0.0002  # E high
POST_STROBE_DELAY = 0.00003  # E low again, before the next frame
INSTRUCTION_DELAY = 0.00004  # most instructions
CLEAR_HOME_DELAY = 0.0016  # clear display / return home


class NibbleWriter:
    """Strobes frames onto the expander.

    Each frame is written three times: E low, E high, E low. The first
    failing write raises TransportError and nothing after it is sent.
    """

    def __init__(
        self,
        transport: Transport,
        encoder: FrameEncoder,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._transport = transport
        self._encoder = encoder
        self._sleep = sleep

    @property
    def encoder(self) -> FrameEncoder:
        return self._encoder

    def write_raw(self, frame: int) -> None:
        self._sleep(SETTLE_DELAY)
        self._transport.write_byte(frame & 0xFF)

    def strobe(self, frame: int) -> None:
        e_mask = self._encoder.enable_mask
        frame &= ~e_mask

        self.write_raw(frame)
        self.write_raw(frame | e_mask)
        self._sleep(ENABLE_HOLD_DELAY)
        self.write_raw(frame)
        self._sleep(POST_STROBE_DELAY)

    def write_nibble(self, nibble: int, rs: bool, backlight: bool) -> None:
        self.strobe(self._encoder.encode_nibble(nibble & 0x0F, rs, backlight))

    def write_byte(self, value: int, rs: bool, backlight: bool, settle: float = INSTRUCTION_DELAY) -> None:
        high, low = self._encoder.encode(value, rs, backlight)
        self.strobe(high)
        self.strobe(low)
        self._sleep(settle)
