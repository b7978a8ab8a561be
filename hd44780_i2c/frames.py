from __future__ import annotations

from .pins import PinMapping, bit_mask


class FrameEncoder:
    """Turns bytes into expander frames for one pin mapping.

    The controller samples D4..D7 on the falling edge of E, so both halves of
    a byte land on the same four pins: high nibble first, then low nibble.
    Instructions and character data differ only by the RS bit.
    """

    def __init__(self, mapping: PinMapping) -> None:
        self._mapping = mapping

        # Cache masks
        self._rs_mask = bit_mask(mapping.rs)
        self._e_mask = bit_mask(mapping.e)
        self._bl_mask = bit_mask(mapping.bl)
        self._data_masks = (
            bit_mask(mapping.d4),
            bit_mask(mapping.d5),
            bit_mask(mapping.d6),
            bit_mask(mapping.d7),
        )

    @property
    def mapping(self) -> PinMapping:
        return self._mapping

    @property
    def enable_mask(self) -> int:
        return self._e_mask

    def idle_frame(self, backlight: bool) -> int:
        """Frame with every line low except the backlight level."""
        if backlight == self._mapping.bl_active_high:
            return self._bl_mask
        return 0x00

    def encode_nibble(self, nibble: int, rs: bool, backlight: bool) -> int:
        # RW stays low: this driver never reads from the controller.
        state = self.idle_frame(backlight)
        if rs:
            state |= self._rs_mask
        for i, mask in enumerate(self._data_masks):
            if nibble & (1 << i):
                state |= mask
        return state

    def encode(self, value: int, rs: bool, backlight: bool) -> tuple[int, int]:
        value &= 0xFF
        return (
            self.encode_nibble(value >> 4, rs, backlight),
            self.encode_nibble(value & 0x0F, rs, backlight),
        )

    def decode_nibble(self, frame: int) -> int:
        nibble = 0
        for i, mask in enumerate(self._data_masks):
            if frame & mask:
                nibble |= 1 << i
        return nibble

    def is_data(self, frame: int) -> bool:
        return bool(frame & self._rs_mask)
