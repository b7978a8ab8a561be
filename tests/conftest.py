"""Shared fixtures: a recording transport and a sleep that never sleeps."""

from __future__ import annotations

from typing import Optional

import pytest

from hd44780_i2c import HD44780, PCF8574_PIN_MAP, FrameEncoder, TransportError

# 4 reset nibbles (3 writes each) + clear and 3 mode commits (6 writes each)
INIT_WRITES = 4 * 3 + 4 * 6


class RecordingTransport:
    """Keeps every byte written; optionally fails the write at `fail_at`."""

    def __init__(self, fail_at: Optional[int] = None) -> None:
        self.writes: list[int] = []
        self.attempts = 0
        self.fail_at = fail_at
        self.closed = False

    def write_byte(self, value: int) -> None:
        index = self.attempts
        self.attempts += 1
        if self.fail_at is not None and index == self.fail_at:
            raise TransportError(f"simulated failure on write {index}")
        self.writes.append(value)

    def close(self) -> None:
        self.closed = True

    def reset(self) -> None:
        self.writes.clear()
        self.attempts = 0


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def latched_frames(writes: list[int], encoder: FrameEncoder) -> list[int]:
    """Frames the controller samples: the writes with E high."""
    return [w & ~encoder.enable_mask for w in writes if w & encoder.enable_mask]


def decode_bytes(writes: list[int], encoder: FrameEncoder) -> list[tuple[bool, int]]:
    """Rebuild (is_data, value) pairs from a run of two-nibble transfers."""
    frames = latched_frames(writes, encoder)
    assert len(frames) % 2 == 0, "odd number of nibbles"
    out = []
    for high, low in zip(frames[0::2], frames[1::2]):
        assert encoder.is_data(high) == encoder.is_data(low)
        out.append((encoder.is_data(high), encoder.decode_nibble(high) << 4 | encoder.decode_nibble(low)))
    return out


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def encoder() -> FrameEncoder:
    return FrameEncoder(PCF8574_PIN_MAP)


@pytest.fixture
def lcd(transport: RecordingTransport, sleeps: SleepRecorder) -> HD44780:
    """A ready display with the init traffic already discarded."""
    display = HD44780(transport, PCF8574_PIN_MAP, sleep=sleeps)
    transport.reset()
    sleeps.calls.clear()
    return display
