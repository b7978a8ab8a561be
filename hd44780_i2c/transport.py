from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .errors import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """One-byte write access to the port expander."""

    def write_byte(self, value: int) -> None: ...

    def close(self) -> None: ...


def _check_address(address_7bit: int) -> None:
    if not (0 <= address_7bit <= 0x7F):
        raise ValueError(f"I2C 7-bit address must be 0..0x7F, got 0x{address_7bit:02X}")


@dataclass(slots=True)
class SMBusTransport:
    """Linux i2c-dev transport (``/dev/i2c-<bus>``) via smbus2."""

    bus: int = 1
    address_7bit: int = 0x27
    _smbus: Optional[object] = None

    def open(self) -> "SMBusTransport":
        if self._smbus is not None:
            return self
        _check_address(self.address_7bit)

        from smbus2 import SMBus

        try:
            self._smbus = SMBus(self.bus)
        except OSError as exc:
            raise TransportError(f"cannot open I2C bus {self.bus}: {exc}") from exc
        logger.debug("opened /dev/i2c-%d for address 0x%02X", self.bus, self.address_7bit)
        return self

    def write_byte(self, value: int) -> None:
        if self._smbus is None:
            raise TransportError("SMBusTransport not opened. Call .open() first.")
        try:
            self._smbus.write_byte(self.address_7bit, value & 0xFF)
        except OSError as exc:
            raise TransportError(
                f"write of 0x{value & 0xFF:02X} to 0x{self.address_7bit:02X} failed: {exc}"
            ) from exc

    def close(self) -> None:
        if self._smbus is None:
            return
        self._smbus.close()
        self._smbus = None
        logger.debug("closed /dev/i2c-%d", self.bus)

    def __enter__(self) -> "SMBusTransport":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()


MCP23008_IODIR = 0x00
MCP23008_OLAT = 0x0A


@dataclass(slots=True)
class MCP23008Transport(SMBusTransport):
    """MCP23008 expander on ``/dev/i2c-<bus>``.

    Unlike the PCF8574, the MCP23008 powers up with every pin as an input and
    a bare byte write only moves its register pointer. Opening sets all pins
    to outputs; each frame is then written to the output latch.
    """

    address_7bit: int = 0x20

    def open(self) -> "MCP23008Transport":
        if self._smbus is not None:
            return self
        SMBusTransport.open(self)
        try:
            self._write_register(MCP23008_IODIR, 0x00)
        except TransportError:
            self.close()
            raise
        return self

    def write_byte(self, value: int) -> None:
        if self._smbus is None:
            raise TransportError("MCP23008Transport not opened. Call .open() first.")
        self._write_register(MCP23008_OLAT, value & 0xFF)

    def _write_register(self, register: int, value: int) -> None:
        try:
            self._smbus.write_byte_data(self.address_7bit, register, value)
        except OSError as exc:
            raise TransportError(
                f"write of 0x{value:02X} to register 0x{register:02X} of 0x{self.address_7bit:02X} failed: {exc}"
            ) from exc


@dataclass(slots=True)
class MCP2221ATransport:
    """USB-to-I2C transport over PyMCP2221A.

    The upstream library has had multiple API variants across forks.
    This wrapper tries a couple of common import/class shapes.
    """

    address_7bit: int = 0x27
    i2c_speed_hz: int = 100_000
    _dev: Optional[object] = None

    def open(self) -> "MCP2221ATransport":
        if self._dev is not None:
            return self
        _check_address(self.address_7bit)

        # Try a few known import styles.
        last_err: Optional[Exception] = None

        for importer in (self._try_import_style_a, self._try_import_style_b, self._try_import_style_c):
            try:
                self._dev = importer()
                break
            except Exception as exc:  # pragma: no cover
                last_err = exc

        if self._dev is None:
            raise TransportError(
                "Could not initialize MCP2221A via PyMCP2221A. "
                "Please verify the package is installed and compatible."
            ) from last_err

        self._configure_speed()
        logger.debug("opened MCP2221A at %d Hz for address 0x%02X", self.i2c_speed_hz, self.address_7bit)
        return self

    def _try_import_style_a(self) -> object:
        # from PyMCP2221A import PyMCP2221A
        # dev = PyMCP2221A.PyMCP2221A()
        from PyMCP2221A import PyMCP2221A  # type: ignore

        return PyMCP2221A.PyMCP2221A()

    def _try_import_style_b(self) -> object:
        from PyMCP2221A import MCP2221A  # type: ignore

        return MCP2221A.MCP2221A()

    def _try_import_style_c(self) -> object:
        from pymcp2221a import MCP2221A  # type: ignore

        return MCP2221A()

    def _configure_speed(self) -> None:
        # Different forks use different method names.
        for method_name in ("I2C_speed", "i2c_setspeed", "i2c_set_speed", "I2C_SetSpeed"):
            method = getattr(self._dev, method_name, None)
            if not callable(method):
                continue
            try:
                try:
                    method(self.i2c_speed_hz)
                except TypeError:
                    # Some variants want kHz.
                    method(int(self.i2c_speed_hz / 1000))
            except Exception as exc:
                raise TransportError(f"setting MCP2221A I2C speed to {self.i2c_speed_hz} Hz failed: {exc}") from exc
            return

        logger.debug("MCP2221A speed method not found, keeping bridge default")

    def write_byte(self, value: int) -> None:
        if self._dev is None:
            raise TransportError("MCP2221ATransport not opened. Call .open() first.")

        data = bytes([value & 0xFF])
        for method_name in ("I2C_write", "i2c_write", "I2C_Write", "i2c_writeto"):
            method = getattr(self._dev, method_name, None)
            if not callable(method):
                continue
            try:
                try:
                    method(self.address_7bit, data)
                except TypeError:
                    # Some APIs want list of ints.
                    method(self.address_7bit, list(data))
            except Exception as exc:
                raise TransportError(
                    f"write of 0x{data[0]:02X} to 0x{self.address_7bit:02X} failed: {exc}"
                ) from exc
            return

        raise TransportError("PyMCP2221A object has no recognized I2C write method")

    def close(self) -> None:
        if self._dev is None:
            return
        # Some forks expose reset/close, most release the HID handle on GC.
        for method_name in ("close", "Close"):
            method = getattr(self._dev, method_name, None)
            if callable(method):
                method()
                break
        self._dev = None
        logger.debug("closed MCP2221A")

    def __enter__(self) -> "MCP2221ATransport":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
