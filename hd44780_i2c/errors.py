"""Exception hierarchy for the HD44780 driver.

HD44780Error (base)
├── TransportError - the bus write failed
├── InvalidConfigurationError - pin map, config or glyph rejected
└── InvalidAddressError - line, column or RAM address out of range

A TransportError leaves the controller in an unknown state (a byte may have
been half sent). Construct a new HD44780 to re-run the power-on sequence.
"""

from __future__ import annotations


class HD44780Error(Exception):
    """Base class for every error raised by this package."""


class TransportError(HD44780Error):
    """A single byte write to the expander failed."""


class InvalidConfigurationError(HD44780Error, ValueError):
    """Configuration rejected before any bus traffic."""


class InvalidAddressError(HD44780Error, ValueError):
    """Requested display position has no DDRAM/CGRAM address."""
