"""Coordinate-system tags and offset value objects.

A jiggle pattern is expressed in tangent-plane arcsec offsets; the frame those
offsets live in is carried as a :class:`CoordinateSystem` tag. Nothing here
transforms between frames.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import astropy.units as u


class CoordinateSystem(str, Enum):
    TRACKING = "TRACKING"
    AZEL = "AZEL"
    MOUNT = "MOUNT"
    FPLANE = "FPLANE"

    @classmethod
    def parse(cls, value: Any) -> "CoordinateSystem":
        """Accept an enum member or a case-insensitive name.

        Raises ``ValueError`` for anything else.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"coordinate system must be a string, got {type(value).__name__}")
        key = value.strip().upper()
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown coordinate system {value!r} (expected one of {allowed})") from None


@dataclass(frozen=True)
class JiggleOffset:
    """One jiggle position as a tangent-plane offset."""

    dx: u.Quantity
    dy: u.Quantity
    system: CoordinateSystem = CoordinateSystem.TRACKING

    @classmethod
    def from_arcsec(
        cls, x: float, y: float, system: CoordinateSystem | str = CoordinateSystem.TRACKING
    ) -> "JiggleOffset":
        return cls(
            dx=float(x) * u.arcsec,
            dy=float(y) * u.arcsec,
            system=CoordinateSystem.parse(system),
        )

    def as_tuple(self) -> tuple[float, float]:
        """Return ``(dx, dy)`` in arcsec as plain floats."""
        return (float(self.dx.to_value(u.arcsec)), float(self.dy.to_value(u.arcsec)))
