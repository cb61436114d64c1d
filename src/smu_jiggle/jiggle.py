"""SMU jiggle patterns.

A jiggle pattern is a fixed list of X/Y offsets that the secondary mirror
steps through during an observation. Pattern files are plain text, one
position per line::

    # 3x3 grid
    -1 -1
    -1  0
    ...

A line is data if and only if it contains a digit; every other line is
ignored, which is the only comment mechanism the format has. Data lines hold
exactly two whitespace-separated numbers.

The primary entry point is :class:`JigglePattern`.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from pathlib import Path
from typing import Any, Iterable, Iterator
import logging
import os
import re

import numpy as np
from astropy.coordinates import Angle

from smu_jiggle.coords import CoordinateSystem, JiggleOffset


log = logging.getLogger(__name__)

_HAS_DIGIT = re.compile(r"\d")

Point = tuple[float, float]


class JiggleError(ValueError):
    """Base class for jiggle pattern errors."""


class PatternParseError(JiggleError):
    """Raised when a data line does not hold exactly two numbers."""

    def __init__(self, lineno: int, line: str):
        self.lineno = int(lineno)
        self.line = line
        super().__init__(f"malformed pattern line {self.lineno}: {line.strip()!r} (expected 'x y')")


class PatternValidationError(JiggleError):
    """Raised when a value is rejected at a setter or has no defined result."""


@dataclass(frozen=True)
class JiggleOptions:
    """Construction options.

    ``with_metadata=False`` gives the bare pattern: no name, coordinate system
    or position angle, and a file is required at construction.
    """

    with_metadata: bool = True


def parse_pattern_text(content: str) -> list[Point]:
    """Parse pattern file contents into a list of ``(x, y)`` pairs.

    Lines without a digit are skipped. Raises :class:`PatternParseError` on
    the first data line that is not two numbers.
    """
    points: list[Point] = []
    for lineno, raw in enumerate(str(content).split("\n"), start=1):
        if not _HAS_DIGIT.search(raw):
            continue
        tokens = raw.strip().split()
        if len(tokens) != 2:
            raise PatternParseError(lineno, raw)
        try:
            x, y = float(tokens[0]), float(tokens[1])
        except ValueError:
            raise PatternParseError(lineno, raw) from None
        points.append((x, y))
    return points


def _coerce_points(points: Iterable[Any]) -> list[Point]:
    out: list[Point] = []
    for i, p in enumerate(points):
        try:
            x, y = p
        except (TypeError, ValueError):
            raise PatternValidationError(f"point #{i} is not an (x, y) pair: {p!r}") from None
        if not isinstance(x, Real) or not isinstance(y, Real):
            raise PatternValidationError(f"point #{i} must hold two real numbers: {p!r}")
        out.append((float(x), float(y)))
    return out


class JigglePattern:
    """An SMU jiggle pattern plus its scale and (optionally) metadata.

    Create it from a file::

        jig = JigglePattern("smu_3x3.dat")
        jig.scale = 3
        jig.extent()   # (-3.0, 3.0, -3.0, 3.0)

    or empty, to be filled with :meth:`set_pattern` or :meth:`import_text`.

    The stored points are never modified by scaling; :meth:`scaled_pattern`,
    :meth:`xy`, :meth:`extent` and :meth:`offsets` all work on a scaled copy.
    The position angle is stored but not applied to any offsets.
    """

    def __init__(self, file: str | os.PathLike | None = None, *, options: JiggleOptions | None = None):
        self._options = options or JiggleOptions()
        self._points: list[Point] = []
        self._scale: float | None = 1.0
        self._filename: str | None = None
        self._name: str | None = None
        self._system = CoordinateSystem.TRACKING
        self._posang = Angle(0.0, unit="rad")

        if file is not None:
            self.import_file(file)
        elif not self._options.with_metadata:
            raise PatternValidationError("a jiggle pattern without metadata must be created from a file")

    @classmethod
    def from_file(cls, path: str | os.PathLike, **kwargs: Any) -> "JigglePattern":
        return cls(path, **kwargs)

    @classmethod
    def from_text(cls, content: str) -> "JigglePattern":
        jig = cls()
        jig.import_text(content)
        return jig

    def __repr__(self) -> str:
        label = self._name or self._filename or "<unnamed>"
        return f"JigglePattern({label!r}, npts={self.npts()}, scale={self._scale})"

    def __len__(self) -> int:
        return self.npts()

    def __iter__(self) -> Iterator[Point]:
        return iter(list(self._points))

    # ---------------------------- import ----------------------------

    def import_file(self, path: str | os.PathLike) -> None:
        """Read and parse a pattern file, then record its path.

        ``OSError`` from opening or reading propagates unchanged. Undecodable
        bytes are replaced; they can only matter on lines without digits.
        """
        p = Path(path)
        content = p.read_text(encoding="utf-8", errors="replace")
        log.debug("Read jiggle file %s (%d bytes)", p, len(content))
        self.import_text(content)
        self.filename = str(path)

    def import_text(self, content: str) -> None:
        """Replace the pattern with the points parsed from ``content``."""
        self._points = parse_pattern_text(content)
        log.debug("Parsed %d jiggle positions", len(self._points))

    # ---------------------------- accessors ----------------------------

    @property
    def options(self) -> JiggleOptions:
        return self._options

    @property
    def points(self) -> list[Point]:
        """Unscaled pattern, in file order."""
        return list(self._points)

    @points.setter
    def points(self, value: Iterable[Any]) -> None:
        self._points = _coerce_points(value)

    def pattern(self) -> list[Point]:
        return self.points

    def set_pattern(self, points: Iterable[Any]) -> None:
        self.points = points

    @property
    def scale(self) -> float | None:
        """Multiplier applied to every coordinate in the scaled views.

        ``0`` and ``None`` are kept as given but act as 1.
        """
        return self._scale

    @scale.setter
    def scale(self, value: float | None) -> None:
        if value is not None and (isinstance(value, bool) or not isinstance(value, Real)):
            raise PatternValidationError(f"scale must be a real number, got {value!r}")
        self._scale = None if value is None else float(value)

    @property
    def filename(self) -> str | None:
        """Path of the file this pattern was read from, if any."""
        return self._filename

    @filename.setter
    def filename(self, value: str | os.PathLike | None) -> None:
        self._filename = None if value is None else os.fspath(value)
        if self._options.with_metadata:
            self._name = None if self._filename is None else os.path.basename(self._filename)

    @property
    def name(self) -> str | None:
        """Pattern name; the basename of :attr:`filename` unless set explicitly."""
        self._require_metadata("name")
        return self._name

    @name.setter
    def name(self, value: str | None) -> None:
        self._require_metadata("name")
        self._name = None if value is None else str(value)

    @property
    def system(self) -> CoordinateSystem:
        self._require_metadata("system")
        return self._system

    @system.setter
    def system(self, value: CoordinateSystem | str) -> None:
        self._require_metadata("system")
        try:
            self._system = CoordinateSystem.parse(value)
        except ValueError as e:
            raise PatternValidationError(str(e)) from None

    @property
    def posang(self) -> Angle:
        """Position angle of the pattern (stored only)."""
        self._require_metadata("posang")
        return self._posang

    @posang.setter
    def posang(self, value: Angle) -> None:
        self._require_metadata("posang")
        if not isinstance(value, Angle):
            raise PatternValidationError(
                f"posang must be an astropy.coordinates.Angle, got {type(value).__name__}"
            )
        self._posang = value

    def _require_metadata(self, attr: str) -> None:
        if not self._options.with_metadata:
            raise AttributeError(f"{attr!r} is not available on a jiggle pattern without metadata")

    # ---------------------------- derived ----------------------------

    def npts(self) -> int:
        return len(self._points)

    def scaled_pattern(self) -> list[Point]:
        s = self._scale or 1.0
        return [(x * s, y * s) for x, y in self._points]

    def xy(self) -> tuple[np.ndarray, np.ndarray]:
        """Scaled X and Y coordinates as two float arrays of length :meth:`npts`."""
        arr = np.asarray(self.scaled_pattern(), dtype=np.float64).reshape(-1, 2)
        return arr[:, 0].copy(), arr[:, 1].copy()

    def extent(self) -> tuple[float, float, float, float]:
        """Return ``(xmin, xmax, ymin, ymax)`` of the scaled pattern.

        An empty pattern has no extent and raises :class:`PatternValidationError`.
        """
        if not self._points:
            raise PatternValidationError("extent of an empty jiggle pattern is undefined")
        x, y = self.xy()
        return (float(x.min()), float(x.max()), float(y.min()), float(y.max()))

    def has_origin(self) -> bool:
        """True if an unscaled point is exactly (0, 0)."""
        return any(x == 0.0 and y == 0.0 for x, y in self._points)

    def offsets(self) -> list[JiggleOffset]:
        """Scaled pattern as arcsec offsets tagged with :attr:`system`.

        The position angle is not applied.
        """
        system = self.system
        return [JiggleOffset.from_arcsec(x, y, system) for x, y in self.scaled_pattern()]

    def summary(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "npts": self.npts(),
            "scale": self._scale,
            "extent": self.extent() if self._points else None,
            "has_origin": self.has_origin(),
            "filename": self._filename,
        }
        if self._options.with_metadata:
            out["name"] = self._name
            out["system"] = self._system.value
            out["posang_deg"] = float(self._posang.deg)
        return out
