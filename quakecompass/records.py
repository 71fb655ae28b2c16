"""Event record types and value coercion helpers.

Raw rows come from the CSV parser as loosely typed mappings: a column can
be missing, empty, a string, or a number. ``ValidatedEvent`` is the strict
form produced by the validator. ``PredictionAnnotation`` is a statically
configured point that never passes through validation.
"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

if TYPE_CHECKING:
    from quakecompass.config import EngineConfig

RawRow = Mapping[str, Any]
Timestamp = Optional[Union[int, str]]

_INT_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class ValidatedEvent:
    """One event that passed validation.

    Args:
        region: Region key, non-empty and trimmed.
        latitude: Finite latitude in degrees.
        longitude: Finite longitude in degrees.
        magnitude: Finite magnitude.
        timestamp: Epoch milliseconds, a date/time string, or None.
        extras: Every other column of the source row as ``(name, value)``
            pairs, in source order. Carried through, never aggregated.
    """

    region: str
    latitude: float
    longitude: float
    magnitude: float
    timestamp: Timestamp = None
    extras: tuple[tuple[str, Any], ...] = ()

    @property
    def occurred_at(self) -> datetime | None:
        """The timestamp as an aware UTC datetime, or None if unusable."""
        return parse_timestamp(self.timestamp)

    def extra(self, name: str, default: Any = None) -> Any:
        """Return a passthrough column (depth, sig, status, net, tsunami, ...)."""
        for key, value in self.extras:
            if key == name:
                return value
        return default

    def to_row(self, config: EngineConfig) -> dict[str, Any]:
        """Rebuild a raw row using the column names of *config*."""
        row = dict(self.extras)
        row[config.region_field] = self.region
        row[config.latitude_field] = self.latitude
        row[config.longitude_field] = self.longitude
        row[config.magnitude_field] = self.magnitude
        if self.timestamp is not None:
            row[config.timestamp_field] = self.timestamp
        return row


@dataclass(frozen=True)
class PredictionAnnotation:
    """A statically supplied predicted event shown beside observed markers."""

    latitude: float
    longitude: float
    year: int
    magnitude: float
    label: str
    basis: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PredictionAnnotation:
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            year=int(data["year"]),
            magnitude=float(data["magnitude"]),
            label=str(data["label"]),
            basis=data.get("basis"),
        )


def to_finite_float(value: Any) -> float | None:
    """Convert a number or numeric string to a finite float.

    Returns None for booleans, NaN, infinities, empty values and
    non-numeric strings such as ``"unknown"``.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, numbers.Real):
        try:
            result = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def normalize_timestamp(value: Any) -> Timestamp:
    """Normalize a raw time cell to epoch milliseconds or a trimmed string."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, numbers.Real):
        try:
            if math.isnan(value) or math.isinf(value):
                return None
            return int(value)
        except OverflowError:
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _INT_RE.match(text):
            try:
                return int(text)
            except ValueError:
                # past the interpreter's int conversion digit limit
                return None
        return text
    return None


def parse_timestamp(value: Timestamp) -> datetime | None:
    """Parse epoch milliseconds or an ISO-8601 string into a UTC datetime.

    Naive ISO strings are taken to be UTC. Anything unparseable gives None.
    """
    if value is None:
        return None
    if isinstance(value, int):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(moment: datetime) -> str:
    """Locale-independent calendar date, e.g. ``'2020-01-07'``."""
    return moment.astimezone(timezone.utc).date().isoformat()
