"""Record validator: raw parsed rows -> ``ValidatedEvent`` list.

This is the single place where typing and presence rules are enforced.
A row is kept iff

- its region column is a string that is non-empty once trimmed,
- latitude and longitude are finite numbers (numeric strings accepted),
- magnitude is a finite number at or above the configured floor,
- the categorical filter, when configured, matches exactly.

Rows that fail are expected noise in real feeds and are dropped without
raising. Only a batch that is not a sequence of rows is an error.
"""

import logging
from collections.abc import Iterable, Mapping

from quakecompass.config import COUNTRY_PRESET, EngineConfig
from quakecompass.errors import InvalidInputError
from quakecompass.records import (
    ValidatedEvent,
    normalize_timestamp,
    to_finite_float,
)

logger = logging.getLogger(__name__)


def validate(raw_records, config: EngineConfig = COUNTRY_PRESET) -> list[ValidatedEvent]:
    """Filter a batch of raw rows down to well-typed events, preserving order.

    Already validated events are re-checked against *config*, so
    ``validate(validate(rows)) == validate(rows)``.

    Raises:
        InvalidInputError: If *raw_records* is not an iterable of rows.
    """
    rows = _as_batch(raw_records)
    valid = []
    dropped = 0
    for row in rows:
        event = validate_row(row, config)
        if event is None:
            dropped += 1
        else:
            valid.append(event)
    if dropped:
        logger.debug(f"Dropped {dropped} malformed or filtered rows, kept {len(valid)}")
    return valid


def validate_row(row, config: EngineConfig = COUNTRY_PRESET) -> ValidatedEvent | None:
    """Validate one row; None if it does not meet the contract."""
    if isinstance(row, ValidatedEvent):
        row = row.to_row(config)
    if not isinstance(row, Mapping):
        return None

    region = row.get(config.region_field)
    if not isinstance(region, str) or not region.strip():
        return None

    latitude = to_finite_float(row.get(config.latitude_field))
    longitude = to_finite_float(row.get(config.longitude_field))
    magnitude = to_finite_float(row.get(config.magnitude_field))
    if latitude is None or longitude is None or magnitude is None:
        return None
    if config.min_magnitude and magnitude < config.min_magnitude:
        return None

    if config.country_filter is not None:
        category = row.get(config.filter_field)
        if not isinstance(category, str) or category.strip() != config.country_filter:
            return None

    core = {
        config.region_field,
        config.latitude_field,
        config.longitude_field,
        config.magnitude_field,
        config.timestamp_field,
    }
    return ValidatedEvent(
        region=region.strip(),
        latitude=latitude,
        longitude=longitude,
        magnitude=magnitude,
        timestamp=normalize_timestamp(row.get(config.timestamp_field)),
        extras=tuple((k, v) for k, v in row.items() if k not in core),
    )


def _as_batch(raw_records) -> Iterable:
    if raw_records is None or isinstance(raw_records, (str, bytes, bytearray, Mapping)):
        raise InvalidInputError(
            f"Expected a sequence of rows, got {type(raw_records).__name__}"
        )
    try:
        return iter(raw_records)
    except TypeError:
        raise InvalidInputError(
            f"Expected a sequence of rows, got {type(raw_records).__name__}"
        ) from None
