"""Decode raw BloomSky API payloads into TelemetrySnapshot records."""
import json
import logging
import math
from datetime import datetime
from typing import Callable, Optional, Union

from bloomsky_snapshot import (
    BOOL,
    FLOAT,
    LAST_CALL_FORMAT,
    RAW,
    SKY_FIELDS,
    SKY_KEY,
    STORM_FIELDS,
    STORM_KEY,
    STRING,
    STRING_LIST,
    TOP_LEVEL_FIELDS,
    SkyData,
    StormData,
    TelemetrySnapshot,
)


class SnapshotDecodeError(Exception):
    """
    Raised when a payload does not have the shape of the BloomSky API.

    This is an integration error (wrong URL, API contract change), not a
    transient fault: retrying the same payload cannot fix it.
    """
    pass


_ZERO_VALUES = {
    FLOAT: 0.0,
    STRING: "",
    BOOL: False,
    STRING_LIST: (),
    RAW: None,
}


def decode_snapshot(
    body: Union[bytes, str],
    clock: Optional[Callable[[], datetime]] = None,
    logger: Optional[logging.Logger] = None,
) -> TelemetrySnapshot:
    """
    Parse a BloomSky payload into a snapshot.

    The API wraps the single observation in a one-element JSON array.
    Missing keys and nulls take the zero value of their field, unknown
    keys are ignored.

    Args:
        body: Raw response body
        clock: Returns the current time, stamped into last_call
        logger: Logger for the debug dump

    Returns:
        TelemetrySnapshot: The decoded observation, derived units included

    Raises:
        SnapshotDecodeError: If the payload is not valid JSON of the expected shape
    """
    logger = logger or logging.getLogger(__name__)
    clock = clock or datetime.now

    try:
        payload = json.loads(body)
    except ValueError as e:
        logger.critical("Problem with json to struct, invalid JSON: %s", e)
        raise SnapshotDecodeError(f"Invalid JSON payload: {e}") from e

    if not isinstance(payload, list):
        raise _shape_error(logger, f"expected a JSON array, got {type(payload).__name__}")
    if not payload:
        raise _shape_error(logger, "expected one observation, got an empty array")
    if len(payload) > 1:
        logger.warning("Payload holds %d observations, using the first one", len(payload))

    observation = payload[0]
    if not isinstance(observation, dict):
        raise _shape_error(logger, f"observation is {type(observation).__name__}, not an object")

    storm_values = _decode_fields(_block(observation, STORM_KEY, logger), STORM_FIELDS, STORM_KEY, logger)
    sky_values = _decode_fields(_block(observation, SKY_KEY, logger), SKY_FIELDS, SKY_KEY, logger)
    try:
        storm = StormData(**storm_values)
        sky = SkyData(**sky_values)
    except (OverflowError, ValueError) as e:
        # Finite vendor values whose metric conversion overflows, e.g. 1.7e308
        raise _shape_error(logger, f"value out of range for unit conversion: {e}") from e
    top_level = _decode_fields(observation, TOP_LEVEL_FIELDS, "", logger)

    snapshot = TelemetrySnapshot(
        storm=storm,
        data=sky,
        last_call=clock().strftime(LAST_CALL_FORMAT),
        **top_level,
    )
    snapshot.show_pretty_all(logger)
    logger.info(
        "Decoded snapshot for device %s (%s): %s°F, last call %s",
        snapshot.device_id,
        snapshot.city_name,
        snapshot.data.temperature_f,
        snapshot.last_call,
    )
    return snapshot


def _shape_error(logger: logging.Logger, reason: str) -> SnapshotDecodeError:
    logger.critical("Problem with json to struct, problem in the struct? %s", reason)
    return SnapshotDecodeError(f"Unexpected payload shape: {reason}")


def _block(observation: dict, key: str, logger: logging.Logger) -> dict:
    block = observation.get(key)
    if block is None:
        return {}
    if not isinstance(block, dict):
        raise _shape_error(logger, f"'{key}' is {type(block).__name__}, not an object")
    return block


def _decode_fields(source: dict, fields, prefix: str, logger: logging.Logger) -> dict:
    values = {}
    for key, attr, kind in fields:
        path = f"{prefix}.{key}" if prefix else key
        values[attr] = _coerce(source.get(key), kind, path, logger)
    return values


def _coerce(value, kind: str, path: str, logger: logging.Logger):
    if value is None:
        return _ZERO_VALUES[kind]
    if kind == RAW:
        return value
    if kind == FLOAT and isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            number = float(value)
        except OverflowError:
            raise _shape_error(logger, f"'{path}' is too large for a float") from None
        if not math.isfinite(number):
            raise _shape_error(logger, f"'{path}' is not a finite number")
        return number
    if kind == STRING and isinstance(value, str):
        return value
    if kind == BOOL and isinstance(value, bool):
        return value
    if kind == STRING_LIST and isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise _shape_error(logger, f"'{path}' should be {kind}, got {type(value).__name__}")
