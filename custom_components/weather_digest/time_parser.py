"""ISO-8601 timestamp parsing and local-date bucketing.

Feed timestamps are UTC with a literal ``Z`` suffix, with or without
fractional seconds. Everything downstream (bucket dates, "today", labels)
works on the local calendar of the configured Home Assistant time zone.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, NamedTuple

from homeassistant.util import dt as dt_util

from .const import TIMESTAMP_FORMATS

# fractions beyond microseconds (e.g. nanosecond feeds) are cut to 6 digits
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+Z$")


class MalformedTimestamp(ValueError):
    """Raised when a timestamp matches none of the accepted shapes."""


class ParsedTimestamp(NamedTuple):
    local: datetime
    date: date


def parse_timestamp(value: Any) -> ParsedTimestamp:
    """Parse ``YYYY-MM-DDThh:mm:ss[.fff]Z`` into a local point in time and its date."""
    if not isinstance(value, str):
        raise MalformedTimestamp(f"Timestamp must be a string, got {type(value).__name__}: {value!r}")

    text = _LONG_FRACTION.sub(r"\1Z", value.strip())
    parsed = None
    for fmt in TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
            break
        except ValueError:
            continue
    if parsed is None:
        raise MalformedTimestamp(f"Unrecognised timestamp: {value!r}")

    local = dt_util.as_local(parsed.replace(tzinfo=dt_util.UTC))
    return ParsedTimestamp(local, local.date())


def today() -> date:
    """Calendar date of the process-local 'now'."""
    return dt_util.now().date()


def day_label(local: datetime) -> str:
    # Short weekday name, e.g. "Wed"
    return local.strftime("%a")


def date_label(local: datetime) -> str:
    # "day month", e.g. "14 Feb"
    return f"{local.day} {local.strftime('%b')}"
