"""Value normalisation helpers for imported appointment cells."""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional, Pattern, Tuple

_DATE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})"),  # MM/DD/YYYY
    re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})"),  # YYYY-MM-DD
    re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})"),  # MM-DD-YYYY
)

_TIME_NOISE = re.compile(r"[^\d:]")
_PRICE_NOISE = re.compile(r"[^0-9.]")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^(\d+\.?\d*|\.\d+)")


def normalize_date(raw: str) -> str:
    """Return ``raw`` as ``YYYY-MM-DD`` or unchanged when it cannot be read.

    ISO-8601 input is accepted directly. Otherwise the first of the
    ``MM/DD/YYYY``, ``YYYY-MM-DD`` and ``MM-DD-YYYY`` patterns found in the
    text is rebuilt month first.
    """

    parsed = _parse_iso(raw)
    if parsed is not None:
        return parsed.isoformat()

    for pattern in _DATE_PATTERNS:
        match = pattern.search(raw)
        if not match:
            continue
        first, second, third = match.groups()
        try:
            return date(int(third), int(first), int(second)).isoformat()
        except ValueError:
            continue
    return raw


def normalize_time(raw: str) -> str:
    """Return ``raw`` as a zero padded ``HH:MM`` value.

    Only ``pm`` shifts the hour; ``12am`` is left as ``12``.
    """

    cleaned = _TIME_NOISE.sub("", raw)
    parts = cleaned.split(":")
    if len(parts) < 2:
        return cleaned

    hours = parts[0].zfill(2)
    minutes = parts[1].zfill(2)
    hour = _to_int(hours)
    if "pm" in raw.lower() and hour is not None and hour < 12:
        return f"{hour + 12:02d}:{minutes}"
    return f"{hours}:{minutes}"


def parse_duration(raw: str) -> Optional[int]:
    """Read the leading integer of ``raw``; zero and garbage give ``None``."""

    match = _LEADING_INT.match(raw)
    if not match:
        return None
    return _to_int(match.group(1)) or None


def parse_price(raw: str) -> Optional[float]:
    """Read a price, ignoring currency symbols and separators; zero gives ``None``."""

    match = _LEADING_FLOAT.match(_PRICE_NOISE.sub("", raw))
    if not match:
        return None
    return float(match.group(1)) or None


def _to_int(digits: str) -> Optional[int]:
    # Digit runs past the interpreter's int conversion limit give None.
    try:
        return int(digits)
    except ValueError:
        return None


def _parse_iso(raw: str) -> Optional[date]:
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


__all__ = ["normalize_date", "normalize_time", "parse_duration", "parse_price"]
