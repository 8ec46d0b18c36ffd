import re
from datetime import (
    UTC,
    datetime,
    timedelta,
)

UNIT_TO_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1,
    "m": 60,
    "h": 3600,
}

DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


class BadDurationError(Exception):
    pass


class ExpirationError(Exception):
    pass


def duration_to_seconds(duration: str) -> float:
    """Parses durations the way Go's time.ParseDuration does, e.g. "2h",
    "1h30m", "90s" or "1.5h". A leading sign is accepted.
    """
    value = duration.strip()
    sign = 1
    if value[:1] in ("+", "-"):
        sign = -1 if value[0] == "-" else 1
        value = value[1:]
    if value == "0":
        return 0
    if not value:
        raise BadDurationError(f"Invalid time duration {duration}")

    total_seconds = 0.0
    position = 0
    while position < len(value):
        match = DURATION_PART_RE.match(value, position)
        if not match:
            raise BadDurationError(f"Invalid time duration {duration}")
        number, unit = match.groups()
        total_seconds += float(number) * UNIT_TO_SECONDS[unit]
        position = match.end()
    return sign * total_seconds


def parse_rfc3339(value: str) -> datetime:
    """
    Accepts RFC3339 timestamps with and without fractional seconds.
    """
    normalized = value.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    # fromisoformat only handles up to microseconds
    normalized = re.sub(r"(\.\d{6})\d+", r"\1", normalized)
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        raise ExpirationError(
            f"Failed to parse expiration-time '{value}', expected an RFC3339 timestamp"
        ) from None
    if parsed.tzinfo is None or "T" not in normalized.upper():
        raise ExpirationError(
            f"Failed to parse expiration-time '{value}', expected an RFC3339 timestamp"
        )
    return parsed


def round_to_second(value: datetime) -> datetime:
    rounded = value.replace(microsecond=0)
    if value.microsecond >= 500_000:
        rounded += timedelta(seconds=1)
    return rounded


def validate_expiration(
    expiration_time: str = "",
    expiration: str = "",
    now: datetime | None = None,
) -> datetime | None:
    """
    Returns the expiration timestamp requested by either the absolute
    expiration time or the duration from now, rounded to the second.
    """
    if expiration_time and expiration:
        raise ExpirationError(
            "At most one of 'expiration-time' or 'expiration' may be specified"
        )
    if expiration_time:
        return parse_rfc3339(expiration_time)
    if expiration:
        try:
            seconds = duration_to_seconds(expiration)
        except BadDurationError as e:
            raise ExpirationError(f"Failed to parse expiration: {e}") from None
        now = now or datetime.now(tz=UTC)
        return round_to_second(now + timedelta(seconds=seconds))
    return None
