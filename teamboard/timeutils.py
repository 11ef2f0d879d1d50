# teamboard/timeutils.py
from datetime import datetime, timezone


def parse_client_datetime(value) -> datetime:
    """
    Parse an ISO-8601 timestamp from a request body into naive UTC,
    the form every DateTime column and datetime.utcnow() comparison uses.

    Accepts a trailing "Z" (JS toISOString) and explicit offsets; naive
    input is taken as UTC already. Raises ValueError / TypeError on bad input.
    """
    if not isinstance(value, str):
        raise TypeError("datetime must be a string")

    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"

    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
