"""Clock helpers"""

from datetime import datetime, timezone


def get_utc_now() -> datetime:
    """
    Current UTC time as a naive datetime.

    Timestamp columns are TIMESTAMP WITHOUT TIME ZONE, so every stored
    datetime is naive UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
