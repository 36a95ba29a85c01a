"""Discord-style message timestamps."""

from datetime import datetime, timedelta


def _pad(value: int) -> str:
    return f"{value:02d}"


def format_timestamp(
    value: datetime,
    *,
    now: datetime | None = None,
    include_today_prefix: bool = True,
) -> str:
    """Format ``value`` the way Discord labels a message.

    Same day as ``now`` gives ``Today at HH:MM`` (or ``HH:MM`` without the
    prefix), the previous calendar day gives ``Yesterday at HH:MM`` and
    anything else ``DD/MM/YYYY HH:MM``. The value is used as given; no
    timezone conversion happens.
    """
    current = now if now is not None else datetime.now(value.tzinfo)
    time_str = f"{_pad(value.hour)}:{_pad(value.minute)}"

    if value.date() == current.date():
        return f"Today at {time_str}" if include_today_prefix else time_str
    if value.date() == current.date() - timedelta(days=1):
        return f"Yesterday at {time_str}"
    return (
        f"{_pad(value.day)}/{_pad(value.month)}/{value.year} {time_str}"
    )
