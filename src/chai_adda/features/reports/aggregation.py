"""
Pure aggregation helpers shared by the report builders.

Nothing in here touches the database: the helpers take already-fetched
records (pydantic records, ORM rows or plain objects, anything with the named
attributes) and fold them into totals. This keeps the bucketing rules
testable on their own and lets the same rules apply whether the rows came
from SQLite, Postgres or an in-memory fake.
"""

import datetime
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, Union

Number = Union[int, float]


def ensure_utc(value: datetime.datetime) -> datetime.datetime:
    """
    Normalizes a timestamp to an aware UTC datetime.

    Naive datetimes are interpreted as already being in UTC, which is how the
    API documents ``from``/``to`` values sent without an offset.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def utc_date_key(value: datetime.datetime) -> str:
    """Returns the ``YYYY-MM-DD`` UTC calendar day a timestamp falls on."""
    return ensure_utc(value).date().isoformat()


def sum_amounts(records: Iterable[Any], field: str = "amount") -> float:
    """Sums ``field`` over ``records``; ``0.0`` for an empty iterable."""
    return float(sum((getattr(record, field) for record in records), 0.0))


def sum_by_key(
    records: Iterable[Any], key_field: str, value_field: str
) -> Dict[Hashable, Number]:
    """
    Groups ``records`` by ``key_field`` and sums ``value_field`` per group.

    Integer inputs stay integers, so quantities come back as ints and money
    amounts as floats. Keys are returned in first-seen order; callers that
    need a stable order must sort.
    """
    totals: Dict[Hashable, Number] = {}
    for record in records:
        key = getattr(record, key_field)
        totals[key] = totals.get(key, 0) + getattr(record, value_field)
    return totals


def group_by_utc_date(
    records: Iterable[Any], date_field: str, value_field: Optional[str] = None
) -> List[Tuple[str, Number]]:
    """
    Buckets records by the UTC calendar day of ``date_field``.

    Args:
        records: Rows exposing ``date_field`` (and ``value_field`` if given).
        date_field: Name of the datetime attribute to bucket on.
        value_field: Attribute to sum per day. When omitted every record
            counts as one, which turns the series into a per-day count.

    Returns:
        ``(date, total)`` tuples sorted ascending by date. The series is
        sparse: days without records, or whose total is zero, are left out
        rather than zero-filled.
    """
    buckets: Dict[str, Number] = {}
    for record in records:
        day = utc_date_key(getattr(record, date_field))
        value = 1 if value_field is None else getattr(record, value_field)
        buckets[day] = buckets.get(day, 0) + value
    return sorted((day, total) for day, total in buckets.items() if total)
