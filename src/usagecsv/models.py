from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, NamedTuple

# (attribute, header title) in output column order
CSV_COLUMNS: "tuple[tuple[str, str], ...]" = (
    ("account_sid", "Account SID"),
    ("category", "Category"),
    ("description", "Description"),
    ("start_date", "Start Date"),
    ("end_date", "End Date"),
    ("count", "Count"),
    ("count_unit", "Count Unit"),
    ("usage", "Usage"),
    ("usage_unit", "Usage Unit"),
    ("price", "Price"),
    ("price_unit", "Price Unit"),
)

CSV_HEADER: "list[str]" = [title for _, title in CSV_COLUMNS]

_DATE_COLUMNS = frozenset({"start_date", "end_date"})


@dataclass(frozen=True, slots=True)
class UsageRecord:
    """
    UsageRecord represents one billed usage line item
    for a monthly time window.
    """

    account_sid: "str | None"
    # provider-defined, e.g. "calls" or "sms-outbound"
    category: "str | None"
    description: "str | None"
    start_date: "datetime | date | None"
    end_date: "datetime | date | None"
    # numeric fields are kept exactly as the source returned them
    count: "Any"
    count_unit: "str | None"
    usage: "Any"
    usage_unit: "str | None"
    price: "Any"
    price_unit: "str | None"


class MonthKey(NamedTuple):
    year: "int"
    month: "int"

    def __str__(self) -> "str":
        return f"{self.year:04d}-{self.month:02d}"


def _to_utc_date(value: "datetime | date") -> "date":
    if isinstance(value, datetime):
        # naive datetimes are taken to already be in UTC
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def format_date(value: "datetime | date | None") -> "str":
    """
    formats an instant as its YYYY-MM-DD calendar date in UTC,
    dropping any time-of-day component.
    """
    if value is None:
        return ""
    return _to_utc_date(value).isoformat()


def month_key_of(record: "UsageRecord") -> "MonthKey | None":
    if record.start_date is None:
        return None
    day = _to_utc_date(record.start_date)
    return MonthKey(day.year, day.month)


def to_row(record: "UsageRecord") -> "list[Any]":
    """
    maps a record onto the fixed CSV column order. Dates are
    normalised, missing values become empty cells and everything
    else passes through untouched.
    """
    row: "list[Any]" = []
    for attr, _ in CSV_COLUMNS:
        value = getattr(record, attr)
        if attr in _DATE_COLUMNS:
            row.append(format_date(value))
        elif value is None:
            row.append("")
        else:
            row.append(value)
    return row
