import csv
from pathlib import Path
from typing import Any, Iterable

from usagecsv.exceptions import FilesystemError
from usagecsv.models import CSV_HEADER


def write_header(path: "str | Path") -> "None":
    """
    creates or truncates path and writes the header line.
    """
    try:
        with open(path, "w", newline="", encoding="utf-8") as fh:
            csv.writer(fh, lineterminator="\n").writerow(CSV_HEADER)
    except OSError as exc:
        raise FilesystemError(f"Cannot write CSV header to {path}: {exc}") from exc


def append_rows(path: "str | Path", rows: "Iterable[list[Any]]") -> "int":
    """
    appends rows to path in a single write, never touching the
    header. Returns the number of rows written.
    """
    rows = list(rows)
    try:
        with open(path, "a", newline="", encoding="utf-8") as fh:
            csv.writer(fh, lineterminator="\n").writerows(rows)
    except OSError as exc:
        raise FilesystemError(f"Cannot append rows to {path}: {exc}") from exc
    return len(rows)
