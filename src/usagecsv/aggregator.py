import time
from pathlib import Path
from typing import Any, AsyncIterable

import structlog

from usagecsv.csv_output import append_rows, write_header
from usagecsv.metrics import ExportMetrics
from usagecsv.models import MonthKey, UsageRecord, month_key_of, to_row

logger = structlog.get_logger()


class MonthlyAggregator:
    """
    MonthlyAggregator streams usage records into a CSV file,
    buffering one calendar month at a time. A batch is flushed
    as soon as a record from a different month arrives, and once
    more when the source is exhausted, so memory holds at most
    one month of rows.

    Batching follows arrival order only: if the source returns
    the same month in two separate runs, each run is flushed as
    its own batch and nothing is merged or re-sorted.
    """

    def __init__(self, metrics: "ExportMetrics | None" = None) -> "None":
        self._metrics = metrics

    async def aggregate(
        self,
        source: "AsyncIterable[UsageRecord]",
        output_path: "str | Path",
    ) -> "int":
        """
        consumes source exactly once, writes output_path and
        returns the total number of records written.
        """
        logger.info("export_start", path=str(output_path))
        started = time.monotonic()

        write_header(output_path)

        total = 0
        batch: "list[list[Any]]" = []
        batch_key: "MonthKey | None" = None

        logger.info("fetching_usage_records")
        async for record in source:
            row = to_row(record)
            key = month_key_of(record)

            if batch and key != batch_key:
                total += self._flush(output_path, batch, batch_key)
                batch = []

            batch_key = key
            batch.append(row)

        if batch:
            total += self._flush(output_path, batch, batch_key)

        if self._metrics is not None:
            self._metrics.set_export_duration(time.monotonic() - started)
            self._metrics.set_last_export_success(time.time())

        logger.info("export_complete", total=total, path=str(output_path))
        return total

    def _flush(
        self,
        output_path: "str | Path",
        batch: "list[list[Any]]",
        key: "MonthKey | None",
    ) -> "int":
        count = append_rows(output_path, batch)
        logger.info(
            "batch_flushed",
            count=count,
            month=str(key) if key is not None else "unknown",
        )
        if self._metrics is not None:
            self._metrics.observe_flush(count)
        return count


async def aggregate(
    source: "AsyncIterable[UsageRecord]",
    output_path: "str | Path",
) -> "int":
    return await MonthlyAggregator().aggregate(source, output_path)
