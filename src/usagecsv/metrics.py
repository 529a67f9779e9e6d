from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    write_to_textfile,
)

from usagecsv.exceptions import FilesystemError


class ExportMetrics:
    """
    tracks one export run in Prometheus collectors. The run is a
    short-lived batch job, so the registry is dumped to a
    node-exporter textfile instead of being served over HTTP.
    """

    def __init__(self, registry: "CollectorRegistry" = REGISTRY) -> "None":
        self._registry: "CollectorRegistry" = registry
        self._records_written: "Counter" = Counter(
            "usagecsv_records_written_total",
            "Total usage records written to CSV",
            registry=registry,
        )
        self._batches_flushed: "Counter" = Counter(
            "usagecsv_batches_flushed_total",
            "Total monthly batches flushed to CSV",
            registry=registry,
        )
        self._export_duration: "Gauge" = Gauge(
            "usagecsv_export_duration_seconds",
            "Duration of the last export run",
            registry=registry,
        )
        self._last_export_success: "Gauge" = Gauge(
            "usagecsv_last_export_success_timestamp_seconds",
            "Unix timestamp of the last successful export",
            registry=registry,
        )

    def observe_flush(self, count: "int") -> "None":
        """
        counts one flushed batch and the rows it carried.
        """
        self._batches_flushed.inc()
        self._records_written.inc(count)

    def set_export_duration(self, duration_seconds: "float") -> "None":
        self._export_duration.set(duration_seconds)

    def set_last_export_success(self, timestamp: "float") -> "None":
        self._last_export_success.set(timestamp)

    def write_textfile(self, path: "str") -> "None":
        try:
            write_to_textfile(path, self._registry)
        except OSError as exc:
            raise FilesystemError(f"Cannot write metrics textfile {path}: {exc}") from exc
