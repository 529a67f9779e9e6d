import asyncio
from pathlib import Path

import structlog
from prometheus_client import CollectorRegistry

from usagecsv.aggregator import MonthlyAggregator
from usagecsv.cli import parse_args
from usagecsv.config import Config
from usagecsv.exceptions import FilesystemError, UsageExportError
from usagecsv.logging import setup_logging
from usagecsv.metrics import ExportMetrics
from usagecsv.provider.base import UsageSource
from usagecsv.provider.twilio import TwilioUsageSource

logger = structlog.get_logger()


def prepare_output_path(output_dir: "str", account_sid: "str") -> "Path":
    """
    returns <output_dir>/<account_sid>.csv, creating the
    directory when it does not exist yet.
    """
    directory = Path(output_dir)
    if not directory.is_dir():
        logger.info("creating_output_dir", path=str(directory))
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(
                f"Cannot create output directory {directory}: {exc}"
            ) from exc
    return directory / f"{account_sid}.csv"


async def run(config: "Config", metrics: "ExportMetrics | None" = None) -> "int":
    """
    exports one account's monthly usage and returns the number
    of records written.
    """
    source: "UsageSource" = TwilioUsageSource(config.credentials)
    try:
        logger.info("exporting_usage", provider=source.name)
        output_path = prepare_output_path(config.output_dir, config.account_sid)
        aggregator = MonthlyAggregator(metrics)
        return await aggregator.aggregate(source.iter_monthly_records(), output_path)
    finally:
        await source.close()


def main() -> "None":
    config = parse_args()
    setup_logging(config.log_level)

    metrics = ExportMetrics(registry=CollectorRegistry())
    exit_code = 0
    try:
        asyncio.run(run(config, metrics))
    except UsageExportError as exc:
        logger.error("export_failed", error=str(exc))
        exit_code = 1
    except Exception:
        logger.exception("export_failed")
        exit_code = 1

    # the exit status reflects the export only
    if config.metrics_textfile:
        try:
            metrics.write_textfile(config.metrics_textfile)
        except FilesystemError as exc:
            logger.error("metrics_textfile_failed", error=str(exc))

    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
