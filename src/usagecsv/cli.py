import argparse

from usagecsv.config import Config


def parse_args(argv: "list[str] | None" = None) -> "Config":
    """
    builds the run config from the environment, then applies any
    flags given. Every flag is optional: credentials only ever
    come from the environment.
    """
    config = Config.from_env()

    parser = argparse.ArgumentParser(
        prog="usagecsv",
        description="Export Twilio monthly usage records to CSV",
    )
    parser.add_argument(
        "--output.dir",
        dest="output_dir",
        default=config.output_dir,
        help=f"Directory the CSV is written to (default: {config.output_dir})",
    )
    parser.add_argument(
        "--metrics.textfile",
        dest="metrics_textfile",
        default="",
        help="Write run metrics to this node-exporter textfile (default: off)",
    )
    parser.add_argument(
        "--log.level",
        dest="log_level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)",
    )

    args = parser.parse_args(argv)
    config.output_dir = args.output_dir
    config.metrics_textfile = args.metrics_textfile
    config.log_level = args.log_level
    return config
