"""Command line entry point: print canonical keys for metric strings."""
import argparse
import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from tagstore.config import Config, load_config
from tagstore.intake import IdentityIntake

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_formatter(log_format: str) -> logging.Formatter:
    """Return a JSON or text formatter for log records."""
    if log_format == "json":
        return JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
            datefmt=DATE_FORMAT
        )
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(log_level: str, log_format: str):
    """Setup logging configuration."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(log_format))

    logging.basicConfig(level=level, handlers=[handler])


def main(argv=None):
    """Main function."""
    parser = argparse.ArgumentParser(
        description="Canonicalize metric identities of the form 'name key=value ...'"
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to configuration YAML file"
    )
    parser.add_argument(
        "metrics",
        nargs="*",
        help="Metric strings; read from stdin, one per line, when omitted"
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else Config()
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.global_.log_level, config.global_.log_format)
    logger = logging.getLogger(__name__)

    intake = IdentityIntake(config)
    lines = args.metrics or [line for line in sys.stdin.read().splitlines() if line.strip()]

    rejected = 0
    for line in lines:
        identity = intake.accept_line(line)
        if identity is None:
            rejected += 1
            continue
        print(identity.canonical_key)

    if rejected:
        logger.info(f"Rejected {rejected} of {len(lines)} metric strings")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
