#!/usr/bin/env python3
"""
HNP Importer CLI - Bulk-create Hack'n'Plan tickets from a text file.

Usage:
    hnp-import tickets.txt --dry-run
    hnp-import tickets.txt --default-category programming --board "Sprint 4"
"""

import argparse
import logging
import sys

from hnp_importer.config import LOG_LEVELS, load_config
from hnp_importer.errors import ImporterError
from hnp_importer.integrations import HacknPlanClient, HacknPlanWriter
from hnp_importer.observability import configure_logging
from hnp_importer.pipeline import ImportPipeline
from hnp_importer.prompt import confirm

logger = logging.getLogger("hnp_importer.cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hnp-import",
        description="Create Hack'n'Plan tickets in bulk from an annotated text file.",
    )
    parser.add_argument("file", help="Ticket document (blocks separated by ---)")
    parser.add_argument(
        "--dry-run",
        "-d",
        action="store_true",
        help="Print the payloads instead of creating tags and tickets",
    )
    parser.add_argument("--default-category", help="Category appended to every ticket title")
    parser.add_argument("--board", help="Board name to place every ticket on")
    parser.add_argument("--config", help="YAML config file (default ~/.hnp_importer/config.yaml)")
    parser.add_argument("--log-level", help=", ".join(LOG_LEVELS))
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Force JSON log lines on stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            args.config,
            dry_run=args.dry_run or None,
            default_category=args.default_category,
            board=args.board,
            log_level=args.log_level,
        )
    except ImporterError as e:
        configure_logging("INFO", json_format=args.json_logs)
        logger.error(str(e))
        return EXIT_ERROR

    configure_logging(config.log_level, json_format=args.json_logs)

    pipeline = ImportPipeline(
        config,
        catalogs=HacknPlanClient(config),
        writer=HacknPlanWriter(config),
        confirm=confirm,
    )

    try:
        report = pipeline.run(args.file)
    except ImporterError as e:
        logger.error(str(e))
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_INTERRUPTED

    mode = "previewed" if report.dry_run else "submitted"
    logger.info(
        f"Done: {report.submitted} ticket(s) {mode}, {len(report.created_tags)} tag(s) created"
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
