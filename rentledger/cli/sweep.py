"""CLI entry point for a one-off overdue sweep.

For hosts that schedule the sweep with cron instead of the in-process scheduler.

Usage:
    python -m rentledger.cli.sweep
    python -m rentledger.cli.sweep --as-of 2025-03-01

Exit Codes:
    0 - Success (including when no rent needed updating)
    1 - Failure: error logged; no rent changed
"""

import argparse
import logging
import sys
from datetime import date

from dotenv import load_dotenv


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mark unpaid rents past due as OVERDUE")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Day boundary in YYYY-MM-DD (default: today)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Run one overdue sweep.

    Returns:
        Exit code: 0 for success, 1 for failure
    """
    load_dotenv()
    args = parse_args(argv)

    from rentledger.config import settings
    from rentledger.services import SessionLocal
    from rentledger.services.logging import setup_server_logging
    from rentledger.services.overdue_service import OverdueSweeper

    setup_server_logging(settings.log_file, settings.log_level)
    logger = logging.getLogger("rentledger.cli.sweep")

    db = SessionLocal()
    try:
        count = OverdueSweeper(db).sweep_overdue(args.as_of)
        logger.info("Updated %d overdue rent(s)", count)
        return 0
    except KeyboardInterrupt:
        logger.warning("Sweep interrupted by user")
        return 1
    except Exception as e:
        logger.error("Overdue sweep failed: %s", e, exc_info=True)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
