#!/usr/bin/env python3
"""
Player Stats Reconciliation Script

Rebuilds the career record of any player whose games_played no longer matches
the finished and canceled games they appear in. Meant to run on a cron.

Usage:
    python scripts/reconcile_player_stats.py                      # Detect and repair
    python scripts/reconcile_player_stats.py --dry-run            # Detect only
    python scripts/reconcile_player_stats.py --settle-seconds 600 # Wider settle window
"""

import sys
import os

# Add the backend directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import argparse

from core.logging import setup_logging
from core.settings import settings
from db.base import init_db, close_db
from schemas.career import ReconciliationResult
from schemas.common import ApiStatus
from services.reconciliation_service import DEFAULT_SETTLE_SECONDS, ReconciliationService


def print_result(result: ReconciliationResult) -> None:
    """Print reconciliation result in a readable format."""
    status_icon = "✓" if result.status == ApiStatus.SUCCESS else "✗"
    print(f"\n{status_icon} Player Stats Reconciliation")
    print(f"  Status: {result.status}")
    print(f"  Message: {result.message}")
    for entry in result.divergent:
        marker = "repaired" if entry.player_id in result.repaired else "not repaired"
        print(
            f"  Player {entry.player_id}: recorded {entry.recorded_games} games, "
            f"{entry.closed_games} closed ({marker})"
        )
    if result.duration_seconds is not None:
        print(f"  Duration: {result.duration_seconds:.2f}s")
    if result.error:
        print(f"  Error: {result.error[:200]}...")


async def main():
    parser = argparse.ArgumentParser(
        description="Repair player career records that diverged from their closed games"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report divergent players without rebuilding them",
    )
    parser.add_argument(
        "--settle-seconds",
        type=int,
        default=DEFAULT_SETTLE_SECONDS,
        help="Skip players with a game closed within this many seconds",
    )
    args = parser.parse_args()

    setup_logging(
        log_level=settings.log_level,
        json_format=settings.log_format == "json",
        service_name=settings.service_name,
    )

    print("Initializing database connection...")
    init_db()

    try:
        result = await ReconciliationService.run(
            repair=not args.dry_run,
            settle_seconds=args.settle_seconds,
        )
        print_result(result)

        if result.status != ApiStatus.SUCCESS:
            sys.exit(1)
    finally:
        close_db()


if __name__ == "__main__":
    asyncio.run(main())
