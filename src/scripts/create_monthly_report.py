#!/usr/bin/env python3
"""
Create a monthly work-hours report for one user as an Excel workbook.

One sheet per month with the jobs, their intervals and totals, and the
monthly sum.

Usage:
    python src/scripts/create_monthly_report.py --user anisa --month 2025-11
    python src/scripts/create_monthly_report.py --user anisa --all
"""

import argparse
import sys
import traceback
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.aggregation import month_key
from core.config import OUTPUT_DIR
from core.database import get_connection
from services.overview import build_overview
from services.reports import create_monthly_excel_report


# =============================================================================
# DATE UTILITIES
# =============================================================================


def get_report_month(month_str: str | None) -> str:
    """
    Resolve the target month.

    Args:
        month_str: Optional month string (YYYY-MM). Uses previous month if None.

    Returns:
        Month key YYYY-MM
    """
    if month_str:
        year, month = map(int, month_str.split("-"))
        return month_key(date(year, month, 1))

    today = date.today()
    if today.month == 1:
        return month_key(date(today.year - 1, 12, 1))
    return month_key(date(today.year, today.month - 1, 1))


# =============================================================================
# MAIN
# =============================================================================


def main(username: str, month_str: str | None = None, all_months: bool = False):
    """Main entry point for the monthly report."""
    try:
        username = username.strip().lower()
        target = None if all_months else get_report_month(month_str)
        print(f"Generating report for {username} ({target or 'all months'})")

        conn = get_connection()
        try:
            months = build_overview(conn, username, target)
        finally:
            conn.close()

        if not months:
            print("No jobs found!")
            return

        for month in months:
            print(f"  {month.title}: {len(month.jobs)} job(s), {month.total_label}")

        output_dir = OUTPUT_DIR / "reports" / "monthly"
        output_path = output_dir / f"arbeitszeiten_{username}_{target or 'alle'}.xlsx"
        create_monthly_excel_report(months, output_path)

        print("\nDone!")

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate monthly work-hours report")
    parser.add_argument("--user", required=True, help="Username whose jobs to export")
    parser.add_argument(
        "--month",
        help="Target month (YYYY-MM). Defaults to previous month.",
    )
    parser.add_argument("--all", action="store_true", help="Export every month")
    args = parser.parse_args()

    main(args.user, args.month, args.all)
