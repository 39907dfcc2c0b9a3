"""Command-line entry point for Wardah Ledger reports.

Examples:
    # Trial balance for the current year, Arabic, written as xlsx and pdf
    wardah-ledger trial-balance --org 0b7c... --format xlsx --format pdf

    # English, revenue accounts only, explicit window
    wardah-ledger trial-balance --lang en --type revenue \\
        --from-date 2024-01-01 --as-of 2024-06-30

    # Offline, from an exported snapshot
    wardah-ledger trial-balance --snapshot tenant.yaml --as-of 2024-06-30
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence
from datetime import date
from pathlib import Path

import structlog
from pydantic import ValidationError

from wardah_ledger import labels
from wardah_ledger.accumulator import accumulate_balances
from wardah_ledger.clients.supabase import SupabaseClient, SupabaseError
from wardah_ledger.config import configure_logging, get_settings
from wardah_ledger.exports import EXPORT_FORMATS
from wardah_ledger.models import AccountType, Language
from wardah_ledger.report import TrialBalanceReport, TrialBalanceService, default_period
from wardah_ledger.session import NoActiveTenantError, TenantSession
from wardah_ledger.snapshot import load_snapshot
from wardah_ledger.totals import ALL_TYPES

logger = structlog.get_logger(__name__)


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wardah-ledger",
        description="Wardah Ledger accounting reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    tb = commands.add_parser("trial-balance", help="Compute and export the trial balance")
    tb.add_argument("--from-date", type=_iso_date, help="Period start (default: 1 Jan)")
    tb.add_argument("--as-of", type=_iso_date, help="As-of date (default: today)")
    tb.add_argument("--org", help="Organization (tenant) ID (default: WARDAH_ORG_ID)")
    tb.add_argument(
        "--type",
        default=ALL_TYPES,
        choices=[ALL_TYPES] + [t.value for t in AccountType],
        help="Only show accounts of this type (default: all)",
    )
    tb.add_argument("--lang", choices=["ar", "en"], help="Report language")
    tb.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=list(EXPORT_FORMATS),
        default=[],
        help="Export format, may be repeated",
    )
    tb.add_argument("--output-dir", type=Path, help="Directory for exported files")
    tb.add_argument("--snapshot", type=Path, help="Compute offline from a YAML/JSON snapshot")
    return parser


def render_table(report: TrialBalanceReport, language: Language) -> str:
    """Plain-text rendering of the report for the terminal."""
    header = ["Code", "Account"] + labels.PDF_HEADERS["en"][2:]
    lines = [" | ".join(header)]
    for row in report.rows:
        lines.append(
            " | ".join(
                [row.account_code, row.display_name(language)]
                + [f"{value:,.2f}" for value in row.amounts()]
            )
        )
    totals = report.totals
    lines.append(
        " | ".join(["", labels.TOTALS[language]] + [f"{value:,.2f}" for value in totals.amounts()])
    )
    diffs = report.differences
    lines.append(
        f"{labels.DIFFERENCE[language]}: "
        f"{diffs['opening']:,.2f} / {diffs['period']:,.2f} / {diffs['closing']:,.2f}"
    )
    return "\n".join(lines)


async def _load_report(
    args: argparse.Namespace, from_date: date, as_of_date: date, language: Language
) -> TrialBalanceReport:
    if args.snapshot:
        snapshot = load_snapshot(args.snapshot)
        rows = accumulate_balances(snapshot.accounts, snapshot.lines, from_date, as_of_date)
        return TrialBalanceReport(rows=rows, from_date=from_date, as_of_date=as_of_date)

    settings = get_settings()
    session = TenantSession(args.org or settings.org_id)
    async with SupabaseClient() as client:
        service = TrialBalanceService(client, session, language=language)
        return await service.load(from_date, as_of_date)


async def run_trial_balance(args: argparse.Namespace) -> int:
    settings = get_settings()
    language: Language = args.lang or settings.report_language
    default_from, default_as_of = default_period(args.as_of)
    from_date = args.from_date or default_from
    as_of_date = args.as_of or default_as_of
    if from_date > as_of_date:
        print(f"error: --from-date {from_date} is after --as-of {as_of_date}", file=sys.stderr)
        return 1

    report = await _load_report(args, from_date, as_of_date, language)
    if report.alert:
        print(report.alert)
        return 0

    report = report.filtered(args.type)
    print(f"{labels.TITLE[language]} {from_date.isoformat()} .. {as_of_date.isoformat()}")
    print(render_table(report, language))
    if report.rows:
        notice = labels.BALANCED if report.is_balanced else labels.UNBALANCED
        print(notice[language])

    output_dir = args.output_dir or settings.export_dir
    for fmt in dict.fromkeys(args.formats):
        path = report.export(fmt, language=language, directory=output_dir)
        print(path)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging()
        if args.command == "trial-balance":
            return asyncio.run(run_trial_balance(args))
    except ValidationError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 1
    except (NoActiveTenantError, SupabaseError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130
    parser.error(f"unknown command {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
