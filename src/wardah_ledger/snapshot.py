"""Offline snapshots: accounts and posted lines exported to a YAML (or JSON) file.

A snapshot lets the balance accumulator run without a backend, which is how
data-quality problems reported from the field are reproduced locally::

    accounts:
      - {id: a1, code: "1001", name: Cash, account_type: asset}
    lines:
      - {account_id: a1, debit: 1000, credit: 0, entry_date: 2024-01-05}
      - {account_id: a1, debit_amount: 0, credit_amount: 200,
         journal_entries: {entry_date: 2024-02-01, posting_date: 2024-02-03}}

Lines with ``debit_amount``/``credit_amount`` are read as the legacy journal
shape, all others as the current one.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
import yaml  # type: ignore[import-untyped]

from wardah_ledger.models import Account, LegacyLineRecord, ModernLineRecord, PostedLine

logger = structlog.get_logger(__name__)


@dataclass
class Snapshot:
    """Accounts and posted lines of one tenant."""

    accounts: list[Account]
    lines: list[PostedLine]


def _is_legacy(item: dict[str, Any]) -> bool:
    return "debit_amount" in item or "credit_amount" in item or "journal_entries" in item


def parse_line(item: dict[str, Any]) -> PostedLine:
    if _is_legacy(item):
        return LegacyLineRecord.from_record(item).to_posted_line()
    return ModernLineRecord.from_record(item).to_posted_line()


def load_snapshot(path: Path | str) -> Snapshot:
    """Load a snapshot file.

    Raises:
        ValueError: If the file is not a mapping with ``accounts`` and
            ``lines`` lists of mappings.
    """
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: snapshot must be a mapping")

    raw_accounts = data.get("accounts") or []
    raw_lines = data.get("lines") or []
    if not isinstance(raw_accounts, list):
        raise ValueError(f"{path.name}: accounts must be a list")
    if not isinstance(raw_lines, list):
        raise ValueError(f"{path.name}: lines must be a list")

    accounts: list[Account] = []
    for idx, item in enumerate(raw_accounts):
        if not isinstance(item, dict):
            raise ValueError(f"{path.name}: accounts[{idx}] must be a mapping")
        account = Account.from_record(item)
        if account.allow_posting and account.is_active:
            accounts.append(account)
    accounts.sort(key=lambda account: account.code)

    lines: list[PostedLine] = []
    for idx, item in enumerate(raw_lines):
        if not isinstance(item, dict):
            raise ValueError(f"{path.name}: lines[{idx}] must be a mapping")
        lines.append(parse_line(item))

    logger.info("snapshot_loaded", path=str(path), accounts=len(accounts), lines=len(lines))
    return Snapshot(accounts=accounts, lines=lines)
