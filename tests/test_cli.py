"""Tests for the command-line interface."""

import pytest

from wardah_ledger import cli, labels

SNAPSHOT = """
accounts:
  - {id: a1, code: "1001", name: Cash, account_type: asset}
  - {id: a2, code: "3001", name: Capital, account_type: equity}
lines:
  - {account_id: a1, debit: 500, credit: 0, entry_date: 2024-01-10}
  - {account_id: a2, debit: 0, credit: 500, entry_date: 2024-01-10}
"""


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "tenant.yaml"
    path.write_text(SNAPSHOT, encoding="utf-8")
    return path


def test_offline_trial_balance_with_exports(snapshot_file, tmp_path, capsys):
    exit_code = cli.main(
        [
            "trial-balance",
            "--snapshot",
            str(snapshot_file),
            "--from-date",
            "2024-01-01",
            "--as-of",
            "2024-03-31",
            "--lang",
            "en",
            "--format",
            "xlsx",
            "--format",
            "pdf",
            "--output-dir",
            str(tmp_path),
        ]
    )

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "1001 | Cash" in out
    assert labels.BALANCED["en"] in out
    assert (tmp_path / "trial-balance-2024-03-31.xlsx").exists()
    assert (tmp_path / "trial-balance-2024-03-31.pdf").exists()


def test_type_filter(snapshot_file, capsys):
    exit_code = cli.main(
        [
            "trial-balance",
            "--snapshot",
            str(snapshot_file),
            "--as-of",
            "2024-03-31",
            "--type",
            "equity",
            "--lang",
            "en",
        ]
    )

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "3001 | Capital" in out
    assert "1001 | Cash" not in out


def test_inverted_window_fails(snapshot_file, capsys):
    exit_code = cli.main(
        [
            "trial-balance",
            "--snapshot",
            str(snapshot_file),
            "--from-date",
            "2024-05-01",
            "--as-of",
            "2024-03-31",
        ]
    )

    assert exit_code == 1
    assert "after" in capsys.readouterr().err


def test_invalid_date_is_rejected():
    with pytest.raises(SystemExit):
        cli.main(["trial-balance", "--as-of", "31/03/2024"])


def test_snapshot_with_timestamps(tmp_path, capsys):
    path = tmp_path / "tenant.yaml"
    path.write_text(
        SNAPSHOT.replace("entry_date: 2024-01-10", "posting_date: 2024-01-10T10:00:00Z"),
        encoding="utf-8",
    )

    exit_code = cli.main(
        ["trial-balance", "--snapshot", str(path), "--as-of", "2024-03-31", "--lang", "en"]
    )

    assert exit_code == 0
    assert "1001 | Cash" in capsys.readouterr().out
