"""Integration tests for end-to-end workflows."""

import json

import pytest
from lessonledger.cli.main import cli


def _created_id(output):
    for line in output.split("\n"):
        if line.startswith("Created entry "):
            return line.split("Created entry ")[1].strip()
    return None


def test_full_workflow(cli_runner, cli_args, tmp_path):
    """Test complete workflow: add → view → settings → edit → import → export → invoice."""
    # Step 1: Record a day
    result = cli_runner.invoke(
        cli, cli_args + ["add", "--date", "2024-05-01", "--regular", "2"]
    )
    assert result.exit_code == 0
    assert "Earnings: 16.00 €" in result.output
    entry_id = _created_id(result.output)
    assert entry_id is not None

    # Step 2: View it
    result = cli_runner.invoke(cli, cli_args + ["view", "--all", "--verbose"])
    assert result.exit_code == 0
    assert "Found 1 entry(ies) for all entries" in result.output
    assert entry_id in result.output

    # Step 3: Raise prices, then edit; the edit reprices
    result = cli_runner.invoke(cli, cli_args + ["settings", "set", "--regular-price", "9"])
    assert result.exit_code == 0
    assert "Settings saved" in result.output

    result = cli_runner.invoke(cli, cli_args + ["entry", "edit", entry_id, "--master", "1"])
    assert result.exit_code == 0
    assert "Earnings: 28.00 €" in result.output

    # Step 4: Import a file with one bad row
    csv_path = tmp_path / "lessons.csv"
    csv_path.write_text(
        "Date,RegularLessons,MasterClasses,Earnings\n"
        "32.13.2024,2,1,20\n"
        "10.05.2024,1,1,18\n",
        encoding="utf-8",
    )
    result = cli_runner.invoke(cli, cli_args + ["import", str(csv_path)])
    assert result.exit_code == 0
    assert "Imported: 1 entries" in result.output
    assert "Skipped: 1 malformed rows" in result.output

    # Step 5: Summary for May
    result = cli_runner.invoke(cli, cli_args + ["summary", "--month", "2024-05"])
    assert result.exit_code == 0
    assert "46.00 €" in result.output
    assert "(4.6%)" in result.output

    # Step 6: Export
    export_path = tmp_path / "export.csv"
    result = cli_runner.invoke(cli, cli_args + ["export", str(export_path)])
    assert result.exit_code == 0
    assert export_path.read_text(encoding="utf-8").splitlines() == [
        "Date,RegularLessons,MasterClasses,Earnings",
        "2024-05-10,1,1,18",
        "2024-05-01,2,1,28",
    ]

    # Step 7: Preview, then generate the invoice
    period = ["--start-date", "2024-05-01", "--end-date", "2024-05-31"]
    result = cli_runner.invoke(cli, cli_args + ["invoice", "preview"] + period)
    assert result.exit_code == 0
    assert "Invoice number: 20250011 (provisional)" in result.output
    assert "Amount: 46.00 €" in result.output

    invoices_dir = tmp_path / "invoices"
    result = cli_runner.invoke(
        cli,
        cli_args
        + ["invoice", "generate"]
        + period
        + ["--client-name", "Music School", "--output-dir", str(invoices_dir)],
    )
    assert result.exit_code == 0
    pdfs = list(invoices_dir.glob("Invoice_20250011_*.pdf"))
    assert len(pdfs) == 1
    assert pdfs[0].read_bytes().startswith(b"%PDF")

    result = cli_runner.invoke(cli, cli_args + ["company", "show"])
    assert "20250011" in result.output

    # Step 8: Delete
    result = cli_runner.invoke(cli, cli_args + ["entry", "delete", entry_id, "--yes"])
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, cli_args + ["view", "--all"])
    assert "Found 1 entry(ies)" in result.output


def test_invoice_override_amount(cli_runner, cli_args):
    cli_runner.invoke(cli, cli_args + ["add", "--date", "2024-05-02", "--regular", "5"])

    result = cli_runner.invoke(
        cli,
        cli_args
        + [
            "invoice",
            "preview",
            "--start-date",
            "2024-05-01",
            "--end-date",
            "2024-05-31",
            "--amount",
            "50",
        ],
    )

    assert result.exit_code == 0
    assert "Amount: 50.00 € (computed: 40.00 €)" in result.output


def test_zero_amount_invoice_fails_without_advancing(cli_runner, cli_args, tmp_path):
    result = cli_runner.invoke(
        cli,
        cli_args
        + [
            "invoice",
            "generate",
            "--start-date",
            "2024-05-01",
            "--end-date",
            "2024-05-31",
            "--output-dir",
            str(tmp_path),
        ],
    )
    assert result.exit_code == 1
    assert "Error:" in result.output

    result = cli_runner.invoke(cli, cli_args + ["company", "show"])
    assert "20250010" in result.output


@pytest.mark.parametrize("command", [["entry", "delete", "missing", "--yes"], ["entry", "edit", "missing"]])
def test_unknown_entry_fails(cli_runner, cli_args, command):
    result = cli_runner.invoke(cli, cli_args + command)
    assert result.exit_code == 1
    assert "Entry missing not found" in result.output


def test_conflicting_period_options(cli_runner, cli_args):
    result = cli_runner.invoke(cli, cli_args + ["view", "--all", "--this-month"])
    assert result.exit_code == 1
    assert "Only one of" in result.output


def test_invalid_price_rejected(cli_runner, cli_args):
    result = cli_runner.invoke(cli, cli_args + ["settings", "set", "--regular-price", "0"])
    assert result.exit_code == 1
    assert "must be positive" in result.output


def test_export_json_to_stdout(cli_runner, cli_args):
    cli_runner.invoke(cli, cli_args + ["add", "--date", "2024-05-02", "--master", "1"])

    result = cli_runner.invoke(cli, cli_args + ["export", "--json"])

    assert result.exit_code == 0
    records = json.loads(result.stdout)
    assert records[0]["masterClasses"] == 1
    assert records[0]["earnings"] == 10


def test_unavailable_database_uses_fallback_cache(cli_runner, tmp_path):
    """Entries come from the cache when the database cannot be opened."""
    cache_path = tmp_path / "entries.json"
    cache_path.write_text(
        json.dumps(
            [
                {
                    "id": "cached",
                    "date": "2024-05-01",
                    "regularLessons": 2,
                    "masterClasses": 0,
                    "earnings": 16,
                }
            ]
        )
    )
    # A directory cannot be opened as a SQLite file
    broken_db = tmp_path / "db-dir"
    broken_db.mkdir()
    args = ["--db-path", str(broken_db), "--cache-path", str(cache_path)]

    result = cli_runner.invoke(cli, args + ["view", "--all", "--verbose"])
    assert result.exit_code == 0
    assert "using fallback data" in result.output
    assert "cached" in result.output

    result = cli_runner.invoke(cli, args + ["add", "--date", "2024-05-02", "--regular", "1"])
    assert result.exit_code == 0
    assert "Warning: change not saved to the database" in result.output
    assert len(json.loads(cache_path.read_text())) == 2


def test_trend_by_quarter(cli_runner, cli_args):
    cli_runner.invoke(cli, cli_args + ["add", "--regular", "2"])

    result = cli_runner.invoke(cli, cli_args + ["trend", "--by", "quarter"])

    assert result.exit_code == 0
    assert "Earnings by quarter:" in result.output
    assert "16.00 €" in result.output
    assert result.output.count("-Q") == 4


def test_oversized_client_name_reports_error(cli_runner, cli_args, tmp_path):
    cli_runner.invoke(cli, cli_args + ["add", "--date", "2024-05-02", "--regular", "1"])

    result = cli_runner.invoke(
        cli,
        cli_args
        + [
            "invoice",
            "generate",
            "--start-date",
            "2024-05-01",
            "--end-date",
            "2024-05-31",
            "--client-name",
            " ".join(["word"] * 20000),
            "--output-dir",
            str(tmp_path),
        ],
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert list(tmp_path.glob("*.pdf")) == []
    result = cli_runner.invoke(cli, cli_args + ["company", "show"])
    assert "20250010" in result.output
