from __future__ import annotations

import json
import tempfile
from pathlib import Path

from typer.testing import CliRunner

from invoicegen.main import app


runner = CliRunner()


def _write_invoice(path: Path) -> None:
    path.write_text(
        json.dumps(
            {
                "companyName": "Bella Vista",
                "clientName": "Globex",
                "invoiceNumber": "CAT-9",
                "taxRate": 8.5,
                "items": [{"id": "1", "description": "Buffet", "quantity": 50, "rate": 45}],
            }
        ),
        encoding="utf-8",
    )


def test_render_command_writes_document() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        input_path = Path(temp_dir) / "Catering Order.json"
        out_dir = Path(temp_dir) / "out"
        _write_invoice(input_path)
        result = runner.invoke(
            app,
            ["render", str(input_path), "--template", "restaurant", "--out", str(out_dir), "--today", "2024-03-01"],
        )
        assert result.exit_code == 0, result.output
        assert "READY: 1" in result.output
        document = json.loads((out_dir / "catering-order" / "document.json").read_text(encoding="utf-8"))
        assert document["table"]["totals"]["total"] == "2880.68"
        assert document["metadata"][1]["value"] == "2024-03-01"

        stats = runner.invoke(app, ["stats", "--out", str(out_dir)])
        assert stats.exit_code == 0
        assert "most used template: restaurant" in stats.output
        assert "suggested tax rates: 8.5, 8, 10, 15, 20" in stats.output


def test_render_command_rejects_bad_date() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        input_path = Path(temp_dir) / "invoice.json"
        _write_invoice(input_path)
        result = runner.invoke(app, ["render", str(input_path), "--out", temp_dir, "--today", "03/01/2024"])
        assert result.exit_code != 0


def test_strict_render_fails_on_unknown_template() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        input_path = Path(temp_dir) / "invoice.json"
        _write_invoice(input_path)
        result = runner.invoke(
            app, ["render", str(input_path), "--template", "mystery", "--out", temp_dir, "--strict"]
        )
        assert result.exit_code == 1
        assert "FAILED: invoice" in result.output
        assert (Path(temp_dir) / "invoice" / "error.log").exists()


def test_batch_command() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        inbox = Path(temp_dir) / "inbox"
        inbox.mkdir()
        _write_invoice(inbox / "one.json")
        (inbox / "two.json").write_text(json.dumps({"items": [{"quantity": -1, "rate": 1}]}), encoding="utf-8")
        result = runner.invoke(app, ["batch", str(inbox), "--out", str(Path(temp_dir) / "out")])
        assert result.exit_code == 0, result.output
        assert "READY: 1" in result.output
        assert "FAILED: two" in result.output


def test_templates_and_show() -> None:
    listing = runner.invoke(app, ["templates"])
    assert listing.exit_code == 0
    assert len(listing.output.strip().splitlines()) == 20
    assert listing.output.startswith("standard\t")

    shown = runner.invoke(app, ["show", "restaurant"])
    assert shown.exit_code == 0
    assert "service charge: yes" in shown.output
    assert "due days: 15" in shown.output

    missing = runner.invoke(app, ["show", "no-such-template"])
    assert missing.exit_code == 1
