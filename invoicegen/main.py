from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from . import config
from .engine.errors import UnknownTemplate
from .engine.ingest import load_record, load_records, slug_from_name
from .engine.run import run_batch
from .engine.templates import TEMPLATES, get_template
from .history import load_history, most_used_template, suggested_tax_rates
from .models import reset_engine

app = typer.Typer(help="Invoice document rendering engine")


@app.callback()
def main(
    log_level: str = typer.Option(config.LOG_LEVEL, "--log-level", help="Logging level"),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _use_out_dir(out: Optional[Path]) -> None:
    if out:
        config.set_out_dir(out)
        reset_engine()


def _parse_today(today: Optional[str]) -> Optional[date]:
    if not today:
        return None
    try:
        return date.fromisoformat(today)
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {today!r}", param_hint="--today") from None


def _report(results: dict) -> None:
    typer.echo(f"READY: {len(results['READY'])}")
    typer.echo(f"FAILED: {len(results['FAILED'])}")
    for slug in results["FAILED"]:
        typer.echo(f"FAILED: {slug}")


@app.command()
def render(
    input_file: Path = typer.Argument(..., help="Invoice JSON file"),
    template: str = typer.Option(config.GENERIC_TEMPLATE_ID, "--template", "-t", help="Template id"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    today: Optional[str] = typer.Option(None, "--today", help="Date used for date defaults (YYYY-MM-DD)"),
    strict: bool = typer.Option(False, "--strict", help="Fail on unknown templates and missing inputs"),
) -> None:
    _use_out_dir(out)
    record = load_record(input_file)
    slug = slug_from_name(input_file.stem)
    results = run_batch([(slug, record, template)], today=_parse_today(today), strict=strict)
    _report(results)
    if results["FAILED"]:
        raise typer.Exit(code=1)
    typer.echo(str(config.OUT_DIR / slug / "document.json"))


@app.command()
def batch(
    directory: Path = typer.Argument(..., help="Directory of invoice JSON files"),
    template: str = typer.Option(config.GENERIC_TEMPLATE_ID, "--template", "-t", help="Template id"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    today: Optional[str] = typer.Option(None, "--today", help="Date used for date defaults (YYYY-MM-DD)"),
) -> None:
    _use_out_dir(out)
    records = load_records(directory)
    if not records:
        typer.echo("No invoices to render")
        return
    results = run_batch(
        [(slug, record, template) for slug, record in records],
        today=_parse_today(today),
    )
    _report(results)


@app.command()
def templates() -> None:
    for key, descriptor in TEMPLATES.items():
        typer.echo(f"{key}\t{descriptor.title}\t{descriptor.industry}")


@app.command()
def show(template_id: str = typer.Argument(..., help="Template id")) -> None:
    try:
        descriptor = get_template(template_id, strict=True)
    except UnknownTemplate as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"id: {descriptor.key}")
    typer.echo(f"title: {descriptor.title}")
    typer.echo(f"industry: {descriptor.industry}")
    typer.echo(f"sections: {', '.join(descriptor.skeleton)}")
    typer.echo(f"columns: {', '.join(descriptor.columns)}")
    if descriptor.extra_fields:
        typer.echo(f"fields: {', '.join(descriptor.extra_fields)}")
    typer.echo(f"due days: {descriptor.due_days}")
    typer.echo(f"service charge: {'yes' if descriptor.service_charge else 'no'}")
    for key in ("style.layout", "style.table_style", "style.corner_radius", "style.primary_color"):
        value = descriptor.defaults.get(key)
        if value is not None:
            typer.echo(f"{key}: {value}")


@app.command()
def stats(out: Optional[Path] = typer.Option(None, "--out", help="Output directory")) -> None:
    _use_out_dir(out)
    entries = load_history()
    typer.echo(f"renders: {len(entries)}")
    typer.echo(f"most used template: {most_used_template(entries) or '-'}")
    rates = ", ".join(f"{rate:g}" for rate in suggested_tax_rates(entries))
    typer.echo(f"suggested tax rates: {rates}")


if __name__ == "__main__":
    app()
