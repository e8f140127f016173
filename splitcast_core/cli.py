from __future__ import annotations

import dataclasses
import datetime as dt
import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from splitcast_core.domain.models import ALL, AppConfig, AppState, DateRange, RecordFilter
from splitcast_core.io import config as config_io
from splitcast_core.io import ledger as ledger_io
from splitcast_core.io import store
from splitcast_core.services import breakdown, detail, filtering, insights, projection, records, stats
from splitcast_core.services.formatting import format_amount, format_currency, month_label, month_names

app = typer.Typer(help="Expense tracker that projects cash and installment spending across months.")

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, help="JSON config file (store_path, locale, currency_symbol)"),
    store_path: Optional[Path] = typer.Option(None, "--store", help="Override the store file location"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    _setup_logging(verbose)
    try:
        app_config = config_io.load_app_config(config) if config else config_io.default_app_config()
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Cannot read config: {exc}") from exc
    if store_path:
        app_config = dataclasses.replace(app_config, store_path=store_path)
    logger.debug("Using store %s", app_config.store_path)
    ctx.obj = app_config


def _load(ctx: typer.Context) -> Tuple[AppConfig, AppState]:
    app_config: AppConfig = ctx.obj
    try:
        state = store.load_state(app_config.store_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return app_config, state


def _parse_day(raw: Optional[str], name: str) -> Optional[dt.date]:
    if not raw:
        return None
    try:
        return dt.date.fromisoformat(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"{name} must be YYYY-MM-DD") from exc


def _echo_json(payload) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def add(
    ctx: typer.Context,
    description: str = typer.Argument(..., help="What the expense was"),
    amount: float = typer.Argument(..., help="Full amount (not the per-installment value)"),
    date: Optional[str] = typer.Option(None, help="Origin date YYYY-MM-DD (default today)"),
    mode: str = typer.Option("cash", help="Payment mode: cash|installment"),
    installments: Optional[int] = typer.Option(None, help="Number of monthly installments (2-60)"),
    category: str = typer.Option(records.DEFAULT_CATEGORY, help="Category label"),
):
    """Record a new expense."""
    app_config, state = _load(ctx)
    try:
        record = records.build_record(
            description=description,
            amount=amount,
            date=date or dt.date.today().isoformat(),
            payment_mode=mode,
            installment_count=installments,
            category=category,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    records.add_record(state, record)
    store.save_state(app_config.store_path, state)
    typer.echo(f"Added {record.id}: {record.description} {format_currency(record.amount, app_config)}")


@app.command()
def remove(ctx: typer.Context, record_id: str = typer.Argument(..., help="Id of the expense to delete")):
    """Delete an expense by id."""
    app_config, state = _load(ctx)
    record = records.find_record(state.records, record_id)
    if not records.remove_record(state, record_id):
        typer.echo(f"No expense with id {record_id}")
        raise typer.Exit(code=1)
    store.save_state(app_config.store_path, state)
    typer.echo(f'"{record.description}" removed.')


@app.command("import")
def import_csv(
    ctx: typer.Context,
    csv: Path = typer.Option(..., help="CSV with description,amount,date,category[,payment_mode,installments]"),
):
    """Import expenses from a CSV file."""
    app_config, state = _load(ctx)
    try:
        imported = ledger_io.load_records_csv(csv)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    for record in imported:
        records.add_record(state, record)
    store.save_state(app_config.store_path, state)
    typer.echo(f"Imported {len(imported)} expenses into {app_config.store_path}")


@app.command("list")
def list_records(
    ctx: typer.Context,
    category: str = typer.Option(ALL, help="Exact category or 'all'"),
    mode: str = typer.Option(ALL, help="cash|installment|all"),
    range_name: Optional[str] = typer.Option(
        None, "--range", help="today|last_7_days|last_30_days|this_month|last_month|this_year|all"
    ),
    start: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD (inclusive)"),
    end: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD (inclusive)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """List recorded expenses with optional filters."""
    app_config, state = _load(ctx)
    try:
        date_range = filtering.quick_range(range_name) if range_name else DateRange(
            start=_parse_day(start, "start"), end=_parse_day(end, "end")
        )
        payment_mode = ALL if mode == ALL else records.parse_payment_mode(mode).value
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    selected = filtering.filter_records(
        state.records, RecordFilter(category=category, payment_mode=payment_mode, date_range=date_range)
    )

    if as_json:
        payload = []
        for r in selected:
            item = r.to_dict()
            progress = filtering.installment_progress(r)
            item["progress"] = dataclasses.asdict(progress) if progress else None
            payload.append(item)
        _echo_json(payload)
        return

    console = Console()
    table = Table(title=f"Expenses ({len(selected)} of {len(state.records)})")
    for col in ("Id", "Date", "Description", "Category", "Mode", "Amount", "Progress"):
        table.add_column(col)
    for r in selected:
        progress = filtering.installment_progress(r)
        if progress is None:
            progress_txt = "-"
        elif progress.is_finished:
            progress_txt = f"done ({progress.total}x)"
        else:
            progress_txt = f"{progress.current}/{progress.total} ({progress.percent:.0f}%, {progress.remaining} left)"
        table.add_row(
            r.id,
            r.date.isoformat(),
            r.description,
            r.category,
            r.payment_mode.value.lower(),
            format_currency(r.amount, app_config),
            progress_txt,
        )
    console.print(table)


@app.command()
def summary(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Monthly totals split by cash and installments."""
    app_config, state = _load(ctx)
    summaries = projection.monthly_summaries(state.records)
    peak = stats.peak_month(summaries)
    cash_total, installment_total = stats.mode_split(summaries)

    if as_json:
        _echo_json(
            {
                "months": [s.to_dict() for s in summaries],
                "grand_total": stats.grand_total(summaries),
                "average_monthly_total": stats.average_monthly_total(summaries),
                "peak_month": peak.month if peak else None,
                "cash_total": cash_total,
                "installment_total": installment_total,
                "installment_ratio": stats.installment_ratio(summaries),
            }
        )
        return

    console = Console()
    if not summaries:
        console.print("[yellow]No expenses recorded yet.[/yellow]")
        return
    table = Table(title="Monthly projection")
    for col in ("Month", "Cash", "Installments", "Total"):
        table.add_column(col, justify="right")
    for s in summaries:
        table.add_row(
            month_label(s.month, app_config.locale),
            format_currency(s.cash_total, app_config),
            format_currency(s.installment_total, app_config),
            format_currency(s.total, app_config),
        )
    console.print(table)
    console.print(f"Average per month: [bold]{format_currency(stats.average_monthly_total(summaries), app_config)}[/bold]")
    console.print(
        f"Peak month: [bold]{month_label(peak.month, app_config.locale)}[/bold] "
        f"({format_currency(peak.total, app_config)})"
    )
    console.print(f"Paid in installments: [bold]{stats.installment_ratio(summaries):.1f}%[/bold]")


@app.command()
def month(
    ctx: typer.Context,
    month_key: Optional[str] = typer.Argument(None, help="Month YYYY-MM (default: latest month with spending)"),
    category: str = typer.Option(ALL, help="Exact category or 'all'"),
    share_of: Optional[str] = typer.Option(None, help="Report the share of the month taken by this category"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
):
    """Drill into one month: items largest first, grouped by category."""
    app_config, state = _load(ctx)
    summaries = projection.monthly_summaries(state.records)
    month_key = month_key or detail.default_month(summaries)
    if month_key is None:
        typer.echo("No expenses recorded yet.")
        return

    items = detail.month_detail(state.records, month_key, category)
    groups = detail.group_by_category(items)
    current = next((s for s in summaries if s.month == month_key), None)

    if as_json:
        payload = {
            "month": month_key,
            "summary": current.to_dict() if current else None,
            "items": [i.to_dict() for i in items],
            "groups": [g.to_dict() for g in groups],
            "category_totals": [
                {"category": cat, "total": total} for cat, total in detail.category_totals(state.records, month_key)
            ],
            "categories": detail.month_categories(state.records, month_key),
        }
        if share_of:
            payload["share"] = {"category": share_of, "percent": detail.category_share(state.records, month_key, share_of)}
        _echo_json(payload)
        return

    console = Console()
    console.print(f"[bold cyan]{month_label(month_key, app_config.locale)}[/bold cyan]")
    if current:
        console.print(
            f"Cash {format_currency(current.cash_total, app_config)} | "
            f"Installments {format_currency(current.installment_total, app_config)} | "
            f"Total [bold]{format_currency(current.total, app_config)}[/bold]"
        )
    if not groups:
        console.print("[yellow]Nothing in this month.[/yellow]")
    for group in groups:
        table = Table(title=f"{group.category} - {format_currency(group.subtotal, app_config)}")
        table.add_column("Description")
        table.add_column("Installment")
        table.add_column("Amount", justify="right")
        for item in group.items:
            table.add_row(item.description, item.installment_label or "-", format_currency(item.amount, app_config))
        console.print(table)
    if share_of:
        pct = detail.category_share(state.records, month_key, share_of)
        console.print(f"[green]Tip:[/green] {share_of} takes {pct:.1f}% of this month's spending.")


@app.command()
def annual(
    ctx: typer.Context,
    year: Optional[int] = typer.Option(None, help="Year to break down (default: current year)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Category x month breakdown for one year."""
    app_config, state = _load(ctx)
    year = year or dt.date.today().year
    result = breakdown.annual_breakdown(state.records, year)
    years = breakdown.available_years(state.records)
    recent = breakdown.recent_records(state.records)

    if as_json:
        payload = result.to_dict()
        payload["available_years"] = years
        payload["recent"] = [r.to_dict() for r in recent]
        _echo_json(payload)
        return

    console = Console()
    locale = app_config.locale
    names = month_names(locale)
    table = Table(title=f"{year} by category")
    table.add_column("Category")
    for name in names:
        table.add_column(name, justify="right")
    table.add_column("Total", justify="right")
    for cat in result.categories:
        cells = result.matrix[cat]
        table.add_row(cat, *[format_amount(v, locale) for v in cells], format_amount(sum(cells), locale))
    table.add_row(
        "Total",
        *[format_amount(v, locale) for v in result.month_totals],
        format_amount(result.year_total, locale),
        style="bold",
    )
    console.print(table)

    peak = result.peak_month_index
    console.print(f"Accumulated {year}: [bold]{format_currency(result.year_total, app_config)}[/bold]")
    console.print(f"Monthly average: [bold]{format_currency(result.monthly_average, app_config)}[/bold]")
    console.print(f"Peak month: [bold]{names[peak] if peak is not None else '-'}[/bold]")
    console.print(f"Categories: [bold]{len(result.categories)}[/bold]")
    console.print(f"Available years: {', '.join(str(y) for y in years)}")
    if recent:
        console.print("\n[bold]Latest entries:[/bold]")
        for r in recent:
            console.print(f"- {r.date.isoformat()} {r.description} ({r.category}) {format_currency(r.amount, app_config)}")


@app.command()
def theme(
    ctx: typer.Context,
    value: Optional[str] = typer.Argument(None, help="dark|light|toggle (omit to show)"),
):
    """Show or change the stored display theme."""
    app_config, state = _load(ctx)
    if value is None:
        typer.echo("dark" if state.dark_mode else "light")
        return
    if value == "toggle":
        state.dark_mode = not state.dark_mode
    elif value in ("dark", "light"):
        state.dark_mode = value == "dark"
    else:
        raise typer.BadParameter("Theme must be dark, light or toggle")
    store.save_state(app_config.store_path, state)
    typer.echo("dark" if state.dark_mode else "light")


@app.command("insights")
def insights_cmd(ctx: typer.Context):
    """Ask a hosted model for tips about your spending (needs HF_TOKEN)."""
    app_config, state = _load(ctx)
    summaries = projection.monthly_summaries(state.records)
    console = Console()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
        console=console,
    ) as progress:
        progress.add_task("Generating insights...", total=None)
        text = insights.generate_insights(
            state.records,
            summaries,
            generator=insights.huggingface_generator(app_config.insight_model),
            locale=app_config.locale,
        )
    console.print("[bold magenta]Insights:[/bold magenta]")
    console.print(text)


if __name__ == "__main__":
    app()
