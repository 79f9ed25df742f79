"""CLI for the ``expenwall`` package.

This module exposes callable command handlers (``cmd_project``,
``cmd_category_totals``, ...) and a Typer-based console interface over JSON
record files. Settings (``EXPENWALL_*``) are loaded from a local ``.env`` using
``python-dotenv`` before delegating to command logic. Business logic lives in
the core modules; handlers only load, dispatch and print.

Tabular output is tab-separated, one record per line, so it pipes cleanly into
``cut``/``sort``. ``summary`` renders a rich table instead.
"""

from __future__ import annotations

import datetime as dt
import sys
from decimal import Decimal
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .aggregation import (
    budget_statuses,
    category_totals,
    filter_by_currency,
    recent_transactions,
    spending_trend,
    summary_stats,
    top_merchants,
)
from .ingest import RecordLoadError, load_budgets, load_rules, load_transactions
from .insights import generate_local_insights
from .logging_setup import configure_logging, get_logger, level_from_flags
from .models import MerchantRule, ProcessedTransaction
from .projection import project_transactions
from .settings import Settings, load_settings
from .suggestions import suggest_subcategories

_logger = get_logger("expenwall.cli")


# ---- Small module-level helpers used by CLI commands -------------------------


def _fmt(value: Decimal) -> str:
    return f"{value:.2f}"


def _parse_today(today: str | None) -> dt.date:
    if today is None:
        return dt.date.today()
    try:
        return dt.date.fromisoformat(today)
    except ValueError:
        raise ValueError(f"--today must be an ISO date (YYYY-MM-DD), got {today!r}") from None


def _load_processed(
    transactions_path: str,
    rules_path: str | None,
    settings: Settings,
    *,
    currency_only: bool = True,
) -> list[ProcessedTransaction]:
    """Load, optionally filter to the configured currency, and project."""

    txs = load_transactions(transactions_path)
    rules: list[MerchantRule] = load_rules(rules_path) if rules_path else []
    if currency_only:
        txs = filter_by_currency(txs, settings.currency)
    return project_transactions(txs, rules, strategy=settings.rule_match)


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


# ---- Command handlers --------------------------------------------------------


def cmd_project(transactions_path: str, rules_path: str | None = None) -> int:
    """Print the display projection of every transaction in input order.

    Output columns: ``id, display_merchant, display_category,
    display_subcategory, display_emoji, amount, aliased`` where ``aliased`` is
    ``1`` when a rule applied.
    """

    try:
        settings = load_settings()
        processed = _load_processed(
            transactions_path, rules_path, settings, currency_only=False
        )
    except (RecordLoadError, ValueError) as e:
        return _fail(str(e))

    for p in processed:
        print(
            "\t".join(
                [
                    p.id,
                    p.display_merchant,
                    str(p.display_category),
                    p.display_subcategory,
                    p.display_emoji,
                    _fmt(p.amount),
                    "1" if p.is_aliased else "0",
                ]
            )
        )
    return 0


def cmd_category_totals(transactions_path: str, rules_path: str | None = None) -> int:
    try:
        settings = load_settings()
        processed = _load_processed(transactions_path, rules_path, settings)
    except (RecordLoadError, ValueError) as e:
        return _fail(str(e))

    for row in category_totals(processed):
        print(f"{row.name}\t{_fmt(row.value)}")
    return 0


def cmd_trend(transactions_path: str) -> int:
    """Print ``date, income, expense`` per day, oldest first."""

    try:
        settings = load_settings()
        txs = filter_by_currency(load_transactions(transactions_path), settings.currency)
    except (RecordLoadError, ValueError) as e:
        return _fail(str(e))

    for point in spending_trend(txs):
        print(f"{point.date.isoformat()}\t{_fmt(point.income)}\t{_fmt(point.expense)}")
    return 0


def cmd_top_merchants(
    transactions_path: str, rules_path: str | None = None, *, limit: int | None = None
) -> int:
    try:
        settings = load_settings()
        processed = _load_processed(transactions_path, rules_path, settings)
    except (RecordLoadError, ValueError) as e:
        return _fail(str(e))

    n = limit if limit is not None else settings.top_n
    for row in top_merchants(processed, n):
        print(f"{row.name}\t{_fmt(row.value)}")
    return 0


def cmd_budgets(
    transactions_path: str,
    budgets_path: str,
    rules_path: str | None = None,
    *,
    today: str | None = None,
) -> int:
    """Print ``category, subcategory, spent, amount, percentage, status`` per budget.

    ``status`` is ``over``, ``alert`` (80% threshold reached) or ``ok``.
    """

    try:
        settings = load_settings()
        day = _parse_today(today)
        budgets = load_budgets(budgets_path)
        processed = _load_processed(transactions_path, rules_path, settings)
    except (RecordLoadError, ValueError) as e:
        return _fail(str(e))

    for status in budget_statuses(budgets, processed, today=day):
        if status.is_over_budget:
            flag = "over"
        elif status.triggered_alerts:
            flag = "alert"
        else:
            flag = "ok"
        print(
            "\t".join(
                [
                    str(status.budget.category),
                    status.budget.subcategory or "",
                    _fmt(status.spent),
                    _fmt(status.budget.amount),
                    f"{status.percentage:.1f}",
                    flag,
                ]
            )
        )
    return 0


def cmd_suggest(text: str) -> int:
    for s in suggest_subcategories(text):
        print(f"{s.subcategory}\t{s.category}\t{s.emoji}\t{s.confidence:.2f}")
    return 0


def cmd_insights(
    transactions_path: str, rules_path: str | None = None, *, today: str | None = None
) -> int:
    try:
        settings = load_settings()
        day = _parse_today(today)
        processed = _load_processed(transactions_path, rules_path, settings)
    except (RecordLoadError, ValueError) as e:
        return _fail(str(e))

    for insight in generate_local_insights(
        processed, today=day, currency_symbol=settings.currency_symbol
    ):
        print(f"{insight.priority}\t{insight.type}\t{insight.title}\t{insight.description}")
    return 0


def cmd_summary(transactions_path: str, rules_path: str | None = None) -> int:
    """Render totals and the most recent transactions as rich tables."""

    try:
        settings = load_settings()
        processed = _load_processed(transactions_path, rules_path, settings)
    except (RecordLoadError, ValueError) as e:
        return _fail(str(e))

    stats = summary_stats(processed)
    sym = settings.currency_symbol
    # Created per call so the console binds to the current stdout.
    console = Console()

    totals = Table(title=f"Summary ({settings.currency})")
    totals.add_column("Metric")
    totals.add_column("Value", justify="right")
    totals.add_row("Income", f"{sym}{_fmt(stats.total_income)}")
    totals.add_row("Expenses", f"{sym}{_fmt(stats.total_expense)}")
    totals.add_row("Net balance", f"{sym}{_fmt(stats.net_balance)}")
    totals.add_row("Average expense", f"{sym}{_fmt(stats.avg_expense)}")
    totals.add_row("Transactions", str(stats.transaction_count))
    console.print(totals)

    recent = Table(title="Recent transactions")
    recent.add_column("Date")
    recent.add_column("Merchant")
    recent.add_column("Category")
    recent.add_column("Amount", justify="right")
    for p in recent_transactions(processed):
        sign = "+" if not p.is_expense else "-"
        recent.add_row(
            p.date.isoformat(),
            f"{p.display_emoji} {p.display_merchant}",
            str(p.display_category),
            f"{sign}{sym}{_fmt(p.amount)}",
        )
    console.print(recent)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Resolve merchant rules and summarise transactions from JSON exports. "
        "Loads EXPENWALL_* settings from a local .env before running."
    ),
)

TransactionsOpt = Annotated[
    Path,
    typer.Option(
        "--transactions",
        help="Path to a JSON array of transactions",
        dir_okay=False,
    ),
]
RulesOpt = Annotated[
    Path | None,
    typer.Option("--rules", help="Path to a JSON array of merchant rules", dir_okay=False),
]
TodayOpt = Annotated[
    str | None,
    typer.Option("--today", help="Reference date (YYYY-MM-DD); defaults to the current date"),
]


def _opt_str(path: Path | None) -> str | None:
    return str(path) if path is not None else None


@app.command("project")
def project_cmd(transactions: TransactionsOpt, rules: RulesOpt = None) -> None:
    """Print the display projection of each transaction."""

    raise typer.Exit(cmd_project(str(transactions), _opt_str(rules)))


@app.command("category-totals")
def category_totals_cmd(transactions: TransactionsOpt, rules: RulesOpt = None) -> None:
    """Expense totals per display category, largest first."""

    raise typer.Exit(cmd_category_totals(str(transactions), _opt_str(rules)))


@app.command("trend")
def trend_cmd(transactions: TransactionsOpt) -> None:
    """Daily income and expense sums."""

    raise typer.Exit(cmd_trend(str(transactions)))


@app.command("top-merchants")
def top_merchants_cmd(
    transactions: TransactionsOpt,
    rules: RulesOpt = None,
    limit: Annotated[
        int | None, typer.Option("--limit", min=1, help="Override EXPENWALL_TOP_N")
    ] = None,
) -> None:
    """Merchants ranked by summed expense."""

    raise typer.Exit(cmd_top_merchants(str(transactions), _opt_str(rules), limit=limit))


@app.command("budgets")
def budgets_cmd(
    transactions: TransactionsOpt,
    budgets: Annotated[
        Path,
        typer.Option("--budgets", help="Path to a JSON array of budgets", dir_okay=False),
    ],
    rules: RulesOpt = None,
    today: TodayOpt = None,
) -> None:
    """Spend against each budget for its current period."""

    raise typer.Exit(
        cmd_budgets(str(transactions), str(budgets), _opt_str(rules), today=today)
    )


@app.command("suggest")
def suggest_cmd(text: Annotated[str, typer.Argument(help="Free text to classify")]) -> None:
    """Suggest subcategories for a merchant name or note."""

    raise typer.Exit(cmd_suggest(text))


@app.command("insights")
def insights_cmd(
    transactions: TransactionsOpt, rules: RulesOpt = None, today: TodayOpt = None
) -> None:
    """Local spending insights over the last 30 days."""

    raise typer.Exit(cmd_insights(str(transactions), _opt_str(rules), today=today))


@app.command("summary")
def summary_cmd(transactions: TransactionsOpt, rules: RulesOpt = None) -> None:
    """Totals and recent transactions as a table."""

    raise typer.Exit(cmd_summary(str(transactions), _opt_str(rules)))


@app.callback()
def _root(
    verbose: Annotated[
        int, typer.Option("--verbose", "-v", count=True, help="More log output (-vv for debug)")
    ] = 0,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors")] = False,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging from the
    flags, falling back to ``EXPENWALL_LOG_LEVEL``.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(level_from_flags(verbose, quiet))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from None
    _logger.debug("cli:start")


if __name__ == "__main__":  # pragma: no cover
    app()
