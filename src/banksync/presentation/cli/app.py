"""banksync CLI application using Typer.

Thin caller of the sync pipeline: every command builds its collaborators
from settings, runs one use case and prints the result.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from datetime import timedelta
from typing import Awaitable, Callable, Optional, TypeVar
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table

from banksync.application.commands.banking import (
    BankConnectionCommand,
    LinkAccountsCommand,
)
from banksync.application.commands.integration import BatchSyncCommand
from banksync.application.dtos.integration import BatchSyncResult, SyncStatusResult
from banksync.application.ports.identity import CurrentUser
from banksync.application.queries.banking import ListInstitutionsQuery
from banksync.application.queries.integration import SyncStatusQuery
from banksync.application.services import SyncPacer
from banksync.domain.shared.exceptions import DomainException
from banksync.infrastructure.banking import AggregatorConfig, GoCardlessClient
from banksync.infrastructure.persistence.sqlalchemy.init_db import create_tables
from banksync.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from banksync.infrastructure.persistence.sqlalchemy.session import (
    get_engine,
    get_session_maker,
)
from banksync_config import Settings, get_settings

T = TypeVar("T")

app = typer.Typer(
    name="banksync",
    help="banksync - bank account synchronization via PSD2",
    no_args_is_help=True,
)
db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)
console = Console()

UserIdOption = typer.Option(..., "--user-id", "-u", help="User to act for")


def configure_logging(settings: Settings) -> None:
    """Configure application logging.

    - Console output with timestamps and module names
    - Configurable log level for banksync modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("banksync").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@app.callback()
def main() -> None:
    configure_logging(get_settings())


def _pacer(settings: Settings) -> SyncPacer:
    return SyncPacer(
        call_delay=settings.sync_call_delay_seconds,
        account_delay=settings.sync_account_delay_seconds,
    )


def _run(coro_factory: Callable[[], Awaitable[T]]) -> T:
    try:
        return asyncio.run(coro_factory())  # type: ignore[arg-type]
    except DomainException as e:
        console.print(f"[red]Error ({e.code.value}):[/red] {e.message}")
        raise typer.Exit(code=1) from e


# -----------------------------------------------------------------------------
# Database
# -----------------------------------------------------------------------------


@db_app.command("init")
def db_init() -> None:
    """Create missing database tables."""

    async def _init() -> None:
        engine = get_engine()
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    _run(_init)
    console.print("[green]Database initialized[/green]")


# -----------------------------------------------------------------------------
# Sync
# -----------------------------------------------------------------------------


@app.command("sync")
def sync(
    user_id: UUID = UserIdOption,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Sync all bank accounts of a user."""
    settings = get_settings()

    async def _sync() -> BatchSyncResult:
        client = GoCardlessClient(AggregatorConfig.from_settings(settings))
        try:
            async with get_session_maker()() as session:
                factory = SQLAlchemyRepositoryFactory(session, CurrentUser(user_id))
                command = BatchSyncCommand.from_factory(
                    factory,
                    client,
                    pacer=_pacer(settings),
                    backfill_days=settings.sync_backfill_days,
                    overlap_days=settings.sync_overlap_days,
                )
                return await command.execute()
        finally:
            await client.close()

    result = _run(_sync)
    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return
    _print_batch_result(result)


@app.command("status")
def status(
    user_id: UUID = UserIdOption,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Show the sync status of a user's accounts."""
    settings = get_settings()

    async def _status() -> SyncStatusResult:
        async with get_session_maker()() as session:
            factory = SQLAlchemyRepositoryFactory(session, CurrentUser(user_id))
            query = SyncStatusQuery.from_factory(
                factory,
                stale_after=timedelta(hours=settings.sync_stale_after_hours),
                history_limit=settings.sync_history_limit,
            )
            return await query.execute()

    result = _run(_status)
    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return
    _print_status(result)


# -----------------------------------------------------------------------------
# Bank connection
# -----------------------------------------------------------------------------


@app.command("institutions")
def institutions(
    country: Optional[str] = typer.Option(None, "--country", "-c"),
    name: Optional[list[str]] = typer.Option(
        None,
        "--name",
        "-n",
        help="Only show banks whose name contains this (repeatable)",
    ),
) -> None:
    """List banks available through the aggregator."""
    settings = get_settings()

    async def _list():
        client = GoCardlessClient(AggregatorConfig.from_settings(settings))
        try:
            query = ListInstitutionsQuery(client)
            return await query.execute(country or settings.gocardless_country, name)
        finally:
            await client.close()

    found = _run(_list)
    table = Table(title=f"Institutions ({len(found)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("BIC")
    table.add_column("History (days)", justify="right")
    for institution in found:
        table.add_row(
            institution.id,
            institution.name,
            institution.bic or "-",
            str(institution.transaction_total_days or "-"),
        )
    console.print(table)


@app.command("connect")
def connect(institution_id: str = typer.Argument(..., help="Aggregator bank id")) -> None:
    """Start a bank connection and print the authorization link."""
    settings = get_settings()

    async def _connect():
        client = GoCardlessClient(AggregatorConfig.from_settings(settings))
        try:
            command = BankConnectionCommand(
                client,
                redirect_url=settings.gocardless_redirect_url,
                reference_prefix=settings.gocardless_reference_prefix,
                user_language=settings.gocardless_user_language,
            )
            return await command.execute(institution_id)
        finally:
            await client.close()

    result = _run(_connect)
    console.print(f"Requisition: [cyan]{result.requisition_id}[/cyan]")
    console.print(f"Reference:   [cyan]{result.reference}[/cyan]")
    console.print(f"\nOpen this link to authorize access:\n{result.link}")


@app.command("link")
def link(
    requisition: str = typer.Argument(..., help="Requisition id or reference"),
    user_id: UUID = UserIdOption,
) -> None:
    """Create accounts for an authorized requisition and sync them."""
    settings = get_settings()

    async def _link():
        client = GoCardlessClient(AggregatorConfig.from_settings(settings))
        try:
            async with get_session_maker()() as session:
                factory = SQLAlchemyRepositoryFactory(session, CurrentUser(user_id))
                command = LinkAccountsCommand.from_factory(
                    factory,
                    client,
                    pacer=_pacer(settings),
                    reference_prefix=settings.gocardless_reference_prefix,
                    default_currency=settings.default_currency,
                    backfill_days=settings.sync_backfill_days,
                    overlap_days=settings.sync_overlap_days,
                )
                return await command.execute(requisition)
        finally:
            await client.close()

    result = _run(_link)
    console.print(
        f"Linked [bold]{result.accounts_count}[/bold] accounts "
        f"({result.accounts_synced} synced)",
    )
    for account_result in result.results:
        if account_result.succeeded:
            console.print(
                f"  [green]✓[/green] {account_result.account_name}: "
                f"{account_result.transactions_new} transactions",
            )
        else:
            console.print(
                f"  [red]✗[/red] {account_result.account_name}: "
                f"{account_result.error_message}",
            )


# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------


def _print_batch_result(result: BatchSyncResult) -> None:
    if not result.has_accounts:
        console.print("[yellow]No bank accounts connected[/yellow]")
        return

    table = Table(title="Sync results")
    table.add_column("Account")
    table.add_column("Status")
    table.add_column("Fetched", justify="right")
    table.add_column("New", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("Error", style="red")
    for r in result.results:
        table.add_row(
            r.account_name,
            "[green]success[/green]" if r.succeeded else "[red]error[/red]",
            str(r.transactions_fetched),
            str(r.transactions_new),
            f"{r.balance} ({r.balance_type})" if r.balance is not None else "-",
            r.error_message or "",
        )
    console.print(table)
    console.print(
        f"{result.accounts_updated}/{result.total_accounts} accounts updated, "
        f"{result.new_transactions} new transactions",
    )


def _print_status(result: SyncStatusResult) -> None:
    last = result.last_sync_at.isoformat() if result.last_sync_at else "never"
    console.print(f"Overall: [bold]{result.overall_status.value}[/bold]")
    console.print(f"Last sync: {last}")
    console.print(f"Needs sync: {'yes' if result.needs_sync else 'no'}")

    if result.accounts:
        table = Table(title="Accounts")
        table.add_column("ID", justify="right")
        table.add_column("Name")
        table.add_column("Status")
        table.add_column("Last sync")
        table.add_column("Error", style="red")
        for a in result.accounts:
            table.add_row(
                str(a.account_id),
                a.name,
                a.sync_status,
                a.last_sync_at.isoformat() if a.last_sync_at else "-",
                a.error_message or "",
            )
        console.print(table)

    if result.recent_history:
        history = Table(title="Recent syncs")
        history.add_column("Started")
        history.add_column("Account", justify="right")
        history.add_column("Type")
        history.add_column("Status")
        history.add_column("Fetched/New", justify="right")
        for h in result.recent_history:
            history.add_row(
                h.started_at.isoformat(),
                str(h.account_id),
                h.sync_type,
                h.status,
                f"{h.transactions_fetched}/{h.transactions_new}",
            )
        console.print(history)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
