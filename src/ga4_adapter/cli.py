"""GA4 query adapter CLI.

`ga4-adapter explain REQUEST.json` shows the report a query translates to;
`ga4-adapter query REQUEST.json` runs it against the configured property.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError

from ga4_adapter.client import GA4ReportClient
from ga4_adapter.config import settings
from ga4_adapter.contracts.query import QueryRequest, RowSet
from ga4_adapter.contracts.trace import QueryTrace
from ga4_adapter.errors import ConnectorError
from ga4_adapter.orchestrator.connector import QueryConnector
from ga4_adapter.util.logging import configure_logging

# Force a command group so the UX is always `ga4-adapter <command> ...`
app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main() -> None:
    """GA4 query adapter CLI."""
    configure_logging(settings.LOG_LEVEL)


def _load_query(path: Path) -> QueryRequest:
    if not path.exists():
        typer.echo(f"Request file not found: {path}")
        raise typer.Exit(1)
    try:
        return QueryRequest.model_validate_json(path.read_text())
    except ValidationError as e:
        typer.echo(f"Invalid query request: {e}")
        raise typer.Exit(1)


def _fail(e: ConnectorError) -> None:
    typer.echo(f"Error ({e.status_code}): {e.message}")
    if e.details:
        typer.echo(json.dumps(e.details, indent=2, default=str))
    raise typer.Exit(1)


@app.command()
def explain(
    request: Path = typer.Argument(..., help="Path to a query request JSON file"),
    property_id: str = typer.Option("", "--property-id", "-p", help="GA4 property id"),
) -> None:
    """Print the GA4 report request a query translates to."""
    query = _load_query(request)
    if not settings.DOMAIN:
        typer.echo(
            f"Warning: GA4_DOMAIN is not set; the {settings.SCOPING_DIMENSION} scoping filter will match an empty value.",
            err=True,
        )
    connector = QueryConnector(
        property_id=property_id or settings.PROPERTY_ID or "<property_id>",
        scope=settings.scope,
    )
    try:
        typer.echo(json.dumps(connector.explain(query), indent=2))
    except ConnectorError as e:
        _fail(e)


@app.command("query")
def run_query(
    request: Path = typer.Argument(..., help="Path to a query request JSON file"),
    trace: bool = typer.Option(False, "--trace", help="Print the query trace"),
) -> None:
    """Run a query against GA4 and print the resulting rows."""
    if not settings.is_configured:
        typer.echo("GA4 not configured. Set GA4_PROPERTY_ID, GA4_DOMAIN and GA4_CREDENTIALS_FILE or a .env file.")
        raise typer.Exit(1)

    query = _load_query(request)
    query_trace = QueryTrace()

    async def _run() -> RowSet:
        client = GA4ReportClient.from_service_account_file(settings.CREDENTIALS_FILE)
        try:
            connector = QueryConnector(client, property_id=settings.PROPERTY_ID, scope=settings.scope)
            return await connector.query(query, trace=query_trace)
        finally:
            await client.close()

    try:
        rows = asyncio.run(_run())
    except ConnectorError as e:
        if trace:
            query_trace.print_summary()
        _fail(e)
        return

    if trace:
        query_trace.print_summary()

    df = rows.to_dataframe()
    typer.echo(f"Rows: {len(df)}")
    if not df.empty:
        typer.echo(df.head(20).to_string(index=False))
