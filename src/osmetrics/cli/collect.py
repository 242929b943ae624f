# src/osmetrics/cli/collect.py
"""
One-shot collection command: runs a single cycle and prints the exposition
document, a table, or writes the document to a file.
"""

import asyncio
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from ..core.collector import collect_metrics
from ..core.config import config
from ..core.exceptions import OsMetricsError
from ..exporters.prometheus_exporter import PrometheusTextExporter, format_number, serialize_metrics
from ..models.metrics import MetricRecord

logger = logging.getLogger(__name__)

app = typer.Typer(name="collect", help="Run one collection cycle and print the result.")


def render_table(records: List[MetricRecord], console: Console) -> None:
    table = Table(title="osmetrics")
    table.add_column("Namespace", style="cyan")
    table.add_column("Pod", style="magenta")
    table.add_column("Container")
    table.add_column("Metric", no_wrap=True)
    table.add_column("Value", justify="right", style="green", no_wrap=True)

    for record in records:
        table.add_row(
            record.labels.get("namespace", ""),
            record.labels.get("pod", ""),
            record.labels.get("container", ""),
            record.name,
            format_number(record.value),
        )
    console.print(table)


@app.callback(invoke_without_command=True)
def collect(
    namespace: Annotated[
        Optional[List[str]],
        typer.Option("--namespace", "-n", help="Namespace to scrape; repeat for several. Defaults to DEFAULT_NAMESPACE."),
    ] = None,
    concurrency: Annotated[Optional[int], typer.Option("--concurrency", "-c", min=1, help="Max parallel fetches.")] = None,
    table: Annotated[bool, typer.Option("--table", help="Render a table instead of the exposition format.")] = False,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Write the document to this file.")] = None,
) -> None:
    """
    Collect pod usage metrics once.
    """
    namespaces = list(namespace) if namespace else config.DEFAULT_NAMESPACE
    if not namespaces:
        typer.echo("No namespace given and DEFAULT_NAMESPACE is not set.", err=True)
        raise typer.Exit(code=2)

    try:
        config.validate_instance()
        records = asyncio.run(
            collect_metrics(
                namespaces,
                config.connection_params(),
                concurrency=concurrency or config.CONCURRENCY,
                log=logger,
            )
        )
        if output:
            written = asyncio.run(PrometheusTextExporter().export(records, output))
            typer.echo(f"Wrote {len(records)} samples to {written}")
            return
    except OsMetricsError as e:
        logger.error(f"Collection failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if table:
        render_table(records, Console())
    else:
        typer.echo(serialize_metrics(records), nl=False)
