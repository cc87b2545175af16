"""CLI commands for reporting exports."""

from __future__ import annotations

import click

from hos.application.export_orders import ExportOrdersHandler
from hos.infrastructure.bootstrap import order_repository


@click.command("csv")
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), required=True,
              help="Day to export (YYYY-MM-DD).")
@click.option("--output", type=click.File("w", encoding="utf-8"), default="-",
              help="Destination file (default: stdout).")
def export_csv(day, output) -> None:
    """Export one day's orders as CSV."""
    handler = ExportOrdersHandler(order_repo=order_repository())
    output.write(handler.handle(day.date()))
