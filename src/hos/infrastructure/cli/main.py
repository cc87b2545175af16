import click

from hos.application.check_passphrase import CheckPassphraseHandler
from hos.domain.exceptions import DomainException
from hos.infrastructure import bootstrap
from hos.infrastructure.cli.export_commands import export_csv
from hos.infrastructure.cli.menu_commands import menu_show, menu_upload
from hos.infrastructure.cli.order_commands import (
    order_add_items,
    order_create,
    order_list,
    order_show,
    order_summary,
    order_update,
)


@click.group()
@click.option("--passphrase", envvar="HOS_PASSPHRASE", default=None,
              help="Staff passphrase (or set HOS_PASSPHRASE).")
@click.pass_context
def cli(ctx: click.Context, passphrase: str | None) -> None:
    """HOS: Hotel Ordering System."""
    settings = bootstrap.settings()
    try:
        CheckPassphraseHandler(settings.staff_passphrase).handle(passphrase)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    ctx.obj = bootstrap.startup()


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def menu() -> None:
    """Manage menus."""


@cli.group()
def export() -> None:
    """Export reports."""


# Subcommands
order.add_command(order_add_items)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_summary)
order.add_command(order_update)
menu.add_command(menu_show)
menu.add_command(menu_upload)
export.add_command(export_csv)
