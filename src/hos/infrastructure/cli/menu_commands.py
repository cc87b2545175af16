"""CLI commands for the menu catalog."""

from __future__ import annotations

import json

import click

from hos.application.dto import MenuItemSpec
from hos.application.show_menu import ShowMenuHandler
from hos.application.upload_menu import UploadMenuHandler
from hos.domain.exceptions import DomainException
from hos.infrastructure.bootstrap import menu_repository
from hos.infrastructure.config import Settings


def _parse_menu_file(stream) -> list[MenuItemSpec]:
    """Read a JSON list of {item_key, name, price, category?, description?, image?}."""
    try:
        raw = json.load(stream)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Menu file is not valid JSON: {exc}")
    if not isinstance(raw, list):
        raise click.BadParameter("Menu file must contain a JSON list of items.")

    specs: list[MenuItemSpec] = []
    for i, entry in enumerate(raw, start=1):
        try:
            specs.append(
                MenuItemSpec(
                    item_key=entry["item_key"],
                    name=entry["name"],
                    price=entry["price"],
                    category=entry.get("category"),
                    description=entry.get("description"),
                    image=entry.get("image"),
                )
            )
        except (KeyError, TypeError, AttributeError):
            raise click.BadParameter(
                f"Menu entry #{i} needs 'item_key', 'name' and 'price'."
            )
    return specs


@click.command("show")
@click.option("--version", "version", default=None, help="Menu version to show.")
@click.pass_obj
def menu_show(settings: Settings, version: str | None) -> None:
    """List the items of a menu version."""
    version = version or settings.default_menu_version
    handler = ShowMenuHandler(menu_repo=menu_repository())
    items = handler.handle(version)

    if not items:
        click.echo(f"No items in menu '{version}'.")
        return

    click.echo(f"{'Key':<20} {'Name':<24} {'Category':<10} {'Price':>7}")
    click.echo("-" * 64)
    for item in items:
        click.echo(
            f"{item.item_key:<20} {item.name:<24} {item.category:<10} {item.price:>7}"
        )


@click.command("upload")
@click.option("--version", "version", required=True, help="Menu version to replace.")
@click.option("--file", "menu_file", required=True, type=click.File("r", encoding="utf-8"),
              help="JSON file with the menu items.")
def menu_upload(version: str, menu_file) -> None:
    """Replace a whole menu version from a JSON file."""
    specs = _parse_menu_file(menu_file)
    handler = UploadMenuHandler(menu_repo=menu_repository())

    try:
        count = handler.handle(version, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Menu '{version}' replaced with {count} items.")
