"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from hos.application.add_items import AddItemsHandler
from hos.application.create_order import CreateOrderHandler
from hos.application.dto import MenuPick, OrderDTO, OrderItemSpec
from hos.application.list_orders import ListOrdersHandler
from hos.application.select_menu_items import SelectMenuItemsHandler
from hos.application.show_order import ShowOrderHandler
from hos.application.summarize_day import DaySummaryHandler
from hos.application.update_order import UpdateOrderHandler
from hos.domain.exceptions import DomainException
from hos.domain.model.order import OrderStatus, PaymentStatus
from hos.infrastructure.bootstrap import menu_repository, order_repository
from hos.infrastructure.config import Settings

STATUS_CHOICES = click.Choice([s.value for s in OrderStatus])
PAYMENT_CHOICES = click.Choice([p.value for p in PaymentStatus])
DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def _parse_picks(raw: str) -> list[MenuPick]:
    """Parse 'paneer_tikka:2,naan:4' into MenuPick list."""
    picks: list[MenuPick] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'item_key:Quantity'."
            )
        key, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for item '{key}'."
            )
        picks.append(MenuPick(item_key=key.strip(), qty=qty))
    return picks


def _price_picks(raw: str | None, version: str) -> list[OrderItemSpec]:
    if not raw:
        return []
    handler = SelectMenuItemsHandler(menu_repo=menu_repository())
    return handler.handle(_parse_picks(raw), version=version)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_no}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Guest:    {dto.guest_name}  Room {dto.room_no}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.requested_time:
        click.echo(f"Wanted:   {dto.requested_time}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()

    click.echo(f"  {'Item':<24} {'Qty':>5} {'Price':>8} {'Total':>8}")
    click.echo(f"  {'-'*48}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<24} {item.qty:>5} {item.price:>8} {item.line_total:>8}"
        )
    click.echo(f"  {'-'*48}")
    click.echo(f"  {'Order Total':<30} {dto.total:>17}")
    click.echo()
    click.echo("History:")
    for entry in dto.history:
        click.echo(f"  {entry.when}  {entry.action}")


@click.command("create")
@click.option("--guest", required=True, help="Guest name.")
@click.option("--room", required=True, help="Room number.")
@click.option("--notes", default=None, help="Free-text notes for the kitchen.")
@click.option("--menu-version", default=None, help="Menu to price items from.")
@click.option("--items", default=None, help="Items as 'item_key:Qty,item_key:Qty'.")
@click.pass_obj
def order_create(
    settings: Settings,
    guest: str,
    room: str,
    notes: str | None,
    menu_version: str | None,
    items: str | None,
) -> None:
    """Create a new room-service order."""
    version = menu_version or settings.default_menu_version
    handler = CreateOrderHandler(order_repo=order_repository())

    try:
        specs = _price_picks(items, version)
        dto = handler.handle(
            guest_name=guest,
            room_no=room,
            item_specs=specs,
            notes=notes,
            menu_version=version,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_no} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--date", "day", type=DATE_TYPE, default=None, help="Creation day (YYYY-MM-DD).")
@click.option("--status", type=STATUS_CHOICES, default=None, help="Exact status.")
@click.option("--room", default=None, help="Exact room number.")
@click.option("--search", default=None, help="Guest, room or order number contains.")
def order_list(day, status: str | None, room: str | None, search: str | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.handle(
            day=day.date() if day else None,
            status=status,
            room_no=room,
            search=search,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(
        f"{'Order No':<18} {'Room':<6} {'Guest':<20} {'Items':>5} {'Total':>7} "
        f"{'Status':<10} {'Payment':<9}"
    )
    click.echo("-" * 81)
    for o in orders:
        click.echo(
            f"{o.order_no:<18} {o.room_no:<6} {o.guest_name:<20} {len(o.items):>5} "
            f"{o.total:>7} {o.status:<10} {o.payment_status:<9}"
        )


@click.command("add-items")
@click.option("--id", "order_id", required=True, help="Order ID to add to.")
@click.option("--items", required=True, help="Items as 'item_key:Qty,item_key:Qty'.")
def order_add_items(order_id: str, items: str) -> None:
    """Add items to an order (marks it Updated)."""
    repo = order_repository()

    try:
        current = ShowOrderHandler(order_repo=repo).handle(order_id)
        specs = _price_picks(items, current.menu_version)
        dto = AddItemsHandler(order_repo=repo).handle(order_id, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_no}: {len(specs)} items added, total now {dto.total}.")


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--status", type=STATUS_CHOICES, default=None, help="New status.")
@click.option("--payment", type=PAYMENT_CHOICES, default=None, help="New payment status.")
@click.option("--requested-time", default=None, help="When the guest wants it.")
@click.option("--notes", default=None, help="Replace the order notes.")
@click.pass_obj
def order_update(
    settings: Settings,
    order_id: str,
    status: str | None,
    payment: str | None,
    requested_time: str | None,
    notes: str | None,
) -> None:
    """Update status, payment, requested time or notes."""
    handler = UpdateOrderHandler(
        order_repo=order_repository(),
        strict_transitions=settings.strict_transitions,
    )

    try:
        dto = handler.handle(
            order_id,
            status=status,
            payment_status=payment,
            requested_time=requested_time,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Order {dto.order_no} updated  (status={dto.status}, payment={dto.payment_status})"
    )


@click.command("summary")
@click.option("--date", "day", type=DATE_TYPE, required=True, help="Day (YYYY-MM-DD).")
def order_summary(day) -> None:
    """Show order count and revenue for a day."""
    handler = DaySummaryHandler(order_repo=order_repository())
    summary = handler.handle(day.date())

    click.echo(f"Date:       {summary.date}")
    click.echo(f"Orders:     {summary.order_count}")
    click.echo(f"Revenue:    ₹{summary.revenue}")
    click.echo(f"Completed:  {summary.completed_count}")
    click.echo(f"Paid:       {summary.paid_count}")
    click.echo(f"Partial:    {summary.partial_count}")
    click.echo(f"Not Paid:   {summary.unpaid_count}")
    click.echo()
    click.echo("By status:")
    for status, count in summary.status_counts.items():
        click.echo(f"  {status:<10} {count:>4}")
