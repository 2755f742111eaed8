"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'PRODUCT_ID:3,PRODUCT_ID:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"User:    {dto.user_id or '(deleted)'}")
    click.echo(f"Created: {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<36} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*64}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<36} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*64}")
    click.echo(f"  {'Order Total':<42} {dto.total:>21}")


@click.command("place")
@click.option("--user", "user_id", required=True, help="ID of the ordering user.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_place(user_id: str, items: str) -> None:
    """Place an order, consuming stock atomically."""
    specs = _parse_items(items)
    handler = PlaceOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(user_id=user_id, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only orders of this user.")
@click.option("--offset", default=0, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
def order_list(user_id: str | None, offset: int, limit: int) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(uow=unit_of_work())

    try:
        dtos = handler.handle(user_id=user_id, offset=offset, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<36} {'User':<36} {'Status':<10} {'Total':>10}")
    click.echo("-" * 95)
    for dto in dtos:
        click.echo(
            f"{dto.id:<36} {dto.user_id or '-':<36} {dto.status:<10} {dto.total:>10}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.argument("status")
def order_status(order_id: str, status: str) -> None:
    """Move an order forward to STATUS (CONFIRMED, SHIPPED, DELIVERED)."""
    handler = UpdateOrderStatusHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} is now {dto.status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
def order_delete(order_id: str) -> None:
    """Delete an order (consumed stock is not returned)."""
    handler = DeleteOrderHandler(uow=unit_of_work())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} deleted.")
