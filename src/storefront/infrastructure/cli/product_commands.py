"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.restock_product import RestockProductHandler
from storefront.application.show_product import ListProductsHandler, ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.repository.product_repository import ProductSort
from storefront.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Product category.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Opening stock.")
def product_add(name: str, category: str, price: str, stock: int) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(name=name, category=category, price=price, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price} ({product.stock} in stock)")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product."""
    handler = ShowProductHandler(uow=unit_of_work())

    try:
        p = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {p.id}")
    click.echo(f"Name:     {p.name}")
    click.echo(f"Category: {p.category}")
    click.echo(f"Price:    {p.price}")
    click.echo(f"Stock:    {p.stock}")


@click.command("list")
@click.option("--category", default=None, help="Only products in this category.")
@click.option("--offset", default=0, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option(
    "--order",
    default=ProductSort.NEWEST.value,
    type=click.Choice([s.value for s in ProductSort]),
    show_default=True,
)
def product_list(category: str | None, offset: int, limit: int, order: str) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(uow=unit_of_work())

    try:
        products = handler.handle(category=category, offset=offset, limit=limit, order=order)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<36} {'Name':<20} {'Category':<12} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 88)
    for p in products:
        click.echo(f"{p.id:<36} {p.name:<20} {p.category:<12} {str(p.price):>10} {p.stock:>6}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, help="New category.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
def product_update(
    product_id: str, name: str | None, category: str | None, price: str | None
) -> None:
    """Update a product's name, category or price."""
    handler = UpdateProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(product_id=product_id, name=name, category=category, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated: '{product.name}' [{product.category}] at {product.price}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add to stock.")
def product_restock(product_id: str, quantity: int) -> None:
    """Add units to a product's stock."""
    handler = RestockProductHandler(uow=unit_of_work())

    try:
        level = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product {product_id} is now {level}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product that no order references."""
    handler = DeleteProductHandler(uow=unit_of_work())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
