import logging

import click

from storefront.infrastructure.bootstrap import Settings
from storefront.infrastructure.cli.order_commands import (
    order_delete,
    order_list,
    order_place,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_restock,
    product_show,
    product_update,
)
from storefront.infrastructure.cli.user_commands import (
    user_add,
    user_delete,
    user_list,
    user_show,
    user_update,
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """Storefront: users, products and order placement"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        Settings.from_env()
    except ValueError as exc:
        raise click.UsageError(str(exc))


@cli.group()
def user() -> None:
    """Manage users."""


@cli.group()
def product() -> None:
    """Manage products and stock."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


# Register subcommands
user.add_command(user_add)
user.add_command(user_delete)
user.add_command(user_list)
user.add_command(user_show)
user.add_command(user_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_show)
product.add_command(product_update)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
