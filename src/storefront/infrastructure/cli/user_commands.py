"""CLI commands for the User aggregate."""

from __future__ import annotations

import click

from storefront.application.add_user import AddUserHandler
from storefront.application.delete_user import DeleteUserHandler
from storefront.application.show_user import ListUsersHandler, ShowUserHandler
from storefront.application.update_user import UpdateUserHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--email", required=True, help="Unique email address.")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option("--address", default="", help="Postal address.")
def user_add(email: str, first_name: str, last_name: str, address: str) -> None:
    """Register a new user."""
    handler = AddUserHandler(uow=unit_of_work())

    try:
        user = handler.handle(
            email=email, first_name=first_name, last_name=last_name, address=address
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user.id} '{user.full_name}' <{user.email}> added")


@click.command("show")
@click.option("--id", "user_id", required=True, help="User ID.")
def user_show(user_id: str) -> None:
    """Show a single user."""
    handler = ShowUserHandler(uow=unit_of_work())

    try:
        user = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user.id}")
    click.echo(f"Name:    {user.full_name}")
    click.echo(f"Email:   {user.email}")
    click.echo(f"Address: {user.address or '-'}")


@click.command("list")
@click.option("--offset", default=0, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option("--order", default="newest", type=click.Choice(["newest", "oldest"]), show_default=True)
def user_list(offset: int, limit: int, order: str) -> None:
    """List users."""
    handler = ListUsersHandler(uow=unit_of_work())

    try:
        users = handler.handle(offset=offset, limit=limit, order=order)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<36} {'Name':<24} {'Email':<30}")
    click.echo("-" * 92)
    for u in users:
        click.echo(f"{u.id:<36} {u.full_name:<24} {u.email:<30}")


@click.command("update")
@click.option("--id", "user_id", required=True, help="User ID.")
@click.option("--email", default=None, help="New email address.")
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@click.option("--address", default=None, help="New postal address.")
def user_update(
    user_id: str,
    email: str | None,
    first_name: str | None,
    last_name: str | None,
    address: str | None,
) -> None:
    """Update a user's email, names or address."""
    handler = UpdateUserHandler(uow=unit_of_work())

    try:
        user = handler.handle(
            user_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            address=address,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user.id} updated: '{user.full_name}' <{user.email}>")


@click.command("delete")
@click.option("--id", "user_id", required=True, help="User ID.")
def user_delete(user_id: str) -> None:
    """Delete a user; their orders are kept without an owner."""
    handler = DeleteUserHandler(uow=unit_of_work())

    try:
        handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user_id} deleted.")
