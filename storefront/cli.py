# storefront/cli.py
import os

import click
from flask.cli import with_appcontext

from storefront.extensions import db
from storefront.services.catalog import backfill_slugs
from storefront.services.setup import create_schema, init_database


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create all tables (no sample data)."""
    create_schema()
    click.echo("Tables created.")


@click.command("seed")
@with_appcontext
def seed_command():
    """Create tables and insert the sample users and products that are missing."""
    result = init_database()
    seeded = result["seeded"]
    click.echo(f"Seeded {seeded['users']} user(s) and {seeded['products']} product(s).")


@click.command("create-admin")
@click.option("--username", default=lambda: os.environ.get("ADMIN_USERNAME", "admin"),
              show_default=True, help="Admin username")
@click.option("--password", default=lambda: os.environ.get("ADMIN_PASSWORD"),
              help="Password (prompted when omitted)")
@click.option("--force", is_flag=True, default=False,
              help="Reset the password when the admin already exists")
@with_appcontext
def create_admin_command(username: str, password: str | None, force: bool):
    """Create or reset a back-office account."""
    from storefront.models.admin import Admin

    create_schema()

    admin = Admin.query.filter_by(username=username).first()
    if admin and not force:
        click.echo(f"Admin '{username}' already exists. Use --force to reset the password.")
        return

    if not password:
        password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    if not admin:
        admin = Admin(username=username)
        db.session.add(admin)
    admin.set_password(password)
    db.session.commit()
    click.echo(f"Admin ready: {username}")


@click.command("backfill-slugs")
@with_appcontext
def backfill_slugs_command():
    """Assign unique slugs to products that have none."""
    count = backfill_slugs()
    click.echo(f"Updated {count} product(s).")


def register_cli(app):
    for command in (init_db_command, seed_command, create_admin_command, backfill_slugs_command):
        app.cli.add_command(command)
