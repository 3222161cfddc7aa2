from datetime import date, datetime

import click
from werkzeug.security import generate_password_hash

from .extensions import db
from .models import User, USER_ROLES, ROLE_ADMIN
from .services.payments import mark_overdue_payments


def register_cli(app):
    @app.cli.command("create-user")
    @click.argument("name")
    @click.argument("email")
    @click.argument("password")
    @click.option("--role", type=click.Choice(USER_ROLES), default=ROLE_ADMIN, show_default=True)
    def create_user(name, email, password, role):
        email = email.strip().lower()
        if User.query.filter(User.email == email).first():
            raise click.ClickException(f"user already exists: {email}")

        user = User(name=name, email=email, password=generate_password_hash(password), role=role)
        db.session.add(user)
        db.session.commit()
        click.echo(f"created user id={user.id} role={role}")

    @app.cli.command("mark-overdue-payments")
    @click.option("--today", default=None, help="Reference date, YYYY-MM-DD.")
    def mark_overdue(today):
        ref = datetime.strptime(today, "%Y-%m-%d").date() if today else date.today()
        updated = mark_overdue_payments(ref)
        click.echo(f"updated={updated}")
