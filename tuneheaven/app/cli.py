from __future__ import annotations

import click
from flask import Blueprint

from tuneheaven.app.extensions import db
from tuneheaven.app.models import NewsletterSubscriber

cli_bp = Blueprint("cli", __name__, cli_group=None)


@cli_bp.cli.command("init-db")
def init_db() -> None:
    """Create tables."""
    db.create_all()
    print("DB initialized (tables created).")


@cli_bp.cli.command("subscribers")
@click.option("--limit", default=50, show_default=True, help="Newest first.")
def list_subscribers(limit: int) -> None:
    """List newsletter subscribers."""
    rows = (
        NewsletterSubscriber.query
        .order_by(NewsletterSubscriber.created_at.desc(), NewsletterSubscriber.id.desc())
        .limit(limit)
        .all()
    )
    if not rows:
        print("No subscribers yet.")
        return
    for row in rows:
        print(f"{row.created_at:%Y-%m-%d %H:%M}  {row.email}")
    print(f"{len(rows)} shown, {NewsletterSubscriber.query.count()} total.")
