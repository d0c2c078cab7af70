"""
Newsletter sign-up endpoint.

Sign-ups are recorded locally; forwarding them to an email provider is left
to whoever runs the store.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request
from sqlalchemy.exc import IntegrityError

from tuneheaven.app.common.json import envelope
from tuneheaven.app.common.validation import is_valid_email
from tuneheaven.app.extensions import db
from tuneheaven.app.models import NewsletterSubscriber

logger = logging.getLogger(__name__)

bp = Blueprint("newsletter", __name__)


def subscribe(email: str) -> NewsletterSubscriber:
    """Record a subscriber; an existing address is returned unchanged."""
    email = email.strip().lower()
    existing = NewsletterSubscriber.query.filter_by(email=email).first()
    if existing:
        return existing
    subscriber = NewsletterSubscriber(email=email)
    db.session.add(subscriber)
    try:
        db.session.commit()
    except IntegrityError:
        # Concurrent sign-up with the same address
        db.session.rollback()
        return NewsletterSubscriber.query.filter_by(email=email).first()
    return subscriber


@bp.post("/newsletter")
def newsletter_signup():
    email = request.form.get("email")
    if email is None and request.is_json:
        email = (request.get_json(silent=True) or {}).get("email")

    if not isinstance(email, str) or not email.strip():
        return envelope(False, 400, "Email is required")
    if not is_valid_email(email.strip()):
        return envelope(False, 400, "Enter a valid email address")

    logger.info("Newsletter signup: %s", email.strip())
    subscribe(email)
    return envelope(True, 200)


@bp.route("/newsletter", methods=["GET", "PUT", "PATCH", "DELETE"])
def newsletter_method_not_allowed():
    return envelope(False, 405, "Method not allowed")
