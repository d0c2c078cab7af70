"""Cart pages. Line math, totals and checkout all live on the platform."""
from __future__ import annotations

import logging

from flask import Blueprint, flash, g, redirect, render_template, request, session, url_for

from tuneheaven.app.common.locale import DEFAULT_LOCALE
from tuneheaven.app.common.validation import parse_positive_int
from tuneheaven.storefront.client import StorefrontError, get_storefront
from tuneheaven.storefront.presenters import format_money
from tuneheaven.storefront.queries import (
    CART_CREATE_MUTATION,
    CART_LINES_ADD_MUTATION,
    CART_QUERY,
)

logger = logging.getLogger(__name__)

bp = Blueprint("cart", __name__)

CART_ID_KEY = "cart_id"
CART_QUANTITY_KEY = "cart_quantity"


def remember_cart(cart) -> None:
    """Keep the cart id and its badge count in the session."""
    if not cart:
        session.pop(CART_ID_KEY, None)
        session.pop(CART_QUANTITY_KEY, None)
        return
    session[CART_ID_KEY] = cart["id"]
    session[CART_QUANTITY_KEY] = int(cart.get("totalQuantity") or 0)


def add_lines(lines) -> dict:
    """Add lines to the session's cart, creating a cart when there is none.

    Returns the mutation payload (`cart` + `userErrors`).
    """
    storefront = get_storefront()
    variables = DEFAULT_LOCALE.variables()
    cart_id = session.get(CART_ID_KEY)

    if cart_id:
        data = storefront.mutate(CART_LINES_ADD_MUTATION, {"cartId": cart_id, "lines": lines, **variables})
        payload = data.get("cartLinesAdd") or {}
        if payload.get("cart"):
            return payload
        # Expired or unknown cart; start over
        logger.info("Cart %s not found, creating a new one", cart_id)

    data = storefront.mutate(CART_CREATE_MUTATION, {"lines": lines, **variables})
    return data.get("cartCreate") or {}


def cart_view(cart) -> dict | None:
    if not cart:
        return None
    cost = cart.get("cost") or {}
    lines = []
    for line in (cart.get("lines") or {}).get("nodes") or []:
        merchandise = line.get("merchandise") or {}
        product = merchandise.get("product") or {}
        lines.append({
            "id": line["id"],
            "quantity": line.get("quantity", 0),
            "title": product.get("title"),
            "variant_title": merchandise.get("title"),
            "href": f"/products/{product.get('handle')}" if product.get("handle") else None,
            "image_url": (merchandise.get("image") or {}).get("url"),
            "total": format_money((line.get("cost") or {}).get("totalAmount")),
        })
    return {
        "id": cart["id"],
        "lines": lines,
        "total_quantity": int(cart.get("totalQuantity") or 0),
        "subtotal": format_money(cost.get("subtotalAmount")),
        "checkout_url": cart.get("checkoutUrl"),
    }


@bp.get("/cart")
def cart_page():
    g.locale = DEFAULT_LOCALE
    cart = None
    cart_id = session.get(CART_ID_KEY)
    if cart_id:
        data = get_storefront().query_or_none(
            CART_QUERY, {"cartId": cart_id, **DEFAULT_LOCALE.variables()}, label="cart"
        )
        if data is not None:
            cart = data.get("cart")
            remember_cart(cart)
    return render_template("cart.html", cart=cart_view(cart))


@bp.post("/cart")
def cart_add():
    merchandise_id = (request.form.get("merchandise_id") or "").strip()
    if not merchandise_id:
        flash("This product is unavailable.", "error")
        return redirect(url_for("cart.cart_page"))

    lines = [{"merchandiseId": merchandise_id, "quantity": parse_positive_int(request.form.get("quantity"))}]
    try:
        payload = add_lines(lines)
    except StorefrontError as e:
        logger.error("Add to cart failed: %s", e)
        flash("Could not add to cart. Please try again.", "error")
        return redirect(url_for("cart.cart_page"))

    errors = [e.get("message") for e in payload.get("userErrors") or [] if e.get("message")]
    if errors:
        flash(" ".join(errors), "error")
    if payload.get("cart"):
        remember_cart(payload["cart"])
        if not errors:
            flash("Added to cart.", "success")
    return redirect(url_for("cart.cart_page"))
