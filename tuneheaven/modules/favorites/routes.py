from __future__ import annotations

from flask import Blueprint, g, redirect, render_template, request, session, url_for

from tuneheaven.app.common.errors import abort_json
from tuneheaven.app.common.json import ok
from tuneheaven.app.common.validation import get_payload
from tuneheaven.app.common.locale import DEFAULT_LOCALE
from tuneheaven.modules.favorites.store import MAX_FAVORITES, FavoritesStore, is_product_id
from tuneheaven.storefront import presenters
from tuneheaven.storefront.client import get_storefront
from tuneheaven.storefront.queries import FAVORITE_PRODUCTS_QUERY

bp = Blueprint("favorites", __name__)


def _state(store: FavoritesStore) -> dict:
    ids = store.ids()
    return {"favorites": ids, "count": len(ids)}


def _product_id(data) -> str:
    product_id = str(data.get("product_id") or "").strip()
    if not product_id:
        abort_json(400, "validation_error", "product_id is required")
    if not is_product_id(product_id):
        abort_json(400, "validation_error", "product_id must be a product GID")
    return product_id


@bp.get("/api/favorites")
def list_favorites():
    return ok(_state(FavoritesStore(session)))


@bp.post("/api/favorites")
def toggle_favorite():
    """Toggle one product; the browser re-broadcasts `count` as `favoritesChanged`."""
    product_id = _product_id(get_payload())
    store = FavoritesStore(session)
    if store.is_full() and not store.contains(product_id):
        abort_json(409, "favorites_full", f"At most {MAX_FAVORITES} favorites can be saved")
    favorited = store.toggle(product_id)
    return ok({"favorited": favorited, "product_id": product_id, **_state(store)})


@bp.delete("/api/favorites")
def clear_favorites():
    store = FavoritesStore(session)
    store.clear()
    return ok(_state(store))


@bp.post("/favorites/toggle")
def toggle_favorite_form():
    """No-script fallback for the heart buttons."""
    product_id = (request.form.get("product_id") or "").strip()
    # Invalid ids and adds past the limit are ignored
    if is_product_id(product_id):
        FavoritesStore(session).toggle(product_id)
    return redirect(_safe_next(request.form.get("next")))


def _safe_next(target: str | None) -> str:
    # Same-site paths only
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("home.homepage")


@bp.get("/favorites")
def favorites_page():
    g.locale = DEFAULT_LOCALE
    ids = FavoritesStore(session).ids()
    products = []
    load_failed = False
    if ids:
        result = get_storefront().query_or_none(
            FAVORITE_PRODUCTS_QUERY,
            {"ids": ids, **DEFAULT_LOCALE.variables()},
            label="favorite products",
        )
        load_failed = result is None
        # Deleted products come back as null nodes
        nodes = [n for n in (result or {}).get("nodes") or [] if n and n.get("handle")]
        products = [presenters.product_card(n) for n in nodes]
    return render_template("favorites.html", products=products, load_failed=load_failed)
