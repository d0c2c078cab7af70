"""Header/footer data shared by every page."""
from __future__ import annotations

from datetime import datetime

from flask import Flask, current_app, g, request, session

from tuneheaven.app.common.locale import DEFAULT_LOCALE
from tuneheaven.modules.favorites.store import FavoritesStore
from tuneheaven.modules.layout.menus import (
    FALLBACK_FOOTER_MENU,
    FALLBACK_HEADER_MENU,
    build_menu,
)
from tuneheaven.storefront.client import get_storefront
from tuneheaven.storefront.presenters import cart_lines
from tuneheaven.storefront.queries import FOOTER_QUERY, HEADER_QUERY

HEADER_MENU_HANDLE = "main-menu"
FOOTER_MENU_HANDLE = "footer"


def current_locale():
    return getattr(g, "locale", None) or DEFAULT_LOCALE


def load_layout() -> dict:
    locale = current_locale()
    storefront = get_storefront()
    public_store_domain = current_app.config["PUBLIC_STORE_DOMAIN"]

    header = storefront.query_or_none(
        HEADER_QUERY,
        {"headerMenuHandle": HEADER_MENU_HANDLE, **locale.variables()},
        label="header",
        cache=True,
    ) or {}
    footer = storefront.query_or_none(
        FOOTER_QUERY,
        {"footerMenuHandle": FOOTER_MENU_HANDLE, **locale.variables()},
        label="footer",
        cache=True,
    ) or {}

    shop = header.get("shop") or {}
    primary_domain_url = (shop.get("primaryDomain") or {}).get("url")

    return {
        "shop_name": shop.get("name") or current_app.config["SHOP_NAME"],
        "header_menu": build_menu(header.get("menu"), FALLBACK_HEADER_MENU, public_store_domain, primary_domain_url),
        "footer_menu": build_menu(footer.get("menu"), FALLBACK_FOOTER_MENU, public_store_domain, primary_domain_url),
    }


def init_layout(app: Flask) -> None:
    app.add_template_filter(cart_lines, "cart_lines")

    @app.context_processor
    def inject_layout():
        # Fragments and API responses render without the page chrome
        if request.path.startswith(("/api/", "/fragments/")):
            return {}
        return {
            "layout": load_layout(),
            "locale": current_locale(),
            "favorites_count": FavoritesStore(session).count(),
            "favorite_ids": set(FavoritesStore(session).ids()),
            "cart_count": int(session.get("cart_quantity") or 0),
            "current_year": datetime.utcnow().year,
        }
