from __future__ import annotations

from flask import Blueprint, abort, g, redirect, render_template, request, url_for

from tuneheaven.app.common.locale import DEFAULT_LOCALE
from tuneheaven.modules.products.variants import (
    price_view,
    product_options,
    selected_image,
    selected_options_from_args,
)
from tuneheaven.storefront.client import get_storefront
from tuneheaven.storefront.queries import PRODUCT_QUERY

bp = Blueprint("products", __name__)


def _product_url(locale, handle: str) -> str:
    if locale == DEFAULT_LOCALE:
        return url_for("products.product_detail", handle=handle, **request.args)
    return url_for("products.localized_product_detail", locale=locale, handle=handle, **request.args)


def _render_product(locale, handle: str):
    g.locale = locale
    selected_options = selected_options_from_args(request.args.items(multi=True))

    data = get_storefront().query(
        PRODUCT_QUERY,
        {"handle": handle, "selectedOptions": selected_options, **locale.variables()},
    )
    product = data.get("product")
    if not product or not product.get("id"):
        abort(404)

    # The API may resolve a translated handle; send the visitor to the canonical one
    if product.get("handle") and product["handle"] != handle:
        return redirect(_product_url(locale, product["handle"]))

    selected_variant = product.get("selectedOrFirstAvailableVariant")
    images = (product.get("images") or {}).get("nodes") or []

    return render_template(
        "product.html",
        product=product,
        selected_variant=selected_variant,
        options=product_options(product, selected_variant),
        images=images,
        selected_image=selected_image(images, selected_variant, request.args.get("image")),
        price=price_view(selected_variant),
        canonical_url=f"/products/{product['handle']}",
    )


@bp.get("/products/<handle>")
def product_detail(handle: str):
    return _render_product(DEFAULT_LOCALE, handle)


@bp.get("/<locale:locale>/products/<handle>")
def localized_product_detail(locale, handle: str):
    return _render_product(locale, handle)
