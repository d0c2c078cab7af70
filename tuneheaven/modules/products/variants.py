"""Variant/option selection for the product page."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import urlencode

from tuneheaven.storefront.presenters import format_money

# Query params that never name a product option
RESERVED_PARAMS = frozenset({"image"})


def selected_options_from_args(args: Iterable[Tuple[str, str]]) -> List[Dict[str, str]]:
    """Query string pairs -> `SelectedOptionInput` list."""
    return [
        {"name": name, "value": value}
        for name, value in args
        if name not in RESERVED_PARAMS and value
    ]


def _options_key(selected_options: Iterable[Dict[str, str]]) -> Tuple[Tuple[str, str], ...]:
    return tuple(sorted((o["name"], o["value"]) for o in selected_options))


def variant_query(variant: Optional[Dict[str, Any]]) -> str:
    if not variant:
        return ""
    return urlencode([(o["name"], o["value"]) for o in variant.get("selectedOptions") or []])


def product_options(product: Dict[str, Any], selected_variant: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Option pickers for the product form.

    A value's target is the variant that keeps the other selected options and
    swaps in this value. When the platform did not return that combination
    among the adjacent variants, the value's first selectable variant is used
    and `exists` reports whether any variant carries the value.
    """
    selected = {o["name"]: o["value"] for o in (selected_variant or {}).get("selectedOptions") or []}

    known = [selected_variant] + list(product.get("adjacentVariants") or [])
    by_options = {
        _options_key(v.get("selectedOptions") or []): v
        for v in known
        if v
    }

    options = []
    for option in product.get("options") or []:
        name = option["name"]
        values = []
        for option_value in option.get("optionValues") or []:
            value_name = option_value["name"]
            target = dict(selected)
            target[name] = value_name
            variant = by_options.get(_options_key({"name": k, "value": v} for k, v in target.items()))
            exact = variant is not None
            if variant is None:
                variant = option_value.get("firstSelectableVariant")

            swatch = option_value.get("swatch") or {}
            swatch_image = ((swatch.get("image") or {}).get("previewImage") or {}).get("url")
            values.append({
                "name": value_name,
                "selected": selected.get(name) == value_name,
                "available": bool(variant and variant.get("availableForSale")),
                "exists": variant is not None,
                "exact": exact,
                "variant_id": variant.get("id") if variant else None,
                "query": variant_query(variant),
                "swatch_color": swatch.get("color"),
                "swatch_image": swatch_image,
            })
        options.append({"name": name, "values": values})
    return options


def selected_image(
    images: List[Dict[str, Any]],
    selected_variant: Optional[Dict[str, Any]],
    requested_id: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Thumbnail choice first, then the variant's image, then the first image."""
    if requested_id:
        for image in images:
            if image.get("id") == requested_id:
                return image
    if selected_variant and selected_variant.get("image"):
        return selected_variant["image"]
    return images[0] if images else None


def price_view(variant: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not variant:
        return {"price": None, "compare_at": None, "on_sale": False}
    price = variant.get("price")
    compare_at = variant.get("compareAtPrice")
    on_sale = False
    if price and compare_at:
        try:
            on_sale = float(compare_at["amount"]) > float(price["amount"])
        except (KeyError, TypeError, ValueError):
            on_sale = False
    return {
        "price": format_money(price),
        "compare_at": format_money(compare_at) if on_sale else None,
        "on_sale": on_sale,
    }
