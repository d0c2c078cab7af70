"""
Shape raw Storefront API results into the dicts the templates render.

Every function accepts the raw query result, or None when the query failed,
and returns an empty list (or None) instead of raising on missing data.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional


def _nodes(container: Optional[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    if not container:
        return []
    connection = container.get(key) or {}
    return [n for n in (connection.get("nodes") or []) if n]


def format_money(money: Optional[Dict[str, Any]]) -> Optional[str]:
    if not money or money.get("amount") is None:
        return None
    return f"{money['amount']} {money.get('currencyCode', '')}".strip()


def format_published_date(value: Optional[str]) -> Optional[str]:
    """`2024-03-05T10:00:00Z` -> `Mar 5, 2024`"""
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return f"{dt:%b} {dt.day}, {dt.year}"


def featured_collection(result) -> Optional[Dict[str, Any]]:
    nodes = _nodes(result, "collections")
    return nodes[0] if nodes else None


def category_items(result) -> List[Dict[str, Any]]:
    return [
        {
            "id": c["id"],
            "title": c.get("title"),
            "image_url": (c.get("image") or {}).get("url"),
            "href": f"/collections/{c['handle']}",
        }
        for c in _nodes(result, "collections")
    ]


def _field(node: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    for field in node.get("fields") or []:
        if field and field.get("key") == key:
            return field
    return None


def _field_image_url(node: Dict[str, Any], key: str) -> Optional[str]:
    field = _field(node, key)
    reference = (field or {}).get("reference") or {}
    image = reference.get("image")
    return image.get("url") if image else None


def brand_items(result) -> List[Dict[str, Any]]:
    """Brand metaobjects: `brand_logo` is a MediaImage, `link` a Collection."""
    items = []
    for node in _nodes(result, "metaobjects"):
        collection = ((_field(node, "link") or {}).get("reference")) or None
        if not collection:
            continue
        items.append({
            "id": node["id"],
            "title": collection.get("title") or node.get("handle"),
            "image_url": _field_image_url(node, "brand_logo"),
            "href": f"/collections/{collection.get('handle')}",
        })
    return items


def hero_slides(result) -> List[Dict[str, Any]]:
    slides = []
    for node in _nodes(result, "metaobjects"):
        def value(key):
            return (_field(node, key) or {}).get("value")

        slides.append({
            "id": node["id"],
            "title": value("title") or node.get("handle") or "",
            "subtitle": value("subtitle"),
            "description": value("description"),
            "cta_label": value("cta_label"),
            "cta_link": value("cta_link"),
            "image_url": _field_image_url(node, "image"),
        })
    return slides


def product_card(p: Dict[str, Any]) -> Dict[str, Any]:
    price_range = p.get("priceRange") or {}
    return {
        "id": p["id"],
        "handle": p["handle"],
        "title": p.get("title"),
        "image_url": (p.get("featuredImage") or {}).get("url"),
        "price": format_money(price_range.get("minVariantPrice")),
        "variants": p.get("variants"),
    }


def home_products(result) -> List[Dict[str, Any]]:
    return [product_card(p) for p in _nodes(result, "products")]


def blog_posts(result, limit: int = 3) -> List[Dict[str, Any]]:
    posts = []
    for blog in _nodes(result, "blogs"):
        for article in _nodes(blog, "articles"):
            image = article.get("image") or {}
            article_blog = article.get("blog") or {}
            posts.append({
                "id": article["id"],
                "title": article.get("title"),
                "excerpt": article.get("excerpt"),
                "image_url": image.get("url"),
                "image_alt": image.get("altText"),
                "author": (article.get("author") or {}).get("name") or blog.get("title"),
                "published_at": article.get("publishedAt"),
                "published_label": format_published_date(article.get("publishedAt")),
                "href": f"/blogs/{article_blog.get('handle') or blog.get('handle')}/{article.get('handle')}",
            })
    return posts[:limit]


def cart_lines(product: Dict[str, Any]) -> Optional[List[Dict[str, Any]]]:
    """Lines input for adding one unit of the first variant available for sale."""
    variants = (product.get("variants") or {}).get("nodes") or []
    first_available = next((v for v in variants if v and v.get("availableForSale")), None)
    if not first_available:
        return None
    return [{"merchandiseId": first_available["id"], "quantity": 1}]
