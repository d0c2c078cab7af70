from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

FALLBACK_HEADER_MENU = {
    "id": "gid://shopify/Menu/199655587896",
    "items": [
        {"id": "gid://shopify/MenuItem/461609500728", "title": "Collections", "type": "HTTP", "url": "/collections", "items": []},
        {"id": "gid://shopify/MenuItem/461609533496", "title": "Blog", "type": "HTTP", "url": "/blogs/journal", "items": []},
        {"id": "gid://shopify/MenuItem/461609566264", "title": "Policies", "type": "HTTP", "url": "/policies", "items": []},
        {"id": "gid://shopify/MenuItem/461609599032", "title": "About", "type": "PAGE", "url": "/pages/about", "items": []},
    ],
}

FALLBACK_FOOTER_MENU = {
    "id": "gid://shopify/Menu/199655620664",
    "items": [
        {"id": "gid://shopify/MenuItem/461633060920", "title": "Privacy Policy", "type": "SHOP_POLICY", "url": "/policies/privacy-policy", "items": []},
        {"id": "gid://shopify/MenuItem/461633093688", "title": "Refund Policy", "type": "SHOP_POLICY", "url": "/policies/refund-policy", "items": []},
        {"id": "gid://shopify/MenuItem/461633126456", "title": "Shipping Policy", "type": "SHOP_POLICY", "url": "/policies/shipping-policy", "items": []},
        {"id": "gid://shopify/MenuItem/461633159224", "title": "Terms of Service", "type": "SHOP_POLICY", "url": "/policies/terms-of-service", "items": []},
    ],
}


def normalize_menu_url(
    raw_url: Optional[str],
    public_store_domain: Optional[str] = None,
    primary_domain_url: Optional[str] = None,
) -> str:
    """Turn links to the shop's own domains into site-relative paths."""
    if not raw_url:
        return "#"
    internal = "myshopify.com" in raw_url
    if public_store_domain and public_store_domain in raw_url:
        internal = True
    if primary_domain_url and primary_domain_url in raw_url:
        internal = True
    if internal:
        return urlparse(raw_url).path or "/"
    return raw_url


def build_menu(
    menu: Optional[Dict[str, Any]],
    fallback: Dict[str, Any],
    public_store_domain: Optional[str] = None,
    primary_domain_url: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Flatten a platform menu into `{id, title, url, children}` links."""
    source = menu or fallback
    links = []
    for item in source.get("items") or []:
        if not item or not item.get("url"):
            continue
        children = [
            {
                "id": child.get("id"),
                "title": child["title"],
                "url": normalize_menu_url(child["url"], public_store_domain, primary_domain_url),
            }
            for child in (item.get("items") or [])
            if child and child.get("url") and child.get("title")
        ]
        links.append({
            "id": item.get("id"),
            "title": item.get("title"),
            "url": normalize_menu_url(item["url"], public_store_domain, primary_domain_url),
            "children": children,
        })
    return links
