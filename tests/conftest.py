import copy

import pytest

from tuneheaven.app.config import TestConfig
from tuneheaven.app.extensions import db
from tuneheaven.app.factory import create_app
from tuneheaven.storefront.client import StorefrontClient, StorefrontError, operation_name


class FakeStorefront(StorefrontClient):
    """Answers query documents from canned results keyed by operation name.

    A response that is an Exception is raised instead; an unknown operation
    fails like an unreachable platform.
    """

    def __init__(self, responses=None):
        super().__init__("tuneheaven.myshopify.com", "test-token", cache_ttl=0)
        self.responses = dict(responses or {})
        self.calls = []

    def _execute(self, document, variables):
        name = operation_name(document)
        self.calls.append((name, variables))
        if name not in self.responses:
            raise StorefrontError(f"no canned response for {name}", operation=name)
        response = self.responses[name]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(variables)
        return copy.deepcopy(response)

    def called(self, name):
        return [v for n, v in self.calls if n == name]


def money(amount, code="USD"):
    return {"amount": amount, "currencyCode": code}


def product_node(pid="gid://shopify/Product/1", handle="strat", title="Stratocaster",
                 amount="999.0", available=True, image=True):
    return {
        "id": pid,
        "title": title,
        "handle": handle,
        "priceRange": {"minVariantPrice": money(amount)},
        "featuredImage": {"url": f"https://cdn.test/{handle}.jpg", "altText": None} if image else None,
        "variants": {"nodes": [{"id": f"{pid}/variant", "availableForSale": available}]},
    }


def variant(vid, color, size, available=True, amount="100.0", compare_at=None, image=None):
    return {
        "id": vid,
        "availableForSale": available,
        "price": money(amount),
        "compareAtPrice": money(compare_at) if compare_at else None,
        "image": image,
        "selectedOptions": [{"name": "Color", "value": color}, {"name": "Size", "value": size}],
        "title": f"{color} / {size}",
        "product": {"title": "Tee", "handle": "tee"},
    }


HOME_RESPONSES = {
    "Header": {
        "shop": {"id": "gid://shopify/Shop/1", "name": "TuneHeaven", "primaryDomain": {"url": "https://tuneheaven.com"}},
        "menu": {
            "id": "gid://shopify/Menu/1",
            "items": [
                {"id": "m1", "title": "Guitars", "url": "https://tuneheaven.myshopify.com/collections/guitars", "items": [
                    {"id": "m1a", "title": "Electric", "url": "https://tuneheaven.com/collections/electric"},
                ]},
                {"id": "m2", "title": "Journal", "url": "https://blog.example.com/journal", "items": []},
            ],
        },
    },
    "Footer": {"menu": None},
    "FeaturedCollection": {
        "collections": {"nodes": [{
            "id": "gid://shopify/Collection/9",
            "title": "Summer Sale",
            "handle": "summer-sale",
            "image": {"id": "i9", "url": "https://cdn.test/summer.jpg", "altText": None, "width": 10, "height": 10},
        }]},
    },
    "CategoryCollections": {
        "collections": {"nodes": [
            {"id": "c1", "title": "Drums", "handle": "drums", "image": {"url": "https://cdn.test/drums.jpg"}},
        ]},
    },
    "TopBrandsMetaobjects": {
        "metaobjects": {"nodes": [
            {"id": "b1", "handle": "fender", "fields": [
                {"key": "brand_logo", "value": "gid://shopify/MediaImage/1", "reference": {"image": {"url": "https://cdn.test/fender.png"}}},
                {"key": "link", "value": "gid://shopify/Collection/2", "reference": {"id": "c2", "title": "Fender", "handle": "fender"}},
            ]},
        ]},
    },
    "HomeProducts": {"products": {"nodes": [product_node()]}},
    "LatestBlogArticles": {
        "blogs": {"nodes": [{
            "id": "blog1",
            "handle": "journal",
            "title": "Journal",
            "articles": {"nodes": [{
                "id": "a1",
                "title": "Choosing strings",
                "handle": "choosing-strings",
                "excerpt": "Nickel or steel?",
                "publishedAt": "2024-03-05T10:00:00Z",
                "image": None,
                "author": {"name": "Sam"},
                "blog": {"handle": "journal"},
            }]},
        }]},
    },
    "HeroSlides": {"metaobjects": {"nodes": []}},
    "RecommendedProducts": {"products": {"nodes": [product_node("gid://shopify/Product/7", "rec-amp", "Rec Amp")]}},
}


@pytest.fixture()
def storefront():
    return FakeStorefront(HOME_RESPONSES)


@pytest.fixture()
def app(storefront):
    app = create_app(TestConfig, storefront=storefront)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client
