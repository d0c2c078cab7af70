import logging

import pytest
import requests

from conftest import FakeStorefront

from tuneheaven.app.config import Config
from tuneheaven.storefront.cache import QueryCache
from tuneheaven.storefront.client import StorefrontClient, StorefrontError, operation_name
from tuneheaven.storefront.queries import FOOTER_QUERY, HEADER_QUERY, PRODUCT_QUERY


def test_operation_name():
    assert operation_name(HEADER_QUERY) == "Header"
    assert operation_name(PRODUCT_QUERY) == "Product"
    assert operation_name("{ shop { name } }") == "anonymous"


def test_endpoint_from_config():
    config = {key: getattr(Config, key) for key in dir(Config) if key.isupper()}
    config.update(PUBLIC_STORE_DOMAIN="demo.myshopify.com", STOREFRONT_API_VERSION="2025-01")
    client = StorefrontClient.from_config(config)
    assert client.endpoint == "https://demo.myshopify.com/api/2025-01/graphql.json"


def test_none_variables_are_dropped():
    storefront = FakeStorefront({"Footer": {"menu": None}})
    storefront.query(FOOTER_QUERY, {"footerMenuHandle": "footer", "country": None})
    assert storefront.called("Footer") == [{"footerMenuHandle": "footer"}]


def test_transport_errors_are_wrapped():
    storefront = FakeStorefront({"Footer": requests.ConnectionError("refused")})
    with pytest.raises(StorefrontError) as exc:
        storefront.query(FOOTER_QUERY)
    assert exc.value.operation == "Footer"


def test_query_or_none_logs_and_returns_none(caplog):
    storefront = FakeStorefront({})
    with caplog.at_level(logging.ERROR):
        assert storefront.query_or_none(FOOTER_QUERY, label="footer") is None
    assert "Error loading footer" in caplog.text


def test_cached_queries_hit_platform_once():
    storefront = FakeStorefront({"Footer": {"menu": None}})
    storefront.cache = QueryCache(ttl_seconds=60)

    for _ in range(3):
        storefront.query(FOOTER_QUERY, {"footerMenuHandle": "footer"}, cache=True)

    assert len(storefront.called("Footer")) == 1
    assert len(storefront.cache.entries) == 1


def test_cache_disabled_with_zero_ttl():
    cache = QueryCache(ttl_seconds=0)
    cache.set("k", {"v": 1})
    assert cache.get("k") is None


def test_cache_evicts_oldest():
    cache = QueryCache(max_size=2, ttl_seconds=60)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert cache.get("a") is None
    assert cache.get("c") == 3
