"""
Shopify Storefront API Client
Executes the storefront's GraphQL query documents against the hosted platform
"""
from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from typing import Any, Dict, Optional

import requests
from flask import current_app
from gql import gql, Client
from gql.transport.exceptions import TransportError
from gql.transport.requests import RequestsHTTPTransport
from graphql import GraphQLError

from tuneheaven.app.common.errors import StorefrontError
from tuneheaven.storefront.cache import QueryCache

logger = logging.getLogger(__name__)

OPERATION_RE = re.compile(r"\b(?:query|mutation)\s+(\w+)")


def operation_name(document: str) -> str:
    match = OPERATION_RE.search(document)
    return match.group(1) if match else "anonymous"


@lru_cache(maxsize=64)
def _parse(document: str):
    return gql(document)


class StorefrontClient:
    """Shopify Storefront API client"""

    def __init__(
        self,
        store_domain: str,
        access_token: str,
        api_version: str = "2025-01",
        timeout: int = 10,
        retries: int = 1,
        cache_ttl: int = 300,
    ):
        self.store_domain = store_domain
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.retries = retries
        self.cache = QueryCache(ttl_seconds=cache_ttl)

    @classmethod
    def from_config(cls, config) -> "StorefrontClient":
        return cls(
            store_domain=config["PUBLIC_STORE_DOMAIN"],
            access_token=config["PUBLIC_STOREFRONT_API_TOKEN"],
            api_version=config["STOREFRONT_API_VERSION"],
            timeout=config["STOREFRONT_TIMEOUT"],
            retries=config["STOREFRONT_RETRIES"],
            cache_ttl=config["LAYOUT_CACHE_TTL"],
        )

    @property
    def endpoint(self) -> str:
        return f"https://{self.store_domain}/api/{self.api_version}/graphql.json"

    def _execute(self, document: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        # A requests transport can only be connected once at a time.
        transport = RequestsHTTPTransport(
            url=self.endpoint,
            headers={"X-Shopify-Storefront-Access-Token": self.access_token},
            timeout=self.timeout,
            retries=self.retries,
        )
        client = Client(transport=transport, fetch_schema_from_transport=False)
        return client.execute(_parse(document), variable_values=variables)

    def query(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        cache: bool = False,
    ) -> Dict[str, Any]:
        """
        Execute a query document

        Args:
            document: GraphQL query text
            variables: Query variables (locale context included)
            cache: Serve from / store in the layout cache

        Returns:
            The `data` object of the response

        Raises:
            StorefrontError: transport, HTTP or GraphQL errors
        """
        variables = {k: v for k, v in (variables or {}).items() if v is not None}
        name = operation_name(document)
        key = f"{name}:{json.dumps(variables, sort_keys=True)}"

        if cache:
            hit = self.cache.get(key)
            if hit is not None:
                return hit

        try:
            data = self._execute(document, variables)
        except StorefrontError:
            raise
        except (TransportError, requests.RequestException, GraphQLError) as e:
            raise StorefrontError(f"{name} failed: {e}", operation=name) from e

        if data is None:
            raise StorefrontError(f"{name} returned no data", operation=name)

        if cache:
            self.cache.set(key, data)
        return data

    def query_or_none(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        label: Optional[str] = None,
        cache: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """Like `query`, but logs the failure and returns None so the page still renders."""
        try:
            return self.query(document, variables, cache=cache)
        except StorefrontError as e:
            logger.error("Error loading %s: %s", label or operation_name(document), e)
            return None

    def mutate(self, document: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        return self.query(document, variables)


def get_storefront() -> StorefrontClient:
    """Storefront client bound to the current app"""
    return current_app.extensions["storefront"]
