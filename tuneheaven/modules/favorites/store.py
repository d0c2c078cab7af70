from __future__ import annotations

import logging
import re
from typing import List, MutableMapping

logger = logging.getLogger(__name__)

FAVORITES_KEY = "tuneheaven_favorites"

PRODUCT_GID_RE = re.compile(r"^gid://shopify/Product/\d{1,20}$")

# ~40 bytes per id keeps the set well inside the 4 KB session cookie
MAX_FAVORITES = 50


def is_product_id(value) -> bool:
    return isinstance(value, str) and bool(PRODUCT_GID_RE.match(value))


class FavoritesStore:
    """Set of favorited product ids kept in the session.

    Insertion order is kept so the list renders in the order items were
    added. A stored value that is not a list of strings is logged and
    treated as empty; members that are not product GIDs are dropped.
    At most `MAX_FAVORITES` ids are kept.
    """

    def __init__(self, session: MutableMapping):
        self._session = session

    def ids(self) -> List[str]:
        raw = self._session.get(FAVORITES_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list) or not all(isinstance(i, str) for i in raw):
            logger.error("Failed to parse favorites from session: %r", raw)
            self._session.pop(FAVORITES_KEY, None)
            return []
        # dict.fromkeys drops duplicates, keeps order
        ids = [i for i in dict.fromkeys(raw) if is_product_id(i)][:MAX_FAVORITES]
        if len(ids) != len(raw):
            logger.warning("Dropped %d duplicate or invalid favorite ids", len(raw) - len(ids))
            self._save(ids)
        return ids

    def _save(self, ids: List[str]) -> None:
        self._session[FAVORITES_KEY] = ids

    def contains(self, product_id: str) -> bool:
        return product_id in self.ids()

    def count(self) -> int:
        return len(self.ids())

    def is_full(self) -> bool:
        return self.count() >= MAX_FAVORITES

    def add(self, product_id: str) -> bool:
        """Returns False when the id is invalid or the set is full."""
        if not is_product_id(product_id):
            return False
        ids = self.ids()
        if product_id in ids:
            return True
        if len(ids) >= MAX_FAVORITES:
            return False
        ids.append(product_id)
        self._save(ids)
        return True

    def remove(self, product_id: str) -> None:
        self._save([i for i in self.ids() if i != product_id])

    def toggle(self, product_id: str) -> bool:
        """Flip membership; returns True when the product is now a favorite."""
        if self.contains(product_id):
            self.remove(product_id)
            return False
        return self.add(product_id)

    def clear(self) -> None:
        self._save([])
