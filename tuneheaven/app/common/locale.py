from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from werkzeug.routing import BaseConverter


@dataclass(frozen=True)
class Locale:
    language: str = "EN"
    country: str = "US"

    @property
    def path_prefix(self) -> str:
        if self == DEFAULT_LOCALE:
            return ""
        return f"/{self.language.lower()}-{self.country.lower()}"

    def variables(self) -> Dict[str, str]:
        """`@inContext` variables for storefront queries."""
        return {"country": self.country, "language": self.language}

    def __str__(self) -> str:
        return f"{self.language.lower()}-{self.country.lower()}"


DEFAULT_LOCALE = Locale()


class LocaleConverter(BaseConverter):
    """Matches an `en-us` style path segment."""

    regex = r"[a-zA-Z]{2}-[a-zA-Z]{2}"

    def to_python(self, value: str) -> Locale:
        language, country = value.split("-")
        return Locale(language=language.upper(), country=country.upper())

    def to_url(self, value) -> str:
        return str(value)
