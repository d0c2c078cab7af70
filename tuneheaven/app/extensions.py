from __future__ import annotations

from typing import Optional

from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from tuneheaven.storefront.client import StorefrontClient


class Storefront:
    """Binds one `StorefrontClient` per app under `app.extensions["storefront"]`."""

    def init_app(self, app: Flask, client: Optional[StorefrontClient] = None) -> None:
        app.extensions["storefront"] = client or StorefrontClient.from_config(app.config)


# Initialized in create_app
db = SQLAlchemy()
migrate = Migrate()
cors = CORS()
storefront = Storefront()
