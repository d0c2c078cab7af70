from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from tuneheaven.app.config import Config
from tuneheaven.app.extensions import cors, db, migrate, storefront as storefront_ext
from tuneheaven.app.common.errors import ApiError, error_payload
from tuneheaven.app.common.locale import LocaleConverter
from tuneheaven.app.common.request_context import current_request_id, echo_request_id, init_request_id
from tuneheaven.app.api.register import register_blueprints
from tuneheaven.app.cli import cli_bp
from tuneheaven.modules.layout.context import init_layout
from tuneheaven.storefront.client import StorefrontClient


def _wants_json() -> bool:
    return request.path.startswith("/api")


def create_app(
    config_object: type[Config] = Config,
    storefront: Optional[StorefrontClient] = None,
) -> Flask:
    app = Flask(
        __name__,
        instance_relative_config=True,
        template_folder="../templates",
        static_folder="../static",
    )
    app.config.from_object(config_object)
    app.url_map.converters["locale"] = LocaleConverter

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})

    storefront_ext.init_app(app, storefront)

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    app.after_request(echo_request_id)

    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_blueprints(app)
    init_layout(app)

    # CLI (flask init-db, flask subscribers)
    app.register_blueprint(cli_bp)

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(current_request_id())), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        if _wants_json():
            payload = error_payload("http_error", err.description, current_request_id(), {"name": err.name})
            return jsonify(payload), err.code or 500
        if err.code == 404:
            return render_template("404.html"), 404
        return err

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        if _wants_json():
            return jsonify(error_payload("internal_error", "Internal server error", current_request_id())), 500
        return render_template("500.html"), 500

    return app
