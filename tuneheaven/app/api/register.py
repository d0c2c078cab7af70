from flask import Flask

from tuneheaven.modules.cart.routes import bp as cart_bp
from tuneheaven.modules.favorites.routes import bp as favorites_bp
from tuneheaven.modules.home.routes import bp as home_bp
from tuneheaven.modules.newsletter.routes import bp as newsletter_bp
from tuneheaven.modules.products.routes import bp as products_bp


def register_blueprints(app: Flask) -> None:
    app.register_blueprint(home_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(favorites_bp)
    app.register_blueprint(newsletter_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "TuneHeaven Storefront API",
            "version": "0.1.0",
            "endpoints": {
                "favorites": ["/favorites"],
                "newsletter": ["/newsletter"],
            },
        }, 200
