import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///tuneheaven.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False

    # Shopify Storefront API
    PUBLIC_STORE_DOMAIN = os.getenv("PUBLIC_STORE_DOMAIN", "your-store.myshopify.com")
    PUBLIC_STOREFRONT_API_TOKEN = os.getenv("PUBLIC_STOREFRONT_API_TOKEN", "")
    STOREFRONT_API_VERSION = os.getenv("STOREFRONT_API_VERSION", "2025-01")
    STOREFRONT_TIMEOUT = int(os.getenv("STOREFRONT_TIMEOUT", "10"))
    STOREFRONT_RETRIES = int(os.getenv("STOREFRONT_RETRIES", "1"))

    # Header/footer menus change rarely; seconds
    LAYOUT_CACHE_TTL = int(os.getenv("LAYOUT_CACHE_TTL", "300"))

    SHOP_NAME = os.getenv("SHOP_NAME", "TuneHeaven")

    # Comma-separated list
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8080"))


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    PUBLIC_STORE_DOMAIN = "tuneheaven.myshopify.com"
    LAYOUT_CACHE_TTL = 0
