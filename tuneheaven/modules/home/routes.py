from __future__ import annotations

from flask import Blueprint, g, render_template, request

from tuneheaven.app.common.locale import DEFAULT_LOCALE
from tuneheaven.modules.home.carousel import HeroCarousel
from tuneheaven.storefront import presenters
from tuneheaven.storefront.client import get_storefront
from tuneheaven.storefront.queries import (
    CATEGORY_COLLECTIONS_QUERY,
    FEATURED_COLLECTION_QUERY,
    HERO_SLIDES_QUERY,
    HOME_PRODUCTS_QUERY,
    LATEST_BLOG_ARTICLES_QUERY,
    RECOMMENDED_PRODUCTS_QUERY,
    TOP_BRANDS_QUERY,
)

bp = Blueprint("home", __name__)


def load_critical_data(locale) -> dict:
    """Above-the-fold data.

    The featured collection is required: a failure propagates and the page
    renders as a 500. Every other section logs its failure and renders empty.
    """
    storefront = get_storefront()
    variables = locale.variables()

    featured = storefront.query(FEATURED_COLLECTION_QUERY, variables)
    categories = storefront.query_or_none(CATEGORY_COLLECTIONS_QUERY, variables, label="category collections")
    brands = storefront.query_or_none(TOP_BRANDS_QUERY, variables, label="top brands metaobjects")
    products = storefront.query_or_none(HOME_PRODUCTS_QUERY, variables, label="home products")
    articles = storefront.query_or_none(LATEST_BLOG_ARTICLES_QUERY, variables, label="blog articles")
    slides = storefront.query_or_none(HERO_SLIDES_QUERY, variables, label="hero slides")

    return {
        "featured_collection": presenters.featured_collection(featured),
        "category_items": presenters.category_items(categories),
        "brand_items": presenters.brand_items(brands),
        "home_products": presenters.home_products(products),
        "blog_posts": presenters.blog_posts(articles),
        "hero_slides": presenters.hero_slides(slides),
    }


def _slide_param() -> int:
    try:
        return int(request.args.get("slide", 0))
    except ValueError:
        return 0


@bp.get("/")
@bp.get("/<locale:locale>/")
def homepage(locale=DEFAULT_LOCALE):
    g.locale = locale
    data = load_critical_data(locale)
    carousel = HeroCarousel(data.pop("hero_slides"), active_index=_slide_param())
    return render_template("home.html", carousel=carousel, **data)


@bp.get("/fragments/recommended-products")
def recommended_products():
    """Below-the-fold products, fetched by the browser after first paint.

    Always answers 200; an empty fragment when the query fails.
    """
    result = get_storefront().query_or_none(
        RECOMMENDED_PRODUCTS_QUERY,
        DEFAULT_LOCALE.variables(),
        label="recommended products",
    )
    products = presenters.home_products(result)
    return render_template("components/recommended_products.html", products=products)
