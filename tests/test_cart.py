# run with: pytest tests/test_cart.py -v

from conftest import money

from tuneheaven.modules.cart.routes import CART_ID_KEY, CART_QUANTITY_KEY
from tuneheaven.storefront.client import StorefrontError


def cart(cart_id="gid://shopify/Cart/1", quantity=1):
    return {
        "id": cart_id,
        "checkoutUrl": "https://tuneheaven.myshopify.com/checkouts/1",
        "totalQuantity": quantity,
        "cost": {"subtotalAmount": money("999.0"), "totalAmount": money("999.0")},
        "lines": {"nodes": [{
            "id": "line-1",
            "quantity": quantity,
            "cost": {"totalAmount": money("999.0")},
            "merchandise": {
                "id": "v1",
                "title": "Default Title",
                "image": None,
                "product": {"title": "Stratocaster", "handle": "strat"},
                "price": money("999.0"),
            },
        }]},
    }


# CART-001: first add creates a platform cart and remembers it
def test_add_creates_cart(client, storefront):
    storefront.responses["CartCreate"] = {"cartCreate": {"cart": cart(), "userErrors": []}}

    r = client.post("/cart", data={"merchandise_id": "v1", "quantity": "2"})

    assert r.status_code == 302
    assert storefront.called("CartCreate")[0]["lines"] == [{"merchandiseId": "v1", "quantity": 2}]
    with client.session_transaction() as sess:
        assert sess[CART_ID_KEY] == "gid://shopify/Cart/1"
        assert sess[CART_QUANTITY_KEY] == 1


# CART-002: later adds go to the existing cart
def test_add_uses_existing_cart(client, storefront):
    storefront.responses["CartLinesAdd"] = {"cartLinesAdd": {"cart": cart(quantity=3), "userErrors": []}}
    with client.session_transaction() as sess:
        sess[CART_ID_KEY] = "gid://shopify/Cart/1"

    client.post("/cart", data={"merchandise_id": "v1"})

    assert storefront.called("CartLinesAdd")[0]["cartId"] == "gid://shopify/Cart/1"
    assert not storefront.called("CartCreate")
    with client.session_transaction() as sess:
        assert sess[CART_QUANTITY_KEY] == 3


def test_expired_cart_is_replaced(client, storefront):
    storefront.responses["CartLinesAdd"] = {"cartLinesAdd": {"cart": None, "userErrors": []}}
    storefront.responses["CartCreate"] = {"cartCreate": {"cart": cart("gid://shopify/Cart/2"), "userErrors": []}}
    with client.session_transaction() as sess:
        sess[CART_ID_KEY] = "gid://shopify/Cart/1"

    client.post("/cart", data={"merchandise_id": "v1"})

    with client.session_transaction() as sess:
        assert sess[CART_ID_KEY] == "gid://shopify/Cart/2"


def test_add_without_merchandise(client):
    r = client.post("/cart", data={}, follow_redirects=True)
    assert b"This product is unavailable." in r.data


def test_platform_failure_flashes_error(client, storefront):
    storefront.responses["CartCreate"] = StorefrontError("down", operation="CartCreate")
    r = client.post("/cart", data={"merchandise_id": "v1"}, follow_redirects=True)
    assert b"Could not add to cart. Please try again." in r.data


def test_user_errors_are_shown(client, storefront):
    storefront.responses["CartCreate"] = {"cartCreate": {
        "cart": None,
        "userErrors": [{"field": ["lines"], "message": "Only 2 items were added to your cart due to availability."}],
    }}
    r = client.post("/cart", data={"merchandise_id": "v1"}, follow_redirects=True)
    assert b"Only 2 items were added" in r.data


def test_cart_page_lists_lines(client, storefront):
    storefront.responses["CartQuery"] = {"cart": cart(quantity=2)}
    with client.session_transaction() as sess:
        sess[CART_ID_KEY] = "gid://shopify/Cart/1"

    html = client.get("/cart").data.decode()

    assert "Stratocaster" in html
    assert "Grand Total" in html
    assert "999.0 USD" in html
    assert "Continue to Checkout" in html
    assert 'data-cart-count>2</span>' in html


def test_empty_cart_page(client):
    html = client.get("/cart").data.decode()
    assert "Looks like you haven't added anything yet" in html
