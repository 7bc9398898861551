import logging

import pytest

from atomplatform.etsy import EtsyAPIClient
from atomplatform.etsy.models import (
    CreateDraftListingRequest,
    CreateReceiptShipmentRequest,
    UpdateInventoryOffering,
    UpdateInventoryProduct,
    UpdateInventoryRequest,
    UpdateListingRequest,
)
from atomplatform.transport import APIError, DecodeError

from .conftest import last_call

BASE = "https://api.etsy.com/v3/application"

LISTING = {
    "listing_id": 55,
    "title": "Overlay pack",
    "state": "active",
    "price": {"amount": 1999, "divisor": 100, "currency_code": "USD"},
}


@pytest.fixture
def client(session):
    return EtsyAPIClient("key123", access_token="tok", session=session)


def test_headers_with_token(client, session, respond):
    respond(200, {"application_id": 1})

    client.ping()

    headers = last_call(session)["headers"]
    assert headers["x-api-key"] == "key123"
    assert headers["Authorization"] == "Bearer tok"


def test_headers_without_token(session, respond):
    respond(200, {"application_id": 1})

    EtsyAPIClient("key123", session=session).ping()

    assert "Authorization" not in last_call(session)["headers"]


def test_ping(client, session, respond):
    respond(200, {"application_id": 77})

    assert client.ping().application_id == 77
    assert last_call(session)["url"] == f"{BASE}/openapi-ping"


def test_custom_api_base(session, respond):
    respond(200, {"user_id": 3})

    EtsyAPIClient("k", api_base="http://localhost:9000/v3", session=session).get_me()

    assert last_call(session)["url"] == "http://localhost:9000/v3/users/me"


def test_get_listing_joins_includes(client, session, respond):
    respond(200, LISTING)

    listing = client.get_listing(55, includes=["images", "shop"])

    assert last_call(session)["url"] == f"{BASE}/listings/55?includes=images,shop"
    assert listing.price.display() == "19.99 USD"


def test_get_listing_without_includes(client, session, respond):
    respond(200, LISTING)

    client.get_listing(55)

    assert last_call(session)["url"] == f"{BASE}/listings/55"


def test_listings_by_shop_query_order(client, session, respond):
    respond(200, {"count": 0, "results": []})

    client.get_listings_by_shop(
        1, state="draft", limit=10, offset=20, sort_on="price", sort_order="asc", includes=["images"]
    )

    assert last_call(session)["url"] == (
        f"{BASE}/shops/1/listings?state=draft&limit=10&offset=20"
        "&sort_on=price&sort_order=asc&includes=images"
    )


def test_active_listings_encodes_keywords(client, session, respond):
    respond(200, {"count": 1, "results": [LISTING]})

    page = client.get_active_listings_by_shop(1, limit=5, keywords="neon overlay")

    assert last_call(session)["url"] == f"{BASE}/shops/1/listings/active?limit=5&keywords=neon%20overlay"
    assert page.count == 1
    assert page.results[0].listing_id == 55


def test_find_shops(client, session, respond):
    respond(200, {"count": 1, "results": [{"shop_id": 9, "shop_name": "PixelPacks"}]})

    page = client.find_shops("PixelPacks", limit=1)

    assert last_call(session)["url"] == f"{BASE}/shops?shop_name=PixelPacks&limit=1"
    assert page.results[0].shop_id == 9


def test_receipts_filters(client, session, respond):
    respond(200, {"count": 0, "results": []})

    client.get_shop_receipts(1, min_created=100, limit=5, was_paid=True, was_shipped=False)

    assert last_call(session)["url"] == (
        f"{BASE}/shops/1/receipts?min_created=100&limit=5&was_paid=true&was_shipped=false"
    )


def test_ledger_entries_query_order(client, session, respond):
    respond(200, {"count": 0, "results": []})

    client.get_shop_payment_account_ledger_entries(1, min_created=1, max_created=2, limit=3, offset=4)

    assert last_call(session)["url"] == (
        f"{BASE}/shops/1/payment-account/ledger-entries?min_created=1&max_created=2&limit=3&offset=4"
    )


def test_create_draft_listing_payload(client, session, respond):
    respond(201, LISTING)
    request = CreateDraftListingRequest(
        quantity=3,
        title="Overlay pack",
        description="Stream overlays",
        price=19.99,
        who_made="i_did",
        when_made="made_to_order",
        taxonomy_id=2078,
        tags=["stream", "overlay"],
    )

    listing = client.create_draft_listing(1, request)

    call = last_call(session)
    assert call["method"] == "POST"
    assert call["url"] == f"{BASE}/shops/1/listings"
    assert call["json"] == {
        "quantity": 3,
        "title": "Overlay pack",
        "description": "Stream overlays",
        "price": 19.99,
        "who_made": "i_did",
        "when_made": "made_to_order",
        "taxonomy_id": 2078,
        "tags": ["stream", "overlay"],
    }
    assert listing.listing_id == 55


def test_update_listing_sends_only_set_fields(client, session, respond, caplog):
    respond(200, LISTING)
    caplog.set_level(logging.INFO, logger="atomplatform.etsy.api_client")

    client.update_listing(1, 55, UpdateListingRequest(quantity=0, state="inactive"))

    call = last_call(session)
    assert call["method"] == "PATCH"
    assert call["url"] == f"{BASE}/shops/1/listings/55"
    assert call["json"] == {"quantity": 0, "state": "inactive"}
    assert "Updated listing 55" in caplog.text


def test_update_inventory(client, session, respond, caplog):
    caplog.set_level(logging.INFO, logger="atomplatform.etsy.api_client")
    respond(200, {"products": [{"product_id": 4, "offerings": [{"offering_id": 8, "quantity": 2}]}]})
    request = UpdateInventoryRequest(
        products=[
            UpdateInventoryProduct(
                sku="SKU-1",
                offerings=[UpdateInventoryOffering(price=5.0, quantity=2, is_enabled=True)],
            )
        ]
    )

    inventory = client.update_listing_inventory(55, request)

    call = last_call(session)
    assert call["method"] == "PUT"
    assert call["json"] == {
        "products": [
            {"sku": "SKU-1", "offerings": [{"price": 5.0, "quantity": 2, "is_enabled": True}]}
        ]
    }
    assert inventory.products[0].offerings[0].offering_id == 8
    assert "Updated inventory for listing 55" in caplog.text


def test_create_receipt_shipment(client, session, respond):
    respond(200, {"receipt_id": 12, "is_shipped": True})

    receipt = client.create_receipt_shipment(
        1, 12, CreateReceiptShipmentRequest(tracking_code="1Z", carrier_name="ups")
    )

    call = last_call(session)
    assert call["url"] == f"{BASE}/shops/1/receipts/12/tracking"
    assert call["json"] == {"tracking_code": "1Z", "carrier_name": "ups"}
    assert receipt.is_shipped is True


def test_typed_delete_yields_nothing(client, session, respond):
    respond(204, "")

    assert client.delete_listing(1, 55) is None

    call = last_call(session)
    assert call["method"] == "DELETE"
    assert call["url"] == f"{BASE}/shops/1/listings/55"


def test_typed_delete_ignores_body(client, respond):
    respond(200, "unexpected")

    assert client.delete_shop_shipping_profile(1, 2) is None


def test_raw_delete_empty_body_is_null(client, respond):
    respond(204, "")

    assert client.raw_delete("shops/1/listings/55") is None


def test_raw_delete_returns_body(client, respond):
    respond(200, {"deleted": True})

    assert client.raw_delete("shops/1/listings/55") == {"deleted": True}


def test_raw_get_encodes_params(client, session, respond):
    respond(200, {"count": 0})

    result = client.raw_get("shops/1/listings", {"keywords": "a b&c", "limit": "5"})

    assert result == {"count": 0}
    assert last_call(session)["url"] == f"{BASE}/shops/1/listings?keywords=a%20b%26c&limit=5"


def test_raw_get_keeps_commas_literal(client, session, respond):
    respond(200, {"count": 0})

    client.raw_get("listings/batch", {"listing_ids": "1,2,3"})

    assert last_call(session)["url"] == f"{BASE}/listings/batch?listing_ids=1,2,3"


def test_raw_post_and_put(client, session, respond):
    respond(200, {"ok": True})

    assert client.raw_post("shops/1/listings", {"title": "x"}) == {"ok": True}
    assert last_call(session)["json"] == {"title": "x"}

    client.raw_put("listings/5/inventory", {"products": []})
    assert last_call(session)["method"] == "PUT"
    assert last_call(session)["url"] == f"{BASE}/listings/5/inventory"


def test_raw_post_null_body(client, session, respond):
    respond(200, {"ok": True})

    client.raw_post("shops/1/listings", None)

    call = last_call(session)
    assert call["data"] == "null"
    assert call["headers"]["Content-Type"] == "application/json"


def test_etsy_error_shape(client, respond):
    respond(403, {"error": "insufficient_scope", "error_description": "listings_w required"})

    with pytest.raises(APIError) as excinfo:
        client.get_me()

    err = excinfo.value
    assert err.status_code == 403
    assert err.code == "insufficient_scope"
    assert err.message == "insufficient_scope - listings_w required"


def test_etsy_error_without_description(client, respond):
    respond(404, {"error": "Listing not found"})

    with pytest.raises(APIError) as excinfo:
        client.get_listing(1)

    assert excinfo.value.message == "Listing not found"


def test_missing_required_field_is_decode_error(client, respond):
    respond(200, {"title": "no id here"})

    with pytest.raises(DecodeError) as excinfo:
        client.get_listing(1)

    assert "no id here" in excinfo.value.body_prefix


def test_taxonomy_tree(client, respond):
    respond(
        200,
        {
            "count": 1,
            "results": [{"id": 1, "name": "Art", "children": [{"id": 2, "name": "Prints", "children": []}]}],
        },
    )

    page = client.get_seller_taxonomy_nodes()

    assert page.results[0].children[0].name == "Prints"


def test_shipping_upgrade_type_alias(client, respond):
    respond(
        200,
        {
            "shipping_profile_id": 3,
            "shipping_profile_upgrades": [{"upgrade_id": 1, "type": "0"}],
        },
    )

    profile = client.get_shop_shipping_profile(1, 3)

    assert profile.shipping_profile_upgrades[0].upgrade_type == "0"


def test_listing_url():
    client = EtsyAPIClient("k")

    assert client.get_listing_url(5) == "https://www.etsy.com/listing/5"
    assert client.get_listing_url(5, "neon-pack") == "https://www.etsy.com/listing/5/neon-pack"
