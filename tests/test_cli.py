import json

import pytest
import requests
from typer.testing import CliRunner

from atomplatform.cli import app

from .conftest import last_call, make_response

runner = CliRunner()

LISTING = {
    "listing_id": 55,
    "title": "Overlay pack",
    "state": "active",
    "quantity": 3,
    "price": {"amount": 1999, "divisor": 100, "currency_code": "USD"},
}


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, session):
    monkeypatch.setenv("ETSY_API_KEY", "key123")
    monkeypatch.setenv("ETSY_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("PRINTFUL_API_KEY", "pf-key")
    monkeypatch.delenv("ETSY_REFRESH_TOKEN", raising=False)
    monkeypatch.delenv("ATOMPLATFORM_CONFIG", raising=False)
    monkeypatch.setattr(requests, "Session", lambda: session)


def test_etsy_ping(respond):
    respond(200, {"application_id": 123})

    result = runner.invoke(app, ["etsy", "ping"])

    assert result.exit_code == 0, result.output
    assert "Ping successful!" in result.output
    assert "Application ID: 123" in result.output


def test_listings_summary_shows_money(session, respond):
    respond(200, {"count": 1, "results": [LISTING]})

    result = runner.invoke(app, ["etsy", "listings", "--shop-id", "1", "-l", "5", "--includes", "images,shop"])

    assert result.exit_code == 0, result.output
    assert "Found 1 listings:" in result.output
    assert "ID: 55 - Overlay pack" in result.output
    assert "Price: 19.99 USD" in result.output
    assert last_call(session)["url"].endswith("/shops/1/listings?limit=5&includes=images,shop")


def test_json_output(respond):
    respond(200, LISTING)

    result = runner.invoke(app, ["--json", "etsy", "listing", "55"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["listing_id"] == 55
    assert data["price"] == {"amount": 1999, "divisor": 100, "currency_code": "USD"}


def test_create_listing_splits_tags(session, respond):
    respond(201, LISTING)

    result = runner.invoke(
        app,
        [
            "etsy", "create-listing",
            "--shop-id", "1",
            "--title", "Overlay pack",
            "--description", "Stream overlays",
            "--price", "19.99",
            "--quantity", "3",
            "--who-made", "i_did",
            "--when-made", "made_to_order",
            "--taxonomy-id", "2078",
            "--tags", "stream, overlay",
            "--listing-type", "download",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Listing created successfully!" in result.output
    body = last_call(session)["json"]
    assert body["tags"] == ["stream", "overlay"]
    assert body["type"] == "download"
    assert "materials" not in body


def test_api_error_exits_with_status_1(respond):
    respond(401, {"error": "invalid_token", "error_description": "access token is expired"})

    result = runner.invoke(app, ["etsy", "me"])

    assert result.exit_code == 1
    assert "Error: " in result.output
    assert "invalid_token - access token is expired" in result.output


def test_missing_credentials(monkeypatch):
    monkeypatch.delenv("PRINTFUL_API_KEY")

    result = runner.invoke(app, ["printful", "products"])

    assert result.exit_code == 1
    assert "PRINTFUL_API_KEY not found" in result.output


def test_transport_failure(session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    result = runner.invoke(app, ["etsy", "shop", "9"])

    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_delete_listing(session, respond):
    respond(204, "")

    result = runner.invoke(app, ["etsy", "delete-listing", "--shop-id", "1", "--listing-id", "55"])

    assert result.exit_code == 0, result.output
    assert "Listing 55 deleted successfully!" in result.output
    assert last_call(session)["method"] == "DELETE"


def test_raw_delete_empty_body(respond):
    respond(204, "")

    result = runner.invoke(app, ["etsy", "delete", "shops/1/listings/55"])

    assert result.exit_code == 0, result.output
    assert "Deleted successfully!" in result.output


def test_raw_get_params(session, respond):
    respond(200, {"count": 0, "results": []})

    result = runner.invoke(app, ["etsy", "get", "shops/1/listings", "--params", "limit=2,state=draft"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"count": 0, "results": []}
    assert last_call(session)["url"].endswith("/shops/1/listings?limit=2&state=draft")


def test_raw_post_invalid_json():
    result = runner.invoke(app, ["etsy", "post", "shops/1/listings", "--body", "{not json"])

    assert result.exit_code == 2


def test_raw_put(session, respond):
    respond(200, {"products": []})

    result = runner.invoke(app, ["etsy", "put", "listings/5/inventory", "--body", '{"products": []}'])

    assert result.exit_code == 0, result.output
    assert last_call(session)["json"] == {"products": []}


def test_auth_url():
    result = runner.invoke(
        app,
        [
            "etsy", "auth-url",
            "--redirect-uri", "https://x.test/cb",
            "--scopes", "listings_r shops_r",
            "--state", "s1",
            "--code-challenge", "chal",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "client_id=key123" in result.output
    assert "scope=listings_r%20shops_r" in result.output
    assert "redirect_uri=https%3A%2F%2Fx.test%2Fcb" in result.output
    assert "Code verifier" not in result.output


def test_auth_url_generates_pkce_pair():
    result = runner.invoke(app, ["etsy", "auth-url", "--redirect-uri", "https://x.test/cb", "--scopes", "shops_r"])

    assert result.exit_code == 0, result.output
    assert "Code verifier (needed for exchange-token):" in result.output
    assert "code_challenge_method=S256" in result.output


def test_exchange_token(session, respond):
    respond(200, {"access_token": "a1", "token_type": "Bearer", "expires_in": 3600, "refresh_token": "r1"})

    result = runner.invoke(
        app,
        ["etsy", "exchange-token", "--redirect-uri", "https://x.test/cb", "--code", "c", "--code-verifier", "v"],
    )

    assert result.exit_code == 0, result.output
    assert "ETSY_ACCESS_TOKEN=a1" in result.output
    assert "ETSY_REFRESH_TOKEN=r1" in result.output
    assert last_call(session)["url"] == "https://api.etsy.com/v3/public/oauth/token"


def test_refresh_token_from_env(monkeypatch, session, respond):
    monkeypatch.setenv("ETSY_REFRESH_TOKEN", "r0")
    respond(200, {"access_token": "a2", "token_type": "Bearer", "expires_in": 3600, "refresh_token": "r2"})

    result = runner.invoke(app, ["etsy", "refresh-token"])

    assert result.exit_code == 0, result.output
    assert last_call(session)["data"]["refresh_token"] == "r0"
    assert "ETSY_ACCESS_TOKEN=a2" in result.output


def test_pkce():
    result = runner.invoke(app, ["etsy", "pkce"])

    assert result.exit_code == 0
    assert "Code verifier:" in result.output
    assert "Code challenge:" in result.output


def test_config_overrides_base_url(tmp_path, session, respond):
    path = tmp_path / "endpoints.yaml"
    path.write_text("etsy:\n  api_base: http://localhost:9000/v3\n", encoding="utf-8")
    respond(200, {"application_id": 1})

    result = runner.invoke(app, ["--config", str(path), "etsy", "ping"])

    assert result.exit_code == 0, result.output
    assert last_call(session)["url"] == "http://localhost:9000/v3/openapi-ping"


def test_missing_config_file(tmp_path):
    result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "etsy", "ping"])

    assert result.exit_code == 2


def test_printful_products(session, respond):
    respond(
        200,
        {
            "code": 200,
            "result": [{"id": 1, "name": "Tee", "type": "T-SHIRT"}],
            "paging": {"total": 10, "offset": 0, "limit": 1},
        },
    )

    result = runner.invoke(app, ["printful", "products", "--limit", "1"])

    assert result.exit_code == 0, result.output
    assert "Found 1 products:" in result.output
    assert "Product ID: 1" in result.output
    assert "Total: 10, Offset: 0, Limit: 1" in result.output
    assert last_call(session)["headers"] == {"Authorization": "Bearer pf-key"}


def test_printful_order(respond):
    respond(
        200,
        {
            "code": 200,
            "result": {
                "id": 501,
                "status": "fulfilled",
                "created": 1,
                "updated": 2,
                "items": [{"id": 1, "variant_id": 4012, "quantity": 2}],
            },
        },
    )

    result = runner.invoke(app, ["printful", "order", "501"])

    assert result.exit_code == 0, result.output
    assert "Status: fulfilled" in result.output
    assert "- Variant ID: 4012, Quantity: 2" in result.output


def test_printful_shipping_rates(session, respond):
    respond(
        200,
        {
            "code": 200,
            "result": [
                {"id": "STANDARD", "name": "Flat Rate", "rate": "4.99", "currency": "USD", "min_days": 3, "max_days": 5}
            ],
        },
    )

    result = runner.invoke(
        app,
        [
            "printful", "shipping-rates",
            "--variant-id", "4012",
            "--quantity", "1",
            "--name", "Ann",
            "--address1", "1 Main St",
            "--city", "Austin",
            "--country-code", "US",
            "--zip", "78701",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Rate: 4.99 USD" in result.output
    assert "Delivery: 3 - 5 days" in result.output
    assert last_call(session)["json"]["recipient"]["zip"] == "78701"


def test_http_calls_are_real_responses(session):
    session.request.return_value = make_response(200, {"user_id": 7, "first_name": "Ann"})

    result = runner.invoke(app, ["etsy", "user", "7"])

    assert result.exit_code == 0, result.output
    assert "User 7:" in result.output
    assert "First Name: Ann" in result.output
