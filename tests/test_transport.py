import pytest
import requests

from atomplatform.models import APIModel
from atomplatform.transport import APIError, DecodeError, HTTPTransport, TransportError
from atomplatform.utils import build_query

from .conftest import last_call


class Widget(APIModel):
    widget_id: int
    name: str = "unnamed"


def _parse_error(text):
    if text.startswith("E:"):
        return "custom", text[2:]
    return None


@pytest.fixture
def transport(session):
    return HTTPTransport(
        "https://api.test/v1/",
        headers={"x-api-key": "k"},
        session=session,
        error_parser=_parse_error,
    )


def test_send_builds_url_and_headers(transport, session, respond):
    respond(200, "ok")

    assert transport.send("GET", "things", params=[("a", 1), ("b", None)]) == "ok"

    call = last_call(session)
    assert call["method"] == "GET"
    assert call["url"] == "https://api.test/v1/things?a=1"
    assert call["headers"] == {"x-api-key": "k"}
    assert call["json"] is None


def test_json_body_sets_content_type(transport, session, respond):
    respond(200, "{}")

    transport.send("POST", "/things", json_body={"x": 1})

    call = last_call(session)
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["json"] == {"x": 1}


def test_none_json_body_is_sent_as_null(transport, session, respond):
    respond(200, "{}")

    transport.send("POST", "/things", json_body=None)

    call = last_call(session)
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["data"] == "null"
    assert call["json"] is None


def test_form_body_is_passed_as_data(transport, session):
    transport.send("POST", "/token", form={"grant_type": "refresh_token"})

    call = last_call(session)
    assert call["data"] == {"grant_type": "refresh_token"}
    assert "Content-Type" not in call["headers"]


def test_connection_failure_is_transport_error(transport, session):
    cause = requests.ConnectionError("refused")
    session.request.side_effect = cause

    with pytest.raises(TransportError) as excinfo:
        transport.send("GET", "/things")

    assert excinfo.value.__cause__ is cause
    assert excinfo.value.method == "GET"
    assert "refused" in str(excinfo.value)


def test_error_shape_is_parsed(transport, respond):
    respond(400, "E:bad thing")

    with pytest.raises(APIError) as excinfo:
        transport.send("GET", "/things")

    err = excinfo.value
    assert err.status_code == 400
    assert err.code == "custom"
    assert err.message == "bad thing"


def test_unparseable_error_is_synthesized_from_status(transport, respond):
    respond(502, "<html>Bad Gateway</html>")

    with pytest.raises(APIError) as excinfo:
        transport.send("GET", "/things")

    assert excinfo.value.code == "502"
    assert excinfo.value.message == "<html>Bad Gateway</html>"


def test_synthesized_error_truncates_body(transport, respond):
    respond(500, "x" * 2000)

    with pytest.raises(APIError) as excinfo:
        transport.send("GET", "/things")

    assert len(excinfo.value.message) == 500


def test_empty_error_body(transport, respond):
    respond(404, "")

    with pytest.raises(APIError) as excinfo:
        transport.send("GET", "/things")

    assert excinfo.value.message == "<empty body>"


def test_request_model_decodes(transport, respond):
    respond(200, {"widget_id": 7, "extra": True})

    widget = transport.request_model(Widget, "GET", "/widgets/7")

    assert widget.widget_id == 7
    assert widget.name == "unnamed"


def test_missing_required_field_is_decode_error(transport, respond):
    body = '{"name": "' + "n" * 600 + '"}'
    respond(200, body)

    with pytest.raises(DecodeError) as excinfo:
        transport.request_model(Widget, "GET", "/widgets/7")

    assert excinfo.value.body_prefix == body[:500]
    assert "Widget" in str(excinfo.value)


def test_invalid_json_is_decode_error(transport, respond):
    respond(200, "not json")

    with pytest.raises(DecodeError) as excinfo:
        transport.request_json("GET", "/things")

    assert excinfo.value.body_prefix == "not json"


def test_request_json_empty_body(transport, respond):
    respond(204, "")

    assert transport.request_json("DELETE", "/things/1", allow_empty=True) is None
    with pytest.raises(DecodeError):
        transport.request_json("DELETE", "/things/1")


def test_request_no_content_ignores_body(transport, respond):
    respond(200, "anything at all")

    assert transport.request_no_content("DELETE", "/things/1") is None


def test_build_query():
    assert build_query(None) == ""
    assert build_query([("a", None)]) == ""
    assert build_query([("b", 2), ("a", 1)]) == "?b=2&a=1"
    assert build_query([("paid", True), ("shipped", False)]) == "?paid=true&shipped=false"
    assert build_query([("includes", "images,shop")]) == "?includes=images,shop"
    assert build_query([("keywords", "blue mug&more")]) == "?keywords=blue%20mug%26more"
