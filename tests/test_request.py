from __future__ import annotations

from changetip_client.config_types import ClientConfig
from changetip_client.request import (
    BodyEncoding,
    build_request,
    build_token_request,
    encode_query,
)


def _cfg(**kwargs) -> ClientConfig:
    return ClientConfig(credential="secret", api_version="1", **kwargs)


def test_encode_query_keeps_commas_and_formats_values() -> None:
    assert encode_query({"tips": "a,b", "channel": "twitter"}) == "tips=a,b&channel=twitter"
    assert encode_query({"full": False, "username": None}) == "full=false&username="
    assert encode_query({"q": "hello world"}) == "q=hello%20world"
    assert encode_query(None) == ""


def test_get_request_url_carries_auth_and_query() -> None:
    req = build_request(_cfg(), "GET", "monikers", params={"page": 2})

    assert req.method == "GET"
    assert req.path == "/v1/monikers/?access_token=secret&page=2"
    assert req.url == "https://api.changetip.com/v1/monikers/?access_token=secret&page=2"
    assert req.params == {"page": 2}
    assert req.data == {}
    assert req.encoding is BodyEncoding.NONE


def test_api_key_mode_changes_auth_param() -> None:
    req = build_request(_cfg(authentication_mode="api_key"), "GET", "wallet/balance")
    assert req.path == "/v1/wallet/balance/?api_key=secret"
    assert req.params is None


def test_post_request_is_multipart_with_informational_length() -> None:
    data = {"amount": "1 coffee", "message": "thanks"}
    req = build_request(_cfg(), "POST", "tip-url", data=data)

    assert req.encoding is BodyEncoding.MULTIPART
    assert req.headers["Content-Type"] == "multipart/form-data"
    assert req.headers["Content-Length"] == str(len('{"amount":"1 coffee","message":"thanks"}'))
    assert req.path == "/v1/tip-url/?access_token=secret"


def test_request_copies_caller_data() -> None:
    data = {"amount": 1}
    req = build_request(_cfg(), "POST", "wallet/withdrawals", data=data)
    data["amount"] = 2
    assert req.data == {"amount": 1}


def test_default_version_used_when_unset() -> None:
    req = build_request(ClientConfig(credential="k"), "POST", "tip", data={})
    assert req.path.startswith("/v2/tip/?")


def test_token_request_is_url_encoded_on_auth_host() -> None:
    req = build_token_request(
        _cfg(),
        "token",
        {"refresh_token": "r", "client_id": "c", "client_secret": "s", "grant_type": "refresh_token", "x": None},
    )

    assert req.url == "https://www.changetip.com/o/token"
    assert req.encoding is BodyEncoding.FORM
    assert req.headers["Content-Type"] == "application/x-www-form-urlencoded"
    body = "refresh_token=r&client_id=c&client_secret=s&grant_type=refresh_token"
    assert req.headers["Content-Length"] == str(len(body))
    assert "x" not in req.data


def test_dev_mode_payload_shape() -> None:
    req = build_request(_cfg(), "GET", "users", params={"page": 1})
    assert req.dev_mode_payload() == {
        "status": "dev_mode",
        "data": {},
        "params": {"page": 1},
        "path": "/v1/users/?access_token=secret&page=1",
    }


def test_content_length_counts_utf16_code_units() -> None:
    req = build_request(_cfg(), "POST", "tip", data={"message": "é🎉"})
    # {"message":"é🎉"} is 16 characters; the emoji takes two UTF-16 units
    assert req.headers["Content-Length"] == "17"


def test_request_carries_config_timeout_and_user_agent() -> None:
    req = build_request(_cfg(timeout_s=3.5, user_agent="tipbot/1"), "GET", "users")
    token = build_token_request(_cfg(timeout_s=3.5), "token", {"grant_type": "refresh_token"})
    assert (req.timeout_s, req.user_agent) == (3.5, "tipbot/1")
    assert token.timeout_s == 3.5
