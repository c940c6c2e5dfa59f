"""
Tests for authentication encoding.
"""

import base64

from hypothesis import given, strategies as st, settings

from api_workbench.schemas.request import ApiKeyAuth, BasicAuth, BearerAuth, NoAuth
from api_workbench.services.auth_encoder import (
    append_query,
    apply_auth,
    encode_uri_component,
    resolve_auth,
)


class TestBasicAuth:

    def test_basic_auth_header(self):
        headers, url = apply_auth(BasicAuth(username="user", password="pass"), {}, "http://x/y")

        assert headers == {"Authorization": "Basic dXNlcjpwYXNz"}
        assert url == "http://x/y"

    def test_missing_fields_are_empty_strings(self):
        headers, _ = apply_auth(BasicAuth(), {}, "http://x")

        assert headers["Authorization"] == "Basic " + base64.b64encode(b":").decode()

    def test_non_ascii_credentials_are_utf8_encoded(self):
        headers, _ = apply_auth(BasicAuth(username="jürgen", password="pä"), {}, "http://x")

        encoded = headers["Authorization"].removeprefix("Basic ")
        assert base64.b64decode(encoded).decode("utf-8") == "jürgen:pä"

    @given(
        username=st.text(max_size=20),
        password=st.text(max_size=20)
    )
    @settings(max_examples=100)
    def test_basic_auth_decodes_back_to_credentials(self, username: str, password: str):
        headers, _ = apply_auth(BasicAuth(username=username, password=password), {}, "http://x")

        decoded = base64.b64decode(headers["Authorization"][len("Basic "):]).decode("utf-8")
        assert decoded == f"{username}:{password}"

    def test_auth_header_overrides_explicit_authorization(self):
        headers, _ = apply_auth(BasicAuth(username="u", password="p"), {"Authorization": "old"}, "http://x")

        assert headers["Authorization"].startswith("Basic ")


class TestBearerAuth:

    def test_bearer_header(self):
        headers, _ = apply_auth(BearerAuth(token="abc123"), {}, "http://x")

        assert headers == {"Authorization": "Bearer abc123"}

    def test_empty_token_adds_no_header(self):
        headers, _ = apply_auth(BearerAuth(token=""), {"Accept": "*/*"}, "http://x")

        assert headers == {"Accept": "*/*"}


class TestApiKeyAuth:

    def test_api_key_in_header(self):
        headers, url = apply_auth(ApiKeyAuth(key="X-API-Key", value="secret"), {}, "http://x/y")

        assert headers == {"X-API-Key": "secret"}
        assert url == "http://x/y"

    def test_api_key_in_query_without_existing_query(self):
        _, url = apply_auth(ApiKeyAuth(key="k", value="v", add_to="query"), {}, "http://x/y")

        assert url == "http://x/y?k=v"

    def test_api_key_in_query_with_existing_query(self):
        _, url = apply_auth(ApiKeyAuth(key="k", value="v", add_to="query"), {}, "http://x/y?a=1")

        assert url == "http://x/y?a=1&k=v"

    def test_api_key_query_is_percent_encoded(self):
        _, url = apply_auth(ApiKeyAuth(key="api key", value="a&b=c", add_to="query"), {}, "http://x")

        assert url == "http://x?api%20key=a%26b%3Dc"

    def test_query_append_on_schemeless_url_does_not_fail(self):
        _, url = apply_auth(ApiKeyAuth(key="k", value="v", add_to="query"), {}, "not a url")

        assert url == "not a url?k=v"

    def test_empty_key_is_skipped(self):
        headers, url = apply_auth(ApiKeyAuth(key="", value="v"), {}, "http://x")

        assert headers == {}
        assert url == "http://x"


class TestNoAuth:

    def test_no_auth_changes_nothing(self):
        original = {"Accept": "application/json"}

        headers, url = apply_auth(NoAuth(), original, "http://x")

        assert headers == original
        assert url == "http://x"

    def test_input_headers_are_not_mutated(self):
        original = {"Accept": "application/json"}

        apply_auth(BearerAuth(token="t"), original, "http://x")

        assert original == {"Accept": "application/json"}


class TestHelpers:

    def test_encode_uri_component_keeps_unreserved_marks(self):
        assert encode_uri_component("a-b_c.d!e~f*g'h(i)j") == "a-b_c.d!e~f*g'h(i)j"
        assert encode_uri_component("a b/c?d") == "a%20b%2Fc%3Fd"

    def test_append_query_separator(self):
        assert append_query("http://x", "a", "1") == "http://x?a=1"
        assert append_query("http://x?", "a", "1") == "http://x?&a=1"

    def test_resolve_auth_only_touches_populated_fields(self):
        seen = []

        def fake_resolve(text: str) -> str:
            seen.append(text)
            return text.upper()

        resolved = resolve_auth(ApiKeyAuth(key="{{k}}", value="", add_to="query"), fake_resolve)

        assert seen == ["{{k}}"]
        assert resolved.key == "{{K}}"
        assert resolved.value == ""
        assert resolved.add_to == "query"
