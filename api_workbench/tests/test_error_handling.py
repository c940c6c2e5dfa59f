"""
Tests for global error handling and response format consistency.

Every API-level error is a JSON body with a ``detail`` field; errors raised
through the APIException hierarchy also carry an ``error_code``.
"""

import pytest
from hypothesis import given, strategies as st, settings

from api_workbench.exceptions import BadRequestError, ResourceNotFoundError, ValidationError


@pytest.fixture(scope="module")
def client(api_client):
    """Test client shared by the tests of this module."""
    with api_client() as c:
        yield c


# Strategies for generating test data
resource_id_strategy = st.integers(min_value=90000, max_value=99999)

invalid_http_method_strategy = st.text(
    alphabet=st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
    min_size=1,
    max_size=10
).filter(lambda m: m not in ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"])

invalid_auth_type_strategy = st.text(min_size=1, max_size=10).filter(
    lambda t: t not in ["none", "basic", "bearer", "apiKey"]
)


class TestErrorResponseFormat:
    """Tests for consistent error response format."""

    def test_404_error_format_environment_not_found(self, client):
        response = client.get("/api/environments/99999")
        assert response.status_code == 404
        data = response.json()
        assert "detail" in data
        assert "99999" in data["detail"]

    def test_404_error_format_variable_not_found(self, client):
        response = client.put("/api/environments/variables/99999", json={"value": "x"})
        assert response.status_code == 404
        assert "99999" in response.json()["detail"]

    def test_404_for_unknown_environment_on_compile(self, client):
        response = client.post("/api/execute/compile", json={
            "request": {"method": "GET", "url": "http://example.com"},
            "environment_id": 99999
        })
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "RESOURCE_NOT_FOUND"
        assert data["detail"] == "Environment with id 99999 not found"

    def test_422_validation_error_format(self, client):
        response = client.post("/api/environments", json={})
        assert response.status_code == 422
        data = response.json()
        assert "detail" in data
        assert data["error_code"] == "VALIDATION_ERROR"

    def test_validation_error_includes_field_info(self, client):
        response = client.post("/api/tests/run", json={"scripts": [], "assertions": []})
        assert response.status_code == 422
        assert "response" in response.json()["detail"].lower()

    def test_400_bad_request_missing_url(self, client):
        response = client.post("/api/execute", json={"request": {"method": "GET", "url": "   "}})
        assert response.status_code == 400
        data = response.json()
        assert data["detail"] == "URL is required"
        assert data["error_code"] == "BAD_REQUEST"


class TestExceptionClasses:
    """Tests for custom exception classes."""

    def test_resource_not_found_error(self):
        error = ResourceNotFoundError("Environment", 12345)
        assert error.status_code == 404
        assert error.detail == "Environment with id 12345 not found"
        assert error.error_code == "RESOURCE_NOT_FOUND"

    def test_validation_error(self):
        error = ValidationError("bad input")
        assert error.status_code == 422
        assert error.error_code == "VALIDATION_ERROR"

    def test_bad_request_error(self):
        error = BadRequestError("nope")
        assert error.status_code == 400
        assert str(error) == "nope"


class TestErrorResponseFormatConsistency:
    """
    For any request that results in an error, the API returns a JSON body
    with a non-empty ``detail`` and an appropriate status code.
    """

    @given(resource_id=resource_id_strategy)
    @settings(max_examples=50, deadline=None)
    def test_404_error_response_format_consistency(self, api_client, resource_id: int):
        with api_client() as client:
            response = client.get(f"/api/environments/{resource_id}")

            assert response.status_code == 404
            data = response.json()
            assert "detail" in data, f"Error response missing 'detail' field: {data}"
            assert str(resource_id) in data["detail"]

    @given(invalid_method=invalid_http_method_strategy)
    @settings(max_examples=50, deadline=None)
    def test_422_for_invalid_http_method(self, api_client, invalid_method: str):
        with api_client() as client:
            response = client.post("/api/execute/compile", json={
                "request": {"method": invalid_method, "url": "https://api.example.com/test"}
            })

            assert response.status_code == 422
            data = response.json()
            assert "detail" in data
            assert data["error_code"] == "VALIDATION_ERROR"

    @given(auth_type=invalid_auth_type_strategy)
    @settings(max_examples=50, deadline=None)
    def test_422_for_unknown_auth_type(self, api_client, auth_type: str):
        with api_client() as client:
            response = client.post("/api/execute/compile", json={
                "request": {"url": "https://api.example.com", "auth": {"type": auth_type}}
            })

            assert response.status_code == 422
            data = response.json()
            assert isinstance(data["detail"], str) and len(data["detail"]) > 0
            assert data["error_code"] == "VALIDATION_ERROR"
