"""
Tests for the shared API plumbing: env helpers, error rendering and request context.
"""

import pytest
from django.db import DatabaseError
from rest_framework.exceptions import NotFound, ValidationError as DRFValidationError

from apps.common.config import get_env_bool, get_env_int, get_env_list
from apps.common.exception_handler import custom_exception_handler
from apps.common.exceptions import ConflictError, SubDomainNotFoundError


class TestEnvHelpers:

    def test_get_env_list(self, monkeypatch):
        monkeypatch.setenv("CATALOG_TEST_HOSTS", " a.example.com, ,b.example.com ")

        assert get_env_list("CATALOG_TEST_HOSTS") == ["a.example.com", "b.example.com"]
        assert get_env_list("CATALOG_TEST_UNSET", "x,y") == ["x", "y"]

    def test_get_env_bool(self, monkeypatch):
        monkeypatch.setenv("CATALOG_TEST_FLAG", "Yes")
        assert get_env_bool("CATALOG_TEST_FLAG") is True

        monkeypatch.setenv("CATALOG_TEST_FLAG", "off")
        assert get_env_bool("CATALOG_TEST_FLAG", True) is False

        monkeypatch.delenv("CATALOG_TEST_FLAG")
        assert get_env_bool("CATALOG_TEST_FLAG", True) is True

    @pytest.mark.parametrize("raw, expected", [("7", 7), ("0", 5), ("-2", 5), ("deep", 5)])
    def test_get_env_int(self, monkeypatch, raw, expected):
        monkeypatch.setenv("CATALOG_TEST_DEPTH", raw)

        assert get_env_int("CATALOG_TEST_DEPTH", 5) == expected


class TestExceptionHandler:

    def test_api_exception_uses_its_own_payload(self):
        exc = ConflictError("Busy", extra_data={"children_count": 2})

        response = custom_exception_handler(exc, {})

        assert response.status_code == 409
        assert response.data == {
            "error": "Busy",
            "detail": "Busy",
            "error_code": "ConflictError",
            "children_count": 2,
        }

    def test_typed_not_found(self):
        response = custom_exception_handler(SubDomainNotFoundError("abc"), {})

        assert response.status_code == 404
        assert response.data["resource_type"] == "SubDomain"

    def test_database_error_is_opaque(self):
        response = custom_exception_handler(DatabaseError("relation sub_domains is locked"), {"view": None})

        assert response.status_code == 500
        assert response.data["error_code"] == "InternalServerError"
        assert "sub_domains" not in str(response.data)

    def test_drf_errors_are_reshaped(self):
        not_found = custom_exception_handler(NotFound("nope"), {})
        invalid = custom_exception_handler(DRFValidationError({"title": ["too short"]}), {})

        assert not_found.status_code == 404
        assert not_found.data["detail"] == "nope"
        assert invalid.status_code == 400
        assert invalid.data["errors"] == {"title": ["too short"]}

    def test_unknown_exception_is_left_to_django(self):
        assert custom_exception_handler(RuntimeError("boom"), {}) is None


@pytest.mark.django_db
class TestRequestContext:

    def test_request_id_is_echoed(self, anon_client):
        response = anon_client.get("/api/subdomains/", HTTP_X_REQUEST_ID="req-123")

        assert response["X-Request-ID"] == "req-123"

    def test_request_id_is_generated(self, anon_client):
        response = anon_client.get("/api/subdomains/")

        assert len(response["X-Request-ID"]) == 32
