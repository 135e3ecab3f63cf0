"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
from datetime import datetime

from app.core.errors import (
    AuthenticationError,
    FieldValidationError,
    InsufficientDataError,
    LogNotFoundError,
    ReportNotFoundError,
    ServiceUnavailableError,
    StorageError,
)


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_field_validation_error(self):
        err = FieldValidationError("feeling", "feeling must not be empty")
        assert err.http_status == 422
        assert err.code == "VALIDATION_ERROR"
        assert err.field == "feeling"
        assert err.to_dict()["details"]["errors"][0]["field"] == "feeling"

    def test_log_not_found(self):
        err = LogNotFoundError(7)
        assert err.http_status == 404
        assert err.code == "LOG_NOT_FOUND"
        assert "7" in err.message
        assert err.to_dict()["details"]["id"] == 7

    def test_report_not_found(self):
        err = ReportNotFoundError(3)
        assert err.http_status == 404
        assert err.code == "REPORT_NOT_FOUND"

    def test_insufficient_data_with_window(self):
        err = InsufficientDataError(datetime(2026, 10, 12, 9), datetime(2026, 10, 19, 9))
        assert err.http_status == 422
        assert err.code == "INSUFFICIENT_DATA"
        assert err.details["window_start"].startswith("2026-10-12")

    def test_insufficient_data_without_window(self):
        assert "details" not in InsufficientDataError().to_dict()

    def test_service_unavailable(self):
        err = ServiceUnavailableError(reason="RateLimitError")
        assert err.http_status == 503
        assert err.code == "SERVICE_UNAVAILABLE"
        assert err.details["reason"] == "RateLimitError"

    def test_service_unavailable_without_reason(self):
        d = ServiceUnavailableError().to_dict()
        assert "details" not in d

    def test_storage_error(self):
        err = StorageError("insert_log")
        assert err.http_status == 500
        assert err.code == "STORAGE_ERROR"
        assert err.details["operation"] == "insert_log"

    def test_authentication_error(self):
        err = AuthenticationError()
        assert err.http_status == 401
        assert err.code == "UNAUTHORIZED"


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestValidationEnvelope:
    def test_fields_listed(self, client):
        r = client.post("/api/logs", json={"feeling": "", "acted": "perhaps"})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        fields = {e["field"] for e in body["details"]["errors"]}
        assert {"datetime", "feeling", "acted"} <= fields

    def test_non_integer_id(self, client):
        r = client.get("/api/reports/not-a-number")
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"


class TestStorageErrors:
    def test_storage_failure_reported_as_server_fault(self, client, monkeypatch):
        from sqlalchemy.exc import OperationalError
        from sqlalchemy.orm import Session

        def broken_commit(self):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(Session, "commit", broken_commit)
        r = client.post("/api/logs", json={
            "datetime": "2026-10-18T08:00:00",
            "feeling": "urge",
            "acted": "no",
        })
        assert r.status_code == 500
        assert r.json()["code"] == "STORAGE_ERROR"
