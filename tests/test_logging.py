import logging
import uuid

import pytest


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_replaces_unsafe_request_id(self, client):
        response = client.get("/health", HTTP_X_REQUEST_ID="bad id\nwith newline")
        request_id = response["X-Request-ID"]
        assert str(uuid.UUID(request_id, version=4)) == request_id

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_api_requests_carry_correlation_id(self, api_client_with_correlation):
        client, cid = api_client_with_correlation
        response = client.post("/api/v1/auth/login/", {"email": "x@y.io", "password": "p"})
        assert response["X-Request-ID"] == cid


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    @pytest.mark.parametrize("key", ["password", "token", "license_image"])
    def test_sensitive_keys_masked_whole(self, key):
        from config.settings import mask_sensitive_data

        result = mask_sensitive_data(None, None, {"event": "test", key: "plain-value"})
        assert result[key] == "***MASKED***"

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.created", "order_number": "ORD123456789"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_number"] == "ORD123456789"
        assert result["event"] == "order.created"
