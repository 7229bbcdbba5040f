"""Tests for the shared async HTTP gateway plumbing."""

import httpx
import pytest
from asgiref.sync import async_to_sync
from django.test import override_settings

from core.http import AsyncHTTPGateway, client_options, log_extra, response_error_message


class EchoGateway(AsyncHTTPGateway):
    service_name = "echo"

    def default_headers(self):
        return {"X-Default": "1"}


class TestClientOptions:
    @override_settings(EXTERNAL_HTTP_TIMEOUT_SECONDS=None)
    def test_unset_keeps_httpx_default(self):
        assert client_options() == {}

    @override_settings(EXTERNAL_HTTP_TIMEOUT_SECONDS=2.5)
    def test_timeout(self):
        assert client_options() == {"timeout": 2.5}


class TestResponseErrorMessage:
    def test_nested_google_style(self):
        response = httpx.Response(400, json={"error": {"message": "PERMISSION_DENIED"}})

        assert response_error_message(response, "fallback") == "PERMISSION_DENIED"

    def test_plain_string_error(self):
        response = httpx.Response(400, json={"error": "bad preset"})

        assert response_error_message(response, "fallback") == "bad preset"

    def test_non_json(self):
        response = httpx.Response(502, text="<html>")

        assert response_error_message(response, "fallback") == "fallback"

    def test_json_list(self):
        response = httpx.Response(400, json=["x"])

        assert response_error_message(response, "fallback") == "fallback"


class TestLogExtra:
    def test_reserved_keys_are_prefixed(self):
        extra = log_extra({"filename": "a.jpg", "name": "x", "owner_id": "uid_alice"})

        assert extra == {
            "context_filename": "a.jpg",
            "context_name": "x",
            "owner_id": "uid_alice",
        }


class TestAsyncHTTPGateway:
    """Tests for AsyncHTTPGateway._send."""

    def test_merges_headers_and_logs(self, mock_http, caplog):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(204)

        gateway = EchoGateway(client=mock_http(handler))

        with caplog.at_level("INFO"):
            response = async_to_sync(gateway._send)(
                "GET",
                "https://echo.test/ping",
                operation="ping",
                log_context={"owner_id": "uid_alice"},
                headers={"X-Extra": "2"},
            )

        assert response.status_code == 204
        assert seen[0].headers["X-Default"] == "1"
        assert seen[0].headers["X-Extra"] == "2"
        completed = [r for r in caplog.records if r.getMessage() == "External call completed"]
        assert completed[0].service == "echo"
        assert completed[0].operation == "ping"
        assert completed[0].status_code == 204
        assert completed[0].duration_ms >= 0

    def test_transport_error_is_reraised(self, mock_http, caplog):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        gateway = EchoGateway(client=mock_http(handler))

        with caplog.at_level("WARNING"), pytest.raises(httpx.ConnectError):
            async_to_sync(gateway._send)("GET", "https://echo.test/", operation="ping")

        assert "External call failed before a response" in caplog.text

    def test_reserved_context_key_logs_at_info(self, mock_http, caplog):
        gateway = EchoGateway(client=mock_http(lambda request: httpx.Response(200)))

        with caplog.at_level("INFO"):
            response = async_to_sync(gateway._send)(
                "POST",
                "https://echo.test/upload",
                operation="upload",
                log_context={"filename": "a.jpg"},
            )

        assert response.status_code == 200
        started = [r for r in caplog.records if r.getMessage() == "Starting external call"]
        assert started[0].context_filename == "a.jpg"
