"""
Shared plumbing for gateways that call external HTTP services.

All external calls (identity provider, document store, media host) go
through a subclass of AsyncHTTPGateway so they share:
- One place to build httpx clients (timeouts, injected test transports)
- Structured logging with timing metrics on every call
- A single request/response per operation (no retry)

Configuration (via settings):
- EXTERNAL_HTTP_TIMEOUT_SECONDS: Per-request timeout. Unset keeps the
  httpx default.

Usage:
    class DocumentStoreGateway(AsyncHTTPGateway):
        service_name = "firestore"

        async def delete_media_record(self, media_id: str) -> bool:
            response = await self._send("DELETE", url, operation="delete_media_record")
            ...

    # Tests inject a client backed by httpx.MockTransport
    gateway = DocumentStoreGateway(client=httpx.AsyncClient(transport=transport))
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import httpx
from django.conf import settings

if TYPE_CHECKING:
    from typing import Any


# Attributes every LogRecord already carries; extra= may not overwrite them
RESERVED_LOG_KEYS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def log_extra(context: dict[str, Any]) -> dict[str, Any]:
    """Make call context safe for extra=, prefixing keys LogRecord reserves."""
    return {
        (f"context_{key}" if key in RESERVED_LOG_KEYS else key): value
        for key, value in context.items()
    }


def client_options() -> dict[str, Any]:
    """Keyword arguments for a new httpx client built from settings."""
    timeout = getattr(settings, "EXTERNAL_HTTP_TIMEOUT_SECONDS", None)
    if timeout is None:
        return {}
    return {"timeout": timeout}


def response_error_message(response: httpx.Response, default: str) -> str:
    """
    Pull a human-readable message out of an error response.

    Google APIs and Cloudinary both answer {"error": {"message": "..."}};
    anything else falls back to default.
    """
    try:
        payload = response.json()
    except ValueError:
        return default
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return default


class AsyncHTTPGateway:
    """
    Base class for async gateways to external HTTP services.

    Instances are cheap and stateless apart from the optional injected
    client. Without one, each call opens and closes its own AsyncClient,
    so concurrent calls never share connection state.
    """

    service_name: str = "external"

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this gateway."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    def default_headers(self) -> dict[str, str]:
        return {}

    async def _send(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        log_context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Send one request and log its outcome.

        Raises:
            httpx.TransportError: The request produced no response.
                Subclasses translate it into a domain exception.
        """
        logger = self.get_logger()
        context = log_extra(
            {
                "service": self.service_name,
                "operation": operation,
                **(log_context or {}),
            }
        )
        headers = {**self.default_headers(), **kwargs.pop("headers", {})}

        start_time = time.time()
        logger.info("Starting external call", extra=context)

        try:
            if self._client is not None:
                response = await self._client.request(method, url, headers=headers, **kwargs)
            else:
                async with httpx.AsyncClient(**client_options()) as client:
                    response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.TransportError as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "External call failed before a response",
                extra={**context, "duration_ms": duration_ms, "error": str(e)},
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "External call completed",
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
