"""Checker for HTTP(S) endpoints."""

from __future__ import annotations

from time import perf_counter
from typing import Optional

import httpx

from healthwatch.domain.entities.errors import (
    CheckerError,
    UnsupportedCheckTypeError,
)
from healthwatch.domain.entities.health import (
    CheckConfig,
    CheckOutcome,
    CheckType,
    HealthStatus,
    HttpCheckConfig,
)
from healthwatch.domain.services.status_rules import classify_latency

MAX_REDIRECTS = 5


class HttpChecker:
    """Issue one request and classify it by status code, body and latency."""

    check_type = CheckType.HTTP

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    async def evaluate(self, config: CheckConfig, timeout_ms: float) -> CheckOutcome:
        if not isinstance(config, HttpCheckConfig):
            raise UnsupportedCheckTypeError(
                f"HTTP checker cannot evaluate check '{config.id}'"
            )

        method = config.method.value
        start = perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=timeout_ms / 1000,
                follow_redirects=config.follow_redirects,
                max_redirects=MAX_REDIRECTS,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method, config.url, headers=config.headers or None
                )
        except httpx.TimeoutException as exc:
            raise CheckerError("Request timeout", details={"url": config.url}) from exc
        except httpx.ConnectError as exc:
            raise CheckerError(
                _describe_connect_error(exc), details={"url": config.url}
            ) from exc
        except httpx.HTTPError as exc:
            raise CheckerError(
                f"HTTP request failed: {exc}", details={"url": config.url}
            ) from exc

        latency_ms = round((perf_counter() - start) * 1000, 2)
        status_code = response.status_code
        metadata = {
            "status_code": status_code,
            "response_time": latency_ms,
            "url": config.url,
            "method": method,
        }

        # Unexpected answers fail the attempt.
        if status_code not in config.expected_status_codes:
            raise CheckerError(f"Unexpected status code: {status_code}", details=metadata)
        if not config.body_matches(response.text):
            raise CheckerError(
                "Response body does not match expected content", details=metadata
            )

        return CheckOutcome(
            status=classify_latency(latency_ms, timeout_ms),
            message=f"HTTP check successful ({status_code})",
            metadata=metadata,
        )


def _describe_connect_error(exc: httpx.ConnectError) -> str:
    text = str(exc)
    lowered = text.lower()
    if "name or service not known" in lowered or "nodename nor servname" in lowered:
        return "Host not found"
    if "refused" in lowered:
        return "Connection refused"
    return f"Connection failed: {text}"
