"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from vibestatus.exceptions import (
    APIError,
    ConnectionFailedError,
    RequestTimeoutError,
    ResponseFormatError,
)

DEFAULT_TIMEOUT = 15.0


def _handle_response(response: httpx.Response) -> dict[str, Any]:
    """Validate response status and return the parsed JSON object."""
    if response.status_code >= 400:
        raise APIError(
            status_code=response.status_code,
            message=response.text,
        )
    try:
        data = response.json()
    except ValueError as exc:
        raise ResponseFormatError(f"Response body is not JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ResponseFormatError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return data


class SyncTransport:
    """Synchronous HTTP transport using httpx.Client."""

    def __init__(
        self,
        base_url: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json", **(headers or {})},
        )

    def get(
        self,
        endpoint: str,
        params: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Perform a GET request and return parsed JSON."""
        try:
            response = self._client.get(endpoint, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise ConnectionFailedError(str(exc)) from exc
        return _handle_response(response)

    def post(
        self,
        endpoint: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Perform a JSON POST request and return parsed JSON."""
        try:
            response = self._client.post(endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise ConnectionFailedError(str(exc)) from exc
        return _handle_response(response)

    def close(self) -> None:
        self._client.close()
