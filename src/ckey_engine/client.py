"""
KeyClient SDK: sync client for a CKey-Engine server.

Used by storefronts and support tooling to issue and check license keys
remotely. Verification falls back to the local algorithm when the server
cannot be reached, since a key is checkable from its text alone.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from ckey_engine.keygen.validator import validate_key


@dataclass
class ClientIssueResult:
    """Result of generate() call."""

    success: bool
    name: str = ""
    keys: list[str] = field(default_factory=list)
    code: str = ""
    message: str = ""


@dataclass
class ClientVerifyResult:
    """Result of verify() call."""

    valid: bool
    code: str = ""
    message: str = ""
    offline: bool = False


class KeyClient:
    """
    Synchronous HTTP client for CKey-Engine.

    Can be wrapped in async by consumers; designed for simplicity in sync contexts.
    """

    def __init__(
        self,
        server_url: str = "http://localhost:8080",
        api_key: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
        retry_backoff_base: float = 0.5,
        offline_fallback: bool = True,
    ):
        self.server_url = server_url.rstrip("/")
        self.api_key = api_key
        self.max_retries = max_retries
        self.retry_backoff_base = retry_backoff_base
        self.offline_fallback = offline_fallback
        self._http = httpx.Client(
            base_url=self.server_url,
            timeout=timeout,
        )

    def _admin_headers(self) -> dict[str, str]:
        headers = {}
        if self.api_key:
            headers["X-Ckey-Api-Key"] = self.api_key
        return headers

    def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Central HTTP method with retry and structured error handling.

        Retries on:
        - httpx.TimeoutException and other transport errors
        - 5xx status codes
        - 429 (rate limit)

        No retry on other 4xx errors.

        Returns parsed JSON on success, or structured error dict on failure.
        """
        last_error = None
        for attempt in range(self.max_retries):
            try:
                resp = getattr(self._http, method)(path, **kwargs)
                if resp.status_code >= 500 or resp.status_code == 429:
                    last_error = f"HTTP {resp.status_code}"
                    if attempt < self.max_retries - 1:
                        time.sleep(self.retry_backoff_base * (2 ** attempt))
                        continue
                    return {
                        "error": f"Server error: {resp.status_code}",
                        "code": "SERVER_ERROR",
                    }
                if resp.status_code >= 400:
                    return {
                        "error": f"Client error: {resp.status_code}",
                        "code": "CLIENT_ERROR",
                    }
                return resp.json()
            except httpx.TimeoutException:
                last_error = "timeout"
                if attempt < self.max_retries - 1:
                    time.sleep(self.retry_backoff_base * (2 ** attempt))
                    continue
            except httpx.HTTPError as e:
                last_error = str(e)
                if attempt < self.max_retries - 1:
                    time.sleep(self.retry_backoff_base * (2 ** attempt))
                    continue
            except json.JSONDecodeError:
                return {"error": "Invalid JSON response", "code": "JSON_ERROR"}

        return {"error": f"All {self.max_retries} retries exhausted: {last_error}", "code": "CONNECTION_ERROR"}

    # ── Issuance ──

    def generate(self, name: str, count: int = 1) -> ClientIssueResult:
        """Ask the server to issue ``count`` keys for ``name``."""
        data = self._request(
            "post", "/keys",
            json={"name": name, "count": count},
            headers=self._admin_headers(),
        )
        if "error" in data:
            return ClientIssueResult(
                success=False, name=name,
                code=data.get("code", "ERROR"), message=data.get("error", ""),
            )
        return ClientIssueResult(
            success=True,
            name=data.get("name", name),
            keys=data.get("keys", []),
            code="ISSUED",
        )

    # ── Verification ──

    def verify(self, name: str, key: str) -> ClientVerifyResult:
        """Verify a key against the server, or locally when it is unreachable."""
        data = self._request("post", "/keys/verify", json={"name": name, "key": key})

        if "error" in data:
            if data.get("code") == "CONNECTION_ERROR" and self.offline_fallback:
                return self.verify_offline(name, key)
            return ClientVerifyResult(
                valid=False, code=data.get("code", "ERROR"), message=data.get("error", ""),
            )

        return ClientVerifyResult(
            valid=data.get("valid", False),
            code=data.get("code", ""),
            message=data.get("message", ""),
        )

    @staticmethod
    def verify_offline(name: str, key: str) -> ClientVerifyResult:
        """Verify a key locally (no server contact)."""
        result = validate_key(name, key)
        return ClientVerifyResult(
            valid=result.valid, code=result.code, message=result.message, offline=True,
        )

    # ── Health ──

    def health(self) -> dict[str, Any]:
        """Fetch the server health document."""
        return self._request("get", "/health")

    # ── Lifecycle ──

    def close(self) -> None:
        """Close the HTTP client."""
        self._http.close()

    def __enter__(self) -> "KeyClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
