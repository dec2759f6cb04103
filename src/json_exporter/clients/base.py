from __future__ import annotations

import ssl
from typing import Any

import httpx
import structlog

from json_exporter.core.errors import ConfigurationError, EndpointError

logger = structlog.get_logger()


def is_success_status(status_code: int) -> bool:
    """Determine if HTTP status code counts as a successful fetch."""
    return 200 <= status_code < 300


def build_ssl_context(
    *,
    ca_file: str | None = None,
    client_cert: str | None = None,
    client_key: str | None = None,
    insecure_skip_verify: bool = False,
) -> ssl.SSLContext | bool:
    """
    Build the ``verify`` argument for httpx from TLS settings.

    Returns ``True`` (system trust store) when nothing is customised, ``False``
    when verification is skipped without a client certificate, and an
    ``ssl.SSLContext`` otherwise.
    """
    if not (ca_file or client_cert):
        return not insecure_skip_verify

    try:
        context = ssl.create_default_context(cafile=ca_file)
        if client_cert:
            context.load_cert_chain(client_cert, client_key)
    except (OSError, ssl.SSLError) as exc:
        raise ConfigurationError(
            "Failed to load TLS material",
            {"ca_file": ca_file, "client_cert": client_cert, "error": str(exc)},
        ) from exc

    if insecure_skip_verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


class BaseHTTPClient:
    """
    Blocking HTTP client for the polled JSON endpoint.

    One attempt per call: no retries are made, the timeout bounds every
    request, and any failure to obtain a 2xx body is raised as EndpointError.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 5.0,
        verify: ssl.SSLContext | bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = httpx.Client(timeout=timeout, verify=verify, transport=transport)

    def _headers(self) -> dict[str, str]:
        """Override to provide custom headers."""
        return {"Accept": "application/json"}

    def url_for(self, path: str) -> str:
        # path replaces any path carried by the base URL
        return str(httpx.URL(self._base_url).join(path))

    def get(self, path: str, *, headers: dict[str, str] | None = None) -> bytes:
        """Execute GET request and return the raw response body."""
        url = self.url_for(path)
        req_headers = self._headers()
        if headers:
            req_headers.update(headers)

        try:
            response = self._client.get(url, headers=req_headers)
        except httpx.HTTPError as exc:
            logger.warning("http_network_error", method="GET", url=url, error=str(exc))
            raise EndpointError("HTTP request failed", {"url": url, "error": str(exc)}) from exc

        if not is_success_status(response.status_code):
            logger.warning("http_status_error", method="GET", url=url, status=response.status_code)
            raise EndpointError(
                f"HTTP request failed with code {response.status_code}",
                {"url": url, "status": response.status_code},
            )
        return response.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHTTPClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
