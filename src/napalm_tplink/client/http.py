"""HTTP transport for the TP-Link Easy Smart web UI.

Every exchange with the switch goes through :class:`TPLinkHTTP`, which owns
the :class:`requests.Session` (cookie jar and connection pool), applies one
timeout and TLS setting to every request, and turns anything other than a
2xx response into an exception from :mod:`napalm_tplink.client.errors`.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any
from urllib.parse import quote

import requests

from napalm_tplink.client.errors import TPLinkRequestError, TPLinkResponseError

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("napalm-tplink")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

DEFAULT_TIMEOUT_S: float = 20.0

# Form fields in wire order; repeated and ordered keys are significant to the
# switch CGI handlers, so plain dicts are not used for payloads.
FormFields = list[tuple[str, str]]


def _normalise_base_url(url: str) -> str:
    """Ensure the URL has a scheme and no trailing slash."""
    url = url.rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "http://" + url
    return url


def encode_query(fields: FormFields) -> str:
    """Percent-encode *fields* into a query string, preserving order.

    Values are escaped with no safe characters, so ``/`` becomes ``%2F`` and
    a space becomes ``%20`` (not ``+``), matching what the web UI sends.

    Args:
        fields: ``(key, value)`` pairs in wire order.

    Returns:
        ``key=value&key=value`` without a leading ``?``.
    """
    return "&".join(f"{quote(k, safe='')}={quote(v, safe='')}" for k, v in fields)


def is_success_status(status_code: int) -> bool:
    """True for 2xx statuses only; redirects and errors are failures."""
    return 200 <= status_code < 300


class TPLinkHTTP:
    """Cookie-keeping HTTP transport bound to one switch.

    Args:
        base_url: Switch base URL, e.g. ``http://192.168.0.1``.
        timeout_s: Timeout in seconds applied to every request (default 20).
        verify_tls: Whether to verify TLS certificates (default True).
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        verify_tls: bool = True,
    ) -> None:
        self.base_url: str = _normalise_base_url(base_url)
        self.timeout_s: float = timeout_s
        self.verify_tls: bool = verify_tls
        self._session: requests.Session = requests.Session()
        self._session.headers["User-Agent"] = f"napalm-tplink/{_VERSION}"

    def get(
        self,
        path: str,
        params: str | FormFields | None = None,
    ) -> requests.Response:
        """GET *path*.

        *params* is either a query string already built with
        :func:`encode_query` (sent verbatim) or ordered ``(key, value)``
        pairs, which are encoded here.

        Raises:
            TPLinkRequestError: On any transport-level failure.
            TPLinkResponseError: On a status outside 200-299.
        """
        if isinstance(params, list):
            params = encode_query(params)
        return self._send("GET", path, params=params or None)

    def post_form(
        self,
        path: str,
        data: FormFields | None = None,
    ) -> requests.Response:
        """POST *data* to *path* as ``application/x-www-form-urlencoded``.

        Raises:
            TPLinkRequestError: On any transport-level failure.
            TPLinkResponseError: On a status outside 200-299.
        """
        return self._send("POST", path, data=data)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> TPLinkHTTP:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self.base_url + path
        try:
            resp = self._session.request(
                method,
                url,
                timeout=self.timeout_s,
                verify=self.verify_tls,
                **kwargs,
            )
        except requests.exceptions.RequestException as exc:
            raise TPLinkRequestError(url, exc) from exc
        logger.debug("%s %s -> %d (%d bytes)", method, resp.url, resp.status_code, len(resp.content))
        if not is_success_status(resp.status_code):
            raise TPLinkResponseError(resp.status_code, resp.url)
        return resp
