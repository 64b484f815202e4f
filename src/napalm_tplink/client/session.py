"""Authenticated HTTP session for TP-Link Easy Smart switches."""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

import requests

from napalm_tplink.client.errors import TPLinkAuthError, TPLinkError, TPLinkResponseError
from napalm_tplink.client.http import DEFAULT_TIMEOUT_S, FormFields, TPLinkHTTP
from napalm_tplink.client.result import FailureKind, SwitchResult
from napalm_tplink.vendor.tplink.endpoints import LOGON, LOGON_SUCCESS_MARKER

logger = logging.getLogger(__name__)

# Statuses after which the cookie can no longer be trusted.
_STALE_SESSION_STATUSES: frozenset[int] = frozenset({401, 403})


@dataclass(frozen=True)
class TPLinkCredentials:
    """Immutable credential pair for a TP-Link switch.

    Args:
        username: Login username.
        password: Login password.
    """

    username: str
    password: str


class SessionState(enum.Enum):
    """Authentication state of a :class:`TPLinkSession`."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class TPLinkSession:
    """Manages one persistent, authenticated HTTP session to a TP-Link switch.

    Wraps :class:`.TPLinkHTTP` and adds:
    - Cookie-based authentication via ``logon.cgi``.
    - Lazy login: the first request issued while unauthenticated logs in.
    - A lock that serializes the login transition and every exchange.
    - Conversion of transport faults into tagged
      :class:`~napalm_tplink.client.result.SwitchResult` values.

    Nothing here raises to the caller: :meth:`login` returns a ``bool``,
    :meth:`fetch`/:meth:`submit` return a ``SwitchResult[str]`` and
    :meth:`get`/:meth:`post` return the page text or ``""``.

    Args:
        base_url: Switch base URL, e.g. ``http://192.168.0.1``.
        credentials: Username/password pair.
        timeout_s: Per-request timeout in seconds (default 20).
        verify_tls: Whether to verify TLS certificates (default True).
    """

    def __init__(
        self,
        base_url: str,
        credentials: TPLinkCredentials,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        verify_tls: bool = True,
    ) -> None:
        self._http: TPLinkHTTP = TPLinkHTTP(
            base_url=base_url,
            timeout_s=timeout_s,
            verify_tls=verify_tls,
        )
        self._credentials: TPLinkCredentials = credentials
        self._state: SessionState = SessionState.UNAUTHENTICATED
        self._last_failure: str = ""
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self) -> bool:
        """Authenticate to the switch.

        Posts the logon form and checks for the success marker that the
        switch only emits after a successful logon.

        Returns:
            ``True`` if the switch accepted the credentials.  Any failure
            (status outside 200-299, missing marker, transport fault) returns
            ``False`` and leaves the session unauthenticated; the reason is
            kept in :attr:`last_failure`.
        """
        with self._lock:
            self._state = SessionState.AUTHENTICATING
            logger.debug(
                "Logging in to %s as %r", self._http.base_url, self._credentials.username
            )
            try:
                resp = self._http.post_form(
                    LOGON,
                    data=[
                        ("username", self._credentials.username),
                        ("password", self._credentials.password),
                        ("cpassword", ""),
                        ("logon", "Login"),
                    ],
                )
                if LOGON_SUCCESS_MARKER not in resp.text:
                    raise TPLinkAuthError(
                        f"logon response from {self._http.base_url} has no "
                        f"{LOGON_SUCCESS_MARKER!r} marker (bad credentials?)"
                    )
            except TPLinkError as exc:
                return self._login_failed(str(exc))

            self._state = SessionState.AUTHENTICATED
            self._last_failure = ""
            logger.debug("Logged in to %s", self._http.base_url)
            return True

    def ensure_session(self) -> bool:
        """Log in if not already logged in; return whether the session is usable."""
        with self._lock:
            if self._state is SessionState.AUTHENTICATED:
                return True
            return self.login()

    def invalidate(self) -> None:
        """Mark the session stale so the next request re-authenticates."""
        with self._lock:
            if self._state is SessionState.AUTHENTICATED:
                logger.debug("Session to %s invalidated", self._http.base_url)
            self._state = SessionState.UNAUTHENTICATED

    # ------------------------------------------------------------------
    # Public request methods
    # ------------------------------------------------------------------

    def fetch(
        self,
        path: str,
        params: str | FormFields | None = None,
    ) -> SwitchResult[str]:
        """Perform an authenticated GET.

        Args:
            path: Page or CGI path relative to the switch base URL.
            params: Optional query string (pre-encoded or ordered pairs).

        Returns:
            The response text, or a failed result tagged ``AUTH``,
            ``TRANSPORT`` or ``NO_DATA`` with ``""`` as its value.
        """
        return self._exchange("GET", path, lambda: self._http.get(path, params=params))

    def submit(
        self,
        path: str,
        data: FormFields | None = None,
    ) -> SwitchResult[str]:
        """Perform an authenticated form POST; see :meth:`fetch`."""
        return self._exchange("POST", path, lambda: self._http.post_form(path, data=data))

    def get(
        self,
        path: str,
        params: str | FormFields | None = None,
    ) -> str:
        """Perform an authenticated GET and return the text, ``""`` on any failure."""
        return self.fetch(path, params).value

    def post(
        self,
        path: str,
        data: FormFields | None = None,
    ) -> str:
        """Perform an authenticated POST and return the text, ``""`` on any failure."""
        return self.submit(path, data).value

    def close(self) -> None:
        """Close the underlying HTTP session."""
        with self._lock:
            self._state = SessionState.UNAUTHENTICATED
            self._http.close()

    def __enter__(self) -> TPLinkSession:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def logged_in(self) -> bool:
        """True if the session is currently authenticated."""
        return self._state is SessionState.AUTHENTICATED

    @property
    def last_failure(self) -> str:
        """Reason of the most recent login failure, ``""`` after a success."""
        return self._last_failure

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _login_failed(self, reason: str) -> bool:
        self._state = SessionState.UNAUTHENTICATED
        self._last_failure = reason
        logger.warning("Login failed: %s", reason)
        return False

    def _exchange(
        self,
        method: str,
        path: str,
        send: Callable[[], requests.Response],
    ) -> SwitchResult[str]:
        """Run one request under the session lock and tag the outcome."""
        with self._lock:
            if not self.ensure_session():
                logger.warning("%s %s skipped: not logged in", method, path)
                return SwitchResult.fail(FailureKind.AUTH, "", self._last_failure)
            try:
                resp = send()
            except TPLinkResponseError as exc:
                if exc.status_code in _STALE_SESSION_STATUSES:
                    self._state = SessionState.UNAUTHENTICATED
                logger.warning("%s %s failed: %s", method, path, exc)
                return SwitchResult.fail(FailureKind.TRANSPORT, "", str(exc))
            except TPLinkError as exc:
                logger.warning("%s %s failed: %s", method, path, exc)
                return SwitchResult.fail(FailureKind.TRANSPORT, "", str(exc))

            text = resp.text
            if not text:
                logger.warning("%s %s returned an empty body", method, path)
                return SwitchResult.fail(FailureKind.NO_DATA, "", f"empty response from {path}")
            return SwitchResult.success(text)
