"""Exceptions raised inside the client and parser layers.

They never reach callers of :class:`~napalm_tplink.manager.SwitchManager`:
the session and the manager catch them and return a
:class:`~napalm_tplink.client.result.SwitchResult` tagged with the matching
:class:`~napalm_tplink.client.result.FailureKind`.
"""

from __future__ import annotations


class TPLinkError(Exception):
    """Root of every error raised while talking to a TP-Link switch."""


class TPLinkAuthError(TPLinkError):
    """The logon page came back without the logged-in marker."""


class TPLinkRequestError(TPLinkError):
    """No HTTP response at all, e.g. a refused connection or a timeout."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"Request to {url!r} failed: {cause}")
        self.url = url
        self.cause = cause


class TPLinkResponseError(TPLinkError):
    """The switch answered with a status outside 200-299 (redirects included)."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} for {url!r}")
        self.status_code = status_code
        self.url = url


class TPLinkParseError(TPLinkError):
    """A report page lacks the script array or scalar it is read from."""
