"""Cable diagnostic trigger for TP-Link Easy Smart switches.

    RUN TEST ON PORTS 1 AND 3: GET /cable_diag_get.cgi
        chk_1=1&chk_3=3&Apply=Apply

The response page carries the results in ``var cablestate`` and
``var cablelength``; see :mod:`napalm_tplink.parser.cable`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from napalm_tplink.client.http import encode_query
from napalm_tplink.client.result import SwitchResult
from napalm_tplink.client.session import TPLinkSession
from napalm_tplink.vendor.tplink.endpoints import CABLE_DIAG

logger = logging.getLogger(__name__)


def cable_test_start(session: TPLinkSession, ports: Sequence[int]) -> SwitchResult[str]:
    """Run the cable test on *ports* and return the result page.

    Raises:
        ValueError: If *ports* is empty or holds a port number below 1.
    """
    query = build_cable_test_query(ports)
    logger.debug("Running cable test: %s", query)
    return session.fetch(CABLE_DIAG, params=query)


def build_cable_test_query(ports: Sequence[int]) -> str:
    """Build the ``cable_diag_get.cgi`` query string."""
    if not ports:
        raise ValueError("ports must not be empty")
    bad = [p for p in ports if p < 1]
    if bad:
        raise ValueError(f"port numbers must be >= 1, got {bad}")
    fields = [(f"chk_{p}", str(p)) for p in dict.fromkeys(ports)]
    fields.append(("Apply", "Apply"))
    return encode_query(fields)
