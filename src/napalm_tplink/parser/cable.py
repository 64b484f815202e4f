"""Parser for cable diagnostic results (``cable_diag_get.cgi``)."""

from __future__ import annotations

from collections.abc import Iterable

from napalm_tplink.client.errors import TPLinkParseError
from napalm_tplink.model.cable import CablePairResult, CableTestResult
from napalm_tplink.parser.script import ScriptArrays
from napalm_tplink.vendor.tplink.mappings import CABLE_NOT_TESTED, cable_status_label

_PAIRS_PER_CABLE: int = 4


def parse_cable_test(html: str, ports: Iterable[int]) -> list[CableTestResult]:
    """Parse the cable test page for the ports a test was requested on.

    ``var cablestate = [...]`` and ``var cablelength = [...]`` are indexed
    by ``port - 1``.  A state of ``-1`` means the port was not tested and
    the port is left out.

    Args:
        html: Raw HTML returned by ``cable_diag_get.cgi``.
        ports: 1-based ports the test was requested on.  Duplicates are
            reported once; request order is kept.

    Returns:
        One :class:`.CableTestResult` per tested port.

    Raises:
        TPLinkParseError: If either array is missing.
    """
    arrays = ScriptArrays(html)
    for name in ("cablestate", "cablelength"):
        if not arrays.has_array(name):
            raise TPLinkParseError(f"{name} array not found in cable test response")

    states = arrays.int_array("cablestate")
    lengths = arrays.int_array("cablelength")

    results: list[CableTestResult] = []
    for port in dict.fromkeys(ports):
        index = port - 1
        if not (0 <= index < len(states) and index < len(lengths)):
            continue
        code = states[index]
        if code == CABLE_NOT_TESTED:
            continue
        status = cable_status_label(code)
        length = max(lengths[index], 0)
        results.append(
            CableTestResult(
                port_number=port,
                status=status,
                cable_length=length,
                pairs=tuple(
                    CablePairResult(pair_number=n, status=status, length=length)
                    for n in range(1, _PAIRS_PER_CABLE + 1)
                ),
                completed=True,
            )
        )
    return results
