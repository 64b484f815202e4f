"""Low-level port write operations for TP-Link Easy Smart switches.

Each function translates a typed request into the exact form-field payload
the web UI sends and delegates to
:class:`~napalm_tplink.client.session.TPLinkSession` for dispatch.

Payloads:

    DISABLE PORT 3: POST /port_setting.cgi
        portid=3&state=0&speed=7&flowcontrol=7&apply=Apply

    ENABLE PORT 3: POST /port_setting.cgi
        portid=3&state=1&speed=7&flowcontrol=7&apply=Apply

Fields:
    portid:       1-based port number
    state:        "1" = Enable, "0" = Disable
    speed:        "7" = leave unchanged
    flowcontrol:  "7" = leave unchanged
"""

from __future__ import annotations

import logging

from napalm_tplink.client.http import FormFields
from napalm_tplink.client.result import SwitchResult
from napalm_tplink.client.session import TPLinkSession
from napalm_tplink.vendor.tplink.endpoints import PORT_SETTING_SET
from napalm_tplink.vendor.tplink.mappings import PORT_SETTING_UNCHANGED, STATE_LABELS

logger = logging.getLogger(__name__)


def set_port_state(
    session: TPLinkSession,
    port_number: int,
    enable: bool,
) -> SwitchResult[str]:
    """Enable or disable one port, leaving speed and flow control unchanged.

    Args:
        session: Switch session.
        port_number: 1-based port number.
        enable: ``True`` to enable the port, ``False`` to disable it.

    Returns:
        The response page; the operation counts as applied when the switch
        returned a non-empty page.

    Raises:
        ValueError: If *port_number* is less than 1.
    """
    payload = build_port_state_payload(port_number, enable)
    logger.debug("Setting port %d: %s", port_number, payload)
    result = session.submit(PORT_SETTING_SET, data=payload)
    if result:
        logger.info("Port %d %s", port_number, STATE_LABELS[int(enable)].lower())
    return result


def build_port_state_payload(port_number: int, enable: bool) -> FormFields:
    """Build the ``port_setting.cgi`` form fields for a state change."""
    if port_number < 1:
        raise ValueError(f"port_number must be >= 1, got {port_number}")
    return [
        ("portid", str(port_number)),
        ("state", "1" if enable else "0"),
        ("speed", str(PORT_SETTING_UNCHANGED)),
        ("flowcontrol", str(PORT_SETTING_UNCHANGED)),
        ("apply", "Apply"),
    ]
