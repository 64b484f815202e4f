"""Low-level VLAN write operations for TP-Link Easy Smart switches.

All VLAN writes are GET requests whose query string mirrors the web UI form.

    ADD/MODIFY: GET /qvlanSet.cgi
        vid=<id>&vname=<name>&selType_1=<c>&...&selType_<N>=<c>&qvlan_add=Add%2FModify

    DELETE: GET /qvlanSet.cgi
        selVlans=<id>&qvlan_del=Delete

    PVID: GET /vlanPvidSet.cgi
        pbm=<1 << (port - 1)>&pvid=<id>

``selType`` codes follow :class:`~napalm_tplink.model.vlan.VlanMembershipType`:
0 = untagged, 1 = tagged, 2 = not a member.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from napalm_tplink.client.http import encode_query
from napalm_tplink.client.result import SwitchResult
from napalm_tplink.client.session import TPLinkSession
from napalm_tplink.model.vlan import VlanMembershipType
from napalm_tplink.vendor.tplink.endpoints import VLAN_PVID_SET, VLAN_SET

logger = logging.getLogger(__name__)

DEFAULT_MAX_PORTS: int = 24

# Port bitmasks are 32 bits wide.
_MAX_BITMASK_PORT: int = 32


def vlan_create_or_modify(
    session: TPLinkSession,
    vlan_id: int,
    name: str,
    memberships: Mapping[int, VlanMembershipType],
    max_ports: int = DEFAULT_MAX_PORTS,
) -> SwitchResult[str]:
    """Create a VLAN, or overwrite the name and membership of an existing one.

    Every port from 1 to *max_ports* is sent; ports missing from
    *memberships* are sent as not-a-member.

    Args:
        session: Switch session.
        vlan_id: 802.1Q VLAN identifier (1-4094).
        name: VLAN name; URL-escaped on the wire.
        memberships: 1-based port number to membership type.
        max_ports: Number of ports on the switch (default 24).

    Raises:
        ValueError: If *vlan_id* or *max_ports* is out of range.
    """
    query = build_vlan_query(vlan_id, name, memberships, max_ports)
    logger.debug("Adding/modifying VLAN %d (name=%r): %s", vlan_id, name, query)
    result = session.fetch(VLAN_SET, params=query)
    if result:
        logger.info("VLAN %d (%s) added/modified", vlan_id, name)
    return result


def vlan_delete(session: TPLinkSession, vlan_id: int) -> SwitchResult[str]:
    """Delete one VLAN.

    Raises:
        ValueError: If *vlan_id* is out of range.
    """
    _check_vlan_id(vlan_id)
    query = encode_query([("selVlans", str(vlan_id)), ("qvlan_del", "Delete")])
    logger.debug("Deleting VLAN %d", vlan_id)
    result = session.fetch(VLAN_SET, params=query)
    if result:
        logger.info("VLAN %d deleted", vlan_id)
    return result


def vlan_set_pvid(
    session: TPLinkSession,
    port_number: int,
    vlan_id: int,
) -> SwitchResult[str]:
    """Set the PVID of a single port.

    Raises:
        ValueError: If *port_number* does not fit the 32-bit port bitmask
            or *vlan_id* is out of range.
    """
    query = build_pvid_query(port_number, vlan_id)
    logger.debug("Setting PVID of port %d to %d: %s", port_number, vlan_id, query)
    result = session.fetch(VLAN_PVID_SET, params=query)
    if result:
        logger.info("Port %d PVID set to %d", port_number, vlan_id)
    return result


def build_vlan_query(
    vlan_id: int,
    name: str,
    memberships: Mapping[int, VlanMembershipType],
    max_ports: int = DEFAULT_MAX_PORTS,
) -> str:
    """Build the ``qvlanSet.cgi`` add/modify query string."""
    _check_vlan_id(vlan_id)
    if max_ports < 1:
        raise ValueError(f"max_ports must be >= 1, got {max_ports}")

    fields = [("vid", str(vlan_id)), ("vname", name)]
    for port in range(1, max_ports + 1):
        membership = memberships.get(port, VlanMembershipType.NOT_MEMBER)
        fields.append((f"selType_{port}", str(int(membership))))
    fields.append(("qvlan_add", "Add/Modify"))
    return encode_query(fields)


def build_pvid_query(port_number: int, vlan_id: int) -> str:
    """Build the ``vlanPvidSet.cgi`` query string for one port."""
    _check_vlan_id(vlan_id)
    if not 1 <= port_number <= _MAX_BITMASK_PORT:
        raise ValueError(
            f"port_number must be between 1 and {_MAX_BITMASK_PORT}, got {port_number}"
        )
    pbm = 1 << (port_number - 1)
    return encode_query([("pbm", str(pbm)), ("pvid", str(vlan_id))])


def _check_vlan_id(vlan_id: int) -> None:
    if not 1 <= vlan_id <= 4094:
        raise ValueError(f"vlan_id must be between 1 and 4094, got {vlan_id}")
