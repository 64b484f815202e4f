"""Parser for the 802.1Q VLAN configuration page."""

from __future__ import annotations

from napalm_tplink.client.errors import TPLinkParseError
from napalm_tplink.model.vlan import VlanInfo
from napalm_tplink.parser.script import ScriptArrays, bitmask_to_ports


def parse_vlans(html: str) -> list[VlanInfo]:
    """Parse ``Vlan8021QRpm.htm`` into one :class:`.VlanInfo` per VLAN.

    The page carries four parallel arrays, one entry per VLAN:
    ``vids`` (ids), ``names`` (quoted strings), ``tagMbrs`` and
    ``untagMbrs`` (port bitmasks, bit *i* = port *i + 1*).

    Args:
        html: Raw HTML from ``Vlan8021QRpm.htm``.

    Returns:
        VLANs in page order.  A missing name reads as ``""`` and a missing
        bitmask as no ports.

    Raises:
        TPLinkParseError: If the ``vids`` array is missing.
    """
    arrays = ScriptArrays(html)
    if not arrays.has_array("vids"):
        raise TPLinkParseError("vids array not found in Vlan8021QRpm.htm")

    vids = arrays.int_array("vids")
    names = arrays.string_array("names")
    tag_mbrs = arrays.int_array("tagMbrs")
    untag_mbrs = arrays.int_array("untagMbrs")

    vlans: list[VlanInfo] = []
    for i, vid in enumerate(vids):
        tagged = bitmask_to_ports(tag_mbrs[i] if i < len(tag_mbrs) else 0)
        untagged = bitmask_to_ports(untag_mbrs[i] if i < len(untag_mbrs) else 0)
        vlans.append(
            VlanInfo(
                vlan_id=vid,
                name=names[i] if i < len(names) else "",
                tagged_ports=tuple(tagged),
                untagged_ports=tuple(untagged),
                member_ports=tuple(sorted(set(tagged) | set(untagged))),
            )
        )
    return vlans
