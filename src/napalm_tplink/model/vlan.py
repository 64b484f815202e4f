"""Typed model for 802.1Q VLAN data."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class VlanMembershipType(enum.IntEnum):
    """Per-port membership code sent as ``selType_<port>`` to ``qvlanSet.cgi``."""

    UNTAGGED = 0
    TAGGED = 1
    NOT_MEMBER = 2


@dataclass(frozen=True)
class VlanInfo:
    """One row of the 802.1Q VLAN table.

    Attributes:
        vlan_id: 802.1Q VLAN identifier (1-4094).
        name: VLAN name as shown in the web UI.
        tagged_ports: 1-based ports that carry this VLAN tagged, ascending.
        untagged_ports: 1-based ports that carry this VLAN untagged, ascending.
        member_ports: Union of tagged and untagged ports, ascending.
    """

    vlan_id: int
    name: str
    tagged_ports: tuple[int, ...] = field(default_factory=tuple)
    untagged_ports: tuple[int, ...] = field(default_factory=tuple)
    member_ports: tuple[int, ...] = field(default_factory=tuple)
