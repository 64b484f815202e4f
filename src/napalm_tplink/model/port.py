"""Typed models for port/interface data."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PortInfo:
    """Configuration and negotiated state of one port (``PortSettingRpm.htm``).

    Attributes:
        port_number: 1-based port number.
        enabled: ``True`` if the port is administratively enabled.
        configured_speed: Configured speed/duplex label (e.g. ``"Auto"``,
            ``"100MF"``), or ``"Unknown"``.
        actual_speed: Negotiated speed/duplex label; ``"Link Down"`` when
            no link.
        configured_flow_control: ``"On"``, ``"Off"`` or ``"Unknown"``.
        actual_flow_control: ``"On"``, ``"Off"`` or ``"Unknown"``.
        lag_group: LAG/trunk group id, ``0`` if the port is not in a LAG.
    """

    port_number: int
    enabled: bool
    configured_speed: str
    actual_speed: str
    configured_flow_control: str
    actual_flow_control: str
    lag_group: int = 0


@dataclass(frozen=True)
class PortStatistics:
    """Packet counters for one port (``PortStatisticsRpm.htm``).

    Attributes:
        port_number: 1-based port number.
        enabled: ``True`` if the port is administratively enabled.
        link_status: Link label (e.g. ``"1000M Full"``, ``"Link Down"``).
        tx_good_packets: Frames transmitted without error.
        tx_bad_packets: Frames transmitted with error.
        rx_good_packets: Frames received without error.
        rx_bad_packets: Frames received with error.
    """

    port_number: int
    enabled: bool
    link_status: str
    tx_good_packets: int = 0
    tx_bad_packets: int = 0
    rx_good_packets: int = 0
    rx_bad_packets: int = 0
