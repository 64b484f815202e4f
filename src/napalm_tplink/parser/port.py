"""Parsers for the port settings and port statistics pages."""

from __future__ import annotations

from napalm_tplink.client.errors import TPLinkParseError
from napalm_tplink.model.port import PortInfo, PortStatistics
from napalm_tplink.parser.script import ScriptArrays
from napalm_tplink.vendor.tplink.mappings import (
    FLOW_CONTROL_LABELS,
    LINK_STATUS_LABELS,
    SPEED_LABELS,
    label_for,
)

# Slots per port in the flat "pkts" array: TX good, TX bad, RX good, RX bad.
_COUNTERS_PER_PORT: int = 4


def parse_port_settings(html: str) -> list[PortInfo]:
    """Parse ``PortSettingRpm.htm`` into one :class:`.PortInfo` per port.

    The page declares ``max_port_num`` and parallel per-port arrays:

    ==============  ==========================================
    ``state``       1 = enabled, 0 = disabled
    ``trunk_info``  LAG group id (0 = none)
    ``spd_cfg``     configured speed code (:data:`SPEED_LABELS`)
    ``spd_act``     negotiated speed code
    ``fc_cfg``      configured flow control (:data:`FLOW_CONTROL_LABELS`)
    ``fc_act``      negotiated flow control
    ==============  ==========================================

    Args:
        html: Raw HTML from ``PortSettingRpm.htm``.

    Returns:
        Ports ``1..max_port_num`` that have a ``state`` entry, ascending.

    Raises:
        TPLinkParseError: If ``max_port_num`` is missing.
    """
    arrays = ScriptArrays(html)
    max_ports = _max_port_num(arrays, "PortSettingRpm.htm")

    state = arrays.int_array("state")
    trunk_info = arrays.int_array("trunk_info")
    spd_cfg = arrays.int_array("spd_cfg")
    spd_act = arrays.int_array("spd_act")
    fc_cfg = arrays.int_array("fc_cfg")
    fc_act = arrays.int_array("fc_act")

    return [
        PortInfo(
            port_number=i + 1,
            enabled=state[i] == 1,
            configured_speed=label_for(SPEED_LABELS, spd_cfg, i),
            actual_speed=label_for(SPEED_LABELS, spd_act, i),
            configured_flow_control=label_for(FLOW_CONTROL_LABELS, fc_cfg, i),
            actual_flow_control=label_for(FLOW_CONTROL_LABELS, fc_act, i),
            lag_group=trunk_info[i] if i < len(trunk_info) else 0,
        )
        for i in range(min(max_ports, len(state)))
    ]


def parse_port_statistics(html: str) -> list[PortStatistics]:
    """Parse ``PortStatisticsRpm.htm`` into one :class:`.PortStatistics` per port.

    Port *i* (0-based) owns slots ``4i`` to ``4i + 3`` of the flat ``pkts``
    array; slots past the end of the array read as 0.

    Args:
        html: Raw HTML from ``PortStatisticsRpm.htm``.

    Returns:
        Ports ``1..max_port_num`` that have a ``state`` entry, ascending.

    Raises:
        TPLinkParseError: If ``max_port_num`` is missing.
    """
    arrays = ScriptArrays(html)
    max_ports = _max_port_num(arrays, "PortStatisticsRpm.htm")

    state = arrays.int_array("state")
    link_status = arrays.int_array("link_status")
    pkts = arrays.int_array("pkts")

    def counter(slot: int) -> int:
        return max(pkts[slot], 0) if slot < len(pkts) else 0

    stats: list[PortStatistics] = []
    for i in range(min(max_ports, len(state))):
        base = i * _COUNTERS_PER_PORT
        stats.append(
            PortStatistics(
                port_number=i + 1,
                enabled=state[i] == 1,
                link_status=label_for(LINK_STATUS_LABELS, link_status, i),
                tx_good_packets=counter(base),
                tx_bad_packets=counter(base + 1),
                rx_good_packets=counter(base + 2),
                rx_bad_packets=counter(base + 3),
            )
        )
    return stats


def _max_port_num(arrays: ScriptArrays, page: str) -> int:
    max_ports = arrays.scalar("max_port_num")
    if max_ports is None:
        raise TPLinkParseError(f"max_port_num not found in {page}")
    return max_ports
