"""TP-Link Easy Smart NAPALM driver: top-level NetworkDriver implementation."""

from __future__ import annotations

import logging
from typing import Any

from napalm.base.base import NetworkDriver
from napalm.base.exceptions import ConnectionException

from napalm_tplink.client.vlan_ops import DEFAULT_MAX_PORTS
from napalm_tplink.manager import SwitchManager
from napalm_tplink.vendor.tplink.mappings import SPEED_LABEL_TO_MBPS

logger = logging.getLogger(__name__)

# NAPALM counter value for statistics the switch does not report.
_NOT_REPORTED: int = -1


def _interface_name(port_number: int) -> str:
    return f"Port {port_number}"


class TPLinkDriver(NetworkDriver):  # type: ignore[misc]
    """NAPALM driver for TP-Link Easy Smart switches (TL-SG1xxE/TL-SG1xxDE).

    Talks to the switch's web UI over HTTP and reads device state from the
    JavaScript arrays embedded in its pages.  Getters return empty mappings
    when the switch gives no usable data; the reason is logged.

    Mutating commands (port state, VLANs, PVID, cable test) are available
    through :attr:`manager`.

    Args:
        hostname: IP address or hostname of the switch, optionally including
            the URL scheme (e.g. ``http://192.168.0.1``).
        username: Login username.
        password: Login password.
        timeout: Per-request timeout in seconds.
        optional_args: Optional driver configuration overrides.
            Supported keys:

            - ``port`` (int): HTTP port (default 80; 443 when verify_tls=True).
            - ``verify_tls`` (bool): Use HTTPS and verify certificates
              (default ``False``).
            - ``max_ports`` (int): Port count sent with VLAN writes
              (default 24).
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        timeout: int = 20,
        optional_args: dict[str, Any] | None = None,
    ) -> None:
        self.hostname = hostname
        self.username = username
        self.password = password
        self.timeout = timeout
        self.optional_args: dict[str, Any] = optional_args or {}

        self._verify_tls: bool = bool(self.optional_args.get("verify_tls", False))
        self._port: int = int(
            self.optional_args.get(
                "port",
                443 if self._verify_tls else 80,
            )
        )
        self._max_ports: int = int(self.optional_args.get("max_ports", DEFAULT_MAX_PORTS))
        self._manager: SwitchManager | None = None

        logger.debug(
            "TPLinkDriver initialised: host=%s port=%d user=%s",
            self.hostname,
            self._port,
            self.username,
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Open an HTTP session and authenticate with the switch.

        Raises:
            ConnectionException: If the switch rejects the login or cannot
                be reached.
        """
        base_url = self._build_base_url()
        logger.info("Opening connection to %s", base_url)
        manager = SwitchManager.connect(
            base_url,
            self.username,
            self.password,
            timeout_s=float(self.timeout),
            verify_tls=self._verify_tls,
            max_ports=self._max_ports,
        )
        if not manager.login():
            reason = manager.session.last_failure
            manager.close()
            raise ConnectionException(f"Cannot log in to {base_url}: {reason}")
        self._manager = manager

    def close(self) -> None:
        """Close the HTTP session."""
        if self._manager is not None:
            logger.info("Closing connection to %s", self.hostname)
            self._manager.close()
            self._manager = None

    def is_alive(self) -> dict[str, bool]:
        """Return liveness status of the HTTP session."""
        return {"is_alive": self._manager is not None and self._manager.session.logged_in}

    @property
    def manager(self) -> SwitchManager:
        """The open :class:`~napalm_tplink.manager.SwitchManager`.

        Raises:
            ConnectionException: If :meth:`open` has not been called.
        """
        if self._manager is None:
            raise ConnectionException("Session not open; call open() first.")
        return self._manager

    # ------------------------------------------------------------------
    # NAPALM getters
    # ------------------------------------------------------------------

    def get_interfaces(self) -> dict[str, dict[str, Any]]:
        """Return interface information conforming to the NAPALM schema.

        Returns:
            Dict keyed by interface name (``"Port 1"``...) with keys
            ``is_up``, ``is_enabled``, ``description``, ``last_flapped``,
            ``speed`` (Mbps), ``mtu``, ``mac_address``.
        """
        ports = self.manager.get_port_status().value
        result: dict[str, dict[str, Any]] = {}
        for port in ports:
            speed = SPEED_LABEL_TO_MBPS.get(port.actual_speed)
            result[_interface_name(port.port_number)] = {
                "is_up": speed is not None,
                "is_enabled": port.enabled,
                "description": "",
                "last_flapped": -1.0,
                "speed": float(speed or 0),
                "mtu": 0,
                "mac_address": "",
            }
        return result

    def get_interfaces_counters(self) -> dict[str, dict[str, int]]:
        """Return packet counters conforming to the NAPALM schema.

        The switch counts good and bad frames only: good frames are reported
        as unicast packets and bad frames as errors.  Counters the switch
        does not keep are ``-1``.
        """
        stats = self.manager.get_port_statistics().value
        result: dict[str, dict[str, int]] = {}
        for st in stats:
            result[_interface_name(st.port_number)] = {
                "tx_errors": st.tx_bad_packets,
                "rx_errors": st.rx_bad_packets,
                "tx_discards": _NOT_REPORTED,
                "rx_discards": _NOT_REPORTED,
                "tx_octets": _NOT_REPORTED,
                "rx_octets": _NOT_REPORTED,
                "tx_unicast_packets": st.tx_good_packets,
                "rx_unicast_packets": st.rx_good_packets,
                "tx_multicast_packets": _NOT_REPORTED,
                "rx_multicast_packets": _NOT_REPORTED,
                "tx_broadcast_packets": _NOT_REPORTED,
                "rx_broadcast_packets": _NOT_REPORTED,
            }
        return result

    def get_vlans(self) -> dict[int, dict[str, Any]]:
        """Return VLAN information conforming to the NAPALM schema.

        Returns:
            Dict keyed by integer VLAN ID, each value being::

                {"name": str, "interfaces": [str, ...]}

            ``interfaces`` lists member ports (tagged or untagged) in
            ascending port order.
        """
        vlans = self.manager.get_vlans().value
        return {
            v.vlan_id: {
                "name": v.name,
                "interfaces": [_interface_name(p) for p in v.member_ports],
            }
            for v in vlans
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_base_url(self) -> str:
        """Construct the switch base URL from hostname / port / TLS settings."""
        if "://" in self.hostname:
            return self.hostname.rstrip("/")
        scheme = "https" if self._verify_tls else "http"
        host = self.hostname
        port = self._port
        default_port = 443 if self._verify_tls else 80
        if port == default_port:
            return f"{scheme}://{host}"
        return f"{scheme}://{host}:{port}"
