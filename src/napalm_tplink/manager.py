"""High-level switch operations: reports and commands, never raising."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TypeVar

from napalm_tplink.client.cable_ops import cable_test_start
from napalm_tplink.client.errors import TPLinkParseError
from napalm_tplink.client.http import DEFAULT_TIMEOUT_S
from napalm_tplink.client.port_ops import set_port_state
from napalm_tplink.client.result import FailureKind, SwitchResult
from napalm_tplink.client.session import TPLinkCredentials, TPLinkSession
from napalm_tplink.client.vlan_ops import (
    DEFAULT_MAX_PORTS,
    vlan_create_or_modify,
    vlan_delete,
    vlan_set_pvid,
)
from napalm_tplink.model.cable import CableTestResult
from napalm_tplink.model.port import PortInfo, PortStatistics
from napalm_tplink.model.vlan import VlanInfo, VlanMembershipType
from napalm_tplink.parser.cable import parse_cable_test
from napalm_tplink.parser.port import parse_port_settings, parse_port_statistics
from napalm_tplink.parser.vlan import parse_vlans
from napalm_tplink.vendor.tplink.endpoints import (
    PORT_SETTINGS,
    PORT_STATISTICS,
    VLAN_8021Q,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


class SwitchManager:
    """Reports and commands for one TP-Link Easy Smart switch.

    Every public operation returns a
    :class:`~napalm_tplink.client.result.SwitchResult` instead of raising:
    reports carry ``[]`` and commands carry ``""`` when they fail, with the
    :class:`~napalm_tplink.client.result.FailureKind` telling why.  A result
    is truthy only on success.

    When a page comes back without the arrays a report needs, the session is
    invalidated: the failing call still returns empty, and the next call
    logs in again.

    Args:
        session: Session to the switch; logs in lazily on first use.
        max_ports: Port count used by :meth:`create_or_modify_vlan` when the
            caller does not pass one (default 24).
    """

    def __init__(self, session: TPLinkSession, max_ports: int = DEFAULT_MAX_PORTS) -> None:
        self._session: TPLinkSession = session
        self.max_ports: int = max_ports

    @classmethod
    def connect(
        cls,
        base_url: str,
        username: str,
        password: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        verify_tls: bool = True,
        max_ports: int = DEFAULT_MAX_PORTS,
    ) -> SwitchManager:
        """Build a manager with its own session.  No request is sent yet."""
        session = TPLinkSession(
            base_url=base_url,
            credentials=TPLinkCredentials(username=username, password=password),
            timeout_s=timeout_s,
            verify_tls=verify_tls,
        )
        return cls(session, max_ports=max_ports)

    @property
    def session(self) -> TPLinkSession:
        return self._session

    def login(self) -> bool:
        """Authenticate explicitly; see :meth:`TPLinkSession.login`."""
        return self._session.login()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> SwitchManager:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def get_port_status(self) -> SwitchResult[list[PortInfo]]:
        """Port enable state, speed, flow control and LAG group."""
        return self._report(PORT_SETTINGS, parse_port_settings, "port status")

    def get_port_statistics(self) -> SwitchResult[list[PortStatistics]]:
        """Per-port link status and TX/RX good/bad packet counters."""
        return self._report(PORT_STATISTICS, parse_port_statistics, "port statistics")

    def get_vlans(self) -> SwitchResult[list[VlanInfo]]:
        """The 802.1Q VLAN table with tagged/untagged/member ports."""
        return self._report(VLAN_8021Q, parse_vlans, "VLANs")

    def run_cable_test(self, ports: Sequence[int]) -> SwitchResult[list[CableTestResult]]:
        """Run the cable test on *ports* and return results for tested ports.

        An empty *ports* succeeds with no results and sends nothing.
        """
        ports = list(ports)
        if not ports:
            return SwitchResult.success([])
        try:
            page = cable_test_start(self._session, ports)
        except ValueError as exc:
            return self._invalid("cable test", exc, [])
        return self._parse(page, lambda html: parse_cable_test(html, ports), "cable test")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_port_state(self, port_number: int, enable: bool) -> SwitchResult[str]:
        """Enable or disable a port."""
        try:
            return set_port_state(self._session, port_number, enable)
        except ValueError as exc:
            return self._invalid("set port state", exc, "")

    def create_or_modify_vlan(
        self,
        vlan_id: int,
        name: str,
        memberships: Mapping[int, VlanMembershipType],
        max_ports: int | None = None,
    ) -> SwitchResult[str]:
        """Create or overwrite a VLAN; unlisted ports become non-members."""
        try:
            return vlan_create_or_modify(
                self._session,
                vlan_id,
                name,
                memberships,
                max_ports=max_ports if max_ports is not None else self.max_ports,
            )
        except ValueError as exc:
            return self._invalid("create/modify VLAN", exc, "")

    def delete_vlan(self, vlan_id: int) -> SwitchResult[str]:
        """Delete a VLAN."""
        try:
            return vlan_delete(self._session, vlan_id)
        except ValueError as exc:
            return self._invalid("delete VLAN", exc, "")

    def set_port_pvid(self, port_number: int, vlan_id: int) -> SwitchResult[str]:
        """Set the PVID of a port."""
        try:
            return vlan_set_pvid(self._session, port_number, vlan_id)
        except ValueError as exc:
            return self._invalid("set port PVID", exc, "")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _report(
        self,
        path: str,
        parser: Callable[[str], list[R]],
        what: str,
    ) -> SwitchResult[list[R]]:
        return self._parse(self._session.fetch(path), parser, what)

    def _parse(
        self,
        page: SwitchResult[str],
        parser: Callable[[str], list[R]],
        what: str,
    ) -> SwitchResult[list[R]]:
        if not page:
            logger.warning("Could not get %s: %s", what, page.reason)
            return page.map(parser, [])
        try:
            records = parser(page.value)
        except TPLinkParseError as exc:
            # Usually the login page served in place of the report.
            logger.warning("Could not parse %s: %s", what, exc)
            self._session.invalidate()
            return SwitchResult.fail(FailureKind.PARSE, [], str(exc))
        logger.debug("Parsed %d %s record(s)", len(records), what)
        return SwitchResult.success(records)

    @staticmethod
    def _invalid(what: str, exc: ValueError, value: R) -> SwitchResult[R]:
        logger.warning("Rejected %s: %s", what, exc)
        return SwitchResult.fail(FailureKind.INVALID_ARGUMENT, value, str(exc))
