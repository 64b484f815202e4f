"""Unit tests for VLAN and cable-test query formation.

Covers :mod:`napalm_tplink.client.vlan_ops` and
:mod:`napalm_tplink.client.cable_ops`.  The :mod:`responses` library
intercepts HTTP calls so the exact request URL can be checked.
"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

import pytest
import responses as responses_lib

from napalm_tplink.client.cable_ops import build_cable_test_query, cable_test_start
from napalm_tplink.client.session import SessionState, TPLinkCredentials, TPLinkSession
from napalm_tplink.client.vlan_ops import (
    build_pvid_query,
    build_vlan_query,
    vlan_create_or_modify,
    vlan_delete,
    vlan_set_pvid,
)
from napalm_tplink.model.vlan import VlanMembershipType

_BASE = "http://192.168.0.1"
_OK = "<html><body>ok</body></html>"

U = VlanMembershipType.UNTAGGED
T = VlanMembershipType.TAGGED


def _logged_in_session() -> TPLinkSession:
    session = TPLinkSession(base_url=_BASE, credentials=TPLinkCredentials("admin", "admin"))
    session._state = SessionState.AUTHENTICATED  # skip login
    return session


def _query(url: str) -> str:
    return urlsplit(url).query


# ---------------------------------------------------------------------------
# build_vlan_query
# ---------------------------------------------------------------------------

class TestBuildVlanQuery:
    def test_default_covers_24_ports(self) -> None:
        pairs = parse_qsl(build_vlan_query(10, "lab", {1: U, 2: T}), keep_blank_values=True)
        sel = [(k, v) for k, v in pairs if k.startswith("selType_")]
        assert len(sel) == 24
        assert sel[0] == ("selType_1", "0")
        assert sel[1] == ("selType_2", "1")
        assert all(v == "2" for _, v in sel[2:])

    def test_field_order(self) -> None:
        query = build_vlan_query(10, "lab", {}, max_ports=2)
        assert query == "vid=10&vname=lab&selType_1=2&selType_2=2&qvlan_add=Add%2FModify"

    def test_name_is_escaped(self) -> None:
        query = build_vlan_query(7, "guest wifi/2&3", {}, max_ports=1)
        assert "vname=guest%20wifi%2F2%263&" in query

    def test_ports_beyond_max_ports_ignored(self) -> None:
        query = build_vlan_query(7, "x", {9: T}, max_ports=8)
        assert "selType_9" not in query

    @pytest.mark.parametrize("vid", [0, 4095])
    def test_vlan_id_range(self, vid: int) -> None:
        with pytest.raises(ValueError, match="vlan_id"):
            build_vlan_query(vid, "x", {})

    def test_max_ports_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="max_ports"):
            build_vlan_query(10, "x", {}, max_ports=0)


# ---------------------------------------------------------------------------
# build_pvid_query
# ---------------------------------------------------------------------------

class TestBuildPvidQuery:
    @pytest.mark.parametrize(("port", "pbm"), [(1, 1), (2, 2), (5, 16), (24, 1 << 23), (32, 1 << 31)])
    def test_single_bit_mask(self, port: int, pbm: int) -> None:
        assert build_pvid_query(port, 20) == f"pbm={pbm}&pvid=20"

    @pytest.mark.parametrize("port", [0, 33])
    def test_port_out_of_bitmask_range(self, port: int) -> None:
        with pytest.raises(ValueError, match="port_number"):
            build_pvid_query(port, 20)


# ---------------------------------------------------------------------------
# Dispatch through the session
# ---------------------------------------------------------------------------

class TestVlanDispatch:
    @responses_lib.activate
    def test_create_or_modify_sends_get(self) -> None:
        responses_lib.add(responses_lib.GET, f"{_BASE}/qvlanSet.cgi", body=_OK)
        result = vlan_create_or_modify(_logged_in_session(), 30, "cams", {3: U}, max_ports=4)

        assert result.ok
        assert _query(responses_lib.calls[0].request.url) == (
            "vid=30&vname=cams&selType_1=2&selType_2=2&selType_3=0&selType_4=2"
            "&qvlan_add=Add%2FModify"
        )

    @responses_lib.activate
    def test_delete_sends_get(self) -> None:
        responses_lib.add(responses_lib.GET, f"{_BASE}/qvlanSet.cgi", body=_OK)
        result = vlan_delete(_logged_in_session(), 30)

        assert result.ok
        assert _query(responses_lib.calls[0].request.url) == "selVlans=30&qvlan_del=Delete"

    @responses_lib.activate
    def test_set_pvid_sends_get(self) -> None:
        responses_lib.add(responses_lib.GET, f"{_BASE}/vlanPvidSet.cgi", body=_OK)
        result = vlan_set_pvid(_logged_in_session(), 3, 30)

        assert result.ok
        assert _query(responses_lib.calls[0].request.url) == "pbm=4&pvid=30"

    @responses_lib.activate
    def test_empty_response_is_failure(self) -> None:
        responses_lib.add(responses_lib.GET, f"{_BASE}/qvlanSet.cgi", body="")
        assert not vlan_delete(_logged_in_session(), 30)


# ---------------------------------------------------------------------------
# cable test query
# ---------------------------------------------------------------------------

class TestCableTestQuery:
    def test_one_check_per_port(self) -> None:
        assert build_cable_test_query([1, 3]) == "chk_1=1&chk_3=3&Apply=Apply"

    def test_duplicates_collapsed(self) -> None:
        assert build_cable_test_query([2, 2]) == "chk_2=2&Apply=Apply"

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_cable_test_query([])

    def test_port_zero_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_cable_test_query([0, 1])

    @responses_lib.activate
    def test_dispatch(self) -> None:
        responses_lib.add(responses_lib.GET, f"{_BASE}/cable_diag_get.cgi", body=_OK)
        result = cable_test_start(_logged_in_session(), [4])

        assert result.value == _OK
        assert _query(responses_lib.calls[0].request.url) == "chk_4=4&Apply=Apply"
