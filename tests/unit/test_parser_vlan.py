"""Unit tests for napalm_tplink.parser.vlan."""

from __future__ import annotations

import itertools

import pytest

from napalm_tplink.client.errors import TPLinkParseError
from napalm_tplink.model.vlan import VlanInfo
from napalm_tplink.parser.vlan import parse_vlans

# ---------------------------------------------------------------------------
# Helpers: synthetic Vlan8021QRpm.htm builder
# ---------------------------------------------------------------------------

_TEMPLATE = """<!DOCTYPE html>
<html><head>
<script type="text/javascript">
var qvlan_ds = {{
state:1,
count:{count},
vids:[{vids}],
names:[{names}],
tagMbrs:[{tag}],
untagMbrs:[{untag}]
}};
</script>
</head><body></body></html>
"""


def _make_html(
    vids: list[int],
    names: list[str],
    tag: list[int],
    untag: list[int],
) -> str:
    return _TEMPLATE.format(
        count=len(vids),
        vids=",".join(str(v) for v in vids),
        names=",".join(f"'{n}'" for n in names),
        tag=",".join(hex(m) for m in tag),
        untag=",".join(hex(m) for m in untag),
    )


# ---------------------------------------------------------------------------
# parse_vlans
# ---------------------------------------------------------------------------

def test_two_vlans_tagged_and_untagged() -> None:
    html = "<script>vids:[10,20], names:['A','B'], tagMbrs:[3,0], untagMbrs:[0,12]</script>"
    v10, v20 = parse_vlans(html)
    assert v10 == VlanInfo(
        vlan_id=10,
        name="A",
        tagged_ports=(1, 2),
        untagged_ports=(),
        member_ports=(1, 2),
    )
    assert v20 == VlanInfo(
        vlan_id=20,
        name="B",
        tagged_ports=(),
        untagged_ports=(3, 4),
        member_ports=(3, 4),
    )


def test_hex_masks_and_page_order() -> None:
    html = _make_html(
        vids=[1, 100, 42],
        names=["Default", "lab net", "iot"],
        tag=[0x0, 0x80, 0x80],
        untag=[0xFF, 0x0, 0x3],
    )
    vlans = parse_vlans(html)
    assert [v.vlan_id for v in vlans] == [1, 100, 42]
    assert vlans[0].untagged_ports == (1, 2, 3, 4, 5, 6, 7, 8)
    assert vlans[1].name == "lab net"
    assert vlans[1].tagged_ports == (8,)
    assert vlans[2].member_ports == (1, 2, 8)


def test_missing_names_and_masks_default() -> None:
    html = "<script>vids:[1,2,3], names:['one'], tagMbrs:[1], untagMbrs:[]</script>"
    vlans = parse_vlans(html)
    assert [v.name for v in vlans] == ["one", "", ""]
    assert vlans[0].tagged_ports == (1,)
    assert vlans[1].member_ports == ()
    assert vlans[2].untagged_ports == ()


def test_empty_vids_array_gives_no_vlans() -> None:
    assert parse_vlans("<script>vids:[], names:[]</script>") == []


def test_missing_vids_raises() -> None:
    with pytest.raises(TPLinkParseError):
        parse_vlans("<html><body>Session timeout</body></html>")


_MASKS = [0x0, 0x1, 0x6, 0xF0, 0x81, 0xFFFFFF]


@pytest.mark.parametrize(("tag", "untag"), list(itertools.product(_MASKS, repeat=2)))
def test_member_ports_is_sorted_union(tag: int, untag: int) -> None:
    html = f"<script>vids:[5], names:['x'], tagMbrs:[{tag}], untagMbrs:[{untag}]</script>"
    (vlan,) = parse_vlans(html)
    assert vlan.member_ports == tuple(sorted(set(vlan.tagged_ports) | set(vlan.untagged_ports)))
    assert list(vlan.member_ports) == sorted(set(vlan.member_ports))
