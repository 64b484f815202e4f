#!/usr/bin/env python3
"""Example: create a VLAN, make it the PVID of one port, then list VLANs.

Usage (dry run, default):

    TPLINK_HOST=192.168.0.1 python examples/apply_vlan.py

Usage (live apply):

    APPLY=1 TPLINK_HOST=192.168.0.1 python examples/apply_vlan.py

Environment variables:
    TPLINK_HOST        Switch IP or hostname (required).
    TPLINK_USERNAME    Login username (default: admin).
    TPLINK_PASSWORD    Login password (default: admin).
    TPLINK_MAX_PORTS   Port count of the switch (default: 24).
    APPLY              Set to "1" to actually apply changes (default: dry-run).
    DELETE             Set to "1" to delete the VLAN instead.
"""

from __future__ import annotations

import logging
import os
import sys

from napalm_tplink import SwitchManager
from napalm_tplink.model.vlan import VlanMembershipType

VLAN_ID = 222
VLAN_NAME = "test222"
# Port 1 tagged (uplink), port 8 untagged access port.
MEMBERSHIPS = {1: VlanMembershipType.TAGGED, 8: VlanMembershipType.UNTAGGED}
ACCESS_PORT = 8


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    host = os.environ.get("TPLINK_HOST", "")
    if not host:
        print("ERROR: TPLINK_HOST environment variable is required.", file=sys.stderr)
        sys.exit(1)
    base_url = host if "://" in host else f"http://{host}"

    with SwitchManager.connect(
        base_url,
        os.environ.get("TPLINK_USERNAME", "admin"),
        os.environ.get("TPLINK_PASSWORD", "admin"),
        max_ports=int(os.environ.get("TPLINK_MAX_PORTS", "24")),
    ) as mgr:
        if os.environ.get("APPLY", "0") != "1":
            print(f"Dry-run: would set VLAN {VLAN_ID} ({VLAN_NAME}) to {MEMBERSHIPS}")
            print(f"         and PVID {VLAN_ID} on port {ACCESS_PORT}")
        elif os.environ.get("DELETE", "0") == "1":
            result = mgr.delete_vlan(VLAN_ID)
            if not result:
                print(f"ERROR: delete failed: {result.reason}", file=sys.stderr)
                sys.exit(1)
        else:
            for result in (
                mgr.create_or_modify_vlan(VLAN_ID, VLAN_NAME, MEMBERSHIPS),
                mgr.set_port_pvid(ACCESS_PORT, VLAN_ID),
            ):
                if not result:
                    print(f"ERROR: {result.failure}: {result.reason}", file=sys.stderr)
                    sys.exit(1)

        for vlan in mgr.get_vlans().value:
            print(
                f"VLAN {vlan.vlan_id:>4} {vlan.name:<16} "
                f"tagged={list(vlan.tagged_ports)} untagged={list(vlan.untagged_ports)}"
            )


if __name__ == "__main__":
    main()
