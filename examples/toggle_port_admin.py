#!/usr/bin/env python3
"""Example: disable a port and enable it again (dry-run by default).

Usage::

    export TPLINK_HOST=192.168.0.1
    export TEST_PORT_ID=5        # required: 1-based port number to test
    python examples/toggle_port_admin.py

    # Apply (disables port, waits 2 s, re-enables it):
    APPLY=1 python examples/toggle_port_admin.py

Environment variables:
    TPLINK_HOST        Switch IP or hostname (required).
    TPLINK_USERNAME    Login username (default: admin).
    TPLINK_PASSWORD    Login password (default: admin).
    TEST_PORT_ID       1-based port number to toggle (required).
    APPLY              Set to "1" to actually apply changes (default: dry-run).

WARNING: Do NOT set TEST_PORT_ID to the port you manage the switch through.
"""

from __future__ import annotations

import logging
import os
import sys
import time

from napalm_tplink import SwitchManager
from napalm_tplink.vendor.tplink.mappings import STATE_LABELS


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    host = os.environ.get("TPLINK_HOST", "")
    port_id_str = os.environ.get("TEST_PORT_ID", "")
    if not host or not port_id_str:
        print("ERROR: TPLINK_HOST and TEST_PORT_ID are required.", file=sys.stderr)
        sys.exit(1)
    try:
        port_id = int(port_id_str)
    except ValueError:
        print(f"ERROR: TEST_PORT_ID must be an integer, got {port_id_str!r}", file=sys.stderr)
        sys.exit(1)

    base_url = host if "://" in host else f"http://{host}"
    apply_changes = os.environ.get("APPLY", "0") == "1"

    with SwitchManager.connect(
        base_url,
        os.environ.get("TPLINK_USERNAME", "admin"),
        os.environ.get("TPLINK_PASSWORD", "admin"),
    ) as mgr:
        status = mgr.get_port_status()
        if not status:
            print(f"ERROR: cannot read ports ({status.failure}): {status.reason}", file=sys.stderr)
            sys.exit(1)

        current = next((p for p in status.value if p.port_number == port_id), None)
        if current is None:
            print(f"ERROR: Port {port_id} not found on switch.", file=sys.stderr)
            sys.exit(1)

        print(f"Port {port_id}: {STATE_LABELS[current.enabled]}, link {current.actual_speed}")
        if not apply_changes:
            print("Dry-run mode -- set APPLY=1 to disable and re-enable the port.")
            return

        if not mgr.set_port_state(port_id, False):
            print("ERROR: disable failed.", file=sys.stderr)
            sys.exit(1)
        time.sleep(2)
        restored = mgr.set_port_state(port_id, current.enabled)
        print("Restored." if restored else f"ERROR: restore failed: {restored.reason}")


if __name__ == "__main__":
    main()
