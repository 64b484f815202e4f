#!/usr/bin/env python3
"""Smoke-test script: connect to a TP-Link Easy Smart switch and print its ports.

Environment variables
---------------------
TPLINK_HOST        Switch base URL or IP (e.g. http://192.168.0.1)
TPLINK_USERNAME    Login username          (required)
TPLINK_PASSWORD    Login password          (required)
TPLINK_VERIFY_TLS  Set to "true" to verify TLS (default: false)
"""

from __future__ import annotations

import json
import logging
import os
import sys

import napalm
from napalm.base.exceptions import ConnectionException


def _require(name: str) -> str:
    print(f"ERROR: required environment variable {name!r} is not set.", file=sys.stderr)
    sys.exit(1)


def main() -> None:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "WARNING"))

    host = os.environ.get("TPLINK_HOST") or _require("TPLINK_HOST")
    username = os.environ.get("TPLINK_USERNAME") or _require("TPLINK_USERNAME")
    password = os.environ.get("TPLINK_PASSWORD") or _require("TPLINK_PASSWORD")
    verify_tls = os.environ.get("TPLINK_VERIFY_TLS", "false").lower() == "true"

    driver_cls = napalm.get_network_driver("tplink")
    driver = driver_cls(
        hostname=host,
        username=username,
        password=password,
        optional_args={"verify_tls": verify_tls},
    )
    try:
        driver.open()
        report = {
            "interfaces": driver.get_interfaces(),
            "counters": driver.get_interfaces_counters(),
            "vlans": driver.get_vlans(),
        }
    except ConnectionException as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        driver.close()

    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
