"""NAPALM driver and web-UI client for TP-Link Easy Smart switches."""

from napalm_tplink.driver import TPLinkDriver
from napalm_tplink.manager import SwitchManager

__all__ = ("SwitchManager", "TPLinkDriver")
