"""Typed model for cable diagnostic results."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CablePairResult:
    """Result for one twisted pair.

    The switch only reports an aggregate per port, so every pair of a port
    carries that port's status and length.
    """

    pair_number: int
    status: str
    length: int


@dataclass(frozen=True)
class CableTestResult:
    """Cable diagnostic outcome for one port.

    Attributes:
        port_number: 1-based port number.
        status: Status label (e.g. ``"Normal"``, ``"Open"``, ``"No Cable"``).
        cable_length: Reported length in metres, never negative.
        pairs: Four :class:`CablePairResult` entries, pair 1 to 4.
        completed: ``True`` once the switch has run the test on the port.
    """

    port_number: int
    status: str
    cable_length: int
    pairs: tuple[CablePairResult, ...] = field(default_factory=tuple)
    completed: bool = True
