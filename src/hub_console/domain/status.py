"""Point-in-time status report returned by the hub.

Purpose
-------
Describe the aggregate status snapshot the console polls: counts per status
category plus one entry per registered spoke with its statistics.

Contents
--------
* :class:`SpokeStatus` - status and stats of a single spoke.
* :class:`StatusSnapshot` - aggregate view with the error count helper.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(slots=True, frozen=True)
class SpokeStatus:
    """Status of one spoke; ``stats`` keeps the spoke's insertion order."""

    name: str
    status: str
    stats: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "stats", MappingProxyType(dict(self.stats)))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "status": self.status, "stats": dict(self.stats)}


@dataclass(slots=True, frozen=True)
class StatusSnapshot:
    """Aggregate status of every spoke attached to the hub.

    Examples
    --------
    >>> snapshot = StatusSnapshot(status_counts={'ready': 2, 'error': 1})
    >>> snapshot.error_count
    1
    >>> StatusSnapshot().error_count
    0
    """

    status_counts: Mapping[str, int] = field(default_factory=dict)
    spokes: tuple[SpokeStatus, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "status_counts", MappingProxyType(dict(self.status_counts)))
        object.__setattr__(self, "spokes", tuple(self.spokes))

    @property
    def error_count(self) -> int:
        """Return the number of spokes currently reporting ``error``."""

        return int(self.status_counts.get("error", 0))

    def to_dict(self) -> dict[str, Any]:
        """Return a plain nested dictionary suitable for pretty printing."""

        return {
            "status_counts": dict(self.status_counts),
            "spokes": [spoke.to_dict() for spoke in self.spokes],
        }


__all__ = ["SpokeStatus", "StatusSnapshot"]
