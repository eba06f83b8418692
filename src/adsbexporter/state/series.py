"""Series keys and projection results.

Projection turns decoded snapshots into these values. Only the series
registry is allowed to publish or retract them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

IdentityKey = tuple[str, ...]
"""Identity of one tracked entity, e.g. ``(hex, flight, category)``."""


@dataclass(frozen=True, slots=True)
class SeriesKey:
    """One uniquely labeled series: family name plus ordered label values."""

    name: str
    labels: tuple[str, ...] = ()


Assignment = tuple[SeriesKey, float]
"""A value to publish for one series."""


@dataclass(slots=True)
class EntityProjection:
    """Projection of one entity snapshot.

    Parameters
    ----------
    assignments : list
        Every ``(SeriesKey, value)`` to publish this poll.
    current : dict
        Identity key -> identity label tuple for every entity in the snapshot.
    series : dict
        Identity key -> the series keys projected for that entity.
    """

    assignments: list[Assignment] = field(default_factory=list)
    current: dict[IdentityKey, tuple[str, ...]] = field(default_factory=dict)
    series: dict[IdentityKey, frozenset[SeriesKey]] = field(default_factory=dict)
