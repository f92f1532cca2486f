# scenario_model/projections/locations.py
"""
Per-city view of the national projection.

The engine only tracks national totals. For the map overlay the latest
employed count, and its change since the previous month, are apportioned to
a fixed set of cities in proportion to each city's static population weight.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from scenario_model.engines.simulation import SimulationSnapshot, round_half_up

logger = logging.getLogger(__name__)

# (longitude, latitude)
Coordinates = Tuple[float, float]


@dataclass(frozen=True)
class NamedLocation:
    """A city on the map with its apportionment weight."""
    name: str
    coordinates: Coordinates
    weight: float


@dataclass(frozen=True)
class LocationDisplayAttributes:
    """Display values of one location for the latest month."""
    name: str
    coordinates: Coordinates
    value: int
    growth: int


DEFAULT_LOCATIONS: Tuple[NamedLocation, ...] = (
    NamedLocation("Moscow", (37.6176, 55.7558), 12_600_000),
    NamedLocation("Saint Petersburg", (30.3158, 59.9391), 5_600_000),
    NamedLocation("Novosibirsk", (82.9346, 55.0084), 1_620_000),
    NamedLocation("Yekaterinburg", (60.6122, 56.8389), 1_550_000),
    NamedLocation("Kazan", (49.1064, 55.7963), 1_350_000),
    NamedLocation("Nizhny Novgorod", (44.002, 56.3269), 1_250_000),
    NamedLocation("Samara", (50.15, 53.2), 1_160_000),
    NamedLocation("Omsk", (73.3686, 54.9914), 1_120_000),
    NamedLocation("Rostov-on-Don", (39.7015, 47.2357), 1_130_000),
    NamedLocation("Ufa", (55.9678, 54.7388), 1_130_000),
    NamedLocation("Krasnoyarsk", (92.868, 56.0153), 1_100_000),
)


def project(
    snapshots: Sequence[SimulationSnapshot],
    locations: Sequence[NamedLocation] = DEFAULT_LOCATIONS,
) -> List[LocationDisplayAttributes]:
    """
    Apportion the latest employment figures to ``locations``.

    With a single snapshot the previous month is taken to be the same as the
    last, so every growth is zero.

    Args:
        snapshots: Engine output, ordered by month. Must not be empty.
        locations: Locations to project onto.

    Returns:
        One entry per location, in the same order.

    Raises:
        ValueError: If ``snapshots`` is empty, or the location weights sum to
            zero.
    """
    if not snapshots:
        raise ValueError("Cannot project locations from an empty snapshot sequence")
    if not locations:
        return []

    last = snapshots[-1]
    previous = snapshots[-2] if len(snapshots) > 1 else last
    total_weight = sum(location.weight for location in locations)
    if total_weight == 0:
        raise ValueError("Location weights sum to zero")

    employed_delta = last.employed - previous.employed
    logger.debug(
        f"Projecting t={last.t} employed={last.employed} delta={employed_delta} "
        f"onto {len(locations)} locations"
    )
    return [
        LocationDisplayAttributes(
            name=location.name,
            coordinates=location.coordinates,
            value=round_half_up(location.weight / total_weight * last.employed),
            growth=round_half_up(location.weight / total_weight * employed_delta),
        )
        for location in locations
    ]


def to_feature_collection(attributes: Sequence[LocationDisplayAttributes]) -> Dict[str, Any]:
    """Build a GeoJSON FeatureCollection with one Point feature per location."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {
                    "name": item.name,
                    "value": item.value,
                    "growth": item.growth,
                },
                "geometry": {
                    "type": "Point",
                    "coordinates": list(item.coordinates),
                },
            }
            for item in attributes
        ],
    }
