# scenario_model/projections/styling.py
"""
Marker styling for the location overlay.

Marker size follows the location's employed value and marker colour follows
its growth, both by linear interpolation between fixed stops. Inputs beyond
the first or last stop take the end value.
"""

from copy import deepcopy
from typing import Any, Dict, Sequence, Tuple

import numpy as np

RADIUS_STOPS: Tuple[Tuple[float, float], ...] = (
    (50_000, 4),
    (300_000, 10),
    (1_000_000, 16),
    (5_000_000, 26),
)

COLOR_STOPS: Tuple[Tuple[float, str], ...] = (
    (-10_000, "#ef4444"),  # red
    (0, "#93c5fd"),  # light blue
    (10_000, "#16a34a"),  # green
)


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def marker_radius(value: float, stops: Sequence[Tuple[float, float]] = RADIUS_STOPS) -> float:
    """Marker radius for an employed value."""
    xs = [x for x, _ in stops]
    ys = [y for _, y in stops]
    return float(np.interp(value, xs, ys))


def marker_color(growth: float, stops: Sequence[Tuple[float, str]] = COLOR_STOPS) -> str:
    """Hex colour for a growth value, interpolated per RGB channel."""
    xs = [x for x, _ in stops]
    channels = np.array([_hex_to_rgb(c) for _, c in stops], dtype=float)
    rgb = [int(round(float(np.interp(growth, xs, channels[:, i])))) for i in range(3)]
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def style_features(collection: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a location FeatureCollection with ``radius`` and ``color`` set."""
    styled = deepcopy(collection)
    for feature in styled.get("features", []):
        props = feature.setdefault("properties", {})
        props["radius"] = marker_radius(props.get("value", 0))
        props["color"] = marker_color(props.get("growth", 0))
    return styled
