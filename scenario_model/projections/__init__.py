"""Derived per-location views of the simulation."""

from .locations import (
    DEFAULT_LOCATIONS,
    LocationDisplayAttributes,
    NamedLocation,
    project,
    to_feature_collection,
)
from .styling import marker_color, marker_radius, style_features

__all__ = [
    "DEFAULT_LOCATIONS",
    "LocationDisplayAttributes",
    "NamedLocation",
    "marker_color",
    "marker_radius",
    "project",
    "style_features",
    "to_feature_collection",
]
