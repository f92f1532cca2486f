import pytest

from scenario_model.projections.styling import marker_color, marker_radius, style_features


@pytest.mark.parametrize(
    "value, radius",
    [
        (50_000, 4),
        (300_000, 10),
        (1_000_000, 16),
        (5_000_000, 26),
        (175_000, 7),
        (3_000_000, 21),
        (0, 4),
        (50_000_000, 26),
    ],
)
def test_marker_radius(value, radius):
    assert marker_radius(value) == pytest.approx(radius)


@pytest.mark.parametrize(
    "growth, color",
    [
        (-10_000, "#ef4444"),
        (0, "#93c5fd"),
        (10_000, "#16a34a"),
        (-250_000, "#ef4444"),
        (250_000, "#16a34a"),
    ],
)
def test_marker_color_at_and_beyond_stops(growth, color):
    assert marker_color(growth) == color


def test_marker_color_between_stops_is_a_blend():
    color = marker_color(5_000)
    red, green, blue = (int(color[i:i + 2], 16) for i in (1, 3, 5))
    # between light blue (147, 197, 253) and green (22, 163, 74)
    assert 22 < red < 147
    assert 163 < green < 197
    assert 74 < blue < 253


def test_style_features_adds_properties_without_mutating():
    collection = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "A", "value": 300_000, "growth": 0},
                "geometry": {"type": "Point", "coordinates": [0.0, 0.0]},
            }
        ],
    }
    styled = style_features(collection)
    assert styled["features"][0]["properties"]["radius"] == pytest.approx(10)
    assert styled["features"][0]["properties"]["color"] == "#93c5fd"
    assert "radius" not in collection["features"][0]["properties"]
