#!/usr/bin/env python3
"""
Built-in solar system catalog.

The catalog is a literal data table so the numbers can be reviewed and tested on
their own, and create_solar_system() is a pure factory that turns it into fresh
Body instances.

Schema (one dict per body)
==========================
{
  "id": "earth",                 # stable lookup key
  "name": "Earth",
  "type": "planet",              # BodyType value
  "diameter": 12756,             # km
  "mass": 5.97e24,               # kg
  "distance": 1.0,               # AU from the Sun (moons: parent's distance)
  "orbital_period": 365.25,      # days
  "rotation_period": 1.0,        # days, negative = retrograde
  "eccentricity": 0.017,         # optional, default 0
  "phase": 0.8,                  # optional initial angle in radians, default 0
  "color": [51, 128, 204],
  "parent": "earth",             # moons only
  "distance_from_parent": 0.03,  # moons only, Earth-radius units
  "rings": [242, 230, 179],      # optional ring color
  "moon_count": 1,               # optional
  "fun_fact": "..."              # optional
}
"""
from typing import List, Tuple

from .data_models import Body, BodyType

SOLAR_SYSTEM: Tuple[dict, ...] = (
    {
        "id": "sun", "name": "Sun", "type": "star",
        "diameter": 1392700, "mass": 1.989e30,
        "distance": 0.0, "orbital_period": 0.0, "rotation_period": 25.38,
        "color": [255, 217, 51],
        "fun_fact": "The Sun contains 99.86% of the mass in the Solar System and is hot enough "
                    "to turn a diamond into vapor.",
    },
    {
        "id": "mercury", "name": "Mercury", "type": "planet",
        "diameter": 4879, "mass": 3.3e23,
        "distance": 0.39, "orbital_period": 88, "rotation_period": 58.6,
        "eccentricity": 0.206, "phase": 0.0,
        "color": [153, 153, 153],
        "fun_fact": "Mercury's day is longer than its year: 88 days to orbit the Sun, "
                    "176 days from one sunrise to the next.",
    },
    {
        "id": "venus", "name": "Venus", "type": "planet",
        "diameter": 12104, "mass": 4.87e24,
        "distance": 0.72, "orbital_period": 225, "rotation_period": -243,
        "eccentricity": 0.007, "phase": 0.4,
        "color": [242, 217, 128],
        "fun_fact": "Venus rotates backwards compared to other planets and its surface is hot "
                    "enough to melt lead (462°C).",
    },
    {
        "id": "earth", "name": "Earth", "type": "planet",
        "diameter": 12756, "mass": 5.97e24,
        "distance": 1.0, "orbital_period": 365.25, "rotation_period": 1.0,
        "eccentricity": 0.017, "phase": 0.8,
        "color": [51, 128, 204], "moon_count": 1,
        "fun_fact": "Earth is the only planet known to support life and is the densest planet "
                    "in the Solar System.",
    },
    {
        "id": "moon", "name": "Moon", "type": "moon",
        "diameter": 3475, "mass": 7.34e22,
        "distance": 1.0, "orbital_period": 27.32, "rotation_period": 27.32,
        "eccentricity": 0.0549, "phase": 0.0,
        "color": [217, 217, 217],
        "parent": "earth", "distance_from_parent": 0.03,
        "fun_fact": "The Moon drifts 3.8 cm further from Earth every year and always shows "
                    "Earth the same face.",
    },
    {
        "id": "mars", "name": "Mars", "type": "planet",
        "diameter": 6792, "mass": 6.42e23,
        "distance": 1.52, "orbital_period": 687, "rotation_period": 1.03,
        "eccentricity": 0.093, "phase": 1.2,
        "color": [230, 77, 26], "moon_count": 2,
        "fun_fact": "Mars has the largest dust storms in the Solar System, sometimes covering "
                    "the whole planet for months.",
    },
    {
        "id": "jupiter", "name": "Jupiter", "type": "planet",
        "diameter": 142984, "mass": 1.898e27,
        "distance": 5.2, "orbital_period": 4333, "rotation_period": 0.41,
        "eccentricity": 0.048, "phase": 1.6,
        "color": [217, 179, 140], "moon_count": 79,
        "fun_fact": "Jupiter's Great Red Spot is a storm larger than Earth that has lasted "
                    "for at least 400 years.",
    },
    {
        "id": "saturn", "name": "Saturn", "type": "planet",
        "diameter": 120536, "mass": 5.68e26,
        "distance": 9.5, "orbital_period": 10759, "rotation_period": 0.45,
        "eccentricity": 0.054, "phase": 2.0,
        "color": [242, 217, 140], "rings": [242, 230, 179], "moon_count": 82,
        "fun_fact": "Saturn's rings are mostly ice and only about 10 meters thick.",
    },
    {
        "id": "uranus", "name": "Uranus", "type": "planet",
        "diameter": 51118, "mass": 8.68e25,
        "distance": 19.2, "orbital_period": 30687, "rotation_period": -0.72,
        "eccentricity": 0.047, "phase": 2.4,
        "color": [153, 217, 230], "rings": [153, 217, 230], "moon_count": 27,
        "fun_fact": "Uranus rolls around the Sun on its side with an axial tilt of 98 degrees.",
    },
    {
        "id": "neptune", "name": "Neptune", "type": "planet",
        "diameter": 49528, "mass": 1.02e26,
        "distance": 30.1, "orbital_period": 60190, "rotation_period": 0.67,
        "eccentricity": 0.009, "phase": 2.8,
        "color": [26, 77, 230], "moon_count": 14,
        "fun_fact": "Neptune has the fastest winds in the Solar System, up to 2,100 km/h.",
    },
    {
        "id": "pluto", "name": "Pluto", "type": "dwarf_planet",
        "diameter": 2376, "mass": 1.3e22,
        "distance": 39.48, "orbital_period": 90560, "rotation_period": -6.39,
        "eccentricity": 0.2488, "phase": 4.0,
        "color": [179, 153, 128], "moon_count": 5,
        "fun_fact": "Pluto was reclassified as a dwarf planet in 2006 and has a heart-shaped "
                    "glacier on its surface.",
    },
)


def _coerce_color(c) -> Tuple[int, int, int]:
    r, g, b = int(c[0]), int(c[1]), int(c[2])
    return (max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b)))


def body_from_record(record: dict) -> Body:
    """Build one Body from a catalog record (see module docstring for the schema)."""
    rings = record.get("rings")
    return Body(
        id=record["id"],
        name=record["name"],
        body_type=BodyType(record["type"]),
        diameter=float(record["diameter"]),
        mass=float(record["mass"]),
        distance=float(record["distance"]),
        orbital_period=float(record["orbital_period"]),
        rotation_period=float(record["rotation_period"]),
        eccentricity=float(record.get("eccentricity", 0.0)),
        initial_phase_angle=float(record.get("phase", 0.0)),
        color=_coerce_color(record.get("color", [200, 200, 255])),
        parent_id=record.get("parent"),
        distance_from_parent=record.get("distance_from_parent"),
        has_rings=rings is not None,
        ring_color=_coerce_color(rings) if rings is not None else (255, 255, 255),
        fun_fact=record.get("fun_fact", ""),
        moon_count=int(record.get("moon_count", 0)),
    )


def create_solar_system() -> List[Body]:
    """Fresh Body instances for the built-in catalog, in catalog order."""
    return [body_from_record(record) for record in SOLAR_SYSTEM]
