#!/usr/bin/env python3
"""
Orbit formulas for Tiny Solar System

Responsibilities
- Closed-form two-body relations: Kepler's third law, circular orbital velocity,
  escape velocity, Newtonian gravitational force and the Hill-sphere radius.
- Simplified "what if" helpers: orbit re-estimation after a distance change,
  moon stability against solar tides and a greenhouse-adjusted temperature.

Units and conventions
- Orbital distances are in astronomical units [AU] unless the argument name
  says meters.
- Periods are returned in days, velocities in meters per second [m/s],
  forces in newtons [N], temperatures in kelvin [K].
- The gravitational constant G is expressed in SI: m^3 kg^-1 s^-2.

Numerical notes
- These are not integrators. Every function is a closed-form expression over
  its arguments; nothing here keeps state between calls.
- Invalid inputs (non-positive, NaN or infinite distance, radius or mass) return 0.0 rather
  than NaN or Infinity. Callers that need to tell "invalid" apart from a real
  result should guard with is_positive before calling.
- recalculate_orbit and planet_temperature contain tuned heuristics for the
  visualization. They are approximations, not physically derived results.
"""

import math
from typing import NamedTuple

from .constants import (
    AU,
    DAY_SECONDS,
    DEFAULT_ALBEDO,
    EARTH_BAND,
    EARTH_GREENHOUSE_DELTA,
    EQUILIBRIUM_TEMP_1AU,
    G,
    INWARD_ECCENTRICITY_FACTOR,
    MARS_BAND,
    MARS_GREENHOUSE_DELTA,
    MAX_ECCENTRICITY,
    MIN_ECCENTRICITY,
    MOON_DISTANCE_UNIT_AU,
    MOON_STABILITY_DIVISOR,
    OUTWARD_ECCENTRICITY_FACTOR,
    SOLAR_MASS,
    VENUS_BAND,
    VENUS_SURFACE_TEMP,
)
from .vector_utils import clamp


class OrbitUpdate(NamedTuple):
    """Result of re-estimating an orbit after a distance change."""
    period: float  # days
    eccentricity: float


def is_positive(*values: float) -> bool:
    """True when every value is a finite number greater than zero."""
    return all(math.isfinite(v) and v > 0 for v in values)


def orbital_period(distance_au: float, central_mass: float = SOLAR_MASS) -> float:
    """
    Orbital period from Kepler's third law.

        T = 2 * pi * sqrt(a^3 / (G * M))

    Args:
        distance_au: Semi-major axis in AU
        central_mass: Mass of the central body in kg

    Returns:
        Period in days, or 0.0 for a non-positive distance or mass
    """
    if not is_positive(distance_au, central_mass):
        return 0.0

    semi_major_axis = distance_au * AU
    period_seconds = 2.0 * math.pi * math.sqrt(semi_major_axis ** 3 / (G * central_mass))
    return period_seconds / DAY_SECONDS


def orbital_velocity(distance_au: float, central_mass: float = SOLAR_MASS) -> float:
    """
    Circular orbital velocity at a given distance.

    For a circular orbit gravity supplies exactly the centripetal force:
    G * M / r = v^2 / r, therefore v = sqrt(G * M / r).

    Args:
        distance_au: Orbital radius in AU
        central_mass: Mass of the central body in kg

    Returns:
        Velocity in m/s
    """
    if not is_positive(distance_au, central_mass):
        return 0.0

    return math.sqrt(G * central_mass / (distance_au * AU))


def escape_velocity(distance_au: float, central_mass: float = SOLAR_MASS) -> float:
    """
    Escape velocity from the central body's field at a given distance.

        v_escape = sqrt(2 * G * M / r)

    Args:
        distance_au: Distance from the central body in AU
        central_mass: Mass of the central body in kg

    Returns:
        Escape velocity in m/s
    """
    if not is_positive(distance_au, central_mass):
        return 0.0

    return math.sqrt(2.0 * G * central_mass / (distance_au * AU))


def surface_escape_velocity(mass: float, radius_m: float) -> float:
    """
    Escape velocity from a body's own surface.

    Same relation as escape_velocity but with explicit meters, for a planet's
    radius rather than a heliocentric distance.

    Args:
        mass: Mass of the body in kg
        radius_m: Radius of the body in meters

    Returns:
        Escape velocity in m/s
    """
    if not is_positive(radius_m, mass):
        return 0.0

    return math.sqrt(2.0 * G * mass / radius_m)


def gravitational_force(m1: float, m2: float, distance_m: float) -> float:
    """
    Newtonian attraction between two point masses: F = G * m1 * m2 / r^2.

    Returns 0.0 for a non-positive separation.
    """
    if not is_positive(distance_m) or not (math.isfinite(m1) and math.isfinite(m2)):
        return 0.0

    return G * m1 * m2 / (distance_m * distance_m)


def hill_sphere_radius(distance_au: float, body_mass: float,
                       central_mass: float = SOLAR_MASS) -> float:
    """
    Radius of the region where a body's gravity dominates over the central mass.

        r_H = a * (m / (3 * M))^(1/3)

    Args:
        distance_au: Semi-major axis of the body's orbit in AU
        body_mass: Mass of the orbiting body in kg
        central_mass: Mass of the central body in kg

    Returns:
        Hill-sphere radius in AU
    """
    if not is_positive(distance_au, body_mass, central_mass):
        return 0.0

    return distance_au * (body_mass / (3.0 * central_mass)) ** (1.0 / 3.0)


def clamp_eccentricity(eccentricity: float) -> float:
    """Clamp an eccentricity into the range the visualization supports."""
    return clamp(eccentricity, MIN_ECCENTRICITY, MAX_ECCENTRICITY)


def recalculate_orbit(original_distance: float, new_distance: float,
                      original_period: float, original_eccentricity: float) -> OrbitUpdate:
    """
    Re-estimate period and eccentricity after moving a body to a new distance.

    The period follows Kepler's third law at the new distance. The
    eccentricity is a heuristic: moving inward scales the *original*
    eccentricity by 1.1, moving outward (or staying put) scales it by 0.9,
    and the result is clamped to [0.001, 0.9]. This imitates a perturbed
    orbit for the animation; it is not derived from orbital dynamics.

    Args:
        original_distance: Distance captured when the body was created (AU)
        new_distance: Target distance (AU), must be positive
        original_period: Period captured when the body was created (days);
            kept for symmetry with the baseline snapshot, not used
        original_eccentricity: Eccentricity captured when the body was created

    Returns:
        OrbitUpdate(period, eccentricity)

    Raises:
        ValueError: If new_distance is not positive and finite.
    """
    if not is_positive(new_distance):
        raise ValueError(f"new_distance must be a positive finite number, got {new_distance}")

    period = orbital_period(new_distance)
    if new_distance < original_distance:
        factor = INWARD_ECCENTRICITY_FACTOR
    else:
        factor = OUTWARD_ECCENTRICITY_FACTOR
    return OrbitUpdate(period, clamp_eccentricity(original_eccentricity * factor))


def is_moon_stable(planet_distance_au: float, moon_distance_from_parent: float,
                   planet_mass: float) -> bool:
    """
    Whether a moon stays bound to its planet against solar tides.

    The moon's distance is given in Earth-radius units and converted to AU
    with MOON_DISTANCE_UNIT_AU. The moon counts as stable while it sits
    inside r_H / 2.5 of the planet's Hill sphere.

    Args:
        planet_distance_au: Planet's distance from the Sun in AU
        moon_distance_from_parent: Moon's distance from the planet (Earth-radius units)
        planet_mass: Planet mass in kg

    Returns:
        True if the moon is stable; False otherwise, including for a
        non-positive planet distance or mass
    """
    hill_radius = hill_sphere_radius(planet_distance_au, planet_mass)
    if not is_positive(hill_radius):
        return False

    moon_distance_au = moon_distance_from_parent * MOON_DISTANCE_UNIT_AU
    return moon_distance_au < hill_radius / MOON_STABILITY_DIVISOR


def equilibrium_temperature(distance_au: float, albedo: float = DEFAULT_ALBEDO) -> float:
    """
    Black-body equilibrium temperature, no atmosphere.

        T = 278 K * (1 - albedo)^(1/4) / sqrt(d)

    Returns 0.0 for a non-positive distance.
    """
    if not is_positive(distance_au):
        return 0.0

    return EQUILIBRIUM_TEMP_1AU * (1.0 - albedo) ** 0.25 / math.sqrt(distance_au)


def planet_temperature(distance_au: float, albedo: float = DEFAULT_ALBEDO) -> float:
    """
    Surface temperature with empirical greenhouse corrections.

    Starts from equilibrium_temperature and applies fixed overrides for three
    distance bands:
    - 0.71-0.73 AU (Venus): replaced by 737 K
    - 0.99-1.01 AU (Earth): +33 K
    - 1.51-1.53 AU (Mars): +5 K

    Bands are inclusive and only match near the real planets' distances, so
    a body moved out of its band loses the correction.

    Args:
        distance_au: Distance from the Sun in AU
        albedo: Bond albedo (0..1)

    Returns:
        Temperature in K (0.0 for a non-positive distance)
    """
    if not is_positive(distance_au):
        return 0.0

    temperature = equilibrium_temperature(distance_au, albedo)
    if VENUS_BAND[0] <= distance_au <= VENUS_BAND[1]:
        temperature = VENUS_SURFACE_TEMP
    elif EARTH_BAND[0] <= distance_au <= EARTH_BAND[1]:
        temperature += EARTH_GREENHOUSE_DELTA
    elif MARS_BAND[0] <= distance_au <= MARS_BAND[1]:
        temperature += MARS_GREENHOUSE_DELTA
    return temperature
