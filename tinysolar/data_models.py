#!/usr/bin/env python3
"""
Data models for Tiny Solar System.

This module defines the Body dataclass shared between the model, rendering and UI,
plus the visual scaling helpers that turn orbital elements into screen geometry.

Units and usage
- distance is the semi-major axis in AU (for moons: the parent's heliocentric distance;
  the moon's own orbit uses distance_from_parent, in Earth-radius units).
- periods are in days; a negative rotation_period means retrograde rotation.
- diameter is in km, mass in kg, temperature in K.
- Positions are not integrated. They are closed-form functions of the simulated time,
  stretched by non-linear distance bands so that inner and outer planets both stay legible.
- Access to Body instances is coordinated by SolarSystemModel using a lock.
"""
import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .constants import (
    FIT_ZOOM_TARGET,
    HABITABLE_MAX_C,
    HABITABLE_MIN_C,
    INNER_BAND_LIMIT,
    INNER_ECCENTRICITY_DAMPING,
    KELVIN_OFFSET,
    MIDDLE_BAND_LIMIT,
    MIDDLE_ECCENTRICITY_DAMPING,
    MOON_ORBIT_SCALE,
    OUTER_ECCENTRICITY_DAMPING,
)
from .physics import (
    OrbitUpdate,
    orbital_velocity,
    planet_temperature,
    recalculate_orbit,
    surface_escape_velocity,
)
from .vector_utils import polar, vec_add, vec_scale

Point = Tuple[float, float]


class BodyType(Enum):
    STAR = "star"
    PLANET = "planet"
    DWARF_PLANET = "dwarf_planet"
    MOON = "moon"
    ASTEROID = "asteroid"
    COMET = "comet"


def visual_distance(distance_au: float, body_type: BodyType = BodyType.PLANET) -> float:
    """
    Map a real distance (AU) to the stretched radius used on screen.

    Planets and dwarf planets use three bands:
    - inner (<= 1.8 AU): 1 + 8d, spreads Mercury..Mars apart
    - middle (<= 10 AU): 15 + 3(d - 1.8)
    - outer: 40 + 10 ln(d / 10), compresses Uranus..Pluto
    The star sits at 0. Other bodies keep their real distance.
    """
    if body_type is BodyType.STAR:
        return 0.0
    if body_type not in (BodyType.PLANET, BodyType.DWARF_PLANET):
        return distance_au
    if distance_au <= INNER_BAND_LIMIT:
        return 1.0 + distance_au * 8.0
    if distance_au <= MIDDLE_BAND_LIMIT:
        return 15.0 + (distance_au - INNER_BAND_LIMIT) * 3.0
    return 40.0 + math.log(distance_au / MIDDLE_BAND_LIMIT) * 10.0


def eccentricity_damping(distance_au: float) -> float:
    """Factor applied to eccentricity before drawing; flatter orbits read better."""
    if distance_au <= INNER_BAND_LIMIT:
        return INNER_ECCENTRICITY_DAMPING
    if distance_au <= MIDDLE_BAND_LIMIT:
        return MIDDLE_ECCENTRICITY_DAMPING
    return OUTER_ECCENTRICITY_DAMPING


def fit_zoom_for_distance(distance_au: float) -> float:
    """Zoom level at which a planet at distance_au lands near the viewport edge."""
    return FIT_ZOOM_TARGET / visual_distance(distance_au, BodyType.PLANET)


def _ellipse_radius(semi_major_axis: float, eccentricity: float, angle: float) -> float:
    # r = a(1 - e^2) / (1 + e cos(theta)), focus at the origin
    return semi_major_axis * (1.0 - eccentricity * eccentricity) / (1.0 + eccentricity * math.cos(angle))


@dataclass(frozen=True)
class BodySnapshot:
    """
    Read-only view of a body for one rendered frame.

    position is None when the body is removed or its parent cannot be resolved.
    """
    id: str
    name: str
    body_type: BodyType
    diameter: float
    mass: float
    distance: float
    orbital_period: float
    eccentricity: float
    parent_id: Optional[str]
    is_removed: bool
    removal_reason: Optional[str]
    temperature: Optional[float]
    habitable: bool
    position: Optional[Point]
    display_size: float
    color: Tuple[int, int, int]
    has_rings: bool


@dataclass
class Body:
    """
    Represents a celestial body in the simulation.

    Fields:
    - name: Display name
    - body_type: BodyType classification
    - diameter: Diameter in km
    - mass: Mass in kilograms
    - distance: Current semi-major axis in AU (0 for the star)
    - orbital_period: Current orbital period in days (0 for the star)
    - rotation_period: Rotation period in days, negative for retrograde
    - eccentricity: Current orbital eccentricity (0 = circle)
    - initial_phase_angle: Angle at simulated time 0, radians
    - color: RGB tuple used for rendering
    - id: Stable identifier used for lookups
    - parent_id: Id of the body a moon orbits; a plain key, not a reference
    - distance_from_parent: Moon orbit radius in Earth-radius units
    - has_rings / ring_color: Ring decoration for rendering
    - fun_fact / moon_count: Informational text for the info panel
    - is_removed / removal_reason: "What if" removal state
    - temperature: Kelvin; always None for the star

    original_distance, original_orbital_period and original_eccentricity are
    captured at construction and cannot be reassigned.
    """
    name: str
    body_type: BodyType
    diameter: float
    mass: float
    distance: float
    orbital_period: float
    rotation_period: float
    eccentricity: float = 0.0
    initial_phase_angle: float = 0.0
    color: Tuple[int, int, int] = (200, 200, 255)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    parent_id: Optional[str] = None
    distance_from_parent: Optional[float] = None
    has_rings: bool = False
    ring_color: Tuple[int, int, int] = (255, 255, 255)
    fun_fact: str = ""
    moon_count: int = 0
    is_removed: bool = False
    removal_reason: Optional[str] = None
    temperature: Optional[float] = None
    _original_distance: float = field(init=False, repr=False)
    _original_orbital_period: float = field(init=False, repr=False)
    _original_eccentricity: float = field(init=False, repr=False)

    def __post_init__(self):
        if self.body_type is BodyType.STAR and self.parent_id is not None:
            raise ValueError(f"Star '{self.name}' cannot have a parent body")
        self._original_distance = self.distance
        self._original_orbital_period = self.orbital_period
        self._original_eccentricity = self.eccentricity
        self.update_temperature()

    @property
    def original_distance(self) -> float:
        return self._original_distance

    @property
    def original_orbital_period(self) -> float:
        return self._original_orbital_period

    @property
    def original_eccentricity(self) -> float:
        return self._original_eccentricity

    @property
    def is_star(self) -> bool:
        return self.body_type is BodyType.STAR

    @property
    def is_moon(self) -> bool:
        return self.body_type is BodyType.MOON

    @property
    def is_modified(self) -> bool:
        """True when the distance differs from the value captured at construction."""
        return self.distance != self._original_distance

    # -----------------------
    # Orbital element updates
    # -----------------------

    def update_temperature(self) -> None:
        """Recompute temperature from the current distance (stars have none)."""
        if self.is_star:
            self.temperature = None
        else:
            self.temperature = planet_temperature(self.distance)

    def move_to(self, new_distance: float) -> OrbitUpdate:
        """
        Move the body to a new distance and re-estimate its orbit.

        Period and eccentricity are recomputed against the baseline snapshot,
        never against the current values, so repeated moves do not compound.
        """
        update = recalculate_orbit(
            self._original_distance,
            new_distance,
            self._original_orbital_period,
            self._original_eccentricity,
        )
        self.distance = new_distance
        self.orbital_period = update.period
        self.eccentricity = update.eccentricity
        self.update_temperature()
        return update

    def restore_orbit(self) -> None:
        """Restore distance, period and eccentricity from the baseline snapshot."""
        self.distance = self._original_distance
        self.orbital_period = self._original_orbital_period
        self.eccentricity = self._original_eccentricity
        self.update_temperature()

    # -----------------------
    # Geometry
    # -----------------------

    def orbit_angle(self, time: float) -> float:
        """Angle along the orbit at simulated time (days)."""
        if self.orbital_period == 0:
            return self.initial_phase_angle
        return 2.0 * math.pi * time / self.orbital_period + self.initial_phase_angle

    def position(self, time: float, scale: float,
                 parent_position: Optional[Point] = None) -> Optional[Point]:
        """
        Screen-space position (relative to the star) at simulated time.

        Args:
            time: Simulated days since the start
            scale: Zoom level, pixels per visual distance unit
            parent_position: Resolved position of the parent, required for moons

        Returns:
            (x, y), or None when the body is removed or is a moon whose parent
            position is unknown
        """
        if self.is_removed:
            return None
        if self.is_star:
            return (0.0, 0.0)

        angle = self.orbit_angle(time)

        if self.is_moon:
            if parent_position is None or self.distance_from_parent is None:
                return None
            offset = polar(self.distance_from_parent * scale * MOON_ORBIT_SCALE, angle)
            return vec_add(parent_position, offset)

        semi_major_axis = visual_distance(self.distance, self.body_type)
        eccentricity = self.eccentricity * eccentricity_damping(self.distance)
        radius = _ellipse_radius(semi_major_axis, eccentricity, angle)
        return vec_scale(polar(radius, angle), scale)

    def display_size(self, zoom_level: float) -> float:
        """
        Radius in pixels for drawing.

        A legibility curve rather than a physical scale: log of the diameter
        times a per-class factor, grown with sqrt(zoom), with a floor so small
        bodies never vanish.
        """
        zoom_factor = math.sqrt(max(zoom_level, 0.0))
        log_diameter = math.log(self.diameter) if self.diameter > 1 else 0.0

        if self.body_type is BodyType.STAR:
            size = log_diameter * 2.5 * zoom_factor
        elif self.body_type is BodyType.PLANET:
            if self.diameter > 100000:  # gas giants
                size = log_diameter * 0.8 * zoom_factor
            elif self.diameter > 40000:  # ice giants
                size = log_diameter * 0.7 * zoom_factor
            elif self.diameter > 10000:  # Earth, Venus
                size = log_diameter * 0.6 * zoom_factor
            else:
                size = log_diameter * 0.5 * zoom_factor
        elif self.body_type is BodyType.DWARF_PLANET:
            size = log_diameter * 0.4 * zoom_factor * 1.2
        elif self.body_type is BodyType.MOON:
            if zoom_level > 5:
                zoom_factor *= 1.5
            size = log_diameter * 0.4 * zoom_factor * 1.2
        else:
            size = log_diameter * 0.4 * zoom_factor

        min_size = 2.0 + (math.log(zoom_level / 10.0) if zoom_level > 10 else 0.0)
        return max(size, min_size)

    # -----------------------
    # Derived information
    # -----------------------

    def temperature_celsius(self) -> Optional[float]:
        if self.temperature is None:
            return None
        return self.temperature - KELVIN_OFFSET

    def formatted_temperature(self) -> str:
        celsius = self.temperature_celsius()
        if celsius is None:
            return "Unknown"
        return f"{celsius:.1f}°C ({self.temperature:.1f} K)"

    def is_in_habitable_zone(self) -> bool:
        """Planets and dwarf planets between -50 °C and 50 °C (exclusive)."""
        if self.body_type not in (BodyType.PLANET, BodyType.DWARF_PLANET):
            return False
        celsius = self.temperature_celsius()
        if celsius is None:
            return False
        return HABITABLE_MIN_C < celsius < HABITABLE_MAX_C

    def surface_escape_velocity(self) -> float:
        """Escape velocity from the surface, m/s."""
        return surface_escape_velocity(self.mass, self.diameter / 2.0 * 1000.0)

    def orbital_velocity(self) -> float:
        """Circular velocity around the Sun at the current distance, m/s (0 for the star)."""
        if self.is_star:
            return 0.0
        return orbital_velocity(self.distance)

    def snapshot(self, position: Optional[Point], zoom_level: float) -> BodySnapshot:
        return BodySnapshot(
            id=self.id,
            name=self.name,
            body_type=self.body_type,
            diameter=self.diameter,
            mass=self.mass,
            distance=self.distance,
            orbital_period=self.orbital_period,
            eccentricity=self.eccentricity,
            parent_id=self.parent_id,
            is_removed=self.is_removed,
            removal_reason=self.removal_reason,
            temperature=self.temperature,
            habitable=self.is_in_habitable_zone(),
            position=position,
            display_size=self.display_size(zoom_level),
            color=self.color,
            has_rings=self.has_rings,
        )


def orbit_path(body: Body, scale: float, samples: int = 120,
               parent_position: Optional[Point] = None) -> List[Point]:
    """
    Points along the drawn orbit of a body, using the same geometry as Body.position.

    Returns an empty list for the star, removed bodies and moons without a
    resolved parent.
    """
    if body.is_star or body.is_removed or samples < 3:
        return []

    points: List[Point] = []
    if body.is_moon:
        if parent_position is None or body.distance_from_parent is None:
            return []
        radius = body.distance_from_parent * scale * MOON_ORBIT_SCALE
        for i in range(samples):
            angle = 2.0 * math.pi * i / samples
            points.append(vec_add(parent_position, polar(radius, angle)))
        return points

    semi_major_axis = visual_distance(body.distance, body.body_type)
    eccentricity = body.eccentricity * eccentricity_damping(body.distance)
    for i in range(samples):
        angle = 2.0 * math.pi * i / samples
        radius = _ellipse_radius(semi_major_axis, eccentricity, angle)
        points.append(vec_scale(polar(radius, angle), scale))
    return points
