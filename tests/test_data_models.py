"""Tests for Body, visual scaling helpers and orbit paths."""

import math
from dataclasses import FrozenInstanceError

import pytest

from tinysolar.catalog import create_solar_system
from tinysolar.constants import EARTH_MASS, SOLAR_MASS
from tinysolar.data_models import (
    Body,
    BodyType,
    eccentricity_damping,
    fit_zoom_for_distance,
    orbit_path,
    visual_distance,
)
from tinysolar.physics import orbital_period, planet_temperature


def _planet(**overrides):
    kwargs = dict(
        name="Terra", body_type=BodyType.PLANET, diameter=12756.0, mass=EARTH_MASS,
        distance=1.0, orbital_period=365.25, rotation_period=1.0, id="terra",
    )
    kwargs.update(overrides)
    return Body(**kwargs)


def _moon(**overrides):
    kwargs = dict(
        name="Luna", body_type=BodyType.MOON, diameter=3475.0, mass=7.34e22,
        distance=1.0, orbital_period=27.32, rotation_period=27.32, id="luna",
        parent_id="terra", distance_from_parent=0.03,
    )
    kwargs.update(overrides)
    return Body(**kwargs)


def _sun():
    return Body(name="Sol", body_type=BodyType.STAR, diameter=1392700.0, mass=SOLAR_MASS,
                distance=0.0, orbital_period=0.0, rotation_period=25.38, id="sol")


def _by_id():
    return {b.id: b for b in create_solar_system()}


class TestVisualDistance:
    """Three-band stretch for planets and dwarf planets."""

    def test_inner_band(self):
        assert visual_distance(1.0) == pytest.approx(9.0)
        assert visual_distance(1.8) == pytest.approx(15.4)

    def test_middle_band(self):
        assert visual_distance(5.2) == pytest.approx(25.2)
        assert visual_distance(10.0) == pytest.approx(39.0)

    def test_outer_band(self):
        assert visual_distance(30.1) == pytest.approx(40.0 + 10.0 * math.log(3.01))

    def test_dwarf_planet_uses_bands(self):
        assert visual_distance(39.48, BodyType.DWARF_PLANET) == pytest.approx(visual_distance(39.48))

    def test_star_and_other_types(self):
        assert visual_distance(3.0, BodyType.STAR) == 0.0
        assert visual_distance(3.0, BodyType.ASTEROID) == 3.0

    def test_monotonic_within_bands(self):
        assert visual_distance(0.39) < visual_distance(0.72) < visual_distance(1.52)
        assert visual_distance(19.2) < visual_distance(30.1) < visual_distance(39.48)


class TestScalingHelpers:

    def test_eccentricity_damping_by_band(self):
        assert eccentricity_damping(1.0) == 0.2
        assert eccentricity_damping(5.2) == 0.3
        assert eccentricity_damping(30.1) == 0.4

    def test_fit_zoom(self):
        assert fit_zoom_for_distance(1.0) == pytest.approx(40.0 / 9.0)
        assert fit_zoom_for_distance(39.48) < fit_zoom_for_distance(5.2)


class TestBodyConstruction:

    def test_originals_captured(self):
        body = _planet(eccentricity=0.017)
        assert body.original_distance == 1.0
        assert body.original_orbital_period == 365.25
        assert body.original_eccentricity == 0.017
        assert not body.is_modified

    def test_originals_are_read_only(self):
        body = _planet()
        with pytest.raises(AttributeError):
            body.original_distance = 2.0
        with pytest.raises(AttributeError):
            body.original_orbital_period = 10.0

    def test_temperature_derived_from_distance(self):
        assert _planet().temperature == pytest.approx(planet_temperature(1.0))

    def test_star_has_no_temperature(self):
        sun = _sun()
        assert sun.temperature is None
        assert sun.formatted_temperature() == "Unknown"

    def test_star_with_parent_is_rejected(self):
        with pytest.raises(ValueError):
            Body(name="Sol", body_type=BodyType.STAR, diameter=1.0, mass=1.0, distance=0.0,
                 orbital_period=0.0, rotation_period=1.0, parent_id="other")

    def test_default_ids_are_unique(self):
        a = Body(name="A", body_type=BodyType.ASTEROID, diameter=1.0, mass=1.0,
                 distance=2.0, orbital_period=1000.0, rotation_period=0.3)
        b = Body(name="B", body_type=BodyType.ASTEROID, diameter=1.0, mass=1.0,
                 distance=2.0, orbital_period=1000.0, rotation_period=0.3)
        assert a.id != b.id


class TestBodyOrbitUpdates:

    def test_move_to_recomputes_from_originals(self):
        body = _planet(eccentricity=0.017)
        body.move_to(0.5)
        body.move_to(0.4)
        assert body.distance == 0.4
        assert body.orbital_period == pytest.approx(orbital_period(0.4))
        assert body.eccentricity == pytest.approx(0.017 * 1.1)
        assert body.temperature == pytest.approx(planet_temperature(0.4))
        assert body.is_modified

    def test_move_to_rejects_non_positive(self):
        body = _planet()
        with pytest.raises(ValueError):
            body.move_to(0.0)
        assert body.distance == 1.0

    def test_restore_orbit(self):
        body = _planet(eccentricity=0.017)
        body.move_to(3.0)
        body.restore_orbit()
        assert body.distance == 1.0
        assert body.orbital_period == 365.25
        assert body.eccentricity == 0.017
        assert body.temperature == pytest.approx(planet_temperature(1.0))
        assert not body.is_modified


class TestBodyPosition:
    """Closed-form positions relative to the star."""

    def test_star_at_origin(self):
        assert _sun().position(123.0, 5.0) == (0.0, 0.0)

    def test_circular_orbit_at_phase_zero(self):
        x, y = _planet().position(0.0, 2.0)
        assert x == pytest.approx(18.0)
        assert y == pytest.approx(0.0)

    def test_quarter_period_moves_a_quarter_turn(self):
        x, y = _planet().position(365.25 / 4.0, 1.0)
        assert x == pytest.approx(0.0, abs=1e-9)
        assert y == pytest.approx(9.0)

    def test_initial_phase_angle(self):
        x, y = _planet(initial_phase_angle=math.pi).position(0.0, 1.0)
        assert x == pytest.approx(-9.0)

    def test_eccentricity_is_damped(self):
        # e = 0.5 * 0.2 = 0.1 at perihelion: r = a(1 - e^2) / (1 + e)
        x, _ = _planet(eccentricity=0.5).position(0.0, 1.0)
        assert x == pytest.approx(9.0 * 0.99 / 1.1)

    def test_removed_body_has_no_position(self):
        body = _planet()
        body.is_removed = True
        assert body.position(0.0, 1.0) is None

    def test_moon_orbits_parent_position(self):
        x, y = _moon().position(0.0, 1.0, parent_position=(10.0, 5.0))
        assert x == pytest.approx(10.0 + 0.03 * 50.0)
        assert y == pytest.approx(5.0)

    def test_moon_without_parent_position(self):
        assert _moon().position(0.0, 1.0) is None

    def test_zero_period_keeps_phase(self):
        body = _planet(orbital_period=0.0, initial_phase_angle=1.25)
        assert body.orbit_angle(500.0) == 1.25


class TestDisplaySize:

    def test_minimum_size(self):
        pebble = Body(name="Pebble", body_type=BodyType.ASTEROID, diameter=1.0, mass=1.0,
                      distance=2.5, orbital_period=1400.0, rotation_period=0.2)
        assert pebble.display_size(1.0) == pytest.approx(2.0)
        assert pebble.display_size(20.0) == pytest.approx(2.0 + math.log(2.0))

    def test_grows_with_zoom(self):
        body = _planet()
        assert body.display_size(9.0) > body.display_size(1.0)

    def test_star_is_largest(self):
        bodies = _by_id()
        assert bodies["sun"].display_size(3.0) > bodies["jupiter"].display_size(3.0)
        assert bodies["jupiter"].display_size(3.0) > bodies["earth"].display_size(3.0)


class TestDerivedInformation:

    def test_earth_is_habitable(self):
        earth = _by_id()["earth"]
        assert earth.is_in_habitable_zone()
        assert earth.formatted_temperature() == "14.1°C (287.3 K)"

    def test_mars_and_venus_are_not_habitable(self):
        bodies = _by_id()
        assert not bodies["mars"].is_in_habitable_zone()
        assert not bodies["venus"].is_in_habitable_zone()

    def test_moons_are_never_habitable(self):
        assert not _by_id()["moon"].is_in_habitable_zone()

    def test_moved_earth_cooks(self):
        earth = _by_id()["earth"]
        earth.move_to(0.2)
        assert earth.temperature == pytest.approx(568.6, abs=0.1)
        assert not earth.is_in_habitable_zone()

    def test_velocities(self):
        earth = _by_id()["earth"]
        assert earth.surface_escape_velocity() / 1000.0 == pytest.approx(11.2, rel=0.01)
        assert earth.orbital_velocity() == pytest.approx(29790.0, rel=1e-3)
        assert _sun().orbital_velocity() == 0.0

    def test_snapshot_is_frozen(self):
        body = _planet()
        snap = body.snapshot(body.position(0.0, 1.0), 1.0)
        assert snap.id == "terra"
        assert snap.position == pytest.approx((9.0, 0.0))
        assert snap.habitable
        with pytest.raises(FrozenInstanceError):
            snap.distance = 5.0


class TestOrbitPath:

    def test_sample_count(self):
        assert len(orbit_path(_planet(), 1.0)) == 120
        assert len(orbit_path(_planet(), 1.0, samples=36)) == 36

    def test_path_contains_current_position(self):
        body = _planet(eccentricity=0.3)
        first = orbit_path(body, 2.0)[0]
        assert first == pytest.approx(body.position(0.0, 2.0))

    def test_empty_for_star_and_removed(self):
        assert orbit_path(_sun(), 1.0) == []
        body = _planet()
        body.is_removed = True
        assert orbit_path(body, 1.0) == []

    def test_moon_path_circles_parent(self):
        pts = orbit_path(_moon(), 1.0, parent_position=(4.0, 4.0))
        for x, y in pts:
            assert math.hypot(x - 4.0, y - 4.0) == pytest.approx(1.5)
        assert orbit_path(_moon(), 1.0) == []
