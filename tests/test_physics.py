"""Tests for the closed-form orbit formulas and what-if heuristics."""

import math

import pytest

from tinysolar.constants import AU, EARTH_MASS, SOLAR_MASS
from tinysolar.physics import (
    OrbitUpdate,
    clamp_eccentricity,
    equilibrium_temperature,
    escape_velocity,
    gravitational_force,
    hill_sphere_radius,
    is_moon_stable,
    is_positive,
    orbital_period,
    orbital_velocity,
    planet_temperature,
    recalculate_orbit,
    surface_escape_velocity,
)


class TestKeplerPeriod:
    """Kepler's third law around the Sun."""

    def test_one_au_is_one_year(self):
        assert orbital_period(1.0) == pytest.approx(365.25, abs=0.5)

    def test_scales_with_distance_to_three_halves(self):
        ratio = orbital_period(4.0) / orbital_period(1.0)
        assert ratio == pytest.approx(8.0, rel=1e-9)

    def test_non_positive_distance_returns_zero(self):
        assert orbital_period(0.0) == 0.0
        assert orbital_period(-1.0) == 0.0

    def test_non_positive_mass_returns_zero(self):
        assert orbital_period(1.0, central_mass=0.0) == 0.0


class TestVelocities:
    """Circular, escape and surface escape velocities."""

    def test_earth_orbital_velocity(self):
        assert orbital_velocity(1.0) == pytest.approx(29790.0, rel=1e-3)

    def test_escape_is_sqrt_two_times_orbital(self):
        assert escape_velocity(2.5) == pytest.approx(orbital_velocity(2.5) * 2 ** 0.5, rel=1e-12)

    def test_earth_surface_escape_velocity(self):
        v = surface_escape_velocity(EARTH_MASS, 6378.0 * 1000.0)
        assert v / 1000.0 == pytest.approx(11.2, rel=0.01)

    def test_invalid_inputs_return_zero(self):
        assert orbital_velocity(0.0) == 0.0
        assert escape_velocity(-3.0) == 0.0
        assert surface_escape_velocity(EARTH_MASS, 0.0) == 0.0
        assert surface_escape_velocity(0.0, 1000.0) == 0.0


class TestGravitationalForce:

    def test_sun_earth_attraction(self):
        assert gravitational_force(SOLAR_MASS, EARTH_MASS, AU) == pytest.approx(3.54e22, rel=0.01)

    def test_inverse_square(self):
        near = gravitational_force(1.0, 1.0, 10.0)
        far = gravitational_force(1.0, 1.0, 20.0)
        assert near / far == pytest.approx(4.0)

    def test_zero_separation_returns_zero(self):
        assert gravitational_force(1.0, 1.0, 0.0) == 0.0


class TestHillSphere:

    def test_earth_hill_radius(self):
        assert hill_sphere_radius(1.0, EARTH_MASS) == pytest.approx(0.01, rel=0.01)

    def test_linear_in_distance(self):
        assert hill_sphere_radius(2.0, EARTH_MASS) == pytest.approx(2.0 * hill_sphere_radius(1.0, EARTH_MASS))

    def test_invalid_inputs_return_zero(self):
        assert hill_sphere_radius(0.0, EARTH_MASS) == 0.0
        assert hill_sphere_radius(1.0, 0.0) == 0.0


class TestMoonStability:

    def test_real_moon_is_stable(self):
        assert is_moon_stable(1.0, 0.03, EARTH_MASS)

    def test_real_moon_stable_close_to_the_sun(self):
        assert is_moon_stable(0.2, 0.03, EARTH_MASS)

    def test_real_moon_stable_far_out(self):
        assert is_moon_stable(50.0, 0.03, EARTH_MASS)

    def test_featherweight_planet_loses_its_moon(self):
        assert not is_moon_stable(1.0, 0.03, 1.0)

    def test_distant_moon_depends_on_planet_distance(self):
        # 1e4 units is ~4.3e-4 AU; the stable limit at 0.04 AU is ~1.6e-4 AU
        assert not is_moon_stable(0.04, 1.0e4, EARTH_MASS)
        assert is_moon_stable(0.2, 1.0e4, EARTH_MASS)

    def test_no_hill_sphere_is_unstable(self):
        assert not is_moon_stable(0.0, 0.03, EARTH_MASS)
        assert not is_moon_stable(1.0, 0.03, 0.0)


class TestRecalculateOrbit:
    """Period from Kepler, eccentricity from the inward/outward heuristic."""

    def test_returns_orbit_update(self):
        update = recalculate_orbit(1.0, 0.2, 365.25, 0.017)
        assert isinstance(update, OrbitUpdate)

    def test_moving_inward_raises_eccentricity(self):
        update = recalculate_orbit(1.0, 0.2, 365.25, 0.017)
        assert update.period == pytest.approx(orbital_period(0.2))
        assert update.eccentricity == pytest.approx(0.017 * 1.1)

    def test_moving_outward_lowers_eccentricity(self):
        update = recalculate_orbit(1.0, 2.0, 365.25, 0.017)
        assert update.eccentricity == pytest.approx(0.017 * 0.9)

    def test_staying_put_counts_as_outward(self):
        update = recalculate_orbit(1.0, 1.0, 365.25, 0.5)
        assert update.eccentricity == pytest.approx(0.45)

    def test_eccentricity_is_clamped(self):
        assert recalculate_orbit(1.0, 0.5, 0.0, 0.85).eccentricity == pytest.approx(0.9)
        assert recalculate_orbit(1.0, 2.0, 0.0, 0.001).eccentricity == pytest.approx(0.001)
        assert recalculate_orbit(1.0, 2.0, 0.0, 0.0).eccentricity == pytest.approx(0.001)

    def test_non_positive_distance_raises(self):
        with pytest.raises(ValueError):
            recalculate_orbit(1.0, 0.0, 365.25, 0.017)
        with pytest.raises(ValueError):
            recalculate_orbit(1.0, -2.0, 365.25, 0.017)

    def test_non_finite_distance_raises(self):
        with pytest.raises(ValueError):
            recalculate_orbit(1.0, math.nan, 365.25, 0.017)
        with pytest.raises(ValueError):
            recalculate_orbit(1.0, math.inf, 365.25, 0.017)

    def test_clamp_eccentricity(self):
        assert clamp_eccentricity(5.0) == 0.9
        assert clamp_eccentricity(-1.0) == 0.001
        assert clamp_eccentricity(0.3) == 0.3


class TestTemperature:
    """Equilibrium temperature plus greenhouse bands."""

    def test_equilibrium_at_one_au(self):
        assert equilibrium_temperature(1.0) == pytest.approx(254.28, abs=0.05)

    def test_earth_band_adds_greenhouse(self):
        assert planet_temperature(1.0) == pytest.approx(287.28, abs=0.05)

    def test_venus_band_is_replaced(self):
        assert planet_temperature(0.72) == pytest.approx(737.0)
        assert planet_temperature(0.71) == pytest.approx(737.0)
        assert planet_temperature(0.73) == pytest.approx(737.0)

    def test_mars_band(self):
        assert planet_temperature(1.52) == pytest.approx(211.25, abs=0.05)

    def test_outside_bands_is_plain_equilibrium(self):
        assert planet_temperature(0.5) == pytest.approx(359.6, abs=0.1)
        assert planet_temperature(5.2) == pytest.approx(equilibrium_temperature(5.2))

    def test_albedo_lowers_temperature(self):
        assert equilibrium_temperature(1.0, albedo=0.9) < equilibrium_temperature(1.0, albedo=0.1)

    def test_non_positive_distance_returns_zero(self):
        assert planet_temperature(0.0) == 0.0
        assert equilibrium_temperature(-1.0) == 0.0


class TestNonFiniteInputs:
    """NaN and infinity get the same 0.0 floor as non-positive inputs."""

    def test_is_positive(self):
        assert is_positive(1.0, 2.0)
        assert not is_positive(1.0, 0.0)
        assert not is_positive(math.nan)
        assert not is_positive(math.inf)
        assert not is_positive(-math.inf)

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_formulas_return_zero(self, bad):
        assert orbital_period(bad) == 0.0
        assert orbital_period(1.0, central_mass=bad) == 0.0
        assert orbital_velocity(bad) == 0.0
        assert escape_velocity(bad) == 0.0
        assert surface_escape_velocity(EARTH_MASS, bad) == 0.0
        assert surface_escape_velocity(bad, 1000.0) == 0.0
        assert gravitational_force(1.0, 1.0, bad) == 0.0
        assert gravitational_force(bad, 1.0, 10.0) == 0.0
        assert hill_sphere_radius(bad, EARTH_MASS) == 0.0
        assert equilibrium_temperature(bad) == 0.0
        assert planet_temperature(bad) == 0.0

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_moon_unstable_without_finite_hill_sphere(self, bad):
        assert not is_moon_stable(bad, 0.03, EARTH_MASS)
        assert not is_moon_stable(1.0, 0.03, bad)
