#!/usr/bin/env python3
"""
Shared constants for Tiny Solar System (SI units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier. Distances along orbits are in astronomical
units [AU], periods in days.
"""

# Physical constants
G = 6.67430e-11  # m^3 kg^-1 s^-2
AU = 149597870700.0  # m
SOLAR_MASS = 1.989e30  # kg
EARTH_MASS = 5.97e24  # kg
EARTH_RADIUS_KM = 6371.0  # km
DAY_SECONDS = 86400.0  # s
YEAR_DAYS = 365.25  # days
KELVIN_OFFSET = 273.15

# Orbit perturbation tuning
MIN_ECCENTRICITY = 0.001
MAX_ECCENTRICITY = 0.9
INWARD_ECCENTRICITY_FACTOR = 1.1
OUTWARD_ECCENTRICITY_FACTOR = 0.9

# Fraction of the Hill sphere treated as dynamically stable (r_H / 2.5)
MOON_STABILITY_DIVISOR = 2.5
# Moon distances are stored in "Earth radius" units; converted with km / AU(m)
MOON_DISTANCE_UNIT_AU = EARTH_RADIUS_KM / AU
GRAVITY_ESCAPE_MARKER = "gravity"

# Temperature model
DEFAULT_ALBEDO = 0.3
EQUILIBRIUM_TEMP_1AU = 278.0  # K, black body at 1 AU
# Greenhouse overrides: (min AU, max AU)
VENUS_BAND = (0.71, 0.73)
VENUS_SURFACE_TEMP = 737.0  # K, replaces the base value
EARTH_BAND = (0.99, 1.01)
EARTH_GREENHOUSE_DELTA = 33.0  # K
MARS_BAND = (1.51, 1.53)
MARS_GREENHOUSE_DELTA = 5.0  # K
HABITABLE_MIN_C = -50.0
HABITABLE_MAX_C = 50.0

# Simulation clock
TICK_RATE = 60  # nominal ticks per real second
BASE_TIME_STEP_DAYS = 1.0 / 60.0  # simulated days per tick at time scale 1
MAX_SPEED = 2592.0  # time scale at speed factor 1.0
MIN_SPEED_FACTOR = 0.0
MAX_SPEED_FACTOR = 0.2
DEFAULT_SPEED_FACTOR = 0.01

# Zoom (pixels per visual distance unit)
MIN_ZOOM = 0.1
MAX_ZOOM = 100.0
DEFAULT_ZOOM = 3.0
ZOOM_STEP = 0.5
FIT_ZOOM_TARGET = 40.0

# "What if" distance range offered by the controls
MIN_PERTURB_DISTANCE = 0.2  # AU
MAX_PERTURB_DISTANCE = 50.0  # AU

# Visual scaling (legibility, not physics)
INNER_BAND_LIMIT = 1.8  # AU
MIDDLE_BAND_LIMIT = 10.0  # AU
INNER_ECCENTRICITY_DAMPING = 0.2
MIDDLE_ECCENTRICITY_DAMPING = 0.3
OUTER_ECCENTRICITY_DAMPING = 0.4
MOON_ORBIT_SCALE = 50.0

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (5, 6, 12)
ORBIT_COLOR = (255, 217, 102)
SELECTION_COLOR = (255, 255, 0)
REMOVED_COLOR = (255, 150, 60)
TEXT_COLOR = (200, 200, 200)
DEFAULT_TILT_DEG = 30.0  # camera tilt used by the "3D" view toggle

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
