#!/usr/bin/env python3
"""
Solar system model and simulation clock.

SolarSystemModel owns the body collection, the simulated clock and the "what if"
perturbations (moving, removing and restoring bodies). It is shared between the
render thread (Pygame) and the UI thread (Dear PyGui).

Threading
- Every read and mutation takes `lock`, a re-entrant lock, so a frame never sees
  half-applied orbital elements. Callers that need several consistent reads can
  hold `model.lock` themselves.
- Listeners registered with subscribe() run after a mutation, outside the
  model's own critical section, and receive the model as their only argument.

Time
- advance_time(dt) converts real seconds into simulated days:
  days = base_time_step * time_scale * dt * tick_rate, where
  time_scale = speed_factor^2 * max_speed. Squaring the factor gives finer
  control at low speeds. One nominal tick (dt = 1 / tick_rate) therefore
  advances base_time_step * time_scale days.
"""
import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from .catalog import create_solar_system
from .constants import (
    BASE_TIME_STEP_DAYS,
    DAY_SECONDS,
    DEFAULT_SPEED_FACTOR,
    DEFAULT_ZOOM,
    GRAVITY_ESCAPE_MARKER,
    MAX_SPEED,
    MAX_SPEED_FACTOR,
    MAX_ZOOM,
    MIN_SPEED_FACTOR,
    MIN_ZOOM,
    TICK_RATE,
    ZOOM_STEP,
)
from .data_models import Body, BodySnapshot, BodyType, Point, fit_zoom_for_distance
from .physics import is_moon_stable, is_positive
from .vector_utils import clamp

logger = logging.getLogger(__name__)

Listener = Callable[["SolarSystemModel"], None]


class ClockSettings:
    """Container for clock, speed and zoom settings."""
    def __init__(self, tick_rate: int = TICK_RATE, base_time_step: float = BASE_TIME_STEP_DAYS,
                 max_speed: float = MAX_SPEED, min_speed_factor: float = MIN_SPEED_FACTOR,
                 max_speed_factor: float = MAX_SPEED_FACTOR, default_speed_factor: float = DEFAULT_SPEED_FACTOR,
                 min_zoom: float = MIN_ZOOM, max_zoom: float = MAX_ZOOM, default_zoom: float = DEFAULT_ZOOM):
        self.tick_rate = max(1, int(tick_rate))
        self.base_time_step = float(base_time_step)
        self.max_speed = float(max_speed)
        self.min_speed_factor = float(min_speed_factor)
        self.max_speed_factor = max(self.min_speed_factor, float(max_speed_factor))
        self.default_speed_factor = clamp(float(default_speed_factor), self.min_speed_factor, self.max_speed_factor)
        self.min_zoom = float(min_zoom)
        self.max_zoom = max(self.min_zoom, float(max_zoom))
        self.default_zoom = clamp(float(default_zoom), self.min_zoom, self.max_zoom)


def escape_reason(planet_name: str) -> str:
    """Removal reason recorded when a moon leaves its planet's Hill sphere."""
    return f"Escaped {planet_name}'s {GRAVITY_ESCAPE_MARKER} due to solar tides"


class SolarSystemModel:
    """
    Shared state between the UI thread (Dear PyGui) and the rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.

    Lookups by id return None for unknown ids, and perturbation methods return
    False instead of raising, so a stale id from the UI is a no-op.
    """
    def __init__(self, catalog: Callable[[], List[Body]] = create_solar_system,
                 settings: Optional[ClockSettings] = None,
                 now: Callable[[], datetime] = datetime.now):
        self.lock = threading.RLock()
        self.settings = settings or ClockSettings()
        self._catalog = catalog
        self._now = now
        self._listeners: List[Listener] = []

        self.bodies: List[Body] = []
        self._index: Dict[str, Body] = {}
        self.current_time = 0.0  # simulated days since start
        self.current_date = now()
        self.speed_factor = self.settings.default_speed_factor
        self.zoom_level = self.settings.default_zoom
        self.paused = False
        self.version = 0

        self._load_bodies(catalog())

    def _load_bodies(self, bodies: List[Body]) -> None:
        index: Dict[str, Body] = {}
        for b in bodies:
            if b.id in index:
                raise ValueError(f"Duplicate body id '{b.id}'")
            index[b.id] = b
        stars = [b for b in bodies if b.is_star]
        if len(stars) != 1:
            raise ValueError(f"Catalog must contain exactly one star, found {len(stars)}")
        if stars[0].distance != 0:
            raise ValueError(f"Star '{stars[0].name}' must sit at distance 0")
        self.bodies = bodies
        self._index = index

    # -----------------------
    # Change notification
    # -----------------------

    def subscribe(self, listener: Listener) -> None:
        with self.lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self.lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self) -> None:
        with self.lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(self)

    # -----------------------
    # Clock
    # -----------------------

    @property
    def current_time_scale(self) -> float:
        """Simulated days per nominal tick divided by the base step."""
        return (self.speed_factor ** 2) * self.settings.max_speed

    @property
    def days_per_second(self) -> float:
        """Simulated days per real second at the current speed."""
        return self.settings.base_time_step * self.current_time_scale * self.settings.tick_rate

    def advance_time(self, dt_real_seconds: float) -> float:
        """
        Advance the simulated clock by dt_real_seconds of wall time.

        Returns the number of simulated days advanced (0.0 while paused).
        A step that would carry the date past datetime.max is not applied;
        the clock pauses at the end of the calendar instead.
        """
        with self.lock:
            if self.paused or not is_positive(dt_real_seconds):
                return 0.0
            step = self.settings.base_time_step * self.current_time_scale * dt_real_seconds * self.settings.tick_rate
            if step == 0:
                return 0.0
            try:
                new_date = self.current_date + timedelta(days=step)
            except OverflowError:
                self.paused = True
                self.version += 1
                new_date = None
            else:
                self.current_time += step
                self.current_date = new_date
                self.version += 1
        if new_date is None:
            logger.warning(f"Calendar limit reached at {self.current_date:%Y-%m-%d}; simulation paused")
            self._notify()
            return 0.0
        self._notify()
        return step

    def tick(self) -> float:
        """Advance by one nominal frame (1 / tick_rate seconds)."""
        return self.advance_time(1.0 / self.settings.tick_rate)

    def set_paused(self, paused: bool) -> None:
        with self.lock:
            self.paused = bool(paused)
            self.version += 1
        self._notify()

    def toggle_pause(self) -> bool:
        """Flip between running and paused; returns the new paused state."""
        with self.lock:
            self.paused = not self.paused
            paused = self.paused
            self.version += 1
        self._notify()
        return paused

    def set_speed_factor(self, value: float) -> float:
        with self.lock:
            s = self.settings
            self.speed_factor = clamp(float(value), s.min_speed_factor, s.max_speed_factor)
            speed = self.speed_factor
            self.version += 1
        self._notify()
        return speed

    def set_zoom_level(self, value: float) -> float:
        with self.lock:
            s = self.settings
            self.zoom_level = clamp(float(value), s.min_zoom, s.max_zoom)
            zoom = self.zoom_level
            self.version += 1
        self._notify()
        return zoom

    def zoom_in(self) -> float:
        return self.set_zoom_level(self.zoom_level + ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.set_zoom_level(self.zoom_level - ZOOM_STEP)

    def auto_fit_zoom(self) -> float:
        """Zoom so the furthest visible body fits in the viewport."""
        with self.lock:
            visible = [b for b in self.bodies if not b.is_removed]
            if not visible:
                return self.zoom_level
            furthest = max(visible, key=lambda b: b.distance)
            target = fit_zoom_for_distance(furthest.distance)
        return self.set_zoom_level(target)

    def set_date(self, date: datetime) -> None:
        """
        Jump the clock to an absolute date.

        The day delta between `date` and the current simulated date is added to
        the elapsed time, so positions continue from where they are.
        """
        with self.lock:
            delta_days = (date - self.current_date).total_seconds() / DAY_SECONDS
            self.current_time += delta_days
            self.current_date = date
            self.version += 1
        logger.info(f"Simulated date set to {date:%Y-%m-%d} ({delta_days:+.1f} days)")
        self._notify()

    def reset_simulation(self) -> None:
        """Start over: time 0, today's date, and a fresh catalog."""
        with self.lock:
            self._load_bodies(self._catalog())
            self.current_time = 0.0
            self.current_date = self._now()
            self.version += 1
        logger.info("Simulation reset")
        self._notify()

    # -----------------------
    # Lookups
    # -----------------------

    def get_body(self, body_id: str) -> Optional[Body]:
        """Body with the given id, or None if there is none."""
        with self.lock:
            return self._index.get(body_id)

    def find_body(self, name: str) -> Optional[Body]:
        with self.lock:
            for b in self.bodies:
                if b.name == name:
                    return b
            return None

    def parent_of(self, body: Body) -> Optional[Body]:
        if body.parent_id is None:
            return None
        with self.lock:
            return self._index.get(body.parent_id)

    def moons_of(self, planet_id: str) -> List[Body]:
        with self.lock:
            return [b for b in self.bodies if b.parent_id == planet_id]

    def unstable_moons(self, planet_id: str) -> List[Body]:
        """Moons of a planet that escaped its gravity and are currently removed."""
        with self.lock:
            return [m for m in self.moons_of(planet_id)
                    if m.is_removed and m.removal_reason and GRAVITY_ESCAPE_MARKER in m.removal_reason]

    # -----------------------
    # "What if" perturbations
    # -----------------------

    def update_distance(self, body_id: str, new_distance: float) -> bool:
        """
        Move a body to a new distance from the Sun.

        Period and eccentricity are re-estimated from the body's original orbit,
        temperature is recomputed, and for planets every moon is re-checked
        for stability. The star cannot be moved and distances must be positive
        finite numbers.
        """
        with self.lock:
            body = self._index.get(body_id)
            if body is None:
                logger.warning(f"update_distance: unknown body id '{body_id}'")
                return False
            if body.is_star:
                logger.warning(f"update_distance: '{body.name}' is the reference star and cannot move")
                return False
            if not is_positive(new_distance):
                logger.warning(f"update_distance: rejected distance {new_distance} for '{body.name}'")
                return False
            update = body.move_to(new_distance)
            if body.body_type is BodyType.PLANET:
                self._update_moon_stability(body)
            self.version += 1
        logger.info(
            f"{body.name} moved to {new_distance:.2f} AU "
            f"(period {update.period:.1f} d, e={update.eccentricity:.4f})"
        )
        self._notify()
        return True

    def reset_distance(self, body_id: str) -> bool:
        """Restore a body's distance, period and eccentricity to their original values."""
        with self.lock:
            body = self._index.get(body_id)
            if body is None:
                logger.warning(f"reset_distance: unknown body id '{body_id}'")
                return False
            body.restore_orbit()
            if body.body_type is BodyType.PLANET:
                self._update_moon_stability(body)
            self.version += 1
        logger.info(f"{body.name} reset to {body.distance:.2f} AU")
        self._notify()
        return True

    def reset_all_changes(self) -> None:
        """
        Bring every body back and restore every original distance.

        Only the removed flag and the distance are restored here. Period,
        eccentricity, temperature and removal reasons keep their current
        values; use reset_distance for a full per-body restore.
        """
        with self.lock:
            for b in self.bodies:
                b.is_removed = False
                b.distance = b.original_distance
            self.version += 1
        logger.info("All changes reset")
        self._notify()

    def remove_body(self, body_id: str, reason: Optional[str] = None) -> bool:
        """Remove a body from the scene on user request."""
        with self.lock:
            body = self._index.get(body_id)
            if body is None:
                logger.warning(f"remove_body: unknown body id '{body_id}'")
                return False
            body.is_removed = True
            body.removal_reason = reason
            self.version += 1
        logger.info(f"{body.name} removed")
        self._notify()
        return True

    def restore_body(self, body_id: str) -> bool:
        with self.lock:
            body = self._index.get(body_id)
            if body is None:
                logger.warning(f"restore_body: unknown body id '{body_id}'")
                return False
            body.is_removed = False
            body.removal_reason = None
            self.version += 1
        logger.info(f"{body.name} restored")
        self._notify()
        return True

    def _update_moon_stability(self, planet: Body) -> None:
        # Caller holds the lock.
        for moon in self.moons_of(planet.id):
            stable = is_moon_stable(planet.distance, moon.distance_from_parent or 0.0, planet.mass)
            if not stable and not moon.is_removed:
                moon.is_removed = True
                moon.removal_reason = escape_reason(planet.name)
                logger.info(f"{moon.name} escaped {planet.name} at {planet.distance:.2f} AU")
            elif stable and moon.is_removed and moon.removal_reason \
                    and GRAVITY_ESCAPE_MARKER in moon.removal_reason:
                moon.is_removed = False
                moon.removal_reason = None
                logger.info(f"{moon.name} recaptured by {planet.name}")

    # -----------------------
    # Rendering queries
    # -----------------------

    def _position(self, body: Body, time: float, scale: float) -> Optional[Point]:
        parent_position = None
        if body.is_moon:
            parent = self._index.get(body.parent_id) if body.parent_id else None
            if parent is None:
                return None
            parent_position = parent.position(time, scale)
        return body.position(time, scale, parent_position)

    def position_of(self, body_id: str) -> Optional[Point]:
        """Screen-space position at the current time and zoom; None if unknown, removed or orphaned."""
        with self.lock:
            body = self._index.get(body_id)
            if body is None:
                return None
            return self._position(body, self.current_time, self.zoom_level)

    def positions(self) -> Dict[str, Optional[Point]]:
        with self.lock:
            return {b.id: self._position(b, self.current_time, self.zoom_level) for b in self.bodies}

    def snapshot(self) -> List[BodySnapshot]:
        """Immutable per-frame view of every body, in catalog order."""
        with self.lock:
            return [
                b.snapshot(self._position(b, self.current_time, self.zoom_level), self.zoom_level)
                for b in self.bodies
            ]
