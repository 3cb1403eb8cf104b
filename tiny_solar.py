#!/usr/bin/env python3
"""
Tiny Solar System application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SolarSystemModel that owns the bodies, the simulated clock and the
  "what if" perturbations; all access is guarded by the model's re-entrant lock.
- Provides a Dear PyGui control panel for speed, zoom, date and per-planet experiments
  (move a planet, remove it, reset it) plus an info panel for the selected body.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  advancing the simulated clock, and drawing. It reads a snapshot of the model per frame.
- The UI class runs in the main thread via Dear PyGui. It refreshes its labels on a periodic
  frame callback whenever the model's version changes and calls model methods for user actions.

Units and conventions
- Orbital distances in AU, periods in days, temperatures in K (shown in °C as well).
- Screen positions are visual, not to scale: see tinysolar.data_models.visual_distance.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python tiny_solar.py`

Windows/OS notes
- Two windows will open: the viewport (Pygame) and the controls (Dear PyGui). Closing either
  will shut down the application cleanly.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Dict, List, Optional

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from tinysolar.camera import Camera2D, safe_point
from tinysolar.constants import (
    BACKGROUND_COLOR,
    DEFAULT_TILT_DEG,
    MAX_PERTURB_DISTANCE,
    MIN_PERTURB_DISTANCE,
    ORBIT_COLOR,
    REMOVED_COLOR,
    SELECTION_COLOR,
    TEXT_COLOR,
    TICK_RATE,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from tinysolar.data_models import Body, BodyType, orbit_path
from tinysolar.simulation import SolarSystemModel
from tinysolar.utils import DATE_FORMAT, format_number, format_scientific, try_float, try_parse_date
from tinysolar.vector_utils import vec_len, vec_sub

logger = logging.getLogger("tiny_solar")


# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: advances the clock, draws orbits, bodies, labels and the HUD.
    Handles selection, camera panning, zoom and pause.
    """
    def __init__(self, model: SolarSystemModel):
        super().__init__(daemon=True)
        self.model = model
        self.camera = Camera2D()
        self.surface = None
        self.clock = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.pan_speed_keys = 600  # pixels per second
        self.selected_id: Optional[str] = None
        self.running = True

    def set_3d_view(self, enabled: bool) -> None:
        self.camera.set_tilt(DEFAULT_TILT_DEG if enabled else 0.0)

    def reset_view(self) -> None:
        self.camera.reset()

    def run(self):
        pygame.init()
        pygame.display.set_caption("Tiny Solar System - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()

        last_time = time.perf_counter()
        while self.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            # Input handling
            self.handle_events(real_dt)

            # Clock step (no-op while paused)
            self.model.advance_time(real_dt)

            # Draw
            self.draw()

            # Limit FPS
            self.clock.tick(TICK_RATE)

        pygame.quit()

    def select_at(self, screen_pos) -> Optional[str]:
        """Select the body drawn nearest to a screen position, if any is under it."""
        best_id = None
        best_d = float("inf")
        for snap in self.model.snapshot():
            if snap.position is None:
                continue
            d = vec_len(vec_sub(self.camera.world_to_screen(snap.position), screen_pos))
            if d < snap.display_size + 6 and d < best_d:
                best_d = d
                best_id = snap.id
        self.selected_id = best_id
        return best_id

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.pan_pixels(self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.pan_pixels(-self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_UP]:
            self.camera.pan_pixels(0, self.pan_speed_keys * real_dt)
        if keys[pygame.K_DOWN]:
            self.camera.pan_pixels(0, -self.pan_speed_keys * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.model.set_zoom_level(self.model.zoom_level * factor)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.model.toggle_pause()
                elif event.key == pygame.K_f:
                    self.model.auto_fit_zoom()

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:  # left click selects, or drags the background
                    mouse = pygame.mouse.get_pos()
                    if self.select_at(mouse) is None:
                        self.dragging_background = True
                        self.drag_start_screen = mouse
                elif event.button in (2, 3):  # middle/right also pan
                    self.dragging_background = True
                    self.drag_start_screen = pygame.mouse.get_pos()

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button in (1, 2, 3):
                    self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION:
                if self.dragging_background:
                    mouse = pygame.mouse.get_pos()
                    dx = mouse[0] - self.drag_start_screen[0]
                    dy = mouse[1] - self.drag_start_screen[1]
                    self.camera.pan_pixels(dx, dy)
                    self.drag_start_screen = mouse

    def _collect_frame(self):
        # One consistent read of the model per frame
        with self.model.lock:
            snaps = self.model.snapshot()
            zoom = self.model.zoom_level
            positions = {s.id: s.position for s in snaps}
            paths: Dict[str, List] = {}
            for body in self.model.bodies:
                parent_pos = positions.get(body.parent_id) if body.parent_id else None
                pts = orbit_path(body, zoom, parent_position=parent_pos)
                if pts:
                    paths[body.id] = pts
            hud = (
                self.model.current_date,
                self.model.days_per_second,
                self.model.paused,
                zoom,
            )
        return snaps, paths, hud

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        snaps, paths, hud = self._collect_frame()
        zoom = hud[3]

        # Orbits
        for body_id, pts in paths.items():
            screen_pts = [p for p in (safe_point(self.camera.world_to_screen(pt)) for pt in pts) if p]
            if len(screen_pts) > 2:
                alpha = min(0.6, 0.3 + zoom * 0.03)
                color = tuple(int(c * alpha) for c in ORBIT_COLOR)
                pygame.draw.aalines(surf, color, True, screen_pts)

        # Bodies
        for snap in snaps:
            if snap.position is None:
                continue
            center = safe_point(self.camera.world_to_screen(snap.position))
            if center is None:
                continue
            r = max(2, min(int(snap.display_size), 80))
            if snap.has_rings:
                ring_rect = pygame.Rect(0, 0, r * 4, max(4, r))
                ring_rect.center = center
                pygame.draw.ellipse(surf, snap.color, ring_rect, 1)
            gfxdraw.filled_circle(surf, center[0], center[1], r, snap.color)
            gfxdraw.aacircle(surf, center[0], center[1], r, snap.color)

            if snap.id == self.selected_id:
                gfxdraw.aacircle(surf, center[0], center[1], r + 4, SELECTION_COLOR)

            if snap.body_type is not BodyType.STAR and (zoom > 0.3 and snap.body_type is not BodyType.MOON or zoom > 3):
                draw_text(surf, snap.name, center[0] - 12, center[1] - r - 18, TEXT_COLOR)

        # HUD text
        current_date, days_per_second, paused, _ = hud
        draw_text(surf, "Click: select | Drag: pan | Wheel: zoom | Arrows: pan | Space: Pause/Play | F: fit", 10, 10, TEXT_COLOR)
        draw_text(surf, f"{current_date:%Y-%m-%d}  Speed: {days_per_second:.2f} days/s  Zoom: {zoom:.2f}  "
                        f"[{'Paused' if paused else 'Playing'}]", 10, 30, TEXT_COLOR)
        removed = [s.name for s in snaps if s.is_removed]
        if removed:
            draw_text(surf, "Removed: " + ", ".join(removed), 10, 50, REMOVED_COLOR)

        pygame.display.flip()


_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except (OSError, pygame.error):
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: clock controls, "what if" experiments and selected-body info.
    """
    def __init__(self, model: SolarSystemModel, renderer: PygameRenderer):
        self.model = model
        self.renderer = renderer

        self.status_msg_id = None
        self.speed_slider_id = None
        self.date_input_id = None
        self.info_text_id = None

        # Per-body widget ids for the experiment cards
        self._visible_ids: Dict[str, int] = {}
        self._distance_ids: Dict[str, int] = {}
        self._card_text_ids: Dict[str, int] = {}

        self._last_version = -1
        self._last_selected: Optional[str] = None

        self._build_ui()

        # Periodic UI sync without timers (for wider DPG version support)
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        try:
            current = dpg.get_frame_count()
        except Exception:
            current = 0
        dpg.set_frame_callback(current + 6, self._sync_ui_with_model)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Tiny Solar System - Controls', width=520, height=860)

        with dpg.window(label="Controls", width=500, height=840, pos=(10, 10), tag="main_window"):
            dpg.add_text("Simulation")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Zoom -", callback=lambda: self.model.zoom_out())
                dpg.add_button(label="Zoom +", callback=lambda: self.model.zoom_in())
                dpg.add_button(label="Auto-fit", callback=lambda: self.model.auto_fit_zoom())
                dpg.add_button(label="Reset View", callback=self.renderer.reset_view)
            with dpg.group(horizontal=True):
                dpg.add_text("Speed:")
                s = self.model.settings
                self.speed_slider_id = dpg.add_slider_float(
                    min_value=s.min_speed_factor, max_value=s.max_speed_factor,
                    default_value=self.model.speed_factor, width=300, format="%.3f",
                    callback=lambda sender, a, u: self.model.set_speed_factor(a))
            dpg.add_checkbox(label="3D view", default_value=False,
                             callback=lambda sender, a, u: self.renderer.set_3d_view(bool(a)))
            with dpg.group(horizontal=True):
                self.date_input_id = dpg.add_input_text(
                    label="Date (YYYY-MM-DD)", width=120,
                    default_value=self.model.current_date.strftime(DATE_FORMAT))
                dpg.add_button(label="Go", callback=self._on_go_to_date)
                dpg.add_button(label="Today", callback=self._on_today)

            self.status_msg_id = dpg.add_text("")
            dpg.add_separator()

            dpg.add_text("What If Scenarios")
            for body in self._experiment_bodies():
                self._build_experiment_card(body)
            with dpg.group(horizontal=True):
                dpg.add_button(label="Reset All Changes", callback=self._on_reset_all)
                dpg.add_button(label="Reset Simulation", callback=self._on_reset_simulation)

            dpg.add_separator()
            dpg.add_text("Selected Body")
            self.info_text_id = dpg.add_text("Click a body in the viewport.", wrap=470)

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    def _experiment_bodies(self) -> List[Body]:
        with self.model.lock:
            return [b for b in self.model.bodies
                    if b.body_type in (BodyType.PLANET, BodyType.DWARF_PLANET)]

    def _build_experiment_card(self, body: Body):
        with dpg.collapsing_header(label=body.name, default_open=False):
            with dpg.group(horizontal=True):
                self._visible_ids[body.id] = dpg.add_checkbox(
                    label="Visible", default_value=not body.is_removed, user_data=body.id,
                    callback=self._on_toggle_visible)
                dpg.add_button(label="Reset", user_data=body.id, callback=self._on_reset_body)
            self._distance_ids[body.id] = dpg.add_slider_float(
                label="AU", min_value=MIN_PERTURB_DISTANCE, max_value=MAX_PERTURB_DISTANCE,
                default_value=body.distance, width=300, format="%.2f", user_data=body.id,
                callback=self._on_distance_changed)
            self._card_text_ids[body.id] = dpg.add_text("", wrap=460)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _toggle_play(self):
        paused = self.model.toggle_pause()
        self._set_status(f"Simulation {'Paused' if paused else 'Playing'}.")

    def _on_go_to_date(self):
        date = try_parse_date(dpg.get_value(self.date_input_id))
        if date is None:
            self._set_error("Invalid date. Use YYYY-MM-DD.")
            return
        self.model.set_date(date)
        self._set_status(f"Jumped to {date:%Y-%m-%d}.")

    def _on_today(self):
        today = datetime.now()
        self.model.set_date(today)
        dpg.set_value(self.date_input_id, today.strftime(DATE_FORMAT))
        self._set_status("Jumped to today.")

    def _on_toggle_visible(self, sender, app_data, user_data):
        if app_data:
            ok = self.model.restore_body(user_data)
        else:
            ok = self.model.remove_body(user_data)
        if not ok:
            self._set_error("That body no longer exists.")

    def _on_distance_changed(self, sender, app_data, user_data):
        distance = try_float(app_data)
        if distance is None:
            self._set_error("Invalid distance.")
            return
        if not self.model.update_distance(user_data, distance):
            self._set_error("Could not move that body.")

    def _on_reset_body(self, sender, app_data, user_data):
        if self.model.reset_distance(user_data):
            body = self.model.get_body(user_data)
            self._set_status(f"{body.name} back at {body.distance:.2f} AU.")

    def _on_reset_all(self):
        self.model.reset_all_changes()
        self._set_status("All changes reset.")

    def _on_reset_simulation(self):
        self.model.reset_all_changes()
        self.model.reset_simulation()
        self.model.set_speed_factor(self.model.settings.default_speed_factor)
        self.renderer.reset_view()
        self._set_status("Simulation reset.")

    # -----------------------
    # Periodic sync
    # -----------------------

    def _card_text(self, body: Body) -> str:
        lines = [f"Orbital period: {body.orbital_period:.1f} Earth days",
                 f"Temperature: {body.formatted_temperature()}"]
        if body.is_in_habitable_zone():
            lines.append("Potentially habitable!")
        if body.is_removed and body.removal_reason:
            lines.append(body.removal_reason)
        for moon in self.model.unstable_moons(body.id):
            lines.append(f"Warning: {moon.name}: {moon.removal_reason}")
        return "\n".join(lines)

    def _info_text(self, body: Body) -> str:
        lines = [f"{body.name} ({body.body_type.value.replace('_', ' ')})"]
        if body.is_moon and body.distance_from_parent is not None:
            parent = self.model.parent_of(body)
            lines.append(f"Orbits: {parent.name if parent else 'unknown'}")
        elif not body.is_star:
            lines.append(f"Distance: {format_number(body.distance)} AU")
        lines.append(f"Diameter: {format_number(body.diameter)} km   Mass: {format_scientific(body.mass)} kg")
        if not body.is_star:
            lines.append(f"Orbital period: {format_number(body.orbital_period)} days")
        lines.append(f"Rotation: {format_number(abs(body.rotation_period))} days"
                     f"{' (retrograde)' if body.rotation_period < 0 else ''}")
        lines.append(f"Eccentricity: {format_number(body.eccentricity)}")
        if body.body_type in (BodyType.PLANET, BodyType.DWARF_PLANET):
            lines.append(f"Moons: {body.moon_count}")
        if body.temperature is not None:
            lines.append(f"Temperature: {body.formatted_temperature()}")
        if body.is_in_habitable_zone():
            lines.append("Potentially habitable: liquid water could exist here.")
        if body.body_type in (BodyType.PLANET, BodyType.DWARF_PLANET):
            lines.append(f"Escape velocity: {format_number(body.surface_escape_velocity() / 1000)} km/s")
            lines.append(f"Orbital velocity: {format_number(body.orbital_velocity() / 1000)} km/s")
            if body.is_modified:
                lines.append(f"Original distance: {format_number(body.original_distance)} AU")
                lines.append(f"Original orbital period: {format_number(body.original_orbital_period)} days")
        if body.is_removed:
            lines.append(f"Removed: {body.removal_reason or 'by you'}")
        if body.fun_fact:
            lines.append("")
            lines.append(body.fun_fact)
        return "\n".join(lines)

    def _sync_ui_with_model(self):
        """
        Periodic UI update: refresh experiment cards and the info panel when the model changed.
        """
        if not self.renderer.running:
            dpg.stop_dearpygui()
            return

        version = self.model.version
        selected = self.renderer.selected_id
        if version != self._last_version or selected != self._last_selected:
            with self.model.lock:
                for body_id, text_id in self._card_text_ids.items():
                    body = self.model.get_body(body_id)
                    if body is None:
                        continue
                    dpg.set_value(text_id, self._card_text(body))
                    dpg.set_value(self._visible_ids[body_id], not body.is_removed)
                    dpg.set_value(self._distance_ids[body_id], body.distance)
                dpg.set_value(self.speed_slider_id, self.model.speed_factor)
                body = self.model.get_body(selected) if selected else None
                if body is not None:
                    dpg.set_value(self.info_text_id, self._info_text(body))
            self._last_version = version
            self._last_selected = selected

        # Reschedule next sync
        self._schedule_sync()


# ============================================================
# Application Entry
# ============================================================

def main():
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')

    model = SolarSystemModel()
    renderer = PygameRenderer(model)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(model, renderer)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    logger.info(f"Loaded {len(model.bodies)} bodies")

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()


if __name__ == "__main__":
    main()
