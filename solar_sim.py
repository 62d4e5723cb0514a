#!/usr/bin/env python3
"""
Solar System Simulator application entry point and UI/renderer coordination.

What this module does
- Starts a SimulationController whose clock thread advances the solar system at a
  fixed cadence (1 simulated day every 50 ms by default).
- Runs a Pygame viewport in a background thread and the Dear PyGui control window
  on the main thread.
- Both windows only read immutable snapshots published by the controller; the live
  bodies are touched by the controller alone.
- `--headless STEPS` skips both windows and logs positions after stepping.

Viewport controls
- Space: play/pause | N: single step | R: reset | F: fit orbits
- Wheel: zoom | Right/Middle-drag: pan | Left-click: select a body | Arrows: pan

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python solar_sim.py` (see `--help`)
"""

import argparse
import logging
import math
import sys
import threading
from typing import Dict, List, Optional, Tuple

# Rendering lib (Dear PyGui is imported by UI)
import pygame

from solarsim.camera import Camera2D
from solarsim.constants import (
    BACKGROUND_COLOR,
    DEFAULT_TIME_STEP,
    HUD_COLOR,
    MOON_ORBIT_COLOR,
    MOON_ORBIT_EXAGGERATION,
    ORBIT_COLOR,
    SAFE_COORD_LIMIT,
    SELECTION_COLOR,
    STAR_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from solarsim.controller import SimulationController
from solarsim.data_models import SystemSnapshot
from solarsim.presets import default_solar_system
from solarsim.presets_loader import PresetError, list_templates, load_template
from solarsim.remote_data import RemoteDataError, load_remote_system
from solarsim.solar_system import SolarSystem
from solarsim.utils import describe_body, try_float

logger = logging.getLogger("solar_sim")

BUILTIN_PRESET = "Solar System (built-in)"
REMOTE_PRESET = "Remote (le-systeme-solaire.net)"

# ============================================================
# Scene loading
# ============================================================

def load_system(name: str) -> Tuple[SolarSystem, Optional[float]]:
    """
    Resolve a preset name: the built-in system, the remote importer, or a JSON
    template by display or file name. Raises PresetError / RemoteDataError.
    """
    if name == BUILTIN_PRESET:
        return default_solar_system(), None
    if name == REMOTE_PRESET:
        return load_remote_system(), None
    for file_name, display in list_templates():
        if name in (file_name, display):
            system, time_step, _ = load_template(file_name)
            return system, time_step
    raise PresetError(f"Unknown preset {name!r}")


def preset_names() -> List[str]:
    names = [BUILTIN_PRESET]
    names.extend(display for _, display in list_templates())
    names.append(REMOTE_PRESET)
    return names

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: draws orbits, bodies and labels from the latest snapshot.
    Handles selection, camera panning and zoom.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.font = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.pan_speed_keys = 600  # pixels per second
        self.selected_index: Optional[int] = None
        self.running = True

    def auto_frame_camera(self):
        snapshot = self.sim.latest_snapshot()
        self.camera.fit_orbits(b.orbital_radius for b in snapshot.bodies if b.parent_index is None)

    def screen_positions(self, snapshot: SystemSnapshot) -> Dict[int, Tuple[int, int]]:
        """Screen point per body. Moon offsets are stretched so they clear their planet."""
        out: Dict[int, Tuple[int, int]] = {}
        for b in snapshot.bodies:
            if b.parent_index is None:
                out[b.index] = self.camera.world_to_screen(b.position)
        for b in snapshot.bodies:
            if b.parent_index is not None:
                parent = snapshot.bodies[b.parent_index]
                px, py = out[parent.index]
                k = MOON_ORBIT_EXAGGERATION / self.camera.kmpp
                out[b.index] = (int(px + (b.position[0] - parent.position[0]) * k),
                                int(py + (b.position[2] - parent.position[2]) * k))
        return out

    def select_body_at(self, screen: Tuple[int, int], pick_radius_px: int = 12) -> Optional[int]:
        snapshot = self.sim.latest_snapshot()
        best, best_d = None, float("inf")
        for idx, (sx, sy) in self.screen_positions(snapshot).items():
            d = math.hypot(sx - screen[0], sy - screen[1])
            if d < pick_radius_px and d < best_d:
                best, best_d = idx, d
        self.selected_index = best
        return best

    def run(self):
        pygame.init()
        pygame.display.set_caption("Solar System Simulator - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 18)
        self.auto_frame_camera()

        while self.running:
            real_dt = self.clock.tick(60) / 1000.0
            self.handle_events(real_dt)
            self.draw()

        pygame.quit()

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

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    toggle_play(self.sim)
                elif event.key == pygame.K_n:
                    self.sim.step_once()
                elif event.key == pygame.K_r:
                    self.sim.reset()
                elif event.key == pygame.K_f:
                    self.auto_frame_camera()

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self.select_body_at(event.pos)
                elif event.button in (2, 3):
                    self.dragging_background = True
                    self.drag_start_screen = event.pos

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button in (2, 3):
                    self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION and self.dragging_background:
                dx = event.pos[0] - self.drag_start_screen[0]
                dy = event.pos[1] - self.drag_start_screen[1]
                self.camera.pan_pixels(dx, dy)
                self.drag_start_screen = event.pos

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        snapshot = self.sim.latest_snapshot()
        points = self.screen_positions(snapshot)
        origin = _safe_point(self.camera.world_to_screen((0.0, 0.0, 0.0)))

        # Orbits
        for b in snapshot.bodies:
            if b.orbital_radius is None:
                continue
            if b.parent_index is None:
                center, r_px = origin, b.orbital_radius / self.camera.kmpp
                color = ORBIT_COLOR
            else:
                center = _safe_point(points[b.parent_index])
                r_px = b.orbital_radius * MOON_ORBIT_EXAGGERATION / self.camera.kmpp
                color = MOON_ORBIT_COLOR
            if center and 2 <= r_px < SAFE_COORD_LIMIT:
                pygame.draw.circle(surf, color, center, int(r_px), 1)

        # Bodies
        for b in snapshot.bodies:
            p = _safe_point(points[b.index])
            if not p:
                continue
            if b.kind == "star":
                color, vis_r = STAR_COLOR, 10
            else:
                color = b.color or (200, 200, 255)
                vis_r = int(min(max(b.size or 2, 2), 50))
            pygame.draw.circle(surf, color, p, vis_r)
            if b.index == self.selected_index:
                pygame.draw.circle(surf, SELECTION_COLOR, p, vis_r + 4, 1)
            if b.parent_index is None or b.index == self.selected_index:
                self.draw_text(surf, b.name, p[0] + vis_r + 3, p[1] - 6, HUD_COLOR)

        # HUD text
        self.draw_text(surf, "Space: Pause/Play | N: Step | R: Reset | F: Fit | Wheel: zoom | Right-drag: pan",
                       10, 10, HUD_COLOR)
        state = "Playing" if self.sim.is_running else "Paused"
        self.draw_text(surf, f"Day {snapshot.elapsed_days:.0f}  (tick {snapshot.tick}, "
                             f"{self.sim.time_step:g} d/tick)  [{state}]", 10, 30, HUD_COLOR)

        pygame.display.flip()

    def draw_text(self, surface, text, x, y, color):
        img = self.font.render(text, True, color)
        surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def toggle_play(sim: SimulationController) -> bool:
    if sim.is_running:
        sim.stop()
        return False
    sim.start()
    return True

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: presets, simulation controls, body list and info panel.
    """
    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        import dearpygui.dearpygui as dpg

        self.dpg = dpg
        self.sim = sim
        self.renderer = renderer
        self._body_names: List[str] = []
        self._build_ui()
        self._schedule_sync()

    def _build_ui(self):
        dpg = self.dpg
        dpg.create_context()
        dpg.create_viewport(title="Solar System Simulator - Controls", width=460, height=640)

        with dpg.window(label="Controls", width=440, height=620, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                names = preset_names()
                dpg.add_combo(names, default_value=names[0], width=240, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_preset(dpg.get_value("preset_combo")))

            dpg.add_separator()
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Reset", callback=self._reset)
                dpg.add_button(label="Auto-fit Camera", callback=self.renderer.auto_frame_camera)
            with dpg.group(horizontal=True):
                dpg.add_text("Days per tick:")
                dpg.add_input_text(default_value=f"{self.sim.time_step:g}", width=100, tag="time_step_input")
                dpg.add_button(label="Apply", callback=self._apply_time_step)
            dpg.add_text("", tag="clock_text")

            dpg.add_separator()
            dpg.add_text("Bodies")
            dpg.add_listbox([], width=-1, num_items=8, tag="body_list", callback=self._on_select_body)

            dpg.add_separator()
            dpg.add_text("", tag="info_title", color=(180, 200, 255))
            dpg.add_text("", tag="info_rows")

            dpg.add_separator()
            dpg.add_text("", tag="status_text", color=(180, 220, 180))

        dpg.set_primary_window("main_window", True)
        dpg.setup_dearpygui()
        dpg.show_viewport()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (~10Hz)."""
        self.dpg.set_frame_callback(self.dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        self.dpg.set_value("status_text", msg)
        self.dpg.configure_item("status_text", color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    def _toggle_play(self):
        playing = toggle_play(self.sim)
        self._set_status(f"Simulation {'Playing' if playing else 'Paused'}.")

    def _step_once(self):
        self.sim.step_once()
        self._set_status("Stepped once.")

    def _reset(self):
        self.sim.reset()
        self._set_status("Simulation reset.")

    def _apply_time_step(self):
        value = try_float(self.dpg.get_value("time_step_input"))
        if value is None or value < 0:
            self._set_error("Days per tick must be a number >= 0.")
            return
        self.sim.set_time_step(value)
        self._set_status(f"Time step set to {value:g} days.")

    def _on_select_body(self, sender, app_data, user_data=None):
        if app_data in self._body_names:
            self.renderer.selected_index = self._body_names.index(app_data)

    def load_preset(self, name: str):
        try:
            system, time_step = load_system(name)
        except (PresetError, RemoteDataError) as e:
            logger.warning("Could not load preset %r: %s", name, e)
            self._set_error(str(e))
            return
        if time_step is not None:
            self.sim.set_time_step(time_step)
            self.dpg.set_value("time_step_input", f"{time_step:g}")
        self.sim.replace_system(system)
        self.renderer.selected_index = None
        self.renderer.auto_frame_camera()
        self._set_status(f"Loaded preset: {name}")

    def _sync_ui_with_sim(self):
        dpg = self.dpg
        snapshot = self.sim.latest_snapshot()
        names = [b.name for b in snapshot.bodies]
        if names != self._body_names:
            self._body_names = names
            dpg.configure_item("body_list", items=names)

        dpg.set_value("clock_text", f"Day {snapshot.elapsed_days:.1f} | tick {snapshot.tick} | "
                                    f"{'Playing' if self.sim.is_running else 'Paused'}")

        idx = self.renderer.selected_index
        if idx is not None and idx < len(snapshot.bodies):
            title, rows = describe_body(snapshot.bodies[idx], snapshot)
            dpg.set_value("info_title", title)
            dpg.set_value("info_rows", "\n".join(f"{k}: {v}" for k, v in rows))
            dpg.set_value("body_list", names[idx])
        else:
            dpg.set_value("info_title", "Select a body")
            dpg.set_value("info_rows", "")

        if not self.renderer.is_alive():
            dpg.stop_dearpygui()
            return
        self._schedule_sync()

# ============================================================
# Headless run and Application Entry
# ============================================================

def run_headless(sim: SimulationController, steps: int) -> SystemSnapshot:
    snapshot = sim.latest_snapshot()
    for _ in range(steps):
        snapshot = sim.step_once()
    logger.info("Stepped %d ticks (%.1f days)", snapshot.tick, snapshot.elapsed_days)
    for b in snapshot.bodies:
        logger.info("%-10s %-6s x=%.4e z=%.4e angle=%.4f", b.name, b.kind,
                    b.position[0], b.position[2], b.current_angle)
    return snapshot


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Circular-orbit solar system simulator")
    parser.add_argument("--preset", default=BUILTIN_PRESET,
                        help="Preset display name or template file name")
    parser.add_argument("--remote", action="store_true",
                        help="Import planets and moons from le-systeme-solaire.net")
    parser.add_argument("--time-step", type=float, default=None,
                        help=f"Simulated days per tick (default {DEFAULT_TIME_STEP:g})")
    parser.add_argument("--headless", type=int, metavar="STEPS", default=None,
                        help="Run STEPS ticks without windows and log the final positions")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        system, preset_step = load_system(REMOTE_PRESET if args.remote else args.preset)
    except (PresetError, RemoteDataError) as e:
        logger.error("%s", e)
        return 1

    time_step = args.time_step
    if time_step is None:
        time_step = preset_step if preset_step is not None else DEFAULT_TIME_STEP
    try:
        sim = SimulationController(system, time_step=time_step)
    except ValueError as e:
        logger.error("%s", e)
        return 1

    if args.headless is not None:
        run_headless(sim, max(0, args.headless))
        return 0

    renderer = PygameRenderer(sim)
    renderer.start()
    ui = UI(sim, renderer)
    sim.start()

    try:
        ui.dpg.start_dearpygui()
    finally:
        sim.stop()
        renderer.running = False
        renderer.join(timeout=2.0)
        ui.dpg.destroy_context()
    return 0


if __name__ == "__main__":
    sys.exit(main())
