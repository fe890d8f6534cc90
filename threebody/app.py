"""Interactive application wiring physics, rendering, input and logging together."""

from __future__ import annotations

import argparse
import math
import sys
import time
from collections.abc import Collection, Sequence
from pathlib import Path

import pygame

from . import constants
from .body import Body
from .config import ConfigManager
from .logger import Logger
from .physics import PhysicsEngine
from .renderer import Renderer

_PRESET_RADIUS = 5.0
_FRAME_RATE = 60

_WATCHED_KEYS: dict[int, str] = {
    pygame.K_SPACE: "space",
    pygame.K_KP_PLUS: "+",
    pygame.K_EQUALS: "=",
    pygame.K_MINUS: "-",
    pygame.K_r: "r",
    pygame.K_t: "t",
    pygame.K_e: "e",
    pygame.K_1: "1",
    pygame.K_2: "2",
    pygame.K_3: "3",
}

_PRESET_KEYS = {"1": 1, "2": 2, "3": 3}

_BANNER = """\
=== 3-Body Gravitational Simulation ===
Controls:
  SPACE    - Pause/Resume simulation
  R        - Reset to initial conditions
  +/-      - Increase/Decrease simulation speed
  1-5      - Load preset configurations
  T        - Toggle trail rendering
  E        - Toggle energy display
  ESC      - Exit simulation
=========================================="""


def preset_bodies(preset_index: int = 0) -> list[Body]:
    """Initial bodies of a preset: 1 figure-8, 2 triangle, 3 chaotic, else simple."""
    colors = (constants.BODY_COLOR_1, constants.BODY_COLOR_2, constants.BODY_COLOR_3)
    if preset_index == 1:
        m = constants.FIGURE8_MASS
        specs = [
            (m, constants.FIGURE8_POS_1, constants.FIGURE8_VEL_1),
            (m, constants.FIGURE8_POS_2, constants.FIGURE8_VEL_2),
            (m, constants.FIGURE8_POS_3, constants.FIGURE8_VEL_3),
        ]
    elif preset_index == 2:
        r = constants.TRIANGLE_RADIUS
        v = constants.TRIANGLE_VELOCITY
        specs = [
            (1.0, (-r, 0.0, 0.0), (0.0, v, 0.0)),
            (1.0, (r, 0.0, 0.0), (0.0, -v, 0.0)),
            (1.0, (0.0, r * math.sqrt(3.0), 0.0), (-v, 0.0, 0.0)),
        ]
    elif preset_index == 3:
        specs = [
            (constants.CHAOS_MASS_1, (-10.0, 0.0, 0.0), (0.0, 1.6, 0.0)),
            (constants.CHAOS_MASS_2, (10.0, 0.0, 0.0), (0.0, -1.6, 0.0)),
            (constants.CHAOS_MASS_3, (0.0, 15.0, 0.0), (-1.2, 0.0, 0.0)),
        ]
    else:
        specs = [
            (1.0, (-5.0, 0.0, 0.0), (0.0, 0.8, 0.0)),
            (1.0, (5.0, 0.0, 0.0), (0.0, -0.8, 0.0)),
            (1.0, (0.0, 8.0, 0.0), (-0.8, 0.0, 0.0)),
        ]
    return [
        Body(mass, position, velocity, _PRESET_RADIUS, color)
        for (mass, position, velocity), color in zip(specs, colors)
    ]


class Application:
    """Owns the bodies, the engine, the window and the output logs."""

    def __init__(self) -> None:
        self.bodies: list[Body] = []
        self.physics = PhysicsEngine()
        self.renderer: Renderer | None = None
        self.position_logger: Logger | None = None
        self.energy_logger: Logger | None = None
        self.paused = False
        self.speed_factor = 1.0
        self.show_energy = True
        self.show_trails = True
        self._log_step = 0

    def initialize(self) -> bool:
        """Create the output folders, open the logs and load the initial bodies."""
        Path("logs").mkdir(parents=True, exist_ok=True)
        Path("config").mkdir(parents=True, exist_ok=True)
        self.position_logger = Logger(constants.POSITION_FILE)
        self.energy_logger = Logger(constants.ENERGY_FILE)

        self.bodies = ConfigManager(constants.CONFIG_FILE).load_initial_bodies()
        if not self.bodies:
            self.reset_simulation(0)

        self.physics.initialize(self.bodies)
        return True

    def run(self) -> None:
        """Main loop: fixed physics steps scaled by the speed factor, one frame per pass."""
        if self.renderer is None:
            self.renderer = Renderer()
        renderer = self.renderer
        frame_clock = pygame.time.Clock()
        accumulator = 0.0
        fixed_dt = self.physics.time_step
        last = time.perf_counter()

        while renderer.process_events():
            now = time.perf_counter()
            delta_real, last = now - last, now
            if not self.paused:
                accumulator += delta_real * self.speed_factor
                while accumulator >= fixed_dt:
                    self._poll_input(renderer)
                    self.update(fixed_dt)
                    accumulator -= fixed_dt
            else:
                self._poll_input(renderer)

            energy = self.physics.calculate_energy(self.bodies)
            renderer.render_frame(self.bodies, energy, self.show_energy, self.show_trails)
            frame_clock.tick(_FRAME_RATE)

    def shutdown(self) -> None:
        """Close the logs and the window."""
        for logger in (self.position_logger, self.energy_logger):
            if logger is not None:
                logger.close()
        if self.renderer is not None:
            self.renderer.close()

    def _poll_input(self, renderer: Renderer) -> None:
        if not renderer.has_focus():
            return
        keys = pygame.key.get_pressed()
        self.handle_keys({name for code, name in _WATCHED_KEYS.items() if keys[code]})

    def handle_keys(self, pressed: Collection[str]) -> None:
        """React to held keys, named as in ``pygame.key.name`` ("space", "+", "r", ...)."""
        if "space" in pressed:
            self.paused = not self.paused
        if "+" in pressed or "=" in pressed:
            self.speed_factor = min(
                self.speed_factor * constants.SPEED_MULTIPLIER, constants.MAX_SPEED
            )
        if "-" in pressed:
            self.speed_factor = max(
                self.speed_factor / constants.SPEED_MULTIPLIER, constants.MIN_SPEED
            )
        if "r" in pressed:
            self.reset_simulation()
        if "t" in pressed:
            self.show_trails = not self.show_trails
        if "e" in pressed:
            self.show_energy = not self.show_energy
        for key, preset in _PRESET_KEYS.items():
            if key in pressed:
                self.reset_simulation(preset)

    def update(self, dt: float) -> None:
        """One physics step, trail update and periodic position/energy logging."""
        self.physics.step_rk4(self.bodies)
        for body in self.bodies:
            body.update_trail()

        if self._log_step % constants.LOG_FREQUENCY == 0:
            now = float(self.physics.simulation_time)
            if self.position_logger is not None:
                for body in self.bodies:
                    x, y, z = (float(c) for c in body.position)
                    self.position_logger.write_line("{},{},{},{}", now, x, y, z)
            if self.energy_logger is not None:
                energy = self.physics.calculate_energy(self.bodies)
                self.energy_logger.write_line(
                    "{},{},{}",
                    now,
                    float(energy.total_energy),
                    float(energy.energy_drift),
                )
        self._log_step += 1

    def reset_simulation(self, preset_index: int = 0) -> None:
        """Replace the bodies with a preset and restart the engine."""
        self.bodies = preset_bodies(preset_index)
        self.physics.initialize(self.bodies)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive simulation; returns the process exit code."""
    parser = argparse.ArgumentParser(
        prog="threebody", description="Interactive 3-body gravitational simulation."
    )
    parser.parse_args(argv)

    try:
        app = Application()
        if not app.initialize():
            print("Failed to initialize application", file=sys.stderr)
            return 1
        print(_BANNER)
        try:
            app.run()
        finally:
            app.shutdown()
        print("Simulation completed successfully.")
        print("Check logs/ directory for detailed simulation data.")
    except Exception as exc:  # noqa: BLE001 - top-level guard
        print(f"Critical error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())