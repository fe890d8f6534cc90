"""Two-dimensional window view of the simulation: bodies, trails and energy text."""

from __future__ import annotations

import sys
from collections.abc import Sequence

import pygame

from . import constants
from .body import Body
from .state import EnergyInfo

_SCALE = 50.0  # pixels per simulation unit
_TRAIL_RGB = (180, 180, 180)
_TEXT_RGB = (255, 255, 255)
_FONT_SIZE = 14
_TEXT_POSITION = (10, 10)
_FONT_PATH = (
    "C:\\Windows\\Fonts\\consola.ttf"
    if sys.platform == "win32"
    else "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf"
)


def _to_rgb(color: Sequence[float]) -> tuple[int, int, int]:
    r, g, b = (max(0, min(255, int(c * 255.0))) for c in color)
    return r, g, b


def _load_font() -> pygame.font.Font | None:
    for source in (_FONT_PATH, None):
        try:
            return pygame.font.Font(source, _FONT_SIZE)
        except (OSError, pygame.error):
            continue
    return None


def format_energy(energy_info: EnergyInfo) -> str:
    """The one-line energy summary shown in the corner of the window."""
    return (
        f"E_tot = {energy_info.total_energy:.3e}  |  "
        f"drift = {energy_info.energy_drift:.3e} ({energy_info.relative_drift:.2f}%)"
    )


class Renderer:
    """Draws each body as a circle with an optional fading trail, x right and y up."""

    def __init__(
        self,
        width: int = constants.WINDOW_WIDTH,
        height: int = constants.WINDOW_HEIGHT,
        title: str = "3-Body Simulation",
    ) -> None:
        pygame.display.init()
        pygame.font.init()
        self._size = (int(width), int(height))
        self.surface = pygame.display.set_mode(self._size)
        pygame.display.set_caption(title)
        self._font = _load_font()
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    def close(self) -> None:
        """Close the window; further frames are ignored."""
        if self._open:
            pygame.display.quit()
            self._open = False

    def process_events(self) -> bool:
        """Drain pending window events and report whether the window is still open."""
        if not self._open:
            return False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.close()
        return self._open

    def has_focus(self) -> bool:
        return self._open and bool(pygame.key.get_focused())

    def world_to_screen(self, pos: Sequence[float]) -> tuple[float, float]:
        """Orthographic projection of a world position onto window pixels."""
        half_w = self._size[0] / 2.0
        half_h = self._size[1] / 2.0
        return half_w + float(pos[0]) * _SCALE, half_h - float(pos[1]) * _SCALE

    def _draw_trails(self, bodies: Sequence[Body]) -> None:
        overlay = pygame.Surface(self._size, pygame.SRCALPHA)
        for body in bodies:
            points = [self.world_to_screen(p) for p in body.trail]
            count = len(points)
            if count < 2:
                continue
            for idx, (start, end) in enumerate(zip(points, points[1:]), start=1):
                alpha = int(255 * constants.TRAIL_FADE_RATE ** (count - idx))
                pygame.draw.line(overlay, (*_TRAIL_RGB, alpha), start, end)
        self.surface.blit(overlay, (0, 0))

    def _draw_bodies(self, bodies: Sequence[Body]) -> None:
        for body in bodies:
            if not body.active:
                continue
            radius = min(
                max(body.radius, constants.MIN_BODY_SIZE), constants.MAX_BODY_SIZE
            )
            pygame.draw.circle(
                self.surface,
                _to_rgb(body.color),
                self.world_to_screen(body.position),
                radius,
            )

    def render_frame(
        self,
        bodies: Sequence[Body],
        energy_info: EnergyInfo,
        show_energy: bool,
        show_trails: bool,
    ) -> None:
        """Draw one frame and present it."""
        if not self._open:
            return
        self.surface.fill(_to_rgb(constants.BACKGROUND_COLOR))
        if show_trails:
            self._draw_trails(bodies)
        self._draw_bodies(bodies)
        if show_energy and self._font is not None:
            text = self._font.render(format_energy(energy_info), True, _TEXT_RGB)
            self.surface.blit(text, _TEXT_POSITION)
        pygame.display.flip()