"""Gravitating bodies and helpers over collections of them."""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Iterable, Sequence

import numpy as np

from . import constants

Color = tuple[float, float, float]


def _vec(value: Sequence[float] | np.ndarray) -> np.ndarray:
    array = np.array(value, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {array.shape}")
    return array


class Body:
    """A point mass with a radius, colour and a bounded position trail."""

    def __init__(
        self,
        mass: float = 1.0,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        velocity: Sequence[float] = (0.0, 0.0, 0.0),
        radius: float = 1.0,
        color: Color = (1.0, 1.0, 1.0),
    ) -> None:
        self.mass = float(mass)
        self.position = position
        self.velocity = velocity
        self.acceleration = np.zeros(3)
        self.radius = float(radius)
        self.active = True
        self.color: Color = tuple(float(c) for c in color)  # type: ignore[assignment]
        self.trail: deque[np.ndarray] = deque(maxlen=constants.MAX_TRAIL_POINTS)
        self.initial_position = self.position.copy()
        self.initial_velocity = self.velocity.copy()

    @property
    def position(self) -> np.ndarray:
        return self._position

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = _vec(value)

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity

    @velocity.setter
    def velocity(self, value: Sequence[float]) -> None:
        self._velocity = _vec(value)

    def kinetic_energy(self) -> float:
        """Return 1/2 m v^2."""
        return 0.5 * self.mass * float(np.dot(self.velocity, self.velocity))

    def momentum(self) -> np.ndarray:
        """Return m v."""
        return self.mass * self.velocity

    def distance_to(self, other: Body) -> float:
        return float(np.linalg.norm(self.position - other.position))

    def squared_distance_to(self, other: Body) -> float:
        displacement = self.position - other.position
        return float(np.dot(displacement, displacement))

    def is_colliding_with(self, other: Body) -> bool:
        """True when both bodies are active and within the collision distance."""
        if not (self.active and other.active):
            return False
        reach = constants.COLLISION_FACTOR * (self.radius + other.radius)
        return self.squared_distance_to(other) <= reach * reach

    def merge_with(self, other: Body) -> Body:
        """Return a new body conserving mass, momentum and volume."""
        total = self.mass + other.mass
        velocity = (self.momentum() + other.momentum()) / total
        position = (self.mass * self.position + other.mass * other.position) / total
        volume1 = (4.0 / 3.0) * math.pi * self.radius**3
        volume2 = (4.0 / 3.0) * math.pi * other.radius**3
        radius = ((volume1 + volume2) * 3.0 / (4.0 * math.pi)) ** (1.0 / 3.0)
        color = tuple(
            (self.mass * a + other.mass * b) / total
            for a, b in zip(self.color, other.color)
        )
        return Body(total, position, velocity, radius, color)  # type: ignore[arg-type]

    def gravitational_acceleration(self, other: Body) -> np.ndarray:
        """Softened acceleration this body feels from ``other``."""
        if not (self.active and other.active):
            return np.zeros(3)
        displacement = other.position - self.position
        softened = float(np.dot(displacement, displacement)) + constants.SOFTENING_PARAMETER
        distance = math.sqrt(softened)
        magnitude = constants.G * other.mass / softened
        return magnitude * (displacement / distance)

    def apply_gravitational_force(self, other: Body, dt: float) -> None:
        """Accumulate the pull of ``other`` into the current acceleration."""
        if not (self.active and other.active):
            return
        self.acceleration = self.acceleration + self.gravitational_acceleration(other)

    def update_motion(self, dt: float) -> None:
        """Advance velocity and position by ``dt`` and clear the acceleration."""
        if not self.active:
            return
        self.velocity = self.velocity + self.acceleration * dt
        self.position = (
            self.position + self.velocity * dt + 0.5 * self.acceleration * dt * dt
        )
        self.acceleration = np.zeros(3)

    def update_trail(self) -> None:
        """Record the current position; the oldest points fall off past the limit."""
        if not self.active:
            return
        self.trail.append(self.position.copy())

    def clear_trail(self) -> None:
        self.trail.clear()

    def reset(
        self, initial_position: Sequence[float], initial_velocity: Sequence[float]
    ) -> None:
        """Put the body back at a new initial state, active and without a trail."""
        self.initial_position = _vec(initial_position)
        self.initial_velocity = _vec(initial_velocity)
        self.position = self.initial_position
        self.velocity = self.initial_velocity
        self.acceleration = np.zeros(3)
        self.active = True
        self.clear_trail()

    def __str__(self) -> str:
        px, py, pz = self.position
        vx, vy, vz = self.velocity
        return (
            f"Body[m={self.mass:.3f}kg, "
            f"pos=({px:.3f},{py:.3f},{pz:.3f}), "
            f"vel=({vx:.3f},{vy:.3f},{vz:.3f}), "
            f"r={self.radius:.3f}m, active={'true' if self.active else 'false'}]"
        )


def center_of_mass(bodies: Iterable[Body]) -> np.ndarray:
    """Mass-weighted mean position of the active bodies (origin if massless)."""
    weighted = np.zeros(3)
    mass = 0.0
    for body in bodies:
        if body.active:
            weighted += body.mass * body.position
            mass += body.mass
    return weighted / mass if mass > 0.0 else weighted


def total_momentum(bodies: Iterable[Body]) -> np.ndarray:
    """Sum of the momenta of the active bodies."""
    result = np.zeros(3)
    for body in bodies:
        if body.active:
            result += body.momentum()
    return result


def total_mass(bodies: Iterable[Body]) -> float:
    """Sum of the masses of the active bodies."""
    return sum(body.mass for body in bodies if body.active)