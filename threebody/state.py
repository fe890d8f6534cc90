"""Integrator state vectors, energy and performance records, and pairwise gravity."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from . import constants
from .body import Body


def _as_rows(values: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    array = np.array(values, dtype=np.float64)
    if array.size == 0:
        return np.zeros((0, 3))
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"expected an (n, 3) array, got shape {array.shape}")
    return array


@dataclass
class SystemState:
    """Positions and velocities of every body, as (n, 3) arrays."""

    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    velocities: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))

    def __post_init__(self) -> None:
        self.positions = _as_rows(self.positions)
        self.velocities = _as_rows(self.velocities)
        if self.positions.shape != self.velocities.shape:
            raise ValueError(
                "positions and velocities differ in shape: "
                f"{self.positions.shape} vs {self.velocities.shape}"
            )

    def __len__(self) -> int:
        return len(self.positions)

    @classmethod
    def from_bodies(cls, bodies: Sequence[Body]) -> SystemState:
        """Snapshot the positions and velocities of ``bodies``."""
        return cls(
            np.array([b.position for b in bodies], dtype=np.float64).reshape(-1, 3),
            np.array([b.velocity for b in bodies], dtype=np.float64).reshape(-1, 3),
        )

    def apply_to(self, bodies: Sequence[Body]) -> None:
        """Write the state back into ``bodies``; extra entries on either side are ignored."""
        for body, position, velocity in zip(bodies, self.positions, self.velocities):
            body.position = position
            body.velocity = velocity

    def __add__(self, other: SystemState) -> SystemState:
        if not isinstance(other, SystemState):
            return NotImplemented
        if len(self) != len(other):
            raise ValueError(
                f"cannot add states of {len(self)} and {len(other)} bodies"
            )
        return SystemState(
            self.positions + other.positions, self.velocities + other.velocities
        )

    def __mul__(self, scalar: float) -> SystemState:
        if not isinstance(scalar, (int, float, np.floating, np.integer)):
            return NotImplemented
        factor = float(scalar)
        return SystemState(self.positions * factor, self.velocities * factor)

    def __rmul__(self, scalar: float) -> SystemState:
        return self.__mul__(scalar)


@dataclass
class EnergyInfo:
    """Energy of the system and its drift from the initial value."""

    kinetic_energy: float = 0.0
    potential_energy: float = 0.0
    total_energy: float = 0.0
    energy_drift: float = 0.0
    relative_drift: float = 0.0  # percent


@dataclass
class PerformanceStats:
    """Running statistics of the integrator."""

    avg_step_time: float = 0.0  # milliseconds
    collision_count: int = 0
    total_steps: int = 0
    max_energy_drift: float = 0.0


def compute_accelerations(
    positions: Sequence[Sequence[float]] | np.ndarray, bodies: Sequence[Body]
) -> np.ndarray:
    """Softened gravitational acceleration of each position due to the other active bodies.

    ``positions[i]`` stands for ``bodies[i]``; masses and activity come from the bodies.
    """
    pos = _as_rows(positions)
    accelerations = np.zeros_like(pos)
    count = len(bodies)
    if count == 0:
        return accelerations
    if len(pos) < count:
        raise ValueError(f"{count} bodies but only {len(pos)} positions")

    active = np.array([b.active for b in bodies], dtype=bool)
    masses = np.array([b.mass for b in bodies], dtype=np.float64)
    p = pos[:count]

    displacement = p[np.newaxis, :, :] - p[:, np.newaxis, :]  # [i, j] = p[j] - p[i]
    softened = np.einsum("ijk,ijk->ij", displacement, displacement)
    softened = softened + constants.SOFTENING_PARAMETER
    weight = constants.G * masses[np.newaxis, :] / (softened * np.sqrt(softened))

    mask = active[:, np.newaxis] & active[np.newaxis, :] & ~np.eye(count, dtype=bool)
    weight = np.where(mask, weight, 0.0)

    accelerations[:count] = np.einsum("ij,ijk->ik", weight, displacement)
    return accelerations


def pair_potential_energy(body1: Body, body2: Body) -> float:
    """Gravitational potential energy -G m1 m2 / r, with r floored by the softening."""
    distance = max(body1.distance_to(body2), constants.SOFTENING_PARAMETER)
    return -constants.G * body1.mass * body2.mass / distance