"""Gravitational N-body integrator with collision merging and energy tracking."""

from __future__ import annotations

import dataclasses
import itertools
import time
from collections import deque
from collections.abc import MutableSequence, Sequence

import numpy as np

from . import constants
from .body import Body
from .state import (
    EnergyInfo,
    PerformanceStats,
    SystemState,
    compute_accelerations,
    pair_potential_energy,
)

_STEP_TIME_WINDOW = 100
_MAX_DISTANCE = 1000.0 * constants.AU
_MAX_SPEED = 1e6


def _positions_of(bodies: Sequence[Body]) -> np.ndarray:
    return np.array([body.position for body in bodies], dtype=np.float64).reshape(-1, 3)


class PhysicsEngine:
    """Advances a list of bodies in time with RK4, Euler or velocity Verlet steps."""

    def __init__(self, time_step: float = constants.DEFAULT_TIME_STEP) -> None:
        self.min_time_step = constants.MIN_TIME_STEP
        self.max_time_step = constants.MAX_TIME_STEP
        self.time_step = time_step
        self.simulation_time = 0.0
        self.step_count = 0
        self.initial_energy = 0.0
        self._energy_initialized = False
        self.adaptive_time_step = False
        self.tolerance = 1e-6
        self._stats = PerformanceStats()
        self._step_times: deque[float] = deque(maxlen=_STEP_TIME_WINDOW)
        self._prev_accelerations = np.zeros((0, 3))

    @property
    def time_step(self) -> float:
        return self._time_step

    @time_step.setter
    def time_step(self, value: float) -> None:
        self._time_step = min(max(float(value), self.min_time_step), self.max_time_step)

    def initialize(self, bodies: Sequence[Body]) -> None:
        """Reset the counters and record the initial energy and accelerations."""
        self.reset()
        self.initial_energy = self.calculate_energy(bodies).total_energy
        self._energy_initialized = True
        self._prev_accelerations = self.accelerations(_positions_of(bodies), bodies)

    def _derivatives(self, state: SystemState, bodies: Sequence[Body]) -> SystemState:
        return SystemState(
            state.velocities.copy(), self.accelerations(state.positions, bodies)
        )

    def step_rk4(self, bodies: MutableSequence[Body]) -> None:
        """Advance one fourth-order Runge-Kutta step, then resolve one collision."""
        start = time.perf_counter()
        dt = self.time_step

        initial = SystemState.from_bodies(bodies)
        k1 = self._derivatives(initial, bodies) * dt

        temp = initial + k1 * 0.5
        temp.apply_to(bodies)
        k2 = self._derivatives(temp, bodies) * dt

        temp = initial + k2 * 0.5
        temp.apply_to(bodies)
        k3 = self._derivatives(temp, bodies) * dt

        temp = initial + k3
        temp.apply_to(bodies)
        k4 = self._derivatives(temp, bodies) * dt

        final = initial + (k1 + k2 * 2.0 + k3 * 2.0 + k4) * (1.0 / 6.0)
        final.apply_to(bodies)

        for body in bodies:
            body.update_trail()

        collided = self.handle_collisions(bodies)
        self.simulation_time += dt
        self.step_count += 1

        drift = 0.0
        if self._energy_initialized:
            drift = abs(self.calculate_energy(bodies).energy_drift)

        self._update_stats((time.perf_counter() - start) * 1000.0, collided, drift)

    def step_euler(self, bodies: MutableSequence[Body]) -> None:
        """Advance one explicit Euler step, then resolve one collision."""
        start = time.perf_counter()
        dt = self.time_step
        accelerations = self.accelerations(_positions_of(bodies), bodies)

        for body, acceleration in zip(bodies, accelerations):
            if not body.active:
                continue
            old_velocity = body.velocity.copy()
            body.velocity = old_velocity + acceleration * dt
            body.position = body.position + old_velocity * dt
            body.update_trail()

        collided = self.handle_collisions(bodies)
        self.simulation_time += dt
        self.step_count += 1
        self._update_stats((time.perf_counter() - start) * 1000.0, collided, 0.0)

    def step_verlet(self, bodies: MutableSequence[Body]) -> None:
        """Advance one velocity Verlet step, then resolve one collision."""
        start = time.perf_counter()
        dt = self.time_step

        previous = self._prev_accelerations
        if previous.shape != (len(bodies), 3):
            previous = self.accelerations(_positions_of(bodies), bodies)

        for body, acceleration in zip(bodies, previous):
            if body.active:
                body.position = (
                    body.position + body.velocity * dt + 0.5 * acceleration * dt * dt
                )

        new_accelerations = self.accelerations(_positions_of(bodies), bodies)

        for body, old, new in zip(bodies, previous, new_accelerations):
            if body.active:
                body.velocity = body.velocity + 0.5 * (old + new) * dt
                body.update_trail()

        self._prev_accelerations = new_accelerations

        collided = self.handle_collisions(bodies)
        self.simulation_time += dt
        self.step_count += 1
        self._update_stats((time.perf_counter() - start) * 1000.0, collided, 0.0)

    def handle_collisions(self, bodies: MutableSequence[Body]) -> bool:
        """Merge the first colliding pair found; the second body is deactivated."""
        for i, j in itertools.combinations(range(len(bodies)), 2):
            first, second = bodies[i], bodies[j]
            if first.active and second.active and first.is_colliding_with(second):
                bodies[i] = first.merge_with(second)
                second.active = False
                self._stats.collision_count += 1
                return True
        return False

    def calculate_energy(self, bodies: Sequence[Body]) -> EnergyInfo:
        """Kinetic, potential and total energy of the active bodies, with drift."""
        energy = EnergyInfo()
        energy.kinetic_energy = sum(
            (body.kinetic_energy() for body in bodies if body.active), 0.0
        )
        energy.potential_energy = sum(
            (
                self.potential_energy(a, b)
                for a, b in itertools.combinations(bodies, 2)
                if a.active and b.active
            ),
            0.0,
        )
        energy.total_energy = energy.kinetic_energy + energy.potential_energy

        if self._energy_initialized:
            energy.energy_drift = energy.total_energy - self.initial_energy
            if abs(self.initial_energy) > 1e-15:
                energy.relative_drift = energy.energy_drift / self.initial_energy * 100.0
        return energy

    def potential_energy(self, body1: Body, body2: Body) -> float:
        return pair_potential_energy(body1, body2)

    def is_system_stable(self, bodies: Sequence[Body]) -> bool:
        """False if an active body is beyond 1000 AU or faster than 1e6 m/s."""
        for body in bodies:
            if not body.active:
                continue
            if float(np.linalg.norm(body.position)) > _MAX_DISTANCE:
                return False
            if float(np.linalg.norm(body.velocity)) > _MAX_SPEED:
                return False
        return True

    def reset(self) -> None:
        """Zero the clock, the step counter and the statistics."""
        self.simulation_time = 0.0
        self.step_count = 0
        self._energy_initialized = False
        self._stats = PerformanceStats()
        self._step_times.clear()

    def set_adaptive_time_step(self, adaptive: bool, tolerance: float = 1e-6) -> None:
        self.adaptive_time_step = bool(adaptive)
        self.tolerance = float(tolerance)

    def performance_stats(self) -> PerformanceStats:
        """A snapshot of the statistics, with the average over recent steps."""
        result = dataclasses.replace(self._stats, total_steps=self.step_count)
        if self._step_times:
            result.avg_step_time = sum(self._step_times) / len(self._step_times)
        return result

    def accelerations(
        self, positions: Sequence[Sequence[float]] | np.ndarray, bodies: Sequence[Body]
    ) -> np.ndarray:
        return compute_accelerations(positions, bodies)

    def estimate_error(self, bodies: Sequence[Body], dt: float) -> float:
        """Crude local error estimate: max of dt^2 |v| / (|r| + 1) over active bodies."""
        errors = (
            dt * dt * float(np.linalg.norm(body.velocity))
            / (float(np.linalg.norm(body.position)) + 1.0)
            for body in bodies
            if body.active
        )
        return max(errors, default=0.0)

    def adjust_time_step(self, error: float) -> float:
        """Proposed time step: grow when error is tiny, shrink when too large."""
        if error < self.tolerance * 0.1:
            return min(self.time_step * 1.2, self.max_time_step)
        if error > self.tolerance:
            return max(self.time_step * 0.8, self.min_time_step)
        return self.time_step

    def _update_stats(
        self, step_time: float, collision_occurred: bool, energy_drift: float
    ) -> None:
        self._step_times.append(step_time)
        self._stats.max_energy_drift = max(self._stats.max_energy_drift, energy_drift)