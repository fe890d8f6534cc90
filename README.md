# threebody

An interactive simulation of the gravitational N-body problem, set up for
three bodies. Bodies attract one another under Newtonian gravity (SI
gravitational constant, with a small softening term). A fourth-order
Runge–Kutta integrator moves them forward in time. Two bodies that come within
twice the sum of their radii merge into one; mass, momentum and volume are
conserved and the colour is mass-weighted. A pygame window draws each body,
its recent trail and the total energy of the system with its drift.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
threebody
```

The command takes no options besides `--help`. It reads its initial
conditions from `config/initial_conditions.json` in the working directory. If
that file is missing or lists no bodies, it starts with the simple default
preset. It creates `logs/` and `config/` if needed and, every 100 physics
steps, appends one line per body to `logs/positions.csv`
(`time,x,y,z`) and one line to `logs/energy_log.csv`
(`time,total_energy,energy_drift`). Both files are truncated at start-up.

The program exits with status 0 when the window is closed, and with status 1
after printing `Critical error: ...` if anything fails, for example a
configuration file that is not valid JSON.

### Configuration file

```json
{
  "bodies": [
    {"mass": 1.0, "radius": 1.0,
     "position": [-5, 0, 0], "velocity": [0, 0.8, 0], "color": [1.0, 0.3, 0.3]},
    {"mass": 1.0, "radius": 1.0,
     "position": [5, 0, 0], "velocity": [0, -0.8, 0], "color": [0.3, 1.0, 0.3]}
  ]
}
```

`mass` and `radius` default to 1.0 when left out. `position`, `velocity` and
`color` are required arrays of three numbers; colour components run from 0 to
1. A malformed entry raises `ValueError`.

### Controls

Keys act while they are held down and the window has focus.

| Key       | Action                                 |
|-----------|----------------------------------------|
| SPACE     | Pause / resume                         |
| R         | Reset to the default preset            |
| + or =    | Speed up (×1.5, at most 100×)          |
| -         | Slow down (÷1.5, at least 0.01×)       |
| 1, 2, 3   | Figure-8, triangular, chaotic preset   |
| T         | Toggle trails                          |
| E         | Toggle the energy display              |

Close the window to quit.

The view is an orthographic projection onto the x–y plane at 50 pixels per
unit, centred on the origin.

## Library use

```python
from threebody.app import preset_bodies
from threebody.physics import PhysicsEngine

bodies = preset_bodies(1)          # figure-8 orbit
engine = PhysicsEngine(0.01)
engine.initialize(bodies)
for _ in range(1000):
    engine.step_rk4(bodies)

energy = engine.calculate_energy(bodies)
print(energy.total_energy, energy.relative_drift)
print(engine.performance_stats())
```

- `threebody.body` — `Body` (kinetic energy, momentum, distances, collision
  test, merging, a trail of at most 2000 points) and the helpers
  `center_of_mass`, `total_momentum` and `total_mass`, which count only active
  bodies.
- `threebody.physics` — `PhysicsEngine` with `step_rk4`, `step_euler` and
  `step_verlet`, `handle_collisions` (one merge per call), `calculate_energy`,
  `is_system_stable`, `performance_stats`, `estimate_error` and
  `adjust_time_step`. The time step is clamped to 1e-6 … 1.0.
- `threebody.state` — `SystemState`, `EnergyInfo`, `PerformanceStats`,
  `compute_accelerations` and `pair_potential_energy`.
- `threebody.config` — `ConfigManager`, which loads bodies from a JSON file.
- `threebody.logger` — `Logger`, a thread-safe writer of `str.format` lines,
  usable as a context manager.
- `threebody.renderer` — `Renderer` and `format_energy`.
- `threebody.app` — `Application`, `preset_bodies` and `main`.

## Limitations

- The presets use masses of 1 kg with the SI gravitational constant, so their
  mutual attraction is tiny and the bodies move almost in straight lines.
- `set_adaptive_time_step` only records the setting; no step method changes
  the time step by itself. `estimate_error` and `adjust_time_step` return
  values for a caller to apply.
- The interactive loop always integrates with RK4; Euler and Verlet are
  available only through the library.
- There is no 3-D view: the z coordinate is simulated but not drawn.