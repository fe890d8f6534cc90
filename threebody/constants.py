"""Physical constants, simulation parameters and preset initial conditions."""

from __future__ import annotations

Vec3 = tuple[float, float, float]

# Physical constants
G: float = 6.67430e-11  # Gravitational constant (m^3 / kg s^2)
EARTH_MASS: float = 5.972e24  # kg
EARTH_RADIUS: float = 6.371e6  # m
AU: float = 1.496e11  # m

# Simulation parameters
DEFAULT_TIME_STEP: float = 0.01
MIN_TIME_STEP: float = 1e-6
MAX_TIME_STEP: float = 1.0
COLLISION_FACTOR: float = 2.0
ENERGY_TOLERANCE: float = 1e-6

# Graphics
WINDOW_WIDTH: int = 1200
WINDOW_HEIGHT: int = 800
FOV: float = 45.0
NEAR_PLANE: float = 0.1
FAR_PLANE: float = 1000.0

# Rendering
MAX_TRAIL_POINTS: int = 2000
TRAIL_FADE_RATE: float = 0.995
MIN_BODY_SIZE: float = 2.0
MAX_BODY_SIZE: float = 50.0

# Colours (RGB, 0..1)
BODY_COLOR_1: Vec3 = (1.0, 0.3, 0.3)
BODY_COLOR_2: Vec3 = (0.3, 1.0, 0.3)
BODY_COLOR_3: Vec3 = (0.3, 0.3, 1.0)
BACKGROUND_COLOR: Vec3 = (0.02, 0.02, 0.05)
TRAIL_COLOR: Vec3 = (0.7, 0.7, 0.7)
TEXT_COLOR: Vec3 = (1.0, 1.0, 1.0)

# Physics integration
SOFTENING_PARAMETER: float = 1e-10
RK4_SUBSTEPS: int = 4

# Logging and output
LOG_FREQUENCY: int = 100
ENERGY_CHECK_FREQUENCY: int = 10
MAX_LOG_ENTRIES: int = 1_000_000

# Input
SPEED_MULTIPLIER: float = 1.5
MIN_SPEED: float = 0.01
MAX_SPEED: float = 100.0

# File paths
CONFIG_FILE: str = "config/initial_conditions.json"
LOG_FILE: str = "logs/simulation.log"
ENERGY_FILE: str = "logs/energy_log.csv"
POSITION_FILE: str = "logs/positions.csv"

# Presets: figure-8 orbit (Chenciner-Montgomery solution)
FIGURE8_MASS: float = 1.0
FIGURE8_POS_1: Vec3 = (-0.97000436, 0.24308753, 0.0)
FIGURE8_POS_2: Vec3 = (-FIGURE8_POS_1[0], -FIGURE8_POS_1[1], 0.0)
FIGURE8_POS_3: Vec3 = (0.0, 0.0, 0.0)
FIGURE8_VEL_1: Vec3 = (0.466203685, 0.43236573, 0.0)
FIGURE8_VEL_2: Vec3 = (FIGURE8_VEL_1[0], FIGURE8_VEL_1[1], 0.0)
FIGURE8_VEL_3: Vec3 = (-2.0 * FIGURE8_VEL_1[0], -2.0 * FIGURE8_VEL_1[1], 0.0)

# Presets: triangular orbit
TRIANGLE_MASS: float = 1.0
TRIANGLE_RADIUS: float = 2.0
TRIANGLE_VELOCITY: float = 0.5

# Presets: chaotic system
CHAOS_MASS_1: float = 1.0
CHAOS_MASS_2: float = 1.5
CHAOS_MASS_3: float = 0.8