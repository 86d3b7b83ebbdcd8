# MIT License (see LICENSE)
"""
Default simulation constants.

Values match the demo scene the solver was tuned against: a 60-unit cloth
hanging at y=30 above three spheres, dropped with a strong gravity so it
settles in a couple of seconds of simulated time.
"""
from __future__ import annotations

# Gravity is deliberately exaggerated (units are "cloth units", not metres).
DEFAULT_GRAVITY: tuple[float, float, float] = (0.0, -40.0, 0.0)

DEFAULT_DT: float = 0.03
DEFAULT_DAMPING: float = 0.95

# Relaxation passes per time step. Observed configurations use 3 to 50;
# pleating needs the upper end.
DEFAULT_ITERATIONS: int = 15

# Times the texture image repeats across the cloth.
DEFAULT_TEX_REPEATS: float = 3.0

# Below this length a sphere-to-particle vector has no usable direction.
DEGENERATE_EPS: float = 1e-12

# Curtain pin spacing along the first row.
CURTAIN_PIN_STRIDE: int = 4
PLEAT_PIN_STRIDE: int = 10
PLEAT_SHRINK: float = 0.7

# Logging: package logger name and record layout used by setup_logging().
LOGGER_NAME: str = "cloth_sim"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT: str = "%H:%M:%S"
