# examples/tablecloth_spheres.py
import sys

from cloth_sim import Cloth, ClothConfig
from cloth_sim.profiler import Profiler
from cloth_sim.renderer import DebugRenderer
from cloth_sim.logging_config import setup_logging

setup_logging()

profiler = Profiler()
cloth = Cloth(ClothConfig(stiffening=2, solver="colored", seed=0), profiler=profiler)
renderer = DebugRenderer(sys.stdout, verbose=True)

for frame in range(300):
    cloth.time_step()
    if frame % 100 == 0:
        renderer.render_cloth(cloth)

# nudge the spheres and let the cloth settle again
cloth.move_colliders((3.0, 0.0, 0.0))
for _ in range(100):
    cloth.time_step()
renderer.render_cloth(cloth)

for name, stats in profiler.stats.summary().items():
    print(f"{name:10s} mean={stats['mean_ms']:.3f} ms  max={stats['max_ms']:.3f} ms")
