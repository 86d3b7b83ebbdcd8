# examples/hanging_curtain.py
import numpy as np

from cloth_sim import Cloth, ClothConfig, ClothStyle, CollisionMode
from cloth_sim.core import max_rod_error, kinetic_energy
from cloth_sim.logging_config import setup_logging

setup_logging()

cloth = Cloth(ClothConfig(nx=20, ny=20, style=ClothStyle.CURTAIN, collision_mode=CollisionMode.NONE, seed=1))

for _ in range(200):
    cloth.time_step()

print("t:", cloth.time)
print("lowest point:", cloth.positions[:, 1].min())
print("max rod error:", max_rod_error(cloth.positions, cloth.constraints))
print("kinetic energy:", kinetic_energy(cloth.particles, cloth.config.dt))

# same curtain hung on a sliding rail, then gathered into pleats
for style in (ClothStyle.SLIDING_CURTAIN, ClothStyle.PLEATED_CURTAIN):
    cloth.reset(style)
    for _ in range(200):
        cloth.time_step()
    print(style.value, "width:", float(np.ptp(cloth.positions[:, 0])))
