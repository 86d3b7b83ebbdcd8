# examples/export_tri.py
"""
Drop a tablecloth on the quad table, drag a corner and export the mesh.

Run:
  python examples/export_tri.py out.tri [cloth.json]
"""
import sys

from cloth_sim import Cloth, ClothConfig, CollisionMode
from cloth_sim.io import load_cloth, save_cloth, write_tri_model
from cloth_sim.logging_config import setup_logging

setup_logging()

out = sys.argv[1] if len(sys.argv) > 1 else "cloth.tri"
if len(sys.argv) > 2:
    cloth = load_cloth(sys.argv[2])
else:
    cloth = Cloth(ClothConfig(nx=24, ny=24, center=(0.0, 10.0, 0.0), collision_mode=CollisionMode.QUADS, seed=3))

for _ in range(120):
    cloth.time_step()
print("contact pins:", len(cloth.contact_pins))

corner = cloth.positions[cloth.num_particles - 1]
print("grabbed:", cloth.grab(corner))
for _ in range(30):
    cloth.move_grabbed((0.0, 0.5, 0.0))
    cloth.time_step()
cloth.release()

write_tri_model(out, cloth.positions, cloth.triangles)
save_cloth(cloth, out.rsplit(".", 1)[0] + ".json")
