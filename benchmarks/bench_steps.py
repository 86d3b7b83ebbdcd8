"""
Microbenchmark: time per step vs grid resolution and solver mode.
Run:
  python benchmarks/bench_steps.py
"""
import time
from cloth_sim import Cloth, ClothConfig, CollisionMode
from cloth_sim.profiler import Profiler

def run(n: int, solver: str, steps: int = 100):
    prof = Profiler()
    cloth = Cloth(
        ClothConfig(
            nx=n,
            ny=n,
            dx=60.0 / n,
            dy=60.0 / n,
            iterations=15,
            collision_mode=CollisionMode.SPHERES,
            solver=solver,
            seed=12345,  # determinism
        ),
        profiler=prof,
    )

    # warmup
    for _ in range(10):
        cloth.time_step()
    prof.stats.clear()

    t0 = time.perf_counter()
    for _ in range(steps):
        cloth.time_step()
    t1 = time.perf_counter()

    total = t1 - t0
    per_step = total / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for solver in ["colored", "gauss_seidel"]:
        for n in [10, 20, 30, 60]:
            if solver == "gauss_seidel" and n > 30:
                continue
            per_step, summary = run(n, solver)
            print(f"{solver:12s} {n:3d}x{n:<3d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
            for k in ["forces", "integrate", "relax"]:
                if k in summary:
                    print(" ", k, summary[k])
            print()
