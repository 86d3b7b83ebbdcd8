# MIT License (see LICENSE)
"""
JSON serialization of cloth configurations and collider sets.

JSON Schema Overview:
---------------------
{
  "cloth": {
    "nx": int, "ny": int,            # Grid points, default 30 x 30
    "dx": float, "dy": float,        # Rest spacing, default 2.0
    "center": [x, y, z],             # Default [0, 30, 0]
    "dt": float,                     # Default 0.03
    "damping": float,                # (0, 1], default 0.95
    "gravity": [gx, gy, gz],         # Default [0, -40, 0]
    "style": string,                 # "tablecloth" | "curtain" |
                                     # "sliding_curtain" | "pleated_curtain"
    "stiffening": int,               # Default 1 (off)
    "iterations": int,               # Relaxation passes, default 15
    "collision_mode": string,        # "none" | "spheres" | "boxes" |
                                     # "inside_boxes" | "quads"
    "solver": string,                # "gauss_seidel" | "colored"
    "tex_repeats": float,            # Default 3.0
    "seed": int | null
  },
  "colliders": {                     # Optional; demo layout if missing
    "spheres": [{"center": [x, y, z], "radius": float}],
    "boxes":   [{"min": [x, y, z], "max": [x, y, z], "contain": bool}],
    "quads":   [{"corners": [[x, y, z] x4], "normal": [x, y, z], "band": float}]
  }
}

Only non-default cloth fields are written. Unknown keys are ignored for
forward compatibility.
"""
from __future__ import annotations
import json
import logging
from dataclasses import fields
from typing import Any

import numpy as np

from ..config import ClothConfig, ClothConfigError
from ..collision.manager import ColliderSet
from ..collision.shapes import Sphere, Aabb, CollisionQuad
from ..cloth import Cloth

logger = logging.getLogger(__name__)

_TUPLE_FIELDS = ("center", "gravity")


def config_to_json(config: ClothConfig) -> dict[str, Any]:
    """Serialize the non-default fields of a ClothConfig."""
    default = ClothConfig()
    out: dict[str, Any] = {}
    for f in fields(ClothConfig):
        value = getattr(config, f.name)
        if value == getattr(default, f.name):
            continue
        if f.name in ("style", "collision_mode"):
            value = value.value
        elif f.name in _TUPLE_FIELDS:
            value = list(value)
        out[f.name] = value
    return out


def config_from_json(d: dict[str, Any]) -> ClothConfig:
    """
    Build a validated ClothConfig from a dictionary.

    Raises:
        ClothConfigError: If a value is invalid.
    """
    known = {f.name for f in fields(ClothConfig)}
    kwargs = {k: v for k, v in d.items() if k in known}
    for name in _TUPLE_FIELDS:
        if name in kwargs:
            kwargs[name] = tuple(kwargs[name])
    try:
        config = ClothConfig(**kwargs)
    except (TypeError, ValueError) as e:
        raise ClothConfigError(f"Invalid cloth configuration: {e}") from e
    config.validate()
    return config


def colliders_to_json(colliders: ColliderSet) -> dict[str, Any]:
    """Serialize every collider (the mode lives in the cloth config)."""
    return {
        "spheres": [
            {"center": _to_list(s.center), "radius": s.radius} for s in colliders.spheres
        ],
        "boxes": [
            {"min": _to_list(b.lo), "max": _to_list(b.hi), "contain": b.contain} for b in colliders.boxes
        ],
        "quads": [
            {"corners": q.corners.tolist(), "normal": _to_list(q.normal), "band": q.band} for q in colliders.quads
        ],
    }


def colliders_from_json(d: dict[str, Any]) -> ColliderSet:
    """
    Parse a collider set.

    Raises:
        ValueError: If a collider is missing a field or has invalid geometry.
    """
    try:
        spheres = [Sphere(center=s["center"], radius=float(s["radius"])) for s in d.get("spheres", [])]
        boxes = [
            Aabb(lo=b["min"], hi=b["max"], contain=bool(b.get("contain", False)))
            for b in d.get("boxes", [])
        ]
        quads = [
            CollisionQuad(corners=q["corners"], normal=q["normal"], band=float(q.get("band", 0.5)))
            for q in d.get("quads", [])
        ]
    except KeyError as e:
        raise ValueError(f"Collider definition missing required field {e}") from e
    return ColliderSet(spheres=spheres, boxes=boxes, quads=quads)


def cloth_to_json(cloth: Cloth) -> dict[str, Any]:
    """Serialize a cloth's configuration and colliders (not particle state)."""
    return {
        "cloth": config_to_json(cloth.config),
        "colliders": colliders_to_json(cloth.colliders),
    }


def load_cloth_raw(path: str) -> dict[str, Any]:
    """Load raw JSON data from a cloth file without building anything."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_cloth(path: str) -> Cloth:
    """
    Build a Cloth at rest from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ClothConfigError / ValueError: If the content is invalid.
    """
    logger.info("Loading cloth from %s", path)
    data = load_cloth_raw(path)
    config = config_from_json(data.get("cloth", {}))
    colliders = colliders_from_json(data["colliders"]) if "colliders" in data else None
    return Cloth(config=config, colliders=colliders)


def save_cloth(cloth: Cloth, path: str, indent: int = 2) -> None:
    """Save a cloth's configuration and colliders to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(cloth_to_json(cloth), f, indent=indent)
    logger.info("Saved cloth configuration to %s", path)


def _to_list(arr: Any) -> list[float]:
    """Convert numpy array or tuple to a plain list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
