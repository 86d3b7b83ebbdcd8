# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides:
    - JSON persistence of cloth configurations and collider sets.
    - Export of the current mesh to the .tri triangle format.

Typical usage:
    from cloth_sim.io import load_cloth, save_cloth, write_tri_model

    cloth = load_cloth("curtain.json")
    write_tri_model("tablecloth.tri", cloth.positions, cloth.triangles)
"""
from .json_io import (
    load_cloth,
    load_cloth_raw,
    save_cloth,
    cloth_to_json,
    config_to_json,
    config_from_json,
    colliders_to_json,
    colliders_from_json,
)
from .tri_io import write_tri_model, read_tri_model

__all__ = [
    # Loading
    "load_cloth",
    "load_cloth_raw",
    # Saving
    "save_cloth",
    # Serialization
    "cloth_to_json",
    "config_to_json",
    "config_from_json",
    "colliders_to_json",
    "colliders_from_json",
    # Mesh export
    "write_tri_model",
    "read_tri_model",
]
