"""Geometry and physics algorithms: mesh reduction and level of detail, poses, fitting, cloth and JSON."""

__version__ = "0.1.0"

__all__ = [
    "progmesh",
    "quat",
    "lod",
    "ploidfit",
    "jsonvalue",
    "jsonconvert",
    "cloth",
]