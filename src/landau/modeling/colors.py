"""Color assignment for solids and regions."""

from __future__ import annotations

import numpy as np

from .geometry import map_geometries


def _rgba(color):
    values = [float(c) for c in color]
    if len(values) == 3:
        values.append(1.0)
    if len(values) != 4:
        raise ValueError(f"color must have 3 or 4 components, got {len(values)}")
    if any(c < 0.0 or c > 1.0 for c in values):
        raise ValueError("color components must lie in [0, 1]")
    return values


def colorize(color, *objects):
    """Assign ``color`` (RGB or RGBA, components in [0, 1]) to each object."""

    rgba = _rgba(color)
    face_color = np.round(np.asarray(rgba) * 255.0).astype(np.uint8)

    def _mesh(mesh):
        result = mesh.copy()
        result.visual.face_colors = face_color
        return result

    def _region(geom):
        return type(geom)(geom.region, rgba)

    return map_geometries(objects, _mesh, _region)


__all__ = ['colorize']
