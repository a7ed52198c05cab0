"""Convex hulls over several solids or regions."""

from __future__ import annotations

import numpy as np
import trimesh
from shapely.ops import unary_union

from . import booleans
from .geometry import flatten, same_kind


def hull(*geometries):
    """Convex hull enclosing every given geometry."""

    items = flatten(geometries)
    if not items:
        raise ValueError("wrong number of arguments")
    if same_kind(items) == 'geom3':
        points = np.vstack([mesh.vertices for mesh in items])
        return trimesh.convex.convex_hull(points)
    return items[0].with_region(unary_union([g.region for g in items]).convex_hull)


def hullChain(*geometries):
    """Union of the hulls of each consecutive pair of geometries."""

    items = flatten(geometries)
    if len(items) < 2:
        raise ValueError("wrong number of arguments")
    links = [hull(a, b) for a, b in zip(items, items[1:])]
    return booleans.union(*links)


__all__ = ['hull', 'hullChain']
