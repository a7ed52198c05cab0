"""Boolean combinators over any number of solids or regions.

Solids are combined with :mod:`trimesh.boolean` using the ``manifold``
backend (provided by the ``manifold3d`` package); regions with shapely.
"""

from __future__ import annotations

from functools import reduce

import trimesh
from shapely.ops import unary_union

from .geometry import Geometries, flatten, is_geom2, is_geom3, same_kind

BOOLEAN_ENGINE = 'manifold'


def _operands(geometries):
    items = flatten(geometries)
    if not items:
        raise ValueError("wrong number of arguments")
    return items, same_kind(items)


def _solid_boolean(operation, meshes):
    if len(meshes) == 1:
        return meshes[0].copy()
    op = getattr(trimesh.boolean, operation)
    try:
        return op(meshes, engine=BOOLEAN_ENGINE, check_volume=False)
    except Exception as exc:
        raise RuntimeError(f"trimesh {operation} failed: {exc}") from exc


def union(*geometries):
    items, kind = _operands(geometries)
    if kind == 'geom3':
        return _solid_boolean('union', items)
    return items[0].with_region(unary_union([g.region for g in items]))


def subtract(*geometries):
    """Subtract every following geometry from the first one."""

    items, kind = _operands(geometries)
    if kind == 'geom3':
        return _solid_boolean('difference', items)
    region = reduce(lambda acc, g: acc.difference(g.region), items[1:], items[0].region)
    return items[0].with_region(region)


def intersect(*geometries):
    items, kind = _operands(geometries)
    if kind == 'geom3':
        return _solid_boolean('intersection', items)
    region = reduce(lambda acc, g: acc.intersection(g.region), items[1:], items[0].region)
    return items[0].with_region(region)


def scission(*geometries):
    """Split each geometry into its disconnected pieces."""

    items = flatten(geometries)
    if not items:
        raise ValueError("wrong number of arguments")
    pieces = []
    for item in items:
        if is_geom3(item):
            parts = item.split(only_watertight=False)
            pieces.extend(parts if len(parts) else [item.copy()])
        elif is_geom2(item):
            pieces.extend(item.with_region(poly) for poly in item.polygons())
        else:
            raise TypeError(f"unsupported geometry type {type(item).__name__}")
    if len(pieces) == 1:
        return pieces[0]
    return Geometries(pieces)


__all__ = ['union', 'subtract', 'intersect', 'scission']
