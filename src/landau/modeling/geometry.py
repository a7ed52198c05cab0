"""Geometry value types shared by the modeling namespaces.

Three kinds of value flow through a build tree:

* ``trimesh.Trimesh`` -- a closed triangle mesh (3D solid);
* :class:`Geom2` -- a planar region in the XY plane backed by shapely;
* :class:`Geometries` -- several of the above, produced when a transform
  is applied to more than one object at once.

All three accept arbitrary attributes, which the tree evaluator uses to
stamp ``id`` and ``children`` onto each result.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import trimesh
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry


class Geom2:
    """Planar region wrapping a shapely ``Polygon`` or ``MultiPolygon``."""

    def __init__(self, region: BaseGeometry, color: Optional[Sequence[float]] = None):
        self.region = _polygonal(region)
        self.color = None if color is None else tuple(float(c) for c in color)

    def __repr__(self) -> str:
        return f"Geom2(area={self.area:.6g}, polygons={len(self.polygons())})"

    @property
    def area(self) -> float:
        return float(self.region.area)

    @property
    def bounds(self):
        return self.region.bounds

    @property
    def is_empty(self) -> bool:
        return self.region.is_empty

    def polygons(self) -> List[Polygon]:
        if self.region.is_empty:
            return []
        if isinstance(self.region, MultiPolygon):
            return list(self.region.geoms)
        return [self.region]

    def with_region(self, region: BaseGeometry) -> "Geom2":
        """Return a new region carrying this region's color."""
        return Geom2(region, self.color)


class Geometries(list):
    """Several geometries produced by a single operation."""


def _polygonal(region: BaseGeometry) -> BaseGeometry:
    if isinstance(region, (Polygon, MultiPolygon)):
        return region
    if isinstance(region, GeometryCollection):
        parts: List[Polygon] = []
        for geom in region.geoms:
            if isinstance(geom, Polygon):
                parts.append(geom)
            elif isinstance(geom, MultiPolygon):
                parts.extend(geom.geoms)
        if not parts:
            return Polygon()
        return parts[0] if len(parts) == 1 else MultiPolygon(parts)
    if region.is_empty:
        return Polygon()
    raise TypeError(f"expected a polygonal region, got {region.geom_type}")


def is_geom3(obj: Any) -> bool:
    return isinstance(obj, trimesh.Trimesh)


def is_geom2(obj: Any) -> bool:
    return isinstance(obj, Geom2)


def flatten(objects: Iterable[Any]) -> List[Any]:
    """Expand nested lists (including :class:`Geometries`) into a flat list."""

    flat: List[Any] = []
    for obj in objects:
        if isinstance(obj, (list, tuple)):
            flat.extend(flatten(obj))
        else:
            flat.append(obj)
    return flat


def map_geometries(objects: Iterable[Any],
                   on_geom3: Callable[[trimesh.Trimesh], Any],
                   on_geom2: Optional[Callable[[Geom2], Any]] = None) -> Any:
    """Apply an operation to each object.

    Returns a single geometry when exactly one object was given, and a
    :class:`Geometries` list otherwise.
    """

    items = flatten(objects)
    if not items:
        raise ValueError("wrong number of arguments")

    results = []
    for item in items:
        if is_geom3(item):
            results.append(on_geom3(item))
        elif is_geom2(item):
            if on_geom2 is None:
                raise ValueError("operation does not support 2D geometry")
            results.append(on_geom2(item))
        else:
            raise TypeError(f"unsupported geometry type {type(item).__name__}")

    if len(results) == 1:
        return results[0]
    return Geometries(results)


def same_kind(items: Sequence[Any]) -> str:
    """Return ``'geom3'`` or ``'geom2'`` when all items share a kind."""

    if all(is_geom3(item) for item in items):
        return 'geom3'
    if all(is_geom2(item) for item in items):
        return 'geom2'
    raise ValueError("only operations on geometries of the same kind are supported")


def option(options: Optional[Mapping[str, Any]], name: str, default: Any) -> Any:
    if options is None:
        return default
    value = options.get(name)
    return default if value is None else value


def as_vector(values: Any, length: int, fill: float) -> np.ndarray:
    """Coerce a scalar or short sequence into a float vector of ``length``."""

    if np.isscalar(values):
        values = [values]
    vec = [float(v) for v in values]
    if len(vec) > length:
        raise ValueError(f"expected at most {length} components, got {len(vec)}")
    vec.extend([fill] * (length - len(vec)))
    return np.asarray(vec, dtype=float)


def transformed(mesh: trimesh.Trimesh, matrix: np.ndarray) -> trimesh.Trimesh:
    result = mesh.copy()
    result.apply_transform(matrix)
    return result


__all__ = [
    'Geom2', 'Geometries', 'flatten', 'is_geom2', 'is_geom3',
    'map_geometries', 'same_kind', 'option', 'as_vector', 'transformed',
]
