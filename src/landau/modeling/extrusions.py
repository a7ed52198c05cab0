"""Extrusion of planar regions into solids, and projection of solids back to regions."""

from __future__ import annotations

import math

import numpy as np
import shapely
import trimesh
from shapely.geometry.polygon import orient
from trimesh.geometry import plane_transform

from .geometry import Geom2, as_vector, map_geometries, option, transformed

_MIN_AREA = 1e-12


def _no_solids(mesh):
    raise ValueError("only 2D geometry can be extruded")


def _colored(mesh, geom):
    if geom.color is not None:
        mesh.visual.face_colors = np.round(np.asarray(geom.color) * 255.0).astype(np.uint8)
    return mesh


def _joined(meshes):
    if not meshes:
        raise ValueError("cannot extrude an empty region")
    if len(meshes) == 1:
        return meshes[0]
    return trimesh.util.concatenate(meshes)


def extrudeLinear(options, *objects):
    """Extrude each region along +Z by ``height`` (default 1)."""

    height = float(option(options, 'height', 1.0))
    if height <= 0.0:
        raise ValueError(f"height must be positive, got {height}")

    def _region(geom):
        meshes = [trimesh.creation.extrude_polygon(poly, height) for poly in geom.polygons()]
        return _colored(_joined(meshes), geom)

    return map_geometries(objects, _no_solids, _region)


def extrudeRotate(options, *objects):
    """Revolve each region about the Y axis of its plane.

    The region's X coordinate is the radius and its Y coordinate becomes the
    height of the solid. ``angle`` is in radians (default: a full turn) and
    ``segments`` sets the number of sections for a full turn.
    """

    angle = float(option(options, 'angle', 2.0 * math.pi))
    segments = int(option(options, 'segments', 12))
    if angle <= 0.0 or angle > 2.0 * math.pi:
        raise ValueError(f"angle must lie in (0, 2*pi], got {angle}")
    if segments < 3:
        raise ValueError(f"segments must be at least 3, got {segments}")
    full_turn = math.isclose(angle, 2.0 * math.pi)
    sections = max(1, int(math.ceil(segments * angle / (2.0 * math.pi))))

    def _region(geom):
        meshes = []
        for poly in geom.polygons():
            if poly.interiors:
                raise ValueError("cannot revolve a region with holes")
            if poly.bounds[0] < 0.0:
                raise ValueError("revolved regions must lie at non-negative X")
            profile = np.asarray(orient(poly, 1.0).exterior.coords)
            mesh = trimesh.creation.revolve(
                profile,
                angle=None if full_turn else angle,
                cap=not full_turn,
                sections=sections,
            )
            if mesh.volume < 0.0:
                mesh.invert()
            meshes.append(mesh)
        return _colored(_joined(meshes), geom)

    return map_geometries(objects, _no_solids, _region)


def extrudeRectangular(options, *objects):
    """Sweep a rectangle of width ``size`` and height ``height`` along each outline.

    The band is centered on the region's boundary, holes included.
    """

    size = float(option(options, 'size', 1.0))
    if size <= 0.0:
        raise ValueError(f"size must be positive, got {size}")
    band_options = {'height': option(options, 'height', 1.0)}

    def _band(geom):
        region = geom.region.boundary.buffer(size / 2.0, join_style='mitre', cap_style='flat')
        return extrudeLinear(band_options, geom.with_region(region))

    return map_geometries(objects, _no_solids, _band)


def project(options, *objects):
    """Outline of each solid's shadow on the plane through ``origin`` normal to ``axis``.

    The plane becomes the XY plane of the resulting region.
    """

    axis = as_vector(option(options, 'axis', [0, 0, 1]), 3, 0.0)
    origin = as_vector(option(options, 'origin', [0, 0, 0]), 3, 0.0)
    length = np.linalg.norm(axis)
    if length == 0.0:
        raise ValueError("projection axis must be non-zero")
    to_plane = plane_transform(origin, axis / length)

    def _shadow(mesh):
        flat = transformed(mesh, to_plane)
        outlines = shapely.polygons(flat.triangles[:, :, :2])
        outlines = outlines[shapely.area(outlines) > _MIN_AREA]
        return Geom2(shapely.union_all(outlines))

    def _region(geom):
        raise ValueError("only 3D geometry can be projected")

    return map_geometries(objects, _shadow, _region)


__all__ = ['extrudeLinear', 'extrudeRotate', 'extrudeRectangular', 'project']
