"""Cleanup passes over mesh and region topology."""

from __future__ import annotations

import numpy as np
import shapely

from .geometry import map_geometries, option

SNAP_EPSILON = 1e-5


def _snap_mesh(mesh):
    result = mesh.copy()
    result.vertices = np.round(result.vertices / SNAP_EPSILON) * SNAP_EPSILON
    return result


def _snap_region(geom):
    return geom.with_region(shapely.set_precision(geom.region, SNAP_EPSILON))


def _clean_mesh(mesh):
    result = mesh.copy()
    result.merge_vertices()
    result.process(validate=True)
    return result


def _clean_region(geom):
    return geom.with_region(geom.region.simplify(0.0))


def snap(*geometries):
    """Round every vertex onto a grid of ``SNAP_EPSILON``."""

    return map_geometries(geometries, _snap_mesh, _snap_region)


def retessellate(*geometries):
    """Merge coincident vertices and drop degenerate or duplicate faces."""

    return map_geometries(geometries, _clean_mesh, _clean_region)


def generalize(options, *geometries):
    """Apply ``snap`` and/or ``simplify`` according to ``options``."""

    do_snap = bool(option(options, 'snap', False))
    do_simplify = bool(option(options, 'simplify', False))

    def _mesh(mesh):
        result = _snap_mesh(mesh) if do_snap else mesh.copy()
        return _clean_mesh(result) if do_simplify else result

    def _region(geom):
        result = _snap_region(geom) if do_snap else geom.with_region(geom.region)
        return _clean_region(result) if do_simplify else result

    return map_geometries(geometries, _mesh, _region)


__all__ = ['generalize', 'snap', 'retessellate']
