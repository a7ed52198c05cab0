"""Offsetting of planar regions.

Options: ``delta`` (distance, negative shrinks), ``corners`` (``'edge'``,
``'chamfer'`` or ``'round'``) and ``segments`` (for rounded corners).
Solids are rejected; trimesh offers no minkowski sum.
"""

from __future__ import annotations

from .geometry import map_geometries, option

_JOIN_STYLES = {
    'edge': 'mitre',
    'chamfer': 'bevel',
    'round': 'round',
}


def _offset(options, objects, default_delta):
    delta = float(option(options, 'delta', default_delta))
    corners = option(options, 'corners', 'edge')
    if corners not in _JOIN_STYLES:
        raise ValueError(f"corners must be one of {sorted(_JOIN_STYLES)}, got {corners!r}")
    segments = int(option(options, 'segments', 16))

    def _solid(mesh):
        raise ValueError("expansion of 3D geometry is not supported")

    def _region(geom):
        region = geom.region.buffer(
            delta,
            quad_segs=max(1, segments // 4),
            join_style=_JOIN_STYLES[corners],
        )
        return geom.with_region(region)

    return map_geometries(objects, _solid, _region)


def expand(options, *objects):
    return _offset(options, objects, 1.0)


def offset(options, *objects):
    return _offset(options, objects, 1.0)


__all__ = ['expand', 'offset']
