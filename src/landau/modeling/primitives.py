"""Primitive solids and planar shapes.

Every primitive takes a single options mapping. Unknown keys are ignored,
missing keys fall back to the defaults below. Solids are centered on
``center`` (default: the origin).
"""

from __future__ import annotations

import numpy as np
import trimesh
from shapely import affinity
from shapely.geometry import Polygon
from shapely.geometry import box as _box

from .geometry import Geom2, as_vector, option


def _positive(name, value):
    value = float(value)
    if value <= 0.0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _placed(mesh, options):
    center = as_vector(option(options, 'center', [0, 0, 0]), 3, 0.0)
    if np.any(center):
        mesh.apply_translation(center)
    return mesh


def _segments(options, default=32):
    segments = int(option(options, 'segments', default))
    if segments < 3:
        raise ValueError(f"segments must be at least 3, got {segments}")
    return segments


# --- 3D ---

def cube(options=None):
    size = _positive('size', option(options, 'size', 2.0))
    return _placed(trimesh.creation.box(extents=[size, size, size]), options)


def cuboid(options=None):
    size = as_vector(option(options, 'size', [2.0, 2.0, 2.0]), 3, 0.0)
    for axis, extent in zip('xyz', size):
        _positive(f'size[{axis}]', extent)
    return _placed(trimesh.creation.box(extents=size), options)


def sphere(options=None):
    radius = _positive('radius', option(options, 'radius', 1.0))
    segments = _segments(options)
    mesh = trimesh.creation.uv_sphere(radius=radius, count=[segments, segments])
    return _placed(mesh, options)


def geodesicSphere(options=None):
    radius = _positive('radius', option(options, 'radius', 1.0))
    subdivisions = int(option(options, 'subdivisions', 2))
    if subdivisions < 0:
        raise ValueError(f"subdivisions must be non-negative, got {subdivisions}")
    mesh = trimesh.creation.icosphere(subdivisions=subdivisions, radius=radius)
    return _placed(mesh, options)


def cylinder(options=None):
    radius = _positive('radius', option(options, 'radius', 1.0))
    height = _positive('height', option(options, 'height', 2.0))
    mesh = trimesh.creation.cylinder(radius=radius, height=height, sections=_segments(options))
    return _placed(mesh, options)


def cylinderElliptic(options=None):
    """Cylinder along Z with elliptic ends; a zero end radius makes a cone."""

    height = _positive('height', option(options, 'height', 2.0))
    start = as_vector(option(options, 'startRadius', [1.0, 1.0]), 2, 0.0)
    end = as_vector(option(options, 'endRadius', [1.0, 1.0]), 2, 0.0)
    if np.any(start < 0.0) or np.any(end < 0.0):
        raise ValueError("radii must be non-negative")
    if not np.all(start) and not np.all(end):
        raise ValueError("at least one end needs a positive radius")
    segments = _segments(options)

    angles = np.linspace(0.0, 2.0 * np.pi, segments, endpoint=False)
    ring = np.column_stack([np.cos(angles), np.sin(angles)])
    vertices = []
    faces = []

    def _end(radius, z):
        # a ring of vertices, or a single apex when the radius vanishes
        if np.all(radius):
            first = len(vertices)
            vertices.extend(np.column_stack([ring * radius, np.full(segments, z)]))
            return [first + i for i in range(segments)]
        vertices.append([0.0, 0.0, z])
        return [len(vertices) - 1] * segments

    bottom = _end(start, -height / 2.0)
    top = _end(end, height / 2.0)
    for i in range(segments):
        j = (i + 1) % segments
        if bottom[i] != bottom[j]:
            faces.append([bottom[i], bottom[j], top[j]])
        if top[i] != top[j]:
            faces.append([bottom[i], top[j], top[i]])
    for ids, z, flip in ((bottom, -height / 2.0, True), (top, height / 2.0, False)):
        if ids[0] == ids[1]:
            continue
        vertices.append([0.0, 0.0, z])
        hub = len(vertices) - 1
        for i in range(segments):
            j = (i + 1) % segments
            faces.append([hub, ids[j], ids[i]] if flip else [hub, ids[i], ids[j]])

    mesh = trimesh.Trimesh(vertices=np.asarray(vertices), faces=np.asarray(faces))
    return _placed(mesh, options)


def roundedCuboid(options=None):
    """Cuboid whose edges and corners are rounded by ``roundRadius``."""

    size = as_vector(option(options, 'size', [2.0, 2.0, 2.0]), 3, 0.0)
    for axis, extent in zip('xyz', size):
        _positive(f'size[{axis}]', extent)
    round_radius = float(option(options, 'roundRadius', 0.2))
    if round_radius < 0.0 or round_radius * 2.0 >= size.min():
        raise ValueError("roundRadius must be non-negative and smaller than half the size")
    if round_radius == 0.0:
        return _placed(trimesh.creation.box(extents=size), options)

    segments = _segments(options)
    ball = trimesh.creation.uv_sphere(radius=round_radius, count=[segments, segments])
    inner = size / 2.0 - round_radius
    corners = np.array([[sx, sy, sz] for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)])
    points = np.vstack([ball.vertices + corner * inner for corner in corners])
    return _placed(trimesh.convex.convex_hull(points), options)


def polyhedron(options=None):
    """Solid from explicit ``points`` and ``faces`` (lists of point indices).

    Faces with more than three points are fan-triangulated. With
    ``orientation`` ``'inward'`` the face winding is reversed.
    """

    points = option(options, 'points', None)
    faces = option(options, 'faces', None)
    if points is None or len(points) < 4:
        raise ValueError("polyhedron requires at least four points")
    if faces is None or len(faces) < 4:
        raise ValueError("polyhedron requires at least four faces")
    orientation = option(options, 'orientation', 'outward')
    if orientation not in ('outward', 'inward'):
        raise ValueError(f"orientation must be 'outward' or 'inward', got {orientation!r}")

    vertices = np.array([as_vector(pt, 3, 0.0) for pt in points])
    triangles = []
    for face in faces:
        face = [int(i) for i in face]
        if len(face) < 3:
            raise ValueError(f"face {face} has fewer than three points")
        if min(face) < 0 or max(face) >= len(vertices):
            raise ValueError(f"face {face} refers to a missing point")
        if orientation == 'inward':
            face = face[::-1]
        triangles.extend([face[0], face[k], face[k + 1]] for k in range(1, len(face) - 1))

    return trimesh.Trimesh(vertices=vertices, faces=np.asarray(triangles))


def ellipsoid(options=None):
    radius = as_vector(option(options, 'radius', [1.0, 1.0, 1.0]), 3, 1.0)
    for axis, value in zip('xyz', radius):
        _positive(f'radius[{axis}]', value)
    segments = _segments(options)
    mesh = trimesh.creation.uv_sphere(radius=1.0, count=[segments, segments])
    mesh.apply_transform(np.diag([*radius, 1.0]))
    return _placed(mesh, options)


def torus(options=None):
    inner = _positive('innerRadius', option(options, 'innerRadius', 1.0))
    outer = _positive('outerRadius', option(options, 'outerRadius', 4.0))
    if inner >= outer:
        raise ValueError("innerRadius must be smaller than outerRadius")
    mesh = trimesh.creation.torus(
        major_radius=outer,
        minor_radius=inner,
        major_sections=int(option(options, 'outerSegments', 32)),
        minor_sections=int(option(options, 'innerSegments', 32)),
    )
    return _placed(mesh, options)


# --- 2D ---

def _placed2(region, options):
    cx, cy = as_vector(option(options, 'center', [0, 0]), 2, 0.0)
    if cx or cy:
        region = affinity.translate(region, cx, cy)
    return Geom2(region)


def square(options=None):
    size = _positive('size', option(options, 'size', 2.0))
    half = size / 2.0
    return _placed2(_box(-half, -half, half, half), options)


def rectangle(options=None):
    sx, sy = as_vector(option(options, 'size', [2.0, 2.0]), 2, 0.0)
    _positive('size[x]', sx)
    _positive('size[y]', sy)
    return _placed2(_box(-sx / 2.0, -sy / 2.0, sx / 2.0, sy / 2.0), options)


def circle(options=None):
    radius = _positive('radius', option(options, 'radius', 1.0))
    segments = _segments(options)
    angles = np.linspace(0.0, 2.0 * np.pi, segments, endpoint=False)
    region = Polygon(np.column_stack([radius * np.cos(angles), radius * np.sin(angles)]))
    return _placed2(region, options)


def polygon(options=None):
    points = option(options, 'points', None)
    if points is None or len(points) < 3:
        raise ValueError("polygon requires at least three points")
    region = Polygon([tuple(float(c) for c in pt[:2]) for pt in points])
    if not region.is_valid:
        raise ValueError("polygon points do not describe a simple polygon")
    if region.area == 0.0:
        raise ValueError("polygon points are collinear")
    return Geom2(region)


__all__ = [
    'cube', 'cuboid', 'roundedCuboid', 'sphere', 'geodesicSphere', 'ellipsoid',
    'cylinder', 'cylinderElliptic', 'torus', 'polyhedron',
    'square', 'rectangle', 'circle', 'polygon',
]
