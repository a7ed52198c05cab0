"""Affine transforms of solids and regions.

Single-value transforms and ``transform`` take the value first, followed
by the objects to transform; ``mirror`` and ``center`` take an options
mapping. Angles are in radians. Applying a transform to several objects yields a
:class:`~landau.modeling.geometry.Geometries` list.
"""

from __future__ import annotations

import numpy as np
from shapely import affinity
from trimesh import transformations as tf

from .geometry import as_vector, map_geometries, option, transformed


def _region_affine(geom, matrix):
    """Apply the XY part of a 4x4 matrix to a region."""

    if np.any(matrix[:2, 2]) or np.any(matrix[2, :2]):
        raise ValueError("transform does not keep 2D geometry in the XY plane")
    params = [matrix[0, 0], matrix[0, 1], matrix[1, 0], matrix[1, 1], matrix[0, 3], matrix[1, 3]]
    return geom.with_region(affinity.affine_transform(geom.region, params))


def _apply(matrix, objects):
    return map_geometries(
        objects,
        lambda mesh: transformed(mesh, matrix),
        lambda geom: _region_affine(geom, matrix),
    )


# --- translation ---

def translate(offset, *objects):
    return _apply(tf.translation_matrix(as_vector(offset, 3, 0.0)), objects)


def translateX(offset, *objects):
    return translate([offset, 0, 0], *objects)


def translateY(offset, *objects):
    return translate([0, offset, 0], *objects)


def translateZ(offset, *objects):
    return translate([0, 0, offset], *objects)


# --- rotation ---

def rotate(angles, *objects):
    """Rotate about X, then Y, then Z (static axes)."""

    ax, ay, az = as_vector(angles, 3, 0.0)
    return _apply(tf.euler_matrix(ax, ay, az, 'sxyz'), objects)


def rotateX(angle, *objects):
    return rotate([angle, 0, 0], *objects)


def rotateY(angle, *objects):
    return rotate([0, angle, 0], *objects)


def rotateZ(angle, *objects):
    return rotate([0, 0, angle], *objects)


# --- scaling ---

def scale(factors, *objects):
    factors = as_vector(factors, 3, 1.0)
    if np.any(factors == 0.0):
        raise ValueError("scale factors must be non-zero")
    matrix = np.eye(4)
    matrix[:3, :3] = np.diag(factors)
    return _apply(matrix, objects)


def scaleX(factor, *objects):
    return scale([factor, 1, 1], *objects)


def scaleY(factor, *objects):
    return scale([1, factor, 1], *objects)


def scaleZ(factor, *objects):
    return scale([1, 1, factor], *objects)


# --- general ---

def transform(matrix, *objects):
    """Apply an affine 4x4 matrix.

    ``matrix`` is either nested rows or a flat list of 16 values in
    column-major order.
    """

    values = np.asarray(matrix, dtype=float)
    if values.shape == (16,):
        values = values.reshape(4, 4).T
    if values.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {values.shape}")
    if not np.allclose(values[3], [0.0, 0.0, 0.0, 1.0]):
        raise ValueError("matrix is not affine")
    if np.isclose(np.linalg.det(values[:3, :3]), 0.0):
        raise ValueError("matrix is singular")
    return _apply(values, objects)


# --- mirroring ---

def mirror(options, *objects):
    """Mirror about the plane through ``origin`` with ``normal``."""

    origin = as_vector(option(options, 'origin', [0, 0, 0]), 3, 0.0)
    normal = as_vector(option(options, 'normal', [0, 0, 1]), 3, 0.0)
    length = np.linalg.norm(normal)
    if length == 0.0:
        raise ValueError("mirror normal must be non-zero")
    return _apply(tf.reflection_matrix(origin, normal / length), objects)


def mirrorX(*objects):
    return mirror({'normal': [1, 0, 0]}, *objects)


def mirrorY(*objects):
    return mirror({'normal': [0, 1, 0]}, *objects)


def mirrorZ(*objects):
    return mirror({'normal': [0, 0, 1]}, *objects)


# --- centering ---

def center(options, *objects):
    """Move each object so its bounding-box center lies on ``relativeTo``.

    ``axes`` selects which of X, Y, Z are centered (default: all three).
    """

    axes = [bool(a) for a in option(options, 'axes', [True, True, True])]
    target = as_vector(option(options, 'relativeTo', [0, 0, 0]), 3, 0.0)
    mask = np.asarray((axes + [False, False, False])[:3], dtype=float)

    def _mesh(mesh):
        middle = mesh.bounds.mean(axis=0)
        return transformed(mesh, tf.translation_matrix((target - middle) * mask))

    def _region(geom):
        minx, miny, maxx, maxy = geom.bounds
        middle = np.array([(minx + maxx) / 2.0, (miny + maxy) / 2.0, 0.0])
        shift = (target - middle) * mask
        return geom.with_region(affinity.translate(geom.region, shift[0], shift[1]))

    return map_geometries(objects, _mesh, _region)


__all__ = [
    'translate', 'translateX', 'translateY', 'translateZ',
    'rotate', 'rotateX', 'rotateY', 'rotateZ',
    'scale', 'scaleX', 'scaleY', 'scaleZ',
    'mirror', 'mirrorX', 'mirrorY', 'mirrorZ',
    'transform', 'center',
]
